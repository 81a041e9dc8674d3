"""
Settings read from the environment and an optional .env file.

Everything is read once, when Config() is built. The module-level
`config` instance is the one the CLI uses; tests build their own.
Values that fail to parse are reported by validate() rather than at
import time.
"""

import os
from pathlib import Path
from typing import List, Optional
from dotenv import find_dotenv, load_dotenv


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SecureString:
    """
    Holds a credential without letting it reach logs or tracebacks.

    Examples:
        >>> key = SecureString("sk-ant-api03-abcdef")
        >>> f"key={key}"
        'key=********'
    """

    def __init__(self, value: str):
        self._value = value

    def get_value(self) -> str:
        """The raw credential. Pass it straight to the API client."""
        return self._value

    def __str__(self) -> str:
        return "********"

    def __repr__(self) -> str:
        return "SecureString(********)"

    def __eq__(self, other) -> bool:
        return isinstance(other, SecureString) and self._value == other._value


class Config:
    """
    Lesson planner settings.

    Environment variables:
        ANTHROPIC_API_KEY: Key for the Anthropic API
        ANTHROPIC_VERTEX_PROJECT_ID: GCP project for Claude on Vertex AI,
            used when no API key is set
        CLOUD_ML_REGION: Vertex AI region (default: global)
        ANTHROPIC_MODEL: Model that reads lesson descriptions
        EXTRACTION_MAX_TOKENS: Reply token limit (default: 4096)
        EXTRACTION_FAILURE_THRESHOLD: Failed analyses before analysis
            pauses (default: 3)
        EXTRACTION_RESET_SECONDS: Length of that pause (default: 60)
        LESSON_PLANNER_DATA_DIR: Saved plans (default: data)
        OUTPUT_DIR: Logs and exports (default: output)
        LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL (default: INFO)
        BROWSER_HEADLESS: "false" shows Chrome during PDF export
        BROWSER_TIMEOUT: Page load timeout in seconds (default: 30)
    """

    def __init__(self):
        load_dotenv(find_dotenv(usecwd=True))
        self._problems: List[str] = []

        api_key = os.getenv("ANTHROPIC_API_KEY")
        self._anthropic_api_key = SecureString(api_key) if api_key else None
        self._vertex_project_id = os.getenv("ANTHROPIC_VERTEX_PROJECT_ID")
        self._vertex_region = os.getenv("CLOUD_ML_REGION", "global")
        self._model = os.getenv("ANTHROPIC_MODEL", "claude-sonnet-4-5@20250929")

        self._extraction_max_tokens = self._int_setting("EXTRACTION_MAX_TOKENS", 4096)
        self._extraction_failure_threshold = self._int_setting("EXTRACTION_FAILURE_THRESHOLD", 3)
        self._extraction_reset_seconds = self._int_setting("EXTRACTION_RESET_SECONDS", 60)

        self._data_dir = Path(os.getenv("LESSON_PLANNER_DATA_DIR", "data"))
        self._output_dir = Path(os.getenv("OUTPUT_DIR", "output"))
        self._log_level = os.getenv("LOG_LEVEL", "INFO").upper()

        self._browser_headless = os.getenv("BROWSER_HEADLESS", "true").lower() == "true"
        self._browser_timeout = self._int_setting("BROWSER_TIMEOUT", 30)

    def _int_setting(self, name: str, default: int) -> int:
        raw = os.getenv(name)
        if raw is None:
            return default
        try:
            return int(raw)
        except ValueError:
            self._problems.append(f"{name} must be a whole number, got {raw!r}")
            return default

    @property
    def anthropic_api_key(self) -> Optional[SecureString]:
        return self._anthropic_api_key

    @property
    def vertex_project_id(self) -> Optional[str]:
        return self._vertex_project_id

    @property
    def vertex_region(self) -> str:
        return self._vertex_region

    @property
    def model(self) -> str:
        return self._model

    @property
    def extraction_max_tokens(self) -> int:
        return self._extraction_max_tokens

    @property
    def extraction_failure_threshold(self) -> int:
        return self._extraction_failure_threshold

    @property
    def extraction_reset_seconds(self) -> int:
        return self._extraction_reset_seconds

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    @property
    def log_level(self) -> str:
        return self._log_level

    @property
    def browser_headless(self) -> bool:
        return self._browser_headless

    @property
    def browser_timeout(self) -> int:
        return self._browser_timeout

    @property
    def has_extraction_credentials(self) -> bool:
        """True when either an API key or a Vertex project is set."""
        return bool(self._anthropic_api_key or self._vertex_project_id)

    def apply_overrides(self, data_dir: Optional[Path] = None, log_level: Optional[str] = None):
        """Replace settings with values given on the command line."""
        if data_dir is not None:
            self._data_dir = Path(data_dir)
        if log_level is not None:
            self._log_level = log_level.upper()

    def validate(self) -> bool:
        """
        Check every setting and report all problems at once.

        Missing extraction credentials are allowed. Plans can still be
        edited, saved and exported; only analysis fails, with a message
        the teacher can read.

        Raises:
            ValueError: Listing each invalid setting
        """
        problems = list(self._problems)

        if self._anthropic_api_key and len(self._anthropic_api_key.get_value()) < 8:
            problems.append("ANTHROPIC_API_KEY is shorter than 8 characters")
        if not self._model:
            problems.append("ANTHROPIC_MODEL is empty")
        if self._extraction_max_tokens <= 0:
            problems.append("EXTRACTION_MAX_TOKENS must be greater than 0")
        if self._extraction_failure_threshold <= 0:
            problems.append("EXTRACTION_FAILURE_THRESHOLD must be greater than 0")
        if self._extraction_reset_seconds < 0:
            problems.append("EXTRACTION_RESET_SECONDS must be 0 or more")
        if self._browser_timeout <= 0:
            problems.append("BROWSER_TIMEOUT must be greater than 0")
        if self._log_level not in LOG_LEVELS:
            problems.append(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {self._log_level}")

        if problems:
            raise ValueError("Invalid configuration:\n  - " + "\n  - ".join(problems))
        return True

    def create_output_directories(self):
        for directory in (
            self.data_dir,
            self.output_dir / "logs",
            self.output_dir / "pdf",
            self.output_dir / "csv",
        ):
            directory.mkdir(parents=True, exist_ok=True)


config = Config()
