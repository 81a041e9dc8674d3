"""
Unit tests for configuration, logging and file utilities.
"""

import logging

import pytest

from lesson_planner.utils.config import Config, SecureString
from lesson_planner.utils.file_utils import (
    generate_filename,
    load_json,
    safe_filename,
    save_json,
)
from lesson_planner.utils.logger import SensitiveDataFilter, mask_api_key, setup_logger


ENV_VARS = [
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_VERTEX_PROJECT_ID",
    "CLOUD_ML_REGION",
    "ANTHROPIC_MODEL",
    "EXTRACTION_MAX_TOKENS",
    "EXTRACTION_FAILURE_THRESHOLD",
    "EXTRACTION_RESET_SECONDS",
    "LESSON_PLANNER_DATA_DIR",
    "OUTPUT_DIR",
    "LOG_LEVEL",
    "BROWSER_HEADLESS",
    "BROWSER_TIMEOUT",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Environment without planner settings and without a .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


class TestSecureString:
    """Test cases for SecureString."""

    def test_masked(self):
        """Test str and repr never show the value."""
        secret = SecureString("sk-ant-secret")

        assert str(secret) == "********"
        assert "secret" not in repr(secret)
        assert secret.get_value() == "sk-ant-secret"

    def test_equality(self):
        """Test equality compares wrapped values."""
        assert SecureString("a") == SecureString("a")
        assert SecureString("a") != "a"


class TestConfig:
    """Test cases for Config."""

    def test_defaults(self, clean_env):
        """Test default values without environment."""
        config = Config()

        assert config.anthropic_api_key is None
        assert config.vertex_region == "global"
        assert config.extraction_failure_threshold == 3
        assert str(config.data_dir) == "data"
        assert config.log_level == "INFO"
        assert config.browser_headless is True
        assert not config.has_extraction_credentials
        assert config.validate()

    def test_from_environment(self, clean_env):
        """Test values are read from the environment."""
        clean_env.setenv("ANTHROPIC_VERTEX_PROJECT_ID", "my-project")
        clean_env.setenv("LOG_LEVEL", "debug")
        clean_env.setenv("BROWSER_HEADLESS", "false")
        clean_env.setenv("EXTRACTION_MAX_TOKENS", "2048")

        config = Config()

        assert config.has_extraction_credentials
        assert config.log_level == "DEBUG"
        assert config.browser_headless is False
        assert config.extraction_max_tokens == 2048

    def test_api_key_is_wrapped(self, clean_env):
        """Test the API key is held in a SecureString."""
        clean_env.setenv("ANTHROPIC_API_KEY", "sk-ant-api03-abcdef")

        config = Config()

        assert isinstance(config.anthropic_api_key, SecureString)
        assert config.anthropic_api_key.get_value() == "sk-ant-api03-abcdef"

    @pytest.mark.parametrize("name, value", [
        ("LOG_LEVEL", "VERBOSE"),
        ("BROWSER_TIMEOUT", "0"),
        ("EXTRACTION_FAILURE_THRESHOLD", "0"),
        ("ANTHROPIC_API_KEY", "short"),
        ("EXTRACTION_MAX_TOKENS", "lots"),
    ])
    def test_validate_rejects(self, clean_env, name, value):
        """Test invalid settings fail validation."""
        clean_env.setenv(name, value)

        with pytest.raises(ValueError):
            Config().validate()

    def test_apply_overrides(self, clean_env, tmp_path):
        """Test command line overrides replace environment values."""
        config = Config()

        config.apply_overrides(data_dir=tmp_path / "plans", log_level="warning")

        assert config.data_dir == tmp_path / "plans"
        assert config.log_level == "WARNING"

    def test_create_output_directories(self, clean_env, tmp_path):
        """Test data and output directories are created."""
        clean_env.setenv("OUTPUT_DIR", str(tmp_path / "out"))
        clean_env.setenv("LESSON_PLANNER_DATA_DIR", str(tmp_path / "data"))

        Config().create_output_directories()

        for sub in ("logs", "pdf", "csv"):
            assert (tmp_path / "out" / sub).is_dir()
        assert (tmp_path / "data").is_dir()


class TestLogger:
    """Test cases for logging utilities."""

    def test_mask_api_key(self):
        """Test keys keep only a short prefix."""
        assert mask_api_key("sk-ant-api03-abcdef") == "sk-ant-********"
        assert mask_api_key("short") == "********"
        assert mask_api_key("") == "********"

    @pytest.mark.parametrize("message, secret", [
        ("Using key sk-ant-api03-abcdef", "api03-abcdef"),
        ("api_key=abc123secret", "abc123secret"),
        ("Authorization: Bearer tok.en-123", "tok.en-123"),
        ("password: hunter2", "hunter2"),
    ])
    def test_filter_masks_secrets(self, message, secret):
        """Test sensitive values are masked in log records."""
        record = logging.LogRecord("lesson_planner", logging.INFO, __file__, 1, message, None, None)

        assert SensitiveDataFilter().filter(record)
        assert secret not in record.getMessage()

    def test_setup_logger_file(self, tmp_path):
        """Test a file handler is attached and writes masked text."""
        log_file = tmp_path / "logs" / "test.log"
        logger = setup_logger("lesson_planner_test_file", level=logging.DEBUG, log_file=str(log_file))

        logger.info("key sk-ant-api03-abcdef")
        for handler in logger.handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "sk-ant-********" in content
        assert "abcdef" not in content

    def test_setup_logger_no_duplicate_handlers(self):
        """Test a second setup does not add handlers."""
        first = setup_logger("lesson_planner_test_dupes")
        count = len(first.handlers)

        second = setup_logger("lesson_planner_test_dupes", level=logging.WARNING)

        assert second is first
        assert len(second.handlers) == count
        assert second.level == logging.WARNING


class TestFileUtils:
    """Test cases for file utilities."""

    def test_json_round_trip(self, tmp_path):
        """Test saved JSON loads back with Arabic intact."""
        path = tmp_path / "nested" / "plans.json"

        assert save_json({"title": "الفاعل"}, path)
        assert load_json(path) == {"title": "الفاعل"}
        assert not path.with_name("plans.json.tmp").exists()

    def test_load_missing_and_invalid(self, tmp_path):
        """Test missing or invalid files load as None."""
        bad = tmp_path / "bad.json"
        bad.write_text("{", encoding="utf-8")

        assert load_json(tmp_path / "missing.json") is None
        assert load_json(bad) is None

    def test_save_failure_keeps_existing_file(self, tmp_path):
        """Test an unserializable value leaves the old file in place."""
        path = tmp_path / "plans.json"
        save_json({"ok": True}, path)

        assert not save_json({"bad": object()}, path)
        assert load_json(path) == {"ok": True}

    def test_generate_filename(self):
        """Test timestamped names."""
        name = generate_filename("lesson_plans", "csv")

        assert name.startswith("lesson_plans_")
        assert name.endswith(".csv")

    @pytest.mark.parametrize("title, expected", [
        ("الفاعل / درس 1", "الفاعل - درس 1"),
        ('a:b*c?"d<e>f|g', "a-b-c--d-e-f-g"),
        ("   ", "خطة-درس"),
        (None, "خطة-درس"),
        ("..", "خطة-درس"),
    ])
    def test_safe_filename(self, title, expected):
        """Test unsafe characters are replaced and blanks use the default."""
        assert safe_filename(title, "خطة-درس") == expected

    def test_safe_filename_truncates(self):
        """Test long titles are cut."""
        assert len(safe_filename("س" * 300, "x")) == 100
