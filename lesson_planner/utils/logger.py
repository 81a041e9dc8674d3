"""
Logging setup for the lesson planner.

One call to setup_logger() configures the "lesson_planner" logger; every
module logs through logging.getLogger(__name__) and propagates to it.
Handlers mask credentials before anything is written, since the
extractor logs provider errors that may echo request headers.
"""

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional, Pattern, Tuple


LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

MASK = "********"

_MASKS: List[Tuple[Pattern, str]] = [
    (re.compile(r'sk-ant-[A-Za-z0-9_\-]+'), f'sk-ant-{MASK}'),
    (re.compile(r'(api[_-]?key)["\']?\s*[:=]\s*["\']?[^"\'\s,]+', re.IGNORECASE), rf'\1: {MASK}'),
    (re.compile(r'(bearer)\s+[A-Za-z0-9._\-]+', re.IGNORECASE), rf'\1 {MASK}'),
    (re.compile(r'(password|pass|pwd)["\']?\s*[:=]\s*["\']?[^"\'\s]+', re.IGNORECASE), rf'\1: {MASK}'),
]


def mask_api_key(api_key: Optional[str]) -> str:
    """
    Mask an API key, keeping the "sk-ant-" style prefix for recognition.

    Examples:
        >>> mask_api_key("sk-ant-api03-abcdef")
        'sk-ant-********'
        >>> mask_api_key("short")
        '********'
    """
    if not api_key or len(api_key) < 12:
        return MASK
    return api_key[:7] + MASK


class SensitiveDataFilter(logging.Filter):
    """Masks API keys, bearer tokens and passwords in log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        for pattern, replacement in _MASKS:
            message = pattern.sub(replacement, message)

        # Arguments are folded into the masked message
        record.msg = message
        record.args = None
        return True


def _build_handler(handler: logging.Handler) -> logging.Handler:
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.addFilter(SensitiveDataFilter())
    return handler


def setup_logger(
    name: str = "lesson_planner",
    level: int = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure a logger with console output and an optional rotating file.

    Calling it again for the same name only updates the level.

    Args:
        name: Logger name (default: "lesson_planner")
        level: Logging level (default: logging.INFO)
        log_file: Path of a log file rotated at 10MB, five backups kept

    Returns:
        Configured logger

    Examples:
        >>> logger = setup_logger(level=logging.DEBUG, log_file="output/logs/lesson_planner.log")
        >>> logger.info("Planner started")
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    logger.addHandler(_build_handler(logging.StreamHandler()))

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.addHandler(_build_handler(RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding='utf-8'
        )))

    return logger
