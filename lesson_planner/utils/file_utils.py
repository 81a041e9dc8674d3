"""
File helpers for the plan store and the exporters.

JSON is written UTF-8 without ASCII escaping so Arabic text stays
readable on disk; CSV carries a BOM for spreadsheet applications.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import pandas as pd


logger = logging.getLogger(__name__)

# Characters replaced in file names derived from lesson titles
UNSAFE_FILENAME_CHARS = '/\\:*?"<>|'


def save_json(data: Any, filepath: Path) -> bool:
    """
    Write `data` as JSON, replacing `filepath` only once the write succeeded.

    Args:
        data: JSON-serializable value
        filepath: Destination file

    Returns:
        True on success, False if the data could not be written

    Examples:
        >>> save_json({"schema_version": "1.1", "data": {"plans": []}}, Path("data/lesson_plans.json"))
        True
    """
    filepath = Path(filepath)
    tmp_path = filepath.with_name(filepath.name + ".tmp")

    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp_path.replace(filepath)
    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Failed to write {filepath}: {e}")
        tmp_path.unlink(missing_ok=True)
        return False

    logger.debug(f"Wrote {filepath}")
    return True


def load_json(filepath: Path) -> Optional[Any]:
    """
    Read a JSON file.

    Returns:
        Decoded value, or None if the file is missing, unreadable or not JSON
    """
    filepath = Path(filepath)
    if not filepath.exists():
        return None

    try:
        return json.loads(filepath.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {filepath}: {e}")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read {filepath}: {e}")
    return None


def save_csv(df: pd.DataFrame, filepath: Path) -> bool:
    """
    Write a DataFrame as UTF-8 CSV with a byte-order mark.

    Returns:
        True on success, False if the file could not be written
    """
    filepath = Path(filepath)

    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(filepath, index=False, encoding="utf-8-sig")
    except OSError as e:
        logger.error(f"Failed to write {filepath}: {e}")
        return False

    logger.debug(f"Wrote {len(df)} rows to {filepath}")
    return True


def generate_filename(prefix: str, extension: str) -> str:
    """Timestamped file name, e.g. "lesson_plans_20240303_091500.csv"."""
    return f"{prefix}_{datetime.now():%Y%m%d_%H%M%S}.{extension}"


def safe_filename(title: Optional[str], default: str, max_length: int = 100) -> str:
    """
    Turn a free-text title into a file name.

    Path separators, characters invalid on common file systems and
    control characters become "-"; Arabic letters are kept.

    Examples:
        >>> safe_filename("الفاعل / درس 1", "خطة-درس")
        'الفاعل - درس 1'
        >>> safe_filename("   ", "خطة-درس")
        'خطة-درس'
    """
    cleaned = "".join(
        "-" if ch in UNSAFE_FILENAME_CHARS or ord(ch) < 32 else ch
        for ch in title or ""
    )
    cleaned = cleaned.strip().strip(".")
    return cleaned[:max_length] or default
