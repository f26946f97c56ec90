import logging
import sqlite3
from typing import Optional
from .connection import get_cursor

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = ','
DEFAULT_THEME = 'superhero'
DEFAULT_SCALING = 1.25
SEPARATORS = (',', '.')


# ---------------- Settings helpers ----------------
def get_setting(key: str, default: Optional[str] = None) -> Optional[str]:
    try:
        with get_cursor() as (conn, cur):
            cur.execute('SELECT value FROM settings WHERE key=?', (key,))
            row = cur.fetchone()
        return row['value'] if row else default
    except sqlite3.Error as e:
        logger.warning("Could not read setting %s: %s", key, e)
        return default


def set_setting(key: str, value: Optional[str]) -> None:
    """Persist a simple key/value app setting into the settings table.

    Uses INSERT OR REPLACE so callers can set or update values safely.
    """
    try:
        with get_cursor() as (conn, cur):
            cur.execute('INSERT OR REPLACE INTO settings(key, value) VALUES (?, ?)', (key, None if value is None else str(value)))
    except sqlite3.Error as e:
        # Non-critical: preferences fall back to defaults
        logger.error("Failed to save setting %s: %s", key, e)


def get_decimal_separator() -> str:
    sep = (get_setting('decimal_separator', DEFAULT_SEPARATOR) or '').strip()
    return sep if sep in SEPARATORS else DEFAULT_SEPARATOR


def get_ui_theme() -> str:
    return (get_setting('ui_theme', DEFAULT_THEME) or DEFAULT_THEME).strip().lower()


def get_ui_scaling() -> float:
    raw = get_setting('ui_scaling', str(DEFAULT_SCALING))
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return DEFAULT_SCALING
    return value if 0.5 <= value <= 3.0 else DEFAULT_SCALING
