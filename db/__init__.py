"""Preferences store for the VAT calculator.

A small sqlite key/value table holds user preferences (decimal separator,
theme, scaling). Calculator state is never written here.
"""

from .connection import get_conn, init_db, DB_PATH, get_cursor
from .settings import (
    get_setting,
    set_setting,
    get_decimal_separator,
    get_ui_theme,
    get_ui_scaling,
)

__all__ = [
    "get_conn",
    "init_db",
    "DB_PATH",
    "get_cursor",
    "get_setting",
    "set_setting",
    "get_decimal_separator",
    "get_ui_theme",
    "get_ui_scaling",
]
