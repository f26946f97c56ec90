"""connection.py - sqlite3 connection and initialization."""

from pathlib import Path
import sqlite3
from .schema import init_db_schema
from contextlib import contextmanager

# Root-level data directory (db/ is one level below project root)
DATA_DIR = Path(__file__).resolve().parents[1] / "data"
DB_PATH = DATA_DIR / "app.db"


def ensure_data_dir() -> None:
    """Create data dir if missing."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def get_conn() -> sqlite3.Connection:
    """Return a sqlite3.Connection with row_factory sqlite3.Row."""
    ensure_data_dir()
    conn = sqlite3.connect(str(DB_PATH))
    conn.row_factory = sqlite3.Row
    return conn


def init_db() -> None:
    """Create the settings schema if missing."""
    conn = get_conn()
    try:
        init_db_schema(conn)
        conn.commit()
    finally:
        conn.close()


@contextmanager
def get_cursor():
    conn = get_conn()
    cur = conn.cursor()
    try:
        yield conn, cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
