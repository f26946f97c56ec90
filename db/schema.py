"""schema.py - table creation for the preferences store."""


def init_db_schema(conn):
    """Create the key/value settings table."""
    cur = conn.cursor()
    cur.execute('''
    CREATE TABLE IF NOT EXISTS settings (
        key TEXT PRIMARY KEY,
        value TEXT
    )
    ''')
