"""
SQLite database for the API request log.
"""

import sqlite3
from pathlib import Path

from core import config


def get_connection(db_path: Path | None = None) -> sqlite3.Connection:
    """Get a database connection."""
    return sqlite3.connect(db_path or config.DB_PATH)


def create_schema(conn: sqlite3.Connection) -> None:
    """Create the request log table and its indexes if they don't exist."""
    cursor = conn.cursor()

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS api_requests (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            request_id TEXT UNIQUE NOT NULL,
            timestamp TEXT NOT NULL,
            endpoint TEXT NOT NULL,
            method TEXT NOT NULL,
            client_ip TEXT,
            status_code INTEGER NOT NULL,
            error_code TEXT,
            error_message TEXT,
            processing_time_ms INTEGER NOT NULL,
            record_count INTEGER
        )
    """)

    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_api_requests_timestamp ON api_requests(timestamp)"
    )
    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_api_requests_status ON api_requests(status_code)"
    )
    conn.commit()
