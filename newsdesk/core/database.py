import os
import sqlite3
import uuid
from datetime import datetime, timezone


def _casefold(value):
    """SQL casefold(): Unicode-aware lowercasing, NULL and non-text pass through"""
    return value.casefold() if isinstance(value, str) else value


class Database:
    """Thin sqlite3 helper shared by every module."""

    @staticmethod
    def ensure_dir(path):
        """Create the parent directory of a database file if it has one"""
        db_dir = os.path.dirname(path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

    @staticmethod
    def connect(path):
        Database.ensure_dir(path)
        conn = sqlite3.connect(path)
        conn.row_factory = sqlite3.Row
        conn.create_function("casefold", 1, _casefold, deterministic=True)
        return conn

    @staticmethod
    def new_id():
        """Opaque record identifier"""
        return uuid.uuid4().hex

    @staticmethod
    def now():
        """Current UTC time as an ISO-8601 string"""
        return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')

    @staticmethod
    def add_missing_columns(cursor, table, new_columns):
        """Add columns that older databases are missing"""
        cursor.execute(f"PRAGMA table_info({table})")
        columns = [column[1] for column in cursor.fetchall()]

        for col_name, col_type in new_columns:
            if col_name not in columns:
                print(f"Adding {col_name} column to {table} table...")
                try:
                    cursor.execute(f'ALTER TABLE {table} ADD COLUMN {col_name} {col_type}')
                except sqlite3.OperationalError as e:
                    print(f"Could not add column {col_name}: {e}")

    @staticmethod
    def is_reachable(path):
        """Check that a database file can be opened and queried"""
        try:
            with Database.connect(path) as conn:
                conn.execute("SELECT 1")
            return True
        except sqlite3.Error as e:
            print(f"Database check failed for {path}: {e}")
            return False
