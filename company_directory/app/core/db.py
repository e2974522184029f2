"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), a cursor context manager (``get_cursor``) and
applying migrations on application start (``init_db``).  Every function
accepts an explicit database path so that tests and multiple app
instances can point at separate files; when omitted the path comes from
``settings.database_url``.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

from .config import settings


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS locations (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            city TEXT NOT NULL COLLATE NOCASE
        );

        CREATE TABLE IF NOT EXISTS services (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL COLLATE NOCASE
        );

        CREATE TABLE IF NOT EXISTS workers (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            first_name TEXT NOT NULL,
            last_name TEXT NOT NULL,
            email TEXT NOT NULL COLLATE NOCASE,
            phone_fixed TEXT NOT NULL,
            phone_mobile TEXT NOT NULL,
            location_id INTEGER NOT NULL,
            service_id INTEGER NOT NULL,
            FOREIGN KEY(location_id) REFERENCES locations(id) ON DELETE RESTRICT,
            FOREIGN KEY(service_id) REFERENCES services(id) ON DELETE RESTRICT
        );
        """,
    ),
    # Migration 2: natural key uniqueness and foreign key indices
    (
        2,
        """
        CREATE UNIQUE INDEX IF NOT EXISTS ux_locations_city ON locations(city);
        CREATE UNIQUE INDEX IF NOT EXISTS ux_services_name ON services(name);
        CREATE UNIQUE INDEX IF NOT EXISTS ux_workers_email ON workers(email);
        CREATE INDEX IF NOT EXISTS idx_workers_location_id ON workers(location_id);
        CREATE INDEX IF NOT EXISTS idx_workers_service_id ON workers(service_id);
        """,
    ),
    # Migration 3: natural key uniqueness under Unicode case folding
    # (NOCASE folds ASCII only).
    (
        3,
        """
        DROP INDEX IF EXISTS ux_locations_city;
        DROP INDEX IF EXISTS ux_services_name;
        DROP INDEX IF EXISTS ux_workers_email;
        CREATE UNIQUE INDEX IF NOT EXISTS ux_locations_city_folded ON locations(casefold(city));
        CREATE UNIQUE INDEX IF NOT EXISTS ux_services_name_folded ON services(casefold(name));
        CREATE UNIQUE INDEX IF NOT EXISTS ux_workers_email_folded ON workers(casefold(email));
        """,
    ),
]


def get_database_path(database_url: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are used as is; relative ones are resolved against
    the project root.
    """
    db_url = database_url or settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def casefold(value: Any) -> Any:
    """Unicode case folding for SQL, registered as ``casefold()``.

    SQLite's ``LOWER()`` and ``NOCASE`` only fold ASCII letters.
    """
    return value.casefold() if isinstance(value, str) else value


def get_connection(database_url: Optional[str] = None) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be read by
    name.  Foreign key enforcement is switched on for the lifetime of
    the connection since SQLite disables it by default.  Every
    connection registers ``casefold()``: the natural key indexes are
    built on it, so a connection without it cannot write those tables.
    """
    conn = sqlite3.connect(get_database_path(database_url))
    conn.row_factory = sqlite3.Row
    conn.create_function("casefold", 1, casefold, deterministic=True)
    conn.execute("PRAGMA trusted_schema = ON")
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor(database_url: Optional[str] = None) -> Iterator[sqlite3.Cursor]:
    """Yield a cursor, commit on success and always close the connection."""
    conn = get_connection(database_url)
    try:
        yield conn.cursor()
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(database_url: Optional[str] = None) -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version and applies every newer entry of
    ``MIGRATIONS``.  To change the schema, append a migration with an
    incremented version number.
    """
    with get_cursor(database_url) as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
