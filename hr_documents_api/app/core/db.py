"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), a transactional cursor (``get_cursor``), applying
migrations on application start (``init_db``) and generating record
identifiers.

Four tables are persisted: ``employees``, ``document_types``,
``employee_document_type_links`` and ``documents``.  Records are never
physically removed; every table carries an activity flag plus a
``deleted_at`` timestamp.  Identifiers are 24 character hexadecimal
strings (8 hex digits of epoch seconds followed by 16 random hex
digits) so they have the same shape as the ObjectIds older clients
already send.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import os
import secrets
import sqlite3
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional

from .config import settings


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent  # project root
    return str((base_dir / db_url).resolve())


def _casefold(value: Optional[str]) -> Optional[str]:
    return value.casefold() if value is not None else None


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  Timestamps are stored as ISO strings and parsed by the
    Pydantic schemas, so no type detection is enabled here.
    """
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    # Foreign keys are off by default in SQLite and must be enabled per
    # connection for the REFERENCES clauses below to be enforced.
    conn.execute("PRAGMA foreign_keys = ON")
    # Unicode-aware case folding for name searches.
    conn.create_function("casefold", 1, _casefold, deterministic=True)
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Yield a cursor whose statements form one transaction.

    The transaction is committed when the block exits normally and
    rolled back if it raises, so a service that validates everything
    first and then writes several rows either persists all of them or
    none.
    """
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    except BaseException:
        conn.rollback()
        raise
    finally:
        conn.close()


def new_object_id() -> str:
    """Return a new 24 character hexadecimal identifier."""
    return f"{int(time.time()):08x}{secrets.token_hex(8)}"


def utc_now() -> str:
    """Current UTC time as an ISO 8601 string with microseconds."""
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS employees (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            document TEXT NOT NULL,
            hired_at TEXT NOT NULL,
            is_active INTEGER NOT NULL DEFAULT 1,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL,
            deleted_at TEXT
        );

        CREATE TABLE IF NOT EXISTS document_types (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            description TEXT,
            category TEXT NOT NULL DEFAULT 'general',
            is_active INTEGER NOT NULL DEFAULT 1,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL,
            deleted_at TEXT
        );

        CREATE TABLE IF NOT EXISTS employee_document_type_links (
            id TEXT PRIMARY KEY,
            employee_id TEXT NOT NULL,
            document_type_id TEXT NOT NULL,
            active INTEGER NOT NULL DEFAULT 1,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL,
            deleted_at TEXT,
            FOREIGN KEY(employee_id) REFERENCES employees(id),
            FOREIGN KEY(document_type_id) REFERENCES document_types(id)
        );

        CREATE TABLE IF NOT EXISTS documents (
            id TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            status TEXT NOT NULL DEFAULT 'PENDING',
            employee_id TEXT NOT NULL,
            document_type_id TEXT NOT NULL,
            is_active INTEGER NOT NULL DEFAULT 1,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL,
            deleted_at TEXT,
            FOREIGN KEY(employee_id) REFERENCES employees(id),
            FOREIGN KEY(document_type_id) REFERENCES document_types(id)
        );
        """,
    ),
    # Migration 2: uniqueness among active rows and lookup indices
    (
        2,
        """
        -- Soft-deleted rows may share a CPF or a name with an active one.
        CREATE UNIQUE INDEX IF NOT EXISTS ux_employees_active_document
            ON employees(document) WHERE is_active = 1;
        CREATE UNIQUE INDEX IF NOT EXISTS ux_document_types_active_name
            ON document_types(name COLLATE NOCASE) WHERE is_active = 1;

        CREATE INDEX IF NOT EXISTS idx_links_employee
            ON employee_document_type_links(employee_id, active);
        CREATE INDEX IF NOT EXISTS idx_links_document_type
            ON employee_document_type_links(document_type_id, active);
        CREATE INDEX IF NOT EXISTS idx_documents_employee_type
            ON documents(employee_id, document_type_id, is_active);
        """,
    ),
]


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version and applies any newer entry of
    ``MIGRATIONS``.  New migrations must be appended with an
    incremented version number.
    """
    with get_cursor() as cursor:
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
