"""SQLite connection tuning.

Every new DBAPI connection gets the configured journal mode and busy
timeout so concurrent writers wait for the lock instead of failing with
``database is locked``.
"""

import os

from sqlalchemy import event
from sqlalchemy.engine import make_url


def _is_memory_database(database) -> bool:
    return not database or database == ':memory:' or database.startswith('file::memory:')


def ensure_sqlite_directory(uri: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    url = make_url(uri)
    if url.get_backend_name() != 'sqlite' or _is_memory_database(url.database):
        return
    directory = os.path.dirname(os.path.abspath(url.database))
    os.makedirs(directory, exist_ok=True)


def configure_sqlite(engine, journal_mode='WAL', busy_timeout_ms=5000) -> None:
    if engine.dialect.name != 'sqlite':
        return
    apply_journal_mode = bool(journal_mode) and not _is_memory_database(engine.url.database)

    @event.listens_for(engine, 'connect')
    def _set_sqlite_pragmas(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        try:
            if apply_journal_mode:
                cursor.execute(f'PRAGMA journal_mode={journal_mode}')
            cursor.execute(f'PRAGMA busy_timeout={int(busy_timeout_ms)}')
        finally:
            cursor.close()


def read_sqlite_settings(engine) -> dict:
    """Return the effective ``journal_mode`` and ``busy_timeout`` of a fresh connection."""
    if engine.dialect.name != 'sqlite':
        return {'journal_mode': None, 'busy_timeout': None}
    with engine.connect() as conn:
        journal_mode = conn.exec_driver_sql('PRAGMA journal_mode').scalar()
        busy_timeout = conn.exec_driver_sql('PRAGMA busy_timeout').scalar()
    return {
        'journal_mode': str(journal_mode).lower(),
        'busy_timeout': int(busy_timeout),
    }
