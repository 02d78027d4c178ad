import threading

import pytest
from sqlalchemy import create_engine, text

from conftest import TestConfig
from partyrank import create_app, db
from partyrank.database import configure_sqlite, ensure_sqlite_directory, read_sqlite_settings


@pytest.fixture()
def file_engine(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}")
    configure_sqlite(engine, journal_mode='WAL', busy_timeout_ms=5000)
    yield engine
    engine.dispose()


@pytest.fixture()
def file_app(tmp_path):
    class FileConfig(TestConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'data' / 'partyrank.db'}"
        SQLITE_JOURNAL_MODE = 'WAL'
        SQLITE_BUSY_TIMEOUT_MS = 5000

    application = create_app(FileConfig)
    yield application
    with application.app_context():
        db.engine.dispose()


def test_pragmas_applied_to_file_database(file_engine):
    assert read_sqlite_settings(file_engine) == {'journal_mode': 'wal', 'busy_timeout': 5000}


def test_memory_database_keeps_memory_journal():
    engine = create_engine('sqlite://')
    configure_sqlite(engine, journal_mode='WAL', busy_timeout_ms=1234)
    assert read_sqlite_settings(engine) == {'journal_mode': 'memory', 'busy_timeout': 1234}


def test_reader_sees_committed_rows_while_writer_is_open(file_engine):
    with file_engine.begin() as conn:
        conn.execute(text('CREATE TABLE test_table (id INTEGER PRIMARY KEY, value TEXT)'))
        conn.execute(text("INSERT INTO test_table (value) VALUES ('test1')"))

    writer = file_engine.connect()
    trans = writer.begin()
    writer.execute(text("INSERT INTO test_table (value) VALUES ('pending')"))
    try:
        with file_engine.connect() as reader:
            values = [row[0] for row in reader.execute(text('SELECT value FROM test_table'))]
        assert values == ['test1']
    finally:
        trans.rollback()
        writer.close()


def test_concurrent_writers_do_not_fail(file_engine):
    with file_engine.begin() as conn:
        conn.execute(text('CREATE TABLE concurrent_test (id INTEGER PRIMARY KEY AUTOINCREMENT, worker INTEGER, value TEXT)'))

    errors = []

    def worker(worker_id):
        try:
            for i in range(20):
                with file_engine.begin() as conn:
                    conn.execute(
                        text('INSERT INTO concurrent_test (worker, value) VALUES (:w, :v)'),
                        {'w': worker_id, 'v': f'row-{i}'},
                    )
        except Exception as exc:  # collected and asserted below
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    with file_engine.connect() as conn:
        assert conn.execute(text('SELECT COUNT(*) FROM concurrent_test')).scalar() == 100


def test_ensure_sqlite_directory_creates_parent(tmp_path):
    target = tmp_path / 'nested' / 'dir' / 'app.db'
    ensure_sqlite_directory(f"sqlite:///{target}")
    assert target.parent.is_dir()
    ensure_sqlite_directory('sqlite://')


def test_verify_db_command_passes_on_file_database(file_app):
    result = file_app.test_cli_runner().invoke(args=['verify-db'])
    assert result.exit_code == 0, result.output
    assert 'Journal Mode: wal' in result.output


def test_verify_db_command_fails_on_mismatch(flask_app):
    # In-memory databases cannot use WAL
    result = flask_app.test_cli_runner().invoke(args=['verify-db'])
    assert result.exit_code == 1
    assert 'NOT correctly configured' in result.output


def test_db_reset_seeds_catalogue(file_app):
    from partyrank.catalog import PARTY_GAMES
    from partyrank.models import Game

    result = file_app.test_cli_runner().invoke(args=['db-reset'])
    assert result.exit_code == 0, result.output
    with file_app.app_context():
        assert Game.query.count() == len(PARTY_GAMES)


def test_seed_games_skips_existing_names(flask_app):
    from partyrank.catalog import seed_games
    from partyrank.models import Game

    with flask_app.app_context():
        db.session.add(Game(name='Drawful'))
        db.session.commit()
        added = seed_games([('Drawful', 'Pack 1'), ('Quiplash', None)])
        assert added == 1
        assert Game.query.count() == 2
