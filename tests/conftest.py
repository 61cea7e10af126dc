"""
Pytest configuration and fixtures for DataForge Inspect tests.
"""
import sqlite3

import pytest

from dataforge_inspect.database.engines import SQLiteEngine
from dataforge_inspect.database.query import CollectingErrorReporter


USERS_DDL = "CREATE TABLE users (id INTEGER PRIMARY KEY NOT NULL, name TEXT, age INTEGER)"


@pytest.fixture
def errors():
    """Error channel that records reported messages."""
    return CollectingErrorReporter()


@pytest.fixture
def engine(errors):
    """Booted in-memory SQLite engine."""
    engine = SQLiteEngine(error_reporter=errors)
    engine.boot()
    yield engine
    engine.disconnect()


@pytest.fixture
def users_engine(engine):
    """In-memory engine with a populated users table."""
    engine.connection.execute(USERS_DDL)
    engine.connection.executemany(
        "INSERT INTO users (name, age) VALUES (?, ?)",
        [("John", 30), ("Jane", 25), ("Bob", 40)]
    )
    return engine


@pytest.fixture
def sqlite_file(tmp_path):
    """SQLite database file on disk with a populated users table."""
    db_path = tmp_path / "app.db"
    conn = sqlite3.connect(db_path)
    conn.execute(USERS_DDL)
    conn.execute("INSERT INTO users (name, age) VALUES ('John', 30)")
    conn.commit()
    conn.close()
    yield db_path


@pytest.fixture
def not_a_database(tmp_path):
    """File that exists but is not a SQLite database."""
    path = tmp_path / "notes.db"
    path.write_text("these are not the pages you are looking for\n" * 200)
    yield path


# ==================== DB-API fakes for server drivers ====================

class FakeCursor:
    """Minimal DB-API cursor answering through its connection's responder."""

    def __init__(self, connection):
        self.connection = connection
        self.description = None
        self.query = None
        self._rows = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def execute(self, sql, params=None):
        self.connection.executed.append((sql, params))
        columns, rows = self.connection.responder(sql, params)
        self.description = [(name,) for name in columns] if columns is not None else None
        self._rows = list(rows)
        self.query = self.mogrify(sql, params).encode()

    def mogrify(self, sql, params=None):
        if not params:
            return sql
        return sql % tuple(f"'{p}'" for p in params)

    def fetchall(self):
        return list(self._rows)

    def close(self):
        pass


class FakeConnection:
    """
    Fake psycopg2 / PyMySQL connection.

    `responder(sql, params)` returns (column names or None, rows).
    """

    def __init__(self, responder):
        self.responder = responder
        self.executed = []
        self.autocommit = False
        self.closed = False

    def cursor(self):
        return FakeCursor(self)

    def close(self):
        self.closed = True

    def statements(self):
        return [sql for sql, _ in self.executed]


@pytest.fixture
def make_fake_connection():
    """Factory building a FakeConnection from a responder function."""
    return FakeConnection
