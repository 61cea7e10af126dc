"""
SQLite Dialect - SQLite-specific SQL rules
"""

from .base import DialectPolicy, Dialect


class SQLiteDialect(DialectPolicy):
    """Dialect for SQLite databases (sqlite3 paramstyle 'qmark')."""

    @property
    def name(self) -> str:
        return Dialect.SQLITE.value
