"""
Dialect Policies - Per-backend SQL text rules

Usage:
    from dataforge_inspect.database.dialects import DialectFactory

    policy = DialectFactory.get("postgres")
    policy.quote_identifier("users")   # '"users"'
    policy.count_key                   # 'count'
"""

from .base import Dialect, DialectPolicy, DefaultDialect
from .factory import DialectFactory

from .sqlite_dialect import SQLiteDialect
from .postgresql_dialect import PostgreSQLDialect
from .mysql_dialect import MySQLDialect

__all__ = [
    # Base classes
    "Dialect",
    "DialectPolicy",
    "DefaultDialect",

    # Factory
    "DialectFactory",

    # Implementations
    "SQLiteDialect",
    "PostgreSQLDialect",
    "MySQLDialect",
]
