"""
Database Engines - One live connection per engine, uniform introspection API

Usage:
    from dataforge_inspect.database.engines import EngineFactory

    engine = EngineFactory.create("sqlite", "chinook.db")
    engine.boot()
    engine.get_columns("albums")
"""

from .base import DatabaseEngine, EngineState
from .factory import EngineFactory

from .sqlite_engine import SQLiteEngine, SQLiteRunner
from .postgresql_engine import PostgreSQLEngine
from .mysql_engine import MySQLEngine

__all__ = [
    # Interface
    "DatabaseEngine",
    "EngineState",

    # Factory
    "EngineFactory",

    # Implementations
    "SQLiteEngine",
    "SQLiteRunner",
    "PostgreSQLEngine",
    "MySQLEngine",
]
