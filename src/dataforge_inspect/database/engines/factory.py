"""
Engine Factory - Create the engine matching a database type
"""

from typing import Any, Dict, Optional, Type

from ...utils.connection_helpers import parse_sqlite_path
from .mysql_engine import MySQLEngine
from .postgresql_engine import PostgreSQLEngine
from .sqlite_engine import SQLiteEngine

import logging
logger = logging.getLogger(__name__)


class EngineFactory:
    """
    Factory for database engines.

    Usage:
        engine = EngineFactory.create("sqlite", "sqlite:///data/app.db")
        engine = EngineFactory.create("postgres", "postgresql://localhost/shop")
        engine = EngineFactory.create("sqlite", image=uploaded_bytes)
    """

    # Registry of supported database types
    _engines: Dict[str, Type] = {
        "sqlite": SQLiteEngine,
        "postgres": PostgreSQLEngine,
        "postgresql": PostgreSQLEngine,  # Alias
        "mysql": MySQLEngine,
        "mariadb": MySQLEngine,  # Alias
    }

    @classmethod
    def create(cls, db_type: str, source: Optional[str] = None, **kwargs: Any):
        """
        Create an engine (not booted) for the specified database type.

        Args:
            db_type: Database type (sqlite, postgres, mysql, ...)
            source: File path / sqlite:/// URL for SQLite, server URL otherwise
            **kwargs: Extra engine arguments (image, schema, error_reporter)

        Returns:
            Engine instance or None if type not supported
        """
        engine_class = cls._engines.get(db_type.lower())
        if engine_class is None:
            logger.warning(f"No engine for database type: {db_type}")
            return None

        if engine_class is SQLiteEngine:
            return SQLiteEngine(parse_sqlite_path(source) if source else None, **kwargs)

        if not source:
            logger.warning(f"A connection URL is required for database type: {db_type}")
            return None
        return engine_class(source, **kwargs)

    @classmethod
    def is_supported(cls, db_type: str) -> bool:
        """Check if a database type is supported."""
        return db_type.lower() in cls._engines

    @classmethod
    def supported_types(cls) -> list:
        """Get list of supported database types."""
        return list(cls._engines.keys())

    @classmethod
    def register(cls, db_type: str, engine_class: Type):
        """
        Register a new engine type.

        Args:
            db_type: Database type identifier
            engine_class: Class implementing the DatabaseEngine protocol
        """
        cls._engines[db_type.lower()] = engine_class
        logger.info(f"Registered engine for: {db_type}")
