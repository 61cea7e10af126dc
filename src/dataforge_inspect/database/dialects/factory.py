"""
Dialect Factory - Resolve a dialect policy from a database type
"""

from typing import Dict, Type, Union

from .base import Dialect, DialectPolicy, DefaultDialect

import logging
logger = logging.getLogger(__name__)


class DialectFactory:
    """
    Factory for dialect policies.

    Unknown database types resolve to DefaultDialect; lookup never fails.

    Usage:
        policy = DialectFactory.get("postgresql")
        policy.quote_char  # '"'
    """

    # Registry of supported database types
    _dialects: Dict[str, Type[DialectPolicy]] = {}

    @classmethod
    def get(cls, db_type: Union[str, Dialect, None]) -> DialectPolicy:
        """
        Get the policy for a database type.

        Args:
            db_type: Dialect enum member or type name (sqlite, postgres, mysql, ...)

        Returns:
            DialectPolicy instance (DefaultDialect if type not supported)
        """
        if isinstance(db_type, Dialect):
            key = db_type.value
        else:
            key = (db_type or "").lower()

        dialect_class = cls._dialects.get(key)
        if dialect_class is None:
            logger.warning(f"No dialect for database type: {db_type!r}, using default")
            return DefaultDialect()

        return dialect_class()

    @classmethod
    def is_supported(cls, db_type: str) -> bool:
        """Check if a database type has a dedicated policy."""
        return db_type.lower() in cls._dialects

    @classmethod
    def supported_types(cls) -> list:
        """Get list of supported database types."""
        return list(cls._dialects.keys())

    @classmethod
    def register(cls, db_type: str, dialect_class: Type[DialectPolicy]):
        """
        Register a dialect policy.

        Args:
            db_type: Database type identifier
            dialect_class: DialectPolicy subclass
        """
        cls._dialects[db_type.lower()] = dialect_class
        logger.debug(f"Registered dialect for: {db_type}")


def _register_default_dialects():
    """Register built-in dialects. Called on module import."""
    from .sqlite_dialect import SQLiteDialect
    from .postgresql_dialect import PostgreSQLDialect
    from .mysql_dialect import MySQLDialect

    DialectFactory.register("sqlite", SQLiteDialect)
    DialectFactory.register("postgres", PostgreSQLDialect)
    DialectFactory.register("postgresql", PostgreSQLDialect)  # Alias
    DialectFactory.register("mysql", MySQLDialect)
    DialectFactory.register("mariadb", MySQLDialect)  # Alias


# Register on module import
_register_default_dialects()
