"""
PostgreSQL Dialect - PostgreSQL-specific SQL rules
"""

from .base import DialectPolicy, Dialect


class PostgreSQLDialect(DialectPolicy):
    """Dialect for PostgreSQL databases (psycopg2 paramstyle 'format')."""

    @property
    def name(self) -> str:
        return Dialect.POSTGRES.value

    @property
    def quote_char(self) -> str:
        return '"'

    @property
    def count_key(self) -> str:
        # COUNT(*) comes back as a column named "count"
        return "count"

    @property
    def param_placeholder(self) -> str:
        return "%s"

    @property
    def unbounded_limit(self) -> str:
        return "LIMIT ALL"

    def filter_operand(self, quoted_column: str) -> str:
        # LIKE is only defined for text types
        return f"CAST({quoted_column} AS TEXT)"
