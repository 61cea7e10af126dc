"""
MySQL Dialect - MySQL/MariaDB-specific SQL rules
"""

from .base import DialectPolicy, Dialect

# MySQL has no LIMIT ALL; the documented idiom is the max unsigned BIGINT
_MYSQL_MAX_ROWS = 18446744073709551615


class MySQLDialect(DialectPolicy):
    """Dialect for MySQL/MariaDB databases (PyMySQL paramstyle 'format')."""

    @property
    def name(self) -> str:
        return Dialect.MYSQL.value

    @property
    def param_placeholder(self) -> str:
        return "%s"

    @property
    def unbounded_limit(self) -> str:
        return f"LIMIT {_MYSQL_MAX_ROWS}"
