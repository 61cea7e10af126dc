"""
MySQL Engine - Introspection and paginated queries over MySQL/MariaDB (PyMySQL)
"""

from typing import Any, List, Optional, Sequence

from ...exceptions import EngineInitializationError, EngineNotConnectedError
from ...utils.connection_helpers import get_server_name, parse_mysql_url
from ...utils.sql_formatter import format_sql
from ..dialects import MySQLDialect
from ..models import Column, ForeignKey, QueryResponse
from ..query import CursorRunner, QueryService
from ..query.clause_builder import Filters
from ..query.error_reporting import ErrorReporter
from ..query.runner import SqlRunner
from .base import EngineState

import logging
logger = logging.getLogger(__name__)


def _rendered_query(cursor: Any, sql: str, params: Sequence[Any]) -> str:
    """Statement as PyMySQL sends it, parameters escaped and substituted."""
    return cursor.mogrify(sql, tuple(params) if params else None)


class MySQLEngine:
    """
    Engine for MySQL/MariaDB databases. Introspection is scoped to the
    database named in the connection URL.

    Usage:
        engine = MySQLEngine("mysql://user:pw@localhost:3306/shop")
        engine.boot()
        engine.get_tables()
    """

    def __init__(self, connection_string: str, error_reporter: Optional[ErrorReporter] = None):
        self.connection_string = connection_string
        self.dialect = MySQLDialect()
        self._queries = QueryService(error_reporter)
        self._conn = None
        self._state = EngineState.UNINITIALIZED

    # ==================== Lifecycle ====================

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    @property
    def connection(self):
        """Live PyMySQL connection; raises if the engine is not booted."""
        if self._conn is None:
            raise EngineNotConnectedError("Database not initialized")
        return self._conn

    @property
    def source_label(self) -> str:
        return get_server_name(self.connection_string) or "mysql"

    def boot(self) -> None:
        """
        Connect to the server.

        Raises:
            EngineInitializationError: Invalid URL or connection failure
        """
        if self._state is EngineState.BOOTED:
            return
        if self._state is EngineState.DISCONNECTED:
            raise EngineInitializationError(
                "Engine was disconnected; create a new engine", source=self.source_label
            )

        mysql_kwargs = parse_mysql_url(self.connection_string)
        if mysql_kwargs is None:
            raise EngineInitializationError(
                "Not a MySQL connection URL (expected mysql://...)", source=self.source_label
            )

        try:
            import pymysql
        except ImportError as e:
            raise EngineInitializationError(
                "PyMySQL is required for MySQL databases", source=self.source_label
            ) from e

        try:
            conn = pymysql.connect(autocommit=True, **mysql_kwargs)
        except pymysql.Error as e:
            raise EngineInitializationError(
                f"Cannot connect to MySQL {self.source_label}: {e}", source=self.source_label
            ) from e

        self._conn = conn
        self._state = EngineState.BOOTED
        logger.info(f"MySQL engine booted: {self.source_label}")

    def disconnect(self) -> None:
        """Close the connection. No-op when not booted."""
        if self._conn is None:
            return

        self._conn.close()
        self._conn = None
        self._state = EngineState.DISCONNECTED
        logger.info(f"MySQL engine disconnected: {self.source_label}")

    def __enter__(self) -> "MySQLEngine":
        self.boot()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()

    # ==================== Validation ====================

    def is_okay(self) -> bool:
        """Round-trip check: SELECT 1 must return 1."""
        if self._conn is None:
            return False
        return self._fetch_all("SELECT 1") == [(1,)]

    # ==================== Introspection ====================

    def get_tables(self) -> List[str]:
        """Base tables of the current database, sorted ascending."""
        if self._conn is None:
            return []

        rows = self._fetch_all("""
            SELECT table_name
            FROM information_schema.tables
            WHERE table_schema = DATABASE() AND table_type = 'BASE TABLE'
        """)
        return sorted(row[0] for row in rows)

    def get_columns(self, table: str) -> List[Column]:
        """Columns of a table, in ordinal order, with their foreign keys."""
        if self._conn is None:
            return []

        rows = self._fetch_all("""
            SELECT column_name, column_type, is_nullable, column_key
            FROM information_schema.columns
            WHERE table_schema = DATABASE() AND table_name = %s
            ORDER BY ordinal_position
        """, (table,))

        return [
            Column(
                name=name,
                type=column_type,
                is_primary_key=(column_key == "PRI"),
                is_optional=(nullable == "YES"),
                foreign_key=self.get_foreign_key_for(table, name)
            )
            for name, column_type, nullable, column_key in rows
        ]

    def get_foreign_key_for(self, table: str, column: str) -> Optional[ForeignKey]:
        """Referenced table/column of the first foreign key declared on `column`."""
        if self._conn is None:
            return None

        rows = self._fetch_all("""
            SELECT referenced_table_name, referenced_column_name
            FROM information_schema.key_column_usage
            WHERE table_schema = DATABASE()
              AND table_name = %s
              AND column_name = %s
              AND referenced_table_name IS NOT NULL
        """, (table, column))

        if not rows:
            return None
        return ForeignKey(table=rows[0][0], column=rows[0][1])

    def get_table_creation_sql(self, table: str) -> str:
        """SHOW CREATE TABLE output, pretty-printed ('' if the table is unknown)."""
        if self._conn is None:
            return ""

        # SHOW CREATE TABLE cannot bind the table name
        if table not in self.get_tables():
            return ""

        rows = self._fetch_all(f"SHOW CREATE TABLE {self.dialect.quote_identifier(table)}")
        if not rows:
            return ""
        return format_sql(rows[0][1])

    # ==================== Rows ====================

    def get_rows(
        self,
        table: str,
        limit: Optional[int],
        offset: Optional[int],
        where: Filters = None
    ) -> Optional[QueryResponse]:
        """One page of rows, or None if not connected / the query failed."""
        runner = self._get_runner()
        if runner is not None and not self._check_identifiers(table, where):
            return None
        return self._queries.get_rows(self.dialect, runner, table, limit, offset, where)

    def get_total_rows(self, table: str, where: Filters = None) -> Optional[int]:
        """Number of matching rows, or None if not connected / the query failed."""
        runner = self._get_runner()
        if runner is not None and not self._check_identifiers(table, where):
            return None
        return self._queries.get_total_rows(self.dialect, runner, table, where)

    def _check_identifiers(self, table: str, where: Filters) -> bool:
        return self._queries.validate_identifiers(
            table, where, self.get_tables, self._column_names
        )

    def _column_names(self, table: str) -> List[str]:
        rows = self._fetch_all("""
            SELECT column_name FROM information_schema.columns
            WHERE table_schema = DATABASE() AND table_name = %s
        """, (table,))
        return [row[0] for row in rows]

    def _get_runner(self) -> Optional[SqlRunner]:
        if self._conn is None:
            return None
        return CursorRunner(self._conn, render=_rendered_query)

    def _fetch_all(self, query: str, params: tuple = ()) -> List[tuple]:
        """Execute query and return all rows."""
        with self._conn.cursor() as cursor:
            cursor.execute(query, params or None)
            return list(cursor.fetchall())
