"""
PostgreSQL Engine - Introspection and paginated queries over PostgreSQL (psycopg2)
"""

from typing import Any, List, Optional, Sequence

from ...constants import POSTGRES_DEFAULT_SCHEMA
from ...exceptions import EngineInitializationError, EngineNotConnectedError
from ...utils.connection_helpers import get_server_name, parse_postgresql_url
from ...utils.sql_formatter import format_sql
from ..dialects import PostgreSQLDialect
from ..models import Column, ForeignKey, QueryResponse
from ..query import CursorRunner, QueryService
from ..query.clause_builder import Filters
from ..query.error_reporting import ErrorReporter
from ..query.runner import SqlRunner
from .base import EngineState

import logging
logger = logging.getLogger(__name__)


def _rendered_query(cursor: Any, sql: str, params: Sequence[Any]) -> str:
    """Statement as psycopg2 sent it, parameters substituted."""
    query = cursor.query
    if not query:
        return sql
    return query.decode() if isinstance(query, bytes) else str(query)


class PostgreSQLEngine:
    """
    Engine for PostgreSQL databases.

    Usage:
        engine = PostgreSQLEngine("postgresql://user:pw@localhost:5432/shop")
        engine.boot()
        engine.get_tables()
    """

    def __init__(
        self,
        connection_string: str,
        schema: str = POSTGRES_DEFAULT_SCHEMA,
        error_reporter: Optional[ErrorReporter] = None
    ):
        self.connection_string = connection_string
        self.schema = schema
        self.dialect = PostgreSQLDialect()
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
        """Live psycopg2 connection; raises if the engine is not booted."""
        if self._conn is None:
            raise EngineNotConnectedError("Database not initialized")
        return self._conn

    @property
    def source_label(self) -> str:
        return get_server_name(self.connection_string) or "postgresql"

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

        pg_kwargs = parse_postgresql_url(self.connection_string)
        if pg_kwargs is None:
            raise EngineInitializationError(
                "Not a PostgreSQL connection URL (expected postgresql://...)",
                source=self.source_label
            )

        try:
            import psycopg2
        except ImportError as e:
            raise EngineInitializationError(
                "psycopg2 is required for PostgreSQL databases", source=self.source_label
            ) from e

        try:
            conn = psycopg2.connect(**pg_kwargs)
        except psycopg2.Error as e:
            raise EngineInitializationError(
                f"Cannot connect to PostgreSQL {self.source_label}: {e}", source=self.source_label
            ) from e

        # A failed statement must not abort the following ones
        conn.autocommit = True

        self._conn = conn
        self._state = EngineState.BOOTED
        logger.info(f"PostgreSQL engine booted: {self.source_label}")

    def disconnect(self) -> None:
        """Close the connection. No-op when not booted."""
        if self._conn is None:
            return

        self._conn.close()
        self._conn = None
        self._state = EngineState.DISCONNECTED
        logger.info(f"PostgreSQL engine disconnected: {self.source_label}")

    def __enter__(self) -> "PostgreSQLEngine":
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
        """Base tables of the engine's schema, sorted ascending."""
        if self._conn is None:
            return []

        rows = self._fetch_all("""
            SELECT table_name
            FROM information_schema.tables
            WHERE table_schema = %s AND table_type = 'BASE TABLE'
        """, (self.schema,))
        return sorted(row[0] for row in rows)

    def get_columns(self, table: str) -> List[Column]:
        """Columns of a table, in ordinal order, with their foreign keys."""
        if self._conn is None:
            return []

        # format_type keeps lengths, precision, enum and array type names
        rows = self._fetch_all("""
            SELECT a.attname,
                   format_type(a.atttypid, a.atttypmod) AS data_type,
                   NOT a.attnotnull AS is_nullable,
                   EXISTS (
                       SELECT 1
                       FROM pg_constraint pk
                       WHERE pk.conrelid = c.oid
                         AND pk.contype = 'p'
                         AND a.attnum = ANY (pk.conkey)
                   ) AS is_primary_key
            FROM pg_attribute a
            JOIN pg_class c ON c.oid = a.attrelid
            JOIN pg_namespace n ON n.oid = c.relnamespace
            WHERE n.nspname = %s AND c.relname = %s
              AND a.attnum > 0 AND NOT a.attisdropped
            ORDER BY a.attnum
        """, (self.schema, table))

        return [
            Column(
                name=name,
                type=data_type,
                is_primary_key=bool(is_pk),
                is_optional=bool(nullable),
                foreign_key=self.get_foreign_key_for(table, name)
            )
            for name, data_type, nullable, is_pk in rows
        ]

    def get_foreign_key_for(self, table: str, column: str) -> Optional[ForeignKey]:
        """Referenced table/column of the first foreign key declared on `column`."""
        if self._conn is None:
            return None

        # conkey[i] references confkey[i]; composite keys pair up by position
        rows = self._fetch_all("""
            SELECT ref.relname, ref_att.attname
            FROM pg_constraint con
            JOIN pg_class rel ON rel.oid = con.conrelid
            JOIN pg_namespace n ON n.oid = rel.relnamespace
            JOIN pg_class ref ON ref.oid = con.confrelid
            CROSS JOIN LATERAL unnest(con.conkey, con.confkey) AS k(attnum, ref_attnum)
            JOIN pg_attribute att
              ON att.attrelid = con.conrelid AND att.attnum = k.attnum
            JOIN pg_attribute ref_att
              ON ref_att.attrelid = con.confrelid AND ref_att.attnum = k.ref_attnum
            WHERE con.contype = 'f'
              AND n.nspname = %s
              AND rel.relname = %s
              AND att.attname = %s
            ORDER BY con.conname
        """, (self.schema, table, column))

        if not rows:
            return None
        return ForeignKey(table=rows[0][0], column=rows[0][1])

    def get_table_creation_sql(self, table: str) -> str:
        """
        CREATE TABLE statement rebuilt from the catalog, pretty-printed.

        PostgreSQL does not store DDL text; columns, primary key and foreign
        keys are reassembled ('' if the table is unknown).
        """
        if self._conn is None:
            return ""

        columns = self.get_columns(table)
        if not columns:
            return ""

        q = self.dialect.quote_identifier
        definitions = [
            f"{q(col.name)} {col.type}" + ("" if col.is_optional else " NOT NULL")
            for col in columns
        ]

        pk_columns = [q(col.name) for col in columns if col.is_primary_key]
        if pk_columns:
            definitions.append(f"PRIMARY KEY ({', '.join(pk_columns)})")

        for col in columns:
            if col.foreign_key:
                definitions.append(
                    f"FOREIGN KEY ({q(col.name)}) "
                    f"REFERENCES {q(col.foreign_key.table)} ({q(col.foreign_key.column)})"
                )

        return format_sql(f"CREATE TABLE {q(table)} ({', '.join(definitions)})")

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
            WHERE table_schema = %s AND table_name = %s
        """, (self.schema, table))
        return [row[0] for row in rows]

    def _get_runner(self) -> Optional[SqlRunner]:
        if self._conn is None:
            return None
        return CursorRunner(self._conn, render=_rendered_query)

    def _fetch_all(self, query: str, params: tuple = ()) -> List[tuple]:
        """Execute query and return all rows."""
        with self._conn.cursor() as cursor:
            cursor.execute(query, params or None)
            return cursor.fetchall()
