"""
SQLite Engine - Introspection and paginated queries over a SQLite database
"""

import sqlite3
from pathlib import Path
from typing import Any, BinaryIO, List, Optional, Sequence, Union

from ...constants import SQLITE_INTEGRITY_OK, SQLITE_MEMORY_PATH
from ...exceptions import EngineInitializationError, EngineNotConnectedError
from ...utils.sql_formatter import format_sql
from ..dialects import SQLiteDialect
from ..models import Column, ForeignKey, QueryResponse, RowObject
from ..query import QueryService
from ..query.clause_builder import Filters
from ..query.error_reporting import ErrorReporter
from ..query.runner import RenderedSqlCallback, SqlRunner
from ..row_mapper import map_rows, result_from_cursor
from .base import EngineState

import logging
logger = logging.getLogger(__name__)

DatabaseImage = Union[bytes, bytearray, memoryview, BinaryIO]

# pragma_table_info columns: cid, name, type, notnull, dflt_value, pk
_COL_NAME, _COL_TYPE, _COL_NOTNULL, _COL_PK = 1, 2, 3, 5
# pragma_foreign_key_list columns: id, seq, table, from, to, on_update, on_delete, match
_FK_TABLE, _FK_FROM, _FK_TO = 2, 3, 4


class SQLiteRunner:
    """SqlRunner over a sqlite3 connection, capturing the expanded statement text."""

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection

    def execute(
        self,
        sql: str,
        params: Sequence[Any] = (),
        on_rendered_sql: Optional[RenderedSqlCallback] = None
    ) -> List[RowObject]:
        traced: List[str] = []
        if on_rendered_sql is not None:
            self.connection.set_trace_callback(traced.append)

        try:
            cursor = self.connection.execute(sql, tuple(params))
            rows = map_rows(result_from_cursor(cursor))
        finally:
            if on_rendered_sql is not None:
                self.connection.set_trace_callback(None)

        if on_rendered_sql is not None:
            on_rendered_sql(traced[0] if traced else sql)
        return rows


class SQLiteEngine:
    """
    Engine for SQLite databases (stdlib sqlite3).

    Sources:
        - sqlite_file_path: open the file in place (must exist)
        - image: load a serialized database (bytes or binary file object) in memory
        - neither: new empty in-memory database

    Usage:
        engine = SQLiteEngine("chinook.db")
        engine.boot()
        if engine.is_okay():
            tables = engine.get_tables()
            page = engine.get_rows(tables[0], limit=50, offset=0)
        engine.disconnect()
    """

    def __init__(
        self,
        sqlite_file_path: Optional[Union[str, Path]] = None,
        image: Optional[DatabaseImage] = None,
        error_reporter: Optional[ErrorReporter] = None
    ):
        self.sqlite_file_path = sqlite_file_path
        self.image = image
        self.dialect = SQLiteDialect()
        self._queries = QueryService(error_reporter)
        self._db: Optional[sqlite3.Connection] = None
        self._state = EngineState.UNINITIALIZED

    # ==================== Lifecycle ====================

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    @property
    def connection(self) -> sqlite3.Connection:
        """Live sqlite3 connection; raises if the engine is not booted."""
        if self._db is None:
            raise EngineNotConnectedError("Database not initialized")
        return self._db

    @property
    def source_label(self) -> str:
        if self.image is not None:
            return "<database image>"
        return str(self.sqlite_file_path) if self.sqlite_file_path else SQLITE_MEMORY_PATH

    def boot(self) -> None:
        """
        Open the database.

        Raises:
            EngineInitializationError: File missing, or the source is not a
                readable SQLite database
        """
        if self._state is EngineState.BOOTED:
            return
        if self._state is EngineState.DISCONNECTED:
            raise EngineInitializationError(
                "Engine was disconnected; create a new engine", source=self.source_label
            )

        if self.image is None and self.sqlite_file_path and not Path(self.sqlite_file_path).is_file():
            raise EngineInitializationError(
                f"Database file not found: {self.sqlite_file_path}", source=self.source_label
            )

        db = None
        try:
            if self.image is not None:
                db = sqlite3.connect(SQLITE_MEMORY_PATH, check_same_thread=False, isolation_level=None)
                db.deserialize(self._read_image())
            else:
                path = str(self.sqlite_file_path) if self.sqlite_file_path else SQLITE_MEMORY_PATH
                db = sqlite3.connect(path, check_same_thread=False, isolation_level=None)

            # Header and schema are only parsed on first access
            db.execute("SELECT count(*) FROM sqlite_master").fetchone()
        except sqlite3.Error as e:
            if db is not None:
                db.close()
            raise EngineInitializationError(
                f"Cannot open SQLite database {self.source_label}: {e}", source=self.source_label
            ) from e

        self._db = db
        self._state = EngineState.BOOTED
        logger.info(f"SQLite engine booted: {self.source_label}")

    def _read_image(self) -> bytes:
        if hasattr(self.image, "read"):
            return self.image.read()
        return bytes(self.image)

    def disconnect(self) -> None:
        """Close the connection. No-op when not booted."""
        if self._db is None:
            return

        self._db.close()
        self._db = None
        self._state = EngineState.DISCONNECTED
        logger.info(f"SQLite engine disconnected: {self.source_label}")

    def __enter__(self) -> "SQLiteEngine":
        self.boot()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()

    # ==================== Validation ====================

    def is_okay(self) -> bool:
        """Run PRAGMA integrity_check; True only for the 'ok' status."""
        if self._db is None:
            return False

        row = self._db.execute("PRAGMA integrity_check").fetchone()
        return row is not None and row[0] == SQLITE_INTEGRITY_OK

    # ==================== Introspection ====================

    def get_tables(self) -> List[str]:
        """Table names, sorted ascending."""
        if self._db is None:
            return []

        rows = self._db.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
        return sorted(row[0] for row in rows)

    def get_columns(self, table: str) -> List[Column]:
        """Columns of a table, in declaration order, with their foreign keys."""
        if self._db is None:
            return []

        columns = []
        for row in self._table_info(table):
            name = row[_COL_NAME]
            columns.append(Column(
                name=name,
                type=row[_COL_TYPE],
                is_primary_key=row[_COL_PK] > 0,
                is_optional=row[_COL_NOTNULL] == 0,
                foreign_key=self.get_foreign_key_for(table, name)
            ))

        return columns

    def get_foreign_key_for(self, table: str, column: str) -> Optional[ForeignKey]:
        """Referenced table/column of the first foreign key declared on `column`."""
        if self._db is None:
            return None

        rows = self._db.execute("SELECT * FROM pragma_foreign_key_list(?)", (table,)).fetchall()
        foreign_key = next((fk for fk in rows if fk[_FK_FROM] == column), None)
        if foreign_key is None:
            return None

        target = foreign_key[_FK_TO] or self._primary_key_of(foreign_key[_FK_TABLE])
        return ForeignKey(table=foreign_key[_FK_TABLE], column=target)

    def get_table_creation_sql(self, table: str) -> str:
        """Stored CREATE statement of `table`, pretty-printed ('' if unknown)."""
        if self._db is None:
            return ""

        row = self._db.execute("SELECT sql FROM sqlite_master WHERE name = ?", (table,)).fetchone()
        if row is None or not row[0]:
            return ""
        return format_sql(row[0])

    def _table_info(self, table: str) -> List[tuple]:
        return self._db.execute("SELECT * FROM pragma_table_info(?)", (table,)).fetchall()

    def _primary_key_of(self, table: str) -> str:
        """Implicit target of 'REFERENCES table' without a column list."""
        pk_columns = sorted(
            (row for row in self._table_info(table) if row[_COL_PK] > 0),
            key=lambda row: row[_COL_PK]
        )
        return pk_columns[0][_COL_NAME] if pk_columns else "rowid"

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
        return [row[_COL_NAME] for row in self._table_info(table)]

    def _get_runner(self) -> Optional[SqlRunner]:
        if self._db is None:
            return None
        return SQLiteRunner(self._db)
