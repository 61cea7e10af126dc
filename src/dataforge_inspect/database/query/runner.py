"""
SQL Runner - Minimal execution capability used by the query service
"""

from typing import Any, Callable, List, Optional, Protocol, Sequence, runtime_checkable

from ..models import RowObject
from ..row_mapper import map_rows, result_from_cursor

import logging
logger = logging.getLogger(__name__)

RenderedSqlCallback = Callable[[str], None]


@runtime_checkable
class SqlRunner(Protocol):
    """Executes one statement and returns its rows as dicts."""

    def execute(
        self,
        sql: str,
        params: Sequence[Any] = (),
        on_rendered_sql: Optional[RenderedSqlCallback] = None
    ) -> List[RowObject]:
        ...


class CursorRunner:
    """
    SqlRunner over a DB-API connection.

    Each engine supplies `render`, which returns the statement text as the
    driver actually sent it (parameters substituted) for an executed cursor.
    """

    def __init__(
        self,
        connection: Any,
        render: Optional[Callable[[Any, str, Sequence[Any]], str]] = None
    ):
        self.connection = connection
        self._render = render

    def execute(
        self,
        sql: str,
        params: Sequence[Any] = (),
        on_rendered_sql: Optional[RenderedSqlCallback] = None
    ) -> List[RowObject]:
        cursor = self.connection.cursor()
        try:
            cursor.execute(sql, tuple(params) if params else None)
            if on_rendered_sql is not None:
                rendered = self._render(cursor, sql, params) if self._render else sql
                on_rendered_sql(rendered)
            return map_rows(result_from_cursor(cursor))
        finally:
            cursor.close()
