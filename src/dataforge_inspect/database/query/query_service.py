"""
Query Service - Paginated row and row-count queries for any dialect

Builds SELECT / COUNT statements from a dialect policy and filter
conditions, runs them through an SqlRunner and reports failures to an
injected error channel.

Return values distinguish three outcomes:
- None: no runner (engine not connected) or the query failed
- empty rows / 0: the query ran and matched nothing
- data
"""

from typing import Any, Callable, Iterable, List, Optional, Tuple, Union

from ..dialects import DialectFactory, DialectPolicy
from ..models import QueryResponse
from .clause_builder import Filters, build_where_clause, normalize_filters
from .error_reporting import ErrorReporter, log_error, safe_report
from .runner import SqlRunner

import logging
logger = logging.getLogger(__name__)

DialectLike = Union[DialectPolicy, str]


class QueryService:
    """
    Stateless SQL generation and execution shared by all engines.

    Usage:
        service = QueryService(error_reporter=my_sink)
        response = service.get_rows("sqlite", runner, "users", limit=50, offset=100)
        total = service.get_total_rows("sqlite", runner, "users", {"name": "Jo"})
    """

    def __init__(self, error_reporter: Optional[ErrorReporter] = None):
        """
        Args:
            error_reporter: Callable receiving failure messages (defaults to logging)
        """
        self._report = error_reporter or log_error

    # ==================== Statement Building ====================

    @staticmethod
    def _policy(dialect: DialectLike) -> DialectPolicy:
        if isinstance(dialect, DialectPolicy):
            return dialect
        return DialectFactory.get(dialect)

    def build_select(
        self,
        dialect: DialectLike,
        table: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        where: Filters = None
    ) -> Tuple[str, List[str]]:
        """
        Build a paginated SELECT * statement.

        LIMIT is emitted only for a non-zero limit and OFFSET only for a
        non-zero offset. An offset without a limit gets the dialect's
        unbounded LIMIT so the statement stays valid on every backend.

        Returns:
            (sql, bound values)
        """
        policy = self._policy(dialect)
        clause = self._where(policy, where)

        parts = [f"SELECT * FROM {policy.quote_identifier(table)}", clause.to_sql()]
        if limit:
            parts.append(f"LIMIT {int(limit)}")
        elif offset:
            parts.append(policy.unbounded_limit)
        if offset:
            parts.append(f"OFFSET {int(offset)}")

        return " ".join(p for p in parts if p), clause.replacements

    def build_count(
        self,
        dialect: DialectLike,
        table: str,
        where: Filters = None
    ) -> Tuple[str, List[str]]:
        """Build a SELECT COUNT(*) statement (no pagination)."""
        policy = self._policy(dialect)
        clause = self._where(policy, where)

        parts = [f"SELECT COUNT(*) FROM {policy.quote_identifier(table)}", clause.to_sql()]
        return " ".join(p for p in parts if p), clause.replacements

    @staticmethod
    def _where(policy: DialectPolicy, where: Filters):
        return build_where_clause(
            where,
            placeholder=policy.param_placeholder,
            quote=policy.quote_identifier,
            operand=policy.filter_operand
        )

    # ==================== Execution ====================

    def get_rows(
        self,
        dialect: DialectLike,
        runner: Optional[SqlRunner],
        table: str,
        limit: Optional[int],
        offset: Optional[int],
        where: Filters = None
    ) -> Optional[QueryResponse]:
        """
        Fetch one page of rows.

        Args:
            dialect: Dialect policy or name
            runner: SqlRunner of a connected engine, None if not connected
            table: Table name (already checked against the schema)
            limit: Page size (falsy = no LIMIT)
            offset: Rows to skip (falsy = no OFFSET)
            where: {column: value} substring filters or FilterCondition list

        Returns:
            QueryResponse with the rendered SQL, or None on no runner / failure
        """
        if runner is None:
            return None

        try:
            sql, replacements = self.build_select(dialect, table, limit, offset, where)
        except (ValueError, TypeError) as e:
            safe_report(self._report, str(e))
            return None

        rendered = []
        try:
            rows = runner.execute(sql, replacements, on_rendered_sql=rendered.append)
        except Exception as e:
            safe_report(self._report, str(e))
            return None

        final_sql = rendered[-1] if rendered else sql
        logger.debug(f"Fetched {len(rows)} rows: {final_sql}")
        return QueryResponse(rows=rows, sql=final_sql)

    def get_total_rows(
        self,
        dialect: DialectLike,
        runner: Optional[SqlRunner],
        table: str,
        where: Filters = None
    ) -> Optional[int]:
        """
        Count the rows matching the filters.

        Returns:
            Row count (0 if the driver returned no count), or None on no runner / failure
        """
        if runner is None:
            return None

        policy = self._policy(dialect)
        try:
            sql, replacements = self.build_count(policy, table, where)
        except (ValueError, TypeError) as e:
            safe_report(self._report, str(e))
            return None

        try:
            rows = runner.execute(sql, replacements)
        except Exception as e:
            safe_report(self._report, str(e))
            return None

        total = rows[0].get(policy.count_key) if rows else None
        return int(total) if total else 0

    # ==================== Identifier Checks ====================

    def check_identifiers(
        self,
        table: str,
        where: Filters,
        known_tables: Iterable[str],
        known_columns: Optional[Iterable[str]] = None
    ) -> bool:
        """
        Verify that the table and filter columns exist in the live schema.

        Identifiers are interpolated into SQL text, so anything not found in
        the just-fetched listings is rejected and reported.

        Args:
            table: Requested table
            where: Requested filters
            known_tables: Current table names
            known_columns: Current column names of `table` (needed only with filters)

        Returns:
            True if every identifier is known
        """
        if table not in set(known_tables):
            safe_report(self._report, f"Unknown table: {table}")
            return False

        try:
            conditions = normalize_filters(where)
        except TypeError as e:
            safe_report(self._report, f"Invalid filter conditions: {e}")
            return False

        columns = set(known_columns or [])
        for condition in conditions:
            if condition.column not in columns:
                safe_report(self._report, f"Unknown column {condition.column} in table {table}")
                return False

        return True

    def validate_identifiers(
        self,
        table: str,
        where: Filters,
        list_tables: Callable[[], Iterable[str]],
        list_columns: Callable[[str], Iterable[str]]
    ) -> bool:
        """
        Read the live schema listings and run check_identifiers against them.

        A backend failure while reading the schema is reported like a
        failed query and rejects the request.

        Args:
            table: Requested table
            where: Requested filters
            list_tables: Returns the current table names
            list_columns: Returns the current column names of a table
                (called only when there are filters)

        Returns:
            True if the listings were read and every identifier is known
        """
        try:
            known_tables = list(list_tables())
            known_columns = list(list_columns(table)) if where else None
        except Exception as e:
            safe_report(self._report, str(e))
            return False

        return self.check_identifiers(table, where, known_tables, known_columns)
