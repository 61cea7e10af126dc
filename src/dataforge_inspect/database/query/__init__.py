"""
Query layer - WHERE clause building, SQL runners and the query service.
"""

from .clause_builder import (
    FilterCondition,
    WhereClause,
    build_where_clause,
    conditions_from_mapping,
    CONTAINS,
    EQUALS,
)
from .error_reporting import ErrorReporter, CollectingErrorReporter, log_error
from .query_service import QueryService
from .runner import SqlRunner, CursorRunner

__all__ = [
    "FilterCondition",
    "WhereClause",
    "build_where_clause",
    "conditions_from_mapping",
    "CONTAINS",
    "EQUALS",
    "ErrorReporter",
    "CollectingErrorReporter",
    "log_error",
    "QueryService",
    "SqlRunner",
    "CursorRunner",
]
