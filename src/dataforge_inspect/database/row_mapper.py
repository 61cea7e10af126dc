"""
Row Mapper - Convert column-oriented results into row dictionaries
"""

from typing import Any, List, NamedTuple, Optional, Sequence

from .models import RowObject


class RawResult(NamedTuple):
    """Column names plus positional value rows aligned to them."""
    columns: Sequence[str]
    values: Sequence[Sequence[Any]]


def map_rows(result: Optional[RawResult]) -> List[RowObject]:
    """
    Map a raw result to a list of {column: value} dicts.

    Keys follow the column order of the result. A missing result (no result
    set, e.g. after a DDL statement) maps to an empty list.

    Args:
        result: RawResult or None

    Returns:
        One dict per value row
    """
    if not result or not result.columns:
        return []

    columns = list(result.columns)
    return [dict(zip(columns, row)) for row in result.values]


def result_from_cursor(cursor: Any) -> Optional[RawResult]:
    """
    Build a RawResult from an executed DB-API cursor.

    Returns None when the statement produced no result set.
    """
    if cursor.description is None:
        return None

    columns = [description[0] for description in cursor.description]
    return RawResult(columns, cursor.fetchall())
