"""
SQL Clause Builder - Parametrized WHERE clauses from filter conditions

Only filter VALUES are bound as parameters. Column names are inserted as
SQL text because DB-API drivers cannot bind identifiers; callers must have
checked them against the live schema first.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, NamedTuple, Optional, Sequence, Union

import logging
logger = logging.getLogger(__name__)

CONTAINS = "contains"
EQUALS = "equals"
SUPPORTED_OPERATORS = (CONTAINS, EQUALS)


class FilterCondition(NamedTuple):
    """One (column, op, value) filter."""
    column: str
    op: str
    value: Any


@dataclass
class WhereClause:
    """Clause fragments and the bound values matching their placeholders."""
    where: List[str] = field(default_factory=list)
    replacements: List[str] = field(default_factory=list)

    def to_sql(self) -> str:
        """AND-join the fragments, prefixed with WHERE ('' when empty)."""
        if not self.where:
            return ""
        return "WHERE " + " AND ".join(self.where)


Filters = Union[Mapping[str, Any], Sequence[FilterCondition], None]


def conditions_from_mapping(mapping: Optional[Mapping[str, Any]]) -> List[FilterCondition]:
    """Convert a {column: value} map into 'contains' conditions, keeping its order."""
    if not mapping:
        return []
    return [FilterCondition(column, CONTAINS, value) for column, value in mapping.items()]


def normalize_filters(filters: Filters) -> List[FilterCondition]:
    """Accept either the external map form or a list of conditions."""
    if not filters:
        return []
    if isinstance(filters, Mapping):
        return conditions_from_mapping(filters)
    return [FilterCondition(*condition) for condition in filters]


def build_where_clause(
    filters: Filters,
    placeholder: str = "?",
    quote: Optional[Callable[[str], str]] = None,
    operand: Optional[Callable[[str], str]] = None
) -> WhereClause:
    """
    Build WHERE fragments and bound values.

    Args:
        filters: {column: value} map or list of FilterCondition
        placeholder: Driver parameter placeholder
        quote: Optional identifier quoting applied to column names
        operand: Optional wrapper for the (quoted) column expression

    Returns:
        WhereClause; empty when there are no filters

    Raises:
        ValueError: If a condition uses an unsupported operator
    """
    clause = WhereClause()

    for condition in normalize_filters(filters):
        column = quote(condition.column) if quote else condition.column
        if operand:
            column = operand(column)

        if condition.op == CONTAINS:
            clause.where.append(f"{column} LIKE {placeholder}")
            clause.replacements.append(f"%{condition.value}%")
        elif condition.op == EQUALS:
            clause.where.append(f"{column} = {placeholder}")
            clause.replacements.append(str(condition.value))
        else:
            raise ValueError(
                f"Unsupported filter operator: {condition.op!r} "
                f"(expected one of {', '.join(SUPPORTED_OPERATORS)})"
            )

    return clause
