"""
Data models returned by database engines.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Column name -> dialect-native value, in result column order
RowObject = Dict[str, Any]


@dataclass(frozen=True)
class ForeignKey:
    """Referenced side of a foreign key."""
    table: str
    column: str


@dataclass(frozen=True)
class Column:
    """Snapshot of one table column at introspection time."""
    name: str
    type: str  # Raw backend type name
    is_primary_key: bool = False
    is_optional: bool = True  # Nullable
    foreign_key: Optional[ForeignKey] = None


@dataclass
class QueryResponse:
    """Rows of a paginated query and the statement that produced them."""
    rows: List[RowObject] = field(default_factory=list)
    sql: str = ""
