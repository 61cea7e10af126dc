"""
Database layer - dialect policies, SQL generation, engines and providers.
"""

from .models import Column, ForeignKey, QueryResponse, RowObject
from .row_mapper import RawResult, map_rows

__all__ = [
    "Column",
    "ForeignKey",
    "QueryResponse",
    "RowObject",
    "RawResult",
    "map_rows",
]
