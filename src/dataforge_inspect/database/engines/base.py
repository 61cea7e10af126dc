"""
Database Engine capability interface.

Engines are not related by inheritance: each backend implements this
protocol and composes a QueryService for row and count queries.

Lifecycle:
    UNINITIALIZED --boot()--> BOOTED --disconnect()--> DISCONNECTED (terminal)

Data-accessing calls on an engine that is not BOOTED return the empty
sentinel of their type ([], '', False, None) instead of raising.
"""

from enum import Enum
from typing import List, Optional, Protocol, runtime_checkable

from ..models import Column, ForeignKey, QueryResponse
from ..query.clause_builder import Filters


class EngineState(Enum):
    """Connection lifecycle of an engine."""
    UNINITIALIZED = "uninitialized"
    BOOTED = "booted"
    DISCONNECTED = "disconnected"


@runtime_checkable
class DatabaseEngine(Protocol):
    """Uniform introspection and query contract implemented by every engine."""

    @property
    def state(self) -> EngineState:
        ...

    def boot(self) -> None:
        ...

    def disconnect(self) -> None:
        ...

    def is_okay(self) -> bool:
        ...

    def get_tables(self) -> List[str]:
        ...

    def get_columns(self, table: str) -> List[Column]:
        ...

    def get_foreign_key_for(self, table: str, column: str) -> Optional[ForeignKey]:
        ...

    def get_table_creation_sql(self, table: str) -> str:
        ...

    def get_rows(
        self,
        table: str,
        limit: Optional[int],
        offset: Optional[int],
        where: Filters = None
    ) -> Optional[QueryResponse]:
        ...

    def get_total_rows(
        self,
        table: str,
        where: Filters = None
    ) -> Optional[int]:
        ...
