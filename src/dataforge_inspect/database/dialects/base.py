"""
Base Dialect Policy - Per-backend SQL text rules

Dialect policies handle the SQL syntax differences the query layer needs:
- Identifier quoting (`backticks` vs "quotes")
- Key of the COUNT(*) value in a driver-returned row
- Bound parameter placeholder (? vs %s)
- Unbounded LIMIT used when only OFFSET is requested
- Operand used for substring filters

Policies are stateless. Each engine selects one at construction time.
"""

from abc import ABC, abstractmethod
from enum import Enum


class Dialect(str, Enum):
    """Relational backends known to the query layer."""
    SQLITE = "sqlite"
    POSTGRES = "postgres"
    MYSQL = "mysql"


class DialectPolicy(ABC):
    """
    Abstract base class for dialect policies.

    Usage:
        policy = DialectFactory.get("postgres")
        table = policy.quote_identifier("users")   # "users"
        count = row[policy.count_key]              # row["count"]
    """

    # ==================== Identity ====================

    @property
    @abstractmethod
    def name(self) -> str:
        """Dialect identifier (e.g. 'sqlite')."""
        pass

    # ==================== Identifier Quoting ====================

    @property
    def quote_char(self) -> str:
        """Character used to quote identifiers."""
        return "`"

    def quote_identifier(self, identifier: str) -> str:
        """Quote a single identifier, doubling any embedded quote character."""
        q = self.quote_char
        return f"{q}{identifier.replace(q, q + q)}{q}"

    # ==================== Result Shapes ====================

    @property
    def count_key(self) -> str:
        """Name of the column holding the COUNT(*) value."""
        return "COUNT(*)"

    # ==================== Parameter Binding ====================

    @property
    def param_placeholder(self) -> str:
        """Placeholder for one bound parameter in the driver's paramstyle."""
        return "?"

    # ==================== Pagination ====================

    @property
    def unbounded_limit(self) -> str:
        """LIMIT clause meaning 'no limit', placed before a bare OFFSET."""
        return "LIMIT -1"

    # ==================== Filtering ====================

    def filter_operand(self, quoted_column: str) -> str:
        """Expression compared against a filter value."""
        return quoted_column

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class DefaultDialect(DialectPolicy):
    """Fallback policy for dialects without a dedicated variant."""

    @property
    def name(self) -> str:
        return "default"
