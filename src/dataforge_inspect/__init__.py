"""
DataForge Inspect - Database introspection and query layer
SQLite / PostgreSQL / MySQL
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("dataforge-inspect")
except PackageNotFoundError:
    # Package not installed (running from a source checkout)
    __version__ = "0.1.0"

__author__ = "Lestat2Lioncourt"

from .database.engines import EngineFactory, SQLiteEngine, PostgreSQLEngine, MySQLEngine
from .database.models import Column, ForeignKey, QueryResponse

__all__ = [
    "EngineFactory",
    "SQLiteEngine",
    "PostgreSQLEngine",
    "MySQLEngine",
    "Column",
    "ForeignKey",
    "QueryResponse",
    "__version__",
]
