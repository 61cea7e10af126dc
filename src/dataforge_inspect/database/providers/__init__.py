"""
Engine Providers - Source selection, boot and validation for the host.
"""

from .base import DatabaseEngineProvider
from .sqlite_file_provider import SQLiteFileProvider
from .server_provider import ServerConnectionProvider

__all__ = [
    "DatabaseEngineProvider",
    "SQLiteFileProvider",
    "ServerConnectionProvider",
]
