"""
Server Connection Provider - Connect to a PostgreSQL or MySQL server by URL
"""

from typing import Callable, Optional

from ..engines import EngineFactory
from ..query.error_reporting import ErrorReporter
from .base import DatabaseEngineProvider, EngineReady, ShowError

import logging
logger = logging.getLogger(__name__)

GetConnectionString = Callable[[], Optional[str]]

_DISPLAY_NAMES = {
    "postgres": "PostgreSQL",
    "postgresql": "PostgreSQL",
    "mysql": "MySQL",
    "mariadb": "MariaDB",
}


class ServerConnectionProvider(DatabaseEngineProvider):
    """
    Provider for server databases reached through a connection URL.

    Usage:
        provider = ServerConnectionProvider("postgres", get_connection_string=ask_url)
        engine = provider.get_database_engine()
    """

    def __init__(self, db_type: str,
                 get_connection_string: GetConnectionString,
                 show_error: Optional[ShowError] = None,
                 on_engine_ready: Optional[EngineReady] = None,
                 error_reporter: Optional[ErrorReporter] = None):
        """
        Args:
            db_type: postgres / postgresql / mysql / mariadb
            get_connection_string: Host prompt returning a URL or None if cancelled
            show_error: Displays a user-facing message
            on_engine_ready: Called with the URL of a validated connection
            error_reporter: Error channel handed to the created engine
        """
        super().__init__(show_error, on_engine_ready)
        display = _DISPLAY_NAMES.get(db_type.lower(), db_type)
        self.type = db_type.lower()
        self.name = f"{display} Server"
        self.id = f"server-{self.type}"
        self.description = f"{display} database reached through a connection URL"
        self.get_connection_string = get_connection_string
        self.error_reporter = error_reporter

    def can_be_used_in_current_workspace(self) -> bool:
        return EngineFactory.is_supported(self.type)

    def get_database_engine(self):
        connection_string = self.get_connection_string()
        if not connection_string:
            self.show_error("No connection URL provided.")
            return None

        engine = EngineFactory.create(
            self.type, connection_string, error_reporter=self.error_reporter
        )
        if engine is None:
            self.show_error(f"Unsupported database type: {self.type}")
            return None

        return self._boot_and_validate(
            engine, connection_string,
            f"The {self.name} did not answer the validation query.",
            label=engine.source_label
        )
