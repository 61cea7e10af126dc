"""
SQLite File Provider - Open a SQLite database file chosen by the user
"""

from typing import Callable, Optional

from ..engines import SQLiteEngine
from ..query.error_reporting import ErrorReporter
from .base import DatabaseEngineProvider, EngineReady, ShowError

import logging
logger = logging.getLogger(__name__)

SelectFile = Callable[[], Optional[str]]


class SQLiteFileProvider(DatabaseEngineProvider):
    """
    Provider for SQLite database files.

    Usage:
        provider = SQLiteFileProvider(select_file=dialog.ask_path, show_error=ui.error)
        engine = provider.get_database_engine()
    """

    name = "SQLite Database File Picker"
    type = "sqlite"
    id = "file-picker-sqlite"
    description = "SQLite database file from your computer"

    def __init__(self, select_file: SelectFile,
                 show_error: Optional[ShowError] = None,
                 on_engine_ready: Optional[EngineReady] = None,
                 error_reporter: Optional[ErrorReporter] = None):
        """
        Args:
            select_file: Host file picker, returns a path or None if cancelled
            show_error: Displays a user-facing message
            on_engine_ready: Called with the file path of a validated database
            error_reporter: Error channel handed to the created engine
        """
        super().__init__(show_error, on_engine_ready)
        self.select_file = select_file
        self.error_reporter = error_reporter

    def get_database_engine(self) -> Optional[SQLiteEngine]:
        file_path = self.select_file()
        if not file_path:
            self.show_error("No file selected.")
            return None

        engine = SQLiteEngine(file_path, error_reporter=self.error_reporter)
        return self._boot_and_validate(
            engine, file_path, "The selected file is not a valid SQLite database."
        )
