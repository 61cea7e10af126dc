"""
Base Engine Provider - Hand booted, validated engines to the host

A provider picks a source, boots an engine on it and checks it with
is_okay(). Every failure is shown to the user through the host's
`show_error` callback and yields None, never a half-initialized engine.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from ...exceptions import EngineInitializationError
from ...utils.connection_error_handler import format_connection_error

import logging
logger = logging.getLogger(__name__)

ShowError = Callable[[str], None]
EngineReady = Callable[[str], None]


def _log_only(message: str) -> None:
    logger.warning(message)


class DatabaseEngineProvider(ABC):
    """
    Abstract base class for engine providers.

    Host collaborators (dialogs, configuration) are injected as callables.
    """

    name: str = ""
    type: str = ""
    id: str = ""
    description: str = ""

    def __init__(self, show_error: Optional[ShowError] = None,
                 on_engine_ready: Optional[EngineReady] = None):
        """
        Args:
            show_error: Displays a user-facing message (defaults to logging it)
            on_engine_ready: Called with the source of each validated engine
                (e.g. to remember it in the host configuration)
        """
        self.show_error = show_error or _log_only
        self.on_engine_ready = on_engine_ready
        self.engine = None

    def can_be_used_in_current_workspace(self) -> bool:
        """Whether the provider applies to the host's current workspace."""
        return True

    @abstractmethod
    def get_database_engine(self):
        """
        Select a source and return a booted, validated engine.

        Returns:
            Engine or None (a message has been shown)
        """
        pass

    def _boot_and_validate(self, engine, source: str, invalid_message: str,
                           label: Optional[str] = None):
        """Shared boot -> is_okay -> notify sequence. `label` names the source in messages."""
        label = label or source
        self.engine = None

        try:
            engine.boot()
        except EngineInitializationError as e:
            logger.error(f"Boot failed for {label}: {e}")
            self.show_error(format_connection_error(e, db_type=self.type))
            return None

        try:
            is_okay = engine.is_okay()
        except Exception as e:
            engine.disconnect()
            self.show_error(f"Error opening {label}: {e}")
            return None

        if not is_okay:
            engine.disconnect()
            self.show_error(invalid_message)
            return None

        if self.on_engine_ready:
            self.on_engine_ready(source)

        self.engine = engine
        return engine
