"""
Error reporting channel for non-fatal query failures.

An ErrorReporter is any callable taking a message. It is injected into the
QueryService; the default one writes to the log.
"""

from typing import Callable, List

import logging
logger = logging.getLogger(__name__)

ErrorReporter = Callable[[str], None]


def log_error(message: str) -> None:
    """Default reporter: log the failure at ERROR level."""
    logger.error(message)


class CollectingErrorReporter:
    """Reporter that keeps messages in memory (hosts that batch errors, tests)."""

    def __init__(self):
        self.messages: List[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)

    def clear(self):
        self.messages.clear()


def safe_report(reporter: ErrorReporter, message: str) -> None:
    """Call a reporter without letting its own failures escape."""
    try:
        reporter(message)
    except Exception as e:
        logger.error(f"Error reporter failed ({e}) while reporting: {message}")
