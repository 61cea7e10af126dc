"""
Exceptions raised by DataForge Inspect.

Only structurally fatal conditions are exceptions. "Not connected" and
query failures are reported through return values and the error channel.
"""


class DataForgeInspectError(Exception):
    """Base class for all DataForge Inspect errors."""


class EngineInitializationError(DataForgeInspectError):
    """A database engine could not open or parse its source during boot()."""

    def __init__(self, message: str, source: str = ""):
        super().__init__(message)
        self.source = source


class EngineNotConnectedError(DataForgeInspectError):
    """The live connection was requested before boot() or after disconnect()."""
