"""
Connection Error Handler - User-friendly database connection error messages

Translates driver error messages raised while opening or validating a
database into user-facing messages with suggestions for resolution.
"""

import re
from dataclasses import dataclass

from ..constants import ERROR_DETAILS_MAX_CHARS

import logging
logger = logging.getLogger(__name__)


@dataclass
class ConnectionErrorInfo:
    """Structured connection error information."""
    title: str  # Short error title
    message: str  # User-friendly message
    suggestion: str  # What to do to fix it
    original_error: str  # Original error for debugging

    def format_full(self) -> str:
        """Format complete error message for display."""
        parts = [self.title, "", self.message]
        if self.suggestion:
            parts.extend(["", "Suggestion:", self.suggestion])
        return "\n".join(parts)

    def format_short(self) -> str:
        """Format short error message."""
        return f"{self.title}\n\n{self.message}"


# Error patterns per database type
# Format: (regex_pattern, title, message_template, suggestion)
# Use {match} in message_template to include regex group(1)

POSTGRESQL_PATTERNS = [
    (
        r"password authentication failed for user ['\"]?(\w+)['\"]?",
        "Authentication failed",
        "Wrong password for user '{match}'.",
        "Check the password in the connection URL."
    ),
    (
        r"database ['\"]?(\w+)['\"]? does not exist",
        "Unknown database",
        "The database '{match}' does not exist.",
        "Check the database name at the end of the connection URL."
    ),
    (
        r"role ['\"]?(\w+)['\"]? does not exist",
        "Unknown user",
        "The user '{match}' does not exist on the server.",
        "Check the user name or ask the administrator to create the account."
    ),
    (
        r"(?:connection refused|could not connect)",
        "Connection refused",
        "Could not connect to the PostgreSQL server.",
        "Check that:\n"
        "  - PostgreSQL is running\n"
        "  - The server listens on the right port (default: 5432)\n"
        "  - pg_hba.conf allows your connection"
    ),
    (
        r"(?:could not translate host name|host not found)",
        "Server not found",
        "The PostgreSQL server could not be found.",
        "Check the host name or IP address of the server."
    ),
]

MYSQL_PATTERNS = [
    (
        r"access denied for user ['\"]?([\w.-]+)['\"]?",
        "Authentication failed",
        "Access denied for user '{match}'.",
        "Check the user name and password in the connection URL."
    ),
    (
        r"unknown database ['\"]?(\w+)['\"]?",
        "Unknown database",
        "The database '{match}' does not exist.",
        "Check the database name at the end of the connection URL."
    ),
    (
        r"can't connect to mysql server",
        "Connection refused",
        "Could not connect to the MySQL server.",
        "Check that MySQL is running and listens on the right port (default: 3306)."
    ),
]

SQLITE_PATTERNS = [
    (
        r"(?:unable to open|no such file|not found)",
        "File not found",
        "The SQLite database file does not exist.",
        "Check the path of the .db or .sqlite file."
    ),
    (
        r"file is not a database",
        "Not a SQLite database",
        "The selected file is not a SQLite database.",
        "Select a file created by SQLite (.db, .sqlite, .sqlite3)."
    ),
    (
        r"database is locked",
        "Database locked",
        "The database is in use by another process.",
        "Close the other applications using this file, or wait a moment."
    ),
    (
        r"(?:corrupt|malformed)",
        "Corrupt database",
        "The database file seems to be corrupt.",
        "Restore a backup or run 'PRAGMA integrity_check' to inspect the damage."
    ),
]

# Generic patterns (for all database types)
GENERIC_PATTERNS = [
    (
        r"(?:timeout|timed out)",
        "Timeout",
        "The connection took too long.",
        "Check the network connection and try again."
    ),
    (
        r"refused",
        "Connection refused",
        "The server refused the connection.",
        "Check that the database server is running."
    ),
    (
        r"(?:unreachable|network)",
        "Network unreachable",
        "The server is not reachable on the network.",
        "Check the network connection and the VPN if required."
    ),
]

_PATTERNS_BY_TYPE = {
    "postgres": POSTGRESQL_PATTERNS,
    "postgresql": POSTGRESQL_PATTERNS,
    "mysql": MYSQL_PATTERNS,
    "mariadb": MYSQL_PATTERNS,
    "sqlite": SQLITE_PATTERNS,
}


def parse_connection_error(error: Exception, db_type: str = "") -> ConnectionErrorInfo:
    """
    Parse a database connection error and return user-friendly information.

    Args:
        error: The exception that occurred
        db_type: Database type (sqlite, postgres, mysql)

    Returns:
        ConnectionErrorInfo with user-friendly message and suggestion
    """
    error_str = str(error)

    specific = _PATTERNS_BY_TYPE.get(db_type.lower())
    if specific is not None:
        patterns = specific + GENERIC_PATTERNS
    else:
        patterns = POSTGRESQL_PATTERNS + MYSQL_PATTERNS + SQLITE_PATTERNS + GENERIC_PATTERNS

    for pattern, title, message_template, suggestion in patterns:
        match = re.search(pattern, error_str, re.IGNORECASE)
        if match:
            message = message_template
            if "{match}" in message and match.groups():
                message = message.replace("{match}", match.group(1))

            return ConnectionErrorInfo(
                title=title,
                message=message,
                suggestion=suggestion,
                original_error=error_str
            )

    return ConnectionErrorInfo(
        title="Connection error",
        message="An error occurred while opening the database.",
        suggestion="Check the connection settings and try again.",
        original_error=error_str
    )


def format_connection_error(
    error: Exception,
    db_type: str = "",
    include_original: bool = True
) -> str:
    """
    Format a connection error for display to the user.

    Args:
        error: The exception that occurred
        db_type: Database type
        include_original: Whether to include original error message

    Returns:
        Formatted error message string
    """
    info = parse_connection_error(error, db_type)
    text = info.format_full()

    if include_original:
        text += "\n\n---\nTechnical details:\n" + info.original_error[:ERROR_DETAILS_MAX_CHARS]

    return text
