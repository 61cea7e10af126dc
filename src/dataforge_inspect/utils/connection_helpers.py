"""
Connection helpers - parse connection strings into driver connect() kwargs.
"""

import logging
from typing import Optional
from urllib.parse import unquote, urlsplit

from ..constants import (
    CONNECTION_TIMEOUT_S,
    MYSQL_DEFAULT_PORT,
    POSTGRES_DEFAULT_DATABASE,
    POSTGRES_DEFAULT_PORT,
)

logger = logging.getLogger(__name__)

POSTGRES_SCHEMES = ("postgresql://", "postgres://")
MYSQL_SCHEMES = ("mysql://", "mariadb://")
SQLITE_SCHEME = "sqlite:///"


def _split_url(conn_str: str):
    """Split scheme://[user[:pass]@]host[:port][/database][?params]."""
    parts = urlsplit(conn_str)
    database = unquote(parts.path.lstrip("/")) if parts.path else ""
    return {
        "host": parts.hostname or "localhost",
        "port": parts.port,
        "user": unquote(parts.username) if parts.username else "",
        "password": unquote(parts.password) if parts.password else "",
        "database": database,
    }


def parse_postgresql_url(conn_str: str) -> Optional[dict]:
    """
    Parse a postgresql:// URL and return psycopg2.connect() kwargs.

    Returns None if conn_str is not a PostgreSQL URL.
    """
    if not conn_str.startswith(POSTGRES_SCHEMES):
        return None

    parsed = _split_url(conn_str)
    return {
        "host": parsed["host"],
        "port": parsed["port"] or POSTGRES_DEFAULT_PORT,
        "user": parsed["user"],
        "password": parsed["password"],
        "dbname": parsed["database"] or POSTGRES_DEFAULT_DATABASE,
        "connect_timeout": CONNECTION_TIMEOUT_S,
    }


def parse_mysql_url(conn_str: str) -> Optional[dict]:
    """
    Parse a mysql:// URL and return pymysql.connect() kwargs.

    Returns None if conn_str is not a MySQL/MariaDB URL.
    """
    if not conn_str.startswith(MYSQL_SCHEMES):
        return None

    parsed = _split_url(conn_str)
    return {
        "host": parsed["host"],
        "port": parsed["port"] or MYSQL_DEFAULT_PORT,
        "user": parsed["user"],
        "password": parsed["password"],
        "database": parsed["database"] or None,
        "connect_timeout": CONNECTION_TIMEOUT_S,
    }


def parse_sqlite_path(conn_str: str) -> str:
    """Accept 'sqlite:///path/to.db' or a bare file path."""
    if conn_str.startswith(SQLITE_SCHEME):
        return conn_str[len(SQLITE_SCHEME):]
    return conn_str


def get_server_name(conn_str: str) -> str:
    """Host part of a server URL, for messages ('' if none)."""
    try:
        return urlsplit(conn_str).hostname or ""
    except ValueError:
        return ""
