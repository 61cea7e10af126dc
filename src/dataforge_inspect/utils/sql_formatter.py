"""
SQL Formatter - Readable rendering of stored DDL
"""

import sqlparse

import logging
logger = logging.getLogger(__name__)


def format_sql(sql_text: str, indent_width: int = 4) -> str:
    """
    Pretty-print a SQL statement.

    Keyword and identifier case are left untouched so the result differs
    from the input only in whitespace.

    Args:
        sql_text: SQL statement (e.g. a stored CREATE TABLE)
        indent_width: Spaces per indentation level

    Returns:
        Formatted SQL string ('' for empty input)
    """
    if not sql_text or not sql_text.strip():
        return ""

    return sqlparse.format(
        sql_text,
        reindent=True,
        indent_width=indent_width,
    ).strip()


def normalize_whitespace(sql_text: str) -> str:
    """Collapse every whitespace run to one space (single-line rendering)."""
    return " ".join((sql_text or "").split())
