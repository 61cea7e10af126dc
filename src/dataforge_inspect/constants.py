"""
Centralized constants for DataForge Inspect.

Import from here instead of hardcoding values.
"""

# ===========================================================================
# Timeouts (seconds)
# ===========================================================================
CONNECTION_TIMEOUT_S = 5        # Server connect timeout (psycopg2 / PyMySQL)

# ===========================================================================
# Query / Data limits
# ===========================================================================
ERROR_DETAILS_MAX_CHARS = 500   # Driver error text kept in user-facing messages

# ===========================================================================
# SQLite
# ===========================================================================
SQLITE_INTEGRITY_OK = "ok"      # PRAGMA integrity_check success literal
SQLITE_MEMORY_PATH = ":memory:"

# ===========================================================================
# Server databases
# ===========================================================================
POSTGRES_DEFAULT_PORT = 5432
POSTGRES_DEFAULT_DATABASE = "postgres"
POSTGRES_DEFAULT_SCHEMA = "public"
MYSQL_DEFAULT_PORT = 3306
