"""
Configuration settings for SQL Splitter.

This module contains default settings and configuration variables used
throughout the application.
"""
import os

# Environment variable prefix for CLI options (e.g. SQL_SPLITTER_MAX_SIZE_KB)
ENV_PREFIX = "SQL_SPLITTER"

# Default split settings
DEFAULT_MAX_SIZE_KB = 1000
DEFAULT_CONCURRENT_WRITES = 4
DEFAULT_ENCODING = "utf-8"

# Output file naming: split_001.sql, split_002.sql, ...
DEFAULT_FILE_PREFIX = "split_"
OUTPUT_EXTENSION = ".sql"
INDEX_WIDTH = 3

# Statement serialization
STATEMENT_TERMINATOR = ";"
STATEMENT_SEPARATOR = "\n\n"

# Optional log file location
LOG_FILE = os.getenv(f"{ENV_PREFIX}_LOG_FILE")
