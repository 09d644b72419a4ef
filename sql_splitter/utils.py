"""
Utility functions for SQL Splitter
"""
import sys
import logging
from typing import Optional

from sql_splitter import config


def setup_logging(verbose: bool = False, log_file: Optional[str] = config.LOG_FILE) -> logging.Logger:
    """
    Set up logging configuration.

    Args:
        verbose: Log at DEBUG level instead of INFO
        log_file: Optional path of a file that receives all records

    Returns:
        Logger instance
    """
    logger = logging.getLogger("sql_splitter")
    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)

    # Handlers are replaced so repeated CLI invocations don't duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        )
        logger.addHandler(file_handler)

    return logger


def format_size(size_bytes: int) -> str:
    """Format a byte count, e.g. "512 B" or "1.50 MB"."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    size = float(size_bytes)
    for unit in ("KB", "MB", "GB"):
        size /= 1024
        if size < 1024 or unit == "GB":
            break
    return f"{size:.2f} {unit}"


def format_duration(seconds: float) -> str:
    """Format an elapsed time in seconds, e.g. "850.31ms" or "2.41s"."""
    if seconds < 1:
        return f"{seconds * 1000:.2f}ms"
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes, secs = divmod(seconds, 60)
    return f"{int(minutes)}m {secs:.2f}s"
