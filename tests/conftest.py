"""
Pytest configuration and fixtures for SQL Splitter tests.
"""
import logging

import pytest


# Define test markers
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "core: tests of the tokenizer and batcher that touch no files"
    )
    config.addinivalue_line(
        "markers", "io: tests that write to a temporary directory"
    )


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by CLI runs so they don't outlive the captured streams."""
    yield
    logger = logging.getLogger("sql_splitter")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
