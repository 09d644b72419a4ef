"""
SQL Splitter - split large SQL scripts into size-bounded files

This package splits a single SQL script into several smaller files without
breaking any statement across file boundaries. It's useful for loading huge
SQL dumps into tools that impose per-file size limits.
"""

from sql_splitter.core.tokenizer import StatementTokenizer, split_statements
from sql_splitter.core.batcher import Batch, StatementBatcher, plan_batches
from sql_splitter.core.batch_writer import BatchCollector, write_batches
from sql_splitter.core.splitter import SQLSplitter

__version__ = "0.1.0"
__all__ = [
    "Batch",
    "BatchCollector",
    "SQLSplitter",
    "StatementBatcher",
    "StatementTokenizer",
    "plan_batches",
    "split_statements",
    "write_batches",
]
