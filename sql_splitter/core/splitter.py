"""
Splitter service tying the tokenizer, batcher and writer together.

This module provides the SQLSplitter class, the main entry point for turning
one SQL script into a directory of size-bounded files.
"""
import logging
from pathlib import Path
from typing import List, Optional, Union

from sql_splitter import config
from sql_splitter.core.batch_writer import BatchCollector, write_batches
from sql_splitter.core.batcher import Batch, plan_batches
from sql_splitter.core.tokenizer import split_statements

logger = logging.getLogger(__name__)


class SQLSplitter:
    """
    Splits large SQL files into smaller ones while preserving statement integrity.

    Attributes:
        output_dir: Directory receiving the split files
        max_size_kb: Maximum size of each split file in kilobytes
        concurrent_writes: Maximum number of files written at once
        prefix: Output file name prefix
        encoding: Text encoding of the input and output files
    """

    def __init__(
        self,
        output_dir: Union[str, Path],
        max_size_kb: int = config.DEFAULT_MAX_SIZE_KB,
        concurrent_writes: int = config.DEFAULT_CONCURRENT_WRITES,
        prefix: str = config.DEFAULT_FILE_PREFIX,
        encoding: str = config.DEFAULT_ENCODING,
    ):
        if max_size_kb < 0:
            raise ValueError(f"max_size_kb must not be negative, got {max_size_kb}")
        if concurrent_writes < 1:
            raise ValueError(f"concurrent_writes must be at least 1, got {concurrent_writes}")

        self.output_dir = Path(output_dir)
        self.max_size_kb = max_size_kb
        self.concurrent_writes = concurrent_writes
        self.prefix = prefix
        self.encoding = encoding

    @property
    def max_bytes(self) -> int:
        return self.max_size_kb * 1024

    def plan_file(self, input_file: Union[str, Path]) -> List[Batch]:
        """
        Read and batch a SQL file without writing anything.

        Args:
            input_file: Path to the SQL script

        Returns:
            The split plan
        """
        # Line endings are read unchanged, including inside literals
        with open(input_file, "r", encoding=self.encoding, newline="") as f:
            content = f.read()
        statements = split_statements(content)
        logger.info(f"Read {len(statements)} SQL statements from {input_file}")
        return plan_batches(statements, self.max_bytes, self.encoding)

    def split_file(self, input_file: Union[str, Path],
                   collector: Optional[BatchCollector] = None) -> int:
        """
        Split a SQL file into the output directory.

        I/O errors propagate unchanged; files written before an error stay on
        disk.

        Args:
            input_file: Path to the SQL script
            collector: Optional collector recording each written file

        Returns:
            Number of files written
        """
        # Created once up front so concurrent writers never race on it
        self.output_dir.mkdir(parents=True, exist_ok=True)

        batches = self.plan_file(input_file)
        return write_batches(
            batches,
            self.output_dir,
            concurrent_writes=self.concurrent_writes,
            prefix=self.prefix,
            encoding=self.encoding,
            collector=collector,
        )
