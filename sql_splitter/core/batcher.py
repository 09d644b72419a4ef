"""
Statement batching module for size-bounded output files.

This module groups statements into batches whose serialized size stays within
a byte budget, preserving statement order.
"""
import logging
from typing import Iterable, List

from sql_splitter import config

logger = logging.getLogger(__name__)


class Batch:
    """
    An ordered group of statements destined for one output file.

    Attributes:
        index: 1-based position of the batch in the plan
        statements: Statements in source order
        size: Sum of each statement's encoded length plus one terminator
    """

    def __init__(self, index: int, statements: List[str], size: int):
        self.index = index
        self.statements = statements
        self.size = size

    def __repr__(self) -> str:
        return f"Batch(index={self.index}, statements={len(self.statements)}, size={self.size})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Batch):
            return NotImplemented
        return (self.index, self.statements, self.size) == (other.index, other.statements, other.size)

    def __len__(self) -> int:
        return len(self.statements)

    def serialize(self) -> str:
        """Join the statements with a blank line, each followed by a terminator."""
        return config.STATEMENT_SEPARATOR.join(
            statement + config.STATEMENT_TERMINATOR for statement in self.statements
        )

    def file_name(self, prefix: str = config.DEFAULT_FILE_PREFIX) -> str:
        """Output file name with a zero-padded index, e.g. split_001.sql."""
        return f"{prefix}{self.index:0{config.INDEX_WIDTH}d}{config.OUTPUT_EXTENSION}"


class StatementBatcher:
    """
    Greedy, order-preserving statement batcher.

    Statements are appended to the current batch until the next one would push
    it over ``max_bytes``; the batch is then closed and a new one started. A
    statement larger than the budget on its own is never split and gets a
    batch to itself.
    """

    def __init__(self, max_bytes: int = config.DEFAULT_MAX_SIZE_KB * 1024,
                 encoding: str = config.DEFAULT_ENCODING):
        """
        Initialize a new statement batcher.

        Args:
            max_bytes: Maximum size in bytes of a batch (default: 1000 KB)
            encoding: Encoding used to measure statement sizes (default: utf-8)
        """
        self.max_bytes = max_bytes
        self.encoding = encoding
        self.batches: List[Batch] = []
        self.reset()
        logger.debug(f"Initialized StatementBatcher with max_bytes={max_bytes}, encoding='{encoding}'")

    def reset(self) -> None:
        """Reset the current batch."""
        self.current_batch: List[str] = []
        self.current_size = 0

    def statement_size(self, statement: str) -> int:
        """Bytes a statement contributes to a batch, terminator included."""
        return len(statement.encode(self.encoding)) + len(config.STATEMENT_TERMINATOR)

    def add_statement(self, statement: str) -> bool:
        """
        Add a statement to the current batch.

        Args:
            statement: The statement to add

        Returns:
            True if the current batch must be flushed before this statement
            can be added (the statement was not added), False otherwise
        """
        size = self.statement_size(statement)

        if self.current_size + size > self.max_bytes and self.current_batch:
            return True

        if size > self.max_bytes:
            logger.warning(f"Single SQL statement exceeds max size: {size} bytes > {self.max_bytes} bytes")

        self.current_batch.append(statement)
        self.current_size += size
        return False

    def flush(self) -> List[Batch]:
        """
        Close the current batch and append it to ``batches``.

        Returns:
            The closed batch in a list, or an empty list if nothing was pending
        """
        if not self.current_batch:
            return []

        batch = Batch(len(self.batches) + 1, self.current_batch, self.current_size)
        logger.debug(f"Closed batch {batch.index} ({batch.size} bytes, {len(batch)} statements)")
        self.batches.append(batch)
        self.reset()
        return [batch]

    def plan(self, statements: Iterable[str]) -> List[Batch]:
        """
        Batch a full sequence of statements.

        Args:
            statements: Statements in source order

        Returns:
            Batches numbered from 1 in creation order
        """
        self.batches = []
        self.reset()
        for statement in statements:
            if self.add_statement(statement):
                self.flush()
                self.add_statement(statement)
        self.flush()
        return self.batches


def plan_batches(statements: Iterable[str], max_bytes: int,
                 encoding: str = config.DEFAULT_ENCODING) -> List[Batch]:
    """
    Group statements into size-bounded batches.

    Args:
        statements: Statements in source order
        max_bytes: Byte budget per batch
        encoding: Encoding used to measure statement sizes

    Returns:
        The split plan
    """
    batches = StatementBatcher(max_bytes, encoding).plan(statements)
    logger.info(f"Planned {len(batches)} batches with a budget of {max_bytes} bytes")
    return batches
