"""
Batch writer for split SQL files.

Each batch is written to its own file. Files are written concurrently on a
bounded thread pool, while a single file is always written sequentially.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from sql_splitter import config
from sql_splitter.core.batcher import Batch

logger = logging.getLogger(__name__)


class BatchCollector:
    """
    Collects information about written (or, in a dry run, planned) files.

    Example:
        >>> collector = BatchCollector()
        >>> write_batches(batches, "out", collector=collector)
        >>> collector.get_stats()["total_files"]
    """

    def __init__(self):
        """Initialize a new batch collector."""
        self.files: List[Dict[str, Any]] = []
        self.total_bytes = 0

    def add_file(self, index: int, path: Union[str, Path], statement_count: int, size: int) -> None:
        """
        Record one output file.

        Args:
            index: 1-based batch index
            path: Output file path
            statement_count: Number of statements in the file
            size: Bytes written (or planned)
        """
        self.files.append({
            "index": index,
            "path": str(path),
            "statements": statement_count,
            "size": size,
        })
        self.total_bytes += size
        logger.debug(f"Recorded file {path} ({statement_count} statements, {size} bytes)")

    def clear(self) -> None:
        """Clear all recorded files."""
        self.files = []
        self.total_bytes = 0

    def sorted_files(self) -> List[Dict[str, Any]]:
        """Recorded files in plan order, whatever order they completed in."""
        return sorted(self.files, key=lambda f: f["index"])

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics about the recorded files.

        Returns:
            Dictionary with file, statement and byte totals
        """
        sizes = [f["size"] for f in self.files]
        return {
            "total_files": len(self.files),
            "total_statements": sum(f["statements"] for f in self.files),
            "total_bytes": self.total_bytes,
            "largest_file": max(sizes) if sizes else 0,
        }


def write_batch(batch: Batch, output_path: Union[str, Path],
                encoding: str = config.DEFAULT_ENCODING) -> int:
    """
    Write one batch to a file.

    Args:
        batch: Batch to write
        output_path: Destination file, overwritten if it exists
        encoding: Output text encoding

    Returns:
        Number of bytes written
    """
    output_path = Path(output_path)
    with open(output_path, "w", encoding=encoding, newline="") as f:
        for i, statement in enumerate(batch.statements):
            if i > 0:
                f.write(config.STATEMENT_SEPARATOR)
            f.write(statement)
            f.write(config.STATEMENT_TERMINATOR)
    size = output_path.stat().st_size
    logger.debug(f"Wrote {output_path} ({len(batch)} statements, {size} bytes)")
    return size


def write_batches(batches: Sequence[Batch], output_dir: Union[str, Path],
                  concurrent_writes: int = config.DEFAULT_CONCURRENT_WRITES,
                  prefix: str = config.DEFAULT_FILE_PREFIX,
                  encoding: str = config.DEFAULT_ENCODING,
                  collector: Optional[BatchCollector] = None) -> int:
    """
    Write every batch to its own file with bounded parallelism.

    File names come from the batch indexes, so the output is the same whatever
    order the writes complete in. The output directory must already exist.
    On the first failure, writes that have not started are cancelled, writes
    already running are allowed to finish, and the error is re-raised
    unchanged. Files written before the failure are left in place.

    Args:
        batches: The split plan
        output_dir: Directory receiving the files
        concurrent_writes: Maximum number of files written at once
        prefix: File name prefix
        encoding: Output text encoding
        collector: Optional collector recording each written file

    Returns:
        Number of files written
    """
    if concurrent_writes < 1:
        raise ValueError(f"concurrent_writes must be at least 1, got {concurrent_writes}")

    output_dir = Path(output_dir)
    file_count = 0

    with ThreadPoolExecutor(max_workers=concurrent_writes) as executor:
        futures = {
            executor.submit(write_batch, batch, output_dir / batch.file_name(prefix), encoding): batch
            for batch in batches
        }
        try:
            for future in as_completed(futures):
                size = future.result()
                batch = futures[future]
                if collector is not None:
                    collector.add_file(batch.index, output_dir / batch.file_name(prefix), len(batch), size)
                file_count += 1
        except Exception:
            for pending in futures:
                pending.cancel()
            raise

    logger.info(f"Wrote {file_count} files to {output_dir}")
    return file_count
