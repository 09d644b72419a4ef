"""
Tests for the batch writer.
"""
import os
import tempfile
import threading
import unittest
from pathlib import Path
from unittest import mock

import pytest

from sql_splitter.core import batch_writer
from sql_splitter.core.batch_writer import BatchCollector, write_batch, write_batches
from sql_splitter.core.batcher import Batch, plan_batches


@pytest.mark.io
class TestWriteBatch(unittest.TestCase):
    """Test cases for writing a single batch."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.output_dir = Path(self.temp_dir.name)

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_write_batch(self):
        batch = Batch(1, ["SELECT 1", "INSERT INTO t VALUES ('a;b')"], 38)
        path = self.output_dir / "out.sql"

        size = write_batch(batch, path)

        content = path.read_bytes()
        self.assertEqual(content, b"SELECT 1;\n\nINSERT INTO t VALUES ('a;b');")
        self.assertEqual(size, len(content))

    def test_write_batch_overwrites(self):
        path = self.output_dir / "out.sql"
        path.write_text("old content that is longer than the new one")
        write_batch(Batch(1, ["SELECT 1"], 9), path)
        self.assertEqual(path.read_text(), "SELECT 1;")

    def test_write_batch_encoding(self):
        path = self.output_dir / "out.sql"
        size = write_batch(Batch(1, ["SELECT 'é'"], 11), path, encoding="latin-1")
        self.assertEqual(path.read_bytes(), "SELECT 'é';".encode("latin-1"))
        self.assertEqual(size, 11)


@pytest.mark.io
class TestWriteBatches(unittest.TestCase):
    """Test cases for concurrent batch writing."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.output_dir = Path(self.temp_dir.name)
        self.statements = [f"INSERT INTO t VALUES ({i})" for i in range(10)]
        self.batches = plan_batches(self.statements, max_bytes=50)

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_write_batches(self):
        collector = BatchCollector()
        count = write_batches(self.batches, self.output_dir, concurrent_writes=2, collector=collector)

        self.assertEqual(count, 5)
        self.assertEqual(
            sorted(os.listdir(self.output_dir)),
            ["split_001.sql", "split_002.sql", "split_003.sql", "split_004.sql", "split_005.sql"],
        )
        self.assertEqual(
            (self.output_dir / "split_001.sql").read_text(),
            "INSERT INTO t VALUES (0);\n\nINSERT INTO t VALUES (1);",
        )

        stats = collector.get_stats()
        self.assertEqual(stats["total_files"], 5)
        self.assertEqual(stats["total_statements"], 10)
        self.assertEqual([f["index"] for f in collector.sorted_files()], [1, 2, 3, 4, 5])

    def test_names_follow_plan_order(self):
        write_batches(self.batches, self.output_dir, concurrent_writes=4, prefix="part_")
        for batch in self.batches:
            content = (self.output_dir / f"part_{batch.index:03d}.sql").read_text()
            self.assertEqual(content, batch.serialize())

    def test_concurrency_limit(self):
        active = []
        peak = []
        lock = threading.Lock()
        real_write_batch = batch_writer.write_batch

        def tracking_write_batch(batch, path, encoding):
            with lock:
                active.append(batch.index)
                peak.append(len(active))
            try:
                return real_write_batch(batch, path, encoding)
            finally:
                with lock:
                    active.remove(batch.index)

        with mock.patch.object(batch_writer, "write_batch", side_effect=tracking_write_batch):
            count = write_batches(self.batches, self.output_dir, concurrent_writes=2)

        self.assertEqual(count, 5)
        self.assertLessEqual(max(peak), 2)

    def test_failure_propagates(self):
        """The first write error is re-raised unchanged."""
        real_write_batch = batch_writer.write_batch

        def failing_write_batch(batch, path, encoding):
            if batch.index == 3:
                raise OSError(28, "No space left on device")
            return real_write_batch(batch, path, encoding)

        with mock.patch.object(batch_writer, "write_batch", side_effect=failing_write_batch):
            with self.assertRaises(OSError) as ctx:
                write_batches(self.batches, self.output_dir, concurrent_writes=1)

        self.assertEqual(ctx.exception.errno, 28)
        self.assertFalse((self.output_dir / "split_003.sql").exists())
        # Files written before the failure are left in place
        self.assertTrue((self.output_dir / "split_001.sql").exists())

    def test_missing_output_dir(self):
        with self.assertRaises(FileNotFoundError):
            write_batches(self.batches, self.output_dir / "missing", concurrent_writes=2)

    def test_invalid_concurrency(self):
        with self.assertRaises(ValueError):
            write_batches(self.batches, self.output_dir, concurrent_writes=0)

    def test_no_batches(self):
        self.assertEqual(write_batches([], self.output_dir), 0)
        self.assertEqual(os.listdir(self.output_dir), [])


@pytest.mark.core
class TestBatchCollector(unittest.TestCase):
    """Test cases for the BatchCollector class."""

    def test_stats(self):
        collector = BatchCollector()
        collector.add_file(2, "out/split_002.sql", 1, 40)
        collector.add_file(1, "out/split_001.sql", 3, 100)

        self.assertEqual(collector.get_stats(), {
            "total_files": 2,
            "total_statements": 4,
            "total_bytes": 140,
            "largest_file": 100,
        })
        self.assertEqual([f["path"] for f in collector.sorted_files()], ["out/split_001.sql", "out/split_002.sql"])

    def test_clear(self):
        collector = BatchCollector()
        collector.add_file(1, "split_001.sql", 1, 10)
        collector.clear()
        self.assertEqual(collector.get_stats()["total_files"], 0)
        self.assertEqual(collector.total_bytes, 0)


if __name__ == "__main__":
    unittest.main()
