"""
Tests for the shared stats collection.
"""

import os
import sys
import threading
import unittest

# Add the parent directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from s3bench.persistence.record import OperationKind, Stat
from s3bench.persistence.stats_collector import StatsCollector


class TestStatsCollector(unittest.TestCase):

    def test_concurrent_appends_are_all_kept(self):
        collector = StatsCollector()
        threads = []

        def writer(worker_id):
            for i in range(500):
                collector.add(Stat(OperationKind.PUT, start_ns=i, end_ns=i + 1,
                                   byte_size=worker_id))

        for worker_id in range(8):
            thread = threading.Thread(target=writer, args=(worker_id,))
            threads.append(thread)
            thread.start()
        for thread in threads:
            thread.join()

        records = collector.snapshot()
        self.assertEqual(len(records), 8 * 500)
        for worker_id in range(8):
            self.assertEqual(sum(1 for r in records if r.byte_size == worker_id), 500)

    def test_closed_collection_rejects_appends(self):
        collector = StatsCollector()
        collector.add(Stat(OperationKind.GET, start_ns=0, end_ns=1, byte_size=1))
        collector.close()

        self.assertTrue(collector.closed)
        with self.assertRaises(RuntimeError):
            collector.add(Stat(OperationKind.GET, start_ns=0, end_ns=1, byte_size=1))
        self.assertEqual(len(collector), 1)

    def test_snapshot_is_a_copy(self):
        collector = StatsCollector()
        snapshot = collector.snapshot()
        collector.add(Stat(OperationKind.PUT, start_ns=0, end_ns=1, byte_size=1))

        self.assertIsInstance(snapshot, tuple)
        self.assertEqual(len(snapshot), 0)
        self.assertEqual(len(collector.snapshot()), 1)


if __name__ == '__main__':
    unittest.main()
