"""
Concurrency tests for the worker pool: counts, join barrier and end-to-end scenarios.
"""

import os
import random
import sys
import unittest

# Add the parent directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from fakes import FakeClock, FakeObjectStore, FixedPayloads, RecordingSleep
from s3bench.common.error_sink import ErrorLog
from s3bench.common.payload import PayloadGenerator
from s3bench.common.worker_pool import WorkerPool
from s3bench.common.workload import WorkloadConfig
from s3bench.configuration import NS_PER_MS
from s3bench.persistence.metrics_aggregator import summarize
from s3bench.persistence.record import OperationKind
from s3bench.persistence.stats_collector import StatsCollector
from s3bench.systems.base import ListPage
from s3bench.systems.errors import TransportDispatchError


def small_payloads(worker_id, rng):
    return PayloadGenerator(rng, min_size=1, max_size=256)


class TestWorkerPool(unittest.IsolatedAsyncioTestCase):

    async def test_put_stats_are_neither_dropped_nor_duplicated(self):
        store = FakeObjectStore()
        pool = WorkerPool(store, rng=random.Random(11), payload_factory=small_payloads)
        config = WorkloadConfig(bucket="bench", prefix="run", put_concurrency=8, put_count=25,
                                get_concurrency=0)

        stats = await pool.run(config)

        self.assertTrue(stats.closed)
        records = stats.snapshot()
        self.assertEqual(len(records), 8 * 25)
        self.assertTrue(all(r.kind is OperationKind.PUT for r in records))
        self.assertEqual(len(store.put_calls), 8 * 25)
        self.assertEqual(len(set(map(id, records))), len(records))

    async def test_two_put_workers_end_to_end(self):
        """2 workers x 3 PUTs with known sizes and durations."""
        clock = FakeClock()
        durations_ms = {1000: 10, 2000: 20, 3000: 10, 4000: 20, 5000: 10, 6000: 20}
        store = FakeObjectStore(on_put=lambda key, body: clock.advance(durations_ms[len(body)] * NS_PER_MS))
        sizes = {0: [1000, 2000, 3000], 1: [4000, 5000, 6000]}
        pool = WorkerPool(store, clock=clock, payload_factory=lambda i, rng: FixedPayloads(sizes[i]))
        config = WorkloadConfig(bucket="bench", prefix="run", put_concurrency=2, put_count=3,
                                get_concurrency=0)

        report = summarize(await pool.run(config))

        self.assertEqual(report.put.count, 6)
        self.assertEqual(report.put.total_time_ms, 90)
        self.assertEqual(report.put.avg_time_ms, 15)
        self.assertEqual(report.put.total_size_bytes, 21000)
        self.assertEqual(report.put.total_size_mb, 0)
        self.assertEqual(report.get.count, 0)
        self.assertEqual(report.get.avg_time_ms, 0)

    async def test_get_worker_end_to_end(self):
        """One empty listing then a populated one: one backoff, exactly two stats."""
        sleep = RecordingSleep()
        store = FakeObjectStore(objects={"run/obj": b"payload"}, list_script=[ListPage(objects=[])])
        pool = WorkerPool(store, rng=random.Random(2), sleep=sleep)
        config = WorkloadConfig(bucket="bench", prefix="run", put_concurrency=0,
                                get_concurrency=1, get_count=2)

        stats = await pool.run(config)

        self.assertEqual(sleep.calls, [1.0])
        self.assertEqual(len(stats), 2)
        self.assertTrue(all(r.kind is OperationKind.GET for r in stats.snapshot()))

    async def test_readers_wait_for_writers(self):
        sleep = RecordingSleep()
        store = FakeObjectStore()
        pool = WorkerPool(store, rng=random.Random(4), sleep=sleep, payload_factory=small_payloads)
        config = WorkloadConfig(bucket="bench", prefix="run", put_concurrency=2, put_count=3,
                                get_concurrency=3, get_count=4)

        report = summarize(await pool.run(config))

        self.assertEqual(report.put.count, 6)
        self.assertEqual(report.get.count, 12)
        self.assertTrue(all(key in store.objects for key in store.get_calls))

    async def test_each_worker_gets_its_own_random_source(self):
        seen = []

        def factory(worker_id, rng):
            seen.append(rng)
            return PayloadGenerator(rng, min_size=1, max_size=8)

        pool = WorkerPool(FakeObjectStore(), rng=random.Random(0), payload_factory=factory)
        await pool.run(WorkloadConfig(bucket="bench", prefix="run", put_concurrency=3,
                                      put_count=1, get_concurrency=0))

        self.assertEqual(len({id(rng) for rng in seen}), 3)

    async def test_crashing_worker_does_not_block_the_barrier(self):
        class Exploding:
            def generate(self):
                raise RuntimeError("boom")

        store = FakeObjectStore()
        factory = lambda i, rng: Exploding() if i == 0 else FixedPayloads([10, 20])
        pool = WorkerPool(store, payload_factory=factory)
        config = WorkloadConfig(bucket="bench", prefix="run", put_concurrency=2, put_count=2,
                                get_concurrency=0)

        with self.assertLogs('s3bench.common.worker_pool', level='ERROR') as logs:
            stats = await pool.run(config)

        self.assertEqual(len(stats), 2)
        self.assertTrue(stats.closed)
        self.assertIn("put-0", logs.output[0])

    async def test_writes_into_injected_collector_and_error_log(self):
        stats = StatsCollector()
        errors = ErrorLog()
        store = FakeObjectStore(
            put_failures={1: TransportDispatchError("dispatch failure")},
            list_script=[TransportDispatchError("connection reset")],
        )
        pool = WorkerPool(store, stats=stats, errors=errors, rng=random.Random(6),
                          sleep=RecordingSleep(), payload_factory=small_payloads)
        config = WorkloadConfig(bucket="bench", prefix="run", put_concurrency=1, put_count=2,
                                get_concurrency=1, get_count=1)

        result = await pool.run(config)

        self.assertIs(result, stats)
        self.assertIs(pool.errors, errors)
        self.assertTrue(stats.closed)
        self.assertEqual(len(stats), 2)
        self.assertEqual(errors.count("put", TransportDispatchError), 1)
        self.assertEqual(errors.count("list", TransportDispatchError), 1)
        self.assertEqual(len(errors), 2)

    async def test_pool_runs_once(self):
        pool = WorkerPool(FakeObjectStore(), payload_factory=small_payloads)
        config = WorkloadConfig(bucket="bench", prefix="run", put_concurrency=1, get_concurrency=0)
        await pool.run(config)

        with self.assertRaises(RuntimeError):
            await pool.run(config)

    async def test_empty_configuration(self):
        pool = WorkerPool(FakeObjectStore())
        config = WorkloadConfig(bucket="bench", prefix="run", put_concurrency=0, get_concurrency=0)

        stats = await pool.run(config)

        self.assertEqual(len(stats), 0)
        self.assertTrue(stats.closed)


if __name__ == '__main__':
    unittest.main()
