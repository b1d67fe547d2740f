"""
Async worker pool running the PUT and GET workers of one load run.
"""

import asyncio
import logging
import random
import time
from typing import Awaitable, Callable, List, Optional

from s3bench.common.error_sink import ErrorLog
from s3bench.common.key_sampler import KeySampler
from s3bench.common.payload import PayloadGenerator
from s3bench.common.workers import GetWorker, PutWorker, Worker
from s3bench.common.workload import WorkloadConfig
from s3bench.persistence.stats_collector import StatsCollector
from s3bench.systems.base import ObjectStore

logger = logging.getLogger(__name__)


class WorkerPool:
    """Starts every worker at once and waits for all of them.

    All workers share the store handle, the stats collector and the error
    log. Stats are only handed out after the join barrier, when the
    collector has been closed.
    """

    def __init__(
        self,
        store: ObjectStore,
        stats: Optional[StatsCollector] = None,
        errors: Optional[ErrorLog] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], int] = time.monotonic_ns,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        payload_factory: Optional[Callable[[int, random.Random], PayloadGenerator]] = None,
    ):
        """Initialize the worker pool.

        Args:
            store: Object store shared by all workers
            stats: Collector to append to (default: a fresh one)
            errors: Error sink (default: a fresh ErrorLog)
            rng: Parent random source; each worker gets its own child generator
            clock: Monotonic nanosecond clock used for timing
            sleep: Coroutine used for the empty-listing backoff
            payload_factory: Builds the payload generator for PUT worker ``i``
        """
        self.store = store
        self.stats = stats if stats is not None else StatsCollector()
        self.errors = errors if errors is not None else ErrorLog()
        self.rng = rng or random.Random()
        self.clock = clock
        self.sleep = sleep
        self.payload_factory = payload_factory or (lambda worker_id, rng: PayloadGenerator(rng))
        self.workers: List[Worker] = []

    def _child_rng(self) -> random.Random:
        return random.Random(self.rng.getrandbits(64))

    def _create_workers(self, config: WorkloadConfig) -> List[Worker]:
        workers: List[Worker] = []
        shared = dict(store=self.store, stats=self.stats, errors=self.errors,
                      config=config, clock=self.clock)

        for i in range(config.put_concurrency):
            workers.append(PutWorker(
                i, payload_generator=self.payload_factory(i, self._child_rng()), **shared
            ))

        for i in range(config.get_concurrency):
            sampler = KeySampler(
                rng=self._child_rng(),
                errors=self.errors,
                backoff=config.empty_listing_backoff,
                max_empty_listings=config.max_empty_listings,
                sleep=self.sleep,
            )
            workers.append(GetWorker(i, sampler=sampler, **shared))

        return workers

    async def run(self, config: WorkloadConfig) -> StatsCollector:
        """Run every worker to completion and return the closed stats collector."""
        if self.stats.closed:
            raise RuntimeError("WorkerPool already ran; create a new pool per run")

        self.workers = self._create_workers(config)
        logger.info(
            f"Starting {config.put_concurrency} PUT workers x {config.put_count} and "
            f"{config.get_concurrency} GET workers x {config.get_count}"
        )

        tasks = [asyncio.create_task(worker.run(), name=worker.name) for worker in self.workers]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        for worker, result in zip(self.workers, results):
            if isinstance(result, BaseException):
                logger.error(f"Worker {worker.name} fatal error: {result!r}")

        self.stats.close()
        logger.info(f"All workers finished: {len(self.stats)} stats, {len(self.errors)} errors")
        return self.stats
