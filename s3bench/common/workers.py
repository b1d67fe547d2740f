"""
PUT and GET workers. Each worker runs its iterations strictly one after another.
"""

import asyncio
import logging
import time
from typing import Callable

from s3bench.common.error_sink import ErrorLog
from s3bench.common.key_sampler import KeySampler
from s3bench.common.payload import PayloadGenerator
from s3bench.common.workload import WorkloadConfig
from s3bench.configuration import PUT_KEY_TEMPLATE
from s3bench.persistence.record import OperationKind, Stat
from s3bench.persistence.stats_collector import StatsCollector
from s3bench.systems.base import ObjectStore
from s3bench.systems.errors import EmptyPrefixError, MissingBodyError, StoreError

logger = logging.getLogger(__name__)


class Worker:
    """State shared by both worker kinds."""

    kind: OperationKind

    def __init__(
        self,
        worker_id: int,
        store: ObjectStore,
        stats: StatsCollector,
        errors: ErrorLog,
        config: WorkloadConfig,
        clock: Callable[[], int] = time.monotonic_ns,
    ):
        self.worker_id = worker_id
        self.store = store
        self.stats = stats
        self.errors = errors
        self.config = config
        self.clock = clock
        self.completed = 0

    @property
    def name(self) -> str:
        return f"{self.kind.value}-{self.worker_id}"

    def _record(self, key: str, start_ns: int, end_ns: int, byte_size: int) -> Stat:
        stat = Stat(kind=self.kind, start_ns=start_ns, end_ns=end_ns, byte_size=byte_size, key=key)
        self.stats.add(stat)
        self.completed += 1
        if self.config.verbose:
            logger.info(f"{self.kind.value} key {key} takes {stat.elapsed_ms}ms")
        return stat

    async def run(self) -> int:
        raise NotImplementedError


class PutWorker(Worker):
    """Writes ``put_count`` random payloads, one at a time.

    A failed PUT is recorded and skipped, never retried.
    """

    kind = OperationKind.PUT

    def __init__(self, *args, payload_generator: PayloadGenerator, **kwargs):
        super().__init__(*args, **kwargs)
        self.payload_generator = payload_generator

    async def run(self) -> int:
        loop = asyncio.get_running_loop()
        for _ in range(self.config.put_count):
            # Large buffers are built off the event loop
            payload = await loop.run_in_executor(None, self.payload_generator.generate)
            key = PUT_KEY_TEMPLATE.format(prefix=self.config.prefix, size=len(payload))

            start_ns = self.clock()
            try:
                await self.store.put(self.config.bucket, key, payload)
            except StoreError as e:
                self.errors.record("put", key, e)
                continue
            end_ns = self.clock()

            self._record(key, start_ns, end_ns, len(payload))

        logger.debug(f"Worker {self.name} finished: {self.completed}/{self.config.put_count} puts")
        return self.completed


class GetWorker(Worker):
    """Reads random existing keys until ``get_count`` reads have succeeded.

    Sampling -> Reading -> Recorded, or back to Sampling on any failure.
    Failed attempts never count toward ``get_count``.
    """

    kind = OperationKind.GET

    def __init__(self, *args, sampler: KeySampler, **kwargs):
        super().__init__(*args, **kwargs)
        self.sampler = sampler

    async def run(self) -> int:
        bucket, prefix = self.config.bucket, self.config.prefix
        while self.completed < self.config.get_count:
            try:
                key = await self.sampler.sample(self.store, bucket, prefix)
            except EmptyPrefixError as e:
                self.errors.record("sample", prefix, e)
                logger.error(
                    f"Worker {self.name} giving up after "
                    f"{self.completed}/{self.config.get_count} gets"
                )
                break
            except StoreError as e:
                self.errors.record("sample", prefix, e)
                await self.sampler.sleep(self.sampler.backoff)
                continue

            start_ns = self.clock()
            try:
                body = await self.store.get(bucket, key)
                if body is None:
                    raise MissingBodyError(f"No body in response for {key}")
                data = await body.read()
            except StoreError as e:
                self.errors.record("get", key, e)
                continue
            end_ns = self.clock()

            self._record(key, start_ns, end_ns, len(data))

        logger.debug(f"Worker {self.name} finished: {self.completed}/{self.config.get_count} gets")
        return self.completed
