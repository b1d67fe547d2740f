"""
Driver for one load run: workers, join, aggregation and report.
"""

import logging
from typing import Optional

from s3bench.common.error_sink import ErrorLog
from s3bench.common.worker_pool import WorkerPool
from s3bench.common.workload import WorkloadConfig
from s3bench.configuration import DEFAULT_PARQUET_PREFIX
from s3bench.persistence.metrics_aggregator import SummaryReport, format_report, summarize
from s3bench.persistence.parquet import ParquetPersistence
from s3bench.systems.base import ObjectStore

logger = logging.getLogger(__name__)


class LoadRunner:
    """Runs the configured PUT/GET workload against a store and reports on it."""

    def __init__(
        self,
        store: ObjectStore,
        config: WorkloadConfig,
        output_dir: Optional[str] = None,
        pool: Optional[WorkerPool] = None,
    ):
        self.store = store
        self.config = config
        self.output_dir = output_dir
        self.pool = pool if pool is not None else WorkerPool(store, errors=ErrorLog())
        self.parquet_file: Optional[str] = None

    async def run(self) -> SummaryReport:
        logger.info(
            f"Load run against bucket '{self.config.bucket}' prefix '{self.config.prefix}'"
        )

        async with self.store:
            stats = await self.pool.run(self.config)

        report = summarize(stats)
        print(format_report(report))

        errors = self.pool.errors
        if len(errors):
            logger.warning(
                f"{len(errors)} errors during run "
                f"({errors.count(operation='put')} put, {errors.count(operation='get')} get, "
                f"{errors.count(operation='list') + errors.count(operation='sample')} listing)"
            )

        if self.output_dir:
            self.parquet_file = ParquetPersistence(self.output_dir).save_to_file(
                stats.snapshot(), DEFAULT_PARQUET_PREFIX
            )
            if self.parquet_file:
                logger.info(f"Detailed results saved to: {self.parquet_file}")

        return report
