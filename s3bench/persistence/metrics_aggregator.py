"""
Aggregation of operation stats into the per-kind summary report.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Union

import pandas as pd

from s3bench.configuration import BYTES_PER_MB
from s3bench.persistence.record import OperationKind, Stat
from s3bench.persistence.stats_collector import StatsCollector

logger = logging.getLogger(__name__)

STAT_COLUMNS = ['kind', 'key', 'start_ns', 'end_ns', 'elapsed_ms', 'byte_size']


@dataclass(frozen=True)
class OperationSummary:
    count: int = 0
    total_time_ms: int = 0
    avg_time_ms: int = 0
    total_size_bytes: int = 0

    @property
    def total_size_mb(self) -> int:
        return self.total_size_bytes // BYTES_PER_MB


@dataclass(frozen=True)
class SummaryReport:
    put: OperationSummary
    get: OperationSummary

    def for_kind(self, kind: OperationKind) -> OperationSummary:
        return self.put if kind is OperationKind.PUT else self.get


def stats_to_dataframe(stats: Iterable[Stat]) -> pd.DataFrame:
    """Convert stats to a DataFrame, one row per operation."""
    rows = [
        {
            'kind': stat.kind.value,
            'key': stat.key,
            'start_ns': stat.start_ns,
            'end_ns': stat.end_ns,
            'elapsed_ms': stat.elapsed_ms,
            'byte_size': stat.byte_size,
        }
        for stat in stats
    ]
    return pd.DataFrame(rows, columns=STAT_COLUMNS)


def _summarize_partition(data: pd.DataFrame) -> OperationSummary:
    count = len(data)
    if count == 0:
        return OperationSummary()

    total_time_ms = int(data['elapsed_ms'].sum())
    return OperationSummary(
        count=count,
        total_time_ms=total_time_ms,
        avg_time_ms=total_time_ms // count,
        total_size_bytes=int(data['byte_size'].sum()),
    )


def summarize(stats: Union[StatsCollector, Iterable[Stat]]) -> SummaryReport:
    """Partition stats by operation kind and compute the summary.

    Pure function of its input: a kind with no stats reports zeros.
    """
    if isinstance(stats, StatsCollector):
        stats = stats.snapshot()

    df = stats_to_dataframe(stats)
    summaries = {
        kind: _summarize_partition(df[df['kind'] == kind.value])
        for kind in OperationKind
    }
    return SummaryReport(put=summaries[OperationKind.PUT], get=summaries[OperationKind.GET])


def format_summary_line(label: str, summary: OperationSummary) -> str:
    return (
        f"{label} stats: count={summary.count}, "
        f"total_time={summary.total_time_ms}ms, "
        f"avg_time={summary.avg_time_ms}ms, "
        f"total_size={summary.total_size_mb} MB"
    )


def format_report(report: SummaryReport) -> str:
    """Render the two-line PUT/GET summary."""
    return "\n".join([
        format_summary_line("PUT", report.put),
        format_summary_line("GET", report.get),
    ])
