"""
Stats records, collection, aggregation and export.
"""

from .record import OperationKind, Stat
from .stats_collector import StatsCollector

__all__ = ['OperationKind', 'Stat', 'StatsCollector']
