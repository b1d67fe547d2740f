"""
Shared append-only collection of operation stats.
"""

import threading
import logging
from typing import Tuple

from s3bench.persistence.record import Stat

logger = logging.getLogger(__name__)


class StatsCollector:
    """Thread-safe append-only sink for Stat records.

    Workers only ever call add(). The pool calls close() after every worker
    has finished; from then on the collection is read-only.
    """

    def __init__(self):
        self._records = []
        self._closed = False
        self.lock = threading.Lock()

    def add(self, stat: Stat) -> None:
        """Append one stat. Raises RuntimeError once the collection is closed."""
        with self.lock:
            if self._closed:
                raise RuntimeError("StatsCollector is closed; no further stats accepted")
            self._records.append(stat)

    def close(self) -> None:
        with self.lock:
            self._closed = True
        logger.debug(f"Closed stats collection with {len(self._records)} records")

    @property
    def closed(self) -> bool:
        return self._closed

    def snapshot(self) -> Tuple[Stat, ...]:
        """Immutable copy of everything recorded so far."""
        with self.lock:
            return tuple(self._records)

    def __len__(self) -> int:
        with self.lock:
            return len(self._records)
