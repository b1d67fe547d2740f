"""
Structured error sink for failures observed by workers.
"""

import logging
import threading
from collections import Counter, deque
from dataclasses import dataclass
from typing import Deque, Optional, Tuple

from s3bench.configuration import MAX_ERROR_RECORDS
from s3bench.systems.errors import TransportDispatchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErrorRecord:
    operation: str
    target: str
    error: Exception
    transient: bool


class ErrorLog:
    """Logs every failure and keeps the most recent ones for inspection.

    Only the last ``max_records`` entries are retained; totals per operation
    and exception type cover the whole run. Errors are diagnostics only;
    nothing in the run branches on them.
    """

    def __init__(self, max_records: int = MAX_ERROR_RECORDS):
        self.records: Deque[ErrorRecord] = deque(maxlen=max_records)
        self.totals: Counter = Counter()
        self.lock = threading.Lock()

    def record(self, operation: str, target: str, error: Exception) -> ErrorRecord:
        transient = isinstance(error, TransportDispatchError)
        entry = ErrorRecord(operation=operation, target=target, error=error, transient=transient)

        if transient:
            logger.warning(f"Transport failure during {operation} {target}: {error}")
        else:
            logger.error(f"Error during {operation} {target}: {error}")

        with self.lock:
            self.records.append(entry)
            self.totals[(operation, type(error))] += 1
        return entry

    def count(self, operation: Optional[str] = None, error_type: Optional[type] = None) -> int:
        """Number of errors over the whole run, optionally filtered by operation and exception type."""
        with self.lock:
            items: Tuple = tuple(self.totals.items())
        return sum(
            total for (op, cls), total in items
            if (operation is None or op == operation)
            and (error_type is None or issubclass(cls, error_type))
        )

    def __len__(self) -> int:
        with self.lock:
            return sum(self.totals.values())
