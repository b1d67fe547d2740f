"""
Basic data structures for load generator results.
"""

from dataclasses import dataclass
from enum import Enum

from s3bench.configuration import NS_PER_MS


class OperationKind(Enum):
    PUT = "put"
    GET = "get"


@dataclass(frozen=True)
class Stat:
    """Timing and size of one completed operation.

    Timestamps are monotonic nanoseconds so elapsed time is exact integer math.
    """

    kind: OperationKind
    start_ns: int
    end_ns: int
    byte_size: int
    key: str = ""

    def __post_init__(self):
        if self.end_ns < self.start_ns:
            raise ValueError(f"end_ns ({self.end_ns}) precedes start_ns ({self.start_ns})")
        if self.byte_size < 0:
            raise ValueError(f"byte_size must be non-negative, got {self.byte_size}")

    @property
    def elapsed_ms(self) -> int:
        """Elapsed wall time, truncated to whole milliseconds."""
        return (self.end_ns - self.start_ns) // NS_PER_MS
