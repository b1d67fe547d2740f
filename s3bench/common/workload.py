"""
Per-run workload parameters.
"""

from dataclasses import dataclass
from typing import Optional

from s3bench.configuration import (
    DEFAULT_GET_CONCURRENCY,
    DEFAULT_GET_COUNT_PER_THREAD,
    DEFAULT_PUT_CONCURRENCY,
    DEFAULT_PUT_COUNT_PER_THREAD,
    EMPTY_LISTING_BACKOFF_SECONDS,
    MAX_EMPTY_LISTINGS,
)


@dataclass(frozen=True)
class WorkloadConfig:
    """Read-only parameters shared by every worker of a run."""

    bucket: str
    prefix: str
    put_concurrency: int = DEFAULT_PUT_CONCURRENCY
    put_count: int = DEFAULT_PUT_COUNT_PER_THREAD
    get_concurrency: int = DEFAULT_GET_CONCURRENCY
    get_count: int = DEFAULT_GET_COUNT_PER_THREAD
    verbose: bool = False
    max_empty_listings: Optional[int] = MAX_EMPTY_LISTINGS
    empty_listing_backoff: float = EMPTY_LISTING_BACKOFF_SECONDS

    def __post_init__(self):
        if not self.bucket:
            raise ValueError("bucket must not be empty")
        for name in ("put_concurrency", "put_count", "get_concurrency", "get_count"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
        if self.empty_listing_backoff < 0:
            raise ValueError("empty_listing_backoff must be non-negative")
        if self.max_empty_listings is not None and self.max_empty_listings < 1:
            raise ValueError("max_empty_listings must be at least 1")

    @property
    def total_workers(self) -> int:
        return self.put_concurrency + self.get_concurrency
