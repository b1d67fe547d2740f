"""
Abstract object store interface consumed by the load generator.
"""

from abc import ABC, abstractmethod
from typing import List, NamedTuple, Optional


class ObjectDescriptor(NamedTuple):
    """One entry of a listing page."""

    key: str
    size: int = 0


class ListPage(NamedTuple):
    """A single listing response; next_token is None on the last page."""

    objects: List[ObjectDescriptor]
    next_token: Optional[str] = None


class ObjectBody(ABC):
    """Streamed body of a GET response."""

    @abstractmethod
    async def read(self) -> bytes:
        """Drain the remaining body into memory."""


class BytesBody(ObjectBody):
    """Body backed by an in-memory buffer."""

    def __init__(self, data: bytes):
        self._data = data

    async def read(self) -> bytes:
        return self._data


class ObjectStore(ABC):
    """Bucket/key/list capability shared read-only by all workers.

    Implementations must be safe to call from many concurrent tasks and must
    raise only StoreError subclasses (see systems.errors).
    """

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None

    @abstractmethod
    async def put(self, bucket: str, key: str, body: bytes) -> None:
        """Write body under key."""

    @abstractmethod
    async def get(self, bucket: str, key: str) -> Optional[ObjectBody]:
        """Start reading key. Returns None when the response has no body."""

    @abstractmethod
    async def list_objects_page(
        self, bucket: str, prefix: str, continuation_token: Optional[str] = None
    ) -> ListPage:
        """Fetch one page of keys under prefix."""
