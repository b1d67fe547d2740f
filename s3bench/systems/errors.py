"""
Error taxonomy shared by object store implementations and workers.
"""

from typing import Optional


class StoreError(Exception):
    """Base class for every failure reported by an object store."""


class TransportDispatchError(StoreError):
    """The request never got a usable answer: connection refused, reset, timed out."""


class StoreOperationError(StoreError):
    """The store answered with an error (access denied, no such bucket, ...)."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.code = code


class MissingBodyError(StoreError):
    """A GET succeeded but carried no payload."""


class EmptyPrefixError(StoreError):
    """Listing a prefix stayed empty for more attempts than allowed."""

    def __init__(self, prefix: str, attempts: int):
        super().__init__(f"No objects under prefix '{prefix}' after {attempts} listings")
        self.prefix = prefix
        self.attempts = attempts
