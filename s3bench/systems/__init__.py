"""
Object store implementations.
"""

from .base import BytesBody, ListPage, ObjectBody, ObjectDescriptor, ObjectStore
from .errors import (
    EmptyPrefixError,
    MissingBodyError,
    StoreError,
    StoreOperationError,
    TransportDispatchError,
)

__all__ = [
    'BytesBody',
    'ListPage',
    'ObjectBody',
    'ObjectDescriptor',
    'ObjectStore',
    'EmptyPrefixError',
    'MissingBodyError',
    'StoreError',
    'StoreOperationError',
    'TransportDispatchError',
]
