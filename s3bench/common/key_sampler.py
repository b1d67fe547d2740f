"""
Random key selection for GET workloads via paginated listing.
"""

import asyncio
import logging
import random
from typing import Awaitable, Callable, List, Optional

from s3bench.common.error_sink import ErrorLog
from s3bench.configuration import (
    EMPTY_LISTING_BACKOFF_SECONDS,
    LISTING_RETRY_DELAY_SECONDS,
    MAX_EMPTY_LISTINGS,
)
from s3bench.systems.base import ObjectDescriptor, ObjectStore
from s3bench.systems.errors import EmptyPrefixError, TransportDispatchError

logger = logging.getLogger(__name__)


class KeySampler:
    """Picks an existing key under a prefix uniformly at random.

    An empty listing is not an error: the sampler sleeps for ``backoff``
    seconds and lists again. With ``max_empty_listings`` set, it gives up
    after that many consecutive empty listings and raises EmptyPrefixError;
    with None it waits for the prefix to be populated indefinitely.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        errors: Optional[ErrorLog] = None,
        backoff: float = EMPTY_LISTING_BACKOFF_SECONDS,
        max_empty_listings: Optional[int] = MAX_EMPTY_LISTINGS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        retry_delay: float = LISTING_RETRY_DELAY_SECONDS,
    ):
        if max_empty_listings is not None and max_empty_listings < 1:
            raise ValueError(f"max_empty_listings must be >= 1, got {max_empty_listings}")
        self.rng = rng or random.Random()
        self.errors = errors if errors is not None else ErrorLog()
        self.backoff = backoff
        self.max_empty_listings = max_empty_listings
        self.sleep = sleep
        self.retry_delay = retry_delay

    async def list_all(self, store: ObjectStore, bucket: str, prefix: str) -> List[ObjectDescriptor]:
        """List every object under prefix, following continuation tokens.

        A transport failure re-issues the same page after ``retry_delay``
        seconds. Any other StoreError abandons the pass and propagates.
        """
        objects: List[ObjectDescriptor] = []
        token = None
        while True:
            try:
                page = await store.list_objects_page(bucket, prefix, token)
            except TransportDispatchError as e:
                self.errors.record("list", prefix, e)
                await self.sleep(self.retry_delay)
                continue

            objects.extend(page.objects)
            if page.next_token is None:
                return objects
            token = page.next_token

    async def sample(self, store: ObjectStore, bucket: str, prefix: str) -> str:
        empty_listings = 0
        while True:
            candidates = await self.list_all(store, bucket, prefix)
            if candidates:
                return self.rng.choice(candidates).key

            empty_listings += 1
            if self.max_empty_listings is not None and empty_listings >= self.max_empty_listings:
                raise EmptyPrefixError(prefix, empty_listings)

            logger.debug(f"No objects under '{prefix}' yet, retrying in {self.backoff}s")
            await self.sleep(self.backoff)
