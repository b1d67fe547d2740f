"""
Random payloads for PUT workloads.
"""

import random
from typing import Optional

from s3bench.configuration import MAX_PAYLOAD_BYTES, MIN_PAYLOAD_BYTES


class PayloadGenerator:
    """Produces buffers of random length filled with random bytes.

    Each generator owns its random source; give every worker its own
    generator instead of sharing one across threads.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        min_size: int = MIN_PAYLOAD_BYTES,
        max_size: int = MAX_PAYLOAD_BYTES,
    ):
        if min_size < 0 or max_size <= min_size:
            raise ValueError(f"Invalid payload bounds: [{min_size}, {max_size})")
        self.rng = rng or random.Random()
        self.min_size = min_size
        self.max_size = max_size

    def draw_size(self) -> int:
        """Length in [min_size, max_size)."""
        return self.rng.randrange(self.min_size, self.max_size)

    def generate(self) -> bytes:
        return self.rng.randbytes(self.draw_size())
