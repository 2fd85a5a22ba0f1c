"""Per-record delay strategies used by the seeding pipeline.

The random delay stands in for variable-latency upstream work so concurrent
inserts interleave; it is not a rate limiter.
"""

import random


class UniformRandomDelay:
    def __init__(self, min_ms: int = 300, max_ms: int = 1000, rng: random.Random | None = None) -> None:
        if min_ms < 0 or max_ms < 0:
            raise ValueError("Delay bounds must be non-negative")
        if min_ms >= max_ms:
            raise ValueError(f"min_ms ({min_ms}) must be lower than max_ms ({max_ms})")
        self._min_ms = min_ms
        self._max_ms = max_ms
        self._rng = rng or random.Random()

    def next_delay(self) -> float:
        """Uniform integer milliseconds in [min_ms, max_ms), returned as seconds."""
        return self._rng.randrange(self._min_ms, self._max_ms) / 1000


class NoDelay:
    def next_delay(self) -> float:
        return 0.0
