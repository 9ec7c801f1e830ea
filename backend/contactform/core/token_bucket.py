"""Token Bucket - steady-rate admission with a small burst allowance.

Invariants:
    - tokens never exceed capacity and never go below zero
    - try_consume takes the clock as an argument (no time.* calls here)
"""

from dataclasses import dataclass, field


@dataclass
class TokenBucket:
    """One client's bucket. Starts full."""
    capacity: int
    refill_per_second: float
    tokens: float = field(init=False)
    updated_at: float | None = None

    def __post_init__(self):
        if self.capacity < 1:
            raise ValueError("capacity must be at least 1")
        if self.refill_per_second <= 0:
            raise ValueError("refill_per_second must be positive")
        self.tokens = float(self.capacity)

    def _refill(self, now: float) -> None:
        if self.updated_at is None:
            self.updated_at = now
            return
        if now > self.updated_at:
            elapsed = now - self.updated_at
            self.tokens = min(
                float(self.capacity),
                self.tokens + elapsed * self.refill_per_second,
            )
            self.updated_at = now

    def try_consume(self, now: float) -> float:
        """Take one token. Returns 0.0 if admitted, else seconds until one is free."""
        self._refill(now)
        if self.tokens >= 1.0:
            self.tokens -= 1.0
            return 0.0
        return (1.0 - self.tokens) / self.refill_per_second
