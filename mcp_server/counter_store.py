"""Shared integer counter guarded by an exclusive lock.

The lock is held only for the arithmetic itself. Nothing inside the critical
section awaits, so a task cancelled while queued for the lock never leaves a
half-applied change behind.
"""

from typing import Literal

import anyio

OverflowPolicy = Literal["wrap", "saturate", "error"]


class CounterOverflowError(OverflowError):
    """Raised under the ``error`` policy when a step would leave the counter's range."""

    def __init__(self, value: int, delta: int, minimum: int, maximum: int):
        self.value = value
        self.delta = delta
        self.minimum = minimum
        self.maximum = maximum
        direction = "increment" if delta > 0 else "decrement"
        super().__init__(f"Cannot {direction} counter at {value}: range is [{minimum}, {maximum}]")


class CounterStore:
    """Single signed counter with serialized increment, decrement and read."""

    def __init__(self, bits: int = 32, overflow_policy: OverflowPolicy = "wrap"):
        """Initialize the store at zero.

        Args:
            bits: Width of the signed counter (32 or 64)
            overflow_policy: What happens at the bounds: "wrap", "saturate" or "error"
        """
        if bits not in (32, 64):
            raise ValueError(f"Unsupported counter width: {bits}")
        if overflow_policy not in ("wrap", "saturate", "error"):
            raise ValueError(f"Unknown overflow policy: {overflow_policy}")

        self.bits = bits
        self.overflow_policy = overflow_policy
        self.minimum = -(1 << (bits - 1))
        self.maximum = (1 << (bits - 1)) - 1
        self._value = 0
        self._lock = anyio.Lock()

    async def increment(self) -> int:
        """Add one and return the new value."""
        return await self._apply(1)

    async def decrement(self) -> int:
        """Subtract one and return the new value."""
        return await self._apply(-1)

    async def read(self) -> int:
        """Return the current value without changing it."""
        async with self._lock:
            return self._value

    async def _apply(self, delta: int) -> int:
        async with self._lock:
            self._value = self._step(self._value, delta)
            return self._value

    def _step(self, value: int, delta: int) -> int:
        result = value + delta
        if self.minimum <= result <= self.maximum:
            return result

        if self.overflow_policy == "wrap":
            span = 1 << self.bits
            return (result - self.minimum) % span + self.minimum
        if self.overflow_policy == "saturate":
            return max(self.minimum, min(self.maximum, result))
        raise CounterOverflowError(value, delta, self.minimum, self.maximum)

    def __repr__(self) -> str:
        return f"CounterStore(value={self._value}, bits={self.bits}, overflow_policy={self.overflow_policy!r})"
