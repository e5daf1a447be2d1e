"""
SplitMix64 pseudo-random generator.

Seeds are derived from a SHA-256 of the caller's key parts, so the same
key always yields the same stream on every platform and interpreter.
"""
import hashlib
from typing import Sequence, TypeVar

T = TypeVar("T")

_MASK64 = (1 << 64) - 1


def seed_from(*parts) -> int:
    """Stable 64-bit seed from arbitrary key parts (floats use 6 decimals)."""
    normalized = []
    for part in parts:
        if isinstance(part, float):
            normalized.append(f"{part:.6f}")
        else:
            normalized.append(str(part))
    digest = hashlib.sha256("|".join(normalized).encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


class SplitMix64:
    def __init__(self, seed: int):
        self.state = seed & _MASK64

    def next_u64(self) -> int:
        self.state = (self.state + 0x9E3779B97F4A7C15) & _MASK64
        z = self.state
        z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK64
        z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK64
        return z ^ (z >> 31)

    def random(self) -> float:
        """Uniform float in [0, 1) with 53 bits of precision."""
        return (self.next_u64() >> 11) / float(1 << 53)

    def uniform(self, low: float, high: float) -> float:
        return low + (high - low) * self.random()

    def randint(self, low: int, high: int) -> int:
        """Uniform int in [low, high], both ends included."""
        return low + int(self.random() * (high - low + 1))

    def choice(self, items: Sequence[T]) -> T:
        return items[int(self.random() * len(items))]

    @classmethod
    def for_key(cls, *parts) -> "SplitMix64":
        return cls(seed_from(*parts))
