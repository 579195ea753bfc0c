"""Random Source: the single injectable source of randomness for every gate and pick.

Invariants:
    - Every probabilistic core function takes a RandomSource argument; none touch
      the global `random` module
    - chance(percent) clamps percent to 0..100; chance(0) is always False,
      chance(100) is always True
    - sample() draws without replacement and never returns more than len(items)

Design Decisions:
    - Protocol over ABC: tests pass scripted fakes without inheriting anything
    - SeededRandom wraps a private random.Random so a seed replays a whole match
"""

import random
from typing import Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """Structural contract for the random source threaded through core."""

    def uniform(self) -> float: ...
    def chance(self, percent: float) -> bool: ...
    def randint(self, lo: int, hi: int) -> int: ...
    def sample(self, items: Sequence[T], n: int) -> list[T]: ...


class SeededRandom:
    """Default RandomSource backed by its own random.Random instance."""

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def uniform(self) -> float:
        """Uniform float in [0, 1)."""
        return self._rng.random()

    def chance(self, percent: float) -> bool:
        """Weighted boolean: True with probability percent/100."""
        goal = max(0.0, min(100.0, float(percent)))
        if goal <= 0:
            return False
        if goal >= 100:
            return True
        return self.uniform() * 100 < goal

    def randint(self, lo: int, hi: int) -> int:
        """Uniform integer in [lo, hi]; collapses to lo when the range is empty."""
        if hi <= lo:
            return lo
        return lo + int(self.uniform() * (hi - lo + 1))

    def sample(self, items: Sequence[T], n: int) -> list[T]:
        """Pick n distinct items uniformly by shrinking a candidate list."""
        candidates = list(items)
        picked: list[T] = []
        for _ in range(min(n, len(candidates))):
            idx = int(self.uniform() * len(candidates))
            picked.append(candidates.pop(idx))
        return picked
