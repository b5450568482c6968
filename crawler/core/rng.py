"""
Seeded random stream shared by every component of a simulation.
"""

import random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


class RNG(random.Random):
    """Seeded RNG to keep deterministic behavior."""

    def rand_int(self, minimum: int, maximum: int) -> int:
        """Returns an integer in [minimum, maximum], both inclusive."""
        return self.randint(minimum, maximum)

    def chance(self, probability: float) -> bool:
        """Returns True with the given probability."""
        return self.random() < probability

    def pick(self, items: Sequence[T]) -> T:
        """Picks one element of a non-empty sequence."""
        return items[int(self.random() * len(items))]


def new_rng(seed: int | None = None) -> RNG:
    rng = RNG()
    rng.seed(seed)
    return rng
