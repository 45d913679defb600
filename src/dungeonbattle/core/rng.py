"""Injectable RNG wrapper built on top of random.Random."""
from __future__ import annotations

from random import Random
from typing import MutableSequence, Sequence, TypeVar

T_co = TypeVar("T_co")


class RNG:
    """Wrapper around random.Random shared by every battle component.

    Every draw except ``shuffle`` is derived from ``random()``, so a subclass that
    overrides ``random()`` controls all outcomes (turn tiebreaks, variance, accuracy,
    crits and weighted picks).
    """

    def __init__(self, seed: int | None = None) -> None:
        self._random = Random(seed)

    def random(self) -> float:
        """Return the next random floating point number in the range [0.0, 1.0)."""
        return self._random.random()

    def uniform(self, a: float, b: float) -> float:
        """Return a random float N such that a <= N <= b."""
        return a + (b - a) * self.random()

    def randint(self, a: int, b: int) -> int:
        """Return a random integer N such that a <= N <= b."""
        if b < a:
            raise ValueError("randint upper bound must not be below the lower bound.")
        return a + self.index(b - a + 1)

    def index(self, length: int) -> int:
        """Return a uniformly random index into a sequence of the given length."""
        if length <= 0:
            raise ValueError("Cannot pick an index from an empty range.")
        return min(length - 1, int(self.random() * length))

    def choice(self, seq: Sequence[T_co]) -> T_co:
        """Return a random element from the non-empty sequence."""
        if not seq:
            raise ValueError("Cannot choose from an empty sequence.")
        return seq[self.index(len(seq))]

    def weighted_index(self, weights: Sequence[float]) -> int:
        """Return an index drawn proportionally to the given non-negative weights."""
        if not weights:
            raise ValueError("Cannot choose from an empty sequence.")
        total = sum(weights)
        if total <= 0:
            return self.index(len(weights))
        roll = self.random() * total
        for idx, weight in enumerate(weights):
            roll -= weight
            if roll < 0:
                return idx
        return len(weights) - 1

    def shuffle(self, seq: MutableSequence[T_co]) -> None:
        """Shuffle the sequence in-place."""
        self._random.shuffle(seq)
