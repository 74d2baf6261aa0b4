"""Seedable linear congruential random number generator."""


class SeededRandom:
    """LCG producing floats in [0, 1).

    The recurrence is ``seed = (seed * 1664525 + 1013904223) mod 2**32`` and
    every value is ``seed / 2**32``. Level layouts depend on this sequence
    being reproduced exactly, so do not swap in :mod:`random`.
    """

    MULTIPLIER = 1664525
    INCREMENT = 1013904223
    MODULUS = 2 ** 32

    def __init__(self, seed: int):
        self.seed = seed

    def next(self) -> float:
        """Advance the state and return the next value in [0, 1)."""
        self.seed = (self.seed * self.MULTIPLIER + self.INCREMENT) % self.MODULUS
        return self.seed / self.MODULUS

    def next_index(self, size: int) -> int:
        """Return ``floor(next() * size)``."""
        return int(self.next() * size)
