from __future__ import annotations

import random

from scratchgame.contracts import RandomSource


class PythonRandomSource(RandomSource):
    """Injected randomness source for gameplay and test determinism."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def randbelow(self, n: int) -> int:
        if n <= 0:
            raise ValueError(f"randbelow bound must be positive, got {n}")
        return self._rng.randrange(n)

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)


def gameplay_random() -> PythonRandomSource:
    return PythonRandomSource(seed=None)


def seeded_random(seed: int) -> PythonRandomSource:
    return PythonRandomSource(seed=seed)
