from __future__ import annotations

import math
from typing import Mapping, Sequence

from scratchgame.contracts import GameConfig


class RewardCalculator:
    """Multiplies within a symbol, sums across symbols."""

    def __init__(self, config: GameConfig) -> None:
        self._config = config

    def compute(self, bet: float, wins: Mapping[int, Sequence[int]]) -> float:
        symbols, rules = self._config.symbols, self._config.rules
        return sum(
            (
                bet * symbols[symbol].reward_multiplier * math.prod(rules[r].reward_multiplier for r in applied)
                for symbol, applied in wins.items()
            ),
            0.0,
        )
