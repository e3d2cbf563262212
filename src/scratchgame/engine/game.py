from __future__ import annotations

import logging

from scratchgame.config.validation import is_number
from scratchgame.contracts import GameConfig, InvalidBetError, RandomSource, RoundResult, SymbolDef
from scratchgame.engine.detector import WinDetector
from scratchgame.engine.generator import MatrixGenerator
from scratchgame.engine.reward import RewardCalculator

logger = logging.getLogger("scratchgame.engine")


class GameEngine:
    """Plays single rounds: generate, detect, reward, then at most one bonus.

    The random source is owned by this engine; do not share one engine across
    threads without external locking.
    """

    def __init__(
        self,
        config: GameConfig,
        random_source: RandomSource,
        *,
        generator: MatrixGenerator | None = None,
        detector: WinDetector | None = None,
        calculator: RewardCalculator | None = None,
    ) -> None:
        self._config = config
        self._generator = generator or MatrixGenerator(config, random_source)
        self._detector = detector or WinDetector(config)
        self._calculator = calculator or RewardCalculator(config)

    @property
    def config(self) -> GameConfig:
        return self._config

    def play(self, bet: float) -> RoundResult:
        self.validate_bet(bet)
        generated = self._generator.generate()
        wins = self._detector.detect(generated.matrix)
        reward = self._calculator.compute(bet, wins)

        bonus = self._first_bonus(generated.bonus_symbols)
        applied_bonus: str | None = None
        if reward > 0 and bonus is not None and not bonus.is_miss:
            base = reward
            reward = bonus.apply_impact(reward)
            applied_bonus = bonus.name
            logger.debug("bonus %s applied: %s -> %s", bonus.name, base, reward)

        return RoundResult(
            matrix=self._config.symbol_names(generated.matrix),
            reward=reward,
            applied_winning_combinations=self._config.describe_wins(wins),
            applied_bonus_symbol=applied_bonus,
        )

    @staticmethod
    def validate_bet(bet: float) -> None:
        if not is_number(bet) or bet <= 0:
            raise InvalidBetError(bet)

    def _first_bonus(self, injected: list[int]) -> SymbolDef | None:
        if not injected:
            return None
        return self._config.symbols[injected[0]]
