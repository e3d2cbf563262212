from __future__ import annotations

import logging
from collections import Counter
from functools import reduce
from typing import Iterator

from scratchgame.contracts import GameConfig, SymbolGrid, WinCondition, WinMap, WinRule

logger = logging.getLogger("scratchgame.engine")

Candidate = tuple[int, int]


class WinDetector:
    """Finds the winning rules per standard symbol on a final matrix."""

    def __init__(self, config: GameConfig) -> None:
        self._config = config
        self._standard = frozenset(s.index for s in config.symbols if s.is_standard)
        self._same_symbol_rules = [r for r in config.rules if r.condition is WinCondition.SAME_SYMBOLS]
        self._linear_rules = [r for r in config.rules if r.condition is WinCondition.LINEAR_SYMBOLS]

    def detect(self, matrix: SymbolGrid) -> WinMap:
        by_symbol: dict[int, list[int]] = {}
        for symbol, rule_index in self.candidates(matrix):
            by_symbol.setdefault(symbol, []).append(rule_index)
        wins = {symbol: resolve_groups(self._config.rules, indices) for symbol, indices in by_symbol.items()}
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("detected wins: %s", self._config.describe_wins(wins))
        return wins

    def candidates(self, matrix: SymbolGrid) -> Iterator[Candidate]:
        """Yields (symbol, rule) pairs: same-symbol rules first, then linear rules."""
        tally = Counter(symbol for row in matrix for symbol in row if symbol in self._standard)
        for rule in self._same_symbol_rules:
            for symbol, count in tally.items():
                if count >= rule.count:
                    yield symbol, rule.index
        for rule in self._linear_rules:
            for area in rule.covered_areas:
                symbol = self._matching_symbol(matrix, area)
                if symbol is not None:
                    yield symbol, rule.index

    def _matching_symbol(self, matrix: SymbolGrid, area: tuple[tuple[int, int], ...]) -> int | None:
        first_row, first_column = area[0]
        symbol = matrix[first_row][first_column]
        if symbol not in self._standard:
            return None
        if all(matrix[r][c] == symbol for r, c in area[1:]):
            return symbol
        return None


def resolve_groups(rules: tuple[WinRule, ...], rule_indices: list[int]) -> tuple[int, ...]:
    """Folds candidate rules for one symbol into its group-exclusive rule list."""

    def admit(applied: tuple[int, ...], rule_index: int) -> tuple[int, ...]:
        rule = rules[rule_index]
        holder = next((i for i in applied if rules[i].group_index == rule.group_index), None)
        if holder is None:
            return applied + (rule_index,)
        if rule.reward_multiplier > rules[holder].reward_multiplier:
            return tuple(i for i in applied if i != holder) + (rule_index,)
        return applied

    return reduce(admit, rule_indices, ())
