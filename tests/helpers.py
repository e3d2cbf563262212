from __future__ import annotations

import copy
from typing import Any, Iterable

SYMBOLS: dict[str, dict[str, Any]] = {
    "A": {"reward_multiplier": 5, "type": "standard"},
    "B": {"reward_multiplier": 3, "type": "standard"},
    "C": {"reward_multiplier": 2.5, "type": "standard"},
    "D": {"reward_multiplier": 2, "type": "standard"},
    "E": {"reward_multiplier": 1.2, "type": "standard"},
    "F": {"reward_multiplier": 1, "type": "standard"},
    "10x": {"reward_multiplier": 10, "type": "bonus", "impact": "multiply_reward"},
    "5x": {"reward_multiplier": 5, "type": "bonus", "impact": "multiply_reward"},
    "+1000": {"extra": 1000, "type": "bonus", "impact": "extra_bonus"},
    "+500": {"extra": 500, "type": "bonus", "impact": "extra_bonus"},
    "MISS": {"type": "bonus", "impact": "miss"},
}

SAME_SYMBOL_RULES: dict[str, dict[str, Any]] = {
    "same_symbol_3_times": {"reward_multiplier": 1, "when": "same_symbols", "count": 3, "group": "same_symbols"},
    "same_symbol_4_times": {"reward_multiplier": 1.5, "when": "same_symbols", "count": 4, "group": "same_symbols"},
}

LINEAR_RULES: dict[str, dict[str, Any]] = {
    "same_symbols_horizontally": {
        "reward_multiplier": 2,
        "when": "linear_symbols",
        "group": "horizontally_linear_symbols",
        "covered_areas": [
            ["0:0", "0:1", "0:2"],
            ["1:0", "1:1", "1:2"],
            ["2:0", "2:1", "2:2"],
        ],
    },
    "same_symbols_vertically": {
        "reward_multiplier": 2,
        "when": "linear_symbols",
        "group": "vertically_linear_symbols",
        "covered_areas": [
            ["0:0", "1:0", "2:0"],
            ["0:1", "1:1", "2:1"],
            ["0:2", "1:2", "2:2"],
        ],
    },
    "same_symbols_diagonally_left_to_right": {
        "reward_multiplier": 5,
        "when": "linear_symbols",
        "group": "ltr_diagonally_linear_symbols",
        "covered_areas": [["0:0", "1:1", "2:2"]],
    },
    "same_symbols_diagonally_right_to_left": {
        "reward_multiplier": 5,
        "when": "linear_symbols",
        "group": "rtl_diagonally_linear_symbols",
        "covered_areas": [["0:2", "1:1", "2:0"]],
    },
}

DEFAULT_BONUS_WEIGHTS = {"10x": 1, "5x": 2, "+1000": 3, "+500": 4, "MISS": 5}


def default_payload() -> dict[str, Any]:
    """A 3x3 configuration with realistic weights on every cell."""
    weights = {"A": 1, "B": 2, "C": 3, "D": 4, "E": 5, "F": 6}
    cells = [{"row": r, "column": c, "symbols": dict(weights)} for r in range(3) for c in range(3)]
    return {
        "columns": 3,
        "rows": 3,
        "symbols": copy.deepcopy(SYMBOLS),
        "probabilities": {
            "standard_symbols": cells,
            "bonus_symbols": {"symbols": dict(DEFAULT_BONUS_WEIGHTS)},
        },
        "win_combinations": copy.deepcopy({**SAME_SYMBOL_RULES, **LINEAR_RULES}),
    }


def forced_payload(
    grid: list[list[str]],
    *,
    rules: dict[str, dict[str, Any]] | None = None,
    bonus_weights: dict[str, int] | None = None,
) -> dict[str, Any]:
    """A configuration whose weights force ``grid`` before bonus injection."""
    cells = [
        {"row": r, "column": c, "symbols": {name: 1}}
        for r, row in enumerate(grid)
        for c, name in enumerate(row)
    ]
    probabilities: dict[str, Any] = {"standard_symbols": cells}
    if bonus_weights is not None:
        probabilities["bonus_symbols"] = {"symbols": dict(bonus_weights)}
    return {
        "columns": len(grid[0]),
        "rows": len(grid),
        "symbols": copy.deepcopy(SYMBOLS),
        "probabilities": probabilities,
        "win_combinations": copy.deepcopy(rules if rules is not None else SAME_SYMBOL_RULES),
    }


def forced_cell_draws(rows: int = 3, columns: int = 3) -> list[int]:
    """Draws consumed by single-symbol cell pickers."""
    return [0] * (rows * columns)


class ScriptedRandom:
    """RandomSource double that replays an exact draw sequence."""

    def __init__(self, draws: Iterable[int]) -> None:
        self._draws = list(draws)
        self.calls: list[tuple[str, int, int]] = []

    @property
    def remaining(self) -> int:
        return len(self._draws)

    def randbelow(self, n: int) -> int:
        value = self._next()
        assert 0 <= value < n, f"scripted draw {value} outside [0, {n})"
        self.calls.append(("randbelow", 0, n))
        return value

    def randint(self, a: int, b: int) -> int:
        value = self._next()
        assert a <= value <= b, f"scripted draw {value} outside [{a}, {b}]"
        self.calls.append(("randint", a, b))
        return value

    def _next(self) -> int:
        if not self._draws:
            raise AssertionError("scripted draws exhausted")
        return self._draws.pop(0)
