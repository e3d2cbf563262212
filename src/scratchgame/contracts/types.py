from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Protocol

Coordinate = tuple[int, int]
SymbolGrid = list[list[int]]
WinMap = dict[int, tuple[int, ...]]


class SymbolKind(str, Enum):
    STANDARD = "standard"
    BONUS = "bonus"


class BonusImpact(str, Enum):
    MULTIPLY_REWARD = "multiply_reward"
    EXTRA_BONUS = "extra_bonus"
    MISS = "miss"


class WinCondition(str, Enum):
    SAME_SYMBOLS = "same_symbols"
    LINEAR_SYMBOLS = "linear_symbols"


class RandomSource(Protocol):
    def randbelow(self, n: int) -> int: ...

    def randint(self, a: int, b: int) -> int: ...


@dataclass(frozen=True, slots=True)
class SymbolDef:
    index: int
    name: str
    kind: SymbolKind
    reward_multiplier: float = 1.0
    impact: BonusImpact | None = None
    extra: float = 0.0

    @property
    def is_standard(self) -> bool:
        return self.kind is SymbolKind.STANDARD

    @property
    def is_miss(self) -> bool:
        return self.impact is BonusImpact.MISS

    def apply_impact(self, reward: float) -> float:
        if self.impact is BonusImpact.MULTIPLY_REWARD:
            return reward * self.reward_multiplier
        if self.impact is BonusImpact.EXTRA_BONUS:
            return reward + self.extra
        return reward


@dataclass(frozen=True, slots=True)
class CellWeights:
    row: int
    column: int
    weights: Mapping[int, int]


@dataclass(frozen=True, slots=True)
class WinRule:
    index: int
    rule_id: str
    condition: WinCondition
    reward_multiplier: float
    group: str
    group_index: int
    count: int | None = None
    covered_areas: tuple[tuple[Coordinate, ...], ...] = ()


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Validated configuration with names resolved to index handles."""

    rows: int
    columns: int
    symbols: tuple[SymbolDef, ...]
    standard_weights: tuple[CellWeights, ...]
    bonus_weights: Mapping[str, int] | None
    rules: tuple[WinRule, ...]
    _by_name: Mapping[str, int] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self._by_name:
            object.__setattr__(self, "_by_name", {s.name: s.index for s in self.symbols})

    def symbol_index(self, name: str) -> int:
        try:
            return self._by_name[name]
        except KeyError:
            raise KeyError(f"unknown symbol '{name}'") from None

    def find_symbol(self, name: str) -> SymbolDef | None:
        index = self._by_name.get(name)
        return None if index is None else self.symbols[index]

    def symbol_names(self, grid: SymbolGrid) -> list[list[str]]:
        return [[self.symbols[index].name for index in row] for row in grid]

    def encode_matrix(self, names: list[list[str]]) -> SymbolGrid:
        return [[self.symbol_index(name) for name in row] for row in names]

    def describe_wins(self, wins: WinMap) -> dict[str, list[str]]:
        return {
            self.symbols[symbol].name: [self.rules[rule].rule_id for rule in rules]
            for symbol, rules in wins.items()
        }


@dataclass(slots=True)
class GenerationResult:
    matrix: SymbolGrid
    bonus_symbols: list[int]


@dataclass(frozen=True, slots=True)
class RoundResult:
    matrix: list[list[str]]
    reward: float
    applied_winning_combinations: dict[str, list[str]]
    applied_bonus_symbol: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "matrix": [list(row) for row in self.matrix],
            "reward": self.reward,
            "applied_winning_combinations": {k: list(v) for k, v in self.applied_winning_combinations.items()},
            "applied_bonus_symbol": self.applied_bonus_symbol,
        }


@dataclass(slots=True)
class ValidationIssue:
    code: str
    severity: str
    field_path: str
    entity_id: str
    message: str


@dataclass(slots=True)
class ValidationResult:
    ok: bool
    issues: list[ValidationIssue]


class ConfigurationError(ValueError):
    def __init__(self, issues: list[ValidationIssue]) -> None:
        message = "; ".join(f"{i.code}:{i.entity_id}:{i.message}" for i in issues)
        super().__init__(message)
        self.issues = issues


class InvalidBetError(ValueError):
    def __init__(self, bet: object) -> None:
        super().__init__(f"Betting amount must be positive, got: {bet}")
        self.bet = bet
