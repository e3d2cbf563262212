from .types import (
    BonusImpact,
    CellWeights,
    ConfigurationError,
    Coordinate,
    GameConfig,
    GenerationResult,
    InvalidBetError,
    RandomSource,
    RoundResult,
    SymbolDef,
    SymbolGrid,
    SymbolKind,
    ValidationIssue,
    ValidationResult,
    WinCondition,
    WinMap,
    WinRule,
)

__all__ = [
    "BonusImpact",
    "CellWeights",
    "ConfigurationError",
    "Coordinate",
    "GameConfig",
    "GenerationResult",
    "InvalidBetError",
    "RandomSource",
    "RoundResult",
    "SymbolDef",
    "SymbolGrid",
    "SymbolKind",
    "ValidationIssue",
    "ValidationResult",
    "WinCondition",
    "WinMap",
    "WinRule",
]
