from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from scratchgame.config.validation import ConfigValidator, parse_coordinate
from scratchgame.contracts import (
    BonusImpact,
    CellWeights,
    GameConfig,
    SymbolDef,
    SymbolKind,
    WinCondition,
    WinRule,
)

logger = logging.getLogger("scratchgame.config")

DEFAULT_ROWS = 3
DEFAULT_COLUMNS = 3


def apply_defaults(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Fill in grid dimensions that are missing or zero."""
    resolved = dict(payload)
    for key, default in (("rows", DEFAULT_ROWS), ("columns", DEFAULT_COLUMNS)):
        value = resolved.get(key)
        if value is None or (value == 0 and type(value) is int):
            resolved[key] = default
    return resolved


def load_config(path: Path) -> GameConfig:
    payload = json.loads(path.read_text(encoding="utf-8"))
    logger.debug("loaded configuration from %s", path)
    return parse_config(payload)


def parse_config(payload: Mapping[str, Any], validator: ConfigValidator | None = None) -> GameConfig:
    """Validate a decoded JSON payload and resolve it into index handles.

    Raises ConfigurationError when the payload has blocking issues.
    """
    if isinstance(payload, Mapping):
        payload = apply_defaults(payload)
    (validator or ConfigValidator()).validate(payload)

    symbols = _build_symbols(payload["symbols"])
    by_name = {s.name: s.index for s in symbols}
    probabilities = payload["probabilities"]
    standard_weights = tuple(
        CellWeights(
            row=cell.get("row", 0),
            column=cell.get("column", 0),
            weights={by_name[name]: weight for name, weight in cell["symbols"].items()},
        )
        for cell in probabilities["standard_symbols"]
    )
    bonus = probabilities.get("bonus_symbols")
    bonus_weights = dict(bonus["symbols"]) if bonus is not None else None

    config = GameConfig(
        rows=payload["rows"],
        columns=payload["columns"],
        symbols=symbols,
        standard_weights=standard_weights,
        bonus_weights=bonus_weights,
        rules=_build_rules(payload["win_combinations"]),
        _by_name=by_name,
    )
    logger.debug(
        "configuration ready: %dx%d grid, %d symbols, %d rules",
        config.rows,
        config.columns,
        len(config.symbols),
        len(config.rules),
    )
    return config


def _build_symbols(raw_symbols: Mapping[str, Mapping[str, Any]]) -> tuple[SymbolDef, ...]:
    symbols: list[SymbolDef] = []
    for index, (name, raw) in enumerate(raw_symbols.items()):
        kind = SymbolKind(raw["type"])
        if kind is SymbolKind.STANDARD:
            symbols.append(
                SymbolDef(index=index, name=name, kind=kind, reward_multiplier=float(raw["reward_multiplier"]))
            )
            continue
        impact = BonusImpact(raw["impact"].lower())
        symbols.append(
            SymbolDef(
                index=index,
                name=name,
                kind=kind,
                reward_multiplier=_number(raw, "reward_multiplier", 1.0),
                impact=impact,
                extra=_number(raw, "extra", 0.0),
            )
        )
    return tuple(symbols)


def _number(raw: Mapping[str, Any], key: str, default: float) -> float:
    value = raw.get(key)
    return default if value is None else float(value)


def _build_rules(raw_rules: Mapping[str, Mapping[str, Any]]) -> tuple[WinRule, ...]:
    groups: dict[str, int] = {}
    rules: list[WinRule] = []
    for index, (rule_id, raw) in enumerate(raw_rules.items()):
        condition = WinCondition(raw["when"].lower())
        group = raw["group"]
        group_index = groups.setdefault(group, len(groups))
        if condition is WinCondition.SAME_SYMBOLS:
            rules.append(
                WinRule(
                    index=index,
                    rule_id=rule_id,
                    condition=condition,
                    reward_multiplier=float(raw["reward_multiplier"]),
                    group=group,
                    group_index=group_index,
                    count=raw["count"],
                )
            )
            continue
        areas = tuple(tuple(parse_coordinate(c) for c in area) for area in raw["covered_areas"])
        rules.append(
            WinRule(
                index=index,
                rule_id=rule_id,
                condition=condition,
                reward_multiplier=float(raw["reward_multiplier"]),
                group=group,
                group_index=group_index,
                covered_areas=areas,
            )
        )
    return tuple(rules)
