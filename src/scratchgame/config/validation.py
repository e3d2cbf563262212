from __future__ import annotations

import logging
import math
from typing import Any, Mapping

from scratchgame.contracts import (
    BonusImpact,
    ConfigurationError,
    Coordinate,
    SymbolKind,
    ValidationIssue,
    ValidationResult,
    WinCondition,
)

logger = logging.getLogger("scratchgame.config")

_SYMBOL_KINDS = {kind.value for kind in SymbolKind}
_BONUS_IMPACTS = {impact.value for impact in BonusImpact}
_WIN_CONDITIONS = {condition.value for condition in WinCondition}


def parse_coordinate(text: object) -> Coordinate:
    """Parse a ``"row:column"`` reference into a ``(row, column)`` pair."""
    if not isinstance(text, str):
        raise ValueError(f"coordinate must be a 'row:column' string, got {text!r}")
    parts = text.split(":")
    if len(parts) != 2:
        raise ValueError(f"coordinate must be a 'row:column' string, got {text!r}")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError as exc:
        raise ValueError(f"coordinate must be a 'row:column' string, got {text!r}") from exc


def is_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int beyond float range
        return False


def is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _issue(code: str, field_path: str, entity_id: str, message: str, severity: str = "blocking") -> ValidationIssue:
    return ValidationIssue(
        code=code,
        severity=severity,
        field_path=field_path,
        entity_id=entity_id,
        message=message,
    )


class ConfigValidator:
    """Checks a raw configuration payload before it is compiled into a GameConfig.

    Every problem is collected as a ValidationIssue. Blocking issues are raised
    together as a ConfigurationError; warnings are returned and logged.
    """

    def validate(self, payload: Mapping[str, Any]) -> ValidationResult:
        if not isinstance(payload, Mapping):
            raise ConfigurationError(
                [_issue("INVALID_CONFIG_PAYLOAD", "$", "config", "Configuration must be a JSON object")]
            )

        issues: list[ValidationIssue] = []
        issues.extend(self._validate_grid(payload))
        issues.extend(self._validate_symbols(payload.get("symbols")))

        grid = self._grid_size(payload)
        symbols = payload.get("symbols") if isinstance(payload.get("symbols"), Mapping) else {}
        issues.extend(self._validate_probabilities(payload.get("probabilities"), grid, symbols))
        issues.extend(self._validate_rules(payload.get("win_combinations"), grid))

        return self._finalize(issues)

    def _finalize(self, issues: list[ValidationIssue]) -> ValidationResult:
        ordered = sorted(issues, key=lambda x: (x.severity, x.code, x.entity_id, x.field_path))
        blocking = [i for i in ordered if i.severity == "blocking"]
        if blocking:
            raise ConfigurationError(blocking)
        for warning in ordered:
            logger.warning("config %s at %s: %s", warning.code, warning.field_path, warning.message)
        return ValidationResult(ok=True, issues=ordered)

    @staticmethod
    def _grid_size(payload: Mapping[str, Any]) -> tuple[int, int] | None:
        rows, columns = payload.get("rows"), payload.get("columns")
        if is_positive_int(rows) and is_positive_int(columns):
            return rows, columns
        return None

    def _validate_grid(self, payload: Mapping[str, Any]) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        for key in ("rows", "columns"):
            if not is_positive_int(payload.get(key)):
                issues.append(
                    _issue("INVALID_GRID_SIZE", key, "config", f"{key} must be a positive integer, got {payload.get(key)!r}")
                )
        return issues

    def _validate_symbols(self, symbols: object) -> list[ValidationIssue]:
        if not isinstance(symbols, Mapping) or not symbols:
            return [_issue("MISSING_SYMBOLS", "symbols", "config", "Configuration must define symbols")]

        issues: list[ValidationIssue] = []
        for name, raw in symbols.items():
            path = f"symbols.{name}"
            if not isinstance(raw, Mapping):
                issues.append(_issue("INVALID_SYMBOL", path, name, "symbol definition must be an object"))
                continue
            kind = raw.get("type")
            if not isinstance(kind, str) or kind not in _SYMBOL_KINDS:
                issues.append(_issue("INVALID_SYMBOL_TYPE", f"{path}.type", name, f"Unknown symbol type: {kind}"))
                continue
            if kind == SymbolKind.STANDARD.value:
                if not is_number(raw.get("reward_multiplier")):
                    issues.append(
                        _issue(
                            "INVALID_SYMBOL_MULTIPLIER",
                            f"{path}.reward_multiplier",
                            name,
                            "standard symbol requires a numeric reward_multiplier",
                        )
                    )
                continue

            impact = raw.get("impact")
            if not isinstance(impact, str) or impact.lower() not in _BONUS_IMPACTS:
                issues.append(_issue("INVALID_BONUS_IMPACT", f"{path}.impact", name, f"Unknown bonus impact: {impact}"))
                continue
            impact = impact.lower()
            multiplier, extra = raw.get("reward_multiplier"), raw.get("extra")
            needs_multiplier = impact == BonusImpact.MULTIPLY_REWARD.value
            if (needs_multiplier or multiplier is not None) and not is_number(multiplier):
                issues.append(
                    _issue(
                        "INVALID_SYMBOL_MULTIPLIER",
                        f"{path}.reward_multiplier",
                        name,
                        f"{impact} bonus requires a numeric reward_multiplier",
                    )
                )
            needs_extra = impact == BonusImpact.EXTRA_BONUS.value
            if (needs_extra or extra is not None) and not is_number(extra):
                issues.append(
                    _issue("INVALID_BONUS_EXTRA", f"{path}.extra", name, f"{impact} bonus requires a numeric extra")
                )
        return issues

    def _validate_probabilities(
        self,
        probabilities: object,
        grid: tuple[int, int] | None,
        symbols: Mapping[str, Any],
    ) -> list[ValidationIssue]:
        if not isinstance(probabilities, Mapping):
            return [_issue("MISSING_PROBABILITIES", "probabilities", "config", "Configuration must define probabilities")]

        issues: list[ValidationIssue] = []
        cells = probabilities.get("standard_symbols")
        if not isinstance(cells, list) or not cells:
            issues.append(
                _issue(
                    "MISSING_STANDARD_PROBABILITIES",
                    "probabilities.standard_symbols",
                    "config",
                    "Configuration must define standard symbol probabilities",
                )
            )
        else:
            for position, cell in enumerate(cells):
                issues.extend(self._validate_cell(position, cell, grid, symbols))

        if "bonus_symbols" in probabilities:
            issues.extend(self._validate_bonus_weights(probabilities.get("bonus_symbols"), symbols))
        return issues

    def _validate_cell(
        self,
        position: int,
        cell: object,
        grid: tuple[int, int] | None,
        symbols: Mapping[str, Any],
    ) -> list[ValidationIssue]:
        path = f"probabilities.standard_symbols[{position}]"
        entity = f"cell[{position}]"
        if not isinstance(cell, Mapping):
            return [_issue("INVALID_CELL_PROBABILITIES", path, entity, "cell probabilities must be an object")]

        issues: list[ValidationIssue] = []
        row, column = cell.get("row", 0), cell.get("column", 0)
        if not isinstance(row, int) or isinstance(row, bool) or not isinstance(column, int) or isinstance(column, bool):
            issues.append(_issue("INVALID_CELL_COORDINATE", path, entity, "row and column must be integers"))
        elif grid is not None and not (0 <= row < grid[0] and 0 <= column < grid[1]):
            issues.append(
                _issue(
                    "CELL_OUT_OF_BOUNDS",
                    path,
                    entity,
                    f"Cell {row}:{column} is outside the matrix ({grid[0]}x{grid[1]})",
                )
            )

        weights = cell.get("symbols")
        issues.extend(self._validate_weight_map(weights, f"{path}.symbols", entity))
        if isinstance(weights, Mapping):
            for name in weights:
                if name not in symbols:
                    issues.append(
                        _issue(
                            "UNKNOWN_WEIGHTED_SYMBOL",
                            f"{path}.symbols.{name}",
                            entity,
                            f"symbol '{name}' is not defined in symbols",
                        )
                    )
        return issues

    def _validate_bonus_weights(self, bonus: object, symbols: Mapping[str, Any]) -> list[ValidationIssue]:
        path = "probabilities.bonus_symbols"
        if not isinstance(bonus, Mapping):
            return [_issue("INVALID_BONUS_PROBABILITIES", path, "bonus", "bonus_symbols must be an object")]
        weights = bonus.get("symbols")
        issues = self._validate_weight_map(weights, f"{path}.symbols", "bonus")
        if isinstance(weights, Mapping):
            for name in weights:
                raw = symbols.get(name)
                if not isinstance(raw, Mapping) or raw.get("type") != SymbolKind.BONUS.value:
                    issues.append(
                        _issue(
                            "NON_BONUS_WEIGHTED_SYMBOL",
                            f"{path}.symbols.{name}",
                            "bonus",
                            f"'{name}' is not a bonus symbol and will never be placed",
                            severity="warning",
                        )
                    )
        return issues

    def _validate_weight_map(self, weights: object, path: str, entity: str) -> list[ValidationIssue]:
        if not isinstance(weights, Mapping) or not weights:
            return [_issue("INVALID_WEIGHT_MAP", path, entity, "weight map must be a non-empty object")]
        issues: list[ValidationIssue] = []
        for name, weight in weights.items():
            if not is_positive_int(weight):
                issues.append(
                    _issue(
                        "INVALID_WEIGHT",
                        f"{path}.{name}",
                        entity,
                        f"weight for '{name}' must be a positive integer, got {weight!r}",
                    )
                )
        return issues

    def _validate_rules(self, rules: object, grid: tuple[int, int] | None) -> list[ValidationIssue]:
        if not isinstance(rules, Mapping) or not rules:
            return [
                _issue("MISSING_WIN_COMBINATIONS", "win_combinations", "config", "Configuration must define win combinations")
            ]

        issues: list[ValidationIssue] = []
        for rule_id, raw in rules.items():
            path = f"win_combinations.{rule_id}"
            if not isinstance(raw, Mapping):
                issues.append(_issue("INVALID_WIN_RULE", path, rule_id, "win rule must be an object"))
                continue
            if not is_number(raw.get("reward_multiplier")):
                issues.append(
                    _issue("INVALID_RULE_MULTIPLIER", f"{path}.reward_multiplier", rule_id, "reward_multiplier must be numeric")
                )
            group = raw.get("group")
            if not isinstance(group, str) or not group:
                issues.append(_issue("MISSING_RULE_GROUP", f"{path}.group", rule_id, "group must be a non-empty string"))

            when = raw.get("when")
            condition = when.lower() if isinstance(when, str) else None
            if condition not in _WIN_CONDITIONS:
                issues.append(_issue("INVALID_RULE_CONDITION", f"{path}.when", rule_id, f"Unknown when value: {when}"))
            elif condition == WinCondition.SAME_SYMBOLS.value:
                if not is_positive_int(raw.get("count")):
                    issues.append(
                        _issue("INVALID_RULE_COUNT", f"{path}.count", rule_id, "same_symbols rule requires a count >= 1")
                    )
            else:
                issues.extend(self._validate_covered_areas(rule_id, raw.get("covered_areas"), grid))
        return issues

    def _validate_covered_areas(
        self,
        rule_id: str,
        areas: object,
        grid: tuple[int, int] | None,
    ) -> list[ValidationIssue]:
        path = f"win_combinations.{rule_id}.covered_areas"
        if not isinstance(areas, list) or not areas:
            return [_issue("MISSING_COVERED_AREAS", path, rule_id, "linear_symbols rule requires covered_areas")]

        issues: list[ValidationIssue] = []
        for area_index, area in enumerate(areas):
            area_path = f"{path}[{area_index}]"
            if not isinstance(area, list) or not area:
                issues.append(_issue("INVALID_COVERED_AREA", area_path, rule_id, "covered area must be a non-empty list"))
                continue
            for coordinate in area:
                try:
                    row, column = parse_coordinate(coordinate)
                except ValueError:
                    issues.append(
                        _issue(
                            "INVALID_COORDINATE",
                            area_path,
                            rule_id,
                            f"Invalid coordinate format in rule {rule_id}: {coordinate}",
                        )
                    )
                    continue
                if grid is not None and not (0 <= row < grid[0] and 0 <= column < grid[1]):
                    issues.append(
                        _issue(
                            "COORDINATE_OUT_OF_BOUNDS",
                            area_path,
                            rule_id,
                            f"Coordinate out of bounds in rule {rule_id}: {coordinate} (matrix is {grid[0]}x{grid[1]})",
                        )
                    )
        return issues
