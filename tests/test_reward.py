from __future__ import annotations

import pytest

from scratchgame.config import parse_config
from scratchgame.engine import RewardCalculator
from tests.helpers import LINEAR_RULES, SAME_SYMBOL_RULES, forced_payload


@pytest.fixture()
def config():
    grid = [["A", "B", "C"], ["D", "E", "F"], ["A", "B", "C"]]
    return parse_config(forced_payload(grid, rules={**SAME_SYMBOL_RULES, **LINEAR_RULES}))


def _wins(config, by_name):
    rule_index = {rule.rule_id: rule.index for rule in config.rules}
    return {config.symbol_index(symbol): tuple(rule_index[r] for r in rules) for symbol, rules in by_name.items()}


def test_empty_win_map_pays_nothing(config):
    assert RewardCalculator(config).compute(100, {}) == 0


def test_multiplies_within_symbol_and_sums_across_symbols(config):
    wins = _wins(
        config,
        {
            "A": ["same_symbol_3_times", "same_symbols_horizontally"],
            "B": ["same_symbol_3_times"],
        },
    )
    # A: 100 * 5 * 1 * 2, B: 100 * 3 * 1
    assert RewardCalculator(config).compute(100, wins) == pytest.approx(1300)


def test_fractional_multipliers(config):
    wins = _wins(config, {"C": ["same_symbol_4_times"]})
    assert RewardCalculator(config).compute(10, wins) == pytest.approx(10 * 2.5 * 1.5)


def test_compute_is_pure_and_deterministic(config):
    wins = _wins(config, {"A": ["same_symbol_3_times", "same_symbols_vertically"]})
    snapshot = dict(wins)
    calculator = RewardCalculator(config)

    first = calculator.compute(50, wins)
    second = calculator.compute(50, wins)

    assert first == second == pytest.approx(50 * 5 * 1 * 2)
    assert wins == snapshot
