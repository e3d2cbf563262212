from __future__ import annotations

import logging

from scratchgame.contracts import GameConfig, GenerationResult, RandomSource, SymbolGrid
from scratchgame.engine.picker import WeightedPicker

logger = logging.getLogger("scratchgame.engine")


class MatrixGenerator:
    """Builds the symbol grid for one round and injects bonus symbols into it.

    Draw order is fixed: one standard draw per cell in row-major order, then
    the bonus count, then for each attempt a bonus draw followed by coordinate
    draws. Seeded sources therefore reproduce whole rounds.
    """

    def __init__(self, config: GameConfig, random_source: RandomSource) -> None:
        self._config = config
        self._random = random_source
        self._pickers = self._precompute_pickers()
        self._bonus_picker = WeightedPicker(config.bonus_weights) if config.bonus_weights else None

    def generate(self) -> GenerationResult:
        matrix = [
            [self._pickers[r][c].pick(self._random) for c in range(self._config.columns)]
            for r in range(self._config.rows)
        ]
        injected = self._inject_bonus_symbols(matrix)
        return GenerationResult(matrix=matrix, bonus_symbols=injected)

    def _inject_bonus_symbols(self, matrix: SymbolGrid) -> list[int]:
        if self._bonus_picker is None:
            return []

        rows, columns = self._config.rows, self._config.columns
        max_cells = rows * columns
        # heuristic: between one and `rows` insertion attempts
        to_insert = self._random.randint(1, rows) if rows > 0 else 0
        used: set[tuple[int, int]] = set()
        inserted: list[int] = []

        for _ in range(to_insert):
            if len(used) >= max_cells:
                break
            label = self._bonus_picker.pick(self._random)
            symbol = self._config.find_symbol(label)
            if symbol is None or symbol.is_standard or symbol.is_miss:
                continue
            for _attempt in range(max_cells):
                cell = (self._random.randbelow(rows), self._random.randbelow(columns))
                if cell not in used:
                    used.add(cell)
                    matrix[cell[0]][cell[1]] = symbol.index
                    inserted.append(symbol.index)
                    break

        logger.debug("bonus injection: %d attempts, %d placed", to_insert, len(inserted))
        return inserted

    def _precompute_pickers(self) -> list[list[WeightedPicker[int]]]:
        fallback = WeightedPicker(self._config.standard_weights[0].weights)
        pickers: list[list[WeightedPicker[int]]] = [
            [fallback] * self._config.columns for _ in range(self._config.rows)
        ]
        for cell in self._config.standard_weights:
            pickers[cell.row][cell.column] = WeightedPicker(cell.weights)
        return pickers
