from __future__ import annotations

from bisect import bisect_right
from typing import Generic, Hashable, Mapping, TypeVar

from scratchgame.contracts import RandomSource

Label = TypeVar("Label", bound=Hashable)


class WeightedPicker(Generic[Label]):
    """Draws labels proportionally to positive integer weights.

    Cumulative bounds are built once in the mapping's iteration order, so a
    given random source and mapping always yield the same sequence of picks.
    """

    __slots__ = ("_labels", "_bounds")

    def __init__(self, weights: Mapping[Label, int]) -> None:
        if not weights:
            raise ValueError("weight map must not be empty")
        labels: list[Label] = []
        bounds: list[int] = []
        total = 0
        for label, weight in weights.items():
            if not isinstance(weight, int) or isinstance(weight, bool) or weight <= 0:
                raise ValueError(f"weight for {label!r} must be a positive integer, got {weight!r}")
            total += weight
            labels.append(label)
            bounds.append(total)
        self._labels = tuple(labels)
        self._bounds = tuple(bounds)

    @property
    def total_weight(self) -> int:
        return self._bounds[-1]

    def pick(self, random_source: RandomSource) -> Label:
        draw = random_source.randbelow(self._bounds[-1])
        return self._labels[bisect_right(self._bounds, draw)]
