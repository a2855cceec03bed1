from __future__ import annotations

from dataclasses import dataclass
import math


@dataclass(frozen=True)
class ValueRange:
    """Immutable interval with lower < upper, mapping values to 0-1 percentages."""

    lower: float
    upper: float

    def __post_init__(self) -> None:
        if not self.lower < self.upper:
            raise ValueError(f"lower must be < upper: {self.lower!r} >= {self.upper!r}")

    @property
    def length(self) -> float:
        return self.upper - self.lower

    def percent(self, value: float) -> float:
        return (value - self.lower) / self.length

    def value(self, percent: float) -> float:
        return self.lower + percent * self.length

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper


def is_empty_bounds(bounds: tuple[float, float]) -> bool:
    """True for the (+inf, -inf) convention datasets use to report 'no data'."""
    lo, hi = bounds
    return not (math.isfinite(lo) and math.isfinite(hi)) or lo > hi
