from __future__ import annotations

from dataclasses import dataclass
import math

from xychart.formatting import NumberFormat


DEFAULT_MAX_POWER = 300
EXPONENTIAL_POWER_THRESHOLD = 6


@dataclass(frozen=True)
class TickMark:
    value: float
    label: str


class TickSelector:
    """Cursor over the standard tick sizes 1, 2, 5 x 10^n.

    ``next()`` moves to the next larger size and ``previous()`` to the next
    smaller one. Both return False instead of moving once the power reaches
    ``+/-max_power``.
    """

    def __init__(self, max_power: int = DEFAULT_MAX_POWER) -> None:
        if max_power <= 0:
            raise ValueError("max_power must be > 0")
        self.max_power = int(max_power)
        self._power = 0
        self._factor = 1

    @property
    def power(self) -> int:
        return self._power

    @property
    def factor(self) -> int:
        return self._factor

    @property
    def state(self) -> tuple[int, int]:
        return (self._power, self._factor)

    def select(self, reference: float) -> float:
        """Select a standard size >= `reference`, as close to it as the sequence allows."""
        if not (reference > 0 and math.isfinite(reference)):
            raise ValueError(f"reference must be a finite value > 0: {reference!r}")
        power = math.ceil(math.log10(reference))
        self._power = max(-self.max_power, min(self.max_power, power))
        self._factor = 1
        return self.current_tick_size()

    def current_tick_size(self) -> float:
        return self._factor * math.pow(10.0, self._power)

    def current_tick_format(self) -> NumberFormat:
        if self._power < -4:
            return NumberFormat(None)
        if self._power < 0:
            return NumberFormat(-self._power)
        if self._power > EXPONENTIAL_POWER_THRESHOLD:
            return NumberFormat(1, exponential=True)
        return NumberFormat(0)

    def next(self) -> bool:
        if self._power >= self.max_power and self._factor == 5:
            return False
        if self._factor == 1:
            self._factor = 2
        elif self._factor == 2:
            self._factor = 5
        elif self._factor == 5:
            self._power += 1
            self._factor = 1
        else:  # pragma: no cover - factor is always 1, 2 or 5
            raise RuntimeError(f"factor should be 1, 2 or 5: {self._factor}")
        return True

    def previous(self) -> bool:
        if self._power <= -self.max_power and self._factor == 1:
            return False
        if self._factor == 1:
            self._power -= 1
            self._factor = 5
        elif self._factor == 2:
            self._factor = 1
        elif self._factor == 5:
            self._factor = 2
        else:  # pragma: no cover - factor is always 1, 2 or 5
            raise RuntimeError(f"factor should be 1, 2 or 5: {self._factor}")
        return True


def clean_tick_value(value: float, step: float | None = None) -> float:
    """Strip accumulated float noise such as 0.30000000000000004 -> 0.3.

    With ``step`` the value is rounded a few decimals past the step's
    magnitude, so adjacent multiples of the step stay distinct at any offset.
    """
    if value == 0 or not math.isfinite(value):
        return 0.0 if value == 0 else value
    if step is None:
        return float(f"{value:.12g}")
    if not (step > 0 and math.isfinite(step)):
        raise ValueError(f"step must be finite and > 0: {step!r}")
    return round(value, max(0, 2 - math.floor(math.log10(step))))
