from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import math


@dataclass(frozen=True)
class NumberFormat:
    """Formats tick values with a fixed number of decimals.

    ``decimals=None`` uses the shortest representation that round-trips the
    float; ``exponential=True`` switches to scientific notation with
    ``decimals`` digits after the point.
    """

    decimals: int | None = 0
    exponential: bool = False
    separator: str = ","

    def __post_init__(self) -> None:
        if self.decimals is not None and self.decimals < 0:
            raise ValueError("decimals must be >= 0")
        if self.exponential and self.decimals is None:
            raise ValueError("exponential format requires decimals")

    def format(self, value: float) -> str:
        if not math.isfinite(value):
            return str(value)
        if self.exponential:
            return f"{value:.{self.decimals}e}"
        if self.decimals is None:
            out = repr(float(value))
            if out.endswith(".0"):
                out = out[:-2]
            return _normalize_negative_zero(out)

        d = Decimal(str(value))
        quant = Decimal("1").scaleb(-self.decimals)
        try:
            q = d.quantize(quant)
        except InvalidOperation:
            q = d
        out = format(q, ",f") if self.separator else format(q, "f")
        if self.separator and self.separator != ",":
            out = out.replace(",", self.separator)
        return _normalize_negative_zero(out)


@dataclass(frozen=True)
class LogFormat:
    """Formats a value as ``base^exponent``."""

    base: float = 10.0
    base_label: str | None = None
    decimals: int = 2

    def __post_init__(self) -> None:
        if self.base <= 0 or self.base == 1:
            raise ValueError("base must be > 0 and != 1")

    def format(self, value: float) -> str:
        if value <= 0 or not math.isfinite(value):
            return str(value)
        label = self.base_label if self.base_label is not None else f"{self.base:g}"
        exponent = math.log(value) / math.log(self.base)
        return f"{label}^{exponent:.{self.decimals}f}"


def _normalize_negative_zero(text: str) -> str:
    stripped = text.lstrip("-")
    if text.startswith("-") and stripped.strip("0.,") == "":
        return stripped
    return text
