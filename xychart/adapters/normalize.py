from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

import numpy as np

from xychart.errors import PlotDataError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


_NUMERIC_KINDS = frozenset("iufb")


@dataclass(frozen=True)
class SeriesArrays:
    """Parallel float64 columns for one dataset series."""

    x: np.ndarray
    y: np.ndarray
    mask: np.ndarray

    @property
    def finite_count(self) -> int:
        return int(np.count_nonzero(self.mask))

    def finite_points(self) -> list[tuple[float, float]]:
        return list(zip(self.x[self.mask].tolist(), self.y[self.mask].tolist()))


def normalize_xy(y: Any = None, *, x: Any = None, data: Any = None) -> SeriesArrays:
    """Coerce y (and optional x) input into float64 arrays plus a finite-point mask.

    Accepts sequences, numpy arrays, pandas Series/DataFrame columns and
    torch tensors. Missing x becomes 0..n-1. With ``data`` given, string
    arguments name DataFrame columns.
    """
    frame = _require_frame(data)
    y_source = _pick_column(frame, y, "y")
    if y_source is None:
        raise PlotDataError("y input is required")
    ys = _to_float_array(y_source, "y")
    if not len(ys):
        raise PlotDataError("empty series")

    xs = np.arange(len(ys), dtype=np.float64) if x is None else _to_float_array(_pick_column(frame, x, "x"), "x")
    if len(xs) != len(ys):
        raise PlotDataError(f"x and y length mismatch: {len(xs)} != {len(ys)}")

    arrays = SeriesArrays(x=xs, y=ys, mask=np.isfinite(xs) & np.isfinite(ys))
    if arrays.finite_count == 0:
        raise PlotDataError("series contains no finite points")
    return arrays


def _require_frame(data: Any) -> Any:
    if data is None:
        return None
    if pd is None:
        raise PlotDataError("pandas is required when using `data=`")
    if not isinstance(data, pd.DataFrame):
        raise PlotDataError("`data` must be a pandas DataFrame")
    return data


def _pick_column(frame: Any, value: Any, label: str) -> Any:
    if frame is not None:
        if isinstance(value, str):
            if value not in frame.columns:
                raise PlotDataError(f"column not found: {value}")
            return frame[value]
        if value is None and label == "y":
            return _single_numeric_column(frame, "when y is omitted, data must have exactly one numeric column")
        return value
    if pd is not None and isinstance(value, pd.DataFrame):
        return _single_numeric_column(value, f"{label} DataFrame must contain exactly one numeric column")
    return value


def _single_numeric_column(frame: Any, message: str) -> Any:
    numeric = [name for name in frame.columns if pd.api.types.is_numeric_dtype(frame[name])]
    if len(numeric) != 1:
        raise PlotDataError(message)
    return frame[numeric[0]]


def _to_float_array(value: Any, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        value = value.detach().cpu().to(torch.float64).numpy()
    elif pd is not None and isinstance(value, pd.Series):
        value = value.to_numpy()
    elif isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        value = np.asarray(value, dtype=object)
    elif not isinstance(value, np.ndarray):
        raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")

    if value.ndim != 1:
        raise PlotDataError(f"{label} must be 1-D")
    if value.dtype.kind in _NUMERIC_KINDS:
        return value.astype(np.float64, copy=False)
    return np.fromiter((_scalar(raw, label, i) for i, raw in enumerate(value.tolist())), dtype=np.float64, count=len(value))


def _scalar(raw: Any, label: str, index: int) -> float:
    # None marks a gap and is dropped with the other non-finite points.
    if raw is None:
        return float("nan")
    if isinstance(raw, (Decimal, int, float, np.number)):
        return float(raw)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise PlotDataError(f"{label} contains non-numeric value at index {index}: {raw!r}") from exc
