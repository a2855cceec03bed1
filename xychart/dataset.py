from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import Any, Callable

import numpy as np

from xychart.adapters import normalize_xy
from xychart.subscriptions import ListenerList, Subscription


X_SYMBOLS = "x-symbols"
Y_SYMBOLS = "y-symbols"


@dataclass
class XYItem:
    key: str
    x: float
    y: float
    x_start: float | None = None
    x_end: float | None = None
    properties: dict[str, Any] = field(default_factory=dict)


@dataclass
class _Series:
    key: str
    items: list[XYItem] = field(default_factory=list)
    properties: dict[str, Any] = field(default_factory=dict)
    next_item_id: int = 0


class XYDataset:
    """Ordered series of keyed (x, y) items with properties, selections and change listeners."""

    def __init__(self) -> None:
        self._series: list[_Series] = []
        self._properties: dict[str, Any] = {}
        self._selections: dict[str, set[tuple[str, str]]] = {}
        self._listeners: ListenerList[XYDataset] = ListenerList()

    # -- structure ----------------------------------------------------------

    def series_count(self) -> int:
        return len(self._series)

    def series_keys(self) -> list[str]:
        return [s.key for s in self._series]

    def series_key(self, series_index: int) -> str:
        return self._series[series_index].key

    def series_index(self, series_key: str) -> int:
        for i, s in enumerate(self._series):
            if s.key == series_key:
                return i
        return -1

    def item_count(self, series_index: int) -> int:
        return len(self._series[series_index].items)

    def total_item_count(self) -> int:
        return sum(len(s.items) for s in self._series)

    def item(self, series_index: int, item_index: int) -> XYItem:
        return self._series[series_index].items[item_index]

    def x(self, series_index: int, item_index: int) -> float:
        return self.item(series_index, item_index).x

    def y(self, series_index: int, item_index: int) -> float:
        return self.item(series_index, item_index).y

    def x_start(self, series_index: int, item_index: int) -> float:
        """Start of the item's x-interval; plain (x, y) items span only x."""
        item = self.item(series_index, item_index)
        return item.x if item.x_start is None else item.x_start

    def x_end(self, series_index: int, item_index: int) -> float:
        item = self.item(series_index, item_index)
        return item.x if item.x_end is None else item.x_end

    def item_key(self, series_index: int, item_index: int) -> str:
        return self.item(series_index, item_index).key

    def item_by_key(self, series_key: str, item_key: str) -> XYItem:
        i = self.item_index(series_key, item_key)
        if i < 0:
            raise ValueError(f"unknown item key {item_key!r} in series {series_key!r}")
        return self._series[self.series_index(series_key)].items[i]

    def item_index(self, series_key: str, item_key: str) -> int:
        s = self.series_index(series_key)
        if s < 0:
            return -1
        for i, item in enumerate(self._series[s].items):
            if item.key == item_key:
                return i
        return -1

    # -- mutation -----------------------------------------------------------

    def add_series(self, series_key: str, y: Any = None, *, x: Any = None, data: Any = None, notify: bool = True) -> XYDataset:
        """Append a whole series from array-like input; non-finite points are dropped."""
        arrays = normalize_xy(y, x=x, data=data)
        series = self._require_series(series_key)
        for xv, yv in arrays.finite_points():
            self._append(series, float(xv), float(yv), None)
        self._changed(notify)
        return self

    def add(self, series_key: str, x: float, y: float, *, item_key: str | None = None, notify: bool = True) -> XYDataset:
        series = self._require_series(series_key)
        self._append(series, float(x), float(y), item_key)
        self._changed(notify)
        return self

    def add_interval(
        self,
        series_key: str,
        x: float,
        x_start: float,
        x_end: float,
        y: float,
        *,
        item_key: str | None = None,
        notify: bool = True,
    ) -> XYDataset:
        """Append an item covering ``[x_start, x_end]`` on the x axis, as drawn by bar renderers."""
        if not x_start <= x <= x_end:
            raise ValueError(f"x must lie within [x_start, x_end]: {x!r} not in [{x_start!r}, {x_end!r}]")
        series = self._require_series(series_key)
        self._append(series, float(x), float(y), item_key)
        series.items[-1].x_start = float(x_start)
        series.items[-1].x_end = float(x_end)
        self._changed(notify)
        return self

    def remove(self, series_index: int, item_index: int, *, notify: bool = True) -> XYDataset:
        series = self._series[series_index]
        item = series.items.pop(item_index)
        for members in self._selections.values():
            members.discard((series.key, item.key))
        self._changed(notify)
        return self

    def remove_series(self, series_key: str, *, notify: bool = True) -> XYDataset:
        s = self.series_index(series_key)
        if s < 0:
            raise ValueError(f"unknown series key: {series_key!r}")
        del self._series[s]
        for members in self._selections.values():
            for entry in [m for m in members if m[0] == series_key]:
                members.discard(entry)
        self._changed(notify)
        return self

    def _require_series(self, series_key: str) -> _Series:
        s = self.series_index(series_key)
        if s >= 0:
            return self._series[s]
        series = _Series(key=series_key)
        self._series.append(series)
        return series

    def _append(self, series: _Series, x: float, y: float, item_key: str | None) -> None:
        if item_key is None:
            item_key = f"{series.key}-{series.next_item_id}"
            series.next_item_id += 1
        elif any(item.key == item_key for item in series.items):
            raise ValueError(f"duplicate item key {item_key!r} in series {series.key!r}")
        series.items.append(XYItem(key=item_key, x=x, y=y))

    # -- bounds -------------------------------------------------------------

    def x_bounds(self) -> tuple[float, float]:
        """(min, max) of x over all items and their x-intervals, or (+inf, -inf) when there are none."""
        starts = _bounds([item.x if item.x_start is None else item.x_start for s in self._series for item in s.items])
        ends = _bounds([item.x if item.x_end is None else item.x_end for s in self._series for item in s.items])
        return (starts[0], ends[1])

    def y_bounds(self) -> tuple[float, float]:
        return _bounds([item.y for s in self._series for item in s.items])

    # -- properties ---------------------------------------------------------

    def get_property(self, key: str) -> Any:
        return self._properties.get(key)

    def set_property(self, key: str, value: Any, *, notify: bool = True) -> None:
        self._properties[key] = value
        self._changed(notify)

    def property_keys(self) -> list[str]:
        return list(self._properties)

    def clear_properties(self, *, notify: bool = True) -> None:
        self._properties.clear()
        self._changed(notify)

    def get_series_property(self, series_key: str, key: str) -> Any:
        s = self.series_index(series_key)
        return self._series[s].properties.get(key) if s >= 0 else None

    def set_series_property(self, series_key: str, key: str, value: Any, *, notify: bool = True) -> None:
        self._series[self._index_or_raise(series_key)].properties[key] = value
        self._changed(notify)

    def get_item_property(self, series_key: str, item_key: str, key: str) -> Any:
        s = self.series_index(series_key)
        i = self.item_index(series_key, item_key)
        if s < 0 or i < 0:
            return None
        return self._series[s].items[i].properties.get(key)

    def set_item_property(self, series_key: str, item_key: str, key: str, value: Any, *, notify: bool = True) -> None:
        s = self._index_or_raise(series_key)
        i = self.item_index(series_key, item_key)
        if i < 0:
            raise ValueError(f"unknown item key: {item_key!r}")
        self._series[s].items[i].properties[key] = value
        self._changed(notify)

    def _index_or_raise(self, series_key: str) -> int:
        s = self.series_index(series_key)
        if s < 0:
            raise ValueError(f"unknown series key: {series_key!r}")
        return s

    # -- selections ---------------------------------------------------------

    def select(self, selection_id: str, series_key: str, item_key: str, *, notify: bool = True) -> None:
        self._selections.setdefault(selection_id, set()).add((series_key, item_key))
        self._changed(notify)

    def unselect(self, selection_id: str, series_key: str, item_key: str, *, notify: bool = True) -> None:
        members = self._selections.get(selection_id)
        if members is not None:
            members.discard((series_key, item_key))
        self._changed(notify)

    def is_selected(self, selection_id: str, series_key: str, item_key: str) -> bool:
        return (series_key, item_key) in self._selections.get(selection_id, ())

    def clear_selection(self, selection_id: str, *, notify: bool = True) -> None:
        self._selections.pop(selection_id, None)
        self._changed(notify)

    # -- listeners ----------------------------------------------------------

    def add_listener(self, callback: Callable[[XYDataset], Any]) -> Subscription:
        return self._listeners.subscribe(callback)

    def notify_listeners(self) -> None:
        self._listeners.notify(self)

    def _changed(self, notify: bool) -> None:
        if notify:
            self.notify_listeners()


def _bounds(values: list[float]) -> tuple[float, float]:
    if not values:
        return (math.inf, -math.inf)
    arr = np.asarray(values, dtype=np.float64)
    return (float(np.min(arr)), float(np.max(arr)))
