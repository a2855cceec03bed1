from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from xychart.dataset import XYDataset
from xychart.geometry import BLACK, RGBA, Rectangle, parse_color
from xychart.ranges import is_empty_bounds
from xychart.subscriptions import ListenerList, Subscription
from xychart.surface import Surface


ITEM_COLOR_PROPERTY = "color"
SELECTION_ID = "selection"

DEFAULT_PALETTE: tuple[str, ...] = (
    "#64E1D5",
    "#E2D75E",
    "#F0A4B5",
    "#E7B16D",
    "#C2D58D",
    "#CCBDE4",
    "#6DE4A8",
    "#93D2E2",
    "#AEE377",
    "#A0D6B5",
)


@dataclass(frozen=True)
class ColorSource:
    """Cycles through a palette by series index."""

    colors: tuple[RGBA, ...] = field(default_factory=lambda: tuple(parse_color(c) for c in DEFAULT_PALETTE))

    def __post_init__(self) -> None:
        if not self.colors:
            raise ValueError("colors must not be empty")

    @classmethod
    def of(cls, colors: Sequence[Any]) -> ColorSource:
        return cls(tuple(parse_color(c) for c in colors))

    def color(self, series_index: int, item_index: int = 0) -> RGBA:
        return self.colors[series_index % len(self.colors)]


class BaseXYRenderer:
    """Shared colour sources, listeners and y-range calculation for XY renderers."""

    def __init__(self, *, line_colors: ColorSource | None = None, fill_colors: ColorSource | None = None) -> None:
        self._line_colors = line_colors if line_colors is not None else ColorSource()
        self._fill_colors = fill_colors if fill_colors is not None else ColorSource()
        self._listeners: ListenerList[BaseXYRenderer] = ListenerList()

    @property
    def line_colors(self) -> ColorSource:
        return self._line_colors

    def set_line_colors(self, source: ColorSource, *, notify: bool = True) -> None:
        self._line_colors = source
        self._changed(notify)

    @property
    def fill_colors(self) -> ColorSource:
        return self._fill_colors

    def set_fill_colors(self, source: ColorSource, *, notify: bool = True) -> None:
        self._fill_colors = source
        self._changed(notify)

    def pass_count(self) -> int:
        return 1

    def calc_y_range(self, dataset: XYDataset) -> tuple[float, float] | None:
        """(min, max) of y that this renderer needs visible, or None with no data."""
        bounds = dataset.y_bounds()
        if is_empty_bounds(bounds):
            return None
        return bounds

    def draw_item(
        self,
        surface: Surface,
        data_area: Rectangle,
        plot: Any,
        dataset: XYDataset,
        series_index: int,
        item_index: int,
        pass_index: int,
    ) -> None:
        raise NotImplementedError

    def item_color(self, dataset: XYDataset, source: ColorSource, series_index: int, item_index: int) -> RGBA:
        item = dataset.item(series_index, item_index)
        override = item.properties.get(ITEM_COLOR_PROPERTY)
        if override is not None:
            return parse_color(override)
        return source.color(series_index, item_index)

    def add_listener(self, callback: Callable[[BaseXYRenderer], Any]) -> Subscription:
        return self._listeners.subscribe(callback)

    def notify_listeners(self) -> None:
        self._listeners.notify(self)

    def _changed(self, notify: bool) -> None:
        if notify:
            self.notify_listeners()


def _item_point(plot: Any, dataset: XYDataset, data_area: Rectangle, series_index: int, item_index: int) -> tuple[float, float]:
    x = dataset.x(series_index, item_index)
    y = dataset.y(series_index, item_index)
    xx = plot.x_axis.value_to_coordinate(x, data_area.min_x, data_area.max_x)
    yy = plot.y_axis.value_to_coordinate(y, data_area.max_y, data_area.min_y)
    return (xx, yy)


class ScatterRenderer(BaseXYRenderer):
    """Filled circles, doubled in radius for items in the "selection" set."""

    def __init__(self, radius: float = 3.0, *, outline_width: float = 0.2, **kwargs: Any) -> None:
        if radius <= 0:
            raise ValueError("radius must be > 0")
        super().__init__(**kwargs)
        self.radius = float(radius)
        self.outline_width = float(outline_width)

    def draw_item(
        self,
        surface: Surface,
        data_area: Rectangle,
        plot: Any,
        dataset: XYDataset,
        series_index: int,
        item_index: int,
        pass_index: int,
    ) -> None:
        xx, yy = _item_point(plot, dataset, data_area, series_index, item_index)
        r = self.radius
        if dataset.is_selected(SELECTION_ID, dataset.series_key(series_index), dataset.item_key(series_index, item_index)):
            r *= 2.0
        surface.set_fill_color(self.item_color(dataset, self.fill_colors, series_index, item_index))
        surface.set_line_width(self.outline_width)
        surface.set_line_color(BLACK)
        surface.draw_circle(xx, yy, r)


class LineRenderer(BaseXYRenderer):
    """Connects the items of each series; pass 0 draws lines, pass 1 optional markers.

    With ``draw_series_as_path`` the whole series is emitted as one path when
    its last item is reached, otherwise each item draws the segment back to
    its predecessor.
    """

    def __init__(
        self,
        *,
        line_width: float = 1.0,
        draw_series_as_path: bool = True,
        marker_radius: float | None = None,
        **kwargs: Any,
    ) -> None:
        if line_width <= 0:
            raise ValueError("line_width must be > 0")
        if marker_radius is not None and marker_radius <= 0:
            raise ValueError("marker_radius must be > 0")
        super().__init__(**kwargs)
        self.line_width = float(line_width)
        self.draw_series_as_path = draw_series_as_path
        self.marker_radius = marker_radius

    def pass_count(self) -> int:
        return 2

    def draw_item(
        self,
        surface: Surface,
        data_area: Rectangle,
        plot: Any,
        dataset: XYDataset,
        series_index: int,
        item_index: int,
        pass_index: int,
    ) -> None:
        if pass_index == 0:
            if self.draw_series_as_path:
                if item_index == dataset.item_count(series_index) - 1:
                    self.draw_series(surface, data_area, plot, dataset, series_index)
                return
            if item_index > 0:
                x0, y0 = _item_point(plot, dataset, data_area, series_index, item_index - 1)
                x1, y1 = _item_point(plot, dataset, data_area, series_index, item_index)
                surface.set_line_color(self.item_color(dataset, self.line_colors, series_index, item_index))
                surface.set_line_width(self.line_width)
                surface.draw_line(x0, y0, x1, y1)
        elif pass_index == 1 and self.marker_radius is not None:
            xx, yy = _item_point(plot, dataset, data_area, series_index, item_index)
            color = self.item_color(dataset, self.line_colors, series_index, item_index)
            surface.set_fill_color(color)
            surface.set_line_color(color)
            surface.set_line_width(self.line_width)
            surface.draw_circle(xx, yy, self.marker_radius)

    def draw_series(self, surface: Surface, data_area: Rectangle, plot: Any, dataset: XYDataset, series_index: int) -> None:
        count = dataset.item_count(series_index)
        if count == 0:
            return
        surface.begin_path()
        for i in range(count):
            xx, yy = _item_point(plot, dataset, data_area, series_index, i)
            if i == 0:
                surface.move_to(xx, yy)
            else:
                surface.line_to(xx, yy)
        surface.set_line_color(self.line_colors.color(series_index))
        surface.set_line_width(self.line_width)
        surface.stroke()


class BarRenderer(BaseXYRenderer):
    """Bars spanning each item's x-interval, from ``base`` up (or down) to y."""

    def __init__(self, base: float = 0.0, *, outline_width: float = 1.0, **kwargs: Any) -> None:
        if outline_width < 0:
            raise ValueError("outline_width must be >= 0")
        super().__init__(**kwargs)
        self.base = float(base)
        self.outline_width = float(outline_width)

    def calc_y_range(self, dataset: XYDataset) -> tuple[float, float] | None:
        bounds = super().calc_y_range(dataset)
        if bounds is None:
            return None
        return (min(bounds[0], self.base), max(bounds[1], self.base))

    def draw_item(
        self,
        surface: Surface,
        data_area: Rectangle,
        plot: Any,
        dataset: XYDataset,
        series_index: int,
        item_index: int,
        pass_index: int,
    ) -> None:
        x_axis, y_axis = plot.x_axis, plot.y_axis
        x0 = x_axis.value_to_coordinate(dataset.x_start(series_index, item_index), data_area.min_x, data_area.max_x)
        x1 = x_axis.value_to_coordinate(dataset.x_end(series_index, item_index), data_area.min_x, data_area.max_x)
        yy = y_axis.value_to_coordinate(dataset.y(series_index, item_index), data_area.max_y, data_area.min_y)
        zz = y_axis.value_to_coordinate(self.base, data_area.max_y, data_area.min_y)
        left, top = min(x0, x1), min(yy, zz)
        width, height = abs(x1 - x0), abs(yy - zz)
        surface.set_fill_color(self.item_color(dataset, self.fill_colors, series_index, item_index))
        surface.fill_rect(left, top, width, height)
        if self.outline_width > 0:
            surface.set_line_color(self.item_color(dataset, self.line_colors, series_index, item_index))
            surface.set_line_width(self.outline_width)
            surface.draw_rect(left, top, width, height)
