from __future__ import annotations

from typing import Any, Callable, Literal

import numpy as np

from xychart.axis import ValueAxis
from xychart.dataset import XYDataset
from xychart.geometry import BLACK, RGBA, WHITE, Font, Insets, Rectangle
from xychart.plot import XYPlot
from xychart.raster import RasterSurface
from xychart.renderers import BarRenderer, LineRenderer, ScatterRenderer
from xychart.subscriptions import ListenerList, Subscription
from xychart.surface import DEFAULT_LAYER, Surface
from xychart.svg import SvgSurface


TitleAlign = Literal["left", "center", "right"]

DEFAULT_PADDING = Insets(4.0, 4.0, 4.0, 4.0)
DEFAULT_TITLE_FONT = Font("serif", 16.0, bold=True)
DEFAULT_SUBTITLE_FONT = Font("serif", 12.0, italic=True)


class Chart:
    """A plot with background, padding and an optional title band."""

    def __init__(self, plot: XYPlot, title: str | None = None, subtitle: str | None = None) -> None:
        self.plot = plot
        self.title = title
        self.subtitle = subtitle
        self.title_align: TitleAlign = "left"
        self.title_font = DEFAULT_TITLE_FONT
        self.subtitle_font = DEFAULT_SUBTITLE_FONT
        self.title_color: RGBA = BLACK
        self.background: RGBA | None = WHITE
        self.padding = DEFAULT_PADDING
        self.plot_area = Rectangle(0.0, 0.0, 0.0, 0.0)
        self._listeners: ListenerList[Chart] = ListenerList()
        self._plot_sub = plot.add_listener(lambda _plot: self.notify_listeners())

    def set_title(self, title: str | None, subtitle: str | None = None, *, notify: bool = True) -> None:
        self.title = title
        self.subtitle = subtitle
        if notify:
            self.notify_listeners()

    def add_listener(self, callback: Callable[[Chart], Any]) -> Subscription:
        return self._listeners.subscribe(callback)

    def notify_listeners(self) -> None:
        self._listeners.notify(self)

    def dispose(self) -> None:
        """Detach from the plot and cancel any pending chunked draw."""
        self._plot_sub.dispose()
        self.plot.scheduler.cancel()

    def _title_lines(self) -> list[tuple[str, Font]]:
        lines: list[tuple[str, Font]] = []
        if self.title:
            lines.append((self.title, self.title_font))
        if self.subtitle:
            lines.append((self.subtitle, self.subtitle_font))
        return lines

    def draw(self, surface: Surface, bounds: Rectangle, *, stagger: bool | None = None) -> None:
        surface.set_layer(DEFAULT_LAYER)
        surface.clear()
        if self.background is not None:
            surface.set_fill_color(self.background)
            surface.fill_rect(bounds.x, bounds.y, bounds.width, bounds.height)

        lines = self._title_lines()
        heights: list[float] = []
        for text, font in lines:
            surface.set_font(font)
            heights.append(surface.text_dim(text)[1])
        title_height = sum(heights)

        pad = self.padding
        self.plot_area = Rectangle(
            bounds.x + pad.left,
            bounds.y + pad.top + title_height,
            max(0.0, bounds.width - pad.left - pad.right),
            max(0.0, bounds.height - pad.top - pad.bottom - title_height),
        )
        self.plot.draw(surface, bounds, self.plot_area, stagger=stagger)

        if self.title_align == "center":
            x, anchor = bounds.center_x, "top_center"
        elif self.title_align == "right":
            x, anchor = bounds.max_x - pad.right, "top_right"
        else:
            x, anchor = bounds.x + pad.left, "top_left"
        y = bounds.y + pad.top
        surface.set_fill_color(self.title_color)
        for (text, font), h in zip(lines, heights):
            surface.set_font(font)
            surface.draw_aligned_string(text, x, y, anchor)
            y += h

    def to_rgba(self, width: int, height: int) -> np.ndarray:
        """Render synchronously to an (height, width, 4) uint8 array."""
        surface = RasterSurface(width, height)
        self.draw(surface, Rectangle(0.0, 0.0, float(width), float(height)), stagger=False)
        return surface.to_rgba()

    def to_svg(self, width: float, height: float) -> str:
        surface = SvgSurface(width, height)
        self.draw(surface, Rectangle(0.0, 0.0, float(width), float(height)), stagger=False)
        return surface.to_markup()


def scatter_chart(
    dataset: XYDataset,
    title: str | None = None,
    *,
    subtitle: str | None = None,
    x_label: str | None = None,
    y_label: str | None = None,
) -> Chart:
    plot = XYPlot(dataset, ScatterRenderer(), ValueAxis(x_label), ValueAxis(y_label))
    return Chart(plot, title, subtitle)


def line_chart(
    dataset: XYDataset,
    title: str | None = None,
    *,
    subtitle: str | None = None,
    x_label: str | None = None,
    y_label: str | None = None,
) -> Chart:
    plot = XYPlot(dataset, LineRenderer(), ValueAxis(x_label), ValueAxis(y_label))
    return Chart(plot, title, subtitle)


def bar_chart(
    dataset: XYDataset,
    title: str | None = None,
    *,
    subtitle: str | None = None,
    x_label: str | None = None,
    y_label: str | None = None,
) -> Chart:
    plot = XYPlot(dataset, BarRenderer(), ValueAxis(x_label), ValueAxis(y_label))
    return Chart(plot, title, subtitle)
