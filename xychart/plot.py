from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Any, Callable

from xychart.axis import ValueAxis
from xychart.axis_space import AxisSpace
from xychart.dataset import XYDataset
from xychart.geometry import RGBA, Insets, Rectangle, require_edge
from xychart.labels import XYLabelGenerator
from xychart.renderers import BaseXYRenderer, ScatterRenderer
from xychart.scheduler import ProgressOverlay, RenderJob, RenderScheduler, SchedulerConfig, draw_all_items
from xychart.subscriptions import ListenerList, Subscription
from xychart.surface import PROGRESS_LAYER, Surface, clear_layer


DEFAULT_DATA_BACKGROUND: RGBA = (230, 230, 230, 255)


@dataclass(frozen=True)
class NearestItem:
    series_key: str
    item_key: str
    distance: float


class XYPlot:
    """Dataset, renderer and an x/y axis pair laid out inside a plot area."""

    def __init__(
        self,
        dataset: XYDataset | None = None,
        renderer: BaseXYRenderer | None = None,
        x_axis: ValueAxis | None = None,
        y_axis: ValueAxis | None = None,
        *,
        scheduler_config: SchedulerConfig | None = None,
        progress_overlay: ProgressOverlay | None = None,
        scheduler: RenderScheduler | None = None,
    ) -> None:
        self._listeners: ListenerList[XYPlot] = ListenerList()
        self.plot_background: RGBA | None = None
        self.data_background: RGBA | None = DEFAULT_DATA_BACKGROUND
        self.data_area = Rectangle(0.0, 0.0, 0.0, 0.0)
        self.axis_offsets = Insets()
        self.stagger_rendering = False
        self.label_generator = XYLabelGenerator()
        if scheduler is None:
            scheduler = RenderScheduler(scheduler_config, overlay=progress_overlay)
        self.scheduler = scheduler

        self._dataset = dataset if dataset is not None else XYDataset()
        self._dataset_sub: Subscription | None = None
        self._renderer: BaseXYRenderer = renderer if renderer is not None else ScatterRenderer()
        self._renderer_sub: Subscription | None = None
        self._x_axis = x_axis if x_axis is not None else ValueAxis()
        self._x_axis_sub: Subscription | None = None
        self._y_axis = y_axis if y_axis is not None else ValueAxis()
        self._y_axis_sub: Subscription | None = None
        self._x_axis_position = "bottom"
        self._y_axis_position = "left"

        self._dataset_sub = self._dataset.add_listener(self._on_dataset_changed)
        self._renderer_sub = self._renderer.add_listener(self._on_renderer_changed)
        self._x_axis_sub = self._x_axis.add_listener(self._on_x_axis_changed)
        self._y_axis_sub = self._y_axis.add_listener(self._on_y_axis_changed)
        self._x_axis.configure_as_x_axis(self)
        self._y_axis.configure_as_y_axis(self)

    # -- collaborators ------------------------------------------------------

    @property
    def dataset(self) -> XYDataset:
        return self._dataset

    def set_dataset(self, dataset: XYDataset, *, notify: bool = True) -> None:
        if self._dataset_sub is not None:
            self._dataset_sub.dispose()
        self._dataset = dataset
        self._dataset_sub = dataset.add_listener(self._on_dataset_changed)
        self._x_axis.configure_as_x_axis(self)
        self._y_axis.configure_as_y_axis(self)
        self._changed(notify)

    @property
    def renderer(self) -> BaseXYRenderer:
        return self._renderer

    def set_renderer(self, renderer: BaseXYRenderer, *, notify: bool = True) -> None:
        if self._renderer_sub is not None:
            self._renderer_sub.dispose()
        self._renderer = renderer
        self._renderer_sub = renderer.add_listener(self._on_renderer_changed)
        if self._y_axis.auto_range:
            self._y_axis.configure_as_y_axis(self)
        self._changed(notify)

    @property
    def x_axis(self) -> ValueAxis:
        return self._x_axis

    def set_x_axis(self, axis: ValueAxis, *, notify: bool = True) -> None:
        if self._x_axis_sub is not None:
            self._x_axis_sub.dispose()
        self._x_axis = axis
        self._x_axis_sub = axis.add_listener(self._on_x_axis_changed)
        axis.configure_as_x_axis(self)
        self._changed(notify)

    @property
    def y_axis(self) -> ValueAxis:
        return self._y_axis

    def set_y_axis(self, axis: ValueAxis, *, notify: bool = True) -> None:
        if self._y_axis_sub is not None:
            self._y_axis_sub.dispose()
        self._y_axis = axis
        self._y_axis_sub = axis.add_listener(self._on_y_axis_changed)
        axis.configure_as_y_axis(self)
        self._changed(notify)

    @property
    def x_axis_position(self) -> str:
        return self._x_axis_position

    def set_x_axis_position(self, edge: str, *, notify: bool = True) -> None:
        self._x_axis_position = require_edge(edge)
        self._changed(notify)

    @property
    def y_axis_position(self) -> str:
        return self._y_axis_position

    def set_y_axis_position(self, edge: str, *, notify: bool = True) -> None:
        self._y_axis_position = require_edge(edge)
        self._changed(notify)

    def set_axis_offsets(self, offsets: Insets, *, notify: bool = True) -> None:
        self.axis_offsets = offsets
        self._changed(notify)

    def axis_position(self, axis: ValueAxis) -> str:
        if axis is self._x_axis:
            return self._x_axis_position
        if axis is self._y_axis:
            return self._y_axis_position
        raise ValueError("axis does not belong to this plot")

    # -- change propagation -------------------------------------------------

    def _on_dataset_changed(self, dataset: XYDataset) -> None:
        if self._x_axis.auto_range:
            self._x_axis.configure_as_x_axis(self)
        if self._y_axis.auto_range:
            self._y_axis.configure_as_y_axis(self)
        self.notify_listeners()

    def _on_renderer_changed(self, renderer: BaseXYRenderer) -> None:
        if self._y_axis.auto_range:
            self._y_axis.configure_as_y_axis(self)
        self.notify_listeners()

    def _on_x_axis_changed(self, axis: ValueAxis) -> None:
        if axis.auto_range:
            axis.configure_as_x_axis(self)
        self.notify_listeners()

    def _on_y_axis_changed(self, axis: ValueAxis) -> None:
        if axis.auto_range:
            axis.configure_as_y_axis(self)
        self.notify_listeners()

    def add_listener(self, callback: Callable[[XYPlot], Any]) -> Subscription:
        return self._listeners.subscribe(callback)

    def notify_listeners(self) -> None:
        self._listeners.notify(self)

    def _changed(self, notify: bool) -> None:
        if notify:
            self.notify_listeners()

    # -- zoom / pan ---------------------------------------------------------

    def zoom_x_about_anchor(self, factor: float, anchor_px: float, *, notify: bool = True) -> None:
        anchor = self._x_axis.coordinate_to_value(anchor_px, self.data_area.min_x, self.data_area.max_x)
        self._x_axis.resize_range(factor, anchor, notify=notify)

    def zoom_y_about_anchor(self, factor: float, anchor_px: float, *, notify: bool = True) -> None:
        anchor = self._y_axis.coordinate_to_value(anchor_px, self.data_area.max_y, self.data_area.min_y)
        self._y_axis.resize_range(factor, anchor, notify=notify)

    def zoom_x(self, low_percent: float, high_percent: float, *, notify: bool = True) -> None:
        self._x_axis.set_bounds_by_percent(low_percent, high_percent, notify=notify)

    def zoom_y(self, low_percent: float, high_percent: float, *, notify: bool = True) -> None:
        self._y_axis.set_bounds_by_percent(low_percent, high_percent, notify=notify)

    def pan_x(self, percent: float, *, notify: bool = True) -> None:
        self._x_axis.pan(percent, notify=notify)

    def pan_y(self, percent: float, *, notify: bool = True) -> None:
        self._y_axis.pan(percent, notify=notify)

    # -- drawing ------------------------------------------------------------

    def draw(self, surface: Surface, bounds: Rectangle, plot_area: Rectangle, *, stagger: bool | None = None) -> None:
        """Lay out axes inside `plot_area` and render items, chunked when staggering.

        `stagger` overrides `stagger_rendering` for this call only.
        """
        if self.scheduler.pending:
            self.scheduler.cancel()
        else:
            clear_layer(surface, PROGRESS_LAYER)
        if self.plot_background is not None:
            surface.set_fill_color(self.plot_background)
            surface.fill_rect(plot_area.x, plot_area.y, plot_area.width, plot_area.height)

        space = AxisSpace()
        edge = self._x_axis_position
        space.extend(self._x_axis.reserve_space(surface, self, bounds, plot_area, edge), edge)
        adjusted = space.inner_rect(plot_area)
        edge = self._y_axis_position
        space.extend(self._y_axis.reserve_space(surface, self, bounds, adjusted, edge), edge)
        self.data_area = space.inner_rect(plot_area)

        if self.data_background is not None:
            area = self.data_area
            surface.set_fill_color(self.data_background)
            surface.fill_rect(area.x, area.y, area.width, area.height)
        self.draw_axes(surface, bounds, self.data_area)

        job = RenderJob(surface, self, self._renderer, self._dataset, self.data_area)
        if self.stagger_rendering if stagger is None else stagger:
            self.scheduler.start(job)
        else:
            draw_all_items(job)

    def draw_axes(self, surface: Surface, bounds: Rectangle, data_area: Rectangle) -> None:
        self._x_axis.draw(surface, self, bounds, data_area, self.axis_offsets.value(self._x_axis_position))
        self._y_axis.draw(surface, self, bounds, data_area, self.axis_offsets.value(self._y_axis_position))

    # -- queries ------------------------------------------------------------

    def find_nearest_data_item(self, x: float, y: float, x_scale: float = 1.0, y_scale: float = 1.0) -> NearestItem | None:
        """Closest item to data-space (x, y) among items inside both axes' bounds."""
        if x_scale <= 0 or y_scale <= 0:
            raise ValueError("x_scale and y_scale must be > 0")
        dataset = self._dataset
        best: NearestItem | None = None
        for s in range(dataset.series_count()):
            for i in range(dataset.item_count(s)):
                item = dataset.item(s, i)
                if not (self._x_axis.contains(item.x) and self._y_axis.contains(item.y)):
                    continue
                d = math.hypot((x - item.x) / x_scale, (y - item.y) / y_scale)
                if best is None or d < best.distance:
                    best = NearestItem(dataset.series_key(s), item.key, d)
        return best

    def item_label(self, series_key: str, item_key: str) -> str:
        """Tooltip text for one item, from `label_generator`."""
        return self.label_generator.item_label(self._dataset, series_key, item_key)
