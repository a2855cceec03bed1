from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from typing import Any, Callable, Iterable, Literal, Mapping

from xychart.formatting import LogFormat, NumberFormat
from xychart.geometry import RGBA, BLACK, WHITE, Font, Insets, Rectangle, is_left_or_right, is_top_or_bottom, require_edge
from xychart.ranges import ValueRange, is_empty_bounds
from xychart.subscriptions import ListenerList, Subscription
from xychart.surface import Surface
from xychart.ticks import DEFAULT_MAX_POWER, TickMark, TickSelector, clean_tick_value


LOGGER = logging.getLogger(__name__)

AxisKind = Literal["linear", "log", "symbol"]
AXIS_KINDS: tuple[AxisKind, ...] = ("linear", "log", "symbol")
LabelOrientation = Literal["parallel", "perpendicular"]

DEFAULT_LOWER_MARGIN = 0.05
DEFAULT_UPPER_MARGIN = 0.05
DEFAULT_LOG_BASE = 10.0
DEFAULT_LOG_FLOOR = 1e-100
MAX_TICK_COUNT = 10_000
# Text used to measure the height of one tick label row.
_REFERENCE_LABEL = "123"


@dataclass(frozen=True)
class Symbol:
    value: float
    label: str


def coerce_symbols(raw: Iterable[Any] | None) -> list[Symbol]:
    """Accepts Symbol, {"value", "label"|"symbol"} mappings or (value, label) pairs."""
    if raw is None:
        return []
    out: list[Symbol] = []
    for entry in raw:
        if isinstance(entry, Symbol):
            out.append(entry)
        elif isinstance(entry, Mapping):
            label = entry.get("label", entry.get("symbol"))
            if label is None or "value" not in entry:
                raise ValueError(f"symbol mapping needs 'value' and 'label': {entry!r}")
            out.append(Symbol(value=float(entry["value"]), label=str(label)))
        else:
            value, label = entry
            out.append(Symbol(value=float(value), label=str(label)))
    out.sort(key=lambda s: s.value)
    return out


@dataclass
class AxisStyle:
    label_font: Font = field(default_factory=lambda: Font("sans-serif", 12.0, bold=True))
    label_color: RGBA = BLACK
    label_margin: Insets = field(default_factory=lambda: Insets(2.0, 2.0, 2.0, 2.0))
    tick_label_font: Font = field(default_factory=lambda: Font("sans-serif", 12.0))
    tick_label_color: RGBA = BLACK
    tick_label_margin: Insets = field(default_factory=lambda: Insets(2.0, 2.0, 2.0, 2.0))
    tick_label_factor: float = 1.4
    tick_label_orientation: LabelOrientation | None = None
    tick_mark_inner_length: float = 0.0
    tick_mark_outer_length: float = 2.0
    tick_mark_width: float = 0.5
    tick_mark_color: RGBA = (100, 100, 100, 255)
    axis_line_width: float = 0.5
    axis_line_color: RGBA = (100, 100, 100, 255)
    grid_lines_visible: bool = True
    grid_line_width: float = 1.0
    grid_line_color: RGBA = WHITE

    def __post_init__(self) -> None:
        if self.tick_label_factor <= 0:
            raise ValueError("tick_label_factor must be > 0")
        if self.tick_label_orientation not in (None, "parallel", "perpendicular"):
            raise ValueError(f"unrecognised tick label orientation: {self.tick_label_orientation!r}")


@dataclass
class AxisState:
    """Bounds, auto-range settings, symbols and log parameters shared by every axis kind."""

    lower_bound: float = 0.0
    upper_bound: float = 1.0
    auto_range: bool = True
    auto_range_includes_zero: bool = False
    lower_margin: float = DEFAULT_LOWER_MARGIN
    upper_margin: float = DEFAULT_UPPER_MARGIN
    default_range: ValueRange = field(default_factory=lambda: ValueRange(0.0, 1.0))
    symbols: list[Symbol] = field(default_factory=list)
    label: str | None = None
    log_base: float = DEFAULT_LOG_BASE
    log_floor: float = DEFAULT_LOG_FLOOR

    def __post_init__(self) -> None:
        if not self.lower_bound < self.upper_bound:
            raise ValueError("lower_bound must be < upper_bound")
        if self.lower_margin < 0 or self.upper_margin < 0:
            raise ValueError("margins must be >= 0")
        if self.log_base <= 0 or self.log_base == 1:
            raise ValueError("log_base must be > 0 and != 1")
        if self.log_floor <= 0:
            raise ValueError("log_floor must be > 0")

    @property
    def length(self) -> float:
        return self.upper_bound - self.lower_bound


class ValueAxis:
    """Numeric axis whose transform and tick strategy are selected by `kind`.

    ``"linear"`` maps values proportionally, ``"log"`` maps ``log(v)/log(base)``
    over a derived log-space range, and ``"symbol"`` behaves as linear for
    range bookkeeping but labels only symbol positions (or the two endpoints).
    """

    def __init__(
        self,
        label: str | None = None,
        *,
        kind: AxisKind = "linear",
        state: AxisState | None = None,
        style: AxisStyle | None = None,
        max_power: int = DEFAULT_MAX_POWER,
    ) -> None:
        if kind not in AXIS_KINDS:
            raise ValueError(f"unrecognised axis kind: {kind!r}")
        self.kind: AxisKind = kind
        if state is None:
            state = AxisState(lower_bound=1.0, upper_bound=10.0) if kind == "log" else AxisState()
        self.state = state
        if label is not None:
            self.state.label = label
        self.style = style if style is not None else AxisStyle()
        self.tick_label_format_override: NumberFormat | LogFormat | None = None
        self._selector = TickSelector(max_power=max_power)
        self._formatter = NumberFormat(None) if kind == "log" else NumberFormat(2)
        self._listeners: ListenerList[ValueAxis] = ListenerList()
        # Symbols given explicitly take precedence over dataset symbols.
        self._explicit_symbols = bool(self.state.symbols)
        self._data_extent: tuple[float, float] | None = None
        if kind == "log":
            self._log_range()

    # -- bounds -------------------------------------------------------------

    @property
    def label(self) -> str | None:
        return self.state.label

    def set_label(self, label: str | None, *, notify: bool = True) -> None:
        self.state.label = label
        self._changed(notify)

    @property
    def lower_bound(self) -> float:
        return self.state.lower_bound

    @property
    def upper_bound(self) -> float:
        return self.state.upper_bound

    def length(self) -> float:
        return self.state.length

    def contains(self, value: float) -> bool:
        return self.state.lower_bound <= value <= self.state.upper_bound

    def set_bounds(self, lower: float, upper: float, *, notify: bool = True, keep_auto_range: bool = False) -> ValueAxis:
        if not lower < upper:
            raise ValueError(f"lower must be < upper: {lower!r} >= {upper!r}")
        if not (math.isfinite(lower) and math.isfinite(upper)):
            raise ValueError("bounds must be finite")
        if self.kind == "log" and upper <= self.state.log_floor:
            raise ValueError(f"upper must be > log_floor ({self.state.log_floor!r}) on a log axis")
        self.state.lower_bound = float(lower)
        self.state.upper_bound = float(upper)
        if not keep_auto_range:
            self.state.auto_range = False
        self._changed(notify)
        return self

    def set_bounds_by_percent(self, lower: float, upper: float, *, notify: bool = True) -> ValueAxis:
        scale = self._scale_range()
        b0 = self._from_scale(scale.value(lower))
        b1 = self._from_scale(scale.value(upper))
        if b1 > b0 and math.isfinite(b1 - b0):
            self.set_bounds(b0, b1, notify=notify)
        return self

    @property
    def auto_range(self) -> bool:
        return self.state.auto_range

    def set_auto_range(self, auto: bool, *, notify: bool = True) -> None:
        """Switch auto-range on or off; switching on restores the last data extent seen."""
        self.state.auto_range = bool(auto)
        if self.state.auto_range and self._data_extent is not None:
            self._apply_auto_range(*self._data_extent)
        self._changed(notify)

    def set_auto_range_includes_zero(self, include: bool, *, notify: bool = True) -> None:
        self.state.auto_range_includes_zero = bool(include)
        self._changed(notify)

    def set_margins(self, lower: float, upper: float, *, notify: bool = True) -> None:
        if lower < 0 or upper < 0:
            raise ValueError("margins must be >= 0")
        self.state.lower_margin = float(lower)
        self.state.upper_margin = float(upper)
        self._changed(notify)

    # -- symbols ------------------------------------------------------------

    @property
    def symbols(self) -> list[Symbol]:
        return list(self.state.symbols)

    def add_symbol(self, label: str, value: float, *, notify: bool = True) -> ValueAxis:
        self.state.symbols = coerce_symbols([*self.state.symbols, Symbol(float(value), label)])
        self._explicit_symbols = True
        self._changed(notify)
        return self

    def clear_symbols(self, *, notify: bool = True) -> ValueAxis:
        self.state.symbols = []
        self._explicit_symbols = False
        self._changed(notify)
        return self

    # -- listeners ----------------------------------------------------------

    def add_listener(self, callback: Callable[[ValueAxis], Any]) -> Subscription:
        return self._listeners.subscribe(callback)

    def notify_listeners(self) -> None:
        self._listeners.notify(self)

    def _changed(self, notify: bool) -> None:
        if notify:
            self.notify_listeners()

    # -- transforms ---------------------------------------------------------

    def value_to_coordinate(self, value: float, r0: float, r1: float) -> float:
        scale = self._scale_range()
        return r0 + scale.percent(self._to_scale(value)) * (r1 - r0)

    def coordinate_to_value(self, coordinate: float, r0: float, r1: float) -> float:
        if r0 == r1:
            raise ValueError("r0 and r1 must differ")
        scale = self._scale_range()
        return self._from_scale(scale.value((coordinate - r0) / (r1 - r0)))

    def _scale_range(self) -> ValueRange:
        if self.kind == "log":
            return self._log_range()
        return ValueRange(self.state.lower_bound, self.state.upper_bound)

    def _log_range(self) -> ValueRange:
        return ValueRange(self._log(self.state.lower_bound), self._log(self.state.upper_bound))

    def _to_scale(self, value: float) -> float:
        return self._log(value) if self.kind == "log" else value

    def _from_scale(self, value: float) -> float:
        return self._exp(value) if self.kind == "log" else value

    def _log(self, value: float) -> float:
        return math.log(max(value, self.state.log_floor)) / math.log(self.state.log_base)

    def _exp(self, exponent: float) -> float:
        try:
            return math.pow(self.state.log_base, exponent)
        except OverflowError:
            return math.inf

    # -- auto-range ---------------------------------------------------------

    def _apply_auto_range(self, min_value: float, max_value: float) -> None:
        if is_empty_bounds((min_value, max_value)):
            return
        self._data_extent = (min_value, max_value)
        if self.kind == "log":
            self._apply_log_auto_range(min_value, max_value)
            return
        if self.state.auto_range_includes_zero:
            min_value = min(min_value, 0.0)
            max_value = max(max_value, 0.0)
        span = max_value - min_value
        if span > 0.0:
            low_adj = self.state.lower_margin * span
            high_adj = self.state.upper_margin * span
        else:
            low_adj = high_adj = 0.5 * self.state.default_range.length
        lower, upper = min_value - low_adj, max_value + high_adj
        if not _usable_bounds(lower, upper):
            # The margin vanished against the magnitude of the data or overflowed.
            pad = max(0.5 * self.state.default_range.length, abs(min_value) * 1e-9, abs(max_value) * 1e-9)
            lower, upper = min_value - pad, max_value + pad
        if not _usable_bounds(lower, upper):
            LOGGER.warning("auto-range skipped, data extent [%r, %r] has no finite axis length", min_value, max_value)
            return
        self.set_bounds(lower, upper, notify=False, keep_auto_range=True)

    def _apply_log_auto_range(self, min_value: float, max_value: float) -> None:
        lo = self._log(min_value)
        hi = self._log(max_value)
        span = hi - lo
        if span > 0.0:
            low_adj = self.state.lower_margin * span
            high_adj = self.state.upper_margin * span
        else:
            low_adj = high_adj = 0.5 * self.state.default_range.length
        b0 = self._exp(lo - low_adj)
        b1 = self._exp(hi + high_adj)
        if b1 > b0 and math.isfinite(b1) and b1 > self.state.log_floor:
            self.set_bounds(b0, b1, notify=False, keep_auto_range=True)

    def configure_as_x_axis(self, plot: Any) -> None:
        dataset = plot.dataset
        if dataset is None:
            return
        self._configure_symbols(dataset, "x-symbols")
        if self.state.auto_range:
            self._apply_auto_range(*dataset.x_bounds())

    def configure_as_y_axis(self, plot: Any) -> None:
        dataset = plot.dataset
        if dataset is None:
            return
        self._configure_symbols(dataset, "y-symbols")
        if self.state.auto_range:
            renderer = plot.renderer
            y_range = renderer.calc_y_range(dataset) if renderer is not None else None
            if y_range is None:
                y_range = dataset.y_bounds()
            self._apply_auto_range(*y_range)

    def _configure_symbols(self, dataset: Any, key: str) -> None:
        if self._explicit_symbols:
            return
        self.state.symbols = coerce_symbols(dataset.get_property(key))

    # -- zoom / pan ---------------------------------------------------------

    def resize_range(self, factor: float, anchor_value: float, *, notify: bool = True) -> None:
        """Scale the distance from `anchor_value` to each bound by `factor`.

        A non-positive factor switches auto-range back on instead.
        """
        if factor <= 0.0:
            self.set_auto_range(True, notify=notify)
            return
        scale = self._scale_range()
        anchor = self._to_scale(anchor_value)
        left = anchor - scale.lower
        right = scale.upper - anchor
        b0 = self._from_scale(anchor - left * factor)
        b1 = self._from_scale(anchor + right * factor)
        if b1 > b0 and math.isfinite(b1 - b0) and math.isfinite(b0):
            self.set_bounds(b0, b1, notify=notify)

    def pan(self, percent: float, *, notify: bool = True) -> None:
        scale = self._scale_range()
        adj = percent * scale.length
        b0 = self._from_scale(scale.lower + adj)
        b1 = self._from_scale(scale.upper + adj)
        if b1 > b0 and math.isfinite(b0) and math.isfinite(b1):
            self.set_bounds(b0, b1, notify=notify)

    # -- ticks --------------------------------------------------------------

    def resolve_tick_label_orientation(self, edge: str) -> LabelOrientation:
        if self.style.tick_label_orientation is not None:
            return self.style.tick_label_orientation
        if is_left_or_right(edge):
            return "perpendicular"
        return "parallel"

    def calc_tick_size(self, surface: Surface, area: Rectangle, edge: str) -> float | None:
        """Pick a standard tick size whose labels fit along `edge`, or None if none does."""
        if self.kind == "symbol":
            return None
        pixels = area.length(edge)
        span = self._scale_range().length
        if span <= 0:
            raise ValueError("axis range must be > 0")
        surface.set_font(self.style.tick_label_font)
        if self.resolve_tick_label_orientation(edge) == "perpendicular":
            return self._tick_size_for_rows(surface, pixels, span)
        return self._tick_size_for_widths(surface, pixels, span)

    def _tick_size_for_rows(self, surface: Surface, pixels: float, span: float) -> float | None:
        text_height = surface.text_dim(_REFERENCE_LABEL)[1]
        if text_height <= 0:
            LOGGER.warning("surface measured zero label height; falling back to endpoint ticks")
            return None
        max_ticks = pixels / (text_height * self.style.tick_label_factor)
        if max_ticks <= 2:
            return None
        selector = self._selector
        selector.select(span / 2.0)
        tick_count = math.floor(span / selector.current_tick_size())
        moved = True
        while tick_count < max_ticks and moved:
            moved = selector.previous()
            tick_count = math.floor(span / selector.current_tick_size())
        if moved:
            selector.next()
        self._set_step_formatter()
        return selector.current_tick_size()

    def _tick_size_for_widths(self, surface: Surface, pixels: float, span: float) -> float | None:
        selector = self._selector
        selector.select(span)
        self._set_step_formatter()
        while selector.previous():
            self._set_step_formatter()
            formatter = self._tick_formatter()
            s0 = formatter.format(self.state.lower_bound)
            s1 = formatter.format(self.state.upper_bound)
            width = max(surface.text_dim(s0)[0], surface.text_dim(s1)[0])
            if width <= 0:
                if s0 and s1:
                    LOGGER.warning("surface measured zero label width; falling back to endpoint ticks")
                return None
            capacity = math.floor(pixels / (width * self.style.tick_label_factor))
            if capacity < span / selector.current_tick_size():
                # First overlapping size: step back to the last one that fitted.
                selector.next()
                self._set_step_formatter()
                break
        return selector.current_tick_size()

    def set_tick_label_format(self, fmt: NumberFormat | LogFormat | None, *, notify: bool = True) -> None:
        """Fixed tick label format; None restores the format chosen with the tick size."""
        self.tick_label_format_override = fmt
        self._changed(notify)

    def _set_step_formatter(self) -> None:
        if self.kind != "log":
            self._formatter = self._selector.current_tick_format()

    def _tick_formatter(self) -> NumberFormat | LogFormat:
        return self.tick_label_format_override or self._formatter

    def ticks(self, tick_size: float | None = None) -> list[TickMark]:
        """Tick marks for the current bounds, ascending by value and never empty."""
        symbol_ticks = self._symbol_ticks()
        if symbol_ticks:
            return symbol_ticks
        if self.kind == "symbol":
            return self._endpoint_ticks()
        result = self._step_ticks(tick_size)
        if len(result) < 2:
            return self._endpoint_ticks()
        return result

    def _symbol_ticks(self) -> list[TickMark]:
        lower, upper = self.state.lower_bound, self.state.upper_bound
        result: list[TickMark] = []
        for sym in self.state.symbols:
            if lower < sym.value < upper and (not result or sym.value > result[-1].value):
                result.append(TickMark(sym.value, sym.label))
        return result

    def _endpoint_ticks(self) -> list[TickMark]:
        formatter = self._tick_formatter()
        lower, upper = self.state.lower_bound, self.state.upper_bound
        return [TickMark(lower, formatter.format(lower)), TickMark(upper, formatter.format(upper))]

    def _step_ticks(self, tick_size: float | None) -> list[TickMark]:
        if tick_size is None or not (tick_size > 0 and math.isfinite(tick_size)):
            return []
        scale = self._scale_range()
        if scale.length / tick_size > MAX_TICK_COUNT or not math.isfinite(scale.lower / tick_size):
            return []
        formatter = self._tick_formatter()
        # Tolerance must cover both the step and the spacing of floats at the bounds.
        eps = max(tick_size * 1e-9, 4.0 * math.ulp(max(abs(scale.lower), abs(scale.upper))))
        k = math.floor(scale.lower / tick_size)
        result: list[TickMark] = []
        while True:
            t = clean_tick_value(k * tick_size, tick_size)
            k += 1
            if t < scale.lower - eps:
                continue
            if t > scale.upper + eps:
                break
            value = clean_tick_value(self._from_scale(t)) if self.kind == "log" else t
            if not result or value > result[-1].value:
                result.append(TickMark(value, formatter.format(value)))
        return result

    # -- layout and drawing -------------------------------------------------

    def reserve_space(self, surface: Surface, plot: Any, bounds: Rectangle, area: Rectangle, edge: str) -> float:
        """Pixels this axis needs along `edge`: tick marks, tick labels and the axis label."""
        edge = require_edge(edge)
        style = self.style
        space = style.tick_mark_outer_length
        if self.state.label:
            surface.set_font(style.label_font)
            space += surface.text_dim(self.state.label)[1]
            if is_top_or_bottom(edge):
                space += style.label_margin.top + style.label_margin.bottom
            else:
                space += style.label_margin.left + style.label_margin.right

        tick_size = self.calc_tick_size(surface, area, edge)
        ticks = self.ticks(tick_size)
        surface.set_font(style.tick_label_font)
        if self.resolve_tick_label_orientation(edge) == "perpendicular":
            space += max((surface.text_dim(t.label)[0] for t in ticks), default=0.0)
        else:
            space += surface.text_dim(_REFERENCE_LABEL)[1]
        if is_top_or_bottom(edge):
            space += style.tick_label_margin.top + style.tick_label_margin.bottom
        else:
            space += style.tick_label_margin.left + style.tick_label_margin.right
        return space

    def draw(self, surface: Surface, plot: Any, bounds: Rectangle, data_area: Rectangle, offset: float) -> None:
        edge = plot.axis_position(self)
        tick_size = self.calc_tick_size(surface, data_area, edge)
        ticks = self.ticks(tick_size)
        if is_left_or_right(edge):
            self._draw_vertical(surface, ticks, data_area, offset, edge == "right")
        else:
            self._draw_horizontal(surface, ticks, data_area, offset, edge == "top")

    def _draw_vertical(self, surface: Surface, ticks: list[TickMark], area: Rectangle, offset: float, is_right: bool) -> None:
        style = self.style
        x, y, w, h = area.x, area.y, area.width, area.height
        surface.set_font(style.tick_label_font)
        surface.set_fill_color(style.tick_label_color)
        max_label_width = 0.0
        for tick in ticks:
            yy = self.value_to_coordinate(tick.value, y + h, y)
            if style.grid_lines_visible:
                surface.set_line_width(style.grid_line_width)
                surface.set_line_color(style.grid_line_color)
                surface.draw_line(x, round(yy), x + w, round(yy))
            if style.tick_mark_inner_length + style.tick_mark_outer_length > 0:
                surface.set_line_width(style.tick_mark_width)
                surface.set_line_color(style.tick_mark_color)
                if is_right:
                    surface.draw_line(
                        x + w + offset - style.tick_mark_inner_length, yy,
                        x + w + offset + style.tick_mark_outer_length, yy,
                    )
                else:
                    surface.draw_line(
                        x - offset - style.tick_mark_outer_length, yy,
                        x - offset + style.tick_mark_inner_length, yy,
                    )
            surface.set_fill_color(style.tick_label_color)
            if is_right:
                adj = offset + style.tick_mark_outer_length + style.tick_label_margin.left
                dim = surface.draw_aligned_string(tick.label, x + w + adj, yy, "center_left")
            else:
                adj = offset + style.tick_mark_outer_length + style.tick_label_margin.right
                dim = surface.draw_aligned_string(tick.label, x - adj, yy, "center_right")
            max_label_width = max(max_label_width, dim[0])

        surface.set_line_color(style.axis_line_color)
        surface.set_line_width(style.axis_line_width)
        line_x = x + w + offset if is_right else x - offset
        surface.draw_line(line_x, y, line_x, y + h)

        if self.state.label:
            surface.set_font(style.label_font)
            surface.set_fill_color(style.label_color)
            adj = (
                offset
                + max_label_width
                + style.tick_mark_outer_length
                + style.tick_label_margin.left
                + style.tick_label_margin.right
            )
            if is_right:
                adj += style.label_margin.left
                surface.draw_rotated_string(self.state.label, x + w + adj, y + h / 2, "bottom_center", math.pi / 2)
            else:
                adj += style.label_margin.right
                surface.draw_rotated_string(self.state.label, x - adj, y + h / 2, "bottom_center", -math.pi / 2)

    def _draw_horizontal(self, surface: Surface, ticks: list[TickMark], area: Rectangle, offset: float, is_top: bool) -> None:
        style = self.style
        x, y, w, h = area.x, area.y, area.width, area.height
        surface.set_font(style.tick_label_font)
        gap = offset + style.tick_mark_outer_length
        gap += style.tick_label_margin.bottom if is_top else style.tick_label_margin.top
        for tick in ticks:
            xx = self.value_to_coordinate(tick.value, x, x + w)
            if style.grid_lines_visible:
                surface.set_line_width(style.grid_line_width)
                surface.set_line_color(style.grid_line_color)
                surface.draw_line(round(xx), y, round(xx), y + h)
            if style.tick_mark_inner_length + style.tick_mark_outer_length > 0:
                surface.set_line_width(style.tick_mark_width)
                surface.set_line_color(style.tick_mark_color)
                if is_top:
                    surface.draw_line(xx, y - offset - style.tick_mark_outer_length, xx, y - offset + style.tick_mark_inner_length)
                else:
                    surface.draw_line(xx, y + h + offset - style.tick_mark_inner_length, xx, y + h + offset + style.tick_mark_outer_length)
            surface.set_fill_color(style.tick_label_color)
            if is_top:
                surface.draw_aligned_string(tick.label, xx, y - gap, "bottom_center")
            else:
                surface.draw_aligned_string(tick.label, xx, y + h + gap, "top_center")

        surface.set_line_color(style.axis_line_color)
        surface.set_line_width(style.axis_line_width)
        line_y = y - offset if is_top else y + h + offset
        surface.draw_line(x, line_y, x + w, line_y)

        if self.state.label:
            surface.set_font(style.label_font)
            surface.set_fill_color(style.label_color)
            label_gap = gap + style.tick_label_margin.bottom + style.label_margin.top + style.tick_label_font.size_px
            if is_top:
                surface.draw_aligned_string(self.state.label, x + w / 2, y - label_gap, "bottom_center")
            else:
                surface.draw_aligned_string(self.state.label, x + w / 2, y + h + label_gap, "top_center")


def linear_axis(label: str | None = None, **kwargs: Any) -> ValueAxis:
    return ValueAxis(label, kind="linear", **kwargs)


def log_axis(label: str | None = None, **kwargs: Any) -> ValueAxis:
    return ValueAxis(label, kind="log", **kwargs)


def symbol_axis(label: str | None = None, **kwargs: Any) -> ValueAxis:
    return ValueAxis(label, kind="symbol", **kwargs)


def _usable_bounds(lower: float, upper: float) -> bool:
    return lower < upper and math.isfinite(upper - lower)
