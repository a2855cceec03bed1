from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
import logging
import time
from typing import Any, Callable, Protocol, Sequence

from xychart.formatting import NumberFormat
from xychart.geometry import RGBA, WHITE, Font, Rectangle
from xychart.surface import DEFAULT_LAYER, PROGRESS_LAYER, Surface, clear_layer


LOGGER = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 200
DEFAULT_TARGET_CHUNK_MS = 150.0
DEFAULT_PAUSE_MS = 100.0


@dataclass(frozen=True)
class RenderCursor:
    series_index: int = 0
    item_index: int = 0

    def exhausted(self, series_count: int) -> bool:
        return self.series_index >= series_count


def first_cursor(item_counts: Sequence[int]) -> RenderCursor:
    """Cursor at the first item of the first non-empty series."""
    for s, count in enumerate(item_counts):
        if count > 0:
            return RenderCursor(s, 0)
    return RenderCursor(len(item_counts), 0)


def advance_cursor(cursor: RenderCursor, item_counts: Sequence[int]) -> RenderCursor:
    """Next (series, item) position; ``series_index == len(item_counts)`` marks exhaustion."""
    series_count = len(item_counts)
    if cursor.exhausted(series_count):
        return cursor
    if cursor.item_index + 1 < item_counts[cursor.series_index]:
        return RenderCursor(cursor.series_index, cursor.item_index + 1)
    s = cursor.series_index + 1
    while s < series_count and item_counts[s] == 0:
        s += 1
    return RenderCursor(s, 0)


def items_processed(cursor: RenderCursor, item_counts: Sequence[int]) -> int:
    if cursor.exhausted(len(item_counts)):
        return sum(item_counts)
    return sum(item_counts[: cursor.series_index]) + cursor.item_index


@dataclass(frozen=True)
class SchedulerConfig:
    chunk_size: int = DEFAULT_CHUNK_SIZE
    target_chunk_ms: float = DEFAULT_TARGET_CHUNK_MS
    pause_ms: float = DEFAULT_PAUSE_MS
    min_chunk_size: int = 1
    max_chunk_size: int = 100_000

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be > 0")
        if self.target_chunk_ms <= 0:
            raise ValueError("target_chunk_ms must be > 0")
        if self.pause_ms < 0:
            raise ValueError("pause_ms must be >= 0")
        if self.min_chunk_size <= 0:
            raise ValueError("min_chunk_size must be > 0")
        if self.max_chunk_size < self.min_chunk_size:
            raise ValueError("max_chunk_size must be >= min_chunk_size")


@dataclass(frozen=True)
class ProgressOverlay:
    """Percent-complete bar drawn on the progress layer between chunks."""

    done_color: RGBA = (100, 100, 200, 200)
    remaining_color: RGBA = (100, 100, 100, 100)
    label_font: Font = field(default_factory=lambda: Font("sans-serif", 12.0))
    label_color: RGBA = WHITE
    label_format: NumberFormat = field(default_factory=lambda: NumberFormat(0))

    def draw(self, surface: Surface, area: Rectangle, fraction: float) -> None:
        fraction = min(1.0, max(0.0, fraction))
        surface.set_layer(PROGRESS_LAYER)
        surface.clear()
        x = area.center_x
        y = area.max_y - 0.1 * area.height
        width = area.width / 1.2
        height = self.label_font.size_px + 4.0
        x0 = x - width / 2.0
        y0 = y - height / 2.0
        x1 = x + width / 2.0
        px = x0 + width * fraction
        surface.set_fill_color(self.done_color)
        surface.fill_rect(x0, y0, px - x0, height)
        surface.set_fill_color(self.remaining_color)
        surface.fill_rect(px, y0, x1 - px, height)
        surface.set_fill_color(self.label_color)
        surface.set_font(self.label_font)
        surface.draw_aligned_string(f"{self.label_format.format(fraction * 100.0)}%", x, y0, "top_center")
        surface.set_layer(DEFAULT_LAYER)


class Cancellable(Protocol):
    def cancel(self) -> Any: ...


Deferrer = Callable[[float, Callable[[], None]], Cancellable]


def event_loop_deferrer() -> Deferrer | None:
    """`call_later` on the running asyncio loop, or None outside one."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        return None
    return loop.call_later


@dataclass
class RenderJob:
    surface: Surface
    plot: Any
    renderer: Any
    dataset: Any
    data_area: Rectangle

    def item_counts(self) -> list[int]:
        return [self.dataset.item_count(s) for s in range(self.dataset.series_count())]


class RenderScheduler:
    """Draws a job's items in adaptively sized chunks separated by event-loop pauses.

    At most one continuation is pending at a time; `start` cancels any
    previous cycle before drawing. Datasets with no more than two chunks of
    items, or hosts without a deferrer, are drawn synchronously.
    """

    def __init__(
        self,
        config: SchedulerConfig | None = None,
        *,
        overlay: ProgressOverlay | None = None,
        defer: Deferrer | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.config = config if config is not None else SchedulerConfig()
        self.overlay = overlay if overlay is not None else ProgressOverlay()
        self._defer = defer
        self._clock = clock
        self._handle: Cancellable | None = None
        self._job: RenderJob | None = None
        self._counts: list[int] = []
        self._cursor = RenderCursor()
        self._chunk_size = self.config.chunk_size
        self._cycle = 0
        self._on_complete: Callable[[], Any] | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def cursor(self) -> RenderCursor:
        return self._cursor

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    def start(self, job: RenderJob, on_complete: Callable[[], Any] | None = None) -> bool:
        """Begin a draw cycle; returns True when a continuation was scheduled."""
        self.cancel()
        self._cycle += 1
        self._job = job
        self._counts = job.item_counts()
        self._cursor = first_cursor(self._counts)
        self._chunk_size = self.config.chunk_size
        self._on_complete = on_complete
        total = sum(self._counts)

        defer = self._defer if self._defer is not None else event_loop_deferrer()
        if total <= 2 * self.config.chunk_size or defer is None:
            if defer is None and total > 2 * self.config.chunk_size:
                LOGGER.debug("no deferrer available; drawing %d items synchronously", total)
            draw_all_items(job)
            self._cursor = RenderCursor(len(self._counts), 0)
            self._finish()
            return False

        LOGGER.debug("render cycle %d started: %d items in %d series", self._cycle, total, len(self._counts))
        self._draw_chunk(2 * self.config.chunk_size)
        if self._cursor.exhausted(len(self._counts)):
            self._finish()
            return False
        self._submit(defer)
        return True

    def cancel(self) -> None:
        handle, self._handle = self._handle, None
        if handle is None:
            return
        handle.cancel()
        LOGGER.debug("render cycle %d cancelled at %s", self._cycle, self._cursor)
        if self._job is not None:
            clear_layer(self._job.surface, PROGRESS_LAYER)

    def _submit(self, defer: Deferrer) -> None:
        job = self._job
        assert job is not None
        self.overlay.draw(job.surface, job.data_area, items_processed(self._cursor, self._counts) / sum(self._counts))
        cycle = self._cycle
        self._handle = defer(self.config.pause_ms / 1000.0, lambda: self._step(cycle, defer))

    def _step(self, cycle: int, defer: Deferrer) -> None:
        if cycle != self._cycle:
            return
        self._handle = None
        started = self._clock()
        self._draw_chunk(self._chunk_size)
        elapsed_ms = (self._clock() - started) * 1000.0
        if self._cursor.exhausted(len(self._counts)):
            assert self._job is not None
            clear_layer(self._job.surface, PROGRESS_LAYER)
            self._finish()
            return
        self._rescale(elapsed_ms)
        self._submit(defer)

    def _rescale(self, elapsed_ms: float) -> None:
        cfg = self.config
        scaled = int(self._chunk_size * (cfg.target_chunk_ms / max(elapsed_ms, 1e-3)))
        new_size = max(cfg.min_chunk_size, min(cfg.max_chunk_size, scaled))
        if new_size != self._chunk_size:
            LOGGER.debug("chunk size %d -> %d after %.1fms", self._chunk_size, new_size, elapsed_ms)
        self._chunk_size = new_size

    def _draw_chunk(self, size: int) -> None:
        job = self._job
        assert job is not None
        surface = job.surface
        passes = job.renderer.pass_count()
        series_count = len(self._counts)
        surface.begin_group("chunk")
        surface.save()
        surface.set_clip(job.data_area)
        drawn = 0
        while drawn < size and not self._cursor.exhausted(series_count):
            for pass_index in range(passes):
                job.renderer.draw_item(
                    surface, job.data_area, job.plot, job.dataset,
                    self._cursor.series_index, self._cursor.item_index, pass_index,
                )
            self._cursor = advance_cursor(self._cursor, self._counts)
            drawn += 1
        surface.restore()
        surface.end_group()

    def _finish(self) -> None:
        LOGGER.debug("render cycle %d finished", self._cycle)
        callback, self._on_complete = self._on_complete, None
        if callback is not None:
            callback()


def draw_all_items(job: RenderJob) -> None:
    """Every pass over every item, clipped to the data area, inside a "data-area" group."""
    surface = job.surface
    surface.begin_group("data-area")
    surface.save()
    surface.set_clip(job.data_area)
    counts = job.item_counts()
    for pass_index in range(job.renderer.pass_count()):
        for s, count in enumerate(counts):
            for i in range(count):
                job.renderer.draw_item(surface, job.data_area, job.plot, job.dataset, s, i, pass_index)
    surface.restore()
    surface.end_group()
