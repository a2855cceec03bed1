from __future__ import annotations

import asyncio
import unittest
from typing import Callable

from xychart.dataset import XYDataset
from xychart.geometry import Rectangle
from xychart.scheduler import (
    ProgressOverlay,
    RenderCursor,
    RenderJob,
    RenderScheduler,
    SchedulerConfig,
    advance_cursor,
    first_cursor,
    items_processed,
)
from xychart.svg import SvgSurface


AREA = Rectangle(0.0, 0.0, 200.0, 100.0)


class RecordingRenderer:
    def __init__(self, passes: int = 1) -> None:
        self.passes = passes
        self.drawn: list[tuple[int, int, int]] = []

    def pass_count(self) -> int:
        return self.passes

    def draw_item(self, surface, data_area, plot, dataset, series_index, item_index, pass_index) -> None:
        self.drawn.append((series_index, item_index, pass_index))


class ManualHandle:
    def __init__(self, callback: Callable[[], None]) -> None:
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualDeferrer:
    """Collects deferred callbacks so a test can run them one at a time."""

    def __init__(self) -> None:
        self.handles: list[ManualHandle] = []
        self.delays: list[float] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(callback)
        self.delays.append(delay)
        self.handles.append(handle)
        return handle

    def active(self) -> list[ManualHandle]:
        return [h for h in self.handles if not h.cancelled and h.callback is not None]

    def run_next(self) -> bool:
        for handle in self.handles:
            if not handle.cancelled and handle.callback is not None:
                callback, handle.callback = handle.callback, None
                callback()
                return True
        return False

    def run_all(self) -> int:
        steps = 0
        while self.run_next():
            steps += 1
        return steps


class SteppingClock:
    def __init__(self, step: float) -> None:
        self.step = step
        self.now = 0.0

    def __call__(self) -> float:
        self.now += self.step
        return self.now


def _dataset(*counts: int) -> XYDataset:
    dataset = XYDataset()
    for s, count in enumerate(counts):
        key = f"s{s}"
        for i in range(count):
            dataset.add(key, float(i), float(i), notify=False)
        if count == 0:
            dataset.add(key, 0.0, 0.0, notify=False)
            dataset.remove(s, 0, notify=False)
    return dataset


def _job(dataset: XYDataset, renderer: RecordingRenderer, surface: SvgSurface | None = None) -> RenderJob:
    return RenderJob(surface or SvgSurface(200.0, 100.0), None, renderer, dataset, AREA)


def _progress_children(surface: SvgSurface) -> int:
    layer = surface.root.find("g[@class='layer-progress']")
    return 0 if layer is None else len(list(layer))


class CursorTests(unittest.TestCase):
    def test_first_cursor_skips_empty_series(self) -> None:
        self.assertEqual(first_cursor([0, 3, 0, 2]), RenderCursor(1, 0))
        self.assertEqual(first_cursor([0, 0]), RenderCursor(2, 0))
        self.assertTrue(first_cursor([]).exhausted(0))

    def test_advance_visits_every_item_in_order(self) -> None:
        counts = [0, 3, 0, 2]
        cursor = first_cursor(counts)
        visited = []
        while not cursor.exhausted(len(counts)):
            visited.append((cursor.series_index, cursor.item_index))
            cursor = advance_cursor(cursor, counts)
        self.assertEqual(visited, [(1, 0), (1, 1), (1, 2), (3, 0), (3, 1)])
        self.assertEqual(cursor, RenderCursor(4, 0))
        self.assertEqual(advance_cursor(cursor, counts), cursor)

    def test_items_processed(self) -> None:
        counts = [3, 4]
        self.assertEqual(items_processed(RenderCursor(0, 0), counts), 0)
        self.assertEqual(items_processed(RenderCursor(1, 2), counts), 5)
        self.assertEqual(items_processed(RenderCursor(2, 0), counts), 7)

    def test_config_validation(self) -> None:
        with self.assertRaises(ValueError):
            SchedulerConfig(chunk_size=0)
        with self.assertRaises(ValueError):
            SchedulerConfig(target_chunk_ms=0.0)
        with self.assertRaises(ValueError):
            SchedulerConfig(pause_ms=-1.0)
        with self.assertRaises(ValueError):
            SchedulerConfig(min_chunk_size=10, max_chunk_size=5)


class RenderSchedulerTests(unittest.TestCase):
    def _scheduler(self, deferrer: ManualDeferrer, *, chunk_size: int = 2, clock_step: float = 0.0625) -> RenderScheduler:
        config = SchedulerConfig(chunk_size=chunk_size, target_chunk_ms=150.0, pause_ms=100.0)
        return RenderScheduler(config, defer=deferrer, clock=SteppingClock(clock_step))

    def test_small_jobs_draw_synchronously(self) -> None:
        deferrer = ManualDeferrer()
        scheduler = self._scheduler(deferrer)
        renderer = RecordingRenderer(passes=2)
        done: list[bool] = []

        scheduled = scheduler.start(_job(_dataset(2, 2), renderer), on_complete=lambda: done.append(True))

        self.assertFalse(scheduled)
        self.assertEqual(deferrer.handles, [])
        self.assertEqual(len(renderer.drawn), 8)
        # Synchronous drawing runs pass by pass.
        self.assertEqual([d[2] for d in renderer.drawn], [0, 0, 0, 0, 1, 1, 1, 1])
        self.assertEqual(done, [True])
        self.assertFalse(scheduler.pending)

    def test_chunked_draw_visits_every_item_once_in_order(self) -> None:
        deferrer = ManualDeferrer()
        scheduler = self._scheduler(deferrer)
        renderer = RecordingRenderer()
        dataset = _dataset(3, 4, 0, 5)
        done: list[bool] = []

        self.assertTrue(scheduler.start(_job(dataset, renderer), on_complete=lambda: done.append(True)))
        self.assertEqual(len(renderer.drawn), 4)
        self.assertTrue(scheduler.pending)
        self.assertEqual(deferrer.delays[0], 0.1)

        deferrer.run_all()

        expected = [(0, i, 0) for i in range(3)] + [(1, i, 0) for i in range(4)] + [(3, i, 0) for i in range(5)]
        self.assertEqual(renderer.drawn, expected)
        self.assertEqual(done, [True])
        self.assertFalse(scheduler.pending)
        self.assertTrue(scheduler.cursor.exhausted(dataset.series_count()))

    def test_all_passes_drawn_per_item_when_chunked(self) -> None:
        deferrer = ManualDeferrer()
        scheduler = self._scheduler(deferrer)
        renderer = RecordingRenderer(passes=2)
        scheduler.start(_job(_dataset(6), renderer))
        deferrer.run_all()
        self.assertEqual(renderer.drawn[:4], [(0, 0, 0), (0, 0, 1), (0, 1, 0), (0, 1, 1)])
        self.assertEqual(len(renderer.drawn), 12)

    def test_restart_cancels_previous_cycle(self) -> None:
        deferrer = ManualDeferrer()
        scheduler = self._scheduler(deferrer)
        first = RecordingRenderer()
        second = RecordingRenderer()

        scheduler.start(_job(_dataset(10), first))
        scheduler.start(_job(_dataset(8), second))

        self.assertEqual(len(deferrer.active()), 1)
        self.assertTrue(deferrer.handles[0].cancelled)
        deferrer.run_all()
        self.assertEqual(len(first.drawn), 4)
        self.assertEqual(len(second.drawn), 8)

    def test_stale_callback_is_ignored(self) -> None:
        deferrer = ManualDeferrer()
        scheduler = self._scheduler(deferrer)
        first = RecordingRenderer()
        scheduler.start(_job(_dataset(10), first))
        stale = deferrer.handles[0].callback
        scheduler.start(_job(_dataset(10), RecordingRenderer()))

        stale()

        self.assertEqual(len(first.drawn), 4)

    def test_cancel_clears_progress_layer(self) -> None:
        deferrer = ManualDeferrer()
        scheduler = self._scheduler(deferrer)
        surface = SvgSurface(200.0, 100.0)
        scheduler.start(_job(_dataset(10), RecordingRenderer(), surface))
        self.assertGreater(_progress_children(surface), 0)

        scheduler.cancel()

        self.assertFalse(scheduler.pending)
        self.assertEqual(_progress_children(surface), 0)
        self.assertEqual(surface.layer, "default")

    def test_progress_overlay_removed_on_completion(self) -> None:
        deferrer = ManualDeferrer()
        scheduler = self._scheduler(deferrer)
        surface = SvgSurface(200.0, 100.0)
        scheduler.start(_job(_dataset(10), RecordingRenderer(), surface))

        texts = [t.text for t in surface.root.find("g[@class='layer-progress']").iter("text")]
        self.assertEqual(texts, ["40%"])

        deferrer.run_all()
        self.assertEqual(_progress_children(surface), 0)

    def test_chunk_size_rescales_toward_target(self) -> None:
        deferrer = ManualDeferrer()
        # Each chunk appears to take 62.5ms against a 150ms target.
        scheduler = self._scheduler(deferrer, clock_step=0.0625)
        scheduler.start(_job(_dataset(20), RecordingRenderer()))
        deferrer.run_next()
        self.assertEqual(scheduler.chunk_size, 4)

        slow_deferrer = ManualDeferrer()
        slow = self._scheduler(slow_deferrer, clock_step=0.5)
        slow.start(_job(_dataset(20), RecordingRenderer()))
        slow_deferrer.run_next()
        self.assertEqual(slow.chunk_size, 1)

    def test_without_deferrer_outside_event_loop_draws_synchronously(self) -> None:
        scheduler = RenderScheduler(SchedulerConfig(chunk_size=2))
        renderer = RecordingRenderer()
        with self.assertLogs("xychart.scheduler", level="DEBUG") as logs:
            scheduled = scheduler.start(_job(_dataset(10), renderer))
        self.assertFalse(scheduled)
        self.assertEqual(len(renderer.drawn), 10)
        self.assertTrue(any("synchronously" in line for line in logs.output))


class ProgressOverlayTests(unittest.TestCase):
    def test_bar_split_matches_fraction(self) -> None:
        surface = SvgSurface(240.0, 100.0)
        ProgressOverlay().draw(surface, Rectangle(0.0, 0.0, 240.0, 100.0), 0.25)
        layer = surface.root.find("g[@class='layer-progress']")
        rects = layer.findall("rect")
        self.assertEqual([r.get("width") for r in rects], ["50", "150"])
        self.assertEqual(layer.find("text").text, "25%")
        self.assertEqual(surface.layer, "default")


class EventLoopSchedulerTests(unittest.IsolatedAsyncioTestCase):
    async def test_running_loop_drives_chunks(self) -> None:
        scheduler = RenderScheduler(SchedulerConfig(chunk_size=2, pause_ms=0.0))
        renderer = RecordingRenderer()
        finished = asyncio.Event()

        scheduled = scheduler.start(_job(_dataset(9), renderer), on_complete=finished.set)

        self.assertTrue(scheduled)
        await asyncio.wait_for(finished.wait(), timeout=5.0)
        self.assertEqual(len(renderer.drawn), 9)
        self.assertFalse(scheduler.pending)


if __name__ == "__main__":
    unittest.main()
