import unittest
import sys
import os
import time

import pygame

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from maze_reveal.algo.dfs import generate_maze
from maze_reveal.core.complexity import is_perfect
from maze_reveal.core.grid import Position
from maze_reveal.viz.painter import MazePainter
from maze_reveal.viz.reveal import RevealDriver, RevealSettings, RevealState
from maze_reveal.viz.scheduler import ClockScheduler
from helpers import FakeClock, SequenceRandom, run_for

class RecordingPainter(MazePainter):
    def __init__(self, nb_rows, nb_columns):
        super().__init__(nb_rows, nb_columns, surface=object())
        self.calls = []

    def draw_intro_step(self, column):
        self.calls.append(("intro", column))

    def draw_labyrinth(self, grid):
        self.calls.append(("maze", grid.open_wall_count()))

class BrokenSurface:
    def fill(self, color, rect=None):
        raise pygame.error("surface lost")

class TestRevealDriver(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.scheduler = ClockScheduler(clock=self.clock)
        self.events = []

    def on_progress(self, grid, is_done, coords):
        self.events.append((is_done, coords))

    def make_driver(self, rows=3, cols=4, **kwargs):
        kwargs.setdefault("seed", 5)
        return RevealDriver(rows, cols, self.scheduler, on_progress=self.on_progress, **kwargs)

    def test_full_sequence(self):
        rows, cols = 3, 4
        painter = RecordingPainter(rows, cols)
        driver = self.make_driver(rows, cols, painter=painter)
        driver.start()
        self.assertEqual(driver.state, RevealState.INTRO)

        # Intro (4 * 100ms) + one step per cell (12 * 100ms)
        run_for(self.scheduler, self.clock, 1700)

        self.assertTrue(driver.is_done)
        self.assertEqual(len(self.events), rows * cols)
        self.assertEqual([done for done, _ in self.events], [False] * (rows * cols - 1) + [True])
        self.assertTrue(is_perfect(driver.grid))
        self.assertEqual(self.scheduler.pending, 0)

        # Inclusive sweep: one frame per column, in order, before any maze frame
        intro = [c for c in painter.calls if c[0] == "intro"]
        self.assertEqual(intro, [("intro", i) for i in range(cols)])
        self.assertEqual(painter.calls[:cols], intro)
        self.assertEqual(driver.intro_frames, cols)
        self.assertEqual(painter.calls[-1], ("maze", rows * cols - 1))

    def test_cadence(self):
        driver = self.make_driver(2, 2, settings=RevealSettings(intro_delay=50, build_delay=200))
        driver.start()
        # Intro done at 100ms, first step at 300ms
        run_for(self.scheduler, self.clock, 290)
        self.assertEqual(self.events, [])
        run_for(self.scheduler, self.clock, 10)
        self.assertEqual(len(self.events), 1)
        run_for(self.scheduler, self.clock, 190)
        self.assertEqual(len(self.events), 1)
        run_for(self.scheduler, self.clock, 10)
        self.assertEqual(len(self.events), 2)

    def test_same_maze_as_batch(self):
        driver = self.make_driver(5, 6, seed=21)
        driver.start()
        run_for(self.scheduler, self.clock, 5000)
        self.assertTrue(driver.is_done)
        self.assertEqual(driver.grid.snapshot(), generate_maze(5, 6, seed=21).snapshot())

    def test_fixed_trace_coords(self):
        driver = self.make_driver(2, 2, rng=SequenceRandom([0.0, 0.0]))
        driver.start()
        run_for(self.scheduler, self.clock, 1000)
        self.assertEqual(self.events, [
            (False, Position(1, 0)),
            (False, Position(1, 1)),
            (False, Position(0, 1)),
            (True, Position(0, 0)),
        ])

    def test_single_cell(self):
        driver = self.make_driver(1, 1)
        driver.start()
        run_for(self.scheduler, self.clock, 500)
        self.assertEqual(self.events, [(True, Position(0, 0))])

    def test_destroy_mid_carve(self):
        driver = self.make_driver(4, 4)
        driver.start()
        run_for(self.scheduler, self.clock, 800)
        seen = len(self.events)
        self.assertGreater(seen, 0)

        driver.destroy()
        self.assertEqual(driver.state, RevealState.DESTROYED)
        self.assertEqual(self.scheduler.pending, 0)
        run_for(self.scheduler, self.clock, 5000)
        self.assertEqual(len(self.events), seen)

    def test_destroy_during_intro(self):
        painter = RecordingPainter(3, 4)
        driver = self.make_driver(3, 4, painter=painter)
        driver.start()
        run_for(self.scheduler, self.clock, 150)
        driver.destroy()
        run_for(self.scheduler, self.clock, 5000)
        self.assertEqual(self.events, [])
        self.assertEqual(painter.calls, [("intro", 0), ("intro", 1)])
        self.assertIsNone(driver.carver)

    def test_destroy_from_callback(self):
        holder = {}

        def stop_after_two(grid, is_done, coords):
            self.events.append((is_done, coords))
            if len(self.events) == 2:
                holder["driver"].destroy()

        driver = RevealDriver(4, 4, self.scheduler, on_progress=stop_after_two, seed=2)
        holder["driver"] = driver
        driver.start()
        run_for(self.scheduler, self.clock, 5000)
        self.assertEqual(len(self.events), 2)
        self.assertEqual(self.scheduler.pending, 0)

    def test_destroy_stops_events_in_real_time(self):
        scheduler = ClockScheduler()
        settings = RevealSettings(intro_delay=1, build_delay=1)
        driver = RevealDriver(10, 10, scheduler, on_progress=self.on_progress, seed=8, settings=settings)
        driver.start()

        deadline = time.monotonic() + 5.0
        while len(self.events) < 3 and time.monotonic() < deadline:
            scheduler.run_pending()
            time.sleep(0.002)
        self.assertGreaterEqual(len(self.events), 3)

        driver.destroy()
        seen = len(self.events)
        end = time.monotonic() + 0.1
        while time.monotonic() < end:
            scheduler.run_pending()
            time.sleep(0.002)
        self.assertEqual(len(self.events), seen)

    def test_start_twice(self):
        driver = self.make_driver()
        driver.start()
        with self.assertRaises(RuntimeError):
            driver.start()

    def test_no_restart_after_destroy(self):
        driver = self.make_driver()
        driver.destroy()
        with self.assertRaises(RuntimeError):
            driver.start()

    def test_invalid_dimensions(self):
        with self.assertRaises(ValueError):
            self.make_driver(0, 4)

    def test_missing_surface_is_tolerated(self):
        driver = self.make_driver(3, 3)
        with self.assertLogs("maze_reveal.viz.reveal", level="WARNING") as logs:
            driver.start()
            run_for(self.scheduler, self.clock, 2000)
        self.assertTrue(driver.is_done)
        self.assertEqual(len(self.events), 9)
        # Warned once, not once per frame
        self.assertEqual(sum("without rendering" in line for line in logs.output), 1)

    def test_painter_without_surface(self):
        driver = self.make_driver(2, 3, painter=MazePainter(2, 3))
        with self.assertLogs("maze_reveal.viz.reveal", level="WARNING"):
            driver.start()
            run_for(self.scheduler, self.clock, 2000)
        self.assertTrue(driver.is_done)

    def test_broken_surface_is_tolerated(self):
        driver = self.make_driver(3, 3, painter=MazePainter(3, 3, surface=BrokenSurface()))
        with self.assertLogs("maze_reveal.viz.reveal", level="WARNING") as logs:
            driver.start()
            run_for(self.scheduler, self.clock, 2000)
        self.assertTrue(driver.is_done)
        self.assertIsNone(driver.painter)
        self.assertTrue(any("surface lost" in line for line in logs.output))
        self.assertEqual(len(self.events), 9)

if __name__ == '__main__':
    unittest.main()
