import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

import pygame

from maze_reveal.algo.stepwise import StepwiseCarver
from maze_reveal.core.events import Done
from maze_reveal.core.grid import Grid, Position, create_grid
from maze_reveal.core.shuffle import RandomSource, make_rng
from maze_reveal.viz.painter import MazePainter
from maze_reveal.viz.scheduler import DelayScheduler, loop_with_delay

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[Grid, bool, Position], None]


@dataclass
class RevealSettings:
    intro_delay: float = 100.0  # ms between intro sweep frames
    build_delay: float = 100.0  # ms between carve steps


class RevealState(Enum):
    IDLE = "idle"
    INTRO = "intro"
    CARVING = "carving"
    DONE = "done"
    DESTROYED = "destroyed"


class RevealDriver:
    """
    Plays the intro sweep, then carves a fresh maze one wall per
    'build_delay', repainting and reporting each step to 'on_progress'.

    One driver runs one maze. To go again, build a new driver.
    """

    def __init__(self, nb_rows: int, nb_columns: int, scheduler: DelayScheduler,
                 painter: Optional[MazePainter] = None, on_progress: Optional[ProgressCallback] = None,
                 rng: Optional[RandomSource] = None, seed: int = None,
                 settings: Optional[RevealSettings] = None):
        self.grid = create_grid(nb_rows, nb_columns)
        self.scheduler = scheduler
        self.painter = painter
        self.on_progress = on_progress
        self.rng = rng if rng is not None else make_rng(seed)
        self.settings = settings or RevealSettings()

        self.state = RevealState.IDLE
        self.carver: Optional[StepwiseCarver] = None
        self.intro_frames = 0
        self._handle = None
        self._cancel_intro = None
        self._warned_no_surface = False

    @property
    def is_done(self) -> bool:
        return self.state is RevealState.DONE

    def start(self):
        if self.state is not RevealState.IDLE:
            raise RuntimeError(f"Cannot start a reveal that is {self.state.value}")
        logger.debug("Starting reveal of %dx%d maze", self.grid.width, self.grid.height)
        self.state = RevealState.INTRO
        # Inclusive sweep: one frame per column
        self._cancel_intro = loop_with_delay(
            self.scheduler, self._intro_frame, self._start_carving,
            self.grid.width, self.settings.intro_delay
        )

    def _intro_frame(self, column: int):
        self.intro_frames += 1
        self._paint("draw_intro_step", column)

    def _start_carving(self):
        self._cancel_intro = None
        if self.state is not RevealState.INTRO:
            return
        self.state = RevealState.CARVING
        self.carver = StepwiseCarver(self.grid, rng=self.rng)
        self._handle = self.scheduler.call_later(self.settings.build_delay, self._step)

    def _step(self):
        self._handle = None
        if self.state is not RevealState.CARVING:
            return

        event = self.carver.advance()
        self._paint("draw_labyrinth", event.grid)

        if isinstance(event, Done):
            self.state = RevealState.DONE
            logger.info("Maze %dx%d revealed in %d steps",
                        self.grid.width, self.grid.height, self.carver.steps)
            self._notify(event.grid, True, event.coords)
            return

        self._notify(event.grid, False, event.coords)
        # The consumer may have destroyed us from inside its callback
        if self.state is RevealState.CARVING:
            self._handle = self.scheduler.call_later(self.settings.build_delay, self._step)

    def _notify(self, grid: Grid, is_done: bool, coords: Position):
        if self.on_progress is not None:
            self.on_progress(grid, is_done, coords)

    def _paint(self, method: str, *args):
        painter = self.painter
        if painter is None or painter.surface is None:
            if not self._warned_no_surface:
                logger.warning("No drawing surface, revealing maze without rendering")
                self._warned_no_surface = True
            return
        try:
            getattr(painter, method)(*args)
        except pygame.error as e:
            logger.warning(f"Drawing failed ({e}), continuing without rendering")
            self.painter = None
            self._warned_no_surface = True

    def destroy(self):
        if self._cancel_intro is not None:
            self._cancel_intro()
            self._cancel_intro = None
        self.scheduler.cancel(self._handle)
        self._handle = None
        self.state = RevealState.DESTROYED
        self.carver = None
        self.painter = None
        self.on_progress = None
