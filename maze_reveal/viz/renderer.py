import logging
import random
from typing import Optional

import pygame

from maze_reveal.core.grid import Grid, Position
from maze_reveal.viz.loadbar import LoadBar
from maze_reveal.viz.painter import MazePainter
from maze_reveal.viz.recorder import VideoRecorder
from maze_reveal.viz.reveal import RevealDriver, RevealSettings
from maze_reveal.viz.scheduler import ClockScheduler, loop_with_delay

logger = logging.getLogger(__name__)


def success_message(rng: random.Random) -> str:
    letters = Renderer.SUCCESS_LETTERS
    return f"{letters[int(rng.random() * len(letters))]}{int(rng.random() * 100)}"


class Renderer:
    COLOR_BG = (10, 10, 10)
    SUCCESS_LETTERS = "KQVWXYZЖБИФДЯЛ"
    PADDING = 40
    BAR_HEIGHT = 12

    def __init__(self, nb_rows=8, nb_columns=8, cell_size=15, border_width=3,
                 settings: Optional[RevealSettings] = None, blink_count=6, blink_delay=500.0,
                 seed=None, once=False, record=False):
        self.nb_rows = nb_rows
        self.nb_columns = nb_columns
        self.cell_size = cell_size
        self.border_width = border_width
        self.settings = settings or RevealSettings()
        self.blink_count = blink_count
        self.blink_delay = blink_delay
        self.once = once
        # One source for every run: each maze differs, the sequence replays with the seed
        self.rng = random.Random(seed)

        # Driven from the frame loop, clocked by pygame ticks
        self.scheduler = ClockScheduler(clock=pygame.time.get_ticks)
        self.recorder = VideoRecorder(active=record, label=f"reveal_{nb_columns}x{nb_rows}")
        self.load_bar = LoadBar(self.scheduler)

        self.painter: Optional[MazePainter] = None
        self.driver: Optional[RevealDriver] = None
        self.runs_completed = 0
        self.message: Optional[str] = None
        self._cancel_blink = None

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None

        canvas_w = nb_columns * cell_size + border_width
        canvas_h = nb_rows * cell_size + border_width
        self.screen_width = max(canvas_w + self.PADDING * 2, 320)
        self.screen_height = canvas_h + self.PADDING * 3 + self.BAR_HEIGHT
        # Maze canvas position on screen; also the recorded area
        self.maze_rect = ((self.screen_width - canvas_w) // 2, self.PADDING, canvas_w, canvas_h)

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"Maze Reveal - {self.nb_columns}x{self.nb_rows}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.painter = MazePainter.with_offscreen_surface(
            self.nb_rows, self.nb_columns, cell_size=self.cell_size, border_width=self.border_width
        )

    def build_maze(self):
        """Starts a fresh reveal on a fresh grid."""
        self.message = None
        self.driver = RevealDriver(
            self.nb_rows, self.nb_columns, self.scheduler,
            painter=self.painter, on_progress=self.on_progress,
            rng=self.rng, settings=self.settings,
        )
        self.driver.start()

    def on_progress(self, grid: Grid, is_done: bool, coords: Position):
        logger.debug(f"Carved into {tuple(coords)}" if not is_done else f"Done at {tuple(coords)}")
        if is_done:
            self.runs_completed += 1
            self.recorder.mark_run(self.runs_completed)
            self.blink_message(grid)

    def blink_message(self, grid: Grid):
        code = success_message(self.rng)
        logger.info(f"Maze #{self.runs_completed} complete: {code}")

        def toggle(i):
            # Even frames show the code, odd frames show the maze again
            if i % 2 == 0:
                self.message = code
                self._paint("display_message", code)
            else:
                self.message = None
                self._paint("draw_labyrinth", grid)

        self._cancel_blink = loop_with_delay(
            self.scheduler, toggle, self.after_blink, self.blink_count, self.blink_delay
        )

    def _paint(self, method: str, *args):
        if self.painter is None:
            return
        try:
            getattr(self.painter, method)(*args)
        except pygame.error as e:
            # Later drivers are built without a painter and reveal blind
            logger.warning(f"Drawing failed ({e}), continuing without rendering")
            self.painter = None

    def after_blink(self):
        self._cancel_blink = None
        if self.once:
            self.running = False
            return
        self.driver.destroy()
        self.build_maze()

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN and event.key in (pygame.K_ESCAPE, pygame.K_q):
                self.running = False

    def draw_frame(self):
        self.surface.fill(self.COLOR_BG)
        left, top, canvas_w, canvas_h = self.maze_rect
        if self.painter is not None and self.painter.surface is not None:
            self.surface.blit(self.painter.surface, (left, top))
        self.load_bar.draw(self.surface, (left, top + canvas_h + self.PADDING, canvas_w, self.BAR_HEIGHT))

    def draw_hud(self):
        fps = int(self.clock.get_fps())
        state = self.driver.state.value if self.driver else "-"
        steps = self.driver.carver.steps if self.driver and self.driver.carver else 0
        rec_status = " | REC" if self.recorder.active else ""
        text = f"FPS: {fps} | {state} | Steps: {steps} | Runs: {self.runs_completed}{rec_status}"
        lbl = self.font.render(text, True, (255, 255, 255))
        self.surface.blit(lbl, (10, 10))

    def run_loop(self):
        self.load_bar.start()
        self.build_maze()

        while self.running:
            self.handle_input()
            self.scheduler.run_pending()

            self.draw_frame()
            self.draw_hud()
            pygame.display.flip()

            if self.recorder.active:
                self.recorder.capture_frame(self.surface, area=self.maze_rect)

            self.clock.tick(60)

        self.teardown()

    def teardown(self):
        if self._cancel_blink is not None:
            self._cancel_blink()
            self._cancel_blink = None
        if self.driver is not None:
            self.driver.destroy()
        self.load_bar.destroy()
        self.scheduler.cancel_all()
        self.recorder.stop()
        pygame.quit()
