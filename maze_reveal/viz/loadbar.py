import pygame

from maze_reveal.viz.scheduler import DelayScheduler, loop_with_delay


class LoadBar:
    """Fills one bar per 'loading_delay', blinks 'nb_blinks' times, starts over."""
    COLOR_BAR = (200, 200, 200)

    def __init__(self, scheduler: DelayScheduler, nb_bars: int = 10, loading_delay: float = 1000.0,
                 blinking_delay: float = 500.0, nb_blinks: int = 5):
        self.scheduler = scheduler
        self.nb_bars = nb_bars
        self.loading_delay = loading_delay
        self.blinking_delay = blinking_delay
        self.nb_blinks = nb_blinks
        self.nb_visible = 0
        self._cancel = None

    def start(self):
        self._load()

    def _load(self):
        self._cancel = loop_with_delay(
            self.scheduler, self._set_loaded, self._blink, self.nb_bars, self.loading_delay
        )

    def _blink(self):
        self._cancel = loop_with_delay(
            self.scheduler, self._set_blink, self._load, self.nb_blinks, self.blinking_delay
        )

    def _set_loaded(self, i: int):
        self.nb_visible = i + 1

    def _set_blink(self, i: int):
        self.nb_visible = self.nb_bars if i % 2 else 0

    def destroy(self):
        if self._cancel is not None:
            self._cancel()
            self._cancel = None

    def draw(self, surface, rect):
        x, y, width, height = rect
        gap = 2
        bar_w = max(1, (width - gap * (self.nb_bars - 1)) // self.nb_bars)
        for i in range(self.nb_visible):
            surface.fill(self.COLOR_BAR, pygame.Rect(x + i * (bar_w + gap), y, bar_w, height))
