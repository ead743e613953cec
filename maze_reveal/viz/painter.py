import logging
from typing import Optional, Tuple

import pygame

from maze_reveal.core.grid import Cell, Grid

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]


class MazePainter:
    """
    Draws maze states onto any surface exposing pygame's fill(color, rect).
    Walls are plain filled rectangles 'border_width' thick, so the surface
    measures (cols * cell_size + border_width) by (rows * cell_size + border_width).
    A missing surface turns every draw call into a no-op.
    """
    COLOR_BG = (10, 10, 10)
    COLOR_WALL = (200, 200, 200)

    def __init__(self, nb_rows: int, nb_columns: int, cell_size: int = 15, border_width: int = 3,
                 surface=None, bg_color: Color = None, wall_color: Color = None):
        self.nb_rows = nb_rows
        self.nb_columns = nb_columns
        self.cell_size = cell_size
        self.border_width = border_width
        self.bg_color = bg_color or self.COLOR_BG
        self.wall_color = wall_color or self.COLOR_WALL
        self.surface = surface
        self._font = None

    @classmethod
    def with_offscreen_surface(cls, nb_rows: int, nb_columns: int, **kwargs) -> "MazePainter":
        painter = cls(nb_rows, nb_columns, **kwargs)
        painter.surface = pygame.Surface(painter.get_canvas_size())
        return painter

    def get_canvas_size(self) -> Tuple[int, int]:
        return (self.nb_columns * self.cell_size + self.border_width,
                self.nb_rows * self.cell_size + self.border_width)

    def _fill_frame(self):
        # Wall-colored canvas with the background inset by one border
        width, height = self.get_canvas_size()
        b = self.border_width
        self.surface.fill(self.wall_color)
        self.surface.fill(self.bg_color, (b, b, width - b * 2, height - b * 2))

    def draw_cell(self, px: int, py: int, cell: Optional[Cell]):
        """None means 'not carved yet': all four walls."""
        size, b = self.cell_size, self.border_width
        fill = self.surface.fill
        color = self.wall_color

        if cell is None or cell.north:
            fill(color, (px, py, size + b, b))
        if cell is None or cell.east:
            fill(color, (px + size, py, b, size + b))
        if cell is None or cell.south:
            fill(color, (px, py + size, size + b, b))
        if cell is None or cell.west:
            fill(color, (px, py, b, size + b))

    def draw_labyrinth(self, grid: Grid):
        if self.surface is None:
            return
        self.surface.fill(self.bg_color)
        for row in grid.rows():
            for cell in row:
                self.draw_cell(cell.x * self.cell_size, cell.y * self.cell_size, cell)

    def draw_intro_step(self, column: int):
        """Intro frame 'column': every column up to and including it is fully walled."""
        if self.surface is None:
            return
        self._fill_frame()
        for y in range(self.nb_rows):
            for x in range(min(column, self.nb_columns - 1) + 1):
                self.draw_cell(x * self.cell_size, y * self.cell_size, None)

    def display_message(self, message: str = ""):
        if self.surface is None:
            return
        self._fill_frame()
        if not message:
            return

        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.SysFont("Consolas", self.cell_size * 2)

        width, height = self.get_canvas_size()
        label = self._font.render(message, True, self.wall_color)
        self.surface.blit(label, label.get_rect(center=(width // 2, height // 2)))
