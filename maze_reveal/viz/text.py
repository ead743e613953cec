from typing import List

from maze_reveal.core.grid import Grid


def render_text(grid: Grid, wall: str = "#", floor: str = " ") -> str:
    """
    ASCII picture of the maze: (2 * height + 1) lines of (2 * width + 1)
    characters. Cells sit on odd coordinates, walls between them.
    """
    w, h = grid.width, grid.height
    canvas: List[List[str]] = [[wall] * (2 * w + 1) for _ in range(2 * h + 1)]

    for cell in grid.cells:
        cx, cy = 2 * cell.x + 1, 2 * cell.y + 1
        canvas[cy][cx] = floor
        if not cell.east:
            canvas[cy][cx + 1] = floor
        if not cell.south:
            canvas[cy + 1][cx] = floor

    return "\n".join("".join(line) for line in canvas)
