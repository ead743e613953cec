import logging
from typing import Iterator, List, Optional, Tuple

from maze_reveal.core.grid import Direction, Grid, Position, create_grid, neighbor_position, open_wall
from maze_reveal.core.shuffle import RandomSource, random_position, shuffled_directions
from maze_reveal.algo.base import Generator

logger = logging.getLogger(__name__)


class RecursiveBacktracker(Generator):
    """
    Depth-first carve. Each stack entry stands for one recursive call:
    the cell being dug and the shuffled directions it has not tried yet.
    Visit order is the same as the recursive version, without its depth limit.
    """

    def __init__(self, grid: Grid, seed: int = None, rng: Optional[RandomSource] = None,
                 start: Optional[Position] = None):
        super().__init__(grid, seed=seed, rng=rng)
        self.start = start

    def run(self) -> Iterator[str]:
        grid = self.grid
        if self.start is None:
            self.start = random_position(self.rng, grid.height, grid.width)

        start_cell = grid.cell_at(self.start)
        if start_cell is None:
            raise IndexError(f"Start {tuple(self.start)} outside {grid.width}x{grid.height} grid")
        start_cell.visited = True

        # Stack of (position, remaining directions)
        stack: List[Tuple[Position, List[Direction]]] = [
            (self.start, shuffled_directions(self.rng))
        ]

        while stack:
            pos, remaining = stack[-1]

            if not remaining:
                # Backtrack
                stack.pop()
                continue

            direction = remaining.pop(0)
            target_pos = neighbor_position(pos, direction)
            target = grid.cell_at(target_pos)
            if target is None or target.visited:
                continue

            # Carve
            open_wall(grid.cell_at(pos), target, direction)
            target.visited = True
            stack.append((target_pos, shuffled_directions(self.rng)))
            self.step_count += 1

            # Yield every N steps to keep UI responsive without spamming
            if self.step_count % 100 == 0:
                yield f"Carving... Stack: {len(stack)}"

        logger.debug("Carved %d passages from %s", self.step_count, tuple(self.start))
        yield "Done"


def generate_maze(rows: int, cols: int, rng: Optional[RandomSource] = None, seed: int = None) -> Grid:
    """Builds a complete perfect maze in one go."""
    grid = create_grid(rows, cols)
    return RecursiveBacktracker(grid, seed=seed, rng=rng).run_all()
