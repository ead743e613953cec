import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Iterator, List, Optional

from maze_reveal.core.events import CarveEvent, Done, Progress
from maze_reveal.core.grid import Direction, Grid, Position, neighbor_position, open_wall
from maze_reveal.core.shuffle import RandomSource, make_rng, random_position, shuffled_directions

logger = logging.getLogger(__name__)


class CarveFinishedError(RuntimeError):
    """advance() was called on a carve that already reported Done."""


@dataclass
class Frame:
    position: Position
    remaining: Deque[Direction] = field(default_factory=deque)


class StepwiseCarver:
    """
    Recursive backtracking that stops after every opened wall.

    Each advance() runs until one wall is opened (-> Progress) or the
    whole stack has unwound (-> Done). Dead ends and backtracking are
    resolved inside the same call, so callers only ever see carve steps.
    Given the same random source trace it opens the same walls in the
    same order as RecursiveBacktracker.
    """

    def __init__(self, grid: Grid, rng: Optional[RandomSource] = None, seed: int = None,
                 start: Optional[Position] = None):
        self.grid = grid
        self.rng = rng if rng is not None else make_rng(seed)
        if start is None:
            start = random_position(self.rng, grid.height, grid.width)

        start_cell = grid.cell_at(start)
        if start_cell is None:
            raise IndexError(f"Start {tuple(start)} outside {grid.width}x{grid.height} grid")

        self.start = start
        self.steps = 0
        self._done = False

        start_cell.visited = True
        self._stack: List[Frame] = [self._frame(start)]

    def _frame(self, pos: Position) -> Frame:
        return Frame(pos, deque(shuffled_directions(self.rng)))

    @property
    def is_done(self) -> bool:
        return self._done

    @property
    def depth(self) -> int:
        return len(self._stack)

    def advance(self) -> CarveEvent:
        if self._done:
            raise CarveFinishedError("Maze is already fully carved")

        stack = self._stack
        while stack:
            frame = stack[-1]
            if not frame.remaining:
                stack.pop()
                continue

            direction = frame.remaining.popleft()
            target_pos = neighbor_position(frame.position, direction)
            target = self.grid.cell_at(target_pos)
            if target is None or target.visited:
                continue

            open_wall(self.grid.cell_at(frame.position), target, direction)
            target.visited = True
            stack.append(self._frame(target_pos))
            self.steps += 1
            return Progress(self.grid, target_pos)

        self._done = True
        logger.debug("Stepwise carve finished after %d steps", self.steps)
        return Done(self.grid, self.start)

    def __iter__(self) -> Iterator[CarveEvent]:
        while not self._done:
            yield self.advance()
