from dataclasses import dataclass
from typing import Union

from maze_reveal.core.grid import Grid, Position


@dataclass(frozen=True)
class Progress:
    """A wall was opened; 'coords' is the cell the carve just entered."""
    grid: Grid
    coords: Position

    is_done = False


@dataclass(frozen=True)
class Done:
    """The carve is finished; 'coords' is the start cell the DFS unwound back to."""
    grid: Grid
    coords: Position

    is_done = True


CarveEvent = Union[Progress, Done]
