import random
from typing import List, Optional, Protocol

from maze_reveal.core.grid import Direction, Position


class RandomSource(Protocol):
    def random(self) -> float:
        """Returns the next float in [0, 1)."""
        ...


def make_rng(seed: Optional[int] = None) -> random.Random:
    return random.Random(seed)


def shuffle_in_place(items: list, rng: RandomSource) -> None:
    # Fisher-Yates: walk from the last index down, swap with a pick in [0, i]
    for i in range(len(items) - 1, 0, -1):
        j = int(rng.random() * (i + 1))
        items[i], items[j] = items[j], items[i]


def shuffled_directions(rng: RandomSource) -> List[Direction]:
    directions = [Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST]
    shuffle_in_place(directions, rng)
    return directions


def random_position(rng: RandomSource, rows: int, cols: int) -> Position:
    x = int(rng.random() * cols)
    y = int(rng.random() * rows)
    return Position(x, y)
