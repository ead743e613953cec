from abc import ABC, abstractmethod
from typing import Iterator, Optional

from maze_reveal.core.grid import Grid
from maze_reveal.core.shuffle import RandomSource, make_rng

class Generator(ABC):
    def __init__(self, grid: Grid, seed: int = None, rng: Optional[RandomSource] = None):
        self.grid = grid
        self.seed = seed
        # An injected source wins over the seed
        self.rng = rng if rng is not None else make_rng(seed)
        self.step_count = 0

    @abstractmethod
    def run(self) -> Iterator[str]:
        """
        Yields status strings or progress updates.
        The actual grid modifications happen in-place on self.grid.
        """
        pass

    def run_all(self) -> Grid:
        """Helper to run the generator to completion."""
        for _ in self.run():
            pass
        return self.grid
