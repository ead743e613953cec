from collections import deque
from typing import Dict, Optional, Set

from maze_reveal.core.grid import Direction, Grid, Position


def popcount_walls(walls: int) -> int:
    c = 0
    for direction in Direction:
        if walls & direction:
            c += 1
    return c


def reachable_from(grid: Grid, start: Optional[Position] = None) -> Set[int]:
    """Ids of every cell reachable from 'start' through open walls (BFS)."""
    if start is None:
        start = Position(0, 0)
    first = grid.cell_at(start)
    if first is None:
        return set()

    seen = {first.id}
    queue = deque([first])
    while queue:
        cell = queue.popleft()
        for nb in grid.open_neighbors(cell.position):
            if nb.id not in seen:
                seen.add(nb.id)
                queue.append(nb)
    return seen


def is_perfect(grid: Grid) -> bool:
    """
    A maze is perfect when its open walls form a spanning tree:
    n - 1 edges and every cell connected.
    """
    total = grid.width * grid.height
    if grid.open_wall_count() != total - 1:
        return False
    return len(reachable_from(grid)) == total


def calculate_stats(grid: Grid) -> Dict[str, float]:
    dead_ends = 0
    intersections = 0  # 0, 1 walls
    corridors = 0  # 2 walls

    for cell in grid.cells:
        walls = popcount_walls(cell.walls)
        if walls == 3: dead_ends += 1
        elif walls == 2: corridors += 1
        elif walls <= 1: intersections += 1

    total = grid.width * grid.height
    return {
        "dead_ends": dead_ends,
        "corridors": corridors,
        "intersections": intersections,
        "open_walls": grid.open_wall_count(),
        "dead_end_percent": (dead_ends / total) * 100 if total > 0 else 0
    }
