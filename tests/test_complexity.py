import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_reveal.algo.dfs import generate_maze
from maze_reveal.core.complexity import calculate_stats, is_perfect, popcount_walls, reachable_from
from maze_reveal.core.grid import ALL_WALLS, Direction, Position, create_grid

class TestComplexity(unittest.TestCase):
    def test_popcount(self):
        self.assertEqual(popcount_walls(ALL_WALLS), 4)
        self.assertEqual(popcount_walls(Direction.NORTH | Direction.WEST), 2)
        self.assertEqual(popcount_walls(0), 0)

    def test_corridor_stats(self):
        grid = generate_maze(1, 5, seed=4)
        stats = calculate_stats(grid)
        self.assertEqual(stats["dead_ends"], 2)
        self.assertEqual(stats["corridors"], 3)
        self.assertEqual(stats["intersections"], 0)
        self.assertEqual(stats["open_walls"], 4)
        self.assertAlmostEqual(stats["dead_end_percent"], 40.0)

    def test_dfs_has_dead_ends(self):
        stats = calculate_stats(generate_maze(20, 20, seed=42))
        self.assertGreater(stats["dead_ends"], 0)
        self.assertEqual(stats["open_walls"], 399)

    def test_blank_grid_is_not_perfect(self):
        grid = create_grid(2, 2)
        self.assertFalse(is_perfect(grid))
        self.assertEqual(reachable_from(grid), {0})

    def test_cycle_is_not_perfect(self):
        grid = create_grid(2, 2)
        grid.open_wall(Position(0, 0), Direction.EAST)
        grid.open_wall(Position(1, 0), Direction.SOUTH)
        grid.open_wall(Position(1, 1), Direction.WEST)
        self.assertTrue(is_perfect(grid))
        grid.open_wall(Position(0, 1), Direction.NORTH)
        self.assertFalse(is_perfect(grid))

    def test_disconnected_is_not_perfect(self):
        # Right edge count, but a loop on the left and column 2 cut off
        grid = create_grid(2, 3)
        grid.open_wall(Position(0, 0), Direction.EAST)
        grid.open_wall(Position(1, 0), Direction.SOUTH)
        grid.open_wall(Position(1, 1), Direction.WEST)
        grid.open_wall(Position(0, 1), Direction.NORTH)
        grid.open_wall(Position(2, 0), Direction.SOUTH)
        self.assertEqual(grid.open_wall_count(), 5)
        self.assertEqual(len(reachable_from(grid)), 4)
        self.assertFalse(is_perfect(grid))

    def test_reachable_outside(self):
        self.assertEqual(reachable_from(create_grid(2, 2), Position(4, 4)), set())

if __name__ == '__main__':
    unittest.main()
