from enum import IntEnum
from typing import Iterator, List, NamedTuple, Optional, Tuple


class Direction(IntEnum):
    # Bitmask values, one bit per wall
    NORTH = 0b0001
    EAST  = 0b0010
    SOUTH = 0b0100
    WEST  = 0b1000

    @property
    def opposite(self) -> "Direction":
        return OPPOSITE[self]


# All walls present by default (N|E|S|W) = 15
ALL_WALLS = Direction.NORTH | Direction.EAST | Direction.SOUTH | Direction.WEST

# Direction Helpers
DX = {Direction.NORTH: 0, Direction.SOUTH: 0, Direction.EAST: 1, Direction.WEST: -1}
DY = {Direction.NORTH: -1, Direction.SOUTH: 1, Direction.EAST: 0, Direction.WEST: 0}
OPPOSITE = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}


class Position(NamedTuple):
    x: int  # column
    y: int  # row


def neighbor_position(pos: Position, direction: Direction) -> Position:
    """Offset arithmetic only. The result may lie outside the grid."""
    return Position(pos.x + DX[direction], pos.y + DY[direction])


class Cell:
    __slots__ = ('id', 'x', 'y', 'walls', 'visited')

    def __init__(self, cell_id: int, x: int, y: int):
        self.id = cell_id
        self.x = x
        self.y = y
        self.walls = int(ALL_WALLS)
        self.visited = False

    @property
    def position(self) -> Position:
        return Position(self.x, self.y)

    def has_wall(self, direction: Direction) -> bool:
        return (self.walls & direction) != 0

    @property
    def north(self) -> bool:
        return self.has_wall(Direction.NORTH)

    @property
    def east(self) -> bool:
        return self.has_wall(Direction.EAST)

    @property
    def south(self) -> bool:
        return self.has_wall(Direction.SOUTH)

    @property
    def west(self) -> bool:
        return self.has_wall(Direction.WEST)

    def __repr__(self):
        return f"Cell(id={self.id}, x={self.x}, y={self.y}, walls={self.walls:04b}, visited={self.visited})"


def open_wall(a: Cell, b: Cell, direction: Direction):
    """
    Removes the wall of 'a' facing 'direction' and the OPPOSITE wall of 'b'.
    'b' must be the neighbor of 'a' in that direction, otherwise the wall
    pair would go out of sync.
    """
    if neighbor_position(a.position, direction) != b.position:
        raise ValueError(
            f"Cell ({b.x}, {b.y}) is not the {direction.name} neighbor of ({a.x}, {a.y})"
        )
    a.walls &= ~direction
    b.walls &= ~OPPOSITE[direction]


class Grid:
    __slots__ = ('width', 'height', 'cells')

    def __init__(self, width: int, height: int):
        if (not isinstance(width, int) or not isinstance(height, int)
                or isinstance(width, bool) or isinstance(height, bool)):
            raise ValueError(f"Grid dimensions must be integers, got {width!r}x{height!r}")
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        # Row-major: id = y * width + x
        self.cells: List[Cell] = [
            Cell(y * width + x, x, y) for y in range(height) for x in range(width)
        ]

    @property
    def nb_rows(self) -> int:
        return self.height

    @property
    def nb_columns(self) -> int:
        return self.width

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def get_index(self, x: int, y: int) -> int:
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def cell_at(self, pos: Position) -> Optional[Cell]:
        if not self.in_bounds(pos):
            return None
        return self.cells[pos.y * self.width + pos.x]

    def open_wall(self, pos: Position, direction: Direction) -> Cell:
        """Opens the wall between the cell at 'pos' and its neighbor. Returns the neighbor."""
        current = self.cell_at(pos)
        target = self.cell_at(neighbor_position(pos, direction))
        if current is None or target is None:
            raise IndexError(f"Cannot open {direction.name} wall of {tuple(pos)}: no such neighbor")
        open_wall(current, target, direction)
        return target

    def neighbors(self, pos: Position) -> Iterator[Tuple[Cell, Direction]]:
        """
        Yields (neighbor, direction_to_neighbor) for all valid grid neighbors.
        Does NOT check walls.
        """
        for direction in Direction:
            cell = self.cell_at(neighbor_position(pos, direction))
            if cell is not None:
                yield cell, direction

    def open_neighbors(self, pos: Position) -> Iterator[Cell]:
        """Yields neighbors that are NOT blocked by a wall."""
        current = self.cell_at(pos)
        if current is None:
            return
        for cell, direction in self.neighbors(pos):
            if not current.has_wall(direction):
                yield cell

    def open_wall_count(self) -> int:
        # Each opened edge is stored on both sides; count EAST and SOUTH only
        count = 0
        for cell in self.cells:
            if cell.x < self.width - 1 and not cell.east:
                count += 1
            if cell.y < self.height - 1 and not cell.south:
                count += 1
        return count

    def rows(self) -> Iterator[List[Cell]]:
        for y in range(self.height):
            yield self.cells[y * self.width:(y + 1) * self.width]

    def snapshot(self) -> Tuple[int, ...]:
        return tuple(cell.walls for cell in self.cells)


def create_grid(rows: int, cols: int) -> Grid:
    """Allocates a rows x cols grid, all walls closed and nothing visited."""
    return Grid(cols, rows)
