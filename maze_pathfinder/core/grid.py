from array import array
from typing import Iterable, Iterator, List

from maze_pathfinder.core.errors import InvalidDimensions
from maze_pathfinder.core.types import Coord

# Neighbor offsets, in probe order: left, down, right, up
STRAIGHT = ((-1, 0), (0, 1), (1, 0), (0, -1))
DIAGONAL = ((-1, 1), (-1, -1), (1, 1), (1, -1))


def check_dimensions(width: int, height: int):
    """Raises InvalidDimensions unless both sides are positive integers."""
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidDimensions(f"{name} must be a positive integer, got {value!r}")


class Grid:
    # Cell states
    WALL = 0
    PASSAGE = 1

    __slots__ = ('width', 'height', 'cells')

    def __init__(self, width: int, height: int, fill: int = WALL):
        check_dimensions(width, height)
        self.width = width
        self.height = height
        # 'B' (unsigned char) -> 1 byte per cell, row-major
        self.cells = array('B', [fill]) * (width * height)

    @classmethod
    def from_walls(cls, width: int, height: int, walls: Iterable[Coord]) -> "Grid":
        """
        Builds an all-passage grid and marks the given coordinates as walls.
        Coordinates outside the grid are skipped: nothing can ever probe them.
        """
        grid = cls(width, height, fill=cls.PASSAGE)
        for x, y in walls:
            if grid.in_bounds(x, y):
                grid.cells[y * width + x] = cls.WALL
        return grid

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_index(self, x: int, y: int) -> int:
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def is_passage(self, x: int, y: int) -> bool:
        return self.cells[y * self.width + x] == self.PASSAGE

    def is_wall(self, x: int, y: int) -> bool:
        return self.cells[y * self.width + x] == self.WALL

    def set_passage(self, x: int, y: int, passage: bool = True):
        self.cells[self.get_index(x, y)] = self.PASSAGE if passage else self.WALL

    def get_neighbors(self, x: int, y: int) -> Iterator[Coord]:
        """
        Yields the 4-neighborhood of (x, y) clipped to the grid, in
        left, down, right, up order. Does NOT look at cell state.
        """
        for dx, dy in STRAIGHT:
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.width and 0 <= ny < self.height:
                yield (nx, ny)

    def count_passage_neighbors(self, x: int, y: int) -> int:
        count = 0
        for nx, ny in self.get_neighbors(x, y):
            if self.cells[ny * self.width + nx] == self.PASSAGE:
                count += 1
        return count

    def walls(self) -> List[Coord]:
        """All wall coordinates, x-major (column by column)."""
        w = self.width
        return [
            (x, y)
            for x in range(w)
            for y in range(self.height)
            if self.cells[y * w + x] == self.WALL
        ]

    def passages(self) -> Iterator[Coord]:
        w = self.width
        for idx, val in enumerate(self.cells):
            if val == self.PASSAGE:
                yield (idx % w, idx // w)

    def passage_count(self) -> int:
        return self.cells.count(self.PASSAGE)
