from dataclasses import dataclass, field
from typing import List, Optional, Tuple

Coord = Tuple[int, int]  # (x, y)


@dataclass
class MazeResult:
    walls: List[Coord]             # x-major, no duplicates
    start: Coord
    end: Coord
    width: int = 0
    height: int = 0
    seed_cell: Optional[Coord] = None


@dataclass
class SearchResult:
    path: List[Coord] = field(default_factory=list)
    total_cost: int = 0
    nodes_expanded: int = 0

    @property
    def found(self) -> bool:
        return bool(self.path)

    @property
    def length(self) -> int:
        """Number of moves along the path."""
        return len(self.path) - 1 if self.path else 0


@dataclass
class SearchNode:
    """
    A coordinate annotated with A* costs.
    'parent' is the coordinate of the node this one was reached from;
    it is a key into the closed table, not an owning reference.
    """
    x: int
    y: int
    g: int
    h: int
    parent: Optional[Coord] = None
    order: int = 0  # position in open-set entry order, used for tie-breaks

    @property
    def f(self) -> int:
        return self.g + self.h

    @property
    def coord(self) -> Coord:
        return (self.x, self.y)
