import math
from enum import Enum
from typing import Callable, Optional

from maze_pathfinder.core.errors import InvalidHeuristic
from maze_pathfinder.core.types import Coord

# Step costs. Integral so that costs compare exactly.
D = 10
D2 = int(round(math.sqrt(D ** 2 + D ** 2)))  # 14


class Heuristic(Enum):
    MANHATTAN = "manhattan"
    DIAGONAL = "diagonal"


def manhattan(a: Coord, b: Coord) -> int:
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    return D * (dx + dy)


def diagonal(a: Coord, b: Coord) -> int:
    """Octile distance in D/D2 units; admissible when diagonal moves are allowed."""
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    return D * (dx + dy) + (D2 - 2 * D) * min(dx, dy)


_FUNCTIONS = {
    Heuristic.MANHATTAN: manhattan,
    Heuristic.DIAGONAL: diagonal,
}


def resolve(heuristic: Optional[Heuristic], diagonal_moves: bool) -> Heuristic:
    """
    Picks the heuristic for a search. With no explicit choice it follows the
    movement model: diagonal moves -> DIAGONAL, straight only -> MANHATTAN.
    Strings ("manhattan", "diagonal") are accepted for convenience.
    """
    if heuristic is None:
        return Heuristic.DIAGONAL if diagonal_moves else Heuristic.MANHATTAN
    if isinstance(heuristic, Heuristic):
        return heuristic
    try:
        return Heuristic(str(heuristic).lower())
    except ValueError:
        raise InvalidHeuristic(f"unknown heuristic {heuristic!r}") from None


def get_function(heuristic: Heuristic) -> Callable[[Coord, Coord], int]:
    return _FUNCTIONS[heuristic]
