from typing import Iterable, Optional

import numpy as np

from maze_pathfinder.core.types import Coord

WALL_CHAR = "#"
PASSAGE_CHAR = "."
PATH_CHAR = "*"
START_CHAR = "S"
END_CHAR = "E"


class TextRenderer:
    """
    Draws a board as rows of characters, one per cell.
    Layers are applied walls -> path -> endpoints, so endpoints stay visible.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height

    def to_matrix(self, walls: Iterable[Coord], path: Iterable[Coord] = (),
                  start: Optional[Coord] = None, end: Optional[Coord] = None) -> np.ndarray:
        # Indexed [row][col] = [y][x]
        canvas = np.full((self.height, self.width), PASSAGE_CHAR, dtype="<U1")

        wall_list = list(walls)
        if wall_list:
            xs, ys = np.array(wall_list, dtype=np.intp).T
            inside = (xs >= 0) & (xs < self.width) & (ys >= 0) & (ys < self.height)
            canvas[ys[inside], xs[inside]] = WALL_CHAR

        path_list = list(path)
        if path_list:
            xs, ys = np.array(path_list, dtype=np.intp).T
            canvas[ys, xs] = PATH_CHAR

        if start is not None:
            canvas[start[1], start[0]] = START_CHAR
        if end is not None:
            canvas[end[1], end[0]] = END_CHAR
        return canvas

    def render(self, walls: Iterable[Coord], path: Iterable[Coord] = (),
               start: Optional[Coord] = None, end: Optional[Coord] = None) -> str:
        canvas = self.to_matrix(walls, path, start, end)
        return "\n".join("".join(row) for row in canvas)
