import logging
import random
from typing import Callable, Iterator, List, Optional, Tuple

from maze_pathfinder.algo.base import Generator
from maze_pathfinder.core.grid import Grid, check_dimensions
from maze_pathfinder.core.types import Coord, MazeResult

logger = logging.getLogger(__name__)


class PrimsAlgorithm(Generator):
    """
    Randomized Prim's over cells rather than edges.

    The grid starts as solid wall. One random cell is opened and its
    neighbors become the frontier ("candidate walls"). A frontier cell is
    opened when exactly one of its neighbors is already a passage, which
    keeps the passage network free of loops.

    The frontier is a plain list and may hold the same cell several times;
    the exactly-one test is repeated every time a cell is drawn, so
    duplicates only change how likely a cell is to be picked.
    """

    def __init__(self, grid: Grid, seed: int = None, rng: random.Random = None,
                 cancel=None, progress_every: int = 100):
        super().__init__(grid, seed=seed, rng=rng, cancel=cancel, progress_every=progress_every)
        self.seed_cell: Optional[Coord] = None
        self.frontier: List[Coord] = []

    def run(self) -> Iterator[str]:
        grid = self.grid
        rng = self.rng
        width = grid.width

        sx = rng.randrange(grid.width)
        sy = rng.randrange(grid.height)
        grid.set_passage(sx, sy)
        self.seed_cell = (sx, sy)

        self.frontier = frontier = list(grid.get_neighbors(sx, sy))
        iterations = 0

        while frontier:
            self.check_cancel()

            idx = rng.randrange(len(frontier))
            cx, cy = frontier[idx]

            surroundings = list(grid.get_neighbors(cx, cy))
            open_count = 0
            for nx, ny in surroundings:
                if grid.cells[ny * width + nx] == Grid.PASSAGE:
                    open_count += 1

            if open_count == 1:
                cell_idx = cy * width + cx
                # A duplicate entry may already be open; it still re-queues its walls
                if grid.cells[cell_idx] == Grid.WALL:
                    grid.cells[cell_idx] = Grid.PASSAGE
                    self.step_count += 1
                for nx, ny in surroundings:
                    if grid.cells[ny * width + nx] == Grid.WALL:
                        frontier.append((nx, ny))

            # Drawn cells leave the list whether or not they were opened
            frontier.pop(idx)

            iterations += 1
            if iterations % self.progress_every == 0:
                yield f"Frontier: {len(frontier)}"

        yield "Done"


def find_endpoints(grid: Grid) -> Tuple[Coord, Coord]:
    """
    Picks start on the left edge and end on the bottom edge.

    Both scans advance together on the same index i: start probes (0, i)
    walking down the first column, end probes (width-1-i, height-1) walking
    the last row from right to left. Each scan stops at its first passage;
    the loop stops when both have hit or i runs past both edges. An endpoint
    that never hits stays at (0, 0).
    """
    start: Coord = (0, 0)
    end: Coord = (0, 0)
    start_found = False
    end_found = False
    last_row = grid.height - 1

    for i in range(max(grid.width, grid.height)):
        if start_found and end_found:
            break
        if not start_found and i < grid.height and grid.is_passage(0, i):
            start = (0, i)
            start_found = True
        ex = grid.width - 1 - i
        if not end_found and ex >= 0 and grid.is_passage(ex, last_row):
            end = (ex, last_row)
            end_found = True

    return start, end


def generate_maze(width: int, height: int, rng: random.Random = None, seed: int = None,
                  cancel=None, progress: Callable[[str], None] = None,
                  progress_every: int = 100) -> MazeResult:
    """
    Generates a maze and returns its walls plus a start/end pair.

    rng:      random source to draw from; takes precedence over seed.
    seed:     seed for a private random.Random when no rng is given.
    cancel:   object with is_set(); polled once per frontier draw.
    progress: called with a status string every progress_every draws.
    """
    check_dimensions(width, height)

    grid = Grid(width, height)
    algo = PrimsAlgorithm(grid, seed=seed, rng=rng, cancel=cancel, progress_every=progress_every)
    for status in algo.run():
        if progress is not None:
            progress(status)

    start, end = find_endpoints(grid)
    walls = grid.walls()
    logger.debug("Generated %dx%d maze from %s: %d walls, start=%s end=%s",
                 width, height, algo.seed_cell, len(walls), start, end)

    return MazeResult(walls=walls, start=start, end=end, width=width, height=height,
                      seed_cell=algo.seed_cell)
