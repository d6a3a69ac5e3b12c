import heapq
import logging
from typing import Callable, Dict, Iterable, Iterator, List, Tuple

from maze_pathfinder.algo import heuristics
from maze_pathfinder.algo.base import Solver
from maze_pathfinder.algo.heuristics import D, D2, Heuristic
from maze_pathfinder.core.errors import InvalidEndpoint
from maze_pathfinder.core.grid import DIAGONAL, STRAIGHT, Grid, check_dimensions
from maze_pathfinder.core.types import Coord, SearchNode, SearchResult

logger = logging.getLogger(__name__)


class AStar(Solver):
    """
    Best-first search over passage cells with D/D2 step costs.

    Selection follows the linear "pick the smallest f, first one wins" scan
    over the open set in entry order. A heap keyed (f, entry order) gives
    the same answer: a coordinate keeps its entry order when its open entry
    is replaced, and stale heap items are skipped on pop.
    """

    def __init__(self, grid: Grid, diagonal: bool = False, heuristic: Heuristic = None,
                 cancel=None, progress_every: int = 100):
        super().__init__(grid, cancel=cancel, progress_every=progress_every)
        self.diagonal = diagonal
        self.heuristic_kind = heuristics.resolve(heuristic, diagonal)
        self._estimate = heuristics.get_function(self.heuristic_kind)
        self.offsets = STRAIGHT + DIAGONAL if diagonal else STRAIGHT
        self.open_nodes: Dict[Coord, SearchNode] = {}
        self.closed_nodes: Dict[Coord, SearchNode] = {}

    def heuristic(self, a: Coord, b: Coord) -> int:
        return self._estimate(a, b)

    def get_valid_neighbors(self, cx: int, cy: int) -> Iterator[Tuple[int, int, bool]]:
        """Yields (nx, ny, is_diagonal) for in-bounds, non-wall, non-closed cells."""
        grid = self.grid
        width, height = grid.width, grid.height
        for dx, dy in self.offsets:
            nx, ny = cx + dx, cy + dy
            if not (0 <= nx < width and 0 <= ny < height):
                continue
            if grid.cells[ny * width + nx] == Grid.WALL:
                continue
            if (nx, ny) in self.closed_nodes:
                continue
            yield (nx, ny, dx != 0 and dy != 0)

    def run(self, start: Coord, end: Coord) -> Iterator[str]:
        open_nodes = self.open_nodes
        closed_nodes = self.closed_nodes
        open_nodes.clear()
        closed_nodes.clear()
        self.nodes_expanded = 0

        # Priority Queue: (f, order, x, y)
        open_heap: List[Tuple[int, int, int, int]] = []
        order = 0

        start_node = SearchNode(start[0], start[1], 0, self.heuristic(start, end), None, order)
        open_nodes[start] = start_node
        heapq.heappush(open_heap, (start_node.f, order, start[0], start[1]))

        count = 0

        while open_nodes:
            self.check_cancel()

            f, _, cx, cy = heapq.heappop(open_heap)
            current = open_nodes.get((cx, cy))
            if current is None or current.f != f:
                continue  # stale

            del open_nodes[(cx, cy)]
            closed_nodes[(cx, cy)] = current

            if (cx, cy) == end:
                break

            for nx, ny, is_diagonal in self.get_valid_neighbors(cx, cy):
                new_g = current.g + (D2 if is_diagonal else D)
                existing = open_nodes.get((nx, ny))

                # Equal cost still takes over the predecessor
                if existing is None or new_g <= existing.g:
                    if existing is None:
                        order += 1
                        entry_order = order
                    else:
                        entry_order = existing.order
                    node = SearchNode(nx, ny, new_g, self.heuristic((nx, ny), end), (cx, cy), entry_order)
                    open_nodes[(nx, ny)] = node
                    heapq.heappush(open_heap, (node.f, entry_order, nx, ny))

            count += 1
            self.nodes_expanded = count
            if count % self.progress_every == 0:
                yield f"Expanded: {count} Open: {len(open_nodes)}"

        self.reconstruct_path(end)
        yield "Solved" if self.path else "No Path"

    def reconstruct_path(self, end: Coord):
        self.path = []
        self.total_cost = 0

        end_node = self.closed_nodes.get(end)
        if end_node is None:
            return

        self.total_cost = end_node.g
        curr = end_node
        while curr is not None:
            self.path.append(curr.coord)
            curr = self.closed_nodes[curr.parent] if curr.parent is not None else None
        self.path.reverse()


class Dijkstra(AStar):
    """ Uniform-cost search is just A* with h(n) = 0. """
    def heuristic(self, a, b):
        return 0


def validate_endpoint(grid: Grid, role: str, coord: Coord):
    x, y = coord
    if not grid.in_bounds(x, y):
        raise InvalidEndpoint(role, coord, f"outside the {grid.width}x{grid.height} grid")
    if grid.is_wall(x, y):
        raise InvalidEndpoint(role, coord, "a wall")


def find_path(width: int, height: int, walls: Iterable[Coord], start: Coord, end: Coord,
              diagonal: bool = False, heuristic: Heuristic = None, cancel=None,
              progress: Callable[[str], None] = None, progress_every: int = 100) -> SearchResult:
    """
    Runs A* from start to end on a width x height board.

    walls:     coordinates that cannot be entered; out-of-range ones are ignored.
    diagonal:  allow the four diagonal moves (cost D2) besides straight ones (cost D).
    heuristic: Heuristic.MANHATTAN or Heuristic.DIAGONAL. Defaults to the one
               matching the movement model.

    Raises InvalidDimensions / InvalidEndpoint before searching. An unreachable
    end is not an error: the result has an empty path and zero cost.
    """
    check_dimensions(width, height)
    grid = Grid.from_walls(width, height, walls)
    validate_endpoint(grid, "start", tuple(start))
    validate_endpoint(grid, "end", tuple(end))

    solver = AStar(grid, diagonal=diagonal, heuristic=heuristic, cancel=cancel,
                   progress_every=progress_every)
    for status in solver.run(tuple(start), tuple(end)):
        if progress is not None:
            progress(status)

    logger.debug("A* %s -> %s (%s, %s): cost=%d steps=%d expanded=%d",
                 start, end, "8-dir" if diagonal else "4-dir", solver.heuristic_kind.value,
                 solver.total_cost, max(len(solver.path) - 1, 0), solver.nodes_expanded)

    return SearchResult(path=solver.path, total_cost=solver.total_cost,
                        nodes_expanded=solver.nodes_expanded)
