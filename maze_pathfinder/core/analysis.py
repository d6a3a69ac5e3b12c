from collections import deque
from typing import Dict, Set

from maze_pathfinder.core.grid import Grid
from maze_pathfinder.core.types import Coord


class MazeAnalyzer:
    @staticmethod
    def flood_fill(grid: Grid, origin: Coord) -> Set[Coord]:
        """
        Returns every passage reachable from origin with straight moves.
        Empty if origin itself is a wall or lies outside the grid.
        """
        ox, oy = origin
        if not grid.in_bounds(ox, oy) or not grid.is_passage(ox, oy):
            return set()

        seen = {origin}
        queue = deque([origin])
        while queue:
            cx, cy = queue.popleft()
            for nx, ny in grid.get_neighbors(cx, cy):
                if (nx, ny) not in seen and grid.is_passage(nx, ny):
                    seen.add((nx, ny))
                    queue.append((nx, ny))
        return seen

    @staticmethod
    def is_connected(grid: Grid) -> bool:
        """True if all passages form one 4-connected region (or there are none)."""
        first = next(grid.passages(), None)
        if first is None:
            return True
        return len(MazeAnalyzer.flood_fill(grid, first)) == grid.passage_count()

    @staticmethod
    def calculate_stats(grid: Grid) -> Dict[str, float]:
        dead_ends = 0  # exactly one open neighbor
        corridors = 0  # two
        junctions = 0  # three or more

        for x, y in grid.passages():
            exits = grid.count_passage_neighbors(x, y)
            if exits == 1: dead_ends += 1
            elif exits == 2: corridors += 1
            elif exits >= 3: junctions += 1

        total = grid.width * grid.height
        passages = grid.passage_count()
        walls = total - passages
        return {
            "passages": passages,
            "walls": walls,
            "dead_ends": dead_ends,
            "corridors": corridors,
            "junctions": junctions,
            "wall_percent": (walls / total) * 100 if total > 0 else 0
        }
