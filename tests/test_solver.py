import heapq
import unittest
import random
import sys
import os
import threading

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_pathfinder.algo import heuristics
from maze_pathfinder.algo.heuristics import D, D2, Heuristic
from maze_pathfinder.algo.prim import generate_maze
from maze_pathfinder.algo.solvers import AStar, Dijkstra, find_path
from maze_pathfinder.core.errors import (Cancelled, InvalidDimensions, InvalidEndpoint,
                                         InvalidHeuristic, MazeError)
from maze_pathfinder.core.grid import DIAGONAL, STRAIGHT, Grid


def brute_force_costs(width, height, walls, source, diagonal):
    """Plain Dijkstra from source; moves are symmetric so this is also cost-to-source."""
    offsets = STRAIGHT + DIAGONAL if diagonal else STRAIGHT
    dist = {source: 0}
    heap = [(0, source)]
    while heap:
        d, (x, y) = heapq.heappop(heap)
        if d > dist[(x, y)]:
            continue
        for dx, dy in offsets:
            n = (x + dx, y + dy)
            if not (0 <= n[0] < width and 0 <= n[1] < height) or n in walls:
                continue
            nd = d + (D2 if dx and dy else D)
            if nd < dist.get(n, float("inf")):
                dist[n] = nd
                heapq.heappush(heap, (nd, n))
    return dist


def random_board(rng, width, height, density=0.25):
    walls = {(x, y) for x in range(width) for y in range(height) if rng.random() < density}
    passages = [(x, y) for x in range(width) for y in range(height) if (x, y) not in walls]
    return walls, passages


class TestAStarScenarios(unittest.TestCase):
    def assert_valid_path(self, result, walls, diagonal):
        cost = 0
        for (ax, ay), (bx, by) in zip(result.path, result.path[1:]):
            dx, dy = abs(bx - ax), abs(by - ay)
            self.assertNotIn((bx, by), walls)
            if diagonal:
                self.assertTrue(max(dx, dy) == 1)
            else:
                self.assertEqual(dx + dy, 1)
            cost += D2 if dx and dy else D
        self.assertEqual(cost, result.total_cost)

    def test_constants(self):
        self.assertEqual(D, 10)
        self.assertEqual(D2, 14)

    def test_open_board_straight(self):
        result = find_path(3, 3, [], (0, 0), (2, 2))
        self.assertEqual(result.total_cost, 40)
        self.assertEqual(len(result.path), 5)
        self.assertEqual(result.path[0], (0, 0))
        self.assertEqual(result.path[-1], (2, 2))
        self.assert_valid_path(result, set(), diagonal=False)

    def test_open_board_diagonal(self):
        result = find_path(3, 3, [], (0, 0), (2, 2), diagonal=True)
        self.assertEqual(result.path, [(0, 0), (1, 1), (2, 2)])
        self.assertEqual(result.total_cost, 2 * D2)
        self.assertEqual(result.nodes_expanded, 2)

    def test_corridor(self):
        result = find_path(3, 1, [], (0, 0), (2, 0))
        self.assertEqual(result.path, [(0, 0), (1, 0), (2, 0)])
        self.assertEqual(result.total_cost, 20)
        self.assertEqual(result.nodes_expanded, 2)
        self.assertEqual(result.length, 2)

    def test_start_is_end(self):
        result = find_path(4, 4, [(1, 1)], (2, 2), (2, 2))
        self.assertEqual(result.path, [(2, 2)])
        self.assertEqual(result.total_cost, 0)
        self.assertEqual(result.nodes_expanded, 0)
        self.assertTrue(result.found)
        self.assertEqual(result.length, 0)

    def test_tie_break(self):
        # Two equal routes around a 2x2 board. (0,1) entered the open set
        # before (1,0) and is expanded first; (1,0) is expanded next and its
        # equal-cost relaxation of (1,1) takes over as predecessor.
        for _ in range(3):
            result = find_path(2, 2, [], (0, 0), (1, 1))
            self.assertEqual(result.path, [(0, 0), (1, 0), (1, 1)])
            self.assertEqual(result.total_cost, 20)
            self.assertEqual(result.nodes_expanded, 3)

    def test_no_path_straight(self):
        walls = [(3, 4), (4, 3)]
        result = find_path(5, 5, walls, (0, 0), (4, 4))
        self.assertEqual(result.path, [])
        self.assertEqual(result.total_cost, 0)
        self.assertFalse(result.found)
        # Every reachable cell gets expanded before giving up
        self.assertEqual(result.nodes_expanded, 25 - len(walls) - 1)

    def test_no_path_diagonal(self):
        walls = [(3, 4), (4, 3), (3, 3)]
        result = find_path(5, 5, walls, (0, 0), (4, 4), diagonal=True)
        self.assertEqual(result.path, [])
        self.assertEqual(result.total_cost, 0)
        self.assertEqual(result.nodes_expanded, 25 - len(walls) - 1)

    def test_corner_cutting_allowed(self):
        walls = [(1, 0), (0, 1)]
        diagonal = find_path(2, 2, walls, (0, 0), (1, 1), diagonal=True)
        self.assertEqual(diagonal.path, [(0, 0), (1, 1)])
        self.assertEqual(diagonal.total_cost, D2)

        straight = find_path(2, 2, walls, (0, 0), (1, 1))
        self.assertEqual(straight.path, [])

    def test_out_of_range_walls_ignored(self):
        result = find_path(3, 3, [(10, 10), (-1, 2)], (0, 0), (2, 2))
        self.assertEqual(result.total_cost, 40)

    def test_walls_as_set_or_list(self):
        walls = [(1, 0), (1, 1), (1, 3)]
        self.assertEqual(find_path(4, 4, walls, (0, 0), (3, 0)),
                         find_path(4, 4, set(walls), (0, 0), (3, 0)))


class TestAStarValidation(unittest.TestCase):
    def test_invalid_dimensions(self):
        with self.assertRaises(InvalidDimensions):
            find_path(0, 3, [], (0, 0), (0, 0))
        with self.assertRaises(InvalidDimensions):
            find_path(3, -1, [], (0, 0), (0, 0))

    def test_endpoint_out_of_bounds(self):
        with self.assertRaises(InvalidEndpoint) as ctx:
            find_path(3, 3, [], (0, 0), (3, 0))
        self.assertEqual(ctx.exception.role, "end")

        with self.assertRaises(InvalidEndpoint) as ctx:
            find_path(3, 3, [], (-1, 0), (2, 2))
        self.assertEqual(ctx.exception.role, "start")

    def test_endpoint_on_wall(self):
        with self.assertRaises(InvalidEndpoint) as ctx:
            find_path(3, 3, [(1, 1)], (1, 1), (2, 2))
        self.assertEqual(ctx.exception.coord, (1, 1))

        with self.assertRaises(InvalidEndpoint):
            find_path(3, 3, [(2, 2)], (0, 0), (2, 2))


class TestHeuristics(unittest.TestCase):
    def test_values(self):
        self.assertEqual(heuristics.manhattan((0, 0), (3, 1)), 40)
        # 2 straight + 1 diagonal = 20 + 14
        self.assertEqual(heuristics.diagonal((0, 0), (3, 1)), 34)
        self.assertEqual(heuristics.diagonal((4, 4), (1, 1)), 3 * D2)

    def test_resolve(self):
        self.assertEqual(heuristics.resolve(None, False), Heuristic.MANHATTAN)
        self.assertEqual(heuristics.resolve(None, True), Heuristic.DIAGONAL)
        self.assertEqual(heuristics.resolve(Heuristic.DIAGONAL, False), Heuristic.DIAGONAL)
        self.assertEqual(heuristics.resolve("Manhattan", True), Heuristic.MANHATTAN)

    def test_unknown_heuristic(self):
        with self.assertRaises(InvalidHeuristic):
            heuristics.resolve("euclid", False)
        with self.assertRaises(MazeError):
            find_path(3, 3, [], (0, 0), (2, 2), heuristic="euclid")

    def test_admissible(self):
        rng = random.Random(2024)
        for diagonal, h in ((False, heuristics.manhattan), (True, heuristics.diagonal)):
            for _ in range(20):
                walls, passages = random_board(rng, 6, 6)
                if not passages:
                    continue
                end = rng.choice(passages)
                true_costs = brute_force_costs(6, 6, walls, end, diagonal)
                for cell, cost in true_costs.items():
                    self.assertLessEqual(h(cell, end), cost)


class TestAStarOptimality(unittest.TestCase):
    WALLS = {(1, 0), (1, 1), (1, 2), (3, 1), (3, 2), (3, 3), (3, 4)}

    def test_fixed_board_matches_brute_force(self):
        costs = brute_force_costs(5, 5, self.WALLS, (4, 4), diagonal=False)
        result = find_path(5, 5, self.WALLS, (0, 0), (4, 4))
        self.assertEqual(result.total_cost, costs[(0, 0)])
        self.assertGreaterEqual(len(result.path) - 1, 8)  # Manhattan distance

    def test_random_boards_match_brute_force(self):
        rng = random.Random(7)
        for diagonal in (False, True):
            for _ in range(40):
                walls, passages = random_board(rng, 7, 6)
                if len(passages) < 2:
                    continue
                start, end = rng.sample(passages, 2)
                expected = brute_force_costs(7, 6, walls, end, diagonal).get(start)

                result = find_path(7, 6, walls, start, end, diagonal=diagonal)
                if expected is None:
                    self.assertEqual(result.path, [])
                    self.assertEqual(result.total_cost, 0)
                else:
                    self.assertEqual(result.total_cost, expected)
                    self.assertEqual(result.path[0], start)
                    self.assertEqual(result.path[-1], end)
                    dx, dy = abs(start[0] - end[0]), abs(start[1] - end[1])
                    self.assertGreaterEqual(len(result.path) - 1, max(dx, dy) if diagonal else dx + dy)

    def test_decoupled_diagonal_heuristic_on_straight_moves(self):
        # Octile never exceeds Manhattan, so straight-only search stays optimal
        rng = random.Random(11)
        for _ in range(20):
            walls, passages = random_board(rng, 6, 6)
            if len(passages) < 2:
                continue
            start, end = rng.sample(passages, 2)
            coupled = find_path(6, 6, walls, start, end)
            decoupled = find_path(6, 6, walls, start, end, heuristic=Heuristic.DIAGONAL)
            self.assertEqual(coupled.total_cost, decoupled.total_cost)

    def test_dijkstra_agrees(self):
        maze = generate_maze(25, 25, seed=3)
        grid = Grid.from_walls(25, 25, maze.walls)
        for diagonal in (False, True):
            astar = AStar(grid, diagonal=diagonal)
            astar.run_all(maze.start, maze.end)
            dijkstra = Dijkstra(grid, diagonal=diagonal)
            dijkstra.run_all(maze.start, maze.end)
            self.assertEqual(astar.total_cost, dijkstra.total_cost)
            self.assertLessEqual(astar.nodes_expanded, dijkstra.nodes_expanded)


class TestAStarRuntime(unittest.TestCase):
    def test_determinism(self):
        maze = generate_maze(31, 17, seed=8)
        first = find_path(31, 17, maze.walls, maze.start, maze.end, diagonal=True)
        second = find_path(31, 17, maze.walls, maze.start, maze.end, diagonal=True)
        self.assertEqual(first, second)

    def test_generated_mazes_are_solvable(self):
        for seed in range(5):
            maze = generate_maze(21, 21, seed=seed)
            grid = Grid.from_walls(21, 21, maze.walls)
            if not (grid.is_passage(*maze.start) and grid.is_passage(*maze.end)):
                continue
            result = find_path(21, 21, maze.walls, maze.start, maze.end)
            self.assertTrue(result.found)
            self.assertEqual(result.path[0], maze.start)
            self.assertEqual(result.path[-1], maze.end)

    def test_open_and_closed_disjoint(self):
        maze = generate_maze(15, 15, seed=4)
        grid = Grid.from_walls(15, 15, maze.walls)
        solver = AStar(grid, diagonal=True)
        solver.run_all(maze.start, maze.end)
        self.assertFalse(set(solver.open_nodes) & set(solver.closed_nodes))

    def test_progress_callback(self):
        statuses = []
        find_path(10, 10, [], (0, 0), (9, 9), progress=statuses.append, progress_every=1)
        self.assertTrue(statuses[0].startswith("Expanded: 1 "))
        self.assertEqual(statuses[-1], "Solved")

    def test_cancellation(self):
        cancel = threading.Event()
        cancel.set()
        with self.assertRaises(Cancelled):
            find_path(10, 10, [], (0, 0), (9, 9), cancel=cancel)

if __name__ == '__main__':
    unittest.main()
