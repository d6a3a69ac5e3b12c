import sys
import os
import time
import argparse

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_pathfinder.algo.prim import generate_maze
from maze_pathfinder.algo.solvers import AStar, Dijkstra
from maze_pathfinder.core.analysis import MazeAnalyzer
from maze_pathfinder.core.grid import Grid

# ==========================================
# GLOBAL CONFIGURATION
# (name, class, diagonal moves)
# ==========================================
ENABLED_SOLVERS = [
    ("astar", AStar, False),
    ("astar_diag", AStar, True),
    ("dijkstra", Dijkstra, False),
    ("dijkstra_diag", Dijkstra, True),
]


def run_benchmark():
    parser = argparse.ArgumentParser(description="Solver Benchmark")
    parser.add_argument("--width", type=int, default=200, help="Maze Width")
    parser.add_argument("--height", type=int, default=200, help="Maze Height")
    parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    args = parser.parse_args()

    print(f"=== MAZE SOLVER BENCHMARK ===")
    print(f"Size: {args.width}x{args.height}")
    print(f"Solvers: {', '.join(name for name, _, _ in ENABLED_SOLVERS)}")
    print("-" * 50)

    print("Generating Maze (Prim's)...")
    t0 = time.time()
    maze = generate_maze(args.width, args.height, seed=args.seed)
    print(f"Generated in {time.time() - t0:.4f}s | Start: {maze.start} | End: {maze.end}")

    grid = Grid.from_walls(args.width, args.height, maze.walls)
    print(f"Stats: {MazeAnalyzer.calculate_stats(grid)}")

    print(f"\n{'ALGORITHM':<16} | {'TIME (s)':<10} | {'COST':<8} | {'STEPS':<8} | {'EXPANDED':<10}")
    print("-" * 64)

    for name, cls, diagonal in ENABLED_SOLVERS:
        solver = cls(grid, diagonal=diagonal)
        t_start = time.time()
        solver.run_all(maze.start, maze.end)
        duration = time.time() - t_start

        steps = max(len(solver.path) - 1, 0)
        print(f"{name:<16} | {duration:<10.4f} | {solver.total_cost:<8} | {steps:<8} | {solver.nodes_expanded:<10}")


if __name__ == "__main__":
    run_benchmark()
