import argparse
import sys
import os
import logging
import time

# Ensure project root is in path so we can import 'maze_pathfinder' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_pathfinder.algo.heuristics import D, Heuristic
from maze_pathfinder.algo.prim import generate_maze
from maze_pathfinder.algo.solvers import find_path
from maze_pathfinder.core.analysis import MazeAnalyzer
from maze_pathfinder.core.errors import MazeError
from maze_pathfinder.core.grid import Grid
from maze_pathfinder.viz.text import TextRenderer

# Board size of the interactive editor this engine backs
DEFAULT_WIDTH = 125
DEFAULT_HEIGHT = 50

logger = logging.getLogger("maze_pathfinder")


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def parse_coord(text: str):
    try:
        x, y = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected X,Y but got {text!r}")
    return (x, y)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze Pathfinder: Prim's maze generation and A* search")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    gen_parser.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="Maze Width")
    gen_parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT, help="Maze Height")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    gen_parser.add_argument("--quiet", "-q", action="store_true", help="Do not print the board")

    # Solve Command
    solve_parser = subparsers.add_parser("solve", help="Generate a maze (or empty board) and run A*")
    solve_parser.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="Maze Width")
    solve_parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT, help="Maze Height")
    solve_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    solve_parser.add_argument("--no-maze", action="store_true", help="Search an empty board instead of a maze")
    solve_parser.add_argument("--diagonal", action="store_true", help="Allow diagonal moves")
    solve_parser.add_argument("--heuristic", type=str, default=None, choices=[h.value for h in Heuristic],
                              help="Heuristic (defaults to the one matching the movement model)")
    solve_parser.add_argument("--start", type=parse_coord, default=None, help="Start as X,Y")
    solve_parser.add_argument("--end", type=parse_coord, default=None, help="End as X,Y")
    solve_parser.add_argument("--quiet", "-q", action="store_true", help="Do not print the board")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Time generation and search")
    bench_parser.add_argument("--size", type=int, default=100, help="Benchmark size")
    bench_parser.add_argument("--repeat", type=int, default=3, help="Runs per measurement")
    bench_parser.add_argument("--seed", type=int, default=123, help="Random Seed")

    return parser


def cmd_generate(args):
    logger.info(f"Generating {args.width}x{args.height} maze with Prim's...")
    maze = generate_maze(args.width, args.height, seed=args.seed)

    grid = Grid.from_walls(args.width, args.height, maze.walls)
    stats = MazeAnalyzer.calculate_stats(grid)
    logger.info(f"Stats: {stats}")

    if not args.quiet:
        print(TextRenderer(args.width, args.height).render(maze.walls, start=maze.start, end=maze.end))
    print(f"Walls: {len(maze.walls)} | Start: {maze.start} | End: {maze.end}")


def cmd_solve(args):
    width, height = args.width, args.height
    if args.no_maze:
        walls = []
        start = (0, 0)
        end = (min(1, width - 1), min(1, height - 1))
    else:
        logger.info(f"Generating {width}x{height} maze with Prim's...")
        maze = generate_maze(width, height, seed=args.seed)
        walls, start, end = maze.walls, maze.start, maze.end

    start = args.start or start
    end = args.end or end
    mode = "diagonal" if args.diagonal else "straight"
    logger.info(f"Solving with A* ({mode} moves) from {start} to {end}...")

    result = find_path(width, height, walls, start, end, diagonal=args.diagonal, heuristic=args.heuristic)

    if not args.quiet:
        print(TextRenderer(width, height).render(walls, result.path, start, end))

    if result.found:
        print(f"Length of Path: {result.total_cost / D:g} | Cost: {result.total_cost} | "
              f"Iterations: {result.nodes_expanded}")
    else:
        print(f"No path found. Iterations: {result.nodes_expanded}")


def cmd_benchmark(args):
    size = args.size
    repeat = max(1, args.repeat)
    logger.info(f"Running benchmark (Size: {size}x{size}, repeat={repeat})...")

    t0 = time.perf_counter()
    for _ in range(repeat):
        maze = generate_maze(size, size, seed=args.seed)
    gen_time = (time.perf_counter() - t0) / repeat

    print(f"\n{'STAGE':<20} | {'TIME (s)':<10} | {'COST':<10} | {'EXPANDED':<10}")
    print("-" * 60)
    print(f"{'Prim generate':<20} | {gen_time:<10.4f} | {'-':<10} | {'-':<10}")

    for name, diagonal in (("A* straight", False), ("A* diagonal", True)):
        t0 = time.perf_counter()
        for _ in range(repeat):
            result = find_path(size, size, maze.walls, maze.start, maze.end, diagonal=diagonal)
        duration = (time.perf_counter() - t0) / repeat
        print(f"{name:<20} | {duration:<10.4f} | {result.total_cost:<10} | {result.nodes_expanded:<10}")


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    try:
        if args.command == "generate":
            cmd_generate(args)
        elif args.command == "solve":
            cmd_solve(args)
        elif args.command == "benchmark":
            cmd_benchmark(args)
    except MazeError as e:
        logger.error(str(e))
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
