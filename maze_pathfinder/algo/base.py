import random
from abc import ABC, abstractmethod
from typing import Iterator, List

from maze_pathfinder.core.errors import Cancelled
from maze_pathfinder.core.grid import Grid
from maze_pathfinder.core.types import Coord


class Generator(ABC):
    def __init__(self, grid: Grid, seed: int = None, rng: random.Random = None,
                 cancel=None, progress_every: int = 100):
        self.grid = grid
        self.seed = seed
        # An injected rng wins over the seed
        self.rng = rng if rng is not None else random.Random(seed)
        self.cancel = cancel
        self.progress_every = max(1, progress_every)
        self.step_count = 0

    @abstractmethod
    def run(self) -> Iterator[str]:
        """
        Yields status strings or progress updates.
        The actual grid modifications happen in-place on self.grid.
        """
        pass

    def run_all(self):
        """Helper to run the generator to completion."""
        for _ in self.run():
            pass

    def check_cancel(self):
        if self.cancel is not None and self.cancel.is_set():
            raise Cancelled(f"{type(self).__name__} cancelled after {self.step_count} steps")


class Solver(ABC):
    def __init__(self, grid: Grid, cancel=None, progress_every: int = 100):
        self.grid = grid
        self.path: List[Coord] = []
        self.total_cost = 0
        self.nodes_expanded = 0
        self.cancel = cancel
        self.progress_every = max(1, progress_every)

    @abstractmethod
    def run(self, start: Coord, end: Coord) -> Iterator[str]:
        pass

    def run_all(self, start: Coord, end: Coord):
        for _ in self.run(start, end):
            pass

    def check_cancel(self):
        if self.cancel is not None and self.cancel.is_set():
            raise Cancelled(f"{type(self).__name__} cancelled after {self.nodes_expanded} expansions")
