class MazeError(ValueError):
    """Base class for every error raised by maze_pathfinder."""


class InvalidDimensions(MazeError):
    pass


class InvalidEndpoint(MazeError):
    """Start or end is outside the grid or sits on a wall."""

    def __init__(self, role: str, coord, reason: str):
        self.role = role
        self.coord = coord
        self.reason = reason
        super().__init__(f"{role} {coord} is {reason}")


class Cancelled(MazeError):
    """Raised when a cancellation hook fires mid-run. No partial result exists."""


class InvalidHeuristic(MazeError):
    """Heuristic name is not one of the Heuristic values."""
