"""Perfect maze generation and animated path search toolkit."""

__all__ = [
    "ALGORITHMS",
    "Cell",
    "ExplorationSink",
    "Grid",
    "MazeController",
    "MazeEvaluationResult",
    "MazeEvaluator",
    "MazeGenerator",
    "MazeRenderer",
    "MazeSolver",
    "NullSink",
    "SolveInProgressError",
    "StepEvent",
    "asyncio_delay",
    "create_grid",
    "is_valid_cell",
    "no_delay",
]

from .base import ExplorationSink, NullSink, asyncio_delay, no_delay
from .grid import Cell, Grid, create_grid, is_valid_cell
from .maze import MazeGenerator, MazeEvaluator, MazeEvaluationResult
from .solver import ALGORITHMS, MazeSolver, StepEvent
from .render import MazeRenderer
from .controller import MazeController, SolveInProgressError
