"""Pathfinding strategies over wall grids."""

__all__ = [
    "ALGORITHMS",
    "MazeSolver",
    "StepEvent",
]

from .pathfinder import ALGORITHMS, MazeSolver, StepEvent
