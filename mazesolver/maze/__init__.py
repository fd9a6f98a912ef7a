"""Maze generation and structural evaluation package."""

__all__ = [
    "MazeGenerator",
    "MazeEvaluator",
    "MazeEvaluationResult",
]

from .generator import MazeGenerator
from .evaluator import MazeEvaluator, MazeEvaluationResult
