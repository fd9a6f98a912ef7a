"""Headless controller wiring the generator, solver and a sink together."""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple

from .base import DelayFn, ExplorationSink, NullSink
from .grid import Coord, Grid
from .maze.generator import MazeGenerator
from .solver.pathfinder import MazeSolver

logger = logging.getLogger(__name__)


class SolveInProgressError(RuntimeError):
    """Raised when a solve or regeneration is requested while a solve is animating."""


class MazeController:
    """Hold the current maze and run one solve at a time against it.

    Overlapping requests are rejected with :class:`SolveInProgressError`
    instead of being queued or cancelling the running solve.
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        *,
        speed: float = 0,
        sink: Optional[ExplorationSink] = None,
        delay: Optional[DelayFn] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._validate_dimensions(rows, cols)
        self._validate_speed(speed)
        self.sink = sink if sink is not None else NullSink()
        self._delay = delay
        self._speed = speed
        self._rng = rng if rng is not None else random.Random(seed)
        self._busy = False
        self.last_solver: Optional[MazeSolver] = None
        self._generator = MazeGenerator(rows, cols, rng=self._rng)
        self.sink.render(self.grid)

    @property
    def grid(self) -> Grid:
        return self._generator.current_grid

    @property
    def grid_size(self) -> Tuple[int, int]:
        return self._generator.grid_size

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def is_busy(self) -> bool:
        return self._busy

    def set_speed(self, speed: float) -> None:
        self._validate_speed(speed)
        self._speed = speed
        if self.last_solver is not None:
            self.last_solver.set_speed(speed)

    def set_dimensions(self, rows: int, cols: int) -> None:
        self._validate_dimensions(rows, cols)
        self._ensure_idle("resize")
        self._generator = MazeGenerator(rows, cols, rng=self._rng)
        self.last_solver = None
        logger.info("Generated new %dx%d maze", rows, cols)
        self.sink.render(self.grid)

    def regenerate(self) -> None:
        self._ensure_idle("regenerate")
        self._generator.regenerate()
        self.last_solver = None
        logger.info("Regenerated %dx%d maze", *self.grid_size)
        self.sink.render(self.grid)

    async def solve(self, algorithm: str) -> List[Coord]:
        self._ensure_idle("solve")
        self._busy = True
        try:
            solver = MazeSolver(self.grid, self.sink, self._speed, delay=self._delay)
            self.last_solver = solver
            path = await solver.solve(algorithm)
        finally:
            self._busy = False
        logger.info(
            "Solved with %s: path of %d cells after %d exploration steps",
            algorithm,
            len(path),
            len(solver.explored_order),
        )
        return path

    # ------------------------------------------------------------------

    def _ensure_idle(self, action: str) -> None:
        if self._busy:
            raise SolveInProgressError(f"Cannot {action} while a solve is in progress")

    @staticmethod
    def _validate_dimensions(rows: int, cols: int) -> None:
        if rows < 1 or cols < 1:
            raise ValueError("rows and cols must be positive")

    @staticmethod
    def _validate_speed(speed: float) -> None:
        if speed < 0:
            raise ValueError("speed must be non-negative")


__all__ = ["MazeController", "SolveInProgressError"]
