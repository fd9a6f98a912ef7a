"""Perfect maze generator using randomized depth-first carving."""

from __future__ import annotations

import logging
import random
from typing import Iterator, List, Optional, Tuple

from ..grid import Grid, clear_visualization, create_grid, is_valid_cell

logger = logging.getLogger(__name__)

# (name, row delta, col delta)
DIRECTIONS: Tuple[Tuple[str, int, int], ...] = (
    ("up", -1, 0),
    ("down", 1, 0),
    ("left", 0, -1),
    ("right", 0, 1),
)

_Frame = Tuple[int, int, Iterator[Tuple[str, int, int]]]


class MazeGenerator:
    """Own a grid and carve it into a spanning-tree maze rooted at (0, 0).

    ``rng`` may be any object with a ``shuffle(list)`` method; a seeded
    ``random.Random`` is created from ``seed`` otherwise. Directions are
    reshuffled independently every time a cell is entered.
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        *,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.rows = rows
        self.cols = cols
        self._rng = rng if rng is not None else random.Random(seed)
        self._grid = create_grid(rows, cols)
        self.generate_maze()

    @property
    def current_grid(self) -> Grid:
        return self._grid

    @property
    def grid_size(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def regenerate(self) -> None:
        self._grid = create_grid(self.rows, self.cols)
        self.generate_maze()
        self.clear_animation_state()

    def generate_maze(self) -> None:
        for row in self._grid:
            for cell in row:
                cell.visited = False
        if self.rows <= 0 or self.cols <= 0:
            return
        removed = self._carve(0, 0)
        logger.debug("Carved %dx%d maze, removed %d walls", self.rows, self.cols, removed)

    def clear_animation_state(self) -> None:
        clear_visualization(self._grid)

    # ------------------------------------------------------------------

    def _shuffled_directions(self) -> Iterator[Tuple[str, int, int]]:
        directions: List[Tuple[str, int, int]] = list(DIRECTIONS)
        self._rng.shuffle(directions)
        return iter(directions)

    def _carve(self, row: int, col: int) -> int:
        """Depth-first carve with an explicit stack; returns the number of walls removed.

        Each frame holds the cell and the directions it has not tried yet, so
        the visit, shuffle and wall-removal order match the recursive form.
        """

        grid = self._grid
        grid[row][col].visited = True
        stack: List[_Frame] = [(row, col, self._shuffled_directions())]
        removed = 0
        while stack:
            r, c, directions = stack[-1]
            for name, dr, dc in directions:
                nr, nc = r + dr, c + dc
                if is_valid_cell(nr, nc, self.rows, self.cols) and not grid[nr][nc].visited:
                    self._remove_wall(r, c, nr, nc, name)
                    removed += 1
                    grid[nr][nc].visited = True
                    stack.append((nr, nc, self._shuffled_directions()))
                    break
            else:
                stack.pop()
        return removed

    def _remove_wall(self, row: int, col: int, nrow: int, ncol: int, direction: str) -> None:
        grid = self._grid
        if direction == "up":
            grid[nrow][ncol].bottom_wall = False
        elif direction == "down":
            grid[row][col].bottom_wall = False
        elif direction == "left":
            grid[nrow][ncol].right_wall = False
        elif direction == "right":
            grid[row][col].right_wall = False
        else:
            raise ValueError(f"Unknown direction: {direction}")


__all__ = ["MazeGenerator", "DIRECTIONS"]
