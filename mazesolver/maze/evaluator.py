"""Structural checks for generated mazes and solver paths."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import numpy as np

from ..grid import Coord, Grid, grid_shape, open_neighbors

WALL = 1
PATH = 0


@dataclass
class MazeEvaluationResult:
    grid_size: Tuple[int, int]
    open_edges: int
    expected_edges: int
    connected: bool
    acyclic: bool
    reachable_cells: int
    message: str

    @property
    def is_perfect(self) -> bool:
        return self.connected and self.acyclic and self.open_edges == self.expected_edges

    def to_dict(self) -> dict:
        return {
            "grid_size": list(self.grid_size),
            "open_edges": self.open_edges,
            "expected_edges": self.expected_edges,
            "connected": self.connected,
            "acyclic": self.acyclic,
            "reachable_cells": self.reachable_cells,
            "is_perfect": self.is_perfect,
            "message": self.message,
        }


def wall_arrays(grid: Grid) -> Tuple[np.ndarray, np.ndarray]:
    """Return ``(right, bottom)`` boolean wall arrays of shape ``(rows, cols)``."""

    rows, cols = grid_shape(grid)
    right = np.ones((rows, cols), dtype=bool)
    bottom = np.ones((rows, cols), dtype=bool)
    for r, row in enumerate(grid):
        for c, cell in enumerate(row):
            right[r, c] = cell.right_wall
            bottom[r, c] = cell.bottom_wall
    return right, bottom


def count_open_edges(grid: Grid) -> int:
    right, bottom = wall_arrays(grid)
    return int(np.count_nonzero(~right[:, :-1]) + np.count_nonzero(~bottom[:-1, :]))


def to_block_matrix(grid: Grid) -> np.ndarray:
    """Expand the wall grid into a ``(2R+1, 2C+1)`` matrix of WALL/PATH blocks."""

    rows, cols = grid_shape(grid)
    right, bottom = wall_arrays(grid)
    blocks = np.full((2 * rows + 1, 2 * cols + 1), WALL, dtype=np.uint8)
    blocks[1:-1:2, 1:-1:2] = PATH
    if cols > 1:
        blocks[1:-1:2, 2:-2:2][~right[:, :-1]] = PATH
    if rows > 1:
        blocks[2:-2:2, 1:-1:2][~bottom[:-1, :]] = PATH
    return blocks


def format_block_matrix(blocks: np.ndarray, *, wall: str = "#", path: str = " ") -> str:
    return "\n".join("".join(wall if value == WALL else path for value in row) for row in blocks)


class MazeEvaluator:
    """Check that a grid is a perfect maze and that a path walks through it legally."""

    def evaluate(self, grid: Grid) -> MazeEvaluationResult:
        rows, cols = grid_shape(grid)
        total = rows * cols
        expected = max(total - 1, 0)
        open_edges = count_open_edges(grid) if total else 0
        reachable = self._reachable_count(grid) if total else 0
        connected = reachable == total
        acyclic = self._is_acyclic(grid) if total else True

        if total == 0:
            message = "Grid is empty."
        elif not connected:
            message = f"Only {reachable} of {total} cells are reachable from the start."
        elif not acyclic:
            message = "Open passages form a cycle."
        elif open_edges != expected:
            message = f"Expected {expected} open passages, found {open_edges}."
        else:
            message = "Maze is a spanning tree over every cell."

        return MazeEvaluationResult(
            grid_size=(rows, cols),
            open_edges=open_edges,
            expected_edges=expected,
            connected=connected,
            acyclic=acyclic,
            reachable_cells=reachable,
            message=message,
        )

    def check_path(self, grid: Grid, path: Sequence[Coord]) -> bool:
        """True when ``path`` runs from the start to the end through open walls only."""

        rows, cols = grid_shape(grid)
        if not path or rows == 0 or cols == 0:
            return False
        cells = [tuple(cell) for cell in path]
        if cells[0] != (0, 0) or cells[-1] != (rows - 1, cols - 1):
            return False
        if len(set(cells)) != len(cells):
            return False
        for (r, c), nxt in zip(cells, cells[1:]):
            if nxt not in open_neighbors(grid, r, c):
                return False
        return True

    # ------------------------------------------------------------------

    def _reachable_count(self, grid: Grid) -> int:
        queue = deque([(0, 0)])
        seen = {(0, 0)}
        while queue:
            r, c = queue.popleft()
            for nxt in open_neighbors(grid, r, c):
                if nxt not in seen:
                    seen.add(nxt)
                    queue.append(nxt)
        return len(seen)

    def _is_acyclic(self, grid: Grid) -> bool:
        rows, cols = grid_shape(grid)
        right, bottom = wall_arrays(grid)
        edges: List[Tuple[Coord, Coord]] = []
        for r, c in np.argwhere(~right[:, :-1]):
            edges.append(((int(r), int(c)), (int(r), int(c) + 1)))
        for r, c in np.argwhere(~bottom[:-1, :]):
            edges.append(((int(r), int(c)), (int(r) + 1, int(c))))

        parent: Dict[Coord, Coord] = {(r, c): (r, c) for r in range(rows) for c in range(cols)}

        def find(cell: Coord) -> Coord:
            while parent[cell] != cell:
                parent[cell] = parent[parent[cell]]
                cell = parent[cell]
            return cell

        for a, b in edges:
            root_a, root_b = find(a), find(b)
            if root_a == root_b:
                return False
            parent[root_a] = root_b
        return True


__all__ = [
    "MazeEvaluator",
    "MazeEvaluationResult",
    "PATH",
    "WALL",
    "count_open_edges",
    "format_block_matrix",
    "to_block_matrix",
    "wall_arrays",
]
