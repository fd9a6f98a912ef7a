"""Cell and grid data model for wall-based rectangular mazes.

Each cell stores only its right and bottom walls. The wall between
``(r, c)`` and ``(r, c + 1)`` lives on ``(r, c).right_wall`` and the wall
between ``(r, c)`` and ``(r + 1, c)`` on ``(r, c).bottom_wall``. Row 0 and
column 0 are always bounded by the implicit outer wall.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

Coord = Tuple[int, int]


@dataclass
class Cell:
    right_wall: bool = True
    bottom_wall: bool = True
    visited: bool = False
    is_start: bool = False
    is_end: bool = False
    is_explored: bool = False
    is_path: bool = False


Grid = List[List[Cell]]


def create_grid(rows: int, cols: int) -> Grid:
    """Allocate a fully walled grid with the start at (0, 0) and the end at the far corner."""

    return [
        [
            Cell(is_start=(r == 0 and c == 0), is_end=(r == rows - 1 and c == cols - 1))
            for c in range(cols)
        ]
        for r in range(rows)
    ]


def is_valid_cell(row: int, col: int, rows: int, cols: int) -> bool:
    return 0 <= row < rows and 0 <= col < cols


def grid_shape(grid: Grid) -> Tuple[int, int]:
    rows = len(grid)
    cols = len(grid[0]) if rows else 0
    return rows, cols


def clear_solution(grid: Grid) -> None:
    """Reset the per-solve markers, leaving walls and ``visited`` alone."""

    for row in grid:
        for cell in row:
            cell.is_explored = False
            cell.is_path = False


def clear_visualization(grid: Grid) -> None:
    """Reset every scratch and visualization flag."""

    for row in grid:
        for cell in row:
            cell.is_explored = False
            cell.is_path = False
            cell.visited = False


def open_neighbors(grid: Grid, row: int, col: int) -> List[Coord]:
    """Return the neighbours reachable from ``(row, col)`` in up, down, left, right order."""

    rows, cols = grid_shape(grid)
    cell = grid[row][col]
    neighbors: List[Coord] = []
    if row > 0 and not grid[row - 1][col].bottom_wall:
        neighbors.append((row - 1, col))
    if row + 1 < rows and not cell.bottom_wall:
        neighbors.append((row + 1, col))
    if col > 0 and not grid[row][col - 1].right_wall:
        neighbors.append((row, col - 1))
    if col + 1 < cols and not cell.right_wall:
        neighbors.append((row, col + 1))
    return neighbors


__all__ = [
    "Cell",
    "Coord",
    "Grid",
    "clear_solution",
    "clear_visualization",
    "create_grid",
    "grid_shape",
    "is_valid_cell",
    "open_neighbors",
]
