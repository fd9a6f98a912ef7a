"""Animated breadth-first, depth-first and A* search over a wall grid."""

from __future__ import annotations

import heapq
import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Iterator, List, Optional, Set, Tuple

from ..base import DelayFn, ExplorationSink, NullSink, asyncio_delay
from ..grid import Coord, Grid, clear_solution, grid_shape, open_neighbors

logger = logging.getLogger(__name__)

ALGORITHMS = ("bfs", "dfs", "astar")

EXPLORE = "explore"
PATH_STEP = "path"


@dataclass(frozen=True)
class StepEvent:
    cell: Coord
    kind: str


class MazeSolver:
    """Find the path from (0, 0) to the far corner while emitting every step.

    Every discovered or expanded cell is marked explored, recorded in
    ``events``, pushed to the sink and followed by ``delay(speed)``. The
    final path is then emitted in order with ``kind == "path"``. ``speed``
    is read at every step, so :meth:`set_speed` affects only later steps.
    """

    def __init__(
        self,
        grid: Grid,
        sink: Optional[ExplorationSink] = None,
        speed: float = 0,
        *,
        delay: Optional[DelayFn] = None,
    ) -> None:
        self.grid = grid
        self.rows, self.cols = grid_shape(grid)
        self.start: Coord = (0, 0)
        self.end: Coord = (self.rows - 1, self.cols - 1)
        self.sink = sink if sink is not None else NullSink()
        self.speed = speed
        self._delay = delay if delay is not None else asyncio_delay
        self.events: List[StepEvent] = []

    def set_speed(self, speed: float) -> None:
        self.speed = speed

    @property
    def explored_order(self) -> List[Coord]:
        return [event.cell for event in self.events if event.kind == EXPLORE]

    def neighbors(self, row: int, col: int) -> List[Coord]:
        return open_neighbors(self.grid, row, col)

    async def solve(self, algorithm: str) -> List[Coord]:
        self.events = []
        if self._is_malformed():
            return []

        clear_solution(self.grid)
        self.sink.render(self.grid)

        name = algorithm.lower()
        if name == "bfs":
            return await self.bfs()
        if name == "dfs":
            return await self.dfs()
        if name == "astar":
            return await self.astar()
        logger.warning("Unknown algorithm %r, returning an empty path", algorithm)
        return []

    async def bfs(self) -> List[Coord]:
        if self._is_malformed():
            return []
        queue: Deque[Coord] = deque([self.start])
        visited: Set[Coord] = {self.start}
        parent: Dict[Coord, Coord] = {}
        await self._update_cell(self.start)

        while queue:
            current = queue.popleft()
            if current == self.end:
                return await self._reconstruct_path(parent, current)
            for nxt in self.neighbors(*current):
                if nxt not in visited:
                    visited.add(nxt)
                    parent[nxt] = current
                    queue.append(nxt)
                    await self._update_cell(nxt)
        return []

    async def dfs(self) -> List[Coord]:
        """Depth-first search with backtracking, driven by an explicit stack.

        A frame is pushed when a cell is entered and popped once its
        neighbours are exhausted, which is a dead-end return in the
        recursive formulation.
        """

        if self._is_malformed():
            return []
        visited: Set[Coord] = {self.start}
        parent: Dict[Coord, Coord] = {}
        await self._update_cell(self.start)
        if self.start == self.end:
            return await self._reconstruct_path(parent, self.end)

        stack: List[Tuple[Coord, Iterator[Coord]]] = [
            (self.start, iter(self.neighbors(*self.start)))
        ]
        while stack:
            current, pending = stack[-1]
            for nxt in pending:
                if nxt in visited:
                    continue
                parent[nxt] = current
                visited.add(nxt)
                await self._update_cell(nxt)
                if nxt == self.end:
                    return await self._reconstruct_path(parent, self.end)
                stack.append((nxt, iter(self.neighbors(*nxt))))
                break
            else:
                stack.pop()
        return []

    async def astar(self) -> List[Coord]:
        """A* with Manhattan distance and unit edge cost.

        Ties on ``f`` go to the lowest row, then the lowest column, because
        the open heap orders entries as ``(f, row, col)``.
        """

        if self._is_malformed():
            return []
        g_score: Dict[Coord, int] = {self.start: 0}
        f_score: Dict[Coord, int] = {self.start: self.heuristic(self.start)}
        parent: Dict[Coord, Coord] = {}
        open_heap: List[Tuple[int, int, int]] = [(f_score[self.start], *self.start)]
        open_set: Set[Coord] = {self.start}
        closed: Set[Coord] = set()
        await self._update_cell(self.start)

        while open_heap:
            f, row, col = heapq.heappop(open_heap)
            current = (row, col)
            if current not in open_set or f != f_score[current]:
                continue
            if current == self.end:
                return await self._reconstruct_path(parent, current)

            open_set.discard(current)
            closed.add(current)
            await self._update_cell(current)

            for nxt in self.neighbors(row, col):
                if nxt in closed:
                    continue
                tentative = g_score[current] + 1
                if nxt not in open_set:
                    open_set.add(nxt)
                    await self._update_cell(nxt)
                elif tentative >= g_score[nxt]:
                    continue
                parent[nxt] = current
                g_score[nxt] = tentative
                f_score[nxt] = tentative + self.heuristic(nxt)
                heapq.heappush(open_heap, (f_score[nxt], *nxt))
        return []

    def heuristic(self, cell: Coord) -> int:
        return abs(cell[0] - self.end[0]) + abs(cell[1] - self.end[1])

    # ------------------------------------------------------------------

    def _is_malformed(self) -> bool:
        if self.rows == 0 or self.cols == 0:
            logger.warning("Refusing to search a %dx%d grid", self.rows, self.cols)
            return True
        return False

    async def _update_cell(self, cell: Coord, is_path: bool = False) -> None:
        row, col = cell
        target = self.grid[row][col]
        target.is_explored = True
        if is_path:
            target.is_path = True
        self.events.append(StepEvent(cell, PATH_STEP if is_path else EXPLORE))
        self.sink.render(self.grid)
        await self._delay(self.speed)

    async def _reconstruct_path(self, parent: Dict[Coord, Coord], current: Coord) -> List[Coord]:
        path = [current]
        while current in parent:
            current = parent[current]
            path.append(current)
        path.reverse()
        for cell in path:
            await self._update_cell(cell, is_path=True)
        return path


__all__ = ["ALGORITHMS", "MazeSolver", "StepEvent", "EXPLORE", "PATH_STEP"]
