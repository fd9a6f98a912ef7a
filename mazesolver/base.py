"""Abstract interfaces shared by the maze generator, solver and renderers."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Awaitable, Callable

if TYPE_CHECKING:  # pragma: no cover
    from .grid import Grid

DelayFn = Callable[[float], Awaitable[None]]


class ExplorationSink(ABC):
    """Base class for collaborators notified after every visible grid mutation."""

    @abstractmethod
    def render(self, grid: "Grid") -> None:
        """Consume the current grid state. The return value is ignored."""


class NullSink(ExplorationSink):
    """Sink for headless runs: accepts every notification and does nothing."""

    def render(self, grid: "Grid") -> None:
        return None


async def asyncio_delay(milliseconds: float) -> None:
    """Suspend for ``milliseconds`` while yielding to the running event loop."""

    await asyncio.sleep(max(0.0, milliseconds) / 1000.0)


async def no_delay(milliseconds: float) -> None:
    return None


__all__ = [
    "DelayFn",
    "ExplorationSink",
    "NullSink",
    "asyncio_delay",
    "no_delay",
]
