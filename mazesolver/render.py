"""Pillow renderer that turns grid notifications into frames and GIF animations."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple, Union

from PIL import Image, ImageDraw

from .base import ExplorationSink
from .grid import Cell, Grid, grid_shape

PathLike = Union[str, Path]

START_COLOR = (46, 204, 113)
END_COLOR = (231, 76, 60)
PATH_COLOR = (255, 121, 198)
EXPLORED_COLOR = (116, 185, 255)
EMPTY_COLOR = (255, 255, 255)
WALL_COLOR = (44, 62, 80)
BACKGROUND_COLOR = (255, 255, 255)

DEFAULT_MAX_FRAMES = 300


class MazeRenderer(ExplorationSink):
    """Draw the grid on every notification and keep the frames for export.

    Only every ``frame_stride``-th notification is kept and at most
    ``max_frames`` frames are held (oldest dropped); ``max_frames=None``
    removes the cap. ``last_frame`` always reflects the latest notification.
    """

    def __init__(
        self,
        cell_size: int = 20,
        *,
        record_frames: bool = True,
        max_frames: Optional[int] = DEFAULT_MAX_FRAMES,
        frame_stride: int = 1,
    ) -> None:
        if cell_size < 2:
            raise ValueError("cell_size must be at least 2")
        if max_frames is not None and max_frames < 1:
            raise ValueError("max_frames must be positive")
        if frame_stride < 1:
            raise ValueError("frame_stride must be positive")
        self.cell_size = cell_size
        self.record_frames = record_frames
        self.max_frames = max_frames
        self.frame_stride = frame_stride
        self.frames: List[Image.Image] = []
        self.last_frame: Optional[Image.Image] = None
        self._notifications = 0

    def render(self, grid: Grid) -> None:
        frame = self.draw_grid(grid)
        self.last_frame = frame
        self._notifications += 1
        if not self.record_frames or (self._notifications - 1) % self.frame_stride:
            return
        self.frames.append(frame)
        if self.max_frames is not None and len(self.frames) > self.max_frames:
            del self.frames[0]

    def reset(self) -> None:
        self.frames = []
        self.last_frame = None
        self._notifications = 0

    def canvas_dimensions(self, grid: Grid) -> Tuple[int, int]:
        rows, cols = grid_shape(grid)
        margin = 2 * self.origin + 1
        return cols * self.cell_size + margin, rows * self.cell_size + margin

    @property
    def wall_width(self) -> int:
        return max(1, self.cell_size // 20)

    @property
    def origin(self) -> int:
        """Offset of the maze inside the canvas so centred wide walls stay on it."""

        return self.wall_width // 2

    def draw_grid(self, grid: Grid) -> Image.Image:
        rows, cols = grid_shape(grid)
        if rows == 0 or cols == 0:
            return Image.new("RGB", (1, 1), BACKGROUND_COLOR)

        canvas = Image.new("RGB", self.canvas_dimensions(grid), BACKGROUND_COLOR)
        draw = ImageDraw.Draw(canvas)
        size = self.cell_size
        width = self.wall_width
        offset = self.origin

        for r in range(rows):
            for c in range(cols):
                left = offset + c * size
                top = offset + r * size
                draw.rectangle((left, top, left + size - 1, top + size - 1), fill=self._fill(grid[r][c]))

        # Walls go on top of every fill so a neighbour never paints over them.
        for r in range(rows):
            for c in range(cols):
                cell = grid[r][c]
                left = offset + c * size
                top = offset + r * size
                if cell.right_wall:
                    draw.line((left + size, top, left + size, top + size), fill=WALL_COLOR, width=width)
                if cell.bottom_wall:
                    draw.line((left, top + size, left + size, top + size), fill=WALL_COLOR, width=width)
                # Outer boundary on the first column and row is implicit in the model.
                if c == 0:
                    draw.line((left, top, left, top + size), fill=WALL_COLOR, width=width)
                if r == 0:
                    draw.line((left, top, left + size, top), fill=WALL_COLOR, width=width)
        return canvas

    def save_frame(self, path: PathLike) -> Path:
        if self.last_frame is None:
            raise RuntimeError("No frame has been rendered yet")
        destination = Path(path)
        destination.parent.mkdir(parents=True, exist_ok=True)
        self.last_frame.save(destination)
        return destination

    def save_animation(self, path: PathLike, *, frame_duration: int = 40) -> Path:
        if not self.frames:
            raise RuntimeError("No frames recorded; render a solve before saving an animation")
        destination = Path(path)
        destination.parent.mkdir(parents=True, exist_ok=True)
        frames = list(self.frames)
        if self.last_frame is not None and frames[-1] is not self.last_frame:
            frames.append(self.last_frame)
            if self.max_frames is not None and len(frames) > self.max_frames:
                del frames[0]
        first, *rest = frames
        first.save(
            destination,
            save_all=True,
            append_images=rest,
            duration=max(1, frame_duration),
            loop=0,
        )
        return destination

    @staticmethod
    def _fill(cell: Cell) -> Tuple[int, int, int]:
        if cell.is_start:
            return START_COLOR
        if cell.is_end:
            return END_COLOR
        if cell.is_path:
            return PATH_COLOR
        if cell.is_explored:
            return EXPLORED_COLOR
        return EMPTY_COLOR


__all__ = ["DEFAULT_MAX_FRAMES", "MazeRenderer"]
