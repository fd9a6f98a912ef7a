"""Command line entry point: generate a maze, solve it and report the result."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import List, Optional

from .base import no_delay
from .controller import MazeController
from .maze.evaluator import MazeEvaluator, format_block_matrix, to_block_matrix
from .render import DEFAULT_MAX_FRAMES, MazeRenderer
from .solver.pathfinder import ALGORITHMS

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def _cell_size(value: str) -> int:
    number = int(value)
    if number < 2:
        raise argparse.ArgumentTypeError(f"cell size must be at least 2, got {value}")
    return number


def _non_negative_float(value: str) -> float:
    number = float(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative number, got {value}")
    return number


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a perfect maze and animate a path search through it")
    parser.add_argument("--rows", type=_positive_int, default=15)
    parser.add_argument("--cols", type=_positive_int, default=15)
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--algorithm", type=str, default="bfs", help="bfs, dfs or astar (case-insensitive)")
    group.add_argument("--all", action="store_true", help="Run every algorithm one after another")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--speed",
        type=_non_negative_float,
        default=0.0,
        help="Delay between animation steps in milliseconds",
    )
    parser.add_argument("--cell-size", type=_cell_size, default=20)
    parser.add_argument("--animation", type=Path, default=None, help="Write the last solve as an animated GIF")
    parser.add_argument("--image", type=Path, default=None, help="Write the final frame as an image")
    parser.add_argument("--frame-duration", type=int, default=40, help="GIF frame duration in milliseconds")
    parser.add_argument(
        "--max-frames",
        type=_positive_int,
        default=DEFAULT_MAX_FRAMES,
        help="Most frames kept for the animation; the latest frames win",
    )
    parser.add_argument("--frame-stride", type=_positive_int, default=1, help="Keep every Nth animation step")
    parser.add_argument("--show", action="store_true", help="Print the maze as text")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
    )
    return parser.parse_args(argv)


async def _run(controller: MazeController, renderer: Optional[MazeRenderer], algorithms: List[str]) -> List[dict]:
    evaluator = MazeEvaluator()
    summaries = []
    for algorithm in algorithms:
        if renderer is not None:
            renderer.reset()
        path = await controller.solve(algorithm)
        solver = controller.last_solver
        explored = solver.explored_order if solver is not None else []
        summaries.append(
            {
                "algorithm": algorithm,
                "path": [list(cell) for cell in path],
                "path_length": len(path),
                "explored_steps": len(explored),
                "valid_path": evaluator.check_path(controller.grid, path),
            }
        )
    return summaries


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    wants_images = args.animation is not None or args.image is not None
    renderer = None
    if wants_images:
        renderer = MazeRenderer(
            args.cell_size,
            record_frames=args.animation is not None,
            max_frames=args.max_frames,
            frame_stride=args.frame_stride,
        )
    controller = MazeController(
        args.rows,
        args.cols,
        speed=args.speed,
        sink=renderer,
        delay=None if args.speed > 0 else no_delay,
        seed=args.seed,
    )

    algorithms = list(ALGORITHMS) if args.all else [args.algorithm]
    summaries = asyncio.run(_run(controller, renderer, algorithms))

    if renderer is not None:
        if args.animation is not None:
            destination = renderer.save_animation(args.animation, frame_duration=args.frame_duration)
            logger.info("Wrote animation to %s", destination)
        if args.image is not None:
            destination = renderer.save_frame(args.image)
            logger.info("Wrote final frame to %s", destination)

    if args.show:
        print(format_block_matrix(to_block_matrix(controller.grid)))

    report = {
        "grid_size": list(controller.grid_size),
        "seed": args.seed,
        "maze": MazeEvaluator().evaluate(controller.grid).to_dict(),
        "solves": summaries,
    }
    print(json.dumps(report, indent=2))


if __name__ == "__main__":
    main()
