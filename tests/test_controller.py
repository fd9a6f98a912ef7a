import asyncio
import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path

from PIL import Image

from mazesolver.base import asyncio_delay, no_delay
from mazesolver.cli import main
from mazesolver.controller import MazeController, SolveInProgressError
from mazesolver.maze import MazeEvaluator
from mazesolver.render import MazeRenderer


class MazeControllerTests(unittest.IsolatedAsyncioTestCase):
    async def test_solve_returns_valid_path(self) -> None:
        controller = MazeController(9, 7, seed=3, delay=no_delay)
        path = await controller.solve("BFS")
        self.assertTrue(MazeEvaluator().check_path(controller.grid, path))
        self.assertFalse(controller.is_busy)
        self.assertIsNotNone(controller.last_solver)

    async def test_overlapping_requests_are_rejected(self) -> None:
        gate = asyncio.Event()

        async def wait_for_gate(milliseconds: float) -> None:
            await gate.wait()

        controller = MazeController(5, 5, seed=1, delay=wait_for_gate)
        running = asyncio.create_task(controller.solve("dfs"))
        await asyncio.sleep(0)
        self.assertTrue(controller.is_busy)

        with self.assertRaises(SolveInProgressError):
            await controller.solve("bfs")
        with self.assertRaises(SolveInProgressError):
            controller.regenerate()
        with self.assertRaises(SolveInProgressError):
            controller.set_dimensions(3, 3)

        gate.set()
        path = await running
        self.assertEqual(path[-1], (4, 4))
        self.assertFalse(controller.is_busy)

    async def test_busy_flag_released_on_failure(self) -> None:
        async def explode(milliseconds: float) -> None:
            raise RuntimeError("boom")

        controller = MazeController(3, 3, seed=2, delay=explode)
        with self.assertRaises(RuntimeError):
            await controller.solve("bfs")
        self.assertFalse(controller.is_busy)

    async def test_set_speed_reaches_running_solver(self) -> None:
        controller = MazeController(4, 4, seed=8, delay=no_delay)
        await controller.solve("astar")
        controller.set_speed(25)
        self.assertEqual(controller.speed, 25)
        self.assertEqual(controller.last_solver.speed, 25)

    async def test_real_delay_yields_to_event_loop(self) -> None:
        controller = MazeController(3, 3, seed=4, speed=0, delay=asyncio_delay)
        ticks = []

        async def ticker() -> None:
            for _ in range(3):
                ticks.append(1)
                await asyncio.sleep(0)

        path, _ = await asyncio.gather(controller.solve("bfs"), ticker())
        self.assertEqual(path[0], (0, 0))
        self.assertEqual(len(ticks), 3)

    def test_regenerate_and_resize(self) -> None:
        renderer = MazeRenderer(cell_size=10)
        controller = MazeController(4, 6, seed=5, sink=renderer)
        self.assertEqual(len(renderer.frames), 1)
        old_grid = controller.grid
        controller.regenerate()
        self.assertIsNot(controller.grid, old_grid)
        controller.set_dimensions(7, 3)
        self.assertEqual(controller.grid_size, (7, 3))
        self.assertEqual(len(controller.grid), 7)
        self.assertTrue(MazeEvaluator().evaluate(controller.grid).is_perfect)
        self.assertEqual(len(renderer.frames), 3)
        self.assertEqual(renderer.last_frame.size, (31, 71))

    def test_validation(self) -> None:
        with self.assertRaises(ValueError):
            MazeController(0, 5)
        with self.assertRaises(ValueError):
            MazeController(5, 5, speed=-1)
        controller = MazeController(2, 2)
        with self.assertRaises(ValueError):
            controller.set_speed(-5)
        with self.assertRaises(ValueError):
            controller.set_dimensions(2, 0)


class CommandLineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def _run(self, argv):
        buffer = io.StringIO()
        with contextlib.redirect_stdout(buffer):
            main(argv)
        return buffer.getvalue()

    def test_all_algorithms_report_same_path(self) -> None:
        output = self._run(["--rows", "6", "--cols", "9", "--seed", "7", "--all"])
        report = json.loads(output)
        self.assertTrue(report["maze"]["is_perfect"])
        self.assertEqual([solve["algorithm"] for solve in report["solves"]], ["bfs", "dfs", "astar"])
        paths = {tuple(map(tuple, solve["path"])) for solve in report["solves"]}
        self.assertEqual(len(paths), 1)
        self.assertTrue(all(solve["valid_path"] for solve in report["solves"]))

    def test_writes_animation_and_image(self) -> None:
        gif_path = Path(self.tmp.name) / "solve.gif"
        png_path = Path(self.tmp.name) / "final.png"
        self._run(
            [
                "--rows", "4",
                "--cols", "4",
                "--seed", "1",
                "--algorithm", "AStar",
                "--cell-size", "8",
                "--animation", str(gif_path),
                "--image", str(png_path),
            ]
        )
        self.assertTrue(gif_path.exists())
        self.assertTrue(png_path.exists())

    def test_show_prints_block_maze(self) -> None:
        output = self._run(["--rows", "2", "--cols", "3", "--seed", "2", "--show"])
        lines = output.splitlines()
        self.assertEqual(lines[0], "#######")
        self.assertEqual(len(lines[0]), 7)

    def test_unknown_algorithm_is_lenient(self) -> None:
        report = json.loads(self._run(["--rows", "3", "--cols", "3", "--algorithm", "greedy"]))
        self.assertEqual(report["solves"][0]["path"], [])
        self.assertFalse(report["solves"][0]["valid_path"])

    def test_rejects_non_positive_rows(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                main(["--rows", "0"])

    def test_animation_respects_frame_cap(self) -> None:
        gif_path = Path(self.tmp.name) / "capped.gif"
        report = json.loads(
            self._run(
                [
                    "--rows", "10",
                    "--cols", "10",
                    "--seed", "3",
                    "--cell-size", "4",
                    "--max-frames", "5",
                    "--animation", str(gif_path),
                ]
            )
        )
        self.assertGreater(report["solves"][0]["explored_steps"], 5)
        with Image.open(gif_path) as animation:
            self.assertLessEqual(getattr(animation, "n_frames", 1), 5)

    def test_rejects_too_small_cell_size(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                main(["--cell-size", "1", "--image", str(Path(self.tmp.name) / "x.png")])

    def test_log_level_must_be_known(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                main(["--log-level", "VERBOSE"])
        report = json.loads(self._run(["--rows", "2", "--cols", "2", "--log-level", "debug"]))
        self.assertEqual(report["grid_size"], [2, 2])


if __name__ == "__main__":
    unittest.main()
