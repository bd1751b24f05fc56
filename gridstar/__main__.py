"""Module entry point for `python -m gridstar`."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console

from gridstar.app import run_search, run_search_with_viewer
from gridstar.db.step_log import STEP_LOG_NAME
from gridstar.render.maze_map import render_maze_lines
from gridstar.render.step_log_reader import (
    apply_step_result,
    read_header,
    read_step_results,
    rebuild_maze,
)
from gridstar.render.viewer import render_step
from gridstar.sim.contracts import Heuristic, Movement
from gridstar.sim.maze import MazeError
from gridstar.sim.maze_loader import MazePaths, load_maze, load_maze_config

DEFAULT_REPLAY_DIR = Path("replay")
DEFAULT_MAZE_DIR = Path("maze")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def main() -> None:
    parser = argparse.ArgumentParser(description="Step through A* on a grid maze.")
    parser.add_argument(
        "--view",
        action="store_true",
        help="Open the interactive maze editor and search viewer.",
    )
    parser.add_argument(
        "--replay",
        type=Path,
        default=None,
        help="Print a saved run folder step by step.",
    )
    parser.add_argument(
        "--maze-dir",
        type=Path,
        default=DEFAULT_MAZE_DIR,
        help="Directory holding maze.json and the maze map.",
    )
    parser.add_argument(
        "--replay-dir",
        type=Path,
        default=DEFAULT_REPLAY_DIR,
        help="Base directory for new run logs.",
    )
    parser.add_argument(
        "--heuristic",
        choices=[kind.value for kind in Heuristic],
        default=None,
        help="Heuristic to use (defaults to maze.json, then manhattan).",
    )
    parser.add_argument(
        "--movement",
        choices=[kind.value for kind in Movement],
        default=None,
        help="Allowed moves (defaults to maze.json, then straight_and_diagonal).",
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=None,
        help="Maximum number of steps for a headless run. Omit to run to the end.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (defaults to maze.json, then INFO).",
    )
    args = parser.parse_args()

    paths = MazePaths(base_dir=args.maze_dir)
    try:
        config = load_maze_config(paths=paths)
    except (FileNotFoundError, ValueError) as exc:
        raise SystemExit(str(exc)) from exc
    _configure_logging(args.log_level or config.log_level)

    if args.replay is not None:
        _replay_run(args.replay)
        return

    heuristic = Heuristic(args.heuristic) if args.heuristic else config.heuristic
    movement = Movement(args.movement) if args.movement else config.movement
    try:
        maze = load_maze(config, paths=paths)
    except (FileNotFoundError, MazeError) as exc:
        raise SystemExit(str(exc)) from exc

    if args.view:
        run_search_with_viewer(
            maze, heuristic=heuristic, movement=movement, tick_delay=config.tick_delay
        )
        return

    try:
        created_run = run_search(
            maze,
            args.replay_dir,
            heuristic=heuristic,
            movement=movement,
            steps=args.steps,
        )
    except MazeError as exc:
        raise SystemExit(str(exc)) from exc
    print(f"Run saved to {created_run}")


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    if level_name.upper() != logging.getLevelName(level):
        logging.getLogger(__name__).warning(
            "Invalid log level '%s'; using INFO.", level_name
        )


def _replay_run(run_folder: Path) -> None:
    console = Console()
    log_path = run_folder / STEP_LOG_NAME
    if not log_path.is_file():
        raise SystemExit(f"No step log found at {log_path}.")
    header = read_header(log_path)
    if header is None:
        raise SystemExit(f"Step log {log_path} has no header.")
    try:
        maze = rebuild_maze(header)
    except MazeError as exc:
        raise SystemExit(str(exc)) from exc
    console.print(
        f"Run {header.run_id}: {header.heuristic.value}, {header.movement.value}",
        markup=False,
    )
    for result in read_step_results(log_path):
        apply_step_result(maze, result)
        console.print(render_step(result))
    for line in render_maze_lines(maze):
        console.print(line)


if __name__ == "__main__":
    main()
