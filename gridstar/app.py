"""Application entry for running searches."""

from __future__ import annotations

import logging
from pathlib import Path

from gridstar.db.step_log import StepLogWriter
from gridstar.render.search_viewer import run_search_viewer
from gridstar.sim.astar import AStarSearch
from gridstar.sim.contracts import Heuristic, Movement
from gridstar.sim.maze import Maze
from gridstar.sim.session import SearchSession
from gridstar.sim.step_loop import run_steps

logger = logging.getLogger(__name__)


def run_search(
    maze: Maze,
    base_dir: Path,
    *,
    heuristic: Heuristic = Heuristic.MANHATTAN,
    movement: Movement = Movement.STRAIGHT_AND_DIAGONAL,
    steps: int | None = None,
    run_id: str | None = None,
) -> Path:
    """Search headlessly and write every step to a new run folder."""
    search = AStarSearch(maze, heuristic=heuristic, movement=movement)
    writer = StepLogWriter.open(
        base_dir, maze, heuristic=heuristic, movement=movement, run_id=run_id
    )
    for result in run_steps(search, steps=steps):
        writer.append(result)
    logger.info(
        "Run %s finished in state %s after %s steps",
        writer.run_dir.name,
        search.state.value,
        search.steps,
    )
    return writer.run_dir


def run_search_with_viewer(
    maze: Maze,
    *,
    heuristic: Heuristic = Heuristic.MANHATTAN,
    movement: Movement = Movement.STRAIGHT_AND_DIAGONAL,
    tick_delay: float = 0.1,
) -> None:
    session = SearchSession(maze=maze, heuristic=heuristic, movement=movement)
    start = maze.start_cell
    if start is not None:
        session.cursor = start.position
    run_search_viewer(session, tick_delay=tick_delay)
