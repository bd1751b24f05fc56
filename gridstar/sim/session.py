"""Interactive session: maze editing plus search control for a front end."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from gridstar.sim.astar import AStarSearch
from gridstar.sim.contracts import AlgorithmState, FieldType, Heuristic, Movement, StepResult
from gridstar.sim.maze import Maze, MissingEndpointError
from gridstar.sim.step_loop import SearchRunner

logger = logging.getLogger(__name__)

EDIT_LOCKED_MESSAGE = "Cannot edit maze while search is running."


@dataclass
class SearchSession:
    maze: Maze
    heuristic: Heuristic = Heuristic.MANHATTAN
    movement: Movement = Movement.STRAIGHT_AND_DIAGONAL
    cursor: tuple[int, int] = (0, 0)
    search: AStarSearch | None = None
    runner: SearchRunner | None = None
    last_result: StepResult | None = None
    last_message: str = ""
    history: list[StepResult] = field(default_factory=list)

    @property
    def state(self) -> AlgorithmState | None:
        return self.search.state if self.search else None

    @property
    def can_edit(self) -> bool:
        return self.search is None

    def cycle_cell(self, x: int, y: int, *, reverse: bool = False) -> FieldType | None:
        if not self.can_edit:
            self.last_message = EDIT_LOCKED_MESSAGE
            return None
        new_type = self.maze.cycle_type(x, y, reverse=reverse)
        if new_type is not None:
            logger.info("Cell %s,%s changed to type %s", x, y, new_type.value)
            self.last_message = f"Cell {x},{y} is now {new_type.value}."
        return new_type

    def move_cursor(self, dx: int, dy: int) -> None:
        x = max(0, min(self.maze.width - 1, self.cursor[0] + dx))
        y = max(0, min(self.maze.height - 1, self.cursor[1] + dy))
        self.cursor = (x, y)

    def step(self) -> StepResult | None:
        logger.info("Step requested")
        runner = self._ensure_runner()
        if runner is None:
            return None
        runner.pause()
        if runner.search.is_finished:
            return None
        return self._record(runner.search.step())

    def run(self) -> bool:
        logger.info("Run requested")
        runner = self._ensure_runner()
        if runner is None:
            return False
        runner.run()
        if runner.is_running:
            self.last_message = "Running."
        else:
            self.last_message = (
                "Search stopped." if runner.search.stopped else "Search finished."
            )
        return runner.is_running

    def pause(self) -> None:
        if self.runner:
            self.runner.pause()
            self.last_message = "Paused."

    def tick(self) -> StepResult | None:
        if self.runner is None:
            return None
        result = self.runner.tick()
        if result is None:
            return None
        return self._record(result)

    def stop(self) -> None:
        logger.info("Stop requested")
        if self.runner:
            self.runner.stop()
            self.last_message = "Search stopped."

    def reset(self) -> None:
        """Discard the search and clear search state; keeps the maze layout."""
        logger.info("Reset requested")
        self.stop()
        self.search = None
        self.runner = None
        self.last_result = None
        self.history.clear()
        self.maze.reset_node_states()
        self.last_message = "Search reset."

    def clear(self) -> None:
        """Replace the maze with a blank one of the same size."""
        logger.info("Clear requested")
        self.stop()
        self.search = None
        self.runner = None
        self.last_result = None
        self.history.clear()
        self.maze = Maze(self.maze.width, self.maze.height, glyphs=self.maze.glyphs)
        self.last_message = "Maze cleared."

    def _ensure_runner(self) -> SearchRunner | None:
        if self.runner is not None:
            return self.runner
        try:
            self.search = AStarSearch(
                self.maze, heuristic=self.heuristic, movement=self.movement
            )
        except MissingEndpointError as exc:
            self.last_message = str(exc)
            logger.warning("Cannot start search: %s", exc)
            return None
        self.runner = SearchRunner(self.search)
        return self.runner

    def _record(self, result: StepResult) -> StepResult:
        self.last_result = result
        self.history.append(result)
        if result.state == AlgorithmState.FINISHED:
            if result.stopped:
                self.last_message = "Search stopped."
            elif result.found_path:
                self.last_message = (
                    f"Path found: {len(result.path)} cells, cost {result.path_cost:g}."
                )
            else:
                self.last_message = "No path exists."
        return result
