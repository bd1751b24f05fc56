"""Step-wise A* search over a maze."""

from __future__ import annotations

import logging
from typing import Callable

from gridstar.sim.contracts import (
    AlgorithmState,
    Heuristic,
    Movement,
    NodeState,
    Position,
    StepResult,
)
from gridstar.sim.costs import recompute_costs
from gridstar.sim.heap import Heap
from gridstar.sim.maze import Cell, Maze, MissingEndpointError

logger = logging.getLogger(__name__)

CellListener = Callable[[Cell], None]


def _by_total_cost(a: Cell, b: Cell) -> bool:
    return a.total_cost < b.total_cost


class AStarSearch:
    """Single-use A* run. One ``step()`` expands one cell.

    The engine writes search state (state, parent, costs) onto the maze's
    cells; create a new instance per run and call ``maze.reset_node_states()``
    in between.
    """

    def __init__(
        self,
        maze: Maze,
        *,
        heuristic: Heuristic = Heuristic.MANHATTAN,
        movement: Movement = Movement.STRAIGHT_AND_DIAGONAL,
        start: Position | None = None,
        goal: Position | None = None,
    ) -> None:
        start_cell = _resolve_endpoint(maze, start, maze.start_cell, "start")
        goal_cell = _resolve_endpoint(maze, goal, maze.goal_cell, "goal")

        self.maze = maze
        self.heuristic = heuristic
        self.movement = movement
        self.start = start_cell
        self.goal = goal_cell
        self.state = AlgorithmState.READY
        self.steps = 0
        self.path: list[Cell] = []
        self.path_cost: float | None = None
        self.stopped = False
        self.open_heap: Heap[Cell] = Heap(before=_by_total_cost)
        self.closed_heap: Heap[Cell] = Heap(before=_by_total_cost)
        self._listeners: list[CellListener] = []

        self.start.parent = None
        self._mark(self.start, NodeState.OPEN)
        recompute_costs(self.start, None, self.goal, self.heuristic)
        self.open_heap.insert(self.start)
        logger.info(
            "Search ready: start=%s goal=%s heuristic=%s movement=%s",
            self.start.position,
            self.goal.position,
            heuristic.value,
            movement.value,
        )

    @property
    def is_finished(self) -> bool:
        return self.state == AlgorithmState.FINISHED

    def subscribe(self, listener: CellListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: CellListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def step(self) -> StepResult:
        if self.is_finished:
            return self._result()

        node = self.open_heap.extract_min()
        if node is None:
            self.state = AlgorithmState.FINISHED
            logger.info("Open set exhausted after %s steps; no path.", self.steps)
            return self._result()

        self.steps += 1
        if self.state != AlgorithmState.RUNNING:
            self.state = AlgorithmState.RUNNING

        if node == self.goal:
            self._mark_path_from(node)
            self.state = AlgorithmState.FINISHED
            logger.info(
                "Path found after %s steps: %s cells, cost %s",
                self.steps,
                len(self.path),
                self.path_cost,
            )
            return self._result(current=node)

        self._mark(node, NodeState.CLOSED)
        self.closed_heap.insert(node)
        logger.debug("Expanding %s total=%s", node.position, node.total_cost)

        neighbors = [
            neighbor
            for neighbor in self.maze.free_neighbors(node, self.movement)
            if not self.closed_heap.contains(neighbor)
        ]
        opened: list[Cell] = []
        relaxed: list[Cell] = []
        for neighbor in neighbors:
            index = self.open_heap.index_of(neighbor)
            if index is not None:
                # Compares the neighbor's current parent against the popped
                # cell, not the neighbor's own g-cost.
                current_parent = self._parent_of(neighbor)
                if current_parent is not None and current_parent.g_cost > node.g_cost:
                    neighbor.parent = node.position
                    recompute_costs(neighbor, node, self.goal, self.heuristic)
                    self.open_heap.replace(index, neighbor)
                    relaxed.append(neighbor)
            else:
                neighbor.parent = node.position
                self._mark(neighbor, NodeState.OPEN)
                recompute_costs(neighbor, node, self.goal, self.heuristic)
                self.open_heap.insert(neighbor)
                opened.append(neighbor)

        return self._result(
            current=node, opened=opened, relaxed=relaxed, closed=[node]
        )

    def run(self, *, max_steps: int | None = None) -> list[Cell]:
        """Step synchronously until finished; continuous UI runs use SearchRunner."""
        taken = 0
        while not self.is_finished:
            if max_steps is not None and taken >= max_steps:
                break
            self.step()
            taken += 1
        return self.path

    def stop(self) -> None:
        """Abort the search. Results from here on carry ``stopped=True``."""
        if not self.is_finished:
            logger.info("Search stopped after %s steps.", self.steps)
            self.stopped = True
        self.state = AlgorithmState.FINISHED

    def _parent_of(self, cell: Cell) -> Cell | None:
        if cell.parent is None:
            return None
        return self.maze.cell_at(*cell.parent)

    def _mark_path_from(self, node: Cell) -> None:
        chain: list[Cell] = []
        current: Cell | None = node
        while current is not None:
            self._mark(current, NodeState.PATH)
            chain.append(current)
            current = self._parent_of(current)
        chain.reverse()
        self.path = chain
        self.path_cost = node.g_cost

    def _mark(self, cell: Cell, state: NodeState) -> None:
        cell.state = state
        for listener in list(self._listeners):
            listener(cell)

    def _result(
        self,
        *,
        current: Cell | None = None,
        opened: list[Cell] | None = None,
        relaxed: list[Cell] | None = None,
        closed: list[Cell] | None = None,
    ) -> StepResult:
        return StepResult(
            step=self.steps,
            state=self.state,
            current=current.position if current else None,
            opened=[cell.position for cell in opened or []],
            relaxed=[cell.position for cell in relaxed or []],
            closed=[cell.position for cell in closed or []],
            path=[cell.position for cell in self.path],
            path_cost=self.path_cost,
            open_size=self.open_heap.size,
            closed_size=self.closed_heap.size,
            stopped=self.stopped,
        )


def _resolve_endpoint(
    maze: Maze, override: Position | None, discovered: Cell | None, label: str
) -> Cell:
    if override is not None:
        cell = maze.cell_at(*override)
        if cell is None:
            raise MissingEndpointError(f"Maze has no cell at {label} {override}.")
        return cell
    if discovered is None:
        raise MissingEndpointError(f"Maze has no {label} cell.")
    return discovered
