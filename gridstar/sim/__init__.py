"""Search core: maze model, costs, heap and the A* engine."""

from gridstar.sim.astar import AStarSearch
from gridstar.sim.contracts import (
    AlgorithmState,
    FieldType,
    Heuristic,
    Movement,
    NodeState,
    StepLogHeader,
    StepRecord,
    StepResult,
)
from gridstar.sim.costs import heuristic, recompute_costs, step_cost
from gridstar.sim.heap import Heap
from gridstar.sim.maze import (
    Cell,
    Glyphs,
    MalformedMazeError,
    Maze,
    MazeError,
    MissingEndpointError,
)
from gridstar.sim.session import SearchSession
from gridstar.sim.step_loop import SearchRunner, run_steps

__all__ = [
    "AStarSearch",
    "AlgorithmState",
    "Cell",
    "FieldType",
    "Glyphs",
    "Heap",
    "Heuristic",
    "MalformedMazeError",
    "Maze",
    "MazeError",
    "MissingEndpointError",
    "Movement",
    "NodeState",
    "SearchRunner",
    "SearchSession",
    "StepLogHeader",
    "StepRecord",
    "StepResult",
    "heuristic",
    "recompute_costs",
    "run_steps",
    "step_cost",
]
