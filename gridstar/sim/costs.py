"""Movement and heuristic costs on the grid.

Costs are scaled so one straight move is 10 units and one diagonal move is
14 units; every heuristic uses the straight cost as its unit.
"""

from __future__ import annotations

import math

from gridstar.sim.contracts import Heuristic
from gridstar.sim.maze import Cell

STRAIGHT_COST = 10.0
DIAGONAL_COST = 14.0


def step_cost(a: Cell, b: Cell) -> float:
    dx = abs(a.x - b.x)
    dy = abs(a.y - b.y)
    if (dx, dy) in {(1, 0), (0, 1)}:
        return STRAIGHT_COST
    if (dx, dy) == (1, 1):
        return DIAGONAL_COST
    return math.inf


def heuristic(cell: Cell, goal: Cell, kind: Heuristic) -> float:
    dx = abs(goal.x - cell.x)
    dy = abs(goal.y - cell.y)
    if kind == Heuristic.MANHATTAN:
        return (dx + dy) * STRAIGHT_COST
    if kind == Heuristic.CHEBYSHEV:
        return max(dx, dy) * STRAIGHT_COST
    if kind == Heuristic.EUCLIDEAN:
        return math.sqrt(dx * dx + dy * dy) * STRAIGHT_COST
    raise ValueError(f"Unknown heuristic {kind!r}")


def recompute_costs(
    cell: Cell, parent: Cell | None, goal: Cell, kind: Heuristic
) -> None:
    """Refresh g/h/total for ``cell``; call whenever its parent changes."""
    cell.g_cost = parent.g_cost + step_cost(parent, cell) if parent else 0.0
    cell.h_cost = heuristic(cell, goal, kind)
    cell.total_cost = cell.g_cost + cell.h_cost
