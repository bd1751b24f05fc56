"""Rich rendering for StepResult and cell details."""

from __future__ import annotations

from rich.columns import Columns
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from gridstar.sim.contracts import Position, StepResult
from gridstar.sim.maze import Cell


def render_step(result: StepResult, *, max_cells: int = 8) -> RenderableType:
    header = Text(f"Step {result.step}", style="bold")
    summary = _render_summary(result)
    changes = _render_changes(result, max_cells=max_cells)
    path = _render_path(result, max_cells=max_cells)

    left = Group(header, summary)
    right = Group(changes, path)
    return Columns([Panel(left, title="Search"), Panel(right, title="Changes")])


def render_cell_details(cell: Cell | None) -> RenderableType:
    if cell is None:
        return Panel(Text("No cell selected."), title="Cell")
    table = Table(show_header=False)
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("Position", f"{cell.x}, {cell.y}")
    table.add_row("Type", cell.type.value)
    table.add_row("State", cell.state.value)
    table.add_row("g", f"{cell.g_cost:g}")
    table.add_row("h", f"{cell.h_cost:g}")
    table.add_row("Total", f"{cell.total_cost:g}")
    table.add_row("Parent", _format_position(cell.parent))
    return Panel(table, title="Cell")


def _render_summary(result: StepResult) -> RenderableType:
    table = Table(show_header=False)
    table.add_column("Field")
    table.add_column("Value")
    state = f"{result.state.value} (stopped)" if result.stopped else result.state.value
    table.add_row("State", state)
    table.add_row("Current", _format_position(result.current))
    table.add_row("Open", str(result.open_size))
    table.add_row("Closed", str(result.closed_size))
    return table


def _render_changes(result: StepResult, *, max_cells: int) -> RenderableType:
    table = Table(title="Cell Changes", show_header=True, header_style="bold")
    table.add_column("Kind")
    table.add_column("Cells")
    rows = [
        ("Opened", result.opened),
        ("Relaxed", result.relaxed),
        ("Closed", result.closed),
    ]
    for kind, cells in rows:
        if cells:
            table.add_row(kind, _format_cells(cells, max_cells=max_cells))
    if not any(cells for _, cells in rows):
        table.add_row("-", "None")
    return table


def _render_path(result: StepResult, *, max_cells: int) -> RenderableType:
    if not result.path:
        return Panel(Text("No path yet."), title="Path")
    table = Table(show_header=False)
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("Length", str(len(result.path)))
    cost = "-" if result.path_cost is None else f"{result.path_cost:g}"
    table.add_row("Cost", cost)
    table.add_row("Cells", _format_cells(result.path, max_cells=max_cells))
    return Panel(table, title="Path")


def _format_cells(cells: list[Position], *, max_cells: int) -> str:
    shown = " ".join(_format_position(cell) for cell in cells[:max_cells])
    if len(cells) > max_cells:
        shown += f" (+{len(cells) - max_cells})"
    return shown


def _format_position(position: Position | None) -> str:
    if position is None:
        return "-"
    return f"{position[0]},{position[1]}"
