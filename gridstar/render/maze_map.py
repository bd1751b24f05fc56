"""Shared helpers for rendering the maze and viewports."""

from __future__ import annotations

from dataclasses import dataclass

from rich.cells import cell_len
from rich.text import Text

from gridstar.sim.contracts import FieldType, NodeState
from gridstar.sim.maze import Cell, Glyphs, Maze


TYPE_STYLES = {
    FieldType.START: "bold bright_green",
    FieldType.GOAL: "bold bright_red",
    FieldType.WALL: "bright_magenta",
    FieldType.FREE: "grey70",
    FieldType.UNKNOWN: "grey35",
}

STATE_STYLES = {
    NodeState.OPEN: "black on cyan",
    NodeState.CLOSED: "white on blue",
    NodeState.PATH: "black on bright_yellow",
}

CURSOR_STYLE = "reverse"
CURRENT_STYLE = "bold white on red"


@dataclass(frozen=True)
class Viewport:
    x: int
    y: int
    width: int
    height: int


def compute_viewport(
    maze_width: int,
    maze_height: int,
    view_width: int,
    view_height: int,
    *,
    center: tuple[int, int] | None = None,
) -> Viewport:
    view_width = max(1, min(maze_width, view_width))
    view_height = max(1, min(maze_height, view_height))

    if center is not None:
        origin_x = center[0] - view_width // 2
        origin_y = center[1] - view_height // 2
    else:
        origin_x, origin_y = 0, 0

    origin_x = _clamp(origin_x, 0, max(0, maze_width - view_width))
    origin_y = _clamp(origin_y, 0, max(0, maze_height - view_height))

    return Viewport(x=origin_x, y=origin_y, width=view_width, height=view_height)


def cell_style(cell: Cell) -> str:
    if cell.type in {FieldType.START, FieldType.GOAL} and cell.state != NodeState.PATH:
        return TYPE_STYLES[cell.type]
    return STATE_STYLES.get(cell.state, TYPE_STYLES[cell.type])


def render_maze_lines(
    maze: Maze,
    *,
    viewport: Viewport | None = None,
    cursor: tuple[int, int] | None = None,
    current: tuple[int, int] | None = None,
) -> list[Text]:
    viewport = viewport or Viewport(0, 0, maze.width, maze.height)
    width = glyph_width(maze.glyphs)
    lines: list[Text] = []
    for y in range(viewport.y, viewport.y + viewport.height):
        line = Text()
        for x in range(viewport.x, viewport.x + viewport.width):
            cell = maze.cell_at(x, y)
            if cell is None:
                continue
            style = cell_style(cell)
            if current == (x, y):
                style = CURRENT_STYLE
            if cursor == (x, y):
                style = f"{style} {CURSOR_STYLE}"
            glyph = maze.glyphs.glyph_for(cell.type)
            padding = " " * (width - cell_len(glyph))
            line.append(glyph + padding, style=style)
        lines.append(line)
    return lines


def glyph_width(glyphs: Glyphs) -> int:
    """Display columns used per cell, so wide glyphs keep the grid aligned."""
    return max(
        (cell_len(glyphs.glyph_for(field_type)) for field_type in FieldType),
        default=1,
    ) or 1


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))
