"""Shared Textual widgets for maze rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from rich.console import RenderableType
from textual.events import Click
from textual.geometry import Size
from textual.message import Message
from textual.widget import Widget

from gridstar.render.maze_map import Viewport


@dataclass(frozen=True)
class MapRenderResult:
    renderable: RenderableType
    viewport: Viewport
    offset_x: int
    offset_y: int
    cell_width: int = 1


class MapClicked(Message):
    """Message emitted when a map click resolves to maze coordinates."""

    def __init__(self, *, maze_point: tuple[int, int]) -> None:
        super().__init__()
        self.maze_point = maze_point


def resolve_click(result: MapRenderResult, x: int, y: int) -> tuple[int, int] | None:
    viewport = result.viewport
    map_width = viewport.width * result.cell_width
    if not (
        result.offset_x <= x < result.offset_x + map_width
        and result.offset_y <= y < result.offset_y + viewport.height
    ):
        return None
    maze_x = viewport.x + (x - result.offset_x) // result.cell_width
    maze_y = viewport.y + (y - result.offset_y)
    return (maze_x, maze_y)


class MapWidget(Widget):
    """Render the maze and emit a message when a cell is clicked."""

    def __init__(
        self,
        render_map: Callable[[Size], MapRenderResult],
        *,
        id: str | None = None,
    ) -> None:
        super().__init__(id=id)
        self._render_map = render_map
        self._last: MapRenderResult | None = None

    def render(self) -> RenderableType:
        self._last = self._render_map(self.content_size)
        return self._last.renderable

    def on_click(self, event: Click) -> None:
        if self._last is None:
            return
        offset = event.get_content_offset(self)
        if offset is None:
            return
        point = resolve_click(self._last, offset.x, offset.y)
        if point is not None:
            self.post_message(MapClicked(maze_point=point))
