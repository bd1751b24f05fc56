"""Textual screen for editing a maze and stepping through A*."""

from __future__ import annotations

from rich.align import Align
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.geometry import Size
from textual.screen import Screen
from textual.timer import Timer
from textual.widgets import Static

from gridstar.render.maze_map import compute_viewport, glyph_width, render_maze_lines
from gridstar.render.textual_widgets import MapClicked, MapRenderResult, MapWidget
from gridstar.render.viewer import render_cell_details, render_step
from gridstar.sim.session import SearchSession

RIGHT_WIDTH = 48


class SearchViewerScreen(Screen):
    CSS = """
    Screen {
        layout: vertical;
    }
    #main {
        layout: horizontal;
        height: 1fr;
    }
    #right-pane {
        layout: vertical;
    }
    #status-bar {
        height: 3;
    }
    """

    BINDINGS = [
        ("n", "step", "Step"),
        ("space", "toggle_run", "Run/pause"),
        ("x", "stop", "Stop"),
        ("r", "reset", "Reset"),
        ("c", "clear", "Clear"),
        ("t", "cycle_type", "Next type"),
        ("T", "cycle_type_back", "Previous type"),
        ("up", "cursor(0, -1)", "Up"),
        ("down", "cursor(0, 1)", "Down"),
        ("left", "cursor(-1, 0)", "Left"),
        ("right", "cursor(1, 0)", "Right"),
        ("q", "quit", "Quit"),
    ]

    def __init__(self, session: SearchSession, *, tick_delay: float = 0.1) -> None:
        super().__init__()
        self.session = session
        self._tick_delay = tick_delay
        self._timer: Timer | None = None
        self._map_widget: MapWidget | None = None
        self._details: Static | None = None
        self._step_panel: Static | None = None
        self._status_bar: Static | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="root"):
            with Horizontal(id="main"):
                yield MapWidget(self._render_map, id="maze-map")
                with Vertical(id="right-pane"):
                    yield Static(id="cell-details")
                    yield Static(id="step-panel")
            yield Static(id="status-bar")

    def on_mount(self) -> None:
        self._map_widget = self.query_one("#maze-map", MapWidget)
        self._details = self.query_one("#cell-details", Static)
        self._step_panel = self.query_one("#step-panel", Static)
        self._status_bar = self.query_one("#status-bar", Static)
        self.query_one("#right-pane").styles.width = RIGHT_WIDTH
        self._timer = self.set_interval(self._tick_delay, self._on_tick, pause=True)
        self._refresh_ui()

    def on_map_clicked(self, message: MapClicked) -> None:
        x, y = message.maze_point
        self.session.cursor = (x, y)
        self.session.cycle_cell(x, y)
        self._refresh_ui()

    def _on_tick(self) -> None:
        self.session.tick()
        if self.session.runner is None or not self.session.runner.is_running:
            self._pause_timer()
        self._refresh_ui()

    def action_step(self) -> None:
        self._pause_timer()
        self.session.step()
        self._refresh_ui()

    def action_toggle_run(self) -> None:
        if self.session.runner and self.session.runner.is_running:
            self.session.pause()
            self._pause_timer()
        elif self.session.run() and self._timer:
            self._timer.resume()
        self._refresh_ui()

    def action_stop(self) -> None:
        self._pause_timer()
        self.session.stop()
        self._refresh_ui()

    def action_reset(self) -> None:
        self._pause_timer()
        self.session.reset()
        self._refresh_ui()

    def action_clear(self) -> None:
        self._pause_timer()
        self.session.clear()
        self._refresh_ui()

    def action_cycle_type(self) -> None:
        self.session.cycle_cell(*self.session.cursor)
        self._refresh_ui()

    def action_cycle_type_back(self) -> None:
        self.session.cycle_cell(*self.session.cursor, reverse=True)
        self._refresh_ui()

    def action_cursor(self, dx: int, dy: int) -> None:
        self.session.move_cursor(dx, dy)
        self._refresh_ui()

    def action_quit(self) -> None:
        self.app.exit()

    def _pause_timer(self) -> None:
        if self._timer:
            self._timer.pause()

    def _refresh_ui(self) -> None:
        if self._details:
            self._details.update(
                render_cell_details(self.session.maze.cell_at(*self.session.cursor))
            )
        if self._step_panel:
            self._step_panel.update(_render_step_panel(self.session))
        if self._status_bar:
            self._status_bar.update(
                Panel(Text(_status_text(self.session)), padding=(0, 1))
            )
        if self._map_widget:
            self._map_widget.refresh()

    def _render_map(self, content_size: Size) -> MapRenderResult:
        maze = self.session.maze
        cell_width = glyph_width(maze.glyphs)
        inner_width = max(1, (content_size.width - 2) // cell_width)
        inner_height = max(1, content_size.height - 2)
        viewport = compute_viewport(
            maze.width,
            maze.height,
            inner_width,
            inner_height,
            center=self.session.cursor,
        )
        current = self.session.last_result.current if self.session.last_result else None
        lines = render_maze_lines(
            maze, viewport=viewport, cursor=self.session.cursor, current=current
        )
        renderable = Panel(
            Align.center(Group(*lines), vertical="middle"), title="Maze", padding=(0, 0)
        )
        offset_x = 1 + max(0, (inner_width - viewport.width) * cell_width // 2)
        offset_y = 1 + max(0, (inner_height - viewport.height) // 2)
        return MapRenderResult(
            renderable=renderable,
            viewport=viewport,
            offset_x=offset_x,
            offset_y=offset_y,
            cell_width=cell_width,
        )


def render_session(session: SearchSession) -> RenderableType:
    """Static snapshot of a session, used outside the Textual app."""
    lines = render_maze_lines(session.maze, cursor=session.cursor)
    return Group(
        Panel(Group(*lines), title="Maze"),
        render_cell_details(session.maze.cell_at(*session.cursor)),
        _render_step_panel(session),
        Text(_status_text(session)),
    )


class SearchViewerApp(App):
    """Hosts one SearchViewerScreen; the subtitle names the maze and search settings."""

    TITLE = "gridstar"

    def __init__(self, session: SearchSession, *, tick_delay: float = 0.1) -> None:
        super().__init__()
        self.session = session
        self._tick_delay = tick_delay
        self.sub_title = session_subtitle(session)

    def on_mount(self) -> None:
        self.push_screen(SearchViewerScreen(self.session, tick_delay=self._tick_delay))


def session_subtitle(session: SearchSession) -> str:
    maze = session.maze
    return (
        f"{maze.width}x{maze.height} | {session.heuristic.value} | "
        f"{session.movement.value.replace('_', ' ')}"
    )


def run_search_viewer(session: SearchSession, *, tick_delay: float = 0.1) -> None:
    SearchViewerApp(session, tick_delay=tick_delay).run()


def _render_step_panel(session: SearchSession) -> RenderableType:
    if session.last_result is None:
        return Panel(Text("No steps yet."), title="Search")
    return render_step(session.last_result)


def _status_text(session: SearchSession) -> str:
    state = session.state.value if session.state else "editing"
    text = (
        "n=step | space=run/pause | x=stop | r=reset | c=clear | "
        f"t/T=cycle type | q=quit | state={state}"
    )
    if session.last_message:
        text += f" | {session.last_message}"
    return text
