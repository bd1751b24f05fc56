from rich.console import Console
from rich.text import Text

from gridstar.render.maze_map import (
    CURRENT_STYLE,
    STATE_STYLES,
    TYPE_STYLES,
    Viewport,
    cell_style,
    compute_viewport,
    glyph_width,
    render_maze_lines,
)
from gridstar.render.search_viewer import render_session, session_subtitle
from gridstar.render.textual_widgets import MapRenderResult, resolve_click
from gridstar.render.viewer import render_cell_details, render_step
from gridstar.sim.astar import AStarSearch
from gridstar.sim.contracts import (
    AlgorithmState,
    FieldType,
    Heuristic,
    Movement,
    NodeState,
    StepResult,
)
from gridstar.sim.maze import Glyphs, Maze
from gridstar.sim.session import SearchSession


def _export(renderable) -> str:
    console = Console(width=120, record=True)
    console.print(renderable)
    return console.export_text()


def test_render_step_contains_expected_sections() -> None:
    result = StepResult(
        step=3,
        state=AlgorithmState.RUNNING,
        current=(1, 1),
        opened=[(2, 1), (1, 2)],
        relaxed=[(0, 2)],
        closed=[(1, 1)],
        open_size=4,
        closed_size=3,
    )
    output = _export(render_step(result))

    assert "Step 3" in output
    assert "Cell Changes" in output
    assert "Opened" in output
    assert "Relaxed" in output
    assert "2,1 1,2" in output
    assert "No path yet." in output
    assert "running" in output


def test_render_step_with_path_and_no_changes() -> None:
    result = StepResult(
        step=5,
        state=AlgorithmState.FINISHED,
        current=None,
        path=[(0, 0), (1, 1), (2, 2)],
        path_cost=28.0,
    )
    output = _export(render_step(result))

    assert "None" in output
    assert "Length" in output
    assert "28" in output
    assert "0,0 1,1 2,2" in output


def test_render_cell_details() -> None:
    maze = Maze.from_lines(["SOG"])
    AStarSearch(maze).step()
    output = _export(render_cell_details(maze.cell_at(1, 0)))

    assert "Cell" in output
    assert "open" in output
    assert "0,0" in output
    assert "No cell selected." in _export(render_cell_details(None))


def test_cell_style_prefers_search_state() -> None:
    maze = Maze.from_lines(["SOG"])
    start, middle, goal = maze.rows[0]
    assert cell_style(middle) == TYPE_STYLES[FieldType.FREE]
    middle.state = NodeState.CLOSED
    assert cell_style(middle) == STATE_STYLES[NodeState.CLOSED]
    start.state = NodeState.CLOSED
    assert cell_style(start) == TYPE_STYLES[FieldType.START]
    goal.state = NodeState.PATH
    assert cell_style(goal) == STATE_STYLES[NodeState.PATH]


def test_render_maze_lines_with_viewport_and_markers() -> None:
    maze = Maze.from_lines(["SOOO", "O#OO", "OOOG"])
    lines = render_maze_lines(
        maze, viewport=Viewport(1, 1, 2, 2), cursor=(1, 1), current=(2, 2)
    )
    assert [line.plain for line in lines] == ["#O", "OO"]
    assert all(isinstance(line, Text) for line in lines)
    styles = [str(span.style) for span in lines[1].spans]
    assert CURRENT_STYLE in styles


def test_wide_glyphs_are_padded() -> None:
    glyphs = Glyphs(wall="🧱")
    assert glyph_width(glyphs) == 2
    maze = Maze.from_lines(["S🧱G"], glyphs=glyphs)
    assert [line.plain for line in render_maze_lines(maze)] == ["S 🧱G "]


def test_compute_viewport_clamps_to_maze() -> None:
    assert compute_viewport(10, 6, 4, 4) == Viewport(0, 0, 4, 4)
    assert compute_viewport(10, 6, 4, 4, center=(9, 5)) == Viewport(6, 2, 4, 4)
    assert compute_viewport(10, 6, 40, 40, center=(5, 3)) == Viewport(0, 0, 10, 6)


def test_resolve_click_maps_to_maze_cells() -> None:
    result = MapRenderResult(
        renderable=Text(""),
        viewport=Viewport(2, 1, 4, 3),
        offset_x=1,
        offset_y=1,
        cell_width=2,
    )
    assert resolve_click(result, 1, 1) == (2, 1)
    assert resolve_click(result, 4, 2) == (3, 2)
    assert resolve_click(result, 0, 1) is None
    assert resolve_click(result, 9, 1) is None
    assert resolve_click(result, 1, 4) is None


def test_render_session_snapshot() -> None:
    session = SearchSession(maze=Maze.from_lines(["SOG"]))
    output = _export(render_session(session))
    assert "Maze" in output
    assert "SOG" in output
    assert "No steps yet." in output
    assert "state=editing" in output

    session.step()
    output = _export(render_session(session))
    assert "Step 1" in output
    assert "state=running" in output


def test_stopped_step_is_labelled() -> None:
    result = StepResult(step=2, state=AlgorithmState.FINISHED, stopped=True)
    assert "finished (stopped)" in _export(render_step(result))


def test_session_subtitle_names_settings() -> None:
    session = SearchSession(
        maze=Maze.from_lines(["SOOG", "OOOO"]),
        heuristic=Heuristic.EUCLIDEAN,
        movement=Movement.STRAIGHT,
    )
    assert session_subtitle(session) == "4x2 | euclidean | straight"
