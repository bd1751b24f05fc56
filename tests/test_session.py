from gridstar.sim.contracts import AlgorithmState, FieldType, NodeState
from gridstar.sim.maze import Maze
from gridstar.sim.session import EDIT_LOCKED_MESSAGE, SearchSession


def _session() -> SearchSession:
    return SearchSession(maze=Maze.from_lines(["SOO", "O#O", "OOG"]))


def test_editing_allowed_before_search() -> None:
    session = _session()
    assert session.can_edit
    assert session.state is None
    assert session.cycle_cell(1, 0) == FieldType.WALL
    assert session.maze.cell_at(1, 0).type == FieldType.WALL
    assert session.last_message == "Cell 1,0 is now wall."


def test_editing_locked_once_search_exists() -> None:
    session = _session()
    session.step()
    assert not session.can_edit
    assert session.cycle_cell(1, 0) is None
    assert session.maze.cell_at(1, 0).type == FieldType.FREE
    assert session.last_message == EDIT_LOCKED_MESSAGE


def test_step_without_endpoints_reports_message() -> None:
    session = SearchSession(maze=Maze(3, 3))
    assert session.step() is None
    assert session.search is None
    assert "start" in session.last_message
    assert session.run() is False


def test_stepping_to_a_path() -> None:
    session = _session()
    result = session.step()
    assert result is not None
    assert session.state == AlgorithmState.RUNNING
    while session.state != AlgorithmState.FINISHED:
        session.step()

    assert session.last_result is not None
    assert session.last_result.found_path
    assert session.last_message == "Path found: 4 cells, cost 34."
    assert len(session.history) == session.search.steps


def test_run_and_tick_until_finished() -> None:
    session = _session()
    assert session.run() is True
    assert session.last_message == "Running."
    while session.runner.is_running:
        session.tick()
    assert session.state == AlgorithmState.FINISHED
    assert session.tick() is None


def test_no_path_message() -> None:
    session = SearchSession(maze=Maze.from_lines(["S#G"]))
    session.run()
    while session.runner.is_running:
        session.tick()
    assert session.last_message == "No path exists."


def test_reset_keeps_layout_and_unlocks() -> None:
    session = _session()
    session.run()
    session.tick()
    session.reset()

    assert session.can_edit
    assert session.search is None
    assert session.history == []
    assert session.last_message == "Search reset."
    assert all(cell.state == NodeState.UNVISITED for cell in session.maze.cells())
    assert session.maze.generate_string_representation() == ["SOO", "O#O", "OOG"]


def test_clear_blanks_maze() -> None:
    session = _session()
    session.step()
    session.clear()
    assert session.can_edit
    assert session.last_message == "Maze cleared."
    assert session.maze.generate_string_representation() == ["OOO"] * 3


def test_cursor_stays_in_bounds() -> None:
    session = _session()
    session.move_cursor(-1, -1)
    assert session.cursor == (0, 0)
    session.move_cursor(5, 1)
    assert session.cursor == (2, 1)


def test_step_after_stop_keeps_stop_message_and_history() -> None:
    session = SearchSession(maze=Maze.from_lines(["SOOOOOOG"]))
    session.step()
    session.stop()
    assert session.last_message == "Search stopped."

    assert session.step() is None
    assert session.step() is None
    assert session.last_message == "Search stopped."
    assert len(session.history) == 1
    assert session.state == AlgorithmState.FINISHED


def test_stop_during_run_halts_ticks() -> None:
    session = SearchSession(maze=Maze.from_lines(["SOOOOOOG"]))
    session.run()
    session.tick()
    session.stop()

    assert not session.runner.is_running
    assert session.tick() is None
    assert session.run() is False
    assert session.last_message == "Search stopped."
    assert len(session.history) == 1
    assert not session.last_result.found_path
