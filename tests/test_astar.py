import pytest

from gridstar.sim.astar import AStarSearch
from gridstar.sim.contracts import AlgorithmState, Heuristic, Movement, NodeState
from gridstar.sim.maze import Maze, MissingEndpointError


def open_maze() -> Maze:
    return Maze.from_lines(["SOOOO", "OOOOO", "OOOOO", "OOOOO", "OOOOG"])


def path_cells(maze: Maze) -> list[tuple[int, int]]:
    return [cell.position for cell in maze.cells() if cell.state == NodeState.PATH]


def test_diagonal_search_on_open_grid() -> None:
    maze = open_maze()
    search = AStarSearch(maze)
    path = search.run()

    assert search.state == AlgorithmState.FINISHED
    assert [cell.position for cell in path] == [(0, 0), (1, 1), (2, 2), (3, 3), (4, 4)]
    assert len(path_cells(maze)) == 5
    assert search.path_cost == 56.0
    assert maze.goal_cell.g_cost == 56.0


def test_straight_search_on_open_grid() -> None:
    maze = open_maze()
    search = AStarSearch(maze, movement=Movement.STRAIGHT)
    path = search.run()

    assert len(path) == 9
    assert len(path_cells(maze)) == 9
    assert search.path_cost == 80.0
    for previous, current in zip(path, path[1:]):
        assert abs(previous.x - current.x) + abs(previous.y - current.y) == 1


def test_complete_wall_means_no_path() -> None:
    maze = Maze.from_lines(["SO#OO", "OO#OO", "OO#OO", "OO#OO", "OO#OG"])
    search = AStarSearch(maze, heuristic=Heuristic.CHEBYSHEV)
    steps = 0
    while search.state != AlgorithmState.FINISHED:
        search.step()
        steps += 1

    assert search.path == []
    assert search.path_cost is None
    assert path_cells(maze) == []
    assert search.closed_heap.size == 10
    assert steps == 11


def test_state_machine_transitions() -> None:
    search = AStarSearch(open_maze())
    assert search.state == AlgorithmState.READY

    first = search.step()
    assert search.state == AlgorithmState.RUNNING
    assert first.state == AlgorithmState.RUNNING
    assert first.current == (0, 0)
    assert first.closed == [(0, 0)]
    assert first.opened == [(1, 0), (0, 1), (1, 1)]

    search.run()
    assert search.state == AlgorithmState.FINISHED
    steps = search.steps
    result = search.step()
    assert result.state == AlgorithmState.FINISHED
    assert search.steps == steps
    assert search.state == AlgorithmState.FINISHED


def test_stop_forces_finished_without_path() -> None:
    maze = open_maze()
    search = AStarSearch(maze)
    search.stop()
    assert search.state == AlgorithmState.FINISHED
    assert search.step().state == AlgorithmState.FINISHED
    assert search.steps == 0
    assert path_cells(maze) == []

    running = AStarSearch(Maze.from_lines(["SOOOG"]))
    running.step()
    running.stop()
    assert running.state == AlgorithmState.FINISHED
    assert running.path == []


def test_run_respects_max_steps() -> None:
    search = AStarSearch(open_maze())
    search.run(max_steps=2)
    assert search.steps == 2
    assert search.state == AlgorithmState.RUNNING


def test_construction_requires_start_and_goal() -> None:
    with pytest.raises(MissingEndpointError, match="start"):
        AStarSearch(Maze.from_lines(["OOG"]))
    with pytest.raises(MissingEndpointError, match="goal"):
        AStarSearch(Maze.from_lines(["SOO"]))
    with pytest.raises(MissingEndpointError):
        AStarSearch(Maze.from_lines(["SOG"]), goal=(9, 9))


def test_start_equal_to_goal_finishes_on_first_step() -> None:
    maze = Maze.from_lines(["SOG"])
    search = AStarSearch(maze, goal=(0, 0))
    result = search.step()

    assert search.state == AlgorithmState.FINISHED
    assert result.path == [(0, 0)]
    assert result.path_cost == 0.0
    assert path_cells(maze) == [(0, 0)]


def test_start_cell_is_open_with_costs_after_construction() -> None:
    maze = open_maze()
    search = AStarSearch(maze)
    start = maze.start_cell
    assert start.state == NodeState.OPEN
    assert start.parent is None
    assert start.g_cost == 0.0
    assert start.h_cost == 80.0
    assert search.open_heap.size == 1


def test_relaxation_rebinds_to_cheaper_parent() -> None:
    maze = Maze.from_lines(["S#O#G", "OOO##", "OOO#O"])
    search = AStarSearch(maze)
    results = [search.step() for _ in range(5)]

    assert [result.current for result in results] == [
        (0, 0),
        (1, 1),
        (2, 0),
        (2, 1),
        (0, 1),
    ]
    assert results[-1].relaxed == [(0, 2), (1, 2)]
    rebound = maze.cell_at(0, 2)
    assert rebound.parent == (0, 1)
    assert rebound.g_cost == 20.0
    assert rebound.total_cost == 80.0
    assert maze.cell_at(1, 2).parent == (0, 1)
    assert maze.cell_at(1, 2).g_cost == 24.0

    search.run()
    assert search.path == []
    assert maze.cell_at(4, 0).state == NodeState.UNVISITED


def test_reset_then_fresh_search_repeats_costs() -> None:
    maze = Maze.from_lines(["SOOO#O", "O##O#O", "OO#OOO", "O#OO#G"])
    first = AStarSearch(maze)
    first.run()
    first_costs = {
        cell.position: (cell.g_cost, cell.h_cost, cell.state) for cell in maze.cells()
    }

    maze.reset_node_states()
    assert all(cell.state == NodeState.UNVISITED for cell in maze.cells())

    second = AStarSearch(maze)
    second.run()
    second_costs = {
        cell.position: (cell.g_cost, cell.h_cost, cell.state) for cell in maze.cells()
    }
    assert second_costs == first_costs
    assert second.path_cost == first.path_cost
    assert [cell.position for cell in second.path] == [
        cell.position for cell in first.path
    ]


def test_listeners_see_every_state_change() -> None:
    maze = Maze.from_lines(["SOG"])
    seen: list[tuple[tuple[int, int], NodeState]] = []
    search = AStarSearch(maze)

    def listener(cell) -> None:
        seen.append((cell.position, cell.state))

    search.subscribe(listener)
    search.run()
    search.unsubscribe(listener)

    assert seen == [
        ((0, 0), NodeState.CLOSED),
        ((1, 0), NodeState.OPEN),
        ((1, 0), NodeState.CLOSED),
        ((2, 0), NodeState.OPEN),
        ((2, 0), NodeState.PATH),
        ((1, 0), NodeState.PATH),
        ((0, 0), NodeState.PATH),
    ]


def test_results_after_stop_are_flagged() -> None:
    search = AStarSearch(Maze.from_lines(["SOOOG"]))
    assert not search.step().stopped
    search.stop()
    result = search.step()
    assert result.stopped
    assert result.state == AlgorithmState.FINISHED

    finished = AStarSearch(Maze.from_lines(["SOG"]))
    finished.run()
    finished.stop()
    assert not finished.stopped
    assert finished.step().found_path
