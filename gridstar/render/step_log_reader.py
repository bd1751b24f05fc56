"""Read a step log back into typed records and replay it onto a maze."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from pydantic import TypeAdapter, ValidationError

from gridstar.sim.contracts import (
    NodeState,
    StepLogHeader,
    StepLogRecord,
    StepRecord,
    StepResult,
)
from gridstar.sim.maze import Glyphs, Maze

_RECORD_ADAPTER: TypeAdapter[StepLogHeader | StepRecord] = TypeAdapter(StepLogRecord)


def iter_records(path: Path) -> Iterator[StepLogHeader | StepRecord]:
    """Yield valid records in file order; lines that fail validation are skipped."""
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            if not line.strip():
                continue
            try:
                yield _RECORD_ADAPTER.validate_json(line)
            except ValidationError:
                continue


def read_header(path: Path) -> StepLogHeader | None:
    return next(
        (record for record in iter_records(path) if isinstance(record, StepLogHeader)),
        None,
    )


def read_step_results(path: Path) -> Iterator[StepResult]:
    for record in iter_records(path):
        if isinstance(record, StepRecord):
            yield record.result


def rebuild_maze(header: StepLogHeader) -> Maze:
    glyphs = Glyphs.from_mapping(header.glyphs) if header.glyphs else Glyphs()
    return Maze.from_lines(header.maze, glyphs=glyphs)


def apply_step_result(maze: Maze, result: StepResult) -> None:
    """Replay the state changes of one step onto ``maze``."""
    changes = [
        (result.opened, NodeState.OPEN),
        (result.closed, NodeState.CLOSED),
        (result.path, NodeState.PATH),
    ]
    for positions, state in changes:
        for x, y in positions:
            cell = maze.cell_at(x, y)
            if cell is not None:
                cell.state = state
