"""Append-only JSONL trace of a search run: one header, then one record per step."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from gridstar.sim.contracts import Heuristic, Movement, StepLogHeader, StepRecord, StepResult
from gridstar.sim.maze import Maze

STEP_LOG_NAME = "run.jsonl"


class StepLogWriter:
    """Owns one run folder under ``base_dir``; the header is written on open."""

    def __init__(self, run_dir: Path) -> None:
        self.run_dir = run_dir
        self.path = run_dir / STEP_LOG_NAME

    @classmethod
    def open(
        cls,
        base_dir: Path,
        maze: Maze,
        *,
        heuristic: Heuristic,
        movement: Movement,
        run_id: str | None = None,
    ) -> "StepLogWriter":
        run_id = run_id or datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%SZ")
        run_dir = base_dir / run_id
        run_dir.mkdir(parents=True, exist_ok=True)
        writer = cls(run_dir)
        writer.write(maze_header(maze, run_id, heuristic=heuristic, movement=movement))
        return writer

    def append(self, result: StepResult) -> None:
        self.write(StepRecord(result=result))

    def write(self, record: StepLogHeader | StepRecord) -> None:
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(record.model_dump_json())
            handle.write("\n")


def maze_header(
    maze: Maze, run_id: str, *, heuristic: Heuristic, movement: Movement
) -> StepLogHeader:
    return StepLogHeader(
        run_id=run_id,
        heuristic=heuristic,
        movement=movement,
        maze=maze.generate_string_representation(),
        glyphs=maze.glyphs.as_mapping(),
    )
