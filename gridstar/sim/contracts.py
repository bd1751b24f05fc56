"""Shared enums and data contracts for the search core."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class FieldType(str, Enum):
    START = "start"
    FREE = "free"
    WALL = "wall"
    GOAL = "goal"
    UNKNOWN = "unknown"

    def next(self) -> "FieldType":
        members = list(FieldType)
        return members[(members.index(self) + 1) % len(members)]

    def previous(self) -> "FieldType":
        members = list(FieldType)
        return members[(members.index(self) - 1) % len(members)]


class NodeState(str, Enum):
    UNVISITED = "unvisited"
    OPEN = "open"
    CLOSED = "closed"
    PATH = "path"


class Heuristic(str, Enum):
    MANHATTAN = "manhattan"
    CHEBYSHEV = "chebyshev"
    EUCLIDEAN = "euclidean"


class Movement(str, Enum):
    STRAIGHT = "straight"
    STRAIGHT_AND_DIAGONAL = "straight_and_diagonal"


class AlgorithmState(str, Enum):
    READY = "ready"
    RUNNING = "running"
    FINISHED = "finished"


Position = tuple[int, int]


class StepResult(BaseModel):
    """What a single expansion changed, for renderers and the step log."""

    model_config = ConfigDict(extra="forbid")

    step: int
    state: AlgorithmState
    current: Position | None = None
    opened: list[Position] = Field(default_factory=list)
    relaxed: list[Position] = Field(default_factory=list)
    closed: list[Position] = Field(default_factory=list)
    path: list[Position] = Field(default_factory=list)
    path_cost: float | None = None
    open_size: int = 0
    closed_size: int = 0
    stopped: bool = False

    @property
    def found_path(self) -> bool:
        return bool(self.path)


STEP_LOG_SCHEMA_VERSION = 1


class StepLogHeader(BaseModel):
    """First record of a step log: enough to rebuild the searched maze."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["header"] = "header"
    schema_version: int = STEP_LOG_SCHEMA_VERSION
    run_id: str
    heuristic: Heuristic
    movement: Movement
    maze: list[str]
    glyphs: dict[FieldType, str] = Field(default_factory=dict)


class StepRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: Literal["step"] = "step"
    schema_version: int = STEP_LOG_SCHEMA_VERSION
    result: StepResult


StepLogRecord = Annotated[
    Union[StepLogHeader, StepRecord], Field(discriminator="kind")
]
