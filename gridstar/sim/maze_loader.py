"""Load maze settings from JSON and the maze itself from a glyph map."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from gridstar.sim.contracts import Heuristic, Movement
from gridstar.sim.maze import Glyphs, Maze

DEFAULT_MAP_FILE = "maze.txt"
DEFAULT_TICK_DELAY = 0.1
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class MazePaths:
    base_dir: Path = Path("maze")

    @property
    def maze_json(self) -> Path:
        return self.base_dir / "maze.json"

    def map_path(self, config: MazeConfig) -> Path:
        return self.base_dir / config.map_file


@dataclass(frozen=True)
class MazeConfig:
    map_file: str = DEFAULT_MAP_FILE
    glyphs: Glyphs = field(default_factory=Glyphs)
    heuristic: Heuristic = Heuristic.MANHATTAN
    movement: Movement = Movement.STRAIGHT_AND_DIAGONAL
    tick_delay: float = DEFAULT_TICK_DELAY
    log_level: str = DEFAULT_LOG_LEVEL


def load_maze_config(*, paths: MazePaths | None = None) -> MazeConfig:
    paths = paths or MazePaths()
    if not paths.maze_json.is_file():
        return MazeConfig()
    data = _load_json(paths.maze_json)
    glyph_data = data.get("glyphs", {})
    defaults = Glyphs()
    glyphs = Glyphs(
        start=glyph_data.get("start", defaults.start),
        goal=glyph_data.get("goal", defaults.goal),
        wall=glyph_data.get("wall", defaults.wall),
        free=glyph_data.get("free", defaults.free),
        unknown=glyph_data.get("unknown", defaults.unknown),
    )
    return MazeConfig(
        map_file=data.get("map_file", DEFAULT_MAP_FILE),
        glyphs=glyphs,
        heuristic=_parse_enum(Heuristic, data.get("heuristic"), Heuristic.MANHATTAN),
        movement=_parse_enum(
            Movement, data.get("movement"), Movement.STRAIGHT_AND_DIAGONAL
        ),
        tick_delay=float(data.get("tick_delay", DEFAULT_TICK_DELAY)),
        log_level=str(data.get("log_level", DEFAULT_LOG_LEVEL)).upper(),
    )


def load_maze(config: MazeConfig, *, paths: MazePaths | None = None) -> Maze:
    paths = paths or MazePaths()
    map_path = paths.map_path(config)
    try:
        text = map_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"Missing maze map file: {map_path}") from exc
    lines = [line for line in text.splitlines() if line]
    return Maze.from_lines(lines, glyphs=config.glyphs)


def _load_json(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"Missing maze config file: {path}") from exc
    return json.loads(text)


def _parse_enum(enum_cls, raw: Any, default):
    if raw is None:
        return default
    try:
        return enum_cls(raw)
    except ValueError as exc:
        options = ", ".join(member.value for member in enum_cls)
        raise ValueError(
            f"Unknown {enum_cls.__name__.lower()} {raw!r}; expected one of {options}."
        ) from exc
