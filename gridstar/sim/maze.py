"""Maze grid of typed cells."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Mapping, Sequence

from gridstar.sim.contracts import FieldType, Movement, NodeState, Position


class MazeError(ValueError):
    """Base error for mazes that cannot be built or searched."""


class MalformedMazeError(MazeError):
    """Maze text that cannot be decoded into a rectangular grid."""


class MissingEndpointError(MazeError):
    """Maze without a discoverable start or goal cell."""


PASSABLE_TYPES = frozenset({FieldType.FREE, FieldType.GOAL})


@dataclass(eq=False)
class Cell:
    x: int
    y: int
    type: FieldType = FieldType.FREE
    state: NodeState = NodeState.UNVISITED
    parent: Position | None = None
    g_cost: float = 0.0
    h_cost: float = 0.0
    total_cost: float = 0.0

    @property
    def position(self) -> Position:
        return (self.x, self.y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.type == other.type

    __hash__ = None  # type: ignore[assignment]

    def describe(self) -> str:
        parent = f"{self.parent[0]},{self.parent[1]}" if self.parent else "-"
        return (
            f"Cell {self.x},{self.y} type={self.type.value} state={self.state.value} "
            f"g={self.g_cost:g} h={self.h_cost:g} total={self.total_cost:g} "
            f"parent={parent}"
        )


@dataclass(frozen=True)
class Glyphs:
    start: str = "S"
    goal: str = "G"
    wall: str = "#"
    free: str = "O"
    unknown: str = "?"

    def __post_init__(self) -> None:
        glyphs = list(self.as_mapping().values())
        if any(not glyph for glyph in glyphs):
            raise MalformedMazeError("Maze glyphs must not be empty.")
        if len(set(glyphs)) != len(glyphs):
            raise MalformedMazeError(f"Maze glyphs must be distinct, got {glyphs}.")

    @classmethod
    def from_mapping(cls, mapping: Mapping[FieldType, str]) -> "Glyphs":
        return cls(**{field_type.value: glyph for field_type, glyph in mapping.items()})

    def as_mapping(self) -> dict[FieldType, str]:
        return {field_type: self.glyph_for(field_type) for field_type in FieldType}

    def glyph_for(self, field_type: FieldType) -> str:
        return {
            FieldType.START: self.start,
            FieldType.GOAL: self.goal,
            FieldType.WALL: self.wall,
            FieldType.FREE: self.free,
            FieldType.UNKNOWN: self.unknown,
        }[field_type]

    def decode_row(self, line: str) -> list[FieldType]:
        """Split a row into cell types, matching the longest glyph first."""
        lookup = {glyph: field_type for field_type, glyph in self.as_mapping().items()}
        glyphs = sorted(lookup, key=len, reverse=True)
        types: list[FieldType] = []
        index = 0
        while index < len(line):
            for glyph in glyphs:
                if line.startswith(glyph, index):
                    types.append(lookup[glyph])
                    index += len(glyph)
                    break
            else:
                types.append(FieldType.UNKNOWN)
                index += 1
        return types


class Maze:
    """Rectangular, row-major grid. Owns cell types; search state is written by the engine."""

    def __init__(
        self, width: int, height: int, *, glyphs: Glyphs | None = None
    ) -> None:
        if width <= 0 or height <= 0:
            raise MazeError(f"Maze size must be positive, got {width}x{height}.")
        self.glyphs = glyphs or Glyphs()
        self._rows: list[list[Cell]] = [
            [Cell(x=x, y=y) for x in range(width)] for y in range(height)
        ]

    @classmethod
    def from_lines(
        cls, lines: Sequence[str], *, glyphs: Glyphs | None = None
    ) -> "Maze":
        glyphs = glyphs or Glyphs()
        if not lines:
            raise MalformedMazeError("Maze text has no rows.")
        decoded = [glyphs.decode_row(line) for line in lines]
        width = len(decoded[0])
        if width == 0:
            raise MalformedMazeError("Maze row 0 is empty.")
        for row_index, row in enumerate(decoded):
            if len(row) != width:
                raise MalformedMazeError(
                    f"Maze row {row_index} has {len(row)} cells, expected {width}."
                )
        maze = cls(width, len(decoded), glyphs=glyphs)
        for y, row in enumerate(decoded):
            for x, field_type in enumerate(row):
                maze._rows[y][x].type = field_type
        return maze

    @property
    def width(self) -> int:
        return len(self._rows[0])

    @property
    def height(self) -> int:
        return len(self._rows)

    @property
    def rows(self) -> tuple[tuple[Cell, ...], ...]:
        return tuple(tuple(row) for row in self._rows)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cells(self) -> Iterator[Cell]:
        for row in self._rows:
            yield from row

    def cell_at(self, x: int, y: int) -> Cell | None:
        if not self.in_bounds(x, y):
            return None
        return self._rows[y][x]

    def set_type(self, x: int, y: int, field_type: FieldType) -> None:
        cell = self.cell_at(x, y)
        if cell is None:
            return
        cell.type = field_type

    def cycle_type(self, x: int, y: int, *, reverse: bool = False) -> FieldType | None:
        cell = self.cell_at(x, y)
        if cell is None:
            return None
        cell.type = cell.type.previous() if reverse else cell.type.next()
        return cell.type

    @property
    def start_cell(self) -> Cell | None:
        return self._first_of_type(FieldType.START)

    @property
    def goal_cell(self) -> Cell | None:
        return self._first_of_type(FieldType.GOAL)

    def _first_of_type(self, field_type: FieldType) -> Cell | None:
        return next((cell for cell in self.cells() if cell.type == field_type), None)

    def free_neighbors(self, cell: Cell, movement: Movement) -> list[Cell]:
        diagonal = movement == Movement.STRAIGHT_AND_DIAGONAL
        x, y = cell.x, cell.y
        # N, NW, NE, W, E, S, SW, SE; the order drives heap tie-breaks.
        offsets: list[tuple[int, int]] = [(0, -1)]
        if diagonal:
            offsets += [(-1, -1), (1, -1)]
        offsets += [(-1, 0), (1, 0), (0, 1)]
        if diagonal:
            offsets += [(-1, 1), (1, 1)]

        neighbors: list[Cell] = []
        for dx, dy in offsets:
            neighbor = self.cell_at(x + dx, y + dy)
            if neighbor is not None and neighbor.type in PASSABLE_TYPES:
                neighbors.append(neighbor)
        return neighbors

    def reset_node_states(self) -> None:
        for cell in self.cells():
            cell.state = NodeState.UNVISITED

    def generate_string_representation(self) -> list[str]:
        return [
            "".join(self.glyphs.glyph_for(cell.type) for cell in row)
            for row in self._rows
        ]
