# crucible/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Optional, Dict, Any, NamedTuple

from crucible.core.errors import MalformedInput

Cell = Tuple[int, int]  # (row, col)


class Direction(Enum):
    LEFT = (0, -1)
    RIGHT = (0, 1)
    UP = (-1, 0)
    DOWN = (1, 0)

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITE[self]

    @property
    def arrow(self) -> str:
        return _ARROW[self]


_OPPOSITE = {
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
}
_ARROW = {Direction.LEFT: "<", Direction.RIGHT: ">", Direction.UP: "^", Direction.DOWN: "v"}

ALL_DIRECTIONS: Tuple[Direction, ...] = (Direction.LEFT, Direction.RIGHT, Direction.UP, Direction.DOWN)


class SearchState(NamedTuple):
    pos: Cell
    facing: Direction
    run: int  # 0 only for the synthetic start states


@dataclass(frozen=True)
class Grid:
    rows: Tuple[Tuple[int, ...], ...]  # [row][col] entry costs

    def __post_init__(self):
        if not self.rows or not self.rows[0]:
            raise MalformedInput("grid must be at least 1x1")
        width = len(self.rows[0])
        for r, row in enumerate(self.rows):
            if len(row) != width:
                raise MalformedInput(f"row {r} has {len(row)} cells, expected {width}")
            if any(v < 0 for v in row):
                raise MalformedInput(f"negative cost in row {r}")

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0])

    @property
    def start(self) -> Cell:
        return (0, 0)

    @property
    def goal(self) -> Cell:
        return (self.height - 1, self.width - 1)

    def extent(self) -> Tuple[int, int]:
        """(max_row, max_col) of the bottom-right cell."""
        return self.goal

    def in_bounds(self, c: Cell) -> bool:
        r, col = c
        return 0 <= r < self.height and 0 <= col < self.width

    def cost_at(self, c: Cell) -> int:
        r, col = c
        return self.rows[r][col]

    def step(self, c: Cell, d: Direction) -> Optional[Cell]:
        """Cell one move away in direction d, or None when that leaves the grid."""
        dr, dc = d.value
        n = (c[0] + dr, c[1] + dc)
        return n if self.in_bounds(n) else None


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path"
    opened: List[SearchState] = field(default_factory=list)
    closed: List[SearchState] = field(default_factory=list)
    current: Optional[SearchState] = None
    path: Optional[List[Cell]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
