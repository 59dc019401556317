# stepstar/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Optional, Dict, Any, FrozenSet, Iterable, Sequence, Union

Cell = Tuple[int, int]  # (col, row)


@dataclass(frozen=True)
class Grid:
    """Bounds and obstacle oracle. Frozen so concurrent runs can share it."""
    width: int
    height: int
    blocked: FrozenSet[Cell] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid size must be positive, got {self.width}x{self.height}")
        # accept any iterable of cells but store it frozen
        object.__setattr__(self, "blocked", frozenset(tuple(c) for c in self.blocked))

    @classmethod
    def from_rows(cls, cells: Sequence[Sequence[int]]) -> "Grid":
        """Build from a row-major 0/1 matrix, cells[y][x] == 1 is blocked."""
        height = len(cells)
        width = len(cells[0]) if height else 0
        if any(len(r) != width for r in cells):
            raise ValueError("cells rows must all have the same length")
        blocked = {(x, y) for y, row in enumerate(cells) for x, v in enumerate(row) if v == 1}
        return cls(width, height, frozenset(blocked))

    def in_bounds(self, c: Cell) -> bool:
        x, y = c
        return 0 <= x < self.width and 0 <= y < self.height

    def is_block(self, c: Cell) -> bool:
        return c in self.blocked

    def passable(self, c: Cell) -> bool:
        return self.in_bounds(c) and not self.is_block(c)


class SearchStatus(str, Enum):
    READY = "ready"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (SearchStatus.SUCCEEDED, SearchStatus.FAILED)


class NodeState(str, Enum):
    UNVISITED = "unvisited"
    OPEN = "open"
    CLOSED = "closed"


class FailureReason(str, Enum):
    NO_PATH_EXISTS = "no_path_exists"


@dataclass(frozen=True)
class Success:
    path: List[Cell]
    total_cost: float


@dataclass(frozen=True)
class Failure:
    reason: FailureReason = FailureReason.NO_PATH_EXISTS


SearchOutcome = Union[Success, Failure]


@dataclass
class StepResult:
    status: SearchStatus
    current: Optional[Cell] = None
    opened: List[Cell] = field(default_factory=list)   # pushed this step
    updated: List[Cell] = field(default_factory=list)  # decrease-keyed this step
    closed: List[Cell] = field(default_factory=list)
    path: Optional[List[Cell]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SearchSnapshot:
    """Read-only view of a run between two steps, for renderers and tests."""
    frontier_members: FrozenSet[Cell]
    visited_members: FrozenSet[Cell]
    current: Optional[Cell]


def as_cell(c: Iterable[int]) -> Cell:
    x, y = c
    return (int(x), int(y))
