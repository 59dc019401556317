# stepstar/core/ledger.py
#!/usr/bin/env python3
"""
Per-run node bookkeeping.

CostLedger owns one NodeRecord per discovered cell. Parents are stored as
cells and resolved through the ledger, so the parent chain never holds object
references. f is always derived from g and h.
"""

from dataclasses import dataclass
from math import inf
from typing import Callable, Dict, FrozenSet, Iterator, Optional, Set, Tuple

from stepstar.core.types import Cell, NodeState


@dataclass
class NodeRecord:
    g: float = inf
    h: Optional[float] = None
    parent: Optional[Cell] = None
    state: NodeState = NodeState.UNVISITED

    @property
    def f(self) -> float:
        return self.g + (self.h or 0.0)


class CostLedger:
    def __init__(self, goal: Cell, estimate: Callable[[Cell, Cell], float]) -> None:
        self.goal = goal
        self._estimate = estimate
        self._records: Dict[Cell, NodeRecord] = {}

    def __contains__(self, c: Cell) -> bool:
        return c in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._records)

    def items(self) -> Iterator[Tuple[Cell, NodeRecord]]:
        return iter(self._records.items())

    def g(self, c: Cell) -> float:
        rec = self._records.get(c)
        return rec.g if rec is not None else inf

    def h(self, c: Cell) -> float:
        """Heuristic to goal, computed on first use and cached on the record."""
        rec = self._records.get(c)
        if rec is None:
            return self._estimate(c, self.goal)
        if rec.h is None:
            rec.h = self._estimate(c, self.goal)
        return rec.h

    def f(self, c: Cell) -> float:
        return self.g(c) + self.h(c)

    def parent(self, c: Cell) -> Optional[Cell]:
        rec = self._records.get(c)
        return rec.parent if rec is not None else None

    def state(self, c: Cell) -> NodeState:
        rec = self._records.get(c)
        return rec.state if rec is not None else NodeState.UNVISITED

    # -------------------- transitions --------------------

    def seed(self, start: Cell) -> NodeRecord:
        rec = NodeRecord(g=0.0, parent=None, state=NodeState.OPEN)
        self._records[start] = rec
        self.h(start)
        return rec

    def relax(self, c: Cell, g: float, parent: Cell) -> NodeRecord:
        """Record a cheaper route to c through parent and mark it OPEN."""
        rec = self._records.setdefault(c, NodeRecord())
        if rec.state is NodeState.CLOSED:
            raise ValueError(f"cannot relax closed cell {c}")
        if g >= rec.g:
            raise ValueError(f"relax of {c} must lower g ({g} >= {rec.g})")
        rec.g = g
        rec.parent = parent
        rec.state = NodeState.OPEN
        self.h(c)
        return rec

    def close(self, c: Cell) -> NodeRecord:
        rec = self._records[c]
        if rec.state is not NodeState.OPEN:
            raise ValueError(f"only open cells can be closed, {c} is {rec.state.value}")
        rec.state = NodeState.CLOSED
        return rec


class VisitedSet:
    """Closed set. Cells are added once and never removed within a run."""

    def __init__(self) -> None:
        self._cells: Set[Cell] = set()

    def __contains__(self, c: Cell) -> bool:
        return c in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def mark_visited(self, c: Cell) -> None:
        if c in self._cells:
            raise ValueError(f"{c} is already closed")
        self._cells.add(c)

    def is_visited(self, c: Cell) -> bool:
        return c in self._cells

    def members(self) -> FrozenSet[Cell]:
        return frozenset(self._cells)
