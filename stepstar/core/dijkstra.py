# stepstar/core/dijkstra.py
#!/usr/bin/env python3
"""
Uniform-cost (Dijkstra) search with the same step protocol as A*.

Built directly on heapq with lazy deletion rather than on Frontier and
CostLedger, so its costs can be used to check the A* kernel.
"""

from dataclasses import dataclass, field
from math import inf
from typing import Dict, List, Optional, Set, Tuple
import heapq

from loguru import logger

from stepstar.core.astar import check_endpoint
from stepstar.core.neighbors import neighbors
from stepstar.core.types import (
    Cell,
    Failure,
    Grid,
    SearchOutcome,
    SearchStatus,
    StepResult,
    Success,
)


@dataclass
class DijkstraSearch:
    grid: Grid
    start: Cell
    goal: Cell
    diagonal_allowed: bool = False
    name: str = "Dijkstra"

    open_pq: List[Tuple[float, int, Cell]] = field(default_factory=list)  # (g, seq, cell)
    open_set: Set[Cell] = field(default_factory=set)
    closed_set: Set[Cell] = field(default_factory=set)
    g: Dict[Cell, float] = field(default_factory=dict)
    parent: Dict[Cell, Cell] = field(default_factory=dict)
    status: SearchStatus = SearchStatus.READY
    outcome: Optional[SearchOutcome] = None
    popped_count: int = 0
    seq: int = 0

    def __post_init__(self) -> None:
        check_endpoint(self.grid, self.start, "start")
        check_endpoint(self.grid, self.goal, "goal")
        self.reset()

    # -------------------- lifecycle --------------------

    def reset(self) -> None:
        self.open_pq.clear()
        self.open_set.clear()
        self.closed_set.clear()
        self.g.clear()
        self.parent.clear()
        self.status = SearchStatus.READY
        self.outcome = None
        self.popped_count = 0
        self.seq = 0

        s = self.start
        self.g[s] = 0.0
        heapq.heappush(self.open_pq, (0.0, self._bump(), s))
        self.open_set.add(s)

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def _reconstruct_path(self, end: Cell) -> List[Cell]:
        path: List[Cell] = []
        cur = end
        while True:
            path.append(cur)
            if cur == self.start:
                break
            cur = self.parent[cur]
        path.reverse()
        return path

    # -------------------- stepping --------------------

    def step(self) -> StepResult:
        if self.status.terminal:
            path = self.outcome.path if isinstance(self.outcome, Success) else None
            return StepResult(status=self.status, path=path, metrics=self._metrics())

        # skip entries superseded by a cheaper push
        while self.open_pq and self.open_pq[0][2] in self.closed_set:
            heapq.heappop(self.open_pq)

        if not self.open_pq:
            self.status = SearchStatus.FAILED
            self.outcome = Failure()
            logger.info(f"[{self.name}] no path from {self.start} to {self.goal}")
            return StepResult(status=self.status, metrics=self._metrics())

        self.status = SearchStatus.RUNNING
        g_u, _, u = heapq.heappop(self.open_pq)
        self.popped_count += 1
        self.open_set.discard(u)
        self.closed_set.add(u)

        if u == self.goal:
            path = self._reconstruct_path(u)
            self.status = SearchStatus.SUCCEEDED
            self.outcome = Success(path=path, total_cost=g_u)
            logger.info(f"[{self.name}] path found: length={len(path)}, cost={g_u:.3f}")
            return StepResult(status=self.status, current=u, closed=[u], path=path,
                              metrics=self._metrics())

        opened_now: List[Cell] = []
        for v, step_cost in neighbors(self.grid, u, self.diagonal_allowed):
            if v in self.closed_set:
                continue
            alt = g_u + step_cost
            if alt < self.g.get(v, inf):
                self.g[v] = alt
                self.parent[v] = u
                heapq.heappush(self.open_pq, (alt, self._bump(), v))
                if v not in self.open_set:
                    self.open_set.add(v)
                    opened_now.append(v)

        return StepResult(status=self.status, current=u, opened=opened_now, closed=[u],
                          metrics=self._metrics())

    def run_to_completion(self, max_steps: Optional[int] = None) -> Optional[SearchOutcome]:
        steps = 0
        while not self.status.terminal:
            if max_steps is not None and steps >= max_steps:
                return None
            self.step()
            steps += 1
        return self.outcome

    # -------------------- metrics --------------------

    def _metrics(self) -> dict:
        outcome = self.outcome
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(self.open_set),
            "closed_count": len(self.closed_set),
            "path_len": len(outcome.path) if isinstance(outcome, Success) else 0,
            "total_cost": outcome.total_cost if isinstance(outcome, Success) else None,
        }

    def metrics(self) -> dict:
        return self._metrics()


def shortest_path_cost(grid: Grid, start: Cell, goal: Cell,
                       diagonal_allowed: bool = False) -> Optional[float]:
    """Exact shortest-path cost, or None when goal is unreachable."""
    outcome = DijkstraSearch(grid, start, goal, diagonal_allowed).run_to_completion()
    return outcome.total_cost if isinstance(outcome, Success) else None
