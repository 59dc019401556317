# stepstar/core/astar.py
#!/usr/bin/env python3
"""
A* as a steppable state machine: one expansion per step().

A SearchController owns a SearchRun (frontier, ledger, closed set, status)
and is the only thing that mutates it. Callers may interleave any work
between steps (drawing, input, time slicing) or call run_to_completion(),
which is the same loop driven internally.

States: READY -> RUNNING -> SUCCEEDED | FAILED. Terminal states absorb
further step() calls.

Tie-breaking in the frontier is fixed: lower f, then lower h, then the
order in which cells were first discovered.
"""

from dataclasses import dataclass, field
from time import perf_counter
from typing import List, Optional, Union

from loguru import logger

from stepstar.core.errors import InvalidStartOrGoal, ReconstructBeforeSuccess
from stepstar.core.frontier import Frontier
from stepstar.core.heuristics import Heuristic
from stepstar.core.ledger import CostLedger, VisitedSet
from stepstar.core.neighbors import neighbors
from stepstar.core.path import reconstruct
from stepstar.core.types import (
    Cell,
    Failure,
    Grid,
    NodeState,
    SearchOutcome,
    SearchSnapshot,
    SearchStatus,
    StepResult,
    Success,
    as_cell,
)


@dataclass
class SearchRun:
    """Everything one search mutates. Never shared between controllers."""
    grid: Grid
    start: Cell
    goal: Cell
    heuristic: Heuristic
    diagonal_allowed: bool
    frontier: Frontier
    ledger: CostLedger
    visited: VisitedSet
    status: SearchStatus = SearchStatus.READY
    current: Optional[Cell] = None
    outcome: Optional[SearchOutcome] = None
    expansions: List[Cell] = field(default_factory=list)
    elapsed: float = 0.0  # seconds spent inside step()

    @classmethod
    def seeded(cls, grid: Grid, start: Cell, goal: Cell,
               heuristic: Heuristic, diagonal_allowed: bool) -> "SearchRun":
        ledger = CostLedger(goal, heuristic.estimate)
        frontier = Frontier()
        rec = ledger.seed(start)
        frontier.push(start, rec.f, rec.h)
        return cls(grid, start, goal, heuristic, diagonal_allowed,
                   frontier, ledger, VisitedSet())


def check_endpoint(grid: Grid, c: Cell, label: str) -> None:
    if not grid.in_bounds(c):
        msg = f"{label} {c} is outside the {grid.width}x{grid.height} grid"
        logger.error(msg)
        raise InvalidStartOrGoal(msg)
    if grid.is_block(c):
        msg = f"{label} {c} is on a blocked cell"
        logger.error(msg)
        raise InvalidStartOrGoal(msg)


class SearchController:
    name = "A*"

    def __init__(self, grid: Grid, start: Cell, goal: Cell,
                 heuristic: Union[Heuristic, str] = Heuristic.MANHATTAN,
                 diagonal_allowed: bool = False) -> None:
        start, goal = as_cell(start), as_cell(goal)
        check_endpoint(grid, start, "start")
        check_endpoint(grid, goal, "goal")
        self.grid = grid
        self.start = start
        self.goal = goal
        self.heuristic = Heuristic.parse(heuristic)
        self.diagonal_allowed = bool(diagonal_allowed)
        self.run = self._new_run()

    # -------------------- lifecycle --------------------

    def _new_run(self) -> SearchRun:
        logger.debug(
            f"[{self.name}] new run: grid=({self.grid.width}, {self.grid.height}), "
            f"start={self.start}, goal={self.goal}, heuristic={self.heuristic.value}, "
            f"diagonal={self.diagonal_allowed}"
        )
        return SearchRun.seeded(self.grid, self.start, self.goal,
                                self.heuristic, self.diagonal_allowed)

    def reset(self) -> None:
        """Drop all search state and seed a fresh run from the same inputs."""
        self.run = self._new_run()

    # -------------------- read-only views --------------------

    @property
    def status(self) -> SearchStatus:
        return self.run.status

    @property
    def outcome(self) -> Optional[SearchOutcome]:
        return self.run.outcome

    @property
    def current(self) -> Optional[Cell]:
        return self.run.current

    @property
    def expansion_order(self) -> List[Cell]:
        return list(self.run.expansions)

    @property
    def total_cost(self) -> Optional[float]:
        outcome = self.run.outcome
        return outcome.total_cost if isinstance(outcome, Success) else None

    def snapshot(self) -> SearchSnapshot:
        return SearchSnapshot(
            frontier_members=self.run.frontier.members(),
            visited_members=self.run.visited.members(),
            current=self.run.current,
        )

    def path(self) -> List[Cell]:
        if self.run.status is not SearchStatus.SUCCEEDED:
            msg = f"no path to reconstruct, search is {self.run.status.value}"
            logger.error(msg)
            raise ReconstructBeforeSuccess(msg)
        return reconstruct(self.run.ledger, self.goal)

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE A* expansion:
          - Empty frontier: the search fails, no path exists.
          - Pop the lowest (f, h) cell and close it.
          - If it is the goal, finish with the reconstructed path.
          - Else relax its neighbors, pushing new cells and decreasing keys of open ones.
        """
        run = self.run
        if run.status.terminal:
            path = run.outcome.path if isinstance(run.outcome, Success) else None
            return StepResult(status=run.status, current=run.current, path=path,
                              metrics=self.metrics())

        t0 = perf_counter()

        if run.frontier.is_empty():
            run.status = SearchStatus.FAILED
            run.outcome = Failure()
            run.elapsed += perf_counter() - t0
            logger.info(f"[{self.name}] no path from {self.start} to {self.goal}, "
                        f"explored {len(run.expansions)} nodes")
            return StepResult(status=run.status, current=run.current, metrics=self.metrics())

        run.status = SearchStatus.RUNNING
        u = run.frontier.pop_min()
        run.visited.mark_visited(u)
        run.ledger.close(u)
        run.current = u
        run.expansions.append(u)
        g_u = run.ledger.g(u)
        logger.debug(f"[{self.name}] expand {u} g={g_u:.3f} h={run.ledger.h(u):.3f}")

        if u == self.goal:
            path = reconstruct(run.ledger, u)
            run.outcome = Success(path=path, total_cost=g_u)
            run.status = SearchStatus.SUCCEEDED
            run.elapsed += perf_counter() - t0
            logger.info(f"[{self.name}] path found: length={len(path)}, cost={g_u:.3f}, "
                        f"explored {len(run.expansions)} nodes")
            return StepResult(status=run.status, current=u, closed=[u], path=path,
                              metrics=self.metrics())

        opened: List[Cell] = []
        updated: List[Cell] = []
        for v, cost in neighbors(self.grid, u, self.diagonal_allowed):
            if run.visited.is_visited(v):
                continue
            alt = g_u + cost
            state = run.ledger.state(v)
            if state is NodeState.UNVISITED:
                rec = run.ledger.relax(v, alt, u)
                run.frontier.push(v, rec.f, rec.h)
                opened.append(v)
            elif alt < run.ledger.g(v):
                rec = run.ledger.relax(v, alt, u)
                run.frontier.decrease_key(v, rec.f, rec.h)
                updated.append(v)

        run.elapsed += perf_counter() - t0
        return StepResult(status=run.status, current=u, opened=opened, updated=updated,
                          closed=[u], metrics=self.metrics())

    def run_to_completion(self, max_steps: Optional[int] = None) -> Optional[SearchOutcome]:
        """Step until terminal. With max_steps, return None if the budget runs out first."""
        steps = 0
        while not self.run.status.terminal:
            if max_steps is not None and steps >= max_steps:
                return None
            self.step()
            steps += 1
        return self.run.outcome

    # -------------------- metrics --------------------

    def metrics(self) -> dict:
        outcome = self.run.outcome
        return {
            "algo": self.name,
            "popped": len(self.run.expansions),
            "open_size": len(self.run.frontier),
            "closed_count": len(self.run.visited),
            "path_len": len(outcome.path) if isinstance(outcome, Success) else 0,
            "total_cost": self.total_cost,
            "elapsed_ms": self.run.elapsed * 1000.0,
        }
