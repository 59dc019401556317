# stepstar/__init__.py
"""Steppable A* search on occupancy grids."""

from loguru import logger

from stepstar.core.astar import SearchController, SearchRun
from stepstar.core.dijkstra import DijkstraSearch, shortest_path_cost
from stepstar.core.errors import (
    InvalidStartOrGoal,
    MapFormatError,
    ReconstructBeforeSuccess,
    StepstarError,
)
from stepstar.core.heuristics import Heuristic
from stepstar.core.types import (
    Cell,
    Failure,
    FailureReason,
    Grid,
    SearchOutcome,
    SearchSnapshot,
    SearchStatus,
    StepResult,
    Success,
)

# library code stays quiet unless the application opts in
logger.disable(__name__)

__version__ = "0.1.0"

__all__ = [
    "Cell",
    "DijkstraSearch",
    "Failure",
    "FailureReason",
    "Grid",
    "Heuristic",
    "InvalidStartOrGoal",
    "MapFormatError",
    "ReconstructBeforeSuccess",
    "SearchController",
    "SearchOutcome",
    "SearchRun",
    "SearchSnapshot",
    "SearchStatus",
    "StepResult",
    "StepstarError",
    "Success",
    "shortest_path_cost",
]
