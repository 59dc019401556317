# tests/test_dijkstra.py
import pytest

from stepstar.core.dijkstra import DijkstraSearch, shortest_path_cost
from stepstar.core.errors import InvalidStartOrGoal
from stepstar.core.types import Failure, Grid, SearchStatus, Success


def test_straight_line():
    search = DijkstraSearch(Grid(10, 1), (0, 0), (9, 0))
    outcome = search.run_to_completion()
    assert outcome == Success(path=[(x, 0) for x in range(10)], total_cost=9.0)
    assert search.metrics()["path_len"] == 10


def test_detour_around_wall():
    grid = Grid.from_rows([
        [0, 0, 0, 1, 0, 0, 0, 0],
        [0, 0, 0, 1, 0, 0, 0, 0],
        [0, 0, 0, 1, 0, 0, 0, 0],
        [0, 0, 0, 1, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0, 0],
    ])
    assert shortest_path_cost(grid, (0, 2), (7, 2)) == 11
    assert shortest_path_cost(grid, (0, 2), (7, 2), diagonal_allowed=True) == pytest.approx(4 * 2 ** 0.5 + 3)


def test_unreachable_goal():
    grid = Grid(3, 3, {(1, 0), (1, 1), (1, 2)})
    search = DijkstraSearch(grid, (0, 0), (2, 2))
    assert search.run_to_completion() == Failure()
    assert search.status is SearchStatus.FAILED
    assert shortest_path_cost(grid, (0, 0), (2, 2)) is None


def test_steps_one_expansion_at_a_time():
    search = DijkstraSearch(Grid(3, 1), (0, 0), (2, 0))
    assert search.status is SearchStatus.READY
    res = search.step()
    assert res.status is SearchStatus.RUNNING
    assert res.closed == [(0, 0)]
    assert res.opened == [(1, 0)]
    assert search.run_to_completion(max_steps=1) is None
    assert search.run_to_completion().total_cost == 2.0


def test_reset():
    search = DijkstraSearch(Grid(4, 4), (0, 0), (3, 3))
    first = search.run_to_completion()
    search.reset()
    assert search.status is SearchStatus.READY
    assert search.run_to_completion() == first


@pytest.mark.parametrize("start, goal", [
    ((0, 0), (1, 0)),   # start on a wall
    ((1, 0), (0, 0)),   # goal on a wall
    ((1, 0), (5, 0)),   # goal off the grid
])
def test_rejects_bad_endpoints(start, goal):
    grid = Grid(3, 1, {(0, 0)})
    with pytest.raises(InvalidStartOrGoal):
        DijkstraSearch(grid, start, goal)
