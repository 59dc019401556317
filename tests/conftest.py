# tests/conftest.py
import random

import pytest

from stepstar.core.types import Grid


def random_grid(seed: int, width: int = 12, height: int = 10, density: float = 0.28):
    """Seeded grid plus two distinct open cells to search between."""
    rng = random.Random(seed)
    blocked = {(x, y) for x in range(width) for y in range(height) if rng.random() < density}
    free = [(x, y) for x in range(width) for y in range(height) if (x, y) not in blocked]
    start, goal = rng.sample(free, 2)
    return Grid(width, height, frozenset(blocked)), start, goal


@pytest.fixture
def make_random_grid():
    return random_grid


@pytest.fixture
def decrease_key_grid():
    # Rows top to bottom; 1 = blocked. Searching (0,0) -> (5,2) with Manhattan,
    # (2,2) is first reached from the right at g=6 and later from the left at g=4.
    rows = [
        [0, 0, 0, 0, 0, 0],
        [0, 0, 1, 0, 1, 1],
        [0, 0, 0, 0, 1, 0],
        [0, 0, 1, 0, 0, 0],
    ]
    return Grid.from_rows(rows)
