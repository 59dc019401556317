# stepstar/core/heuristics.py
#!/usr/bin/env python3
"""
Distance estimates between two grid cells.

- Manhattan: admissible for 4-connected grids.
- Euclidean: admissible for any movement model, never above Manhattan.
- Chebyshev: admissible for 8-connected grids with unit diagonal cost.
- Octile: tight bound when a diagonal step costs exactly sqrt(2).
- Zero: no guidance, A* degrades to uniform-cost (Dijkstra) search.

Pairing a heuristic with the wrong movement model is not checked here.
"""

from enum import Enum
from math import sqrt
from typing import Union

from stepstar.core.types import Cell

SQRT2 = sqrt(2.0)


class Heuristic(str, Enum):
    MANHATTAN = "manhattan"
    EUCLIDEAN = "euclidean"
    CHEBYSHEV = "chebyshev"
    OCTILE = "octile"
    ZERO = "zero"

    @classmethod
    def parse(cls, value: Union[str, "Heuristic"]) -> "Heuristic":
        """Accept a member or its name; 'diagonal' and 'dijkstra' are aliases."""
        if isinstance(value, Heuristic):
            return value
        key = str(value).strip().lower()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            names = ", ".join(h.value for h in cls)
            raise ValueError(f"unknown heuristic {value!r}, expected one of: {names}") from None

    def estimate(self, a: Cell, b: Cell) -> float:
        dx = abs(a[0] - b[0])
        dy = abs(a[1] - b[1])
        if self is Heuristic.MANHATTAN:
            return float(dx + dy)
        if self is Heuristic.EUCLIDEAN:
            return sqrt(dx * dx + dy * dy)
        if self is Heuristic.CHEBYSHEV:
            return float(max(dx, dy))
        if self is Heuristic.OCTILE:
            return max(dx, dy) + (SQRT2 - 1.0) * min(dx, dy)
        if self is Heuristic.ZERO:
            return 0.0
        raise AssertionError(f"unhandled heuristic {self!r}")


_ALIASES = {
    "diagonal": Heuristic.OCTILE.value,
    "dijkstra": Heuristic.ZERO.value,
}
