# stepstar/core/frontier.py
#!/usr/bin/env python3
"""
Open set: binary min-heap with a cell -> heap-index map.

Entries are ordered by (f, h, seq): lower f first, then lower h (closer to
the goal), then insertion order. seq is assigned on the first push and kept
through decrease_key, so the ordering is total and runs are reproducible.
"""

from typing import Dict, FrozenSet, List, Tuple

from stepstar.core.types import Cell

Entry = Tuple[float, float, int, Cell]  # (f, h, seq, cell)


class Frontier:
    def __init__(self) -> None:
        self._heap: List[Entry] = []
        self._index: Dict[Cell, int] = {}
        self._seq = 0

    def __len__(self) -> int:
        return len(self._heap)

    def __contains__(self, c: Cell) -> bool:
        return c in self._index

    def contains(self, c: Cell) -> bool:
        return c in self._index

    def is_empty(self) -> bool:
        return not self._heap

    def members(self) -> FrozenSet[Cell]:
        return frozenset(self._index)

    def priority(self, c: Cell) -> Tuple[float, float]:
        f, h, _, _ = self._heap[self._index[c]]
        return f, h

    # -------------------- mutation --------------------

    def push(self, c: Cell, f: float, h: float) -> None:
        if c in self._index:
            raise ValueError(f"{c} is already in the frontier")
        self._seq += 1
        self._heap.append((f, h, self._seq, c))
        self._index[c] = len(self._heap) - 1
        self._sift_up(len(self._heap) - 1)

    def pop_min(self) -> Cell:
        if not self._heap:
            raise IndexError("pop from empty frontier")
        top = self._heap[0]
        last = self._heap.pop()
        del self._index[top[3]]
        if self._heap:
            self._heap[0] = last
            self._index[last[3]] = 0
            self._sift_down(0)
        return top[3]

    def decrease_key(self, c: Cell, new_f: float, h: float) -> None:
        i = self._index[c]  # KeyError if absent
        f, _, seq, _ = self._heap[i]
        if new_f > f:
            raise ValueError(f"decrease_key would raise f of {c} from {f} to {new_f}")
        self._heap[i] = (new_f, h, seq, c)
        self._sift_up(i)

    # -------------------- heap internals --------------------

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        self._index[heap[i][3]] = i
        self._index[heap[j][3]] = j

    def _sift_up(self, i: int) -> None:
        while i > 0:
            parent = (i - 1) // 2
            if self._heap[i][:3] < self._heap[parent][:3]:
                self._swap(i, parent)
                i = parent
            else:
                break

    def _sift_down(self, i: int) -> None:
        n = len(self._heap)
        while True:
            left = 2 * i + 1
            right = left + 1
            best = i
            if left < n and self._heap[left][:3] < self._heap[best][:3]:
                best = left
            if right < n and self._heap[right][:3] < self._heap[best][:3]:
                best = right
            if best == i:
                return
            self._swap(i, best)
            i = best
