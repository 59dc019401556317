# stepstar/core/path.py
#!/usr/bin/env python3
from typing import List

from stepstar.core.errors import ReconstructBeforeSuccess
from stepstar.core.ledger import CostLedger
from stepstar.core.types import Cell, NodeState


def reconstruct(ledger: CostLedger, goal: Cell) -> List[Cell]:
    """Walk parent links from goal back to the cell without a parent, start first."""
    state = ledger.state(goal)
    if state is not NodeState.CLOSED:
        raise ReconstructBeforeSuccess(f"goal {goal} is {state.value}, not yet expanded")

    path: List[Cell] = []
    cur = goal
    while True:
        path.append(cur)
        parent = ledger.parent(cur)
        if parent is None:
            break
        cur = parent
        if len(path) > len(ledger):
            raise RuntimeError(f"parent chain from {goal} does not terminate")
    path.reverse()
    return path
