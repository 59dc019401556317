# tests/test_path.py
import pytest

from stepstar.core.errors import ReconstructBeforeSuccess
from stepstar.core.heuristics import Heuristic
from stepstar.core.ledger import CostLedger
from stepstar.core.path import reconstruct


def test_walks_parents_back_to_start():
    ledger = CostLedger((2, 1), Heuristic.ZERO.estimate)
    ledger.seed((0, 0))
    ledger.close((0, 0))
    ledger.relax((1, 0), 1.0, (0, 0))
    ledger.close((1, 0))
    ledger.relax((2, 0), 2.0, (1, 0))
    ledger.close((2, 0))
    ledger.relax((2, 1), 3.0, (2, 0))
    ledger.close((2, 1))
    assert reconstruct(ledger, (2, 1)) == [(0, 0), (1, 0), (2, 0), (2, 1)]


def test_single_cell_path():
    ledger = CostLedger((5, 5), Heuristic.ZERO.estimate)
    ledger.seed((5, 5))
    ledger.close((5, 5))
    assert reconstruct(ledger, (5, 5)) == [(5, 5)]


def test_unreached_goal():
    ledger = CostLedger((5, 5), Heuristic.ZERO.estimate)
    ledger.seed((0, 0))
    with pytest.raises(ReconstructBeforeSuccess):
        reconstruct(ledger, (5, 5))


def test_open_goal_is_not_final():
    ledger = CostLedger((2, 0), Heuristic.ZERO.estimate)
    ledger.seed((0, 0))
    ledger.close((0, 0))
    ledger.relax((2, 0), 5.0, (0, 0))
    with pytest.raises(ReconstructBeforeSuccess, match="open"):
        reconstruct(ledger, (2, 0))
