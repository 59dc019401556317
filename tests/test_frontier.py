# tests/test_frontier.py
import random

import pytest

from stepstar.core.frontier import Frontier


def test_pops_lowest_f_first():
    fr = Frontier()
    fr.push((0, 0), 5.0, 1.0)
    fr.push((1, 0), 3.0, 2.0)
    fr.push((2, 0), 4.0, 0.0)
    assert [fr.pop_min() for _ in range(3)] == [(1, 0), (2, 0), (0, 0)]
    assert fr.is_empty()


def test_equal_f_prefers_lower_h():
    fr = Frontier()
    fr.push((0, 0), 6.0, 4.0)
    fr.push((1, 0), 6.0, 1.0)
    fr.push((2, 0), 6.0, 2.0)
    assert [fr.pop_min() for _ in range(3)] == [(1, 0), (2, 0), (0, 0)]


def test_full_ties_pop_in_insertion_order():
    fr = Frontier()
    cells = [(3, 1), (0, 4), (2, 2), (1, 1)]
    for c in cells:
        fr.push(c, 2.0, 1.0)
    assert [fr.pop_min() for _ in cells] == cells


def test_decrease_key_moves_entry_forward():
    fr = Frontier()
    fr.push((0, 0), 3.0, 1.0)
    fr.push((1, 0), 9.0, 1.0)
    fr.decrease_key((1, 0), 2.0, 1.0)
    assert fr.priority((1, 0)) == (2.0, 1.0)
    assert fr.pop_min() == (1, 0)


def test_decrease_key_keeps_discovery_order_on_tie():
    fr = Frontier()
    fr.push((0, 0), 9.0, 1.0)
    fr.push((1, 0), 4.0, 1.0)
    fr.decrease_key((0, 0), 4.0, 1.0)
    assert fr.pop_min() == (0, 0)


def test_membership_and_size():
    fr = Frontier()
    fr.push((4, 2), 1.0, 0.0)
    assert (4, 2) in fr
    assert fr.contains((4, 2))
    assert not fr.contains((2, 4))
    assert len(fr) == 1
    assert fr.members() == frozenset({(4, 2)})
    fr.pop_min()
    assert (4, 2) not in fr
    assert len(fr) == 0


def test_misuse_raises():
    fr = Frontier()
    with pytest.raises(IndexError):
        fr.pop_min()
    fr.push((0, 0), 1.0, 0.0)
    with pytest.raises(ValueError):
        fr.push((0, 0), 0.5, 0.0)
    with pytest.raises(ValueError):
        fr.decrease_key((0, 0), 2.0, 0.0)
    with pytest.raises(KeyError):
        fr.decrease_key((9, 9), 0.0, 0.0)


def test_heap_order_under_random_updates():
    rng = random.Random(7)
    fr = Frontier()
    prio = {}
    for i in range(200):
        c = (i % 20, i // 20)
        f = rng.uniform(0, 50)
        h = rng.uniform(0, 10)
        fr.push(c, f, h)
        prio[c] = (f, h, i)
    for c in rng.sample(sorted(prio), 60):
        f, h, seq = prio[c]
        new_f = f - rng.uniform(0, 20)
        fr.decrease_key(c, new_f, h)
        prio[c] = (new_f, h, seq)

    popped = [fr.pop_min() for _ in range(len(prio))]
    assert popped == sorted(prio, key=lambda c: prio[c])
