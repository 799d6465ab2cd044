import random
from functools import partial

import pytest

from tour_refine.local_search.accept import always_accept
from tour_refine.local_search.iterator import Iterator
from tour_refine.local_search.moves import Move, apply_three_opt, three_opt_delta
from tour_refine.local_search.proposal import random_two_opt_move
from tour_refine.local_search.state import State
from tour_refine.tour import is_permutation, total_length


def test_initial_state_measures_the_tour(unit_square):
    state = State.initial_state(unit_square)
    assert state.value == 4.0
    assert len(state) == 4
    assert state.parent is None


def test_initial_state_with_given_length(unit_square):
    assert State.initial_state(unit_square, length=7.5).value == 7.5


def test_flip_carries_the_length_forward(random_points):
    state = State.initial_state(random_points)
    move = Move(2, 9, 30, delta=three_opt_delta(random_points, 2, 9, 30))
    child = state.flip(move)

    assert child.parent is state
    assert child.tour == apply_three_opt(random_points, 2, 9, 30)
    assert child.value == state.value + move.delta
    assert state.tour == random_points


def test_flip_keeps_one_generation(random_points):
    state = State.initial_state(random_points)
    child = state.flip(Move(0, 5, delta=0.0))
    grandchild = child.flip(Move(1, 7, delta=0.0))

    assert grandchild.parent is child
    assert child.parent is None


def test_reconcile_removes_drift(unit_square):
    state = State.initial_state(unit_square, length=4.5)
    assert state.reconcile() == pytest.approx(0.5)
    assert state.value == 4.0


def test_long_walk_drift_stays_bounded(random_points):
    rng = random.Random(99)
    walk = Iterator(
        partial(random_two_opt_move, rng=rng), always_accept, State.initial_state(random_points), 20000
    )
    for state in walk:
        pass

    assert walk.accepted == 20000
    assert is_permutation(state.tour, random_points)
    assert abs(state.reconcile()) < 1e-6 * total_length(random_points)


def test_iterator_yields_every_step(random_points):
    rng = random.Random(1)
    walk = Iterator(
        partial(random_two_opt_move, rng=rng), lambda move: False, State.initial_state(random_points), 25
    )
    states = list(walk)

    assert len(states) == len(walk) == 25
    assert all(state is walk.initial_state for state in states)
    assert walk.accepted == 0
    assert repr(walk) == "<Iterator [25 steps]>"


def test_iterator_restarts_from_initial_state(random_points):
    rng = random.Random(2)
    initial = State.initial_state(random_points)
    walk = Iterator(partial(random_two_opt_move, rng=rng), always_accept, initial, 10)

    list(walk)
    assert walk.state is not initial
    iter(walk)
    assert walk.state is initial
    assert walk.counter == 0
