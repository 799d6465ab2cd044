"""
moves.py
=================

Overview
--------
Cost deltas and applications of 2-opt and 3-opt moves.

A 2-opt move (i, j) replaces the edges (i, i+1) and (j, j+1) by (i, j) and
(i+1, j+1) by reversing the segment i+1..j. The 3-opt move (i, j, k) used here
reverses i+1..j and j+1..k, replacing (i, i+1), (j, j+1), (k, k+1) by (i, j),
(i+1, k), (j+1, k+1).

Key Functions:
- two_opt_delta / apply_two_opt: single 2-opt move on a list of points.
- three_opt_delta / apply_three_opt: single 3-opt move on a list of points.
- two_opt_scan / three_opt_scan: deltas of every move of one anchor, evaluated
  at once on an (n, 2) coordinate array.

The scans evaluate the scalar formulas term by term in the same order, so a
scan and a loop over the scalar delta select the same best move.

Dependencies:
- numpy
"""

from collections import namedtuple
from typing import List, Sequence, Tuple

import numpy as np

from ..geometry import distance


class InvalidMoveError(ValueError):
    "Raised when move indices are out of range or not strictly increasing."


Move = namedtuple("Move", ["i", "j", "k", "delta"], defaults=(None, 0.0))
Move.__doc__ = "A candidate 2-opt (k is None) or 3-opt move and its cost delta."


def _check_two_opt(n, i, j):
    if not 0 <= i < j <= n - 1:
        raise InvalidMoveError(f"2-opt move needs 0 <= i < j <= {n - 1}, got ({i}, {j}).")


def _check_three_opt(n, i, j, k):
    if not 0 <= i < j < k <= n - 2:
        raise InvalidMoveError(
            f"3-opt move needs 0 <= i < j < k <= {n - 2}, got ({i}, {j}, {k})."
        )


# --------------- Single moves ------------------

def _two_opt_delta(tour, i, j):
    n = len(tour)
    return (
        - distance(tour[i], tour[i + 1])
        - distance(tour[j], tour[(j + 1) % n])
        + distance(tour[i + 1], tour[(j + 1) % n])
        + distance(tour[i], tour[j])
    )


def two_opt_delta(tour: Sequence, i: int, j: int) -> float:
    """
    Change of the tour length caused by the 2-opt move (i, j).

    :param tour: Ordered sequence of points. Not modified.
    :type tour: Sequence
    :param i: First index, ``0 <= i < j``.
    :type i: int
    :param j: Second index, ``j <= n - 1``. Its successor wraps to 0.
    :type j: int

    :return: New length minus old length.
    :rtype: float

    :raises InvalidMoveError: If the indices are out of range.
    """
    _check_two_opt(len(tour), i, j)
    return _two_opt_delta(tour, i, j)


def apply_two_opt(tour: Sequence, i: int, j: int) -> List:
    "Returns ``tour[:i+1] + reversed(tour[i+1:j+1]) + tour[j+1:]``."
    _check_two_opt(len(tour), i, j)
    tour = list(tour)
    return tour[:i + 1] + tour[i + 1:j + 1][::-1] + tour[j + 1:]


def _three_opt_delta(tour, i, j, k):
    return (
        distance(tour[i], tour[j])
        + distance(tour[i + 1], tour[k])
        + distance(tour[j + 1], tour[k + 1])
        - distance(tour[i], tour[i + 1])
        - distance(tour[j], tour[j + 1])
        - distance(tour[k], tour[k + 1])
    )


def three_opt_delta(tour: Sequence, i: int, j: int, k: int) -> float:
    """
    Change of the tour length caused by the 3-opt move (i, j, k).

    Requires ``0 <= i < j < k <= n - 2`` so none of the successors wraps.

    :raises InvalidMoveError: If the indices are out of range.
    """
    _check_three_opt(len(tour), i, j, k)
    return _three_opt_delta(tour, i, j, k)


def apply_three_opt(tour: Sequence, i: int, j: int, k: int) -> List:
    "Reverses the segments i+1..j and j+1..k, leaving the rest in place."
    _check_three_opt(len(tour), i, j, k)
    tour = list(tour)
    return (
        tour[:i + 1]
        + tour[i + 1:j + 1][::-1]
        + tour[j + 1:k + 1][::-1]
        + tour[k + 1:]
    )


def apply_move(tour: Sequence, move: Move) -> List:
    "Applies a 2-opt or 3-opt move, dispatching on ``move.k``."
    if move.k is None:
        return apply_two_opt(tour, move.i, move.j)
    return apply_three_opt(tour, move.i, move.j, move.k)


# --------------- Anchor scans (array based) ------------------

def _lengths(p, q):
    "Row-wise Euclidean lengths between broadcastable (..., 2) arrays."
    dx = q[..., 0] - p[..., 0]
    dy = q[..., 1] - p[..., 1]
    return np.sqrt(dx * dx + dy * dy)


def two_opt_scan(coords: np.ndarray, i: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Deltas of all 2-opt moves anchored at ``i`` with partners ``j = i+2 .. n-1``.

    The adjacent partner ``j = i+1`` is skipped, its delta is always zero.

    :param coords: (n, 2) array of the tour's coordinates, in tour order.
    :type coords: np.ndarray
    :param i: Anchor index, ``0 <= i <= n - 2``.
    :type i: int

    :return: Partner indices and their deltas, both possibly empty.
    :rtype: Tuple[np.ndarray, np.ndarray]
    """
    n = len(coords)
    partners = np.arange(i + 2, n)
    if len(partners) == 0:
        return partners, np.empty(0)

    a, b = coords[i], coords[i + 1]
    c, d = coords[partners], coords[(partners + 1) % n]
    deltas = - _lengths(a, b) - _lengths(c, d) + _lengths(b, d) + _lengths(a, c)
    return partners, deltas


def three_opt_scan(coords: np.ndarray, i: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Deltas of all 3-opt moves anchored at ``i``.

    Rows run over ``j = i+1 .. n-3``, columns over ``k = i+2 .. n-2``. Cells
    with ``k <= j`` are not moves and hold ``inf``, so the row-major
    ``argmin`` picks the first best pair in (j, k) loop order.

    :return: Row indices j, column indices k, and the (len(j), len(k)) delta matrix.
    :rtype: Tuple[np.ndarray, np.ndarray, np.ndarray]
    """
    n = len(coords)
    js = np.arange(i + 1, n - 2)
    ks = np.arange(i + 2, n - 1)
    if len(js) == 0:
        return js, ks, np.empty((0, len(ks)))

    a, b = coords[i], coords[i + 1]
    deltas = (
        _lengths(a, coords[js])[:, None]
        + _lengths(b, coords[ks])[None, :]
        + _lengths(coords[js + 1][:, None, :], coords[ks + 1][None, :, :])
        - _lengths(a, b)
        - _lengths(coords[js], coords[js + 1])[:, None]
        - _lengths(coords[ks], coords[ks + 1])[None, :]
    )
    deltas[ks[None, :] <= js[:, None]] = np.inf
    return js, ks, deltas


def reverse_segment(array: np.ndarray, start: int, stop: int) -> None:
    "Reverses ``array[start:stop + 1]`` in place."
    array[start:stop + 1] = array[start:stop + 1][::-1].copy()


def cycle_length(coords: np.ndarray) -> float:
    "Closed-cycle length of an (n, 2) coordinate array."
    if len(coords) == 0:
        return 0.0
    return float(np.sum(_lengths(coords, np.roll(coords, -1, axis=0))))
