from typing import Iterable, List, Sequence

import numpy as np

from ..geometry import Point, as_points


def nearest_neighbor_tour(points: Iterable[Sequence[float]]) -> List[Point]:
    """
    Greedy tour: starts at the first point and repeatedly moves to the
    nearest point not yet visited. Ties go to the point that comes first in
    the input.

    The points live in a fixed coordinate array with a visited mask, so each
    step is one vectorized O(n) scan and nothing is removed from a list.

    :param points: (x, y) pairs in input order.
    :type points: Iterable

    :return: the tour, a permutation of the input points; empty for no input.
    :rtype: List[Point]
    """
    points = as_points(points)
    n = len(points)
    if n == 0:
        return []

    coords = np.asarray(points, dtype=float)
    visited = np.zeros(n, dtype=bool)

    current = 0
    visited[current] = True
    order = [current]

    for _ in range(n - 1):
        candidates = np.flatnonzero(~visited)
        dx = coords[candidates, 0] - coords[current, 0]
        dy = coords[candidates, 1] - coords[current, 1]
        # argmin returns the first minimum, i.e. the earliest input point
        current = int(candidates[np.argmin(np.sqrt(dx * dx + dy * dy))])
        visited[current] = True
        order.append(current)

    return [points[p] for p in order]
