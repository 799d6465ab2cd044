from collections import Counter
from typing import Sequence

import networkx as nx

from .geometry import distance


def total_length(tour: Sequence) -> float:
    """
    Length of the closed cycle ``tour[0] -> tour[1] -> ... -> tour[-1] -> tour[0]``.

    :param tour: Ordered sequence of (x, y) points.
    :type tour: Sequence

    :return: Total length, 0 for an empty tour.
    :rtype: float
    """
    n = len(tour)
    if n == 0:
        return 0.0

    length = 0.0
    for i in range(n - 1):
        length += distance(tour[i], tour[i + 1])
    length += distance(tour[n - 1], tour[0])
    return length


def is_permutation(tour: Sequence, points: Sequence) -> bool:
    "True if the tour visits exactly the given points, each as often as it occurs."
    if len(tour) != len(points):
        return False
    return Counter(map(tuple, tour)) == Counter(map(tuple, points))


def tour_to_graph(tour: Sequence) -> nx.DiGraph:
    """
    Builds the directed cycle of a tour.

    Nodes are tour positions ``0..n-1`` with a ``position`` attribute, edges
    carry their ``distance``. Summing the edge distances gives
    :func:`total_length`.
    """
    cycle = nx.DiGraph()
    n = len(tour)
    for i, point in enumerate(tour):
        cycle.add_node(i, position=tuple(point))

    for i in range(n):
        # Use modulo to wrap around to the first node at the end
        j = (i + 1) % n
        cycle.add_edge(i, j, distance=distance(tour[i], tour[j]))
    return cycle
