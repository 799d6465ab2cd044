"""
geometry.py
=================

Overview
--------
Points of the plane and the Euclidean metric every other module measures
tours with.

Key Functions:
- Point: immutable (x, y) pair.
- distance: Euclidean distance between two points.
- as_points: converts any sequence of coordinate pairs into Points.

Dependencies:
- math
"""

import math
from collections import namedtuple
from typing import Iterable, List, Sequence


Point = namedtuple("Point", ["x", "y"])
Point.__doc__ = "An immutable pair of real coordinates."


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Euclidean distance ``sqrt(dx*dx + dy*dy)`` between two points.

    Squares of coordinates up to 1e6 stay far below the float64 range, so the
    plain formula is exact to the last ulp of the square root. The vectorized
    scans in :mod:`tour_refine.local_search.moves` evaluate the same expression
    in the same order.
    """
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    return math.sqrt(dx * dx + dy * dy)


def as_points(coordinates: Iterable[Sequence[float]]) -> List[Point]:
    "Converts (x, y) pairs, e.g. tuples, lists or rows of an (n, 2) array, into Points."
    return [Point(float(c[0]), float(c[1])) for c in coordinates]
