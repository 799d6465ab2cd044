import random

import pytest

from tour_refine.geometry import Point

random.seed(2025)


@pytest.fixture
def unit_square():
    return [Point(0.0, 0.0), Point(0.0, 1.0), Point(1.0, 1.0), Point(1.0, 0.0)]


@pytest.fixture
def crossed_square():
    return [Point(0.0, 0.0), Point(1.0, 1.0), Point(0.0, 1.0), Point(1.0, 0.0)]


@pytest.fixture
def random_points():
    rng = random.Random(2025)
    return [Point(rng.uniform(0, 1000), rng.uniform(0, 1000)) for _ in range(60)]


@pytest.fixture
def large_coordinates():
    rng = random.Random(7)
    return [Point(rng.uniform(-1e6, 1e6), rng.uniform(-1e6, 1e6)) for _ in range(40)]
