import math

import pytest

from tour_refine.geometry import Point, distance
from tour_refine.tour import is_permutation, total_length, tour_to_graph


def test_total_length_of_small_tours():
    assert total_length([]) == 0.0
    assert total_length([Point(3.0, 4.0)]) == 0.0
    p0, p1 = Point(0.0, 0.0), Point(3.0, 4.0)
    assert total_length([p0, p1]) == 2 * distance(p0, p1)


def test_total_length_of_squares(unit_square, crossed_square):
    assert total_length(unit_square) == 4.0
    assert total_length(crossed_square) == pytest.approx(2 + 2 * math.sqrt(2))


def test_total_length_is_rotation_invariant(random_points):
    rotated = random_points[17:] + random_points[:17]
    assert total_length(rotated) == pytest.approx(total_length(random_points))


def test_is_permutation(unit_square, crossed_square):
    assert is_permutation(crossed_square, unit_square)
    assert not is_permutation(unit_square[:3], unit_square)
    assert not is_permutation(unit_square[:3] + [unit_square[0]], unit_square)


def test_is_permutation_counts_duplicates():
    points = [(0, 0), (0, 0), (1, 1)]
    assert is_permutation([(1, 1), (0, 0), (0, 0)], points)
    assert not is_permutation([(1, 1), (1, 1), (0, 0)], points)


def test_tour_to_graph_is_a_cycle(random_points):
    graph = tour_to_graph(random_points)

    assert graph.number_of_nodes() == len(random_points)
    assert graph.number_of_edges() == len(random_points)
    assert all(graph.out_degree(n) == 1 and graph.in_degree(n) == 1 for n in graph.nodes)
    assert graph.nodes[0]["position"] == tuple(random_points[0])

    edge_sum = sum(d for _, _, d in graph.edges(data="distance"))
    assert edge_sum == pytest.approx(total_length(random_points))


def test_tour_to_graph_of_empty_tour():
    assert tour_to_graph([]).number_of_nodes() == 0
