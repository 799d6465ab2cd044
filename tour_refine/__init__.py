import logging

from .geometry import Point, as_points, distance
from .tour import is_permutation, total_length, tour_to_graph
from .config import AnnealingConfig, ConfigError, ThreeOptConfig, TwoOptConfig
from .local_search import (
    InvalidMoveError,
    Move,
    Optimizer,
    SearchResult,
    SearchStatus,
    State,
    apply_three_opt,
    apply_two_opt,
    nearest_neighbor_tour,
    run_annealing,
    run_three_opt,
    run_two_opt,
    three_opt_delta,
    two_opt_delta,
)
from .pipeline import refine

logging.getLogger(__name__).addHandler(logging.NullHandler())
