from .accept import CoolingSchedule, always_accept, metropolis_acceptance
from .initial_tour import nearest_neighbor_tour
from .iterator import Iterator
from .moves import (
    InvalidMoveError,
    Move,
    apply_three_opt,
    apply_two_opt,
    three_opt_delta,
    two_opt_delta,
)
from .optimization import (
    Optimizer,
    SearchResult,
    SearchStatus,
    run_annealing,
    run_three_opt,
    run_two_opt,
)
from .proposal import EdgeCaseError, random_two_opt_move
from .state import State
