import random
from typing import Optional

from .moves import Move, two_opt_delta


class EdgeCaseError(Exception):
    "Raised when a move is requested from a tour that admits none."


def random_two_opt_move(state, rng: Optional[random.Random] = None) -> Move:
    """
    Proposes a uniformly random 2-opt move on the state's tour.

    Two distinct positions are sampled without replacement; the smaller one
    becomes ``i``, the larger one ``j``. The move carries its delta.

    :param state: current state of the walk.
    :param rng: source of randomness. Defaults to the ``random`` module.

    :raises EdgeCaseError: If the tour has fewer than two points.
    """
    rng = rng if rng is not None else random
    n = len(state.tour)
    if n < 2:
        raise EdgeCaseError(f"A 2-opt move needs two points, the tour has {n}.")

    i, j = sorted(rng.sample(range(n), 2))
    return Move(i, j, delta=two_opt_delta(state.tour, i, j))
