"""
pipeline.py
=================

Overview
--------
Thin driver composing the stages: builds the nearest-neighbour tour and hands
it through a sequence of stage configurations, each stage seeing only the tour
returned by the previous one.

Typical runs:

.. code-block:: python

    refine(points, [TwoOptConfig(), ThreeOptConfig()])
    refine(points, [TwoOptConfig(), AnnealingConfig(seed=7), TwoOptConfig()])

Dependencies:
- logging
"""

import logging
import random
from typing import Iterable, Optional, Sequence

from .config import AnnealingConfig, ConfigError, ThreeOptConfig, TwoOptConfig
from .local_search.initial_tour import nearest_neighbor_tour
from .local_search.optimization import (
    SearchResult,
    SearchStatus,
    run_annealing,
    run_three_opt,
    run_two_opt,
)
from .tour import total_length


logger = logging.getLogger(__name__)


def _run_stage(tour, config, rng):
    if isinstance(config, TwoOptConfig):
        return "two_opt", run_two_opt(tour, config)
    if isinstance(config, ThreeOptConfig):
        return "three_opt", run_three_opt(tour, config)
    if isinstance(config, AnnealingConfig):
        return "annealing", run_annealing(tour, config, rng)
    raise ConfigError(f"Unknown stage configuration {config!r}.")


def refine(
    points: Iterable[Sequence[float]],
    stages: Sequence = (),
    rng: Optional[random.Random] = None,
) -> SearchResult:
    """
    Builds a tour over the points and improves it stage by stage.

    :param points: (x, y) pairs.
    :param stages: stage configurations, run in order.
    :param rng: shared randomness for annealing stages; if omitted each
        annealing stage seeds its own from ``AnnealingConfig.seed``.

    :return: result of the last stage, with ``history`` listing the length
        after construction and after every stage.
    :rtype: SearchResult

    :raises ConfigError: If a stage is not a known configuration.
    """
    tour = nearest_neighbor_tour(points)
    length = total_length(tour)
    logger.info("nearest neighbour tour over %d points, length %.6f", len(tour), length)

    result = SearchResult(tour=tour, length=length, status=SearchStatus.COMPLETED)
    history = [("nearest_neighbor", length)]

    for config in stages:
        name, result = _run_stage(result.tour, config, rng)
        history.append((name, result.length))
        logger.info("%s: %s, length %.6f", name, result.status.value, result.length)

    result.history = history
    return result
