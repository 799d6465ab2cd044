import enum
import logging
import random
import time
from dataclasses import dataclass, field
from functools import partial
from typing import Iterator as TypingIterator, List, Optional, Tuple

import numpy as np
from tqdm import tqdm

from ..config import AnnealingConfig, ThreeOptConfig, TwoOptConfig
from ..tour import total_length
from .accept import CoolingSchedule, metropolis_acceptance
from .iterator import Iterator
from .moves import cycle_length, reverse_segment, three_opt_scan, two_opt_scan
from .proposal import random_two_opt_move
from .state import State


logger = logging.getLogger(__name__)


class SearchStatus(enum.Enum):
    IMPROVING = "improving"
    CONVERGED = "converged"
    BUDGET_EXHAUSTED = "budget_exhausted"
    COMPLETED = "completed"   # fixed-length walks


@dataclass
class SearchResult:
    "Outcome of one improvement stage."

    tour: list
    length: float
    status: SearchStatus
    sweeps: int = 0
    comparisons: int = 0
    moves: int = 0
    max_drift: float = 0.0
    history: List[Tuple[str, float]] = field(default_factory=list)


class Optimizer:
    """
    Optimizer runs the improvement stages on a tour. An instance encapsulates
    the initial state and the statistics of the most recent run:
        * the 2-opt local search (best move per anchor, sweeps until no move),
        * the 3-opt local search with the same sweep structure,
        * simulated annealing over random 2-opt moves.

    Every stage is a generator of states. Both during and after a run, the
    properties `best_state` and `best_score` hold the shortest tour observed,
    and `status` tells why the run stopped. They are reset each time a run is
    started; the initial state itself is never modified.
    """

    def __init__(self, initial_state: State):
        """
        :param initial_state: State holding the tour to improve.
        :type initial_state: State
        """
        self._initial_state = initial_state
        self._reset()

    def _reset(self):
        self._state = self._initial_state
        self._best_state = self._initial_state
        self._best_score = self._initial_state.value
        self.status = SearchStatus.IMPROVING
        self.sweeps = 0
        self.comparisons = 0
        self.moves = 0
        self.max_drift = 0.0
        self.trace = []
        self.schedule = None

    @property
    def state(self) -> State:
        "Current state of the most recent run."
        return self._state

    @property
    def best_state(self) -> State:
        """
        State object corresponding to the shortest tour observed over the current (or most
        recent) optimization run.

        :return: State object with the best score.
        :rtype: State
        """
        return self._best_state

    @property
    def best_score(self) -> float:
        """
        Length of the shortest tour observed over the current (or most recent) run.

        :return: Value of the best score.
        :rtype: float
        """
        return self._best_score

    def _is_improvement(self, new_score: float, old_score: float) -> bool:
        return new_score <= old_score

    def _record(self, state: State):
        self._state = state
        if self._is_improvement(state.value, self._best_score):
            self._best_state = state
            self._best_score = state.value

    def _reconcile(self, coords: np.ndarray, length: float) -> float:
        "Recomputes the length of the working tour and keeps the largest drift seen."
        exact = cycle_length(coords)
        self.max_drift = max(self.max_drift, abs(length - exact))
        return exact

    def result(self) -> SearchResult:
        "Summary of the most recent run, built from its final state."
        return SearchResult(
            tour=list(self._state.tour),
            length=self._state.value,
            status=self.status,
            sweeps=self.sweeps,
            comparisons=self.comparisons,
            moves=self.moves,
            max_drift=self.max_drift,
        )

    def _working_arrays(self):
        points = list(self._initial_state.tour)
        coords = np.asarray(points, dtype=float).reshape(-1, 2)
        order = np.arange(len(points))
        return points, coords, order

    def two_opt(
        self,
        threshold: float = 1e-6,
        max_iterations: float = 1_000_000,
        time_budget: Optional[float] = None,
        with_progress_bar: bool = False,
    ) -> TypingIterator[State]:
        """
        Performs a 2-opt local search, yielding the state after every sweep.

        A sweep visits the anchors ``i = 0 .. n-2``. For each anchor every partner
        ``j = i+2 .. n-1`` is evaluated and the most negative delta is applied at
        once if it is below ``-threshold``, so later anchors see the updated tour.
        A sweep without moves ends the run as ``CONVERGED``.

        :param threshold: Smallest improvement accepted. Guards against float noise.
        :type threshold: float
        :param max_iterations: Budget of delta evaluations. Checked before each sweep.
        :type max_iterations: float
        :param time_budget: Wall-clock budget in seconds, checked between anchors.
        :type time_budget: float, optional
        :param with_progress_bar: Whether or not to draw tqdm progress bar. Defaults to False.
        :type with_progress_bar: bool, optional

        :return: State generator.
        :rtype: Generator[State]
        """
        if with_progress_bar:
            for state in tqdm(
                self.two_opt(threshold, max_iterations, time_budget, with_progress_bar=False),
                desc="2-opt",
                unit="sweep",
            ):
                yield state
            return

        self._reset()
        points, coords, order = self._working_arrays()
        n = len(points)
        length = self._initial_state.value
        deadline = None if time_budget is None else time.perf_counter() + time_budget

        improved = True
        while improved and self.comparisons < max_iterations:
            improved = False
            interrupted = False
            moves_before = self.moves

            for i in range(n - 1):
                if deadline is not None and time.perf_counter() >= deadline:
                    interrupted = True
                    break

                partners, deltas = two_opt_scan(coords, i)
                self.comparisons += len(partners)
                if len(partners) == 0:
                    continue

                best = int(np.argmin(deltas))
                if deltas[best] < -threshold:
                    j = int(partners[best])
                    reverse_segment(order, i + 1, j)
                    reverse_segment(coords, i + 1, j)
                    length += float(deltas[best])
                    self.moves += 1
                    improved = True

            self.sweeps += 1
            length = self._reconcile(coords, length)
            logger.debug(
                "2-opt sweep %d: %d moves, %d comparisons, length %.6f",
                self.sweeps, self.moves - moves_before, self.comparisons, length,
            )
            state = State.initial_state([points[p] for p in order], length=length)
            self._record(state)
            yield state

            if interrupted:
                self.status = SearchStatus.BUDGET_EXHAUSTED
                break
        else:
            self.status = SearchStatus.BUDGET_EXHAUSTED if improved else SearchStatus.CONVERGED

        logger.info(
            "2-opt %s after %d sweeps (%d moves, %d comparisons), length %.6f",
            self.status.value, self.sweeps, self.moves, self.comparisons, self._state.value,
        )

    def three_opt(
        self,
        threshold: float = 1e-12,
        max_iterations: float = 10_000_000_000,
        time_budget: Optional[float] = None,
        reconcile_every: Optional[int] = None,
        with_progress_bar: bool = False,
    ) -> TypingIterator[State]:
        """
        Performs a 3-opt local search, yielding the state after every sweep.

        Anchors run over ``i < n-3``; for each anchor every pair
        ``i < j < k <= n-2`` is evaluated and the best one applied at once if its
        delta is below ``-threshold``. Each sweep is O(n^3), so this stage is meant
        for modest tours that 2-opt has already improved.

        The tour length is carried forward by adding deltas. It is recomputed from
        scratch at the end of every sweep and, if ``reconcile_every`` is given,
        after that many applied moves; the largest difference is kept in
        ``max_drift``.

        :param threshold: Smallest improvement accepted.
        :type threshold: float
        :param max_iterations: Budget of delta evaluations. Checked before each sweep.
        :type max_iterations: float
        :param time_budget: Wall-clock budget in seconds, checked between anchors.
        :type time_budget: float, optional
        :param reconcile_every: Applied moves between full recomputations.
        :type reconcile_every: int, optional
        :param with_progress_bar: Whether or not to draw tqdm progress bar. Defaults to False.
        :type with_progress_bar: bool, optional

        :return: State generator.
        :rtype: Generator[State]
        """
        if with_progress_bar:
            for state in tqdm(
                self.three_opt(
                    threshold, max_iterations, time_budget, reconcile_every, with_progress_bar=False
                ),
                desc="3-opt",
                unit="sweep",
            ):
                yield state
            return

        self._reset()
        points, coords, order = self._working_arrays()
        n = len(points)
        length = self._initial_state.value
        deadline = None if time_budget is None else time.perf_counter() + time_budget

        improved = True
        while improved and self.comparisons < max_iterations:
            improved = False
            interrupted = False
            moves_before = self.moves

            for i in range(n - 3):
                if deadline is not None and time.perf_counter() >= deadline:
                    interrupted = True
                    break

                js, ks, deltas = three_opt_scan(coords, i)
                m = len(js)
                self.comparisons += m * (m + 1) // 2

                best = np.unravel_index(int(np.argmin(deltas)), deltas.shape)
                if deltas[best] < -threshold:
                    j, k = int(js[best[0]]), int(ks[best[1]])
                    reverse_segment(order, i + 1, j)
                    reverse_segment(order, j + 1, k)
                    reverse_segment(coords, i + 1, j)
                    reverse_segment(coords, j + 1, k)
                    length += float(deltas[best])
                    self.moves += 1
                    improved = True

                    if reconcile_every is not None and self.moves % reconcile_every == 0:
                        length = self._reconcile(coords, length)

            self.sweeps += 1
            length = self._reconcile(coords, length)
            logger.debug(
                "3-opt sweep %d: %d moves, %d comparisons, length %.6f, max drift %.3g",
                self.sweeps, self.moves - moves_before, self.comparisons, length, self.max_drift,
            )
            state = State.initial_state([points[p] for p in order], length=length)
            self._record(state)
            yield state

            if interrupted:
                self.status = SearchStatus.BUDGET_EXHAUSTED
                break
        else:
            self.status = SearchStatus.BUDGET_EXHAUSTED if improved else SearchStatus.CONVERGED

        logger.info(
            "3-opt %s after %d sweeps (%d moves, %d comparisons), length %.6f",
            self.status.value, self.sweeps, self.moves, self.comparisons, self._state.value,
        )

    def simulated_annealing(
        self,
        num_steps: int,
        initial_temperature: float,
        rng: Optional[random.Random] = None,
        with_progress_bar: bool = False,
    ) -> TypingIterator[State]:
        """
        Performs simulated annealing over random 2-opt moves.

        Runs exactly ``num_steps`` steps regardless of progress. Each step proposes
        a uniformly random 2-opt move and accepts it by the Metropolis rule of
        :func:`metropolis_acceptance`; the temperature cools after every step. The
        final state is the current tour, not the best one seen, which stays
        available as `best_state`. The length of the tour after every accepted
        move, recomputed from its points, is kept in `trace`.

        :param num_steps: Number of steps to run for.
        :type num_steps: int
        :param initial_temperature: Starting temperature of the cooling schedule.
        :type initial_temperature: float
        :param rng: Single source of randomness for both index sampling and
            acceptance draws. A fixed seed reproduces the run.
        :type rng: random.Random, optional
        :param with_progress_bar: Whether or not to draw tqdm progress bar. Defaults to False.
        :type with_progress_bar: bool, optional

        :return: State generator.
        :rtype: Generator[State]
        """
        self._reset()
        rng = rng if rng is not None else random.Random()
        schedule = CoolingSchedule(initial_temperature, num_steps)
        self.schedule = schedule

        if len(self._initial_state) < 2:
            # no index pair exists; every step would be a no-op
            logger.debug("annealing skipped, tour has %d points", len(self._initial_state))
            self.status = SearchStatus.COMPLETED
            return

        iteration = Iterator(
            partial(random_two_opt_move, rng=rng),
            metropolis_acceptance(schedule, rng),
            self._initial_state,
            num_steps,
        )
        iteration_generator = iteration.with_progress_bar() if with_progress_bar else iteration

        for state in iteration_generator:
            if state is not self._state:
                self.moves += 1
                self.trace.append(total_length(state.tour))
            self._record(state)
            yield state

        drift = self._state.reconcile()
        self.max_drift = abs(drift)
        if self._best_state is self._state:
            self._best_score = self._state.value
        self.comparisons = iteration.counter
        self.status = SearchStatus.COMPLETED
        logger.info(
            "annealing completed %d steps (%d accepted), length %.6f, final temperature %.3g",
            iteration.counter, self.moves, self._state.value, schedule.temperature,
        )


# --------------- Stage runners ------------------

def run_two_opt(tour, config: Optional[TwoOptConfig] = None) -> SearchResult:
    "Runs a 2-opt stage to completion on a tour."
    config = config if config is not None else TwoOptConfig()
    optimizer = Optimizer(State.initial_state(tour))
    for _ in optimizer.two_opt(
        config.threshold, config.max_iterations, config.time_budget, config.progress
    ):
        pass
    return optimizer.result()


def run_three_opt(tour, config: Optional[ThreeOptConfig] = None) -> SearchResult:
    "Runs a 3-opt stage to completion on a tour."
    config = config if config is not None else ThreeOptConfig()
    optimizer = Optimizer(State.initial_state(tour))
    for _ in optimizer.three_opt(
        config.threshold,
        config.max_iterations,
        config.time_budget,
        config.reconcile_every,
        config.progress,
    ):
        pass
    return optimizer.result()


def run_annealing(
    tour, config: Optional[AnnealingConfig] = None, rng: Optional[random.Random] = None
) -> SearchResult:
    """
    Runs a simulated annealing stage to completion on a tour.

    ``rng`` takes precedence over ``config.seed``.
    """
    config = config if config is not None else AnnealingConfig()
    if rng is None:
        rng = random.Random(config.seed)
    optimizer = Optimizer(State.initial_state(tour))
    for _ in optimizer.simulated_annealing(
        config.iterations, config.initial_temperature, rng, config.progress
    ):
        pass
    return optimizer.result()
