"""
This module provides the Iterator class, a fixed-length walk over tour states
driven by a proposal function and an acceptance function.

Key Components:

- Iterator: The main class used for creating and iterating over states.

Usage:
Create an instance of Iterator with a proposal function, an acceptance
function and an initial state, then iterate through it; every step yields the
current state, moved or not.

Dependencies:

- tqdm: optional progress bar.
"""

from typing import Callable

from .moves import Move
from .state import State


class Iterator:
    """
    An iterator over the states of a proposal/acceptance walk.

    Each step asks the proposal function for a :class:`Move` on the current
    state, hands it to the acceptance function and flips the state if the
    move is accepted. Exactly ``total_steps`` steps are taken.

    Example usage:

    .. code-block:: python

        walk = Iterator(proposal, accept, initial_state, total_steps)
        for state in walk:
            # Do whatever you want - print output, compute scores, ...
    """

    def __init__(
        self,
        proposal: Callable[[State], Move],
        accept: Callable[[Move], bool],
        initial_state: State,
        total_steps: int,
    ) -> None:
        """
        :param proposal: Function proposing a move from the current state.
        :type proposal: Callable
        :param accept: Function accepting or rejecting the proposed move. In the most basic
            use case, this always returns ``True``. A Metropolis rule is implemented in
            :func:`tour_refine.local_search.accept.metropolis_acceptance`.
        :type accept: Callable
        :param initial_state: State the walk starts from.
        :type initial_state: State
        :param total_steps: Number of steps to run.
        :type total_steps: int

        :returns: None
        """
        self.proposal = proposal
        self.accept = accept
        self.total_steps = total_steps
        self.initial_state = initial_state
        self.state = initial_state
        self.counter = 0
        self.accepted = 0

    def __iter__(self) -> "Iterator":
        """
        Resets the iterator to the initial state.

        :returns: Returns itself as an iterator object.
        :rtype: Iterator
        """
        self.counter = 0
        self.accepted = 0
        self.state = self.initial_state
        return self

    def __next__(self) -> State:
        """
        Takes one step and returns the current state.

        :raises StopIteration: If the total number of steps has been reached.
        """
        if self.counter >= self.total_steps:
            raise StopIteration

        move = self.proposal(self.state)
        if self.accept(move):
            self.state = self.state.flip(move)
            self.accepted += 1
        self.counter += 1
        return self.state

    def __len__(self) -> int:
        return self.total_steps

    def __repr__(self) -> str:
        return "<Iterator [{} steps]>".format(len(self))

    def with_progress_bar(self):
        """
        Wraps the walk in a tqdm progress bar.

        :returns: A tqdm-wrapped walk.
        """
        from tqdm.auto import tqdm

        return tqdm(self, total=len(self), desc="annealing")
