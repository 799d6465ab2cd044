from typing import Optional, Sequence

from ..tour import total_length
from .moves import Move, apply_move


class State:
    """
    A State instance represents a tour in a local search iteration.

    Attributes:
    tour: ordered list of points, a permutation of the input points.
    length: tracked tour length. Computed once for an initial state and then
        carried forward by adding move deltas; see :meth:`reconcile`.
    parent: the state this one was flipped from, kept for one step only.
    """

    __slots__ = (
                 "parent",
                 "tour",
                 "length",
                )

    def __init__(self,
                 tour: Optional[Sequence] = None,
                 parent: Optional["State"] = None,
                 move: Optional[Move] = None,
                 length: Optional[float] = None,
                 ):

        if parent is None:
            self._first_time(tour, length)
        else:
            self._from_parent(parent, move)

    @classmethod
    def initial_state(cls, tour: Sequence, length: Optional[float] = None) -> "State":
        "Creates a State from a tour, measuring it unless the length is given."
        return cls(tour=tour, length=length)

    def _first_time(self, tour, length):
        self.parent = None
        self.tour = list(tour) if tour is not None else []
        self.length = total_length(self.tour) if length is None else float(length)

    def _from_parent(self, parent: "State", move: Move):
        # Erase the parent of the parent, so a long walk holds two states at most
        parent.parent = None
        self.parent = parent
        self.tour = apply_move(parent.tour, move)
        self.length = parent.length + move.delta

    def flip(self, move: Move) -> "State":
        """
        Returns the new state obtained by applying a move.

        :param move: a 2-opt or 3-opt move carrying its delta.
        :returns: the new :class:`State`
        :rtype: State
        """
        return self.__class__(parent=self, move=move)

    def reconcile(self) -> float:
        """
        Replaces the tracked length by a full recomputation.

        :returns: the drift removed, tracked minus exact length.
        :rtype: float
        """
        exact = total_length(self.tour)
        drift = self.length - exact
        self.length = exact
        return drift

    @property
    def value(self) -> float:
        return self.length

    def __len__(self) -> int:
        return len(self.tour)

    def __repr__(self) -> str:
        return "<State [{} points, length {:.6f}]>".format(len(self), self.length)
