from abc import ABC, abstractmethod
from typing import Hashable, Iterable, Optional

from typing_extensions import Self


class SuccessorEnumerationError(Exception):
    """
    Raised by a state that cannot finish enumerating its successors, e.g., because
    it ran out of some resource while building them. The engine treats this as
    resource exhaustion and fails the search.
    """


class SearchState(ABC):
    """
    The capability contract a state must satisfy to be searched by ``AStarSearch``.

    States are treated as immutable values: the engine stores them in its nodes and
    hands them back through its accessors, but never modifies them.

    The heuristic returned by ``estimate_remaining_cost`` must be admissible (never
    overestimate the true remaining cost) for the returned solution to be optimal.
    This is not checked at runtime; a non-admissible heuristic silently produces a
    possibly suboptimal solution.
    """

    @abstractmethod
    def estimate_remaining_cost(self, goal: Self) -> float:
        """
        Non-negative estimate of the cost of reaching ``goal`` from this state.
        """

    @abstractmethod
    def is_goal(self, goal: Self) -> bool:
        """
        Return True iff this state satisfies the goal.
        """

    @abstractmethod
    def is_same_state(self, other: Self) -> bool:
        """
        Return True iff this state and ``other`` should be treated as the same
        state for duplicate detection. Two states that are the same must agree on
        whether they are goals.
        """

    @abstractmethod
    def step_cost(self, successor: Self) -> float:
        """
        Non-negative cost of the edge from this state to ``successor``.
        """

    @abstractmethod
    def successors(self, parent: Optional[Self]) -> Iterable[Self]:
        """
        The states reachable from this one in a single edge.

        :param parent: The state this one was reached from, or None for the start
            state. Implementations may use it to avoid emitting the parent again.
        :raises SuccessorEnumerationError: If the successors cannot be produced.
        """

    @abstractmethod
    def state_key(self) -> Hashable:
        """
        Hashable key used to find duplicates of this state. States that are the
        same under ``is_same_state`` must have equal keys; the engine confirms every
        key match with ``is_same_state``.
        """
