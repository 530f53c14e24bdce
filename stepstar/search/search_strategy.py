from abc import ABC, abstractmethod
from typing import Iterator

from typing_extensions import TypeVar

from stepstar.search_state.search_state import SearchState

S = TypeVar("S", bound=SearchState)


class SearchStrategy(ABC):
    """
    A way of finding a path of states from a start state to a goal state.
    """

    @abstractmethod
    def search(self, start: S, goal: S) -> Iterator[S]:
        """Perform a search from the start state to the goal state.

        Args:
            start (SearchState): The state to search from.
            goal (SearchState): The goal the search should reach.

        Returns:
            Iterator: An iterator over the states of the solution path, from start
            to goal. Empty if no solution was found.
        """
