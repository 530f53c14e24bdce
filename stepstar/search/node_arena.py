import itertools
from typing import Dict, Generic, Iterator, Optional, TypeVar

from stepstar.search.search_node import SearchNode

S = TypeVar("S")


class NodeBudgetExceededError(MemoryError):
    """
    Raised when allocating a node would exceed the arena's node budget.
    """


class NodeArena(Generic[S]):
    """
    Owns every ``SearchNode`` of a search, handing out stable integer handles.

    Keeps count of allocations and frees so that leaks can be detected: at every
    quiescent point of the search, ``outstanding`` equals the number of nodes the
    engine still holds.

    :param max_nodes: Maximum number of nodes that may be outstanding at once. If
        None, no limit is applied.
    """

    def __init__(self, max_nodes: Optional[int] = None):
        assert max_nodes is None or max_nodes > 0, "Cannot have a node budget of 0."
        self.max_nodes = max_nodes
        self._nodes: Dict[int, SearchNode[S]] = {}
        self._handles = itertools.count()
        self.allocated_count = 0
        self.freed_count = 0

    def allocate(self, state: S) -> SearchNode[S]:
        """
        Allocate a fresh node holding ``state``, with zeroed bookkeeping.

        :raises NodeBudgetExceededError: If the node budget is exhausted.
        """
        if self.max_nodes is not None and self.outstanding >= self.max_nodes:
            raise NodeBudgetExceededError(
                f"Cannot allocate more than {self.max_nodes} nodes"
            )
        node = SearchNode(next(self._handles), state)
        self._nodes[node.handle] = node
        self.allocated_count += 1
        return node

    def free(self, handle: int):
        """
        Release the node with the given handle. Each node must be freed exactly once.
        """
        if handle not in self._nodes:
            raise ValueError(f"Node {handle} is not allocated (double free?)")
        del self._nodes[handle]
        self.freed_count += 1

    def __getitem__(self, handle: int) -> SearchNode[S]:
        return self._nodes[handle]

    def __contains__(self, handle: int) -> bool:
        return handle in self._nodes

    def __iter__(self) -> Iterator[SearchNode[S]]:
        return iter(self._nodes.values())

    @property
    def outstanding(self) -> int:
        """
        Number of nodes allocated but not yet freed.
        """
        return self.allocated_count - self.freed_count
