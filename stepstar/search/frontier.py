import heapq
import itertools
from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterator, List, Optional

from stepstar.search.search_node import SearchNode


class Frontier:
    """
    The open set of the A* search: nodes that have been discovered but not yet
    expanded, ordered by ``f`` (lowest first).

    Nodes are also indexed by their state key so that duplicates can be found in
    constant time. Ties in ``f`` are broken by insertion order, which is an
    implementation detail and not something callers should rely on.
    """

    def __init__(self):
        self._heap: List[_FrontierEntry] = []
        self._by_handle: Dict[int, _FrontierEntry] = {}
        self._by_key: Dict[Hashable, int] = {}
        self._order = itertools.count()

    def push(self, node: SearchNode, key: Hashable):
        """
        Add a node to the frontier. No other frontier node may share its key.
        """
        assert key not in self._by_key, f"Duplicate state on frontier: {key!r}"
        entry = _FrontierEntry(node.f, next(self._order), node.handle, key)
        self._by_handle[node.handle] = entry
        self._by_key[key] = node.handle
        heapq.heappush(self._heap, entry)

    def pop(self) -> int:
        """
        Remove and return the handle of the node with the lowest ``f``.
        """
        entry = heapq.heappop(self._heap)
        del self._by_handle[entry.handle]
        del self._by_key[entry.key]
        return entry.handle

    def lookup(self, key: Hashable) -> Optional[int]:
        """
        Handle of the frontier node with the given state key, if any.
        """
        return self._by_key.get(key)

    def reprioritize(self, node: SearchNode):
        """
        Update the priority of a node already on the frontier after its ``f``
        changed, rebuilding the heap.
        """
        self._by_handle[node.handle].f = node.f
        heapq.heapify(self._heap)

    def drain(self) -> List[int]:
        """
        Empty the frontier, returning the handles it held.
        """
        handles = [entry.handle for entry in self._heap]
        self._heap.clear()
        self._by_handle.clear()
        self._by_key.clear()
        return handles

    def __contains__(self, handle: int) -> bool:
        return handle in self._by_handle

    def __len__(self) -> int:
        return len(self._heap)

    def __iter__(self) -> Iterator[int]:
        """
        Handles in heap order (the first one has the lowest ``f``, the rest are not
        sorted).
        """
        return (entry.handle for entry in self._heap)


@dataclass(order=True)
class _FrontierEntry:
    """
    Represents a node's position in the frontier heap.
    """

    f: float
    order: int
    handle: int = field(compare=False)
    key: Hashable = field(compare=False)
