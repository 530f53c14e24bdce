from typing import Dict, Hashable, Iterator, List, Optional


class ExpandedSet:
    """
    The closed set of the A* search: nodes that have been fully expanded, indexed
    by state key. Kept in the order the nodes were expanded.

    A node leaves the set again if a cheaper path to its state is found later.
    """

    def __init__(self):
        self._by_key: Dict[Hashable, int] = {}

    def add(self, handle: int, key: Hashable):
        assert key not in self._by_key, f"Duplicate state in expanded set: {key!r}"
        self._by_key[key] = handle

    def lookup(self, key: Hashable) -> Optional[int]:
        """
        Handle of the expanded node with the given state key, if any.
        """
        return self._by_key.get(key)

    def remove(self, key: Hashable) -> int:
        return self._by_key.pop(key)

    def drain(self) -> List[int]:
        """
        Empty the set, returning the handles it held.
        """
        handles = list(self._by_key.values())
        self._by_key.clear()
        return handles

    def __len__(self) -> int:
        return len(self._by_key)

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._by_key.values()))
