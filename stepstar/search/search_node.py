from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from stepstar.utils.documentation import internal_only

S = TypeVar("S")


@dataclass(eq=False)
class SearchNode(Generic[S]):
    """
    Represents one explored state in the A* search.

    Nodes are owned by a ``NodeArena`` and refer to each other by handle, never
    by reference.

    :param handle: Identity of this node within its arena.
    :param state: The user state this node represents.
    :param g: Accumulated cost from the start node.
    :param h: Heuristic estimate of the remaining cost to the goal.
    :param f: Total priority, always ``g + h``.
    :param parent: Handle of the node this one was reached from, None for the start.
    :param child: Handle of the next node on the solution path. Only set once a
        solution has been found, and only on nodes of that solution.
    """

    handle: int
    state: S
    g: float = 0.0
    h: float = 0.0
    f: float = 0.0
    parent: Optional[int] = None
    child: Optional[int] = None

    def set_costs(self, g: float, h: float):
        """
        Set ``g`` and ``h``, keeping ``f`` in sync.
        """
        self.g = g
        self.h = h
        self.f = g + h

    @internal_only
    def copy_bookkeeping_from(self, other: "SearchNode[S]"):
        """
        Take over the search bookkeeping of ``other`` (but not its state or handle).
        Used when a cheaper path to an already known state is found.
        """
        self.parent = other.parent
        self.set_costs(other.g, other.h)

    def snapshot(self) -> "NodeSnapshot[S]":
        return NodeSnapshot(self.state, self.f, self.g, self.h)


@dataclass(frozen=True)
class NodeSnapshot(Generic[S]):
    """
    Read-only view of a node's state and costs, for diagnostics.
    """

    state: S
    f: float
    g: float
    h: float
