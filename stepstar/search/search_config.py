from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AStarConfig:
    """
    Configuration for an ``AStarSearch``.

    :param max_nodes: Maximum number of nodes that may be allocated at once. Running
        out fails the search, as if memory had been exhausted. If None, no limit is
        applied.
    """

    max_nodes: Optional[int] = None

    def __post_init__(self):
        # the start and goal nodes are always allocated
        assert (
            self.max_nodes is None or self.max_nodes >= 2
        ), "Node budget must allow at least the start and goal nodes."
