from .astar_engine import UNDEFINED_COST, AStarSearch, SearchUsageError
from .expanded_set import ExpandedSet
from .frontier import Frontier
from .node_arena import NodeArena, NodeBudgetExceededError
from .search_config import AStarConfig
from .search_node import NodeSnapshot, SearchNode
from .search_status import SearchStatus
from .search_strategy import SearchStrategy
from .stepwise_astar import SearchResult, StepwiseAStar
