from stepstar.search.astar_engine import UNDEFINED_COST, AStarSearch, SearchUsageError
from stepstar.search.node_arena import NodeBudgetExceededError
from stepstar.search.search_config import AStarConfig
from stepstar.search.search_node import NodeSnapshot
from stepstar.search.search_status import SearchStatus
from stepstar.search.stepwise_astar import SearchResult, StepwiseAStar
from stepstar.search_state.search_state import SearchState, SuccessorEnumerationError
from stepstar.utils.documentation import internal_only, is_internal_only
from stepstar.utils.logging import log

from . import examples, search
