from dataclasses import dataclass
from typing import Generic, Iterable, Optional, Tuple, TypeVar

from tqdm.auto import tqdm

from stepstar.search.astar_engine import UNDEFINED_COST, AStarSearch
from stepstar.search.search_config import AStarConfig
from stepstar.search.search_status import SearchStatus
from stepstar.search_state.search_state import SearchState

from .search_strategy import SearchStrategy

S = TypeVar("S", bound=SearchState)


@dataclass(frozen=True)
class SearchResult(Generic[S]):
    """
    Outcome of a search run to completion by ``StepwiseAStar``.

    :param status: Final status of the engine. ``SEARCHING`` means the step budget
        ran out before the search ended.
    :param path: States of the solution from start to goal, empty without a solution.
    :param cost: Cost of the solution, ``UNDEFINED_COST`` without a solution.
    :param steps: Number of steps the engine took.
    :param failure_reason: The resource exhaustion that failed the search, if any.
    """

    status: SearchStatus
    path: Tuple[S, ...]
    cost: float
    steps: int
    failure_reason: Optional[BaseException] = None

    @property
    def succeeded(self) -> bool:
        return self.status is SearchStatus.SUCCEEDED


class StepwiseAStar(SearchStrategy):
    """
    Runs an ``AStarSearch`` to completion, optionally under a step budget. The
    engine's nodes are all released before returning, so nothing outlives the call.

    :param max_steps: Maximum number of steps to take. If None, no limit is applied.
    :param config: Configuration for each engine.
    :param verbose: Whether to show a progress bar while searching.
    """

    def __init__(
        self,
        max_steps: Optional[int] = None,
        config: AStarConfig = AStarConfig(),
        verbose: bool = False,
    ):
        assert max_steps is None or max_steps > 0, "Cannot have a budget of 0 steps."
        self.max_steps = max_steps
        self.config = config
        self.verbose = verbose

    def search(self, start: S, goal: S) -> Iterable[S]:
        yield from self.solve(start, goal).path

    def solve(self, start: S, goal: S) -> SearchResult[S]:
        """
        Search from ``start`` to ``goal``, returning the outcome.
        """
        engine = AStarSearch(self.config)
        engine.initialize(start, goal)
        if self.verbose:
            pbar = tqdm(total=self.max_steps, leave=False)
        while engine.status is SearchStatus.SEARCHING:
            if self.max_steps is not None and engine.step_count >= self.max_steps:
                break
            engine.step()
            if self.verbose:
                pbar.set_description(
                    f"Step: {engine.step_count}, Frontier: {engine.frontier_size}, "
                    f"Expanded: {engine.expanded_size}"
                )
                pbar.update(1)
        if self.verbose:
            pbar.close()

        status, steps = engine.status, engine.step_count
        if status is SearchStatus.SUCCEEDED:
            result = SearchResult(
                status, tuple(engine.solution_path()), engine.solution_cost(), steps
            )
            engine.release_solution()
        else:
            engine.cancel_search()
            result = SearchResult(
                status, (), UNDEFINED_COST, steps, engine.failure_reason
            )
        assert engine.outstanding_nodes == 0, engine.outstanding_nodes
        return result
