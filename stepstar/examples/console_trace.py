"""
Console demonstration of a stepwise A* search over the Romania road map.

Prints the frontier and expanded lists after every step, then the solution.

Usage:
    python -m stepstar.examples.console_trace [--start CITY] [--goal CITY]
        [--searches N] [--costs] [--quiet]
"""

import argparse
from typing import Callable, List, Optional

from stepstar.examples.city_state import CityState
from stepstar.examples.road_map import RoadMap, romania_road_map
from stepstar.search.astar_engine import UNDEFINED_COST, AStarSearch
from stepstar.search.search_config import AStarConfig
from stepstar.search.search_node import NodeSnapshot
from stepstar.search.search_status import SearchStatus
from stepstar.search.stepwise_astar import SearchResult
from stepstar.utils.logging import log

SEPARATOR = "-" * 45


class ConsoleTrace:
    """
    Renders the progress of an ``AStarSearch`` as text.

    :param out: Function each line of output is passed to.
    :param show_costs: Whether to print the ``f``, ``g`` and ``h`` of listed nodes.
    :param quiet: Whether to skip the per-step frontier and expanded listings.
    """

    def __init__(
        self,
        out: Callable[[str], None] = log,
        show_costs: bool = False,
        quiet: bool = False,
    ):
        self.out = out
        self.show_costs = show_costs
        self.quiet = quiet

    def trace(
        self, start: CityState, goal: CityState, config: AStarConfig = AStarConfig()
    ) -> SearchResult[CityState]:
        """
        Search from ``start`` to ``goal``, rendering every step and the outcome. The
        solution is released before returning.
        """
        engine = AStarSearch(config)
        engine.initialize(start, goal)
        search_steps = 0
        status = SearchStatus.SEARCHING
        while status is SearchStatus.SEARCHING:
            search_steps += 1
            status = engine.step()
            if not self.quiet:
                self.render_step(engine, search_steps)

        if status is SearchStatus.SUCCEEDED:
            result = SearchResult(
                status,
                tuple(engine.solution_path()),
                engine.solution_cost(),
                engine.step_count,
            )
            self.render_solution(engine)
            engine.release_solution()
        else:
            result = SearchResult(
                status, (), UNDEFINED_COST, engine.step_count, engine.failure_reason
            )
            self.out("Search terminated. Did not find goal state")
            if engine.failure_reason is not None:
                self.out(f"Reason: {engine.failure_reason}")
        self.out(f"SearchSteps : {search_steps}")
        return result

    def render_step(self, engine: AStarSearch[CityState], step_number: int):
        if not engine.status.is_terminal:
            expanded = engine.expanded_snapshot()
            self.out(
                f"Step {step_number}: {expanded[-1].state} is selected for expansion"
            )
        else:
            self.out(f"Step {step_number}: search {engine.status.value}")
        self._render_list(
            "Open", engine.frontier_start, engine.frontier_next, engine.frontier_size
        )
        self._render_list(
            "Closed", engine.expanded_start, engine.expanded_next, engine.expanded_size
        )
        self.out(SEPARATOR)
        self.out("")

    def render_solution(self, engine: AStarSearch[CityState]):
        self.out("Search found the goal state.")
        self.out("")
        self.out("Displaying solution...")
        self.out("")
        cities = [str(engine.solution_start())]
        while (state := engine.solution_next()) is not None:
            cities.append(str(state))
        self.out(" -> ".join(cities))
        self.out("")
        self.out(f"Solution steps:  {len(cities) - 1}")
        self.out(f"Solution cost:  {engine.solution_cost():g}")

    def _render_list(
        self,
        name: str,
        first: Callable[[], Optional[NodeSnapshot]],
        following: Callable[[], Optional[NodeSnapshot]],
        size: int,
    ):
        self.out(f"{name} List:")
        entry = first()
        if entry is None:
            self.out("\tEmpty")
        while entry is not None:
            self.out(f"\t{self._describe(entry)}")
            entry = following()
        self.out(f"{name} list has {size} nodes")
        self.out("")

    def _describe(self, entry: NodeSnapshot) -> str:
        if not self.show_costs:
            return str(entry.state)
        return f"{entry.state} (f={entry.f:g}, g={entry.g:g}, h={entry.h:g})"


def run_demo(
    start: str = "Arad",
    goal: str = "Bucharest",
    searches: int = 1,
    *,
    road_map: Optional[RoadMap] = None,
    trace: Optional[ConsoleTrace] = None,
) -> List[SearchResult[CityState]]:
    """
    Run ``searches`` traced searches from ``start`` to ``goal``, each with a fresh
    engine.

    :param road_map: The map to search. Defaults to the Romania road map.
    :param trace: The renderer to use. Defaults to printing to the console.
    """
    assert searches > 0, "Cannot run 0 searches."
    road_map = road_map if road_map is not None else romania_road_map()
    trace = trace if trace is not None else ConsoleTrace()
    start_state = CityState.at(road_map, start)
    goal_state = CityState.at(road_map, goal)
    return [trace.trace(start_state, goal_state) for _ in range(searches)]


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description=__doc__.strip().split("\n")[0])
    parser.add_argument("--start", default="Arad", help="City to start from")
    parser.add_argument("--goal", default="Bucharest", help="City to reach")
    parser.add_argument("--searches", type=int, default=1, help="Number of searches")
    parser.add_argument(
        "--costs", action="store_true", help="Show f, g and h of listed nodes"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only show the solution of each search"
    )
    args = parser.parse_args(argv)
    results = run_demo(
        args.start,
        args.goal,
        args.searches,
        trace=ConsoleTrace(show_costs=args.costs, quiet=args.quiet),
    )
    return 0 if all(result.succeeded for result in results) else 1


if __name__ == "__main__":
    raise SystemExit(main())
