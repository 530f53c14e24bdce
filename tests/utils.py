import heapq
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import stepstar as ss


class WeightedGraph:
    """
    A small directed graph for tests, with an optional heuristic table.

    :param edges: ``(source, destination, cost)`` triples.
    :param heuristic: Estimated cost to the goal for each node, 0 if missing.
    :param fail_after: Nodes whose successor enumeration raises after emitting
        every successor.
    """

    def __init__(self, edges, heuristic=None, fail_after=(), error=None):
        self.adjacency: Dict[str, List[Tuple[str, float]]] = {}
        for source, destination, cost in edges:
            self.adjacency.setdefault(source, []).append((destination, cost))
            self.adjacency.setdefault(destination, [])
        self.heuristic = dict(heuristic or {})
        self.fail_after = set(fail_after)
        self.error = error or ss.SuccessorEnumerationError
        self.enumerations = 0

    def state(self, name):
        return GraphState(name, self)

    def cost(self, source, destination):
        costs = [c for d, c in self.adjacency[source] if d == destination]
        return min(costs)


@dataclass(frozen=True)
class GraphState(ss.SearchState):
    name: str
    graph: WeightedGraph = field(compare=False, hash=False, repr=False)

    def estimate_remaining_cost(self, goal):
        return self.graph.heuristic.get(self.name, 0)

    def is_goal(self, goal):
        return self.name == goal.name

    def is_same_state(self, other):
        return self.name == other.name

    def state_key(self):
        return self.name

    def step_cost(self, successor):
        return self.graph.cost(self.name, successor.name)

    def successors(self, parent):
        self.graph.enumerations += 1
        for destination, _ in self.graph.adjacency.get(self.name, []):
            yield GraphState(destination, self.graph)
        if self.name in self.graph.fail_after:
            raise self.graph.error(f"ran out of room expanding {self.name}")

    def __str__(self):
        return self.name


def shortest_path_cost(graph: WeightedGraph, start, goal) -> Optional[float]:
    """
    Reference Dijkstra, returning None if the goal is unreachable.
    """
    distances = {start: 0}
    fringe = [(0, start)]
    while fringe:
        distance, node = heapq.heappop(fringe)
        if node == goal:
            return distance
        if distance > distances[node]:
            continue
        for neighbor, cost in graph.adjacency.get(node, []):
            if neighbor not in distances or distance + cost < distances[neighbor]:
                distances[neighbor] = distance + cost
                heapq.heappush(fringe, (distance + cost, neighbor))
    return None


def path_cost(graph: WeightedGraph, names) -> float:
    return sum(graph.cost(a, b) for a, b in zip(names, names[1:]))


def search(graph: WeightedGraph, start, goal, **kwargs):
    engine = ss.AStarSearch(**kwargs)
    engine.initialize(graph.state(start), graph.state(goal))
    return engine


def names(states):
    return [state.name for state in states]


def live_nodes(engine) -> int:
    """
    Number of nodes the engine should be holding, computed from its public view.
    """
    if engine.status is ss.SearchStatus.SEARCHING:
        # the goal node is held apart from the frontier and expanded set
        return engine.frontier_size + engine.expanded_size + 1
    if engine.status is ss.SearchStatus.SUCCEEDED:
        path = engine.solution_path()
        if not path:
            return 0
        # the start and goal nodes are distinct even when the path is trivial
        return max(len(path), 2)
    return 0
