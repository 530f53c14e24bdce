from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Tuple

from frozendict import frozendict


@dataclass(frozen=True)
class RoadMap:
    """
    An immutable directed road map with a straight-line distance table.

    :param cities: All the cities on the map, in a fixed order. Roads out of a city
        are listed in this order.
    :param distances: ``distances[a][b]`` is the length of the road from ``a`` to
        ``b``. Cities without a road between them have no entry.
    :param estimates: ``estimates[a]`` is the straight-line distance from ``a`` to
        ``heuristic_target``.
    :param heuristic_target: The city the estimates measure the distance to.
    """

    cities: Tuple[str, ...]
    distances: Mapping[str, Mapping[str, float]]  # actually frozendicts
    estimates: Mapping[str, float]
    heuristic_target: str

    @classmethod
    def from_roads(
        cls,
        cities: Iterable[str],
        roads: Iterable[Tuple[str, str, float]],
        estimates: Mapping[str, float],
        heuristic_target: str,
    ) -> "RoadMap":
        """
        Build a road map from a list of ``(source, destination, length)`` roads.
        Roads are one-way; list both directions for a two-way road.
        """
        cities = tuple(cities)
        order = {city: i for i, city in enumerate(cities)}
        outgoing: Dict[str, Dict[str, float]] = {city: {} for city in cities}
        for source, destination, length in roads:
            for city in (source, destination):
                if city not in order:
                    raise ValueError(f"Unknown city {city!r}")
            if length < 0:
                raise ValueError(
                    f"Road {source} -> {destination} has negative length {length}"
                )
            outgoing[source][destination] = float(length)
        for city in estimates:
            if city not in order:
                raise ValueError(f"Unknown city {city!r} in estimates")
        if heuristic_target not in order:
            raise ValueError(f"Unknown heuristic target {heuristic_target!r}")
        distances = frozendict(
            {
                city: frozendict(
                    sorted(outgoing[city].items(), key=lambda kv: order[kv[0]])
                )
                for city in cities
            }
        )
        return cls(
            cities,
            distances,
            frozendict({city: float(d) for city, d in estimates.items()}),
            heuristic_target,
        )

    def roads_from(self, city: str) -> Iterable[Tuple[str, float]]:
        """
        The ``(destination, length)`` roads leaving ``city``.
        """
        return self.distances[city].items()

    def distance(self, source: str, destination: str) -> float:
        if destination not in self.distances[source]:
            raise ValueError(f"No road from {source} to {destination}")
        return self.distances[source][destination]

    def estimate(self, city: str, goal: str) -> float:
        """
        Admissible estimate of the distance from ``city`` to ``goal``. The
        straight-line table only covers ``heuristic_target``; any other goal is
        estimated at 0.
        """
        if goal != self.heuristic_target:
            return 0.0
        return self.estimates.get(city, 0.0)


ROMANIA_CITIES = (
    "Arad",
    "Bucharest",
    "Craiova",
    "Drobeta",
    "Eforie",
    "Fagaras",
    "Giurgiu",
    "Hirsova",
    "Iasi",
    "Lugoj",
    "Mehadia",
    "Neamt",
    "Oradea",
    "Pitesti",
    "RimnicuVilcea",
    "Sibiu",
    "Timisoara",
    "Urziceni",
    "Vaslui",
    "Zerind",
)

# one-way; note Eforie -> Hirsova is shorter than Hirsova -> Eforie
ROMANIA_ROADS = (
    ("Arad", "Sibiu", 140),
    ("Arad", "Zerind", 75),
    ("Arad", "Timisoara", 118),
    ("Bucharest", "Giurgiu", 90),
    ("Bucharest", "Urziceni", 85),
    ("Bucharest", "Fagaras", 211),
    ("Bucharest", "Pitesti", 101),
    ("Craiova", "Drobeta", 120),
    ("Craiova", "RimnicuVilcea", 146),
    ("Craiova", "Pitesti", 138),
    ("Drobeta", "Craiova", 120),
    ("Drobeta", "Mehadia", 75),
    ("Eforie", "Hirsova", 75),
    ("Fagaras", "Bucharest", 211),
    ("Fagaras", "Sibiu", 99),
    ("Giurgiu", "Bucharest", 90),
    ("Hirsova", "Eforie", 86),
    ("Hirsova", "Urziceni", 98),
    ("Iasi", "Vaslui", 92),
    ("Iasi", "Neamt", 87),
    ("Lugoj", "Timisoara", 111),
    ("Lugoj", "Mehadia", 70),
    ("Mehadia", "Lugoj", 70),
    ("Mehadia", "Drobeta", 75),
    ("Neamt", "Iasi", 87),
    ("Oradea", "Zerind", 71),
    ("Oradea", "Sibiu", 151),
    ("Pitesti", "Bucharest", 101),
    ("Pitesti", "RimnicuVilcea", 97),
    ("Pitesti", "Craiova", 138),
    ("RimnicuVilcea", "Pitesti", 97),
    ("RimnicuVilcea", "Craiova", 146),
    ("RimnicuVilcea", "Sibiu", 80),
    ("Sibiu", "RimnicuVilcea", 80),
    ("Sibiu", "Fagaras", 99),
    ("Sibiu", "Oradea", 151),
    ("Sibiu", "Arad", 140),
    ("Timisoara", "Arad", 118),
    ("Timisoara", "Lugoj", 111),
    ("Urziceni", "Bucharest", 85),
    ("Urziceni", "Hirsova", 98),
    ("Urziceni", "Vaslui", 142),
    ("Vaslui", "Urziceni", 142),
    ("Vaslui", "Iasi", 92),
    ("Zerind", "Arad", 75),
    ("Zerind", "Oradea", 71),
)

ROMANIA_STRAIGHT_LINE_TO_BUCHAREST = frozendict(
    {
        "Arad": 366,
        "Bucharest": 0,
        "Craiova": 160,
        "Drobeta": 242,
        "Eforie": 161,
        "Fagaras": 176,
        "Giurgiu": 77,
        "Hirsova": 151,
        "Iasi": 226,
        "Lugoj": 244,
        "Mehadia": 241,
        "Neamt": 234,
        "Oradea": 380,
        "Pitesti": 100,
        "RimnicuVilcea": 193,
        "Sibiu": 253,
        "Timisoara": 329,
        "Urziceni": 80,
        "Vaslui": 199,
        "Zerind": 374,
    }
)


def romania_road_map() -> RoadMap:
    """
    The classic road map of Romania, with straight-line distances to Bucharest.
    """
    return RoadMap.from_roads(
        ROMANIA_CITIES,
        ROMANIA_ROADS,
        ROMANIA_STRAIGHT_LINE_TO_BUCHAREST,
        heuristic_target="Bucharest",
    )
