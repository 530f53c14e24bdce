from dataclasses import dataclass, field
from typing import Iterable, Optional

from stepstar.examples.road_map import RoadMap
from stepstar.search_state.search_state import SearchState


@dataclass(frozen=True)
class CityState(SearchState):
    """
    A position on a ``RoadMap``. Two states are the same iff they name the same
    city.

    :param city: The city this state is at.
    :param road_map: The map the city is on. Not used for comparison or hashing.
    """

    city: str
    road_map: RoadMap = field(compare=False, hash=False, repr=False)

    @classmethod
    def at(cls, road_map: RoadMap, city: str) -> "CityState":
        if city not in road_map.distances:
            raise ValueError(f"Unknown city {city!r}")
        return cls(city, road_map)

    def estimate_remaining_cost(self, goal: "CityState") -> float:
        return self.road_map.estimate(self.city, goal.city)

    def is_goal(self, goal: "CityState") -> bool:
        return self.city == goal.city

    def is_same_state(self, other: "CityState") -> bool:
        return self.city == other.city

    def state_key(self) -> str:
        return self.city

    def step_cost(self, successor: "CityState") -> float:
        return self.road_map.distance(self.city, successor.city)

    def successors(self, parent: Optional["CityState"]) -> Iterable["CityState"]:
        for destination, _ in self.road_map.roads_from(self.city):
            yield CityState(destination, self.road_map)

    def __str__(self):
        return self.city
