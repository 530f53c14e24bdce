from .city_state import CityState
from .console_trace import ConsoleTrace, run_demo
from .road_map import RoadMap, romania_road_map
