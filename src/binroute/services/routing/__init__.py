"""Route ordering strategies and the multi-truck optimizer."""

from .base import RouteOrderingStrategy, validate_route_order
from .dispatcher import get_strategy
from .models import Route, RouteOrder, Stop
from .nearest_neighbor import NearestNeighborStrategy
from .optimizer import OptimizerConstraints, RouteOptimizer
from .ortools_strategy import OrToolsSequenceStrategy

__all__ = [
    "NearestNeighborStrategy",
    "OptimizerConstraints",
    "OrToolsSequenceStrategy",
    "Route",
    "RouteOptimizer",
    "RouteOrder",
    "RouteOrderingStrategy",
    "Stop",
    "get_strategy",
    "validate_route_order",
]
