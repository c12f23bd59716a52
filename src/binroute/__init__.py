"""Route optimisation engine for waste-collection trucks."""

from .errors import AllocationError, ConfigurationError, RouteOptimizationError, StrategyContractError
from .models.domain import Bin, Coordinates, Truck, TruckStatus
from .services.distance import DistanceProvider, MutableDistanceSource, TableDistanceProvider
from .services.efficiency import EfficiencyReport, estimate_efficiency
from .services.routing import (
    NearestNeighborStrategy,
    OptimizerConstraints,
    OrToolsSequenceStrategy,
    Route,
    RouteOptimizer,
    RouteOrder,
    RouteOrderingStrategy,
    Stop,
    get_strategy,
)

__all__ = [
    "AllocationError",
    "Bin",
    "ConfigurationError",
    "Coordinates",
    "DistanceProvider",
    "EfficiencyReport",
    "MutableDistanceSource",
    "NearestNeighborStrategy",
    "OptimizerConstraints",
    "OrToolsSequenceStrategy",
    "Route",
    "RouteOptimizationError",
    "RouteOptimizer",
    "RouteOrder",
    "RouteOrderingStrategy",
    "Stop",
    "StrategyContractError",
    "TableDistanceProvider",
    "Truck",
    "TruckStatus",
    "estimate_efficiency",
    "get_strategy",
]
