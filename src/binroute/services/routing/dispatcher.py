"""Factory for ordering strategies based on configuration."""

from __future__ import annotations

from typing import Any

from ...errors import ConfigurationError
from ..distance import DistanceProvider
from .base import RouteOrderingStrategy
from .nearest_neighbor import NearestNeighborStrategy
from .ortools_strategy import OrToolsSequenceStrategy


def get_strategy(method: str, distance_provider: DistanceProvider, **kwargs: Any) -> RouteOrderingStrategy:
    match method:
        case "nearest_neighbor":
            return NearestNeighborStrategy(distance_provider, priority_threshold=kwargs.get("priority_threshold"))
        case "ortools":
            solver_kwargs = {
                k: v
                for k, v in kwargs.items()
                if k
                in {
                    "priority_threshold",
                    "time_limit_seconds",
                    "first_solution_strategy",
                    "local_search_metaheuristic",
                }
            }
            return OrToolsSequenceStrategy(distance_provider, **solver_kwargs)
        case _:
            raise ConfigurationError(f"Unknown ordering strategy '{method}'.")
