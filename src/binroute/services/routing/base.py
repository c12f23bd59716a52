"""Base classes for route ordering strategy implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from numbers import Real
from typing import Any, Sequence

from ...config import settings
from ...errors import StrategyContractError
from ...models.domain import Bin
from ..distance import DistanceProvider
from .models import RouteOrder


class RouteOrderingStrategy(ABC):
    """Contract for single-route ordering implementations."""

    def __init__(self, distance_provider: DistanceProvider, *, priority_threshold: float | None = None) -> None:
        self.distance_provider = distance_provider
        self.priority_threshold = (
            priority_threshold if priority_threshold is not None else settings.priority_threshold
        )

    @abstractmethod
    def order_route(self, start_location: str, bins: Sequence[Bin]) -> RouteOrder:
        raise NotImplementedError

    def is_priority(self, bin_: Bin) -> bool:
        return bin_.fill_level >= self.priority_threshold

    def walk(self, start_location: str, sequence: Sequence[Bin]) -> RouteOrder:
        """Turn a visiting sequence into locations and a total distance.

        A bin at the current location adds no entry to the order but its leg
        is still counted. The tour returns to the start once more than the
        start itself has been appended.
        """
        ordered = [start_location]
        current = start_location
        total = 0.0
        for bin_ in sequence:
            total += self.distance_provider.distance(current, bin_.location_name)
            if bin_.location_name != current:
                ordered.append(bin_.location_name)
            current = bin_.location_name

        if len(ordered) > 1:
            total += self.distance_provider.distance(current, start_location)
            ordered.append(start_location)
        return RouteOrder(ordered_locations=ordered, total_distance=total)


def validate_route_order(result: Any) -> RouteOrder:
    """Check a strategy result carries both an order and a distance."""

    if isinstance(result, RouteOrder):
        ordered, total = result.ordered_locations, result.total_distance
    elif isinstance(result, dict):
        ordered, total = result.get("ordered_locations"), result.get("total_distance")
    else:
        ordered = getattr(result, "ordered_locations", None)
        total = getattr(result, "total_distance", None)

    if not isinstance(ordered, (list, tuple)) or not ordered:
        raise StrategyContractError(f"Ordering strategy returned no location order: {result!r}")
    if isinstance(total, bool) or not isinstance(total, Real):
        raise StrategyContractError(f"Ordering strategy returned no numeric total distance: {result!r}")
    return RouteOrder(ordered_locations=list(ordered), total_distance=float(total))
