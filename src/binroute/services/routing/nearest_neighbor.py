"""Greedy nearest-neighbour ordering with a priority override."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import Bin
from .base import RouteOrderingStrategy
from .models import RouteOrder


class NearestNeighborStrategy(RouteOrderingStrategy):
    """Visit priority bins before regular ones, nearest first within a tier."""

    def order_route(self, start_location: str, bins: Sequence[Bin]) -> RouteOrder:
        if not bins:
            return RouteOrder(ordered_locations=[start_location], total_distance=0)
        return self.walk(start_location, self.visiting_sequence(start_location, bins))

    def visiting_sequence(self, start_location: str, bins: Sequence[Bin]) -> list[Bin]:
        remaining = list(bins)
        sequence: list[Bin] = []
        current = start_location
        while remaining:
            # Sorted in place each step: ties keep the previous step's order.
            remaining.sort(
                key=lambda b: (not self.is_priority(b), self.distance_provider.distance(current, b.location_name))
            )
            chosen = remaining.pop(0)
            sequence.append(chosen)
            current = chosen.location_name
        return sequence
