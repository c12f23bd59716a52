"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ...models.domain import Bin

ROUTE_STATUSES = ("planned", "dispatched", "in-progress", "completed")


@dataclass(slots=True)
class RouteOrder:
    """Visiting order produced by an ordering strategy."""

    ordered_locations: List[str]
    total_distance: float


@dataclass(slots=True)
class Stop:
    sensor_id: str
    order: int
    estimated_time: int
    location_name: str
    priority: bool = False


@dataclass(slots=True)
class Route:
    truck_id: str
    truck_plate: str
    bins: List[Bin]
    stops: List[Stop]
    total_distance: float
    estimated_time_min: int
    status: str = "planned"
    priority_route: bool = False
    ordered_locations: List[str] = field(default_factory=list)

    @property
    def bin_sensor_ids(self) -> list[str]:
        return [bin_.sensor_id for bin_ in self.bins]

    @property
    def last_location(self) -> str | None:
        return self.stops[-1].location_name if self.stops else None
