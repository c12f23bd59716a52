"""Distance and coordinate lookups between named locations."""

from __future__ import annotations

import logging
import threading
from typing import Mapping, Optional, Protocol, runtime_checkable

from ..config import settings
from ..data import kilinochchi
from ..models.domain import Coordinates
from .geospatial import great_circle_km

logger = logging.getLogger(__name__)


@runtime_checkable
class DistanceProvider(Protocol):
    """Contract the ordering strategies and the optimizer depend on."""

    def distance(self, origin: str, destination: str) -> float: ...

    def coordinates_of(self, location_name: str) -> Optional[Coordinates]: ...

    def great_circle_distance(self, origin: Coordinates, destination: Coordinates) -> float: ...


@runtime_checkable
class MutableDistanceSource(Protocol):
    """Optional capability for providers whose distance table can be updated."""

    def set_distance(self, origin: str, destination: str, distance_km: float) -> None: ...


class TableDistanceProvider:
    """Symmetric distance table with a coordinate lookup and a haversine fallback.

    Pairs missing from the table in both directions resolve to
    ``default_distance_km``; lookups never raise.
    """

    def __init__(
        self,
        distance_table: Mapping[str, Mapping[str, float]] | None = None,
        coordinates: Mapping[str, Coordinates] | None = None,
        *,
        depot_name: str | None = None,
        default_distance_km: float | None = None,
    ) -> None:
        source_table = kilinochchi.DISTANCE_TABLE if distance_table is None else distance_table
        source_coordinates = kilinochchi.COORDINATES if coordinates is None else coordinates
        self._table: dict[str, dict[str, float]] = {
            origin: dict(row) for origin, row in source_table.items()
        }
        self._coordinates: dict[str, Coordinates] = dict(source_coordinates)
        self.depot_name = depot_name or settings.default_depot
        self.default_distance_km = (
            default_distance_km if default_distance_km is not None else settings.default_distance_km
        )
        self._lock = threading.Lock()

    def distance(self, origin: str, destination: str) -> float:
        row = self._table.get(origin)
        if row is not None and destination in row:
            return row[destination]
        reverse = self._table.get(destination)
        if reverse is not None and origin in reverse:
            return reverse[origin]
        return self.default_distance_km

    def set_distance(self, origin: str, destination: str, distance_km: float) -> None:
        with self._lock:
            self._table.setdefault(origin, {})[destination] = distance_km
            self._table.setdefault(destination, {})[origin] = distance_km

    def coordinates_of(self, location_name: str) -> Optional[Coordinates]:
        return self._coordinates.get(location_name)

    def great_circle_distance(self, origin: Coordinates, destination: Coordinates) -> float:
        return great_circle_km(origin, destination)

    def distance_from_coordinates(self, origin: Coordinates, location_name: str) -> float:
        """Distance from a raw coordinate to a named location.

        Falls back to the depot-to-location table distance when the location
        has no known coordinates.
        """
        target = self.coordinates_of(location_name)
        if target is None:
            logger.debug(f"No coordinates for '{location_name}', using distance from depot '{self.depot_name}'")
            return self.distance(self.depot_name, location_name)
        return self.great_circle_distance(origin, target)

    def closest_location_name(self, origin: Coordinates) -> str:
        closest: str | None = None
        closest_distance = float("inf")
        for name, coords in self._coordinates.items():
            candidate = self.great_circle_distance(origin, coords)
            if candidate < closest_distance:
                closest_distance = candidate
                closest = name
        return closest or self.depot_name

    @property
    def location_names(self) -> tuple[str, ...]:
        return tuple(self._coordinates)
