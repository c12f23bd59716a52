"""Multi-truck route allocation for bins that need collection.

Allocation is greedy and runs in fixed phases per call:

1. keep bins above the collection threshold and trucks that are active;
2. split the bins into priority (full) and regular bins;
3. route priority bins, either all on a single truck together with every
   regular bin, or one dedicated bin per truck when several trucks are active;
4. hand the remaining trucks up to ``max_bins_per_truck`` of their closest
   regular bins;
5. insert any leftover regular bins into the route ending nearest to them and
   re-order that route from the depot.

The optimizer holds no state between calls apart from the distance provider
and the ordering strategy it was built with.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from ...config import settings
from ...data.location_repository import build_distance_provider
from ...errors import ConfigurationError, StrategyContractError
from ...models.domain import Bin, Truck
from ..distance import DistanceProvider, MutableDistanceSource
from ..efficiency import EfficiencyReport, RouteTotals, estimate_efficiency
from ..geospatial import round_half_up, round_half_up_2dp
from .base import validate_route_order
from .dispatcher import get_strategy
from .models import Route, RouteOrder, Stop

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class OptimizerConstraints:
    collection_threshold: float = settings.collection_threshold
    priority_threshold: float = settings.priority_threshold
    max_bins_per_truck: int = settings.max_bins_per_truck
    minutes_per_km: float = settings.minutes_per_km


class RouteOptimizer:
    """Assign active trucks to bins and order each truck's stops."""

    def __init__(
        self,
        distance_provider: DistanceProvider | None = None,
        strategy: Any | None = None,
        constraints: OptimizerConstraints | None = None,
    ) -> None:
        self.constraints = constraints or OptimizerConstraints()
        if distance_provider is None:
            distance_provider = build_distance_provider()
        self.distance_provider = distance_provider
        if strategy is None:
            strategy = get_strategy(
                settings.ordering_strategy,
                self.distance_provider,
                priority_threshold=self.constraints.priority_threshold,
            )
        self.set_strategy(strategy)

    # Public operations

    def set_strategy(self, strategy: Any) -> None:
        if not callable(getattr(strategy, "order_route", None)):
            raise StrategyContractError(
                f"Ordering strategy {type(strategy).__name__} does not provide order_route()."
            )
        self.strategy = strategy

    def update_distance(self, origin: str, destination: str, distance_km: float) -> None:
        if isinstance(self.distance_provider, MutableDistanceSource):
            self.distance_provider.set_distance(origin, destination, distance_km)
        else:
            logger.warning(
                f"Distance provider {type(self.distance_provider).__name__} is read-only; "
                f"ignoring update {origin!r} -> {destination!r}"
            )

    def optimize_single_route(self, start_location: str, bins: Sequence[Bin]) -> RouteOrder:
        return validate_route_order(self.strategy.order_route(start_location, list(bins)))

    def estimate_efficiency(
        self,
        routes: Sequence[RouteTotals],
        original_routes: Sequence[Any] | None = None,
    ) -> EfficiencyReport:
        return estimate_efficiency(routes, original_routes, minutes_per_km=self.constraints.minutes_per_km)

    def optimize_fleet(
        self,
        bins: Sequence[Bin],
        trucks: Sequence[Truck],
        depot_location: str | None = None,
        *,
        max_bins_per_truck: int | None = None,
    ) -> list[Route]:
        depot = depot_location or settings.default_depot
        capacity = self.constraints.max_bins_per_truck if max_bins_per_truck is None else max_bins_per_truck
        if capacity < 1:
            raise ConfigurationError(f"max_bins_per_truck must be at least 1, got {capacity}.")

        needing_collection = [b for b in bins if b.fill_level > self.constraints.collection_threshold]
        active_trucks = [truck for truck in trucks if truck.is_active]
        if not needing_collection or not active_trucks:
            logger.info(
                f"Nothing to plan: {len(needing_collection)} bins above "
                f"{self.constraints.collection_threshold:g}% and {len(active_trucks)} active trucks"
            )
            return []

        priority_bins = [b for b in needing_collection if self._is_priority(b)]
        regular_bins = [b for b in needing_collection if not self._is_priority(b)]
        routes: list[Route] = []

        if priority_bins:
            if len(active_trucks) == 1:
                routes.append(self._collect_everything(active_trucks[0], priority_bins, regular_bins, depot))
                regular_bins = []
            else:
                routes.extend(self._dedicate_priority_trucks(priority_bins, active_trucks, depot))

        if regular_bins:
            routed_truck_ids = {route.truck_id for route in routes}
            free_trucks = [truck for truck in active_trucks if truck.truck_id not in routed_truck_ids]
            regular_routes, regular_bins = self._fill_free_trucks(regular_bins, free_trucks, depot, capacity)
            routes.extend(regular_routes)

        if regular_bins:
            candidates = [route for route in routes if not route.priority_route] or routes
            self._backfill(regular_bins, candidates, depot)

        logger.info(
            f"Planned {len(routes)} routes for {len(needing_collection)} bins "
            f"({len(priority_bins)} priority) with {len(active_trucks)} active trucks"
        )
        return routes

    # Allocation phases

    def _collect_everything(
        self,
        truck: Truck,
        priority_bins: list[Bin],
        regular_bins: list[Bin],
        depot: str,
    ) -> Route:
        """Single active truck: one route over every priority bin, then every regular bin."""

        # The depot is the start here, not the truck's location.
        all_bins = priority_bins + regular_bins
        all_bins.sort(key=lambda b: (not self._is_priority(b), self.distance_provider.distance(depot, b.location_name)))
        logger.debug(f"Single truck {truck.plate} collects all {len(all_bins)} bins from {depot}")
        return self._build_route(truck, all_bins, depot, priority=True)

    def _dedicate_priority_trucks(self, priority_bins: list[Bin], trucks: list[Truck], depot: str) -> list[Route]:
        remaining = list(priority_bins)
        free = list(trucks)
        routes: list[Route] = []

        while remaining and free:
            best: tuple[int, int] | None = None
            best_distance = float("inf")
            for truck_index, truck in enumerate(free):
                truck_location = truck.location_or(depot)
                for bin_index, bin_ in enumerate(remaining):
                    candidate = self._pair_distance(truck_location, bin_.location_name)
                    if candidate < best_distance:
                        best_distance = candidate
                        best = (truck_index, bin_index)
            if best is None:
                break

            truck = free.pop(best[0])
            bin_ = remaining.pop(best[1])
            logger.debug(f"Priority bin {bin_.sensor_id} -> truck {truck.plate} ({best_distance:.2f} km)")
            routes.append(self._build_route(truck, [bin_], truck.location_or(depot), priority=True))

        for bin_ in remaining:
            route = self._nearest_route(routes, bin_, depot)
            if route is None:
                logger.warning(f"No route available for priority bin {bin_.sensor_id}")
                continue
            logger.debug(f"Leftover priority bin {bin_.sensor_id} joins truck {route.truck_plate}")
            self._insert_and_reorder(route, bin_, depot)
        return routes

    def _fill_free_trucks(
        self,
        regular_bins: list[Bin],
        trucks: list[Truck],
        depot: str,
        capacity: int,
    ) -> tuple[list[Route], list[Bin]]:
        pool = list(regular_bins)
        routes: list[Route] = []
        for truck in trucks:
            if not pool:
                break
            truck_location = truck.location_or(depot)
            pool.sort(key=lambda b: self._pair_distance(truck_location, b.location_name))
            taken, pool = pool[:capacity], pool[capacity:]
            logger.debug(f"Truck {truck.plate} takes {len(taken)} regular bins from {truck_location}")
            routes.append(self._build_route(truck, taken, truck_location, priority=False))
        return routes, pool

    def _backfill(self, leftover: list[Bin], candidates: list[Route], depot: str) -> None:
        for bin_ in leftover:
            route = self._nearest_route(candidates, bin_, depot)
            if route is None:
                logger.warning(f"No route available for bin {bin_.sensor_id}")
                continue
            logger.debug(f"Overflow bin {bin_.sensor_id} joins truck {route.truck_plate}")
            self._insert_and_reorder(route, bin_, depot)

    # Helpers

    def _is_priority(self, bin_: Bin) -> bool:
        return bin_.fill_level >= self.constraints.priority_threshold

    def _pair_distance(self, origin: str, destination: str) -> float:
        """Great-circle distance between named locations, table distance when either lacks coordinates."""

        origin_coords = self.distance_provider.coordinates_of(origin)
        destination_coords = self.distance_provider.coordinates_of(destination)
        if origin_coords is not None and destination_coords is not None:
            return self.distance_provider.great_circle_distance(origin_coords, destination_coords)
        return self.distance_provider.distance(origin, destination)

    def _nearest_route(self, routes: Sequence[Route], bin_: Bin, depot: str) -> Route | None:
        best: Route | None = None
        best_distance = float("inf")
        for route in routes:
            candidate = self._pair_distance(route.last_location or depot, bin_.location_name)
            if candidate < best_distance:
                best_distance = candidate
                best = route
        return best

    def _insert_and_reorder(self, route: Route, bin_: Bin, depot: str) -> None:
        route.bins.append(bin_)
        order = self.optimize_single_route(depot, route.bins)
        route.ordered_locations = order.ordered_locations
        route.stops = self._create_stops(order, route.bins)
        route.total_distance = round_half_up_2dp(order.total_distance)
        route.estimated_time_min = round_half_up(order.total_distance * self.constraints.minutes_per_km)

    def _build_route(self, truck: Truck, bins: list[Bin], start_location: str, *, priority: bool) -> Route:
        order = self.optimize_single_route(start_location, bins)
        return Route(
            truck_id=truck.truck_id,
            truck_plate=truck.plate,
            bins=list(bins),
            stops=self._create_stops(order, bins),
            total_distance=round_half_up_2dp(order.total_distance),
            estimated_time_min=round_half_up(order.total_distance * self.constraints.minutes_per_km),
            status="planned",
            priority_route=priority,
            ordered_locations=order.ordered_locations,
        )

    def _create_stops(self, order: RouteOrder, bins: Sequence[Bin]) -> list[Stop]:
        """One stop per distinct bin location, in visiting order, numbered from 1."""

        unique_locations = list(dict.fromkeys(order.ordered_locations))
        first_bin_at: dict[str, Bin] = {}
        for bin_ in bins:
            first_bin_at.setdefault(bin_.location_name, bin_)

        estimated_time = round_half_up(order.total_distance / len(unique_locations) * 10)
        stops: list[Stop] = []
        for location_name in unique_locations:
            bin_ = first_bin_at.get(location_name)
            if bin_ is None:
                continue
            stops.append(
                Stop(
                    sensor_id=bin_.sensor_id,
                    order=len(stops) + 1,
                    estimated_time=estimated_time,
                    location_name=location_name,
                    priority=self._is_priority(bin_),
                )
            )
        return stops
