"""Fuel-aware truck allocation on top of the route optimizer."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ...config import settings
from ...errors import AllocationError
from ...models.domain import Bin, Truck
from ..geospatial import round_half_up_2dp
from ..routing.optimizer import RouteOptimizer

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TruckAllocation:
    truck_id: str
    truck_plate: str
    bins: List[Bin]
    route: List[str]
    total_distance: float
    fuel_consumption: float
    estimated_time: int
    is_priority: bool


@dataclass(slots=True)
class AllocationSummary:
    total_distance: float
    total_fuel_consumption: float
    total_estimated_time: int
    average_distance_per_truck: float
    average_fuel_per_truck: float
    truck_utilization: int


@dataclass(slots=True)
class AllocationResult:
    routes: List[TruckAllocation]
    total_bins: int
    total_trucks: int
    efficiency: AllocationSummary


@dataclass(slots=True)
class AllocationRecommendation:
    name: str
    priority: str
    allocation: AllocationResult


@dataclass(slots=True)
class FuelCheck:
    valid: bool
    reason: Optional[str] = None
    current_fuel: Optional[float] = None
    required_fuel: Optional[float] = None
    fuel_efficiency: Optional[float] = None


@dataclass(slots=True)
class FuelPolicy:
    max_bins: int = settings.fuel_check_max_bins
    km_per_bin: float = settings.fuel_check_km_per_bin
    trip_multiplier: float = settings.fuel_check_trip_multiplier
    capacities: tuple[int, ...] = field(default_factory=lambda: tuple(settings.allocation_bin_capacities))


def max_route_distance(bin_count: int, policy: FuelPolicy | None = None) -> float:
    """Worst-case route length used to check a truck's fuel before allocation."""

    policy = policy or FuelPolicy()
    return min(bin_count, policy.max_bins) * policy.km_per_bin * policy.trip_multiplier


def fuel_required(distance_km: float, truck: Truck) -> float:
    """Litres needed to drive ``distance_km``; unbounded for a truck without a positive efficiency."""

    if truck.fuel_efficiency <= 0:
        return math.inf
    return distance_km / truck.fuel_efficiency


def filter_trucks_by_fuel(
    trucks: Sequence[Truck],
    bin_count: int,
    policy: FuelPolicy | None = None,
) -> list[Truck]:
    required_distance = max_route_distance(bin_count, policy)
    eligible = [truck for truck in trucks if truck.current_fuel_level >= fuel_required(required_distance, truck)]
    if len(eligible) < len(trucks):
        logger.info(
            f"{len(trucks) - len(eligible)} of {len(trucks)} trucks lack fuel for {required_distance:.1f} km"
        )
    return eligible


def summarize_allocation(routes: Sequence[TruckAllocation]) -> AllocationSummary:
    total_distance = sum(route.total_distance for route in routes)
    total_fuel = sum(route.fuel_consumption for route in routes)
    total_time = sum(route.estimated_time for route in routes)
    count = len(routes)
    return AllocationSummary(
        total_distance=round_half_up_2dp(total_distance),
        total_fuel_consumption=round_half_up_2dp(total_fuel),
        total_estimated_time=total_time,
        average_distance_per_truck=round_half_up_2dp(total_distance / count) if count else 0.0,
        average_fuel_per_truck=round_half_up_2dp(total_fuel / count) if count else 0.0,
        truck_utilization=count,
    )


def allocate_trucks(
    bins: Sequence[Bin],
    trucks: Sequence[Truck],
    *,
    depot_location: str | None = None,
    optimizer: RouteOptimizer | None = None,
    max_bins_per_truck: int | None = None,
    policy: FuelPolicy | None = None,
) -> AllocationResult:
    if not bins:
        raise AllocationError("Bins to allocate are required and cannot be empty.")

    active_trucks = [truck for truck in trucks if truck.is_active]
    if not active_trucks:
        raise AllocationError("No active trucks available for allocation.")

    eligible_trucks = filter_trucks_by_fuel(active_trucks, len(bins), policy)
    if not eligible_trucks:
        raise AllocationError("No trucks have sufficient fuel for the collection routes.")

    optimizer = optimizer or RouteOptimizer()
    routes = optimizer.optimize_fleet(
        bins,
        eligible_trucks,
        depot_location,
        max_bins_per_truck=max_bins_per_truck,
    )

    trucks_by_id = {truck.truck_id: truck for truck in eligible_trucks}
    bins_by_sensor = {bin_.sensor_id: bin_ for bin_ in bins}
    allocations: list[TruckAllocation] = []
    for route in routes:
        truck = trucks_by_id[route.truck_id]
        allocations.append(
            TruckAllocation(
                truck_id=route.truck_id,
                truck_plate=route.truck_plate,
                bins=[bins_by_sensor[stop.sensor_id] for stop in route.stops if stop.sensor_id in bins_by_sensor],
                route=[stop.location_name for stop in route.stops],
                total_distance=route.total_distance,
                fuel_consumption=round_half_up_2dp(fuel_required(route.total_distance, truck)),
                estimated_time=route.estimated_time_min,
                is_priority=route.priority_route,
            )
        )

    return AllocationResult(
        routes=allocations,
        total_bins=len(bins),
        total_trucks=len(allocations),
        efficiency=summarize_allocation(allocations),
    )


def recommend_allocations(
    bins: Sequence[Bin],
    trucks: Sequence[Truck],
    *,
    depot_location: str | None = None,
    optimizer: RouteOptimizer | None = None,
    policy: FuelPolicy | None = None,
) -> list[AllocationRecommendation]:
    """Base allocation plus one alternative per configured per-truck capacity, lowest fuel first.

    The base allocation must succeed; alternatives that fail are skipped.
    """
    policy = policy or FuelPolicy()
    optimizer = optimizer or RouteOptimizer()
    recommendations = [
        AllocationRecommendation(
            name="Optimal Fuel Efficiency",
            priority="fuel",
            allocation=allocate_trucks(
                bins, trucks, depot_location=depot_location, optimizer=optimizer, policy=policy
            ),
        )
    ]
    for capacity in policy.capacities:
        try:
            allocation = allocate_trucks(
                bins,
                trucks,
                depot_location=depot_location,
                optimizer=optimizer,
                max_bins_per_truck=capacity,
                policy=policy,
            )
        except AllocationError as e:
            logger.debug(f"Skipping capacity {capacity}: {e}")
            continue
        recommendations.append(
            AllocationRecommendation(name=f"Max {capacity} bins per truck", priority="capacity", allocation=allocation)
        )

    recommendations.sort(key=lambda item: item.allocation.efficiency.total_fuel_consumption)
    return recommendations


def validate_truck_fuel(truck: Truck, estimated_distance: float) -> FuelCheck:
    if not truck.is_active:
        return FuelCheck(valid=False, reason="Truck is not active")

    required_fuel = fuel_required(estimated_distance, truck)
    has_enough_fuel = truck.current_fuel_level >= required_fuel
    return FuelCheck(
        valid=has_enough_fuel,
        reason=None if has_enough_fuel else "Insufficient fuel for estimated route",
        current_fuel=truck.current_fuel_level,
        required_fuel=required_fuel if math.isinf(required_fuel) else round_half_up_2dp(required_fuel),
        fuel_efficiency=truck.fuel_efficiency,
    )
