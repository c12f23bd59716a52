"""Fuel-aware allocation helpers."""

from .service import (
    AllocationRecommendation,
    AllocationResult,
    AllocationSummary,
    FuelCheck,
    FuelPolicy,
    TruckAllocation,
    allocate_trucks,
    filter_trucks_by_fuel,
    fuel_required,
    max_route_distance,
    recommend_allocations,
    validate_truck_fuel,
)

__all__ = [
    "AllocationRecommendation",
    "AllocationResult",
    "AllocationSummary",
    "FuelCheck",
    "FuelPolicy",
    "TruckAllocation",
    "allocate_trucks",
    "filter_trucks_by_fuel",
    "fuel_required",
    "max_route_distance",
    "recommend_allocations",
    "validate_truck_fuel",
]
