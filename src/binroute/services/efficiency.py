"""Savings estimates for a set of optimised routes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Sequence

from ..config import settings


class RouteTotals(Protocol):
    @property
    def bin_sensor_ids(self) -> Sequence[str]: ...

    total_distance: float
    estimated_time_min: float


@dataclass(slots=True)
class EfficiencyReport:
    time_saved: float
    distance_saved: float
    fuel_saved: float


def estimate_efficiency(
    routes: Sequence[RouteTotals],
    original_routes: Sequence[Any] | None = None,
    *,
    km_per_bin: float | None = None,
    minutes_per_km: float | None = None,
    fuel_litres_per_km: float | None = None,
) -> EfficiencyReport:
    """Compare optimised routes against an unoptimised baseline.

    Without ``original_routes`` the baseline assumes ``km_per_bin`` for every
    covered bin. When a baseline is passed the result is all zeros: the
    baseline values are not read.
    """
    if original_routes is not None:
        return EfficiencyReport(time_saved=0, distance_saved=0, fuel_saved=0)

    km_per_bin = settings.baseline_km_per_bin if km_per_bin is None else km_per_bin
    minutes_per_km = settings.minutes_per_km if minutes_per_km is None else minutes_per_km
    fuel_litres_per_km = settings.fuel_litres_per_km if fuel_litres_per_km is None else fuel_litres_per_km

    total_bins = sum(len(route.bin_sensor_ids) for route in routes)
    baseline_distance = total_bins * km_per_bin
    baseline_time = baseline_distance * minutes_per_km

    optimized_distance = sum(route.total_distance for route in routes)
    optimized_time = sum(route.estimated_time_min for route in routes)

    distance_delta = baseline_distance - optimized_distance
    return EfficiencyReport(
        time_saved=max(0, baseline_time - optimized_time),
        distance_saved=max(0, distance_delta),
        fuel_saved=max(0, distance_delta * fuel_litres_per_km),
    )
