"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="BINROUTE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Bin Route Optimizer"
    default_depot: str = Field(
        default="Kilinochchi Town",
        description="Start and reference location used when a truck reports no current location.",
    )
    default_distance_km: float = Field(
        default=10.0,
        ge=0.0,
        description="Distance returned for location pairs missing from the distance table.",
    )
    collection_threshold: float = Field(default=70.0, ge=0.0, description="Bins above this fill level are collected.")
    priority_threshold: float = Field(default=100.0, ge=0.0, description="Bins at or above this fill level are priority.")
    max_bins_per_truck: int = Field(default=5, ge=1)
    minutes_per_km: float = Field(default=6.0, ge=0.0, description="6 min/km is an average speed of 10 km/h.")
    baseline_km_per_bin: float = Field(default=5.0, ge=0.0)
    fuel_litres_per_km: float = Field(default=0.08, ge=0.0, description="8 L per 100 km.")
    ordering_strategy: Literal["nearest_neighbor", "ortools"] = Field(
        default="nearest_neighbor",
        description="Algorithm used to order the stops of a single route.",
    )
    solver_first_solution_strategy: str = Field(default="PATH_CHEAPEST_ARC")
    solver_local_search_metaheuristic: str = Field(default="GUIDED_LOCAL_SEARCH")
    solver_time_limit_seconds: int = Field(
        default=1,
        ge=1,
        description="Guided local search only stops on this limit, so it must be positive.",
    )
    coordinates_file: Optional[Path] = Field(
        default=None,
        description="CSV or XLSX file with Location, Latitude and Longitude columns.",
    )
    distances_file: Optional[Path] = Field(
        default=None,
        description="CSV or XLSX file with From, To and DistanceKm columns.",
    )

    # Fuel-aware allocation
    fuel_check_max_bins: int = Field(default=10, ge=1)
    fuel_check_km_per_bin: float = Field(default=15.0, ge=0.0)
    fuel_check_trip_multiplier: float = Field(default=2.0, ge=1.0)
    allocation_bin_capacities: tuple[int, ...] = Field(
        default=(5, 10, 15),
        description="Per-truck capacities tried when recommending alternative allocations.",
    )

    @field_validator("coordinates_file", "distances_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Optional[Path]:
        if value is None or value == "":
            return None
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("allocation_bin_capacities", mode="before")
    @classmethod
    def _parse_int_tuple_from_env(cls, value: Any) -> tuple[int, ...]:
        """Parse integer tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(int(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(int(item) for item in parsed)
                if isinstance(parsed, int):
                    return (parsed,)
            except (json.JSONDecodeError, TypeError, ValueError):
                pass
            if "," in value:
                return tuple(int(item.strip()) for item in value.split(",") if item.strip())
            if value.strip():
                try:
                    return (int(value.strip()),)
                except ValueError:
                    return tuple()
        return tuple()


settings = Settings()
