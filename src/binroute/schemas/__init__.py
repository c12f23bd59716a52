"""Records exchanged with collaborators."""

from .records import (
    BinRecord,
    EfficiencyRecord,
    RouteRecord,
    StopRecord,
    TruckRecord,
    bins_from_records,
    routes_to_records,
    trucks_from_records,
)

__all__ = [
    "BinRecord",
    "TruckRecord",
    "StopRecord",
    "RouteRecord",
    "EfficiencyRecord",
    "bins_from_records",
    "trucks_from_records",
    "routes_to_records",
]
