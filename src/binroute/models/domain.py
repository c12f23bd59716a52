"""Domain models for bins, trucks and coordinates."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TruckStatus(str, Enum):
    ACTIVE = "Active"
    IN_MAINTENANCE = "In Maintenance"
    INACTIVE = "Inactive"


@dataclass(frozen=True, slots=True)
class Coordinates:
    lat: float
    lng: float


@dataclass(frozen=True, slots=True)
class Bin:
    """A sensor-equipped bin as reported at optimisation time."""

    sensor_id: str
    location_name: str
    fill_level: float = 0.0


@dataclass(slots=True)
class Truck:
    """A collection truck with its current location snapshot and fuel state."""

    truck_id: str
    plate: str
    status: TruckStatus = TruckStatus.ACTIVE
    current_location: Optional[str] = None
    fuel_capacity: float = 100.0
    current_fuel_level: float = 100.0
    fuel_efficiency: float = 20.0  # km per litre

    @property
    def is_active(self) -> bool:
        return self.status == TruckStatus.ACTIVE

    def location_or(self, depot: str) -> str:
        return self.current_location or depot
