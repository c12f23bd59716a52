"""Plain records exchanged with persistence and reporting collaborators.

Incoming records accept the camelCase keys used by the bin and truck stores;
outgoing records serialise with the same keys via ``model_dump(by_alias=True)``.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ..models.domain import Bin, Truck, TruckStatus
from ..services.efficiency import EfficiencyReport
from ..services.routing.models import Route, Stop


class BinRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    sensor_id: str = Field(..., alias="sensorId")
    location_name: str = Field(..., alias="locationName")
    fill_level: float = Field(0.0, alias="fillLevel", ge=0)

    def to_domain(self) -> Bin:
        return Bin(sensor_id=self.sensor_id, location_name=self.location_name, fill_level=self.fill_level)


class TruckRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    truck_id: str = Field(..., validation_alias=AliasChoices("truck_id", "_id", "id", "truckId"))
    plate: str
    status: TruckStatus = TruckStatus.ACTIVE
    current_location: Optional[str] = Field(None, alias="currentLocation")
    fuel_capacity: float = Field(100.0, alias="fuelCapacity", ge=0)
    current_fuel_level: float = Field(100.0, alias="currentFuelLevel", ge=0)
    fuel_efficiency: float = Field(20.0, alias="fuelEfficiency", gt=0)

    def to_domain(self) -> Truck:
        return Truck(
            truck_id=self.truck_id,
            plate=self.plate,
            status=self.status,
            current_location=self.current_location,
            fuel_capacity=self.fuel_capacity,
            current_fuel_level=self.current_fuel_level,
            fuel_efficiency=self.fuel_efficiency,
        )


class StopRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sensor_id: str = Field(..., alias="sensorId")
    order: int
    estimated_time: int = Field(..., alias="estimatedTime")
    location_name: str = Field(..., alias="locationName")
    priority: bool = False

    @classmethod
    def from_stop(cls, stop: Stop) -> "StopRecord":
        return cls(
            sensor_id=stop.sensor_id,
            order=stop.order,
            estimated_time=stop.estimated_time,
            location_name=stop.location_name,
            priority=stop.priority,
        )


class RouteRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    truck_id: str = Field(..., alias="truckId")
    truck_plate: str = Field(..., alias="truckPlate")
    bin_sensor_ids: List[str] = Field(..., alias="binSensorIds")
    stops: List[StopRecord]
    total_distance: float = Field(..., alias="totalDistance")
    estimated_time_min: int = Field(..., alias="estimatedTimeMin")
    status: str = "planned"
    priority_route: bool = Field(False, alias="priorityRoute")

    @classmethod
    def from_route(cls, route: Route) -> "RouteRecord":
        return cls(
            truck_id=route.truck_id,
            truck_plate=route.truck_plate,
            bin_sensor_ids=route.bin_sensor_ids,
            stops=[StopRecord.from_stop(stop) for stop in route.stops],
            total_distance=route.total_distance,
            estimated_time_min=route.estimated_time_min,
            status=route.status,
            priority_route=route.priority_route,
        )


class EfficiencyRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    time_saved: float = Field(..., alias="timeSaved")
    distance_saved: float = Field(..., alias="distanceSaved")
    fuel_saved: float = Field(..., alias="fuelSaved")

    @classmethod
    def from_report(cls, report: EfficiencyReport) -> "EfficiencyRecord":
        return cls(
            time_saved=report.time_saved,
            distance_saved=report.distance_saved,
            fuel_saved=report.fuel_saved,
        )


def bins_from_records(records: List[dict]) -> list[Bin]:
    return [BinRecord.model_validate(record).to_domain() for record in records]


def trucks_from_records(records: List[dict]) -> list[Truck]:
    return [TruckRecord.model_validate(record).to_domain() for record in records]


def routes_to_records(routes: List[Route]) -> list[dict]:
    return [RouteRecord.from_route(route).model_dump(by_alias=True) for route in routes]
