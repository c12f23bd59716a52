from collections import Counter

import pytest

from binroute.config import settings
from binroute.data.kilinochchi import DEPOT
from binroute.errors import ConfigurationError, StrategyContractError
from binroute.models.domain import Bin, Coordinates, Truck, TruckStatus
from binroute.services.distance import TableDistanceProvider
from binroute.services.routing.models import RouteOrder
from binroute.services.routing.nearest_neighbor import NearestNeighborStrategy
from binroute.services.routing.optimizer import OptimizerConstraints, RouteOptimizer


def _bin(sensor_id: str, location: str, fill: float) -> Bin:
    return Bin(sensor_id=sensor_id, location_name=location, fill_level=fill)


def _truck(truck_id: str, location: str | None = None, status: TruckStatus = TruckStatus.ACTIVE) -> Truck:
    return Truck(truck_id=truck_id, plate=f"WP-{truck_id}", status=status, current_location=location)


def _optimizer() -> RouteOptimizer:
    provider = TableDistanceProvider()
    return RouteOptimizer(provider, NearestNeighborStrategy(provider))


REGULAR_LOCATIONS = [
    "Uruthirapuram",
    "Mulankavil",
    "Jayapuram",
    "Nachchikuda",
    "Anaivilunthan",
    "Puthukudiyiruppu",
    "Kandawalai",
]


class RecordingStrategy:
    def __init__(self, result):
        self.result = result
        self.calls = []

    def order_route(self, start_location, bins):
        self.calls.append((start_location, list(bins)))
        return self.result


class ReadOnlyDistances:
    def distance(self, origin, destination):
        return 4.0

    def coordinates_of(self, location_name):
        return None

    def great_circle_distance(self, origin, destination):
        return 0.0


def test_no_active_trucks_returns_empty_list():
    bins = [_bin("BIN001", "Paranthan", 80)]
    trucks = [_truck("truck1", status=TruckStatus.INACTIVE), _truck("truck2", status=TruckStatus.IN_MAINTENANCE)]

    assert _optimizer().optimize_fleet(bins, trucks, DEPOT) == []


def test_no_bins_above_threshold_returns_empty_list():
    bins = [_bin("BIN001", "Paranthan", 50), _bin("BIN002", "Poonagary", 70)]

    assert _optimizer().optimize_fleet(bins, [_truck("truck1")], DEPOT) == []


def test_single_truck_collects_priority_bin_first():
    bins = [_bin("BIN001", "Paranthan", 100), _bin("BIN002", "Poonagary", 80)]

    routes = _optimizer().optimize_fleet(bins, [_truck("truck1", DEPOT)], DEPOT)

    assert len(routes) == 1
    route = routes[0]
    assert set(route.bin_sensor_ids) == {"BIN001", "BIN002"}
    assert [stop.location_name for stop in route.stops] == ["Paranthan", "Poonagary"]
    assert [stop.order for stop in route.stops] == [1, 2]
    assert [stop.priority for stop in route.stops] == [True, False]
    assert route.ordered_locations == [DEPOT, "Paranthan", "Poonagary", DEPOT]
    assert route.total_distance == 23
    assert route.estimated_time_min == 138
    assert all(stop.estimated_time == 77 for stop in route.stops)
    assert route.status == "planned"
    assert route.priority_route is True
    assert route.truck_plate == "WP-truck1"


def test_single_truck_starts_from_depot_and_takes_every_regular_bin():
    bins = [_bin("BIN000", "Paranthan", 100)] + [
        _bin(f"BIN{i + 1:03d}", location, 80) for i, location in enumerate(REGULAR_LOCATIONS)
    ]

    routes = _optimizer().optimize_fleet(bins, [_truck("truck1", "Paranthan")], DEPOT)

    assert len(routes) == 1
    assert len(routes[0].bin_sensor_ids) == 8
    assert routes[0].ordered_locations[0] == DEPOT
    assert routes[0].stops[0].location_name == "Paranthan"


def test_multiple_trucks_get_dedicated_priority_bins():
    bins = [_bin("P1", "Pallai", 100), _bin("P2", "Ramanathapuram", 100)]
    trucks = [_truck("truck1", DEPOT), _truck("truck2", "Paranthan")]

    routes = _optimizer().optimize_fleet(bins, trucks, DEPOT)

    by_truck = {route.truck_id: route for route in routes}
    assert by_truck["truck1"].bin_sensor_ids == ["P2"]
    assert by_truck["truck2"].bin_sensor_ids == ["P1"]
    assert by_truck["truck1"].ordered_locations == [DEPOT, "Ramanathapuram", DEPOT]
    assert by_truck["truck2"].ordered_locations == ["Paranthan", "Pallai", "Paranthan"]
    assert by_truck["truck1"].total_distance == 12
    assert by_truck["truck2"].total_distance == 40
    assert all(route.priority_route for route in routes)


def test_leftover_priority_bin_joins_nearest_route_and_is_reordered_from_depot():
    bins = [
        _bin("P1", "Ramanathapuram", 100),
        _bin("P2", "Pallai", 100),
        _bin("P3", "Kandawalai", 100),
    ]
    trucks = [_truck("truck1", DEPOT), _truck("truck2", "Paranthan")]

    routes = _optimizer().optimize_fleet(bins, trucks, DEPOT)

    assert len(routes) == 2
    by_truck = {route.truck_id: route for route in routes}
    assert by_truck["truck1"].bin_sensor_ids == ["P1"]
    assert set(by_truck["truck2"].bin_sensor_ids) == {"P2", "P3"}
    rerouted = by_truck["truck2"]
    assert rerouted.ordered_locations == [DEPOT, "Pallai", "Kandawalai", DEPOT]
    assert rerouted.total_distance == 37
    assert rerouted.estimated_time_min == 222
    assert [stop.order for stop in rerouted.stops] == [1, 2]


def test_remaining_trucks_take_regular_bins_and_overflow_is_backfilled():
    bins = [_bin("P1", "Pallai", 100), _bin("P2", "Ramanathapuram", 100)] + [
        _bin(f"R{i + 1}", location, 75 + i) for i, location in enumerate(REGULAR_LOCATIONS)
    ]
    trucks = [_truck("truck1", DEPOT), _truck("truck2", "Paranthan"), _truck("truck3", "Akkarayankulam")]

    routes = _optimizer().optimize_fleet(bins, trucks, DEPOT)

    assert len(routes) == 3
    by_truck = {route.truck_id: route for route in routes}
    assert by_truck["truck3"].bin_sensor_ids == ["P2"]
    assert by_truck["truck2"].bin_sensor_ids == ["P1"]
    regular_route = by_truck["truck1"]
    assert regular_route.priority_route is False
    assert len(regular_route.bin_sensor_ids) == 7
    assert regular_route.ordered_locations[0] == DEPOT
    assert [stop.order for stop in regular_route.stops] == list(range(1, 8))

    covered = Counter(sensor_id for route in routes for sensor_id in route.bin_sensor_ids)
    assert set(covered) == {bin_.sensor_id for bin_ in bins}
    assert all(count == 1 for count in covered.values())


def test_capacity_limits_regular_bins_per_truck():
    bins = [_bin(f"R{i + 1}", location, 80) for i, location in enumerate(REGULAR_LOCATIONS)]
    trucks = [_truck("truck1", DEPOT), _truck("truck2", "Paranthan")]

    routes = _optimizer().optimize_fleet(bins, trucks, DEPOT, max_bins_per_truck=3)

    # Two trucks take three each and the seventh bin is backfilled.
    assert sorted(len(route.bin_sensor_ids) for route in routes) == [3, 4]
    assert not any(route.priority_route for route in routes)


def test_first_truck_takes_its_closest_regular_bins():
    bins = [
        _bin("FAR1", "Thunukkai", 80),
        _bin("NEAR1", "Puthukudiyiruppu", 80),
        _bin("FAR2", "Mallavi", 80),
        _bin("NEAR2", "Uruthirapuram", 80),
    ]
    constraints = OptimizerConstraints(max_bins_per_truck=2)
    provider = TableDistanceProvider()
    optimizer = RouteOptimizer(provider, NearestNeighborStrategy(provider), constraints)

    routes = optimizer.optimize_fleet(bins, [_truck("truck1", DEPOT), _truck("truck2", "Mallavi")], DEPOT)

    by_truck = {route.truck_id: route for route in routes}
    assert set(by_truck["truck1"].bin_sensor_ids) == {"NEAR1", "NEAR2"}
    assert set(by_truck["truck2"].bin_sensor_ids) == {"FAR1", "FAR2"}


def test_single_truck_without_priority_bins_gets_overflow():
    bins = [_bin(f"R{i + 1}", location, 80) for i, location in enumerate(REGULAR_LOCATIONS)]

    routes = _optimizer().optimize_fleet(bins, [_truck("truck1", DEPOT)], DEPOT)

    assert len(routes) == 1
    assert len(routes[0].bin_sensor_ids) == 7
    assert routes[0].priority_route is False


def test_truck_without_location_starts_at_depot():
    bins = [_bin("R1", "Paranthan", 80)]

    routes = _optimizer().optimize_fleet(bins, [_truck("truck1")], DEPOT)

    assert routes[0].ordered_locations == [DEPOT, "Paranthan", DEPOT]


def test_unknown_truck_location_falls_back_to_table_distance():
    bins = [_bin("P1", "Ramanathapuram", 100)]
    trucks = [_truck("lost", "Nowhere"), _truck("home", DEPOT)]

    routes = _optimizer().optimize_fleet(bins, trucks, DEPOT)

    assert len(routes) == 1
    assert routes[0].truck_id == "home"


def test_bins_sharing_a_location_share_one_stop():
    bins = [_bin("R1", "Paranthan", 80), _bin("R2", "Paranthan", 90)]

    routes = _optimizer().optimize_fleet(bins, [_truck("truck1", DEPOT)], DEPOT)

    assert routes[0].bin_sensor_ids == ["R1", "R2"]
    assert [stop.sensor_id for stop in routes[0].stops] == ["R1"]


def test_optimize_single_route_delegates_to_strategy():
    expected = RouteOrder(ordered_locations=[DEPOT, "Paranthan", "Poonagary"], total_distance=15)
    strategy = RecordingStrategy(expected)
    optimizer = RouteOptimizer(TableDistanceProvider(), strategy)
    bins = [_bin("BIN001", "Paranthan", 80), _bin("BIN002", "Poonagary", 75)]

    result = optimizer.optimize_single_route(DEPOT, bins)

    assert strategy.calls == [(DEPOT, bins)]
    assert result == expected


def test_optimize_single_route_accepts_mapping_result():
    strategy = RecordingStrategy({"ordered_locations": [DEPOT], "total_distance": 0})
    optimizer = RouteOptimizer(TableDistanceProvider(), strategy)

    result = optimizer.optimize_single_route(DEPOT, [])

    assert result == RouteOrder(ordered_locations=[DEPOT], total_distance=0.0)


@pytest.mark.parametrize(
    "bad_result",
    [None, {"ordered_locations": [DEPOT]}, {"total_distance": 3}, RouteOrder([], 0), ([DEPOT], 3)],
)
def test_strategy_contract_violation_raises(bad_result):
    optimizer = RouteOptimizer(TableDistanceProvider(), RecordingStrategy(bad_result))

    with pytest.raises(StrategyContractError):
        optimizer.optimize_single_route(DEPOT, [_bin("BIN001", "Paranthan", 80)])


def test_set_strategy_replaces_algorithm():
    optimizer = _optimizer()
    replacement = RecordingStrategy(RouteOrder([DEPOT], 0))

    optimizer.set_strategy(replacement)

    assert optimizer.strategy is replacement


def test_set_strategy_rejects_object_without_order_route():
    with pytest.raises(StrategyContractError):
        _optimizer().set_strategy(object())


def test_update_distance_mutates_table_provider():
    provider = TableDistanceProvider()
    optimizer = RouteOptimizer(provider, NearestNeighborStrategy(provider))

    optimizer.update_distance("Paranthan", "Poonagary", 7)

    assert provider.distance("Paranthan", "Poonagary") == 7
    assert provider.distance("Poonagary", "Paranthan") == 7


def test_update_distance_is_noop_for_read_only_provider():
    provider = ReadOnlyDistances()
    optimizer = RouteOptimizer(provider, NearestNeighborStrategy(provider))

    optimizer.update_distance("A", "B", 1)

    assert provider.distance("A", "B") == 4.0


def test_default_optimizer_uses_configured_strategy():
    optimizer = RouteOptimizer()

    assert isinstance(optimizer.strategy, NearestNeighborStrategy)
    assert isinstance(optimizer.distance_provider, TableDistanceProvider)


def test_route_distance_rounds_half_up_to_cents():
    provider = TableDistanceProvider({"Yard": {"Market": 0.0625}}, {}, depot_name="Yard")
    optimizer = RouteOptimizer(provider, NearestNeighborStrategy(provider))

    routes = optimizer.optimize_fleet([_bin("R1", "Market", 80)], [_truck("truck1", "Yard")], "Yard")

    assert routes[0].ordered_locations == ["Yard", "Market", "Yard"]
    assert routes[0].total_distance == 0.13


def test_zero_bins_per_truck_is_rejected():
    bins = [_bin("R1", "Paranthan", 80)]

    with pytest.raises(ConfigurationError):
        _optimizer().optimize_fleet(bins, [_truck("truck1", DEPOT)], DEPOT, max_bins_per_truck=0)


def test_default_optimizer_reads_configured_location_files(tmp_path, monkeypatch):
    coordinates_file = tmp_path / "coords.csv"
    coordinates_file.write_text("Location,Latitude,Longitude\nDepotX,1.0,1.0\n", encoding="utf-8")
    monkeypatch.setattr(settings, "coordinates_file", coordinates_file)

    optimizer = RouteOptimizer()

    assert optimizer.distance_provider.coordinates_of("DepotX") == Coordinates(1.0, 1.0)
    assert optimizer.distance_provider.coordinates_of("Paranthan") is None
