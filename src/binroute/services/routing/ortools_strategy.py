"""OR-Tools sequence optimization for a single truck's bins.

The stops are modelled as a single-vehicle closed tour starting and ending at
the start location. Arcs leading from a regular bin back to a priority bin
carry a large penalty so the solver collects priority bins first, and the
solved sequence is stable-partitioned afterwards so the priority rule holds
whatever the solver returns.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ortools.constraint_solver import pywrapcp, routing_enums_pb2

from ...config import settings
from ...models.domain import Bin
from ..distance import DistanceProvider
from .base import RouteOrderingStrategy
from .models import RouteOrder
from .nearest_neighbor import NearestNeighborStrategy

logger = logging.getLogger(__name__)

METERS_PER_KM = 1000
PRIORITY_ARC_PENALTY = 10_000_000  # ~10,000 km


class OrToolsSequenceStrategy(RouteOrderingStrategy):
    """Order stops by solving a small TSP with OR-Tools."""

    def __init__(
        self,
        distance_provider: DistanceProvider,
        *,
        priority_threshold: float | None = None,
        time_limit_seconds: int | None = None,
        first_solution_strategy: str | None = None,
        local_search_metaheuristic: str | None = None,
    ) -> None:
        super().__init__(distance_provider, priority_threshold=priority_threshold)
        self.time_limit_seconds = (
            time_limit_seconds if time_limit_seconds is not None else settings.solver_time_limit_seconds
        )
        self.first_solution_strategy = first_solution_strategy or settings.solver_first_solution_strategy
        self.local_search_metaheuristic = local_search_metaheuristic or settings.solver_local_search_metaheuristic

    def order_route(self, start_location: str, bins: Sequence[Bin]) -> RouteOrder:
        if not bins:
            return RouteOrder(ordered_locations=[start_location], total_distance=0)
        if len(bins) == 1:
            return self.walk(start_location, list(bins))

        sequence = self._solve(start_location, list(bins))
        if sequence is None:
            logger.warning(
                f"OR-Tools found no tour for {len(bins)} bins from '{start_location}', "
                f"falling back to nearest neighbour order"
            )
            fallback = NearestNeighborStrategy(self.distance_provider, priority_threshold=self.priority_threshold)
            sequence = fallback.visiting_sequence(start_location, bins)
        else:
            sequence = [bin_ for bin_ in sequence if self.is_priority(bin_)] + [
                bin_ for bin_ in sequence if not self.is_priority(bin_)
            ]
        return self.walk(start_location, sequence)

    def _distance_matrix(self, start_location: str, bins: list[Bin]) -> list[list[int]]:
        locations = [start_location] + [bin_.location_name for bin_ in bins]
        priority = [False] + [self.is_priority(bin_) for bin_ in bins]
        size = len(locations)
        matrix = [[0] * size for _ in range(size)]
        for i in range(size):
            for j in range(size):
                if i == j:
                    continue
                meters = int(round(self.distance_provider.distance(locations[i], locations[j]) * METERS_PER_KM))
                # Depot (node 0) is neither tier.
                if i != 0 and not priority[i] and priority[j]:
                    meters += PRIORITY_ARC_PENALTY
                matrix[i][j] = meters
        return matrix

    def _solve(self, start_location: str, bins: list[Bin]) -> list[Bin] | None:
        distance_matrix = self._distance_matrix(start_location, bins)

        manager = pywrapcp.RoutingIndexManager(len(distance_matrix), 1, 0)
        routing = pywrapcp.RoutingModel(manager)

        def distance_callback(from_index: int, to_index: int) -> int:
            from_node = manager.IndexToNode(from_index)
            to_node = manager.IndexToNode(to_index)
            return distance_matrix[from_node][to_node]

        transit_callback_index = routing.RegisterTransitCallback(distance_callback)
        routing.SetArcCostEvaluatorOfAllVehicles(transit_callback_index)

        search_parameters = pywrapcp.DefaultRoutingSearchParameters()
        search_parameters.first_solution_strategy = getattr(
            routing_enums_pb2.FirstSolutionStrategy, self.first_solution_strategy
        )
        search_parameters.local_search_metaheuristic = getattr(
            routing_enums_pb2.LocalSearchMetaheuristic, self.local_search_metaheuristic
        )
        search_parameters.time_limit.FromSeconds(self.time_limit_seconds)

        assignment = routing.SolveWithParameters(search_parameters)
        if not assignment:
            return None

        sequence: list[Bin] = []
        index = routing.Start(0)
        while not routing.IsEnd(index):
            node_index = manager.IndexToNode(index)
            if node_index != 0:
                sequence.append(bins[node_index - 1])
            index = assignment.Value(routing.NextVar(index))
        return sequence
