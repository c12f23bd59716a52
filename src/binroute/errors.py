"""Exception types raised by the route optimisation engine."""

from __future__ import annotations


class RouteOptimizationError(Exception):
    """Base class for engine errors."""


class ConfigurationError(RouteOptimizationError):
    """The engine was wired with an unusable component or setting."""


class StrategyContractError(ConfigurationError):
    """An ordering strategy did not return both an order and a distance."""


class AllocationError(RouteOptimizationError, ValueError):
    """Fuel-aware allocation preconditions were not met."""
