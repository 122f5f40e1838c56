"""Routing module - Level to target routing rules"""

from retain_logger.routing.route_config import RouteConfig, CONSOLE_SINKS
from retain_logger.routing.routing_table import RoutingTable, DEFAULT_TARGETS

__all__ = [
    "RouteConfig",
    "RoutingTable",
    "CONSOLE_SINKS",
    "DEFAULT_TARGETS",
]
