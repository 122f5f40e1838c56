"""
Routing table compiled from declarative target specs

Target spec format:
    (level_spec, sink[, template])

    level_spec  "*", "info,warn" or "!warn,error"
    sink        "?consolelog", "?consoleerror", "?consoledebug",
                "?consoletrace" or a file path template
    template    optional render template, defaults to the logger format
"""

from __future__ import annotations
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from retain_logger.core.log_level import LogLevel, resolve_level_spec
from retain_logger.routing.route_config import RouteConfig

TargetSpec = Union[Tuple[str, str], Tuple[str, str, Optional[str]], Sequence[str]]

DEFAULT_TARGETS: Tuple[Tuple[str, str], ...] = (
    ("!warn,error,fatal,trace", "?consolelog"),
    ("warn,error,fatal", "?consoleerror"),
    ("trace", "?consoletrace"),
)


class RoutingTable:
    """
    Ordered sequence of compiled routes.

    Order is the fan-out order of a log call, not precedence: every route
    matching a level fires. The table is immutable once compiled.

    Example:
        table = RoutingTable.compile(
            [("*", "app.log"), ("error,fatal", "?consoleerror", "%L %m")],
            default_template="[%L] %m%E",
        )
        [route.sink for route in table.matching(LogLevel.ERROR)]
        # -> ["app.log", "?consoleerror"]
    """

    def __init__(self, routes: Sequence[RouteConfig] = ()):
        """
        Initialize routing table.

        Args:
            routes: Compiled routes in evaluation order
        """
        self._routes: Tuple[RouteConfig, ...] = tuple(routes)

    @classmethod
    def compile(
        cls,
        target_specs: Sequence[TargetSpec],
        default_template: str,
    ) -> "RoutingTable":
        """
        Compile target specs into a routing table.

        Args:
            target_specs: Sequence of (level_spec, sink[, template])
            default_template: Template for specs that omit their own

        Returns:
            New RoutingTable

        Raises:
            ValueError: If a spec is malformed or resolves to no levels
        """
        routes: List[RouteConfig] = []
        for spec in target_specs:
            if isinstance(spec, str) or len(spec) not in (2, 3):
                raise ValueError(f"Target must be (level_spec, sink[, template]): {spec!r}")
            level_spec, sink = spec[0], spec[1]
            template = spec[2] if len(spec) == 3 and spec[2] is not None else default_template
            routes.append(RouteConfig(
                levels=resolve_level_spec(level_spec),
                sink=sink,
                template=template,
            ))
        return cls(routes)

    @classmethod
    def default(cls, default_template: str) -> "RoutingTable":
        """Console routing used when no targets are configured."""
        return cls.compile(DEFAULT_TARGETS, default_template)

    def matching(self, level: LogLevel) -> List[RouteConfig]:
        """
        Get routes that fire for a level, in table order.

        Args:
            level: Level of the log call

        Returns:
            Matching routes
        """
        return [route for route in self._routes if route.matches(level)]

    def __iter__(self) -> Iterator[RouteConfig]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __getitem__(self, index: int) -> RouteConfig:
        return self._routes[index]

    def __repr__(self) -> str:
        """String representation."""
        return f"RoutingTable(routes={len(self._routes)})"
