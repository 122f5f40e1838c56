"""
Route configuration data structure

A compiled routing rule: the levels it fires on, where output goes, and
the template used to render it.
"""

from dataclasses import dataclass
from typing import FrozenSet, Optional

from retain_logger.core.log_level import LogLevel

# Sink descriptor -> console channel
CONSOLE_SINKS = {
    "?consolelog": "log",
    "?consoleerror": "error",
    "?consoledebug": "debug",
    "?consoletrace": "trace",
}


@dataclass(frozen=True)
class RouteConfig:
    """
    Configuration for a single log route.

    Attributes:
        levels: Levels this route fires on (never empty)
        sink: Console sink descriptor such as "?consoleerror", or a file
            path template that may contain %p, %h, %L and %l
        template: Render template captured when the route was compiled
    """

    levels: FrozenSet[LogLevel]
    sink: str
    template: str

    def __post_init__(self):
        """Validate route after initialization."""
        if not self.levels:
            raise ValueError(f"Route to {self.sink!r} must fire on at least one level")
        object.__setattr__(self, "levels", frozenset(self.levels))

    def matches(self, level: LogLevel) -> bool:
        """
        Check if this route fires for the given level.

        Args:
            level: Level of the log call

        Returns:
            True if level is in this route's level set
        """
        return LogLevel.lookup(level) in self.levels

    @property
    def console_channel(self) -> Optional[str]:
        """Console channel for console sinks, None for file sinks."""
        return CONSOLE_SINKS.get(self.sink)

    @property
    def is_console(self) -> bool:
        return self.sink in CONSOLE_SINKS

    def __repr__(self) -> str:
        """String representation."""
        levels = ",".join(sorted(level.value for level in self.levels))
        return f"RouteConfig(levels={levels}, sink={self.sink!r}, template={self.template!r})"
