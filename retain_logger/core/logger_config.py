"""
Logger configuration management
"""

from dataclasses import dataclass, field, fields
import os
from typing import Any, Callable, List, Mapping, Optional, Union

from retain_logger.routing.routing_table import DEFAULT_TARGETS, TargetSpec

DEFAULT_FORMAT = "[%L][%p@%h] %t: %m%E"

# Option names accepted by from_options besides the field names themselves
_OPTION_ALIASES = {
    "logLocation": "log_location",
    "consoleNoFormat": "console_no_format",
    "keepLast": "keep_last",
    "debugLevel": "debug_level",
    "retainOnly": "retain_only",
    "errorHandler": "error_handler",
}


def _strip_separator(location: str) -> str:
    stripped = location.rstrip("/" + os.sep)
    if not stripped:
        return location[:1]
    return stripped


@dataclass
class LoggerConfig:
    """
    Logger configuration.

    keep_last controls retention: a positive int keeps that many entries,
    True keeps every entry until drained, anything falsy disables it.
    """

    # Routing
    targets: List[TargetSpec] = field(default_factory=lambda: list(DEFAULT_TARGETS))
    log_location: str = "./"
    format: str = DEFAULT_FORMAT

    # Console settings
    console_no_format: bool = False

    # Gating
    trace: bool = False
    debug: bool = True
    debug_level: int = -1

    # Retention
    keep_last: Union[bool, int, None] = False
    retain_only: bool = False

    # Sink failures
    error_handler: Optional[Callable[[Exception], Any]] = None

    def __post_init__(self):
        """Normalize configuration after initialization."""
        self.log_location = _strip_separator(os.fspath(self.log_location))
        if self.targets is None:
            self.targets = list(DEFAULT_TARGETS)
        else:
            self.targets = list(self.targets)

    @property
    def retention_enabled(self) -> bool:
        return self.retention_capacity is not None or self.keep_last is True

    @property
    def retention_capacity(self) -> Optional[int]:
        """Buffer capacity, or None when unbounded or disabled."""
        if isinstance(self.keep_last, bool) or self.keep_last is None:
            return None
        try:
            capacity = int(self.keep_last)
        except (TypeError, ValueError):
            return None
        return capacity if capacity > 0 else None

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None) -> "LoggerConfig":
        """
        Create configuration from an options mapping.

        Keys may be field names or their camelCase forms (logLocation,
        keepLast, ...). Unrecognized keys are ignored.

        Args:
            options: Options mapping

        Returns:
            New LoggerConfig
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in (options or {}).items():
            name = _OPTION_ALIASES.get(key, key)
            if name in known:
                kwargs[name] = value
        return cls(**kwargs)

    @classmethod
    def default(cls) -> "LoggerConfig":
        """Create default configuration."""
        return cls()

    @classmethod
    def debug_config(cls) -> "LoggerConfig":
        """Create configuration for debugging: trace on, unlimited debug."""
        return cls(trace=True, debug=True, debug_level=-1)

    @classmethod
    def retain_config(cls, keep_last: int = 100) -> "LoggerConfig":
        """Create configuration that holds the last entries for later release."""
        return cls(keep_last=keep_last)
