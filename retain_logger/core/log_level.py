"""
Log level enumeration

Levels are routing tags. Only trace and debug carry gating semantics.
"""

from enum import Enum
from typing import FrozenSet, Optional, Tuple


class LogLevel(str, Enum):
    """
    Log level enumeration.

    Members compare equal to their lowercase names so routing rules can be
    declared with plain strings.
    """

    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"
    FILE = "file"

    def __str__(self) -> str:
        """String representation of log level."""
        return self.value

    @property
    def label(self) -> str:
        """Label used for the %L token; the file level has none."""
        return "" if self is LogLevel.FILE else self.value

    @classmethod
    def from_string(cls, level_str: str) -> "LogLevel":
        """
        Convert string to LogLevel.

        Args:
            level_str: Level name (case-insensitive)

        Returns:
            LogLevel enum value

        Raises:
            ValueError: If level_str is not valid
        """
        level = cls.lookup(level_str)
        if level is None:
            raise ValueError(f"Invalid log level: {level_str}")
        return level

    @classmethod
    def lookup(cls, value) -> Optional["LogLevel"]:
        """Like from_string, but returns None for unknown names."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


# Level-name table used to resolve target level specs. "info" appears twice;
# both slots resolve to the same level.
LEVEL_TABLE: Tuple[str, ...] = (
    "trace", "debug", "info", "info", "warn", "error", "fatal", "file",
)

ALL_LEVELS: FrozenSet[LogLevel] = frozenset(LogLevel(name) for name in LEVEL_TABLE)


def resolve_level_spec(level_spec: str) -> FrozenSet[LogLevel]:
    """
    Resolve a target level spec to an explicit set of levels.

    Args:
        level_spec: "*" for all levels, "a,b,c" to include only the named
            levels, or "!a,b,c" to include everything except them.
            Unknown names are ignored.

    Returns:
        Frozen set of matching levels (possibly empty)

    Example:
        resolve_level_spec("!warn,error,fatal,trace")
        # -> {DEBUG, INFO, FILE}
    """
    spec = level_spec.strip()
    if spec == "*":
        return ALL_LEVELS

    exclude = spec.startswith("!")
    if exclude:
        spec = spec[1:]
    names = {name.strip().lower() for name in spec.split(",") if name.strip()}

    return frozenset(
        LogLevel(name) for name in LEVEL_TABLE if (name in names) != exclude
    )
