"""
Log entry data structure

Entries are only materialized when retention is enabled.
"""

from dataclasses import dataclass
from typing import Any, Dict

from retain_logger.core.log_level import LogLevel


@dataclass(frozen=True)
class LogEntry:
    """
    A retained log line.

    Holds the level of the call and the message exactly as rendered for the
    first matching target.
    """

    level: LogLevel
    message: str

    def __post_init__(self):
        """Validate log entry after initialization."""
        if not isinstance(self.level, LogLevel):
            raise TypeError("level must be LogLevel enum")
        if not isinstance(self.message, str):
            object.__setattr__(self, "message", str(self.message))

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert log entry to dictionary.

        Returns:
            Dictionary representation
        """
        return {"level": self.level.value, "message": self.message}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LogEntry":
        """
        Create log entry from dictionary.

        Args:
            data: Dictionary with "level" and "message" keys

        Returns:
            New LogEntry instance
        """
        return cls(level=LogLevel.from_string(data["level"]), message=data["message"])

    def __str__(self) -> str:
        """String representation."""
        return self.message
