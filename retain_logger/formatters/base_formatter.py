"""
Base formatter interface
"""

from abc import ABC, abstractmethod
from typing import Any, Sequence

from retain_logger.core.log_level import LogLevel


class BaseFormatter(ABC):
    """
    Abstract base class for log formatters.

    Formatters expand a template into the literal line sent to a sink.
    """

    @abstractmethod
    def render(self, template: str, level: LogLevel, args: Sequence[Any]) -> str:
        """
        Render a log call into a string.

        Args:
            template: Format template containing substitution tokens
            level: Level of the log call
            args: Message arguments of the log call

        Returns:
            Rendered log line
        """
        pass

    def __call__(self, template: str, level: LogLevel, args: Sequence[Any]) -> str:
        """Allow formatters to be callable."""
        return self.render(template, level, args)
