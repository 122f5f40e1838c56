"""
Log formatters module

Expands %-token templates into the lines sent to sinks.
"""

from retain_logger.formatters.base_formatter import BaseFormatter
from retain_logger.formatters.template_formatter import TemplateFormatter
from retain_logger.formatters.message import UNDEFINED, render_message, stringify_argument

__all__ = [
    "BaseFormatter",
    "TemplateFormatter",
    "UNDEFINED",
    "render_message",
    "stringify_argument",
]
