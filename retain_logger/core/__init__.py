"""
Core module for logger system

This module contains the fundamental classes:
- Logger: Leveled routing logger
- LoggerBuilder: Builder pattern for logger construction
- LogEntry: Retained log entry
- LogLevel: Log level enumeration
- LoggerConfig: Configuration management
- RetentionBuffer: Bounded hold-and-release buffer
"""

from retain_logger.core.logger import Logger
from retain_logger.core.logger_builder import LoggerBuilder
from retain_logger.core.log_entry import LogEntry
from retain_logger.core.log_level import LogLevel
from retain_logger.core.logger_config import LoggerConfig
from retain_logger.core.retention_buffer import RetentionBuffer
from retain_logger.core.process_identity import ProcessIdentity
from retain_logger.core.errors import SinkWriteError

__all__ = [
    "Logger",
    "LoggerBuilder",
    "LogEntry",
    "LogLevel",
    "LoggerConfig",
    "RetentionBuffer",
    "ProcessIdentity",
    "SinkWriteError",
]
