"""
BSD 3-Clause License

Copyright (c) 2021, 🍀☀🌕🌥 🌊
All rights reserved.

Retain Logger - A leveled routing logger with a hold-and-release buffer
"""

__version__ = "1.5.0"
__author__ = "kcenon"
__email__ = "kcenon@naver.com"

from retain_logger.core.logger import Logger
from retain_logger.core.logger_builder import LoggerBuilder
from retain_logger.core.log_entry import LogEntry
from retain_logger.core.log_level import LogLevel
from retain_logger.core.logger_config import LoggerConfig
from retain_logger.core.errors import SinkWriteError
from retain_logger.formatters.message import UNDEFINED

# Import submodules (not all classes by default)
from retain_logger import formatters
from retain_logger import routing
from retain_logger import writers

__all__ = [
    "Logger",
    "LoggerBuilder",
    "LogEntry",
    "LogLevel",
    "LoggerConfig",
    "SinkWriteError",
    "UNDEFINED",
    "formatters",
    "routing",
    "writers",
]
