"""Writers module - Console and file output"""

from retain_logger.writers.console_writer import ConsoleWriter
from retain_logger.writers.file_writer import FileWriter

__all__ = ["ConsoleWriter", "FileWriter"]
