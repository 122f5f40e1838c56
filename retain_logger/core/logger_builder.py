"""Logger builder pattern"""

from typing import Any, Callable, List, Optional

from retain_logger.core.logger import Logger
from retain_logger.core.logger_config import LoggerConfig
from retain_logger.core.process_identity import ProcessIdentity
from retain_logger.formatters.base_formatter import BaseFormatter
from retain_logger.routing.routing_table import TargetSpec
from retain_logger.writers.console_writer import ConsoleWriter
from retain_logger.writers.file_writer import FileWriter


class LoggerBuilder:
    """Builder pattern for logger construction."""

    def __init__(self):
        self._config = LoggerConfig()
        self._targets: List[TargetSpec] = []
        self._console: Optional[ConsoleWriter] = None
        self._file_writer: Optional[FileWriter] = None
        self._formatter: Optional[BaseFormatter] = None
        self._identity: Optional[ProcessIdentity] = None

    def with_target(self, level_spec: str, sink: str, template: Optional[str] = None) -> "LoggerBuilder":
        """
        Add a routing target.

        Targets are evaluated in the order they are added. When no target
        is added the default console routing is used.

        Args:
            level_spec: "*", "info,warn" or "!trace,debug"
            sink: Console sink ("?consolelog", "?consoleerror",
                "?consoledebug", "?consoletrace") or file path template
            template: Render template (default: the logger format at build time)

        Returns:
            Self for method chaining

        Example:
            logger = (LoggerBuilder()
                .with_target("error,fatal", "?consoleerror")
                .with_target("*", "app-%L.log", "%T %L %m%E")
                .build())
        """
        if template is None:
            self._targets.append((level_spec, sink))
        else:
            self._targets.append((level_spec, sink, template))
        return self

    def with_log_location(self, location: str) -> "LoggerBuilder":
        """Set base directory for file targets."""
        self._config.log_location = location
        return self

    def with_format(self, template: str) -> "LoggerBuilder":
        """Set default render template."""
        self._config.format = template
        return self

    def with_console_no_format(self, enabled: bool = True) -> "LoggerBuilder":
        """Pass raw arguments to console targets instead of rendered lines."""
        self._config.console_no_format = enabled
        return self

    def with_trace(self, enabled: bool = True) -> "LoggerBuilder":
        """Enable/disable the trace level."""
        self._config.trace = enabled
        return self

    def with_debug(self, enabled: bool = True, level: int = -1) -> "LoggerBuilder":
        """
        Enable/disable debug logging.

        Args:
            enabled: Whether debug and debug_level calls are logged
            level: Debug cutoff, -1 for unlimited

        Returns:
            Self for method chaining
        """
        self._config.debug = enabled
        self._config.debug_level = level
        return self

    def with_keep_last(self, count: Any = True, retain_only: bool = False) -> "LoggerBuilder":
        """
        Enable hold-and-release retention.

        Args:
            count: Number of entries kept; True keeps all until drained
            retain_only: Retained calls skip their targets entirely

        Returns:
            Self for method chaining
        """
        self._config.keep_last = count
        self._config.retain_only = retain_only
        return self

    def with_error_handler(self, handler: Callable[[Exception], Any]) -> "LoggerBuilder":
        """Receive SinkWriteError for every failed sink write."""
        self._config.error_handler = handler
        return self

    def with_console(self, writer: ConsoleWriter) -> "LoggerBuilder":
        """Use a custom console writer."""
        self._console = writer
        return self

    def with_file_writer(self, writer: FileWriter) -> "LoggerBuilder":
        """Use a custom file writer."""
        self._file_writer = writer
        return self

    def with_formatter(self, formatter: BaseFormatter) -> "LoggerBuilder":
        """Use a custom formatter."""
        self._formatter = formatter
        return self

    def with_identity(self, identity: ProcessIdentity) -> "LoggerBuilder":
        """Override the process identity used for %p, %h and %E."""
        self._identity = identity
        return self

    def build(self) -> Logger:
        """Build and return configured logger."""
        config = LoggerConfig(
            targets=self._targets or None,
            log_location=self._config.log_location,
            format=self._config.format,
            console_no_format=self._config.console_no_format,
            trace=self._config.trace,
            debug=self._config.debug,
            debug_level=self._config.debug_level,
            keep_last=self._config.keep_last,
            retain_only=self._config.retain_only,
            error_handler=self._config.error_handler,
        )
        return Logger(
            config,
            console=self._console,
            file_writer=self._file_writer,
            formatter=self._formatter,
            identity=self._identity,
        )
