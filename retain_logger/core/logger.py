"""
Main Logger class - leveled routing logger with hold-and-release buffer
"""

from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union
import os
import sys
import threading

from retain_logger.core.errors import SinkWriteError
from retain_logger.core.log_entry import LogEntry
from retain_logger.core.log_level import LogLevel
from retain_logger.core.logger_config import LoggerConfig
from retain_logger.core.process_identity import ProcessIdentity
from retain_logger.core.retention_buffer import RetentionBuffer
from retain_logger.formatters.base_formatter import BaseFormatter
from retain_logger.formatters.template_formatter import TemplateFormatter
from retain_logger.routing.routing_table import RoutingTable
from retain_logger.writers.console_writer import ConsoleWriter
from retain_logger.writers.file_writer import FileWriter

# Console channel used by display_entries for each level
_DISPLAY_CHANNELS = {
    LogLevel.DEBUG: "debug",
    LogLevel.TRACE: "debug",
    LogLevel.ERROR: "error",
    LogLevel.FATAL: "error",
    LogLevel.WARN: "warn",
    LogLevel.INFO: "info",
}


def _as_path(value: Any) -> str:
    if isinstance(value, (str, os.PathLike)):
        return os.fspath(value)
    return str(value)


class Logger:
    """
    Leveled logger routing each call to console and file targets.

    Every logging method returns the logger, so calls can be chained:

        log = Logger({"keepLast": 50, "targets": [["*", "app-%p.log"]]})
        log.info("started").debug("config", {"port": 8080})
        for entry in log.get_entries():
            ...

    Logging calls never raise. Sink failures are passed to the configured
    error handler or reported on stderr.
    """

    def __init__(
        self,
        config: Optional[Union[LoggerConfig, Mapping[str, Any]]] = None,
        console: Optional[ConsoleWriter] = None,
        file_writer: Optional[FileWriter] = None,
        formatter: Optional[BaseFormatter] = None,
        identity: Optional[ProcessIdentity] = None,
    ):
        if config is None or isinstance(config, Mapping):
            config = LoggerConfig.from_options(config)
        self._config = config
        self._identity = identity or ProcessIdentity.current()
        self._console = console or ConsoleWriter()
        self._file_writer = file_writer or FileWriter()
        self._formatter = formatter or TemplateFormatter(self._identity)
        self._routes = RoutingTable.compile(config.targets, config.format)
        self._location = config.log_location
        self._format = config.format
        self._console_no_format = config.console_no_format
        self._retain_only = config.retain_only
        self._error_handler = config.error_handler

        self._do_trace = config.trace is True
        self._do_debug = config.debug is True
        self._debug_level = config.debug_level

        self._buffer: Optional[RetentionBuffer] = None
        if config.retention_enabled:
            self._buffer = RetentionBuffer(config.retention_capacity)

        self._lock = threading.RLock()
        self._metrics = {
            "logged": 0,
            "suppressed": 0,
            "dispatched": 0,
            "retained": 0,
            "evicted": 0,
            "sink_errors": 0,
        }

    # -- state -----------------------------------------------------------

    @property
    def routes(self) -> RoutingTable:
        """Compiled routing table."""
        return self._routes

    @property
    def format(self) -> str:
        return self._format

    @property
    def location(self) -> str:
        """Base directory for file targets."""
        return self._location

    @property
    def identity(self) -> ProcessIdentity:
        return self._identity

    @property
    def debug_enabled(self) -> bool:
        return self._do_debug

    @property
    def trace_enabled(self) -> bool:
        return self._do_trace

    @property
    def debug_cutoff(self) -> int:
        """Current debug cutoff, -1 for unlimited."""
        return self._debug_level

    @property
    def retention_enabled(self) -> bool:
        return self._buffer is not None

    def enable_debug(self) -> "Logger":
        """Enable debug logging."""
        with self._lock:
            self._do_debug = True
        return self

    def disable_debug(self) -> "Logger":
        """Disable debug logging totally."""
        with self._lock:
            self._do_debug = False
        return self

    def enable_trace(self) -> "Logger":
        """Enable the trace level."""
        with self._lock:
            self._do_trace = True
        return self

    def disable_trace(self) -> "Logger":
        """Disable the trace level."""
        with self._lock:
            self._do_trace = False
        return self

    def set_debug_level(self, level: Union[int, bool]) -> "Logger":
        """
        Set the debug cutoff.

        Args:
            level: True enables debugging with no cutoff; False or 0
                disables debugging; any other number enables debugging
                with that cutoff.

        Returns:
            Self for method chaining
        """
        with self._lock:
            if level is True:
                self._do_debug = True
                self._debug_level = -1
            elif level is False or level == 0:
                self._do_debug = False
            else:
                self._do_debug = True
                self._debug_level = level
        return self

    # -- retention -------------------------------------------------------

    def get_entries(self) -> List[LogEntry]:
        """
        Fetch retained entries and empty the buffer.

        Returns:
            Entries in the order they were logged; empty when retention is off
        """
        with self._lock:
            if self._buffer is None:
                return []
            return self._buffer.drain()

    def display_entries(self, entries: Sequence[LogEntry], reversed: bool = False) -> "Logger":
        """
        Write entries from get_entries() to the console.

        Args:
            entries: Entries to show
            reversed: Show newest first

        Returns:
            Self for method chaining
        """
        ordered = list(entries)
        if reversed:
            ordered.reverse()
        for entry in ordered:
            channel = _DISPLAY_CHANNELS.get(entry.level, "log")
            self._write_console(channel, entry.level, entry.message)
        return self

    # -- logging ---------------------------------------------------------

    def log(self, level: Union[LogLevel, str], *args: Any) -> "Logger":
        """
        Log arguments at a level.

        Args:
            level: LogLevel or level name. Unknown names are a no-op.
            args: Message arguments. For the file level the first argument
                is the target filename.

        Returns:
            Self for method chaining
        """
        resolved = LogLevel.lookup(level)
        with self._lock:
            if resolved is None:
                self._metrics["suppressed"] += 1
                return self
            if resolved is LogLevel.TRACE and not self._do_trace:
                self._metrics["suppressed"] += 1
                return self
            if resolved is LogLevel.DEBUG and not self._do_debug:
                self._metrics["suppressed"] += 1
                return self
            self._metrics["logged"] += 1
            self._dispatch(resolved, args)
        return self

    def trace(self, *args: Any) -> "Logger":
        """Log at the trace level; the call stack is appended."""
        return self.log(LogLevel.TRACE, *args)

    def debug(self, *args: Any) -> "Logger":
        """Log at the debug level, ignoring the debug cutoff."""
        return self.log(LogLevel.DEBUG, *args)

    def debug_level(self, level: int, *args: Any) -> "Logger":
        """
        Log at the debug level if level is within the debug cutoff.

        Args:
            level: Verbosity of this message; higher is more detailed
            args: Message arguments

        Returns:
            Self for method chaining
        """
        with self._lock:
            if not self._do_debug:
                self._metrics["suppressed"] += 1
                return self
            if self._debug_level != -1 and self._debug_level < level:
                self._metrics["suppressed"] += 1
                return self
            return self.log(LogLevel.DEBUG, *args)

    def info(self, *args: Any) -> "Logger":
        """Log at the info level."""
        return self.log(LogLevel.INFO, *args)

    def warn(self, *args: Any) -> "Logger":
        """Log at the warn level."""
        return self.log(LogLevel.WARN, *args)

    warning = warn

    def error(self, *args: Any) -> "Logger":
        """Log at the error level."""
        return self.log(LogLevel.ERROR, *args)

    def fatal(self, *args: Any) -> "Logger":
        """Log at the fatal level."""
        return self.log(LogLevel.FATAL, *args)

    def file(self, filename: Optional[str], *args: Any) -> "Logger":
        """
        Log at the file level.

        Args:
            filename: File used by file targets instead of their own path.
                Not prefixed with the log location; use %l for that.
            args: Message arguments

        Returns:
            Self for method chaining
        """
        return self.log(LogLevel.FILE, filename, *args)

    # -- dispatch --------------------------------------------------------

    def _dispatch(self, level: LogLevel, args: Sequence[Any]) -> None:
        """Render and deliver one call to every matching route."""
        override = None
        if level is LogLevel.FILE:
            override = args[0] if args else None
            args = args[1:]

        retained = self._buffer is None
        eol = self._identity.eol

        for route in self._routes.matching(level):
            template = route.template
            if level is LogLevel.TRACE:
                template += " %S"
            message = self._formatter.render(template, level, args)
            if route.is_console and eol and message.endswith(eol):
                message = message[:-len(eol)]

            if not retained:
                self._metrics["evicted"] += self._buffer.append(LogEntry(level, message))
                self._metrics["retained"] += 1
                retained = True
            if self._retain_only and self._buffer is not None:
                continue

            channel = route.console_channel
            if channel is not None:
                if self._console_no_format and channel != "trace":
                    self._write_console(channel, level, *args)
                else:
                    self._write_console(channel, level, message)
            else:
                self._write_file(route.sink, level, override, message)

    def _resolve_path(self, sink: str, level: LogLevel, override: Optional[str]) -> str:
        """Expand file path tokens and apply the log location."""
        path = sink if override is None else _as_path(override)
        if "%" in path:
            replacements = {
                "%p": str(self._identity.pid),
                "%h": self._identity.hostname,
                "%L": level.label,
            }
            if level is LogLevel.FILE:
                replacements["%l"] = self._location
            for token, value in replacements.items():
                path = path.replace(token, value)
        if level is not LogLevel.FILE:
            path = os.path.join(self._location, path)
        return path

    def _write_console(self, channel: str, level: LogLevel, *args: Any) -> None:
        try:
            self._console.write(channel, *args)
            self._metrics["dispatched"] += 1
        except Exception as e:
            self._report(SinkWriteError(f"console:{channel}", level, e))

    def _write_file(self, sink: str, level: LogLevel, override: Any, message: str) -> None:
        path = sink
        try:
            path = self._resolve_path(sink, level, override)
            self._file_writer.append(path, message)
            self._metrics["dispatched"] += 1
        except Exception as e:
            self._report(SinkWriteError(path, level, e))

    def _report(self, error: SinkWriteError) -> None:
        """Surface a sink failure without raising into the caller."""
        self._metrics["sink_errors"] += 1
        if self._error_handler is not None:
            try:
                self._error_handler(error)
                return
            except Exception as e:
                error = SinkWriteError(error.sink, error.level, e)
        try:
            print(f"Writer error: {error}", file=sys.stderr)
        except Exception:
            # stderr itself is unusable
            pass

    def get_metrics(self) -> Dict[str, int]:
        """Get logging metrics."""
        with self._lock:
            return self._metrics.copy()

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"Logger(routes={len(self._routes)}, debug={self._do_debug}, "
            f"trace={self._do_trace}, debug_level={self._debug_level}, "
            f"retention={self._buffer!r})"
        )
