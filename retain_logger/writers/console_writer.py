"""Console writer with per-channel streams"""

import sys
from typing import Any, Optional, TextIO

from retain_logger.formatters.message import stringify_argument

CHANNELS = ("log", "info", "warn", "error", "debug", "trace")

# Channels written to stderr; the rest go to stdout
_STDERR_CHANNELS = frozenset({"warn", "error"})


class ConsoleWriter:
    """
    Write log lines to the console.

    Each call writes its arguments separated by spaces and terminated by a
    newline. warn and error go to stderr, every other channel to stdout.
    """

    def __init__(self, stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None):
        """
        Initialize console writer.

        Args:
            stdout: Stream for log/info/debug/trace (default: sys.stdout at write time)
            stderr: Stream for warn/error (default: sys.stderr at write time)
        """
        self._stdout = stdout
        self._stderr = stderr

    def stream_for(self, channel: str) -> TextIO:
        """Resolve the stream backing a channel."""
        if channel in _STDERR_CHANNELS:
            return self._stderr or sys.stderr
        return self._stdout or sys.stdout

    def write(self, channel: str, *args: Any) -> None:
        """
        Write arguments to a channel.

        Args:
            channel: One of log, info, warn, error, debug, trace

        Raises:
            ValueError: If channel is unknown
        """
        if channel not in CHANNELS:
            raise ValueError(f"Unknown console channel: {channel}")
        line = " ".join(
            arg if isinstance(arg, str) else stringify_argument(arg) for arg in args
        )
        stream = self.stream_for(channel)
        stream.write(line + "\n")
        stream.flush()

    def flush(self):
        """Flush streams."""
        self.stream_for("log").flush()
        self.stream_for("error").flush()

    def __repr__(self) -> str:
        """String representation."""
        return "ConsoleWriter()"
