"""Exceptions raised inside the dispatch pipeline"""

from typing import Optional

from retain_logger.core.log_level import LogLevel


class SinkWriteError(Exception):
    """
    A sink failed to accept a rendered log line.

    Never propagates out of a logging call. It is handed to the logger's
    error handler, or reported on stderr when no handler is configured.

    Attributes:
        sink: Sink descriptor or resolved file path that failed
        level: Level of the log call being dispatched
        cause: Underlying exception raised by the writer
    """

    def __init__(self, sink: str, level: Optional[LogLevel], cause: BaseException):
        self.sink = sink
        self.level = level
        self.cause = cause
        try:
            detail = str(cause)
        except Exception:
            detail = type(cause).__name__
        super().__init__(f"{sink}: {detail}")
