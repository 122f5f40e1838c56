"""
Template formatter with %-token substitution

Tokens:
    %t  local timestamp, YYYY-MM-DD HH:MM:SS
    %T  ISO 8601 UTC timestamp with milliseconds
    %j  JSON timestamp (same shape as %T)
    %p  process id
    %h  hostname
    %L  level label (empty for the file level)
    %E  platform line terminator
    %S  call stack at the logging call site
    %m  message body
"""

from datetime import datetime, timezone
import os
import re
import traceback
from typing import Any, Callable, Dict, Optional, Sequence

from retain_logger.core.log_level import LogLevel
from retain_logger.core.process_identity import ProcessIdentity
from retain_logger.formatters.base_formatter import BaseFormatter
from retain_logger.formatters.message import render_message

TOKEN_PATTERN = re.compile(r"%([tTjphLESm])")

_PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def normal_timestamp(moment: datetime) -> str:
    """Normalized local timestamp without fractions or zone."""
    return moment.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def iso_timestamp(moment: datetime) -> str:
    """UTC timestamp in the 2024-01-31T12:00:00.000Z form."""
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def capture_stack() -> str:
    """Format the current call stack, leaving out frames of this package."""
    frames = [
        frame for frame in traceback.extract_stack()
        if not os.path.abspath(frame.filename).startswith(_PACKAGE_DIR + os.sep)
    ]
    return "Stack (most recent call last):\n" + "".join(traceback.format_list(frames)).rstrip("\n")


class TemplateFormatter(BaseFormatter):
    """
    Expand %-tokens in a template.

    Each token value is computed at most once per render and only when the
    template references it, so a stack capture costs nothing unless %S is
    used. Unknown tokens are left untouched. Substituted values are never
    re-scanned, so a message containing "%p" is emitted literally.
    """

    def __init__(
        self,
        identity: Optional[ProcessIdentity] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize template formatter.

        Args:
            identity: Process identity for %p, %h and %E (default: current)
            clock: Returns an aware datetime for "now" (default: UTC now)

        Example:
            formatter = TemplateFormatter()
            formatter.render("[%L] %m", LogLevel.INFO, ["hello", 42])
            # -> "[info] hello 42"
        """
        self.identity = identity or ProcessIdentity.current()
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def render(self, template: str, level: LogLevel, args: Sequence[Any]) -> str:
        """
        Render a log call.

        Args:
            template: Format template
            level: Level of the log call
            args: Message arguments

        Returns:
            Rendered line
        """
        values: Dict[str, str] = {}
        moment: Dict[str, datetime] = {}

        def now() -> datetime:
            if "now" not in moment:
                moment["now"] = self.clock()
            return moment["now"]

        producers: Dict[str, Callable[[], str]] = {
            "t": lambda: normal_timestamp(now()),
            "T": lambda: iso_timestamp(now()),
            "j": lambda: iso_timestamp(now()),
            "p": lambda: str(self.identity.pid),
            "h": lambda: self.identity.hostname,
            "L": lambda: level.label,
            "E": lambda: self.identity.eol,
            "S": capture_stack,
            "m": lambda: render_message(args),
        }

        def substitute(match: "re.Match") -> str:
            token = match.group(1)
            if token not in values:
                values[token] = producers[token]()
            return values[token]

        return TOKEN_PATTERN.sub(substitute, template)

    def __repr__(self) -> str:
        """String representation."""
        return f"TemplateFormatter(pid={self.identity.pid}, hostname={self.identity.hostname!r})"
