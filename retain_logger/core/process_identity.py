"""Process identity lookups, resolved once per logger"""

from dataclasses import dataclass, field
import os
import socket


@dataclass(frozen=True)
class ProcessIdentity:
    """Process id, hostname and line terminator of the running process."""

    pid: int = field(default_factory=os.getpid)
    hostname: str = field(default_factory=socket.gethostname)
    eol: str = os.linesep

    @classmethod
    def current(cls) -> "ProcessIdentity":
        """Snapshot the identity of the current process."""
        return cls()
