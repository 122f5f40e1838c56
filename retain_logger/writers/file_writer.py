"""File writer"""

from pathlib import Path
from typing import Union


class FileWriter:
    """
    Append log lines to files.

    Paths are resolved per call, so no handle is kept open between writes.
    The text is written verbatim; line terminators come from the template.
    """

    def __init__(self, encoding: str = "utf-8", make_dirs: bool = True):
        """
        Initialize file writer.

        Args:
            encoding: File encoding (default: 'utf-8')
            make_dirs: Create missing parent directories before writing
        """
        self.encoding = encoding
        self.make_dirs = make_dirs

    def append(self, filepath: Union[str, Path], text: str) -> None:
        """
        Append text to a file, creating it if absent.

        Args:
            filepath: Target file
            text: Text to append

        Raises:
            OSError: If the file cannot be opened or written
        """
        path = Path(filepath)
        if self.make_dirs:
            path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding=self.encoding, newline="") as f:
            f.write(text)

    def __repr__(self) -> str:
        """String representation."""
        return f"FileWriter(encoding={self.encoding!r})"
