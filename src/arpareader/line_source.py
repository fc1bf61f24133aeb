"""Sequential line reading for ARPA files"""

import gzip
import os
import sys
from typing import Optional, TextIO, Union

from arpareader.errors import ArpaIOError

Source = Union[str, "os.PathLike[str]", TextIO]


class LineSource:
    """Supplies the lines of an ARPA file one at a time.

    The source may be a path, "-" for standard input, or an open text stream.
    Paths ending in .gz are decompressed on the fly. Only streams opened here
    are closed by close().

    Example:
        with LineSource("model.arpa.gz") as lines:
            while (line := lines.read_line()) is not None:
                ...
    """

    def __init__(self, source: Source, encoding: str = "utf-8"):
        self.source = source
        self.encoding = encoding
        self.line_number = 0
        self._stream: Optional[TextIO] = None
        self._owns_stream = False

    @property
    def name(self) -> str:
        if isinstance(self.source, (str, os.PathLike)):
            return "<stdin>" if self.source == "-" else os.fspath(self.source)
        return getattr(self.source, "name", "<stream>")

    def open(self) -> "LineSource":
        self.line_number = 0
        if not isinstance(self.source, (str, os.PathLike)):
            self._stream = self.source
            self._owns_stream = False
            return self
        if self.source == "-":
            self._stream = sys.stdin
            self._owns_stream = False
            return self

        path = os.fspath(self.source)
        try:
            if path.endswith(".gz"):
                self._stream = gzip.open(path, "rt", encoding=self.encoding)
            else:
                self._stream = open(path, encoding=self.encoding)
        except OSError as e:
            raise ArpaIOError(f"Cannot open {path}: {e}") from e
        self._owns_stream = True
        return self

    def read_line(self) -> Optional[str]:
        """Return the next line without its line ending, or None at end of input."""
        if self._stream is None:
            raise ArpaIOError(f"{self.name} is not open")
        try:
            line = self._stream.readline()
        except (OSError, EOFError, UnicodeDecodeError) as e:
            raise ArpaIOError(f"Cannot read {self.name}: {e}", line_number=self.line_number + 1) from e
        if not line:
            return None
        self.line_number += 1
        return line.rstrip("\r\n")

    def close(self) -> None:
        if self._stream is not None and self._owns_stream:
            self._stream.close()
        self._stream = None
        self._owns_stream = False

    def __enter__(self) -> "LineSource":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
