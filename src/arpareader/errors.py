"""Errors raised while reading ARPA files

Every failure is fatal: the parse is abandoned at the point of detection.
Each exception raised carries an ErrorKind so callers can branch on the kind of
failure without matching on classes.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    IO = "io"
    HEADER_FORMAT = "header_format"
    ENTRY_FORMAT = "entry_format"
    CANCELLED = "cancelled"


class ArpaReadError(Exception):
    """Base class for all ARPA reading failures"""

    kind: Optional[ErrorKind] = None

    def __init__(self, message: str, line_number: Optional[int] = None, line: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.line_number = line_number
        self.line = line

    def __str__(self) -> str:
        text = self.message
        if self.line_number is not None:
            text = f"line {self.line_number}: {text}"
        if self.line is not None:
            text = f"{text}: {self.line!r}"
        return text


class ArpaIOError(ArpaReadError):
    """Raised when the source cannot be opened or read"""

    kind = ErrorKind.IO


class ArpaFormatError(ArpaReadError, ValueError):
    """Raised when the input is not valid ARPA text"""


class HeaderFormatError(ArpaFormatError):
    """Bad n-gram count in the header, or no \\1-grams: section"""

    kind = ErrorKind.HEADER_FORMAT


class EntryFormatError(ArpaFormatError):
    """Bad n-gram entry line"""

    kind = ErrorKind.ENTRY_FORMAT


class ParseCancelled(ArpaReadError):
    """Raised when a parse is stopped through its cancel event"""

    kind = ErrorKind.CANCELLED
