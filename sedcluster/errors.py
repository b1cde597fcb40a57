"""
Error types for distance computation, persistence and lookup.

Every failure propagates to the caller synchronously; nothing is retried.
"""

from typing import Optional, Any, Dict


class SedError(Exception):
    """
    Base exception for all sedcluster errors.

    Carries a structured ``details`` dict alongside the message so callers
    (the CLI, tests) can report context without parsing strings.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize error.

        Args:
            message: Error message
            details: Optional detailed error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InputNotFoundError(SedError):
    """Raised when the corpus file is missing or unreadable."""

    def __init__(self, message: str, path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.path = path
        self.details.update({'path': path})


class ArtifactNotFoundError(SedError):
    """Raised when a lookup needs the distance file and it does not exist."""

    def __init__(self, message: str, path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.path = path
        self.details.update({'path': path})


class MalformedRecordError(SedError):
    """
    Raised when a recognized ``(i,j)`` record carries an unusable value.

    Unrecognized lines are skipped by the reader; this error is only for
    lines that look like records but are corrupt.
    """

    def __init__(self, message: str,
                 line_number: Optional[int] = None,
                 line: Optional[str] = None,
                 path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.line_number = line_number
        self.line = line
        self.path = path

        self.details.update({
            'line_number': line_number,
            'line': line,
            'path': path
        })


class PairNotFoundError(SedError):
    """Raised when a requested pair was never computed or persisted."""

    def __init__(self, i: int, j: int, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"No distance stored for pair ({i},{j})", details)
        self.pair = (i, j)
        self.details.update({'pair': self.pair})


class InvalidIndexError(SedError, ValueError):
    """Raised when a corpus index is below 1 (indices are 1-based line numbers)."""

    def __init__(self, index: Any, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Corpus indices are 1-based, got {index!r}", details)
        self.index = index
        self.details.update({'index': index})


__all__ = [
    'SedError',
    'InputNotFoundError',
    'ArtifactNotFoundError',
    'MalformedRecordError',
    'PairNotFoundError',
    'InvalidIndexError',
]
