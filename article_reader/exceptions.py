"""
Custom exceptions for the article reader.

Error philosophy:
  - ParseError → FAIL HARD: the input could not be read or parsed as HTML.
    No partial result is produced.
  - Everything else is NOT an error: a missing <base>, a page with nothing
    worth scoring, or an absent attribute all degrade to a best-effort
    result, with any notable fallback recorded in ExtractionResult.warnings.
"""

from typing import Optional


class ReaderError(Exception):
    """Base exception for all article reader errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ParseError(ReaderError):
    """
    Raised when the page cannot be turned into a document tree.

    Covers I/O failures while reading the source stream, unsupported input
    types, and the case where every parser in the fallback chain fails.
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        details: Optional[dict] = None
    ):
        super().__init__(message, details)
        self.source = source  # file path or stream description, when known

    def to_response(self) -> dict:
        """Convert to the error entry the CLI reports per file."""
        return {
            "error": "ParseError",
            "message": self.message,
            "source": self.source,
            "details": self.details
        }
