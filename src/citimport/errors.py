"""Call-level exceptions raised by citimport.

Per-tag and per-record problems never raise; they are reported as
diagnostics on the record's outcome. Only the conditions below abort an
import call.
"""

__all__ = ["CitImportError", "StreamReadError", "InvalidMasterError"]


class CitImportError(Exception):
    """Base class for call-level import failures."""


class StreamReadError(CitImportError):
    """The input stream could not be read; no further records are available."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        """Initialize stream read error.

        Parameters
        ----------
        message : str
            Error message.
        line_number : int | None, optional
            Last line successfully read before the failure.
        """
        super().__init__(message)
        self.line_number = line_number


class InvalidMasterError(CitImportError):
    """A master topic or record id is unknown or cannot be linked to imported records."""
