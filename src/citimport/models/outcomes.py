"""Per-record import outcomes and their line-numbered diagnostics."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class Severity(StrEnum):
    """Advisory severity of a diagnostic. Nothing escalates on it."""

    INFO = "Info"
    WARNING = "Warning"
    ERROR = "Error"


class ImportResult(StrEnum):
    """Final disposition of one citation record."""

    IMPORTED = "Imported"
    DUPLICATE = "Duplicate"
    ERROR = "Error"


@dataclass(frozen=True)
class Diagnostic:
    """One condition observed while importing a record.

    Attributes
    ----------
    line_number : int
        1-based source line at which the condition was observed.
    severity : Severity
        Info, Warning or Error.
    text : str
        Human-readable explanation.
    """

    line_number: int
    severity: Severity
    text: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-ready dictionary."""
        return {
            "lineNumber": self.line_number,
            "severity": str(self.severity),
            "text": self.text,
        }


@dataclass
class ImportOutcome:
    """Report entry for one input citation record.

    ``messages`` is append-only and keeps insertion order. ``result`` is
    always set once the record has reached its ``ER`` boundary.

    Attributes
    ----------
    id : int | None
        Identifier of the created publication, absent on failure.
    label : str | None
        Title of the record, once known.
    result : ImportResult | None
        Imported, Duplicate or Error.
    messages : list[Diagnostic]
        Diagnostics in the order they were raised.
    """

    id: int | None = None
    label: str | None = None
    result: ImportResult | None = None
    messages: list[Diagnostic] = field(default_factory=list)

    def add_message(self, line_number: int, severity: Severity, text: str) -> Diagnostic:
        """Append a diagnostic and return it."""
        diagnostic = Diagnostic(line_number, severity, text)
        self.messages.append(diagnostic)
        return diagnostic

    def count(self, severity: Severity) -> int:
        """Count messages of the given severity."""
        return sum(1 for m in self.messages if m.severity is severity)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-ready dictionary."""
        return {
            "id": self.id,
            "label": self.label,
            "result": str(self.result) if self.result is not None else None,
            "messages": [m.to_dict() for m in self.messages],
        }
