"""Import report serialization.

A report is a single JSON document::

    {"summary": {...}, "records": [...], "discarded": [...]}

``records`` holds one entry per completed record (``ER`` with a live
record), ``discarded`` the outcomes of records that never completed.
The layout is described by ``schemas/import_report.schema.json``.
"""

import json
from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from citimport.models import ImportOutcome, ImportResult, Severity
from citimport.utils import get_iso_timestamp

__all__ = ["ImportSummary", "summarize", "outcomes_to_json", "build_report", "write_report"]


@dataclass
class ImportSummary:
    """Counts over the outcomes of one import.

    Attributes
    ----------
    records_total : int
        Completed records.
    imported : int
        Records with result Imported.
    duplicates : int
        Records with result Duplicate.
    errors : int
        Records with result Error.
    discarded : int
        Records that never reached a matching ``ER``.
    messages : dict[str, int]
        Diagnostic counts by severity, over completed and discarded records.
    timestamp : str
        ISO-8601 time the summary was taken.
    """

    records_total: int = 0
    imported: int = 0
    duplicates: int = 0
    errors: int = 0
    discarded: int = 0
    messages: dict[str, int] = field(default_factory=dict)
    timestamp: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    def counters(self) -> dict[str, int]:
        """Flat integer counters, for audit events."""
        return {
            "records_total": self.records_total,
            "imported": self.imported,
            "duplicates": self.duplicates,
            "errors": self.errors,
            "discarded": self.discarded,
        }


def summarize(
    outcomes: Sequence[ImportOutcome],
    discarded: Sequence[ImportOutcome] = (),
) -> ImportSummary:
    """Count results and diagnostic severities.

    Parameters
    ----------
    outcomes : Sequence[ImportOutcome]
        Completed records.
    discarded : Sequence[ImportOutcome], optional
        Records that never completed.

    Returns
    -------
    ImportSummary
        Counts, stamped with the current time.
    """
    by_result = {result: 0 for result in ImportResult}
    for outcome in outcomes:
        if outcome.result is not None:
            by_result[outcome.result] += 1

    messages = {str(severity): 0 for severity in Severity}
    for outcome in (*outcomes, *discarded):
        for severity in Severity:
            messages[str(severity)] += outcome.count(severity)

    return ImportSummary(
        records_total=len(outcomes),
        imported=by_result[ImportResult.IMPORTED],
        duplicates=by_result[ImportResult.DUPLICATE],
        errors=by_result[ImportResult.ERROR],
        discarded=len(discarded),
        messages=messages,
        timestamp=get_iso_timestamp(),
    )


def outcomes_to_json(outcomes: Iterable[ImportOutcome]) -> list[dict[str, Any]]:
    """Render outcomes as JSON-ready dictionaries, in order."""
    return [outcome.to_dict() for outcome in outcomes]


def build_report(
    outcomes: Sequence[ImportOutcome],
    discarded: Sequence[ImportOutcome] = (),
    source: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Assemble the report document.

    Parameters
    ----------
    outcomes : Sequence[ImportOutcome]
        Completed records.
    discarded : Sequence[ImportOutcome], optional
        Records that never completed.
    source : dict[str, Any] | None, optional
        Input file metadata (path, digest, mtime), if known.

    Returns
    -------
    dict[str, Any]
        Report with ``summary``, ``records`` and ``discarded`` keys.
    """
    report: dict[str, Any] = {
        "summary": summarize(outcomes, discarded).to_dict(),
        "records": outcomes_to_json(outcomes),
        "discarded": outcomes_to_json(discarded),
    }
    if source is not None:
        report["source"] = source
    return report


def write_report(
    outcomes: Sequence[ImportOutcome],
    path: Path,
    discarded: Sequence[ImportOutcome] = (),
    source: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Write the report document as indented UTF-8 JSON.

    Returns
    -------
    dict[str, Any]
        The document written.
    """
    report = build_report(outcomes, discarded, source)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(report, f, indent=2, ensure_ascii=False)
        f.write("\n")
    return report
