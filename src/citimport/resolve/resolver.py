"""Journal identity cross-check and selection."""

from dataclasses import dataclass

from citimport.models import Journal
from citimport.parse.accumulator import RecordAccumulator


@dataclass(frozen=True)
class JournalCandidate:
    """An existing journal found through one identifying key.

    Attributes
    ----------
    key_name : str
        "issn", "title" or "abbreviation".
    key_value : str | None
        The value that was looked up.
    journal : Journal | None
        Resolved journal, if any.
    """

    key_name: str
    key_value: str | None
    journal: Journal | None


@dataclass(frozen=True)
class JournalConflict:
    """Two keys resolved to different existing journals."""

    first: JournalCandidate
    second: JournalCandidate

    def describe(self) -> str:
        """Human-readable warning text."""
        return (
            f"Journal {self.first.key_name} '{self.first.key_value}' and "
            f"{self.second.key_name} '{self.second.key_value}' point to different existing "
            f"database records (Journal#{self.first.journal.id} and "
            f"Journal#{self.second.journal.id})"
        )


def journal_candidates(acc: RecordAccumulator) -> tuple[JournalCandidate, ...]:
    """Candidates in selection priority order: ISSN, title, abbreviation."""
    return (
        JournalCandidate("issn", acc.journal_issn, acc.journal_by_issn),
        JournalCandidate("title", acc.journal_title, acc.journal_by_title),
        JournalCandidate("abbreviation", acc.journal_abbreviation, acc.journal_by_abbreviation),
    )


def compare_journals(candidates: tuple[JournalCandidate, ...]) -> list[JournalConflict]:
    """Pairwise compare resolved candidates.

    Parameters
    ----------
    candidates : tuple[JournalCandidate, ...]
        Candidates in priority order.

    Returns
    -------
    list[JournalConflict]
        One entry per pair that both resolved but to different ids, in
        pair order (issn/title, issn/abbreviation, title/abbreviation).
    """
    conflicts: list[JournalConflict] = []
    for i, first in enumerate(candidates):
        for second in candidates[i + 1 :]:
            if first.journal is None or second.journal is None:
                continue
            if first.journal.id != second.journal.id:
                conflicts.append(JournalConflict(first, second))
    return conflicts


def select_journal(candidates: tuple[JournalCandidate, ...]) -> Journal | None:
    """Return the first resolved journal in priority order."""
    for candidate in candidates:
        if candidate.journal is not None:
            return candidate.journal
    return None
