"""Tests for journal identity cross-check and selection."""

import pytest

from citimport.models import Journal, PublicationKind
from citimport.parse import RecordAccumulator
from citimport.resolve import compare_journals, journal_candidates, select_journal

J1 = Journal(id=1, title="Journal of Climate", abbreviation="J. Clim.", issn="0894-8755")
J2 = Journal(id=2, title="Climate Dynamics", abbreviation="Clim. Dyn.", issn="0930-7575")


def _acc(**fields) -> RecordAccumulator:
    return RecordAccumulator(kind=PublicationKind.JOUR, title="T", **fields)


@pytest.mark.unit
def test_candidates_in_priority_order() -> None:
    """Test candidates are ISSN, title, abbreviation."""
    candidates = journal_candidates(_acc())

    assert [c.key_name for c in candidates] == ["issn", "title", "abbreviation"]


@pytest.mark.unit
def test_all_agree_no_conflict() -> None:
    """Test candidates resolving to the same journal do not conflict."""
    acc = _acc(
        journal_issn="0894-8755",
        journal_by_issn=J1,
        journal_title="Journal of Climate",
        journal_by_title=J1,
    )

    assert compare_journals(journal_candidates(acc)) == []
    assert select_journal(journal_candidates(acc)) == J1


@pytest.mark.unit
def test_pairwise_conflicts_in_pair_order() -> None:
    """Test each disagreeing resolved pair is reported once, in pair order."""
    acc = _acc(
        journal_issn="0930-7575",
        journal_by_issn=J2,
        journal_title="Journal of Climate",
        journal_by_title=J1,
        journal_abbreviation="J. Clim.",
        journal_by_abbreviation=J1,
    )

    conflicts = compare_journals(journal_candidates(acc))

    assert [(c.first.key_name, c.second.key_name) for c in conflicts] == [
        ("issn", "title"),
        ("issn", "abbreviation"),
    ]
    assert conflicts[0].describe() == (
        "Journal issn '0930-7575' and title 'Journal of Climate' point to different "
        "existing database records (Journal#2 and Journal#1)"
    )
    assert select_journal(journal_candidates(acc)) == J2


@pytest.mark.unit
def test_unresolved_candidates_ignored() -> None:
    """Test candidates that did not resolve never conflict and are not selected."""
    acc = _acc(journal_title="Unknown", journal_abbreviation="Clim. Dyn.", journal_by_abbreviation=J2)

    assert compare_journals(journal_candidates(acc)) == []
    assert select_journal(journal_candidates(acc)) == J2
    assert select_journal(journal_candidates(_acc())) is None
