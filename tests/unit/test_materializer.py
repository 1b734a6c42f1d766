"""Tests for end-of-record entity materialization and persistence results."""

from unittest.mock import patch

import pytest

from citimport.iso4 import Iso4Abbreviator
from citimport.linking import MasterContext, MasterLink
from citimport.models import (
    EntityKind,
    ImportOutcome,
    ImportResult,
    PublicationKind,
    PublisherInput,
    Severity,
)
from citimport.parse import RecordAccumulator
from citimport.resolve import (
    Created,
    DuplicateConflict,
    EntityMaterializer,
    PersistenceFailure,
    attempt,
)
from citimport.store import ConstraintViolationError, InMemoryStore

LINE = 12


def _materializer(store: InMemoryStore, master: MasterContext | None = None) -> EntityMaterializer:
    return EntityMaterializer(store, Iso4Abbreviator(), master or MasterContext())


def _record(**fields) -> RecordAccumulator:
    fields.setdefault("title", "Cloud feedbacks")
    return RecordAccumulator(kind=fields.pop("kind", PublicationKind.JOUR), **fields)


def _texts(outcome: ImportOutcome, severity: Severity) -> list[str]:
    return [m.text for m in outcome.messages if m.severity is severity]


# ---------------------------------------------------------------------------
# attempt()
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_attempt_classifies_outcomes(store: InMemoryStore) -> None:
    """Test store exceptions become result values with sanitized messages."""
    created = attempt(store.create_publisher, PublisherInput(name="AMS"))
    duplicate = attempt(store.create_publisher, PublisherInput(name="ams"))
    violation = attempt(store.create_publisher, PublisherInput(name=" "))

    assert isinstance(created, Created)
    assert created.entity.name == "AMS"
    assert duplicate == DuplicateConflict("Duplicate entry 'ams' for key 'publisher.name'")
    assert violation == PersistenceFailure("Column 'name' cannot be null", constraint=True)


@pytest.mark.unit
def test_attempt_generic_failure() -> None:
    """Test unexpected exceptions are generic failures naming the exception type."""

    def boom(data: object) -> object:
        raise RuntimeError("connection lost [insert into x]")

    result = attempt(boom, None)

    assert result == PersistenceFailure("RuntimeError: connection lost", constraint=False)


# ---------------------------------------------------------------------------
# Validity gate
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_incomplete_record_creates_nothing(store: InMemoryStore) -> None:
    """Test a record without title creates no entities."""
    acc = RecordAccumulator(kind=PublicationKind.JOUR, publisher_name="AMS", journal_title="J")
    outcome = _materializer(store).complete(acc, ImportOutcome(), LINE)

    assert outcome.result is ImportResult.ERROR
    assert store.publishers == {}
    assert store.journals == {}
    assert store.publications == {}


# ---------------------------------------------------------------------------
# Publisher and journal
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_creates_publisher_then_journal_then_publication(store: InMemoryStore) -> None:
    """Test dependent entities are created in referential order."""
    acc = _record(
        publisher_name="American Meteorological Society",
        publisher_location="Boston",
        journal_title="Journal of Climate",
        journal_issn="0894-8755",
    )
    outcome = _materializer(store).complete(acc, ImportOutcome(), LINE)

    publisher = next(iter(store.publishers.values()))
    journal = next(iter(store.journals.values()))
    assert publisher.location == "Boston"
    assert journal.publisher_id == publisher.id
    assert journal.abbreviation == "J. Clim."
    assert journal.issn == "0894-8755"
    assert journal.notes == (
        "Auto-created while importing Publication 'Cloud feedbacks'. Please complete manually."
    )
    assert store.publications[outcome.id]["journal_id"] == journal.id
    assert publisher.id < journal.id < outcome.id
    assert _texts(outcome, Severity.INFO) == [
        f"Created new Publisher#{publisher.id} with name 'American Meteorological Society'",
        f"Created new Journal#{journal.id} with title 'Journal of Climate'",
        f"Created new Publication#{outcome.id} with title 'Cloud feedbacks'",
    ]
    assert all(m.line_number == LINE for m in outcome.messages)


@pytest.mark.unit
def test_new_journal_without_publisher_warns(store: InMemoryStore) -> None:
    """Test a created journal with no PB tag warns."""
    acc = _record(journal_title="Journal of Climate")
    outcome = _materializer(store).complete(acc, ImportOutcome(), LINE)

    journal = next(iter(store.journals.values()))
    assert _texts(outcome, Severity.WARNING) == [
        f"No Publisher name specified for Journal#{journal.id} (missing PB tag?)."
    ]


@pytest.mark.unit
def test_existing_journal_without_publisher_warns(store: InMemoryStore) -> None:
    """Test selecting an existing journal with no publisher warns and inherits peer review."""
    journal = store.add_journal("Journal of Climate", issn="0894-8755", peer_reviewed=True)
    acc = _record(journal_issn="0894-8755", journal_by_issn=journal)
    outcome = _materializer(store).complete(acc, ImportOutcome(), LINE)

    assert _texts(outcome, Severity.WARNING) == [
        f"No Publisher associated with existing Journal#{journal.id}"
    ]
    assert store.publications[outcome.id]["peer_reviewed"] is True
    assert len(store.journals) == 1


@pytest.mark.unit
def test_issn_candidate_has_priority(store: InMemoryStore) -> None:
    """Test ISSN-resolved journal wins over the title-resolved one."""
    by_issn = store.add_journal("Journal A", issn="1111-1111")
    by_title = store.add_journal("Journal B")
    acc = _record(
        journal_issn="1111-1111",
        journal_by_issn=by_issn,
        journal_title="Journal B",
        journal_by_title=by_title,
    )
    outcome = _materializer(store).complete(acc, ImportOutcome(), LINE)

    assert store.publications[outcome.id]["journal_id"] == by_issn.id
    assert any("Journal issn '1111-1111' and title 'Journal B'" in t for t in _texts(outcome, Severity.WARNING))


@pytest.mark.unit
def test_publisher_failure_does_not_stop_record(store: InMemoryStore) -> None:
    """Test a failed publisher creation is an Error diagnostic and the record continues."""
    acc = _record(publisher_name="AMS", journal_title="Journal of Climate")
    with patch.object(
        store, "create_publisher", side_effect=ConstraintViolationError("name too long [insert into publisher]")
    ):
        outcome = _materializer(store).complete(acc, ImportOutcome(), LINE)

    assert "Failed to create Publisher 'AMS': name too long" in _texts(outcome, Severity.ERROR)
    assert outcome.result is ImportResult.IMPORTED
    assert next(iter(store.journals.values())).publisher_id is None


@pytest.mark.unit
def test_journal_failure_keeps_publisher(store: InMemoryStore) -> None:
    """Test entities created earlier in the record stay created when a later step fails."""
    store.add_journal("Other", abbreviation="J. Clim.")
    acc = _record(publisher_name="AMS", journal_title="Journal of Climate")
    outcome = _materializer(store).complete(acc, ImportOutcome(), LINE)

    assert len(store.publishers) == 1
    errors = _texts(outcome, Severity.ERROR)
    assert errors == [
        "Failed to create Journal 'Journal of Climate': "
        "Duplicate entry 'J. Clim.' for key 'journal.abbreviation'"
    ]
    assert outcome.result is ImportResult.IMPORTED
    assert store.publications[outcome.id]["journal_id"] is None


# ---------------------------------------------------------------------------
# Publication
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_constraint_violation_is_error(store: InMemoryStore) -> None:
    """Test a constraint violation on the publication is an Error result."""
    acc = _record(title="x" * 1001)
    outcome = _materializer(store).complete(acc, ImportOutcome(), LINE)

    assert outcome.result is ImportResult.ERROR
    assert _texts(outcome, Severity.ERROR) == [
        "Imported record violates a constraint: Data too long for column 'title'"
    ]


@pytest.mark.unit
def test_generic_failure_is_error(store: InMemoryStore) -> None:
    """Test an unexpected store failure is an Error result with generic wording."""
    acc = _record()
    with patch.object(store, "create_publication", side_effect=OSError("disk full")):
        outcome = _materializer(store).complete(acc, ImportOutcome(), LINE)

    assert outcome.result is ImportResult.ERROR
    assert _texts(outcome, Severity.ERROR) == ["Error persisting Publication: OSError: disk full"]


@pytest.mark.unit
def test_unknown_authors_placeholder(store: InMemoryStore) -> None:
    """Test records without authors are stored with the unknown placeholder."""
    outcome = _materializer(store).complete(_record(), ImportOutcome(), LINE)

    assert store.publications[outcome.id]["author_names"] == "(unknown)"


# ---------------------------------------------------------------------------
# Links
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_link_failure_keeps_imported_result(store: InMemoryStore, topic_id: int) -> None:
    """Test a failed link is an Error diagnostic but the publication stays Imported."""
    master = MasterContext(topic_id=topic_id, record=MasterLink(to_entity_id=999))
    outcome = _materializer(store, master).complete(_record(), ImportOutcome(), LINE)

    assert outcome.result is ImportResult.IMPORTED
    assert outcome.id in store.publications
    errors = _texts(outcome, Severity.ERROR)
    assert errors == [
        "Error creating record link: Cannot add or update a child row: "
        "a foreign key constraint fails (entity_link.to_entity_id)"
    ]
    assert len(store.links) == 1


@pytest.mark.unit
def test_record_link_direction(store: InMemoryStore) -> None:
    """Test a 'to' master record becomes the link target."""
    quote_id = store.add_entity(EntityKind.QUO, "A quotation")
    master = MasterContext(record=MasterLink(to_entity_id=quote_id))
    outcome = _materializer(store, master).complete(_record(), ImportOutcome(), LINE)

    link = next(iter(store.links.values()))
    assert (link.from_entity_id, link.to_entity_id) == (outcome.id, quote_id)
