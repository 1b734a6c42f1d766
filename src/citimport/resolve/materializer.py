"""End-of-record entity materialization.

At each ``ER`` boundary the accumulated record is turned into stored
entities, in referential order: publisher, journal, publication, then
links to the master entities. Every creation is an independent
persistence operation; a failure is reported on the record's outcome and
never retracts what was already created.
"""

from citimport.audit import AuditLogger
from citimport.iso4 import Iso4Abbreviator
from citimport.linking import MasterContext
from citimport.models import (
    EntityLinkInput,
    ImportOutcome,
    ImportResult,
    Journal,
    JournalInput,
    Publication,
    PublicationInput,
    Publisher,
    PublisherInput,
    Severity,
)
from citimport.normalize import (
    AUTHOR_LIMIT,
    KEYWORD_LIMIT,
    normalize_authors,
    normalize_keywords,
)
from citimport.parse.accumulator import RecordAccumulator
from citimport.resolve.resolver import compare_journals, journal_candidates, select_journal
from citimport.resolve.results import Created, DuplicateConflict, attempt
from citimport.store.protocols import Mutation

__all__ = ["EntityMaterializer", "DEFAULT_JOURNAL_NOTES"]

DEFAULT_JOURNAL_NOTES = "Auto-created while importing Publication '{title}'. Please complete manually."


class EntityMaterializer:
    """Persist one completed record and its dependent entities.

    Parameters
    ----------
    mutation : Mutation
        Entity creation collaborator.
    abbreviator : Iso4Abbreviator
        Derives abbreviations for auto-created journals.
    master : MasterContext
        Master topic and record to link each publication to.
    author_limit : int, optional
        Storage limit for newline-joined author names.
    keyword_limit : int, optional
        Storage limit for comma-joined keywords.
    journal_notes_template : str, optional
        Notes for auto-created journals; ``{title}`` is the publication title.
    audit_logger : AuditLogger | None, optional
        Receives ``entity_created`` and ``entity_failed`` events.
    """

    def __init__(
        self,
        mutation: Mutation,
        abbreviator: Iso4Abbreviator,
        master: MasterContext,
        author_limit: int = AUTHOR_LIMIT,
        keyword_limit: int = KEYWORD_LIMIT,
        journal_notes_template: str = DEFAULT_JOURNAL_NOTES,
        audit_logger: AuditLogger | None = None,
    ) -> None:
        """Initialize materializer."""
        self.mutation = mutation
        self.abbreviator = abbreviator
        self.master = master
        self.author_limit = author_limit
        self.keyword_limit = keyword_limit
        self.journal_notes_template = journal_notes_template
        self.audit_logger = audit_logger

    def complete(
        self,
        acc: RecordAccumulator | None,
        outcome: ImportOutcome,
        line_number: int,
        record_index: int = 0,
    ) -> ImportOutcome:
        """Run end-of-record processing and set the outcome's result.

        Parameters
        ----------
        acc : RecordAccumulator | None
            Accumulated fields, or None if no valid ``TY`` was seen.
        outcome : ImportOutcome
            Outcome receiving diagnostics; updated in place.
        line_number : int
            Line of the ``ER`` tag; all diagnostics are raised against it.
        record_index : int, optional
            0-based record position, for audit events.

        Returns
        -------
        ImportOutcome
            The same outcome, with ``result`` always set.
        """
        if acc is None or acc.kind is None or acc.title is None:
            outcome.add_message(
                line_number,
                Severity.ERROR,
                "Skipping incomplete record (missing/invalid TY and/or TI tags)",
            )
            outcome.result = ImportResult.ERROR
            return outcome

        outcome.label = acc.title
        publisher = self._ensure_publisher(acc, outcome, line_number, record_index)

        candidates = journal_candidates(acc)
        for conflict in compare_journals(candidates):
            outcome.add_message(line_number, Severity.WARNING, conflict.describe())

        journal = select_journal(candidates)
        if journal is not None:
            if journal.publisher_id is None:
                outcome.add_message(
                    line_number,
                    Severity.WARNING,
                    f"No Publisher associated with existing Journal#{journal.id}",
                )
        elif acc.journal_title is not None:
            journal = self._create_journal(acc, publisher, outcome, line_number, record_index)
        else:
            outcome.add_message(
                line_number,
                Severity.WARNING,
                "No Journal specified for Publication (missing JF/T2/JA/J2/JO/SN tag?)",
            )

        publication = self._create_publication(acc, journal, outcome, line_number, record_index)
        if publication is not None:
            self._create_links(publication, outcome, line_number, record_index)
        return outcome

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _ensure_publisher(
        self,
        acc: RecordAccumulator,
        outcome: ImportOutcome,
        line_number: int,
        record_index: int,
    ) -> Publisher | None:
        if acc.publisher is not None or acc.publisher_name is None:
            return acc.publisher

        result = attempt(
            self.mutation.create_publisher,
            PublisherInput(name=acc.publisher_name, location=acc.publisher_location),
        )
        if isinstance(result, Created):
            publisher = result.entity
            outcome.add_message(
                line_number,
                Severity.INFO,
                f"Created new Publisher#{publisher.id} with name '{acc.publisher_name}'",
            )
            self._created("Publisher", publisher.id, publisher.name, record_index)
            return publisher

        outcome.add_message(
            line_number,
            Severity.ERROR,
            f"Failed to create Publisher '{acc.publisher_name}': {result.message}",
        )
        self._failed("Publisher", result.message, record_index)
        return None

    def _create_journal(
        self,
        acc: RecordAccumulator,
        publisher: Publisher | None,
        outcome: ImportOutcome,
        line_number: int,
        record_index: int,
    ) -> Journal | None:
        abbreviation = acc.journal_abbreviation
        if abbreviation is None:
            abbreviation = self.abbreviator.abbreviate(acc.journal_title)

        data = JournalInput(
            title=acc.journal_title,
            abbreviation=abbreviation,
            issn=acc.journal_issn,
            publisher_id=publisher.id if publisher is not None else None,
            notes=self.journal_notes_template.format(title=acc.title),
        )
        result = attempt(self.mutation.create_journal, data)
        if not isinstance(result, Created):
            outcome.add_message(
                line_number,
                Severity.ERROR,
                f"Failed to create Journal '{acc.journal_title}': {result.message}",
            )
            self._failed("Journal", result.message, record_index)
            return None

        journal = result.entity
        outcome.add_message(
            line_number,
            Severity.INFO,
            f"Created new Journal#{journal.id} with title '{acc.journal_title}'",
        )
        self._created("Journal", journal.id, journal.title, record_index)
        if acc.publisher_name is None:
            outcome.add_message(
                line_number,
                Severity.WARNING,
                f"No Publisher name specified for Journal#{journal.id} (missing PB tag?).",
            )
        return journal

    def _create_publication(
        self,
        acc: RecordAccumulator,
        journal: Journal | None,
        outcome: ImportOutcome,
        line_number: int,
        record_index: int,
    ) -> Publication | None:
        data = PublicationInput(
            kind=acc.kind,
            title=acc.title,
            author_names=normalize_authors(acc.authors_text, self.author_limit),
            abstract=acc.abstract,
            notes=acc.notes_text,
            keywords=(
                normalize_keywords(acc.keywords_text, self.keyword_limit)
                if acc.keywords_text is not None
                else None
            ),
            journal_id=journal.id if journal is not None else None,
            peer_reviewed=journal.peer_reviewed if journal is not None else False,
            date=acc.date,
            year=acc.year,
            accessed=acc.accessed,
            doi=acc.doi,
            isbn=acc.isbn,
            url=acc.url,
            pmid=acc.pmid,
            pmcid=acc.pmcid,
        )
        result = attempt(self.mutation.create_publication, data)

        if isinstance(result, Created):
            publication = result.entity
            outcome.id = publication.id
            outcome.label = publication.title
            outcome.result = ImportResult.IMPORTED
            outcome.add_message(
                line_number,
                Severity.INFO,
                f"Created new Publication#{publication.id} with title '{publication.title}'",
            )
            self._created("Publication", publication.id, publication.title, record_index)
            return publication

        if isinstance(result, DuplicateConflict):
            outcome.result = ImportResult.DUPLICATE
            text = f"Imported record duplicates an existing Publication: {result.message}"
        elif result.constraint:
            outcome.result = ImportResult.ERROR
            text = f"Imported record violates a constraint: {result.message}"
        else:
            outcome.result = ImportResult.ERROR
            text = f"Error persisting Publication: {result.message}"
        outcome.add_message(line_number, Severity.ERROR, text)
        self._failed("Publication", result.message, record_index)
        return None

    def _create_links(
        self,
        publication: Publication,
        outcome: ImportOutcome,
        line_number: int,
        record_index: int,
    ) -> None:
        topic_id = self.master.topic_id
        if topic_id is not None:
            result = attempt(
                self.mutation.create_entity_link,
                EntityLinkInput(from_entity_id=topic_id, to_entity_id=publication.id),
            )
            if isinstance(result, Created):
                outcome.add_message(
                    line_number,
                    Severity.INFO,
                    f"Linked to Topic#{topic_id} by RecordLink#{result.entity.id}",
                )
                self._created("EntityLink", result.entity.id, f"Topic#{topic_id}", record_index)
            else:
                outcome.add_message(
                    line_number, Severity.ERROR, f"Error creating Topic link: {result.message}"
                )
                self._failed("EntityLink", result.message, record_index)

        record = self.master.record
        if record is not None:
            data = EntityLinkInput(
                from_entity_id=(
                    record.from_entity_id if record.from_entity_id is not None else publication.id
                ),
                to_entity_id=(
                    record.to_entity_id if record.to_entity_id is not None else publication.id
                ),
            )
            result = attempt(self.mutation.create_entity_link, data)
            if isinstance(result, Created):
                outcome.add_message(
                    line_number,
                    Severity.INFO,
                    f"Linked to record#{record.master_id} by RecordLink#{result.entity.id}",
                )
                self._created(
                    "EntityLink", result.entity.id, f"record#{record.master_id}", record_index
                )
            else:
                outcome.add_message(
                    line_number, Severity.ERROR, f"Error creating record link: {result.message}"
                )
                self._failed("EntityLink", result.message, record_index)

    # ------------------------------------------------------------------
    # Audit
    # ------------------------------------------------------------------

    def _created(self, kind: str, entity_id: int, label: str, record_index: int) -> None:
        if self.audit_logger is not None:
            self.audit_logger.entity_created(kind, entity_id, label, record_index)

    def _failed(self, kind: str, message: str, record_index: int) -> None:
        if self.audit_logger is not None:
            self.audit_logger.entity_failed(kind, message, record_index)
