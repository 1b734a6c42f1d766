"""RIS import orchestrator.

Drives the parser state machine line by line:

    line stream -> lexer -> tag table -> accumulator -> (ER) materializer

The session holds exactly one ``ParserState``. A ``TY`` with a recognized
kind enters ``InRecord``; the matching ``ER`` completes the record and
returns to ``AwaitingRecord``. Diagnostics go to the live outcome, or to
the audit log when no outcome is live.
"""

from typing import IO

from citimport.audit import AuditLogger
from citimport.engine.config import ImportConfig
from citimport.iso4 import Iso4Abbreviator
from citimport.linking import MasterContext
from citimport.models import Diagnostic, ImportOutcome, ImportResult, PublicationKind, Severity
from citimport.normalize import is_blank
from citimport.parse import (
    RECORD_END,
    RECORD_START,
    AwaitingRecord,
    InRecord,
    ParserState,
    RecordAccumulator,
    RisLine,
    TagContext,
    get_rule,
    iter_lines,
)
from citimport.resolve import EntityMaterializer
from citimport.store.protocols import Lookup, Mutation


class ImportSession:
    """Stateful import of one RIS stream.

    Parameters
    ----------
    lookup : Lookup
        Existing-entity lookups.
    mutation : Mutation
        Entity creation.
    abbreviator : Iso4Abbreviator | None, optional
        Journal abbreviation utility; a default-table instance if None.
    master : MasterContext | None, optional
        Master entities to link each imported publication to.
    config : ImportConfig | None, optional
        Session configuration.
    audit_logger : AuditLogger | None, optional
        Receives record and entity events.

    Attributes
    ----------
    outcomes : list[ImportOutcome]
        One outcome per ``ER`` that closed a live record, in input order.
    discarded : list[ImportOutcome]
        Outcomes of records that never completed: rejected ``TY`` kinds,
        records cut short by another ``TY``, or still open at end of input.
    """

    def __init__(
        self,
        lookup: Lookup,
        mutation: Mutation,
        abbreviator: Iso4Abbreviator | None = None,
        master: MasterContext | None = None,
        config: ImportConfig | None = None,
        audit_logger: AuditLogger | None = None,
    ) -> None:
        """Initialize session in ``AwaitingRecord``."""
        self.lookup = lookup
        self.config = config or ImportConfig()
        self.abbreviator = abbreviator or Iso4Abbreviator()
        self.master = master or MasterContext()
        self.audit_logger = audit_logger
        self.materializer = EntityMaterializer(
            mutation,
            self.abbreviator,
            self.master,
            author_limit=self.config.author_limit,
            keyword_limit=self.config.keyword_limit,
            journal_notes_template=self.config.journal_notes_template,
            audit_logger=audit_logger,
        )

        self.state: ParserState = AwaitingRecord()
        self.current_tag: str | None = None
        self._awaiting_value = False
        self.outcomes: list[ImportOutcome] = []
        self.discarded: list[ImportOutcome] = []
        self._records_seen = 0

    def run(self, stream: IO[str] | IO[bytes]) -> list[ImportOutcome]:
        """Import every record in a stream.

        Raises
        ------
        StreamReadError
            If the stream cannot be read. Records completed before the
            failure remain in ``outcomes`` and in the store.
        """
        for line in iter_lines(stream):
            self.feed(line)
        self.finish()
        return self.outcomes

    def feed(self, line: RisLine) -> None:
        """Advance the state machine by one lexed line."""
        if line.is_tag:
            self.current_tag = line.tag
            self._awaiting_value = is_blank(line.value)
            self._dispatch(line.tag, line.value, line.line_number, continued=False)
        elif (
            self._awaiting_value
            and not line.is_blank
            and self.current_tag is not None
            and self.current_tag not in (RECORD_START, RECORD_END)
        ):
            # value of a tag whose own line was blank
            self._awaiting_value = False
            self._dispatch(self.current_tag, line.text.strip(), line.line_number, continued=False)
        elif self.current_tag is not None:
            self._dispatch(self.current_tag, line.text, line.line_number, continued=True)
        elif not line.is_blank:
            self._report(line.line_number, Severity.WARNING, "Invalid RIS content")

    def finish(self) -> None:
        """Discard a record still open at end of input."""
        state = self.state
        if isinstance(state, InRecord):
            state.outcome.add_message(
                state.start_line,
                Severity.WARNING,
                "Discarding incomplete record at end of input (missing ER tag?)",
            )
            self._discard(state, "end of input before ER")
        self.state = AwaitingRecord()
        self.current_tag = None
        self._awaiting_value = False

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _dispatch(self, tag: str, value: str, line_number: int, continued: bool) -> None:
        if tag in (RECORD_START, RECORD_END):
            if continued:
                if not is_blank(value):
                    self._report(line_number, Severity.WARNING, "Invalid RIS content")
            elif tag == RECORD_START:
                self._start_record(value, line_number)
            else:
                self._end_record(line_number)
            return

        state = self.state
        if not isinstance(state, InRecord):
            self._report(
                line_number,
                Severity.WARNING,
                f"Skipping '{tag}' tag because TY tag is missing or invalid",
            )
            return

        rule = get_rule(tag)
        if rule is None:
            self._report(line_number, Severity.WARNING, f"Skipping unknown tag: {tag}")
            return
        if is_blank(value):
            self._report(line_number, Severity.INFO, f"Skipping empty '{tag}' tag")
            return

        ctx = TagContext(
            tag=tag,
            line_number=line_number,
            accumulator=state.accumulator,
            lookup=self.lookup,
            abbreviator=self.abbreviator,
            report=self._report,
            continued=continued,
        )
        rule.handler(ctx, value)

    def _start_record(self, value: str, line_number: int) -> None:
        outcome = ImportOutcome()
        previous = self.state
        if isinstance(previous, InRecord):
            outcome.add_message(
                line_number,
                Severity.WARNING,
                f"Discarding record started at line {previous.start_line} (missing ER tag?)",
            )
            self._discard(previous, f"TY at line {line_number} before ER")

        self._records_seen += 1
        kind = PublicationKind.parse(value)
        if kind is None:
            outcome.add_message(
                line_number, Severity.ERROR, f"Skipping record with unknown TY  - {value}"
            )
            outcome.result = ImportResult.ERROR
            self.discarded.append(outcome)
            self.state = AwaitingRecord(outcome)
            return

        self.state = InRecord(outcome, RecordAccumulator(kind=kind), line_number)

    def _end_record(self, line_number: int) -> None:
        state = self.state
        if isinstance(state, InRecord):
            outcome = self.materializer.complete(
                state.accumulator, state.outcome, line_number, self._record_index
            )
            self.outcomes.append(outcome)
            if self.audit_logger is not None:
                self.audit_logger.record_finished(self._record_index, outcome)
        elif state.outcome is not None:
            state.outcome.add_message(
                line_number, Severity.ERROR, "Unmatched ER tag (missing TY tag?)"
            )
        else:
            self._report(line_number, Severity.ERROR, "Unmatched ER tag (missing TY tag?)")

        self.state = AwaitingRecord()
        self.current_tag = None
        self._awaiting_value = False

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def _record_index(self) -> int:
        return max(self._records_seen - 1, 0)

    def _discard(self, state: InRecord, reason: str) -> None:
        state.outcome.result = ImportResult.ERROR
        state.outcome.label = state.accumulator.title
        self.discarded.append(state.outcome)
        if self.audit_logger is not None:
            self.audit_logger.record_discarded(self._record_index, state.start_line, reason)

    def _report(self, line_number: int, severity: Severity, text: str) -> None:
        outcome = self.state.outcome
        if outcome is not None:
            outcome.add_message(line_number, severity, text)
        elif self.audit_logger is not None:
            self.audit_logger.orphan_diagnostic(Diagnostic(line_number, severity, text))
