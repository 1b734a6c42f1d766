"""Per-record field accumulation."""

import datetime
from dataclasses import dataclass, field

from citimport.models import Journal, PublicationKind, Publisher

NOTES_SEPARATOR = "\n\n"
KEYWORDS_SEPARATOR = ", "
AUTHORS_SEPARATOR = "\n"


@dataclass
class RecordAccumulator:
    """Transient state for the record currently being parsed.

    Created at a valid ``TY`` and discarded at the matching ``ER``. The
    three journal candidates are kept apart on purpose: disagreement
    between them is reported at the end of the record.

    Attributes
    ----------
    kind : PublicationKind
        Publication kind from the ``TY`` tag.
    title : str | None
        Current title.
    title_tag : str | None
        Tag that supplied the current title.
    author_names : list[str]
        Distinct author names in first-seen order.
    notes : list[str]
        Note paragraphs in order.
    keywords : list[str]
        Keywords in order.
    journal_by_title, journal_by_abbreviation, journal_by_issn : Journal | None
        Existing journals resolved by each key.
    publisher : Publisher | None
        Existing publisher resolved by name.
    """

    kind: PublicationKind
    title: str | None = None
    title_tag: str | None = None
    author_names: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    abstract: str | None = None

    journal_title: str | None = None
    journal_abbreviation: str | None = None
    journal_issn: str | None = None
    journal_by_title: Journal | None = None
    journal_by_abbreviation: Journal | None = None
    journal_by_issn: Journal | None = None

    publisher_name: str | None = None
    publisher_location: str | None = None
    publisher: Publisher | None = None

    date: datetime.date | None = None
    year: int | None = None
    accessed: datetime.date | None = None
    doi: str | None = None
    isbn: str | None = None
    url: str | None = None
    pmid: str | None = None
    pmcid: str | None = None

    def add_author(self, name: str) -> bool:
        """Append an author unless the exact text is already present."""
        if name in self.author_names:
            return False
        self.author_names.append(name)
        return True

    def add_note(self, note: str) -> None:
        """Append a note paragraph."""
        self.notes.append(note)

    def extend_last_note(self, text: str) -> None:
        """Continue the most recent note paragraph on a new line."""
        if self.notes:
            self.notes[-1] = f"{self.notes[-1]}\n{text}"
        else:
            self.notes.append(text)

    def add_keyword(self, keyword: str) -> None:
        """Append a keyword."""
        self.keywords.append(keyword)

    @property
    def authors_text(self) -> str | None:
        """Newline-joined authors, or None when there are none."""
        return AUTHORS_SEPARATOR.join(self.author_names) if self.author_names else None

    @property
    def notes_text(self) -> str | None:
        """Blank-line separated notes, or None when there are none."""
        return NOTES_SEPARATOR.join(self.notes) if self.notes else None

    @property
    def keywords_text(self) -> str | None:
        """Comma-joined keywords, or None when there are none."""
        return KEYWORDS_SEPARATOR.join(self.keywords) if self.keywords else None
