"""In-memory evidence store with unique keys and JSON persistence.

A reference implementation of the ``Lookup``, ``Mutation`` and
``EntityDirectory`` contracts. It enforces the same unique keys and
integrity rules as the relational store and reports violations with
driver-style messages (including the ``[insert into ...]`` detail that
the pipeline strips before showing them), so the import pipeline can be
exercised end to end without a database.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from citimport.models import (
    EntityKind,
    EntityLink,
    EntityLinkInput,
    Journal,
    JournalInput,
    Publication,
    PublicationInput,
    PublicationKind,
    Publisher,
    PublisherInput,
)
from citimport.store.errors import ConstraintViolationError, DuplicateKeyError

__all__ = ["InMemoryStore"]

STORE_FORMAT_VERSION = 1

# Column limits mirrored from the relational schema
TITLE_LIMIT = 1000
AUTHOR_NAMES_LIMIT = 2000
KEYWORDS_LIMIT = 255


def _key(value: str | None) -> str | None:
    """Case-insensitive comparison key, matching a *_ci collation."""
    return value.casefold().strip() if value is not None else None


def _statement(table: str, **values: Any) -> str:
    """Driver-style statement suffix appended to error messages."""
    columns = ", ".join(values)
    rendered = ", ".join(repr(value) for value in values.values())
    return f" [insert into {table} ({columns}) values ({rendered})]"


def _foreign_key_failure(column: str) -> str:
    return f"Cannot add or update a child row: a foreign key constraint fails ({column})"


class InMemoryStore:
    """Dictionary-backed evidence store.

    Identifiers are allocated from one sequence shared by all entity
    kinds, so an id alone identifies a linkable entity.

    Attributes
    ----------
    publishers : dict[int, Publisher]
        Publishers by id.
    journals : dict[int, Journal]
        Journals by id.
    publications : dict[int, dict[str, Any]]
        Stored publication rows (input fields plus ``id``) by id.
    links : dict[int, EntityLink]
        Entity links by id.
    """

    def __init__(self) -> None:
        """Initialize an empty store."""
        self.publishers: dict[int, Publisher] = {}
        self.journals: dict[int, Journal] = {}
        self.publications: dict[int, dict[str, Any]] = {}
        self.links: dict[int, EntityLink] = {}
        self._kinds: dict[int, EntityKind] = {}
        self._labels: dict[int, str] = {}
        self._next_id = 1

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------

    def _next(self) -> int:
        entity_id = self._next_id
        self._next_id += 1
        return entity_id

    def _allocate(self, kind: EntityKind, label: str) -> int:
        entity_id = self._next()
        self._kinds[entity_id] = kind
        self._labels[entity_id] = label
        return entity_id

    def add_entity(self, kind: EntityKind, label: str) -> int:
        """Register a linkable entity of any kind (topic, claim, ...) and return its id."""
        return self._allocate(kind, label)

    def add_journal(
        self,
        title: str,
        *,
        abbreviation: str | None = None,
        issn: str | None = None,
        publisher_id: int | None = None,
        peer_reviewed: bool = False,
    ) -> Journal:
        """Seed a journal, bypassing the import-facing mutation path.

        Raises
        ------
        DuplicateKeyError
            If title, abbreviation or ISSN already exists.
        """
        data = JournalInput(
            title=title,
            abbreviation=abbreviation,
            issn=issn,
            publisher_id=publisher_id,
        )
        return self._insert_journal(data, peer_reviewed=peer_reviewed)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def find_journal_by_title(self, title: str) -> Journal | None:
        """Return the journal with this title, if any."""
        return self._find_journal("title", title)

    def find_journal_by_abbreviation(self, abbreviation: str) -> Journal | None:
        """Return the journal with this abbreviation, if any."""
        return self._find_journal("abbreviation", abbreviation)

    def find_journal_by_issn(self, issn: str) -> Journal | None:
        """Return the journal with this ISSN, if any."""
        return self._find_journal("issn", issn)

    def find_publisher_by_name(self, name: str) -> Publisher | None:
        """Return the publisher with this name, if any."""
        wanted = _key(name)
        for publisher in self.publishers.values():
            if _key(publisher.name) == wanted:
                return publisher
        return None

    def _find_journal(self, attr: str, value: str) -> Journal | None:
        wanted = _key(value)
        for journal in self.journals.values():
            if _key(getattr(journal, attr)) == wanted:
                return journal
        return None

    # ------------------------------------------------------------------
    # EntityDirectory
    # ------------------------------------------------------------------

    def entity_kind(self, entity_id: int) -> EntityKind | None:
        """Return the kind of a stored entity, or None if the id is unknown."""
        return self._kinds.get(entity_id)

    def label(self, entity_id: int) -> str | None:
        """Return the display label of a stored entity."""
        return self._labels.get(entity_id)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def create_publisher(self, data: PublisherInput) -> Publisher:
        """Insert a publisher.

        Raises
        ------
        ConstraintViolationError
            If the name is blank.
        DuplicateKeyError
            If the name already exists.
        """
        sql = _statement("publisher", name=data.name, location=data.location)
        if not data.name or not data.name.strip():
            raise ConstraintViolationError("Column 'name' cannot be null" + sql)
        if self.find_publisher_by_name(data.name) is not None:
            raise DuplicateKeyError(f"Duplicate entry '{data.name}' for key 'publisher.name'" + sql)
        entity_id = self._allocate(EntityKind.PBR, data.name)
        publisher = Publisher(id=entity_id, name=data.name, location=data.location)
        self.publishers[entity_id] = publisher
        return publisher

    def create_journal(self, data: JournalInput) -> Journal:
        """Insert a journal.

        Raises
        ------
        ConstraintViolationError
            If the title is blank or the publisher does not exist.
        DuplicateKeyError
            If title, abbreviation or ISSN already exists.
        """
        return self._insert_journal(data, peer_reviewed=False)

    def _insert_journal(self, data: JournalInput, *, peer_reviewed: bool) -> Journal:
        sql = _statement(
            "journal",
            title=data.title,
            abbreviation=data.abbreviation,
            issn=data.issn,
            publisher_id=data.publisher_id,
        )
        if not data.title or not data.title.strip():
            raise ConstraintViolationError("Column 'title' cannot be null" + sql)
        if data.publisher_id is not None and data.publisher_id not in self.publishers:
            raise ConstraintViolationError(_foreign_key_failure("journal.publisher_id") + sql)
        for attr in ("title", "abbreviation", "issn"):
            value = getattr(data, attr)
            if value is not None and self._find_journal(attr, value) is not None:
                raise DuplicateKeyError(f"Duplicate entry '{value}' for key 'journal.{attr}'" + sql)

        entity_id = self._allocate(EntityKind.JOU, data.title)
        journal = Journal(
            id=entity_id,
            title=data.title,
            abbreviation=data.abbreviation,
            issn=data.issn,
            publisher_id=data.publisher_id,
            peer_reviewed=peer_reviewed,
            notes=data.notes,
        )
        self.journals[entity_id] = journal
        return journal

    def create_publication(self, data: PublicationInput) -> Publication:
        """Insert a publication.

        Raises
        ------
        ConstraintViolationError
            If the title is blank or too long, a text column overflows, or
            the journal does not exist.
        DuplicateKeyError
            If the DOI, or the title for the same kind, already exists.
        """
        sql = _statement(
            "publication",
            kind=str(data.kind),
            title=data.title,
            journal_id=data.journal_id,
            doi=data.doi,
        )
        if not data.title or not data.title.strip():
            raise ConstraintViolationError("Column 'title' cannot be null" + sql)
        too_long = [
            column
            for column, value, limit in (
                ("title", data.title, TITLE_LIMIT),
                ("author_names", data.author_names, AUTHOR_NAMES_LIMIT),
                ("keywords", data.keywords, KEYWORDS_LIMIT),
            )
            if value is not None and len(value) > limit
        ]
        if too_long:
            raise ConstraintViolationError(f"Data too long for column '{too_long[0]}'" + sql)
        if data.journal_id is not None and data.journal_id not in self.journals:
            raise ConstraintViolationError(_foreign_key_failure("publication.journal_id") + sql)
        for row in self.publications.values():
            if data.doi and _key(row["doi"]) == _key(data.doi):
                raise DuplicateKeyError(f"Duplicate entry '{data.doi}' for key 'publication.doi'" + sql)
            if row["kind"] == str(data.kind) and _key(row["title"]) == _key(data.title):
                raise DuplicateKeyError(
                    f"Duplicate entry '{data.kind}-{data.title}' for key 'publication.kind_title'" + sql
                )

        entity_id = self._allocate(EntityKind.PUB, data.title)
        row = data.to_dict()
        row["id"] = entity_id
        self.publications[entity_id] = row
        return Publication(
            id=entity_id,
            kind=data.kind,
            title=data.title,
            journal_id=data.journal_id,
            doi=data.doi,
        )

    def create_entity_link(self, data: EntityLinkInput) -> EntityLink:
        """Insert a directed link between two existing entities.

        Raises
        ------
        ConstraintViolationError
            If either end does not exist or both ends are the same entity.
        DuplicateKeyError
            If the same link already exists.
        """
        sql = _statement(
            "entity_link", from_entity_id=data.from_entity_id, to_entity_id=data.to_entity_id
        )
        for column, entity_id in (
            ("from_entity_id", data.from_entity_id),
            ("to_entity_id", data.to_entity_id),
        ):
            if entity_id not in self._kinds:
                raise ConstraintViolationError(_foreign_key_failure(f"entity_link.{column}") + sql)
        if data.from_entity_id == data.to_entity_id:
            raise ConstraintViolationError("Check constraint 'entity_link_not_self' is violated" + sql)
        for link in self.links.values():
            if (link.from_entity_id, link.to_entity_id) == (data.from_entity_id, data.to_entity_id):
                raise DuplicateKeyError(
                    f"Duplicate entry '{data.from_entity_id}-{data.to_entity_id}' "
                    "for key 'entity_link.from_to'" + sql
                )
        # Links are not linkable entities themselves
        entity_id = self._next()
        link = EntityLink(
            id=entity_id,
            from_entity_id=data.from_entity_id,
            to_entity_id=data.to_entity_id,
        )
        self.links[entity_id] = link
        return link

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Convert the whole store to a JSON-ready dictionary."""
        return {
            "format_version": STORE_FORMAT_VERSION,
            "next_id": self._next_id,
            "entities": [
                {"id": entity_id, "kind": str(kind), "label": self._labels[entity_id]}
                for entity_id, kind in sorted(self._kinds.items())
                if kind not in (EntityKind.PBR, EntityKind.JOU, EntityKind.PUB)
            ],
            "publishers": [asdict(p) for p in self.publishers.values()],
            "journals": [asdict(j) for j in self.journals.values()],
            "publications": list(self.publications.values()),
            "links": [asdict(link) for link in self.links.values()],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InMemoryStore":
        """Rebuild a store from ``to_dict`` output.

        Raises
        ------
        ValueError
            If the format version is not supported.
        """
        version = data.get("format_version", STORE_FORMAT_VERSION)
        if version != STORE_FORMAT_VERSION:
            raise ValueError(f"Unsupported store format version: {version}")

        store = cls()
        for entity in data.get("entities", []):
            store._register(entity["id"], EntityKind(entity["kind"]), entity["label"])
        for row in data.get("publishers", []):
            publisher = Publisher(**row)
            store.publishers[publisher.id] = publisher
            store._register(publisher.id, EntityKind.PBR, publisher.name)
        for row in data.get("journals", []):
            journal = Journal(**row)
            store.journals[journal.id] = journal
            store._register(journal.id, EntityKind.JOU, journal.title)
        for row in data.get("publications", []):
            if PublicationKind.parse(row["kind"]) is None:
                raise ValueError(f"Unknown publication kind in store: {row['kind']!r}")
            store.publications[row["id"]] = dict(row)
            store._register(row["id"], EntityKind.PUB, row["title"])
        for row in data.get("links", []):
            link = EntityLink(**row)
            store.links[link.id] = link
        used = [*store._kinds, *store.links, 0]
        store._next_id = max(data.get("next_id", 1), max(used) + 1)
        return store

    def _register(self, entity_id: int, kind: EntityKind, label: str) -> None:
        self._kinds[entity_id] = kind
        self._labels[entity_id] = label

    def save(self, path: Path) -> None:
        """Write the store as JSON."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, ensure_ascii=False, indent=2)

    @classmethod
    def load(cls, path: Path) -> "InMemoryStore":
        """Read a store written by ``save``; a missing file yields an empty store."""
        if not path.exists():
            return cls()
        with path.open(encoding="utf-8") as f:
            return cls.from_dict(json.load(f))
