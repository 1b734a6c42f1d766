"""Narrow collaborator contracts consumed by the import pipeline.

Any object with these methods can back an import; ``InMemoryStore``
implements all three.
"""

from typing import Protocol

from citimport.models import (
    EntityKind,
    EntityLink,
    EntityLinkInput,
    Journal,
    JournalInput,
    Publication,
    PublicationInput,
    Publisher,
    PublisherInput,
)

__all__ = ["Lookup", "Mutation", "EntityDirectory", "EvidenceStore"]


class Lookup(Protocol):
    """Read-only lookups, each returning at most one match."""

    def find_journal_by_title(self, title: str) -> Journal | None: ...

    def find_journal_by_abbreviation(self, abbreviation: str) -> Journal | None: ...

    def find_journal_by_issn(self, issn: str) -> Journal | None: ...

    def find_publisher_by_name(self, name: str) -> Publisher | None: ...


class Mutation(Protocol):
    """Entity creation.

    Each method may raise ``DuplicateKeyError``, ``ConstraintViolationError``
    or any other exception for a generic failure.
    """

    def create_publisher(self, data: PublisherInput) -> Publisher: ...

    def create_journal(self, data: JournalInput) -> Journal: ...

    def create_publication(self, data: PublicationInput) -> Publication: ...

    def create_entity_link(self, data: EntityLinkInput) -> EntityLink: ...


class EntityDirectory(Protocol):
    """Kind lookup for arbitrary linkable entity ids."""

    def entity_kind(self, entity_id: int) -> EntityKind | None: ...


class EvidenceStore(Lookup, Mutation, EntityDirectory, Protocol):
    """Everything an import call needs from the store."""
