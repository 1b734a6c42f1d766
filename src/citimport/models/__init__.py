"""Data models for citimport.

Outcome types describe what the import reported; entity and input types
describe what the evidence store holds and accepts.
"""

from citimport.models.entities import (
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
from citimport.models.outcomes import Diagnostic, ImportOutcome, ImportResult, Severity

__all__ = [
    "Diagnostic",
    "EntityKind",
    "EntityLink",
    "EntityLinkInput",
    "ImportOutcome",
    "ImportResult",
    "Journal",
    "JournalInput",
    "Publication",
    "PublicationInput",
    "PublicationKind",
    "Publisher",
    "PublisherInput",
    "Severity",
]
