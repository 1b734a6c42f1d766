"""Entity resolution and end-of-record materialization.

- results: Created / DuplicateConflict / PersistenceFailure and ``attempt``
- resolver: journal cross-check and priority selection
- materializer: publisher, journal, publication and link creation
"""

from citimport.resolve.materializer import DEFAULT_JOURNAL_NOTES, EntityMaterializer
from citimport.resolve.resolver import (
    JournalCandidate,
    JournalConflict,
    compare_journals,
    journal_candidates,
    select_journal,
)
from citimport.resolve.results import (
    Created,
    DuplicateConflict,
    PersistenceFailure,
    PersistResult,
    attempt,
)

__all__ = [
    "DEFAULT_JOURNAL_NOTES",
    "Created",
    "DuplicateConflict",
    "EntityMaterializer",
    "JournalCandidate",
    "JournalConflict",
    "PersistResult",
    "PersistenceFailure",
    "attempt",
    "compare_journals",
    "journal_candidates",
    "select_journal",
]
