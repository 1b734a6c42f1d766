"""Evidence-store collaborators: contracts, errors and an in-memory store."""

from citimport.store.errors import ConstraintViolationError, DuplicateKeyError, StoreError
from citimport.store.memory import InMemoryStore
from citimport.store.protocols import EntityDirectory, EvidenceStore, Lookup, Mutation

__all__ = [
    "ConstraintViolationError",
    "DuplicateKeyError",
    "EntityDirectory",
    "EvidenceStore",
    "InMemoryStore",
    "Lookup",
    "Mutation",
    "StoreError",
]
