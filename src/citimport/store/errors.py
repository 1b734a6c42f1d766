"""Exceptions raised by evidence-store collaborators."""

__all__ = ["StoreError", "DuplicateKeyError", "ConstraintViolationError"]


class StoreError(Exception):
    """Generic persistence failure."""


class ConstraintViolationError(StoreError):
    """A data-integrity constraint (not-null, foreign key, length) was violated."""


class DuplicateKeyError(ConstraintViolationError):
    """A unique key already exists in the store.

    Subclasses ConstraintViolationError the way duplicate keys are a special
    case of integrity violations in SQL drivers; check it first.
    """
