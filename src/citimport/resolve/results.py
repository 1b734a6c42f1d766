"""Outcomes of a single persistence operation.

Collaborator exceptions are converted here, once, into plain values;
callers branch on the value type and never catch store exceptions.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from citimport.normalize import normalize_exception_message
from citimport.store.errors import ConstraintViolationError, DuplicateKeyError

__all__ = ["Created", "DuplicateConflict", "PersistenceFailure", "PersistResult", "attempt"]

T = TypeVar("T")
In = TypeVar("In")


@dataclass(frozen=True)
class Created(Generic[T]):
    """The entity was stored."""

    entity: T


@dataclass(frozen=True)
class DuplicateConflict:
    """A unique key already exists. ``message`` is sanitized."""

    message: str


@dataclass(frozen=True)
class PersistenceFailure:
    """Any other failure. ``constraint`` marks data-integrity violations."""

    message: str
    constraint: bool = False


PersistResult = Created[T] | DuplicateConflict | PersistenceFailure


def attempt(operation: Callable[[In], T], data: In) -> "PersistResult[T]":
    """Run one mutation and classify its outcome.

    Parameters
    ----------
    operation : Callable[[In], T]
        Mutation collaborator method, e.g. ``store.create_journal``.
    data : In
        Input passed to the operation.

    Returns
    -------
    PersistResult[T]
        ``Created``, ``DuplicateConflict`` or ``PersistenceFailure``.
    """
    try:
        return Created(operation(data))
    except DuplicateKeyError as e:
        return DuplicateConflict(normalize_exception_message(str(e)))
    except ConstraintViolationError as e:
        return PersistenceFailure(normalize_exception_message(str(e)), constraint=True)
    except Exception as e:  # any other store failure is reported per record
        message = normalize_exception_message(str(e))
        return PersistenceFailure(f"{type(e).__name__}: {message}")
