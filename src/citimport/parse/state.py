"""Explicit parser states.

The parser is always in exactly one of two states. ``AwaitingRecord``
may still carry the outcome of a ``TY`` whose kind was rejected, so that
tags following it can be reported against that outcome.
"""

from dataclasses import dataclass

from citimport.models import ImportOutcome
from citimport.parse.accumulator import RecordAccumulator


@dataclass(frozen=True)
class AwaitingRecord:
    """No live accumulator."""

    outcome: ImportOutcome | None = None


@dataclass(frozen=True)
class InRecord:
    """A ``TY`` has been accepted and no ``ER`` seen yet."""

    outcome: ImportOutcome
    accumulator: RecordAccumulator
    start_line: int


ParserState = AwaitingRecord | InRecord
