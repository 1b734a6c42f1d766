"""RIS tag parsing.

- ris: line lexer (``TAG  - value`` lines and continuations)
- accumulator: per-record field accumulation
- state: explicit ``AwaitingRecord`` / ``InRecord`` parser states
- tags: tag vocabulary as a dispatch table
"""

from citimport.parse.accumulator import RecordAccumulator
from citimport.parse.ris import TAG_PATTERN, RisLine, iter_lines, lex_line
from citimport.parse.state import AwaitingRecord, InRecord, ParserState
from citimport.parse.tags import (
    RECORD_END,
    RECORD_START,
    TAG_TABLE,
    TagContext,
    TagRule,
    get_rule,
)

__all__ = [
    "RECORD_END",
    "RECORD_START",
    "TAG_PATTERN",
    "TAG_TABLE",
    "AwaitingRecord",
    "InRecord",
    "ParserState",
    "RecordAccumulator",
    "RisLine",
    "TagContext",
    "TagRule",
    "get_rule",
    "iter_lines",
    "lex_line",
]
