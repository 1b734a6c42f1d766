"""RIS line lexer.

RIS format: tags of up to six characters, ``"TY  - "`` starts a
record, ``"ER  - "`` ends it. Lines that do not carry a tag continue the
value of the previous tag.
Reference: https://refdb.sourceforge.net/manual-0.9.6/sect1-ris-format.html
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import IO

from citimport.errors import StreamReadError

TAG_PATTERN = re.compile(r"^(?P<tag>[A-Z][A-Z0-9]{1,5})  - ?(?P<value>.*)$")


@dataclass(frozen=True)
class RisLine:
    """One physical input line.

    Attributes
    ----------
    line_number : int
        1-based line number.
    text : str
        Line content without the line terminator.
    tag : str | None
        Tag if the line is a ``TAG  - value`` line, else None.
    value : str | None
        Trimmed value for tag lines, else None.
    """

    line_number: int
    text: str
    tag: str | None = None
    value: str | None = None

    @property
    def is_tag(self) -> bool:
        """Whether the line starts a tag."""
        return self.tag is not None

    @property
    def is_blank(self) -> bool:
        """Whether the line is empty or whitespace only."""
        return not self.text.strip()


def lex_line(line_number: int, text: str) -> RisLine:
    """Classify one line.

    Parameters
    ----------
    line_number : int
        1-based line number.
    text : str
        Raw line, with or without its terminator.

    Returns
    -------
    RisLine
        Tag line or plain line.
    """
    text = text.rstrip("\r\n")
    match = TAG_PATTERN.match(text)
    if match:
        return RisLine(line_number, text, match.group("tag"), match.group("value").strip())
    return RisLine(line_number, text)


def iter_lines(stream: IO[str] | IO[bytes]) -> Iterator[RisLine]:
    """Read and lex a stream strictly sequentially.

    Binary streams are decoded as UTF-8 one line at a time, so records
    before an undecodable line are still processed. A leading byte-order
    mark is dropped. The stream is only read, never closed or wrapped.

    Parameters
    ----------
    stream : IO[str] | IO[bytes]
        Input stream.

    Yields
    ------
    RisLine
        One lexed line at a time.

    Raises
    ------
    StreamReadError
        If reading or decoding fails.
    """
    line_number = 0
    while True:
        try:
            raw = stream.readline()
        except (OSError, UnicodeDecodeError) as e:
            raise StreamReadError(
                f"Failed to read input after line {line_number}: {e}",
                line_number=line_number,
            ) from e
        if isinstance(raw, bytes):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise StreamReadError(
                    f"Line {line_number + 1} is not valid UTF-8: {e}",
                    line_number=line_number,
                ) from e
        if not raw:
            return
        line_number += 1
        if line_number == 1:
            raw = raw.lstrip("\ufeff")
        yield lex_line(line_number, raw)
