"""Tests for the RIS line lexer."""

import gc
import io

import pytest

from citimport.errors import StreamReadError
from citimport.parse import iter_lines, lex_line


@pytest.mark.unit
@pytest.mark.parametrize(
    ("text", "tag", "value"),
    [
        ("TY  - JOUR", "TY", "JOUR"),
        ("TI  - A Study of Things  ", "TI", "A Study of Things"),
        ("ER  - ", "ER", ""),
        ("ER  -", "ER", ""),
        ("PMCID  - PMC123", "PMCID", "PMC123"),
        ("T2  - Journal of Climate\r\n", "T2", "Journal of Climate"),
    ],
)
def test_lex_tag_lines(text: str, tag: str, value: str) -> None:
    """Test tag lines yield tag and trimmed value."""
    line = lex_line(1, text)

    assert line.is_tag
    assert line.tag == tag
    assert line.value == value


@pytest.mark.unit
@pytest.mark.parametrize(
    "text",
    [
        "from an ensemble of models.",
        "TY - JOUR",
        "ty  - JOUR",
        "T  - single letter tag",
        "TOOLONG  - seven characters",
        "",
    ],
)
def test_lex_plain_lines(text: str) -> None:
    """Test non-matching lines are plain lines without tag or value."""
    line = lex_line(3, text)

    assert not line.is_tag
    assert line.tag is None
    assert line.value is None
    assert line.line_number == 3


@pytest.mark.unit
def test_lex_plain_line_keeps_content() -> None:
    """Test continuation content is kept untouched apart from the terminator."""
    line = lex_line(1, "   indented continuation  \n")

    assert line.text == "   indented continuation  "
    assert not line.is_blank


@pytest.mark.unit
def test_iter_lines_numbers_from_one() -> None:
    """Test lines are numbered 1-based in stream order."""
    lines = list(iter_lines(io.StringIO("TY  - JOUR\n\nER  - \n")))

    assert [line.line_number for line in lines] == [1, 2, 3]
    assert lines[1].is_blank


@pytest.mark.unit
def test_iter_lines_decodes_binary_with_bom() -> None:
    """Test binary streams are decoded as UTF-8 and a BOM is dropped."""
    data = "\ufeffTY  - JOUR\r\nTI  - Über Wolken\r\nER  - \r\n".encode()

    lines = list(iter_lines(io.BytesIO(data)))

    assert lines[0].tag == "TY"
    assert lines[1].value == "Über Wolken"
    assert len(lines) == 3


@pytest.mark.unit
def test_iter_lines_invalid_utf8_raises_at_that_line() -> None:
    """Test an undecodable line fails only when reached, after earlier lines are yielded."""
    good = b"TY  - JOUR\nTI  - Fine\nER  - \n" * 400
    lines = []

    with pytest.raises(StreamReadError) as exc_info:
        for line in iter_lines(io.BytesIO(good + b"TI  - \xff\xfe bad\n")):
            lines.append(line)

    assert len(lines) == 1200
    assert exc_info.value.line_number == 1200
    assert "Line 1201" in str(exc_info.value)


@pytest.mark.unit
def test_iter_lines_leaves_binary_stream_open() -> None:
    """Test reading a binary stream does not close it."""
    buf = io.BytesIO(b"TY  - JOUR\nER  - \n")

    lines = list(iter_lines(buf))
    gc.collect()

    assert len(lines) == 2
    assert not buf.closed


@pytest.mark.unit
def test_iter_lines_read_failure_raises() -> None:
    """Test an OSError from the stream becomes StreamReadError with the last line read."""

    class FailingStream(io.StringIO):
        def readline(self, *args) -> str:
            if self.tell() > 0:
                raise OSError("connection reset")
            return super().readline(*args)

    with pytest.raises(StreamReadError) as exc_info:
        list(iter_lines(FailingStream("TY  - JOUR\nTI  - x\n")))

    assert exc_info.value.line_number == 1
