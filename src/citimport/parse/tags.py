"""RIS tag vocabulary as a dispatch table.

Each recognized tag maps to a ``TagRule`` whose handler folds one value
into the record accumulator, reporting what it did through the tag
context. ``TY`` and ``ER`` are record boundaries and are handled by the
orchestrator, not here. Tags absent from ``TAG_TABLE`` are unknown.
"""

from collections.abc import Callable
from dataclasses import dataclass

from citimport.iso4 import Iso4Abbreviator
from citimport.models import Severity
from citimport.normalize import (
    is_issn,
    is_pmcid,
    is_pmid,
    is_url,
    normalize_doi,
    normalize_isbn,
    normalize_issn,
    parse_date,
    split_issn_list,
    split_urls,
)
from citimport.parse.accumulator import RecordAccumulator
from citimport.store.protocols import Lookup

RECORD_START = "TY"
RECORD_END = "ER"
PRIMARY_TITLE_TAGS = frozenset({"TI", "T1"})
PRIMARY_ABBREVIATION_TAG = "JA"
MIN_ISBN_LENGTH = 10


@dataclass
class TagContext:
    """Everything a tag handler may touch.

    Attributes
    ----------
    tag : str
        Tag being dispatched.
    line_number : int
        1-based line of the value.
    accumulator : RecordAccumulator
        Live record state.
    lookup : Lookup
        Existing-entity lookups.
    abbreviator : Iso4Abbreviator
        Journal abbreviation utility.
    report : Callable[[int, Severity, str], None]
        Diagnostic sink for the current outcome.
    continued : bool
        True when the value is a continuation line of ``tag``.
    """

    tag: str
    line_number: int
    accumulator: RecordAccumulator
    lookup: Lookup
    abbreviator: Iso4Abbreviator
    report: Callable[[int, Severity, str], None]
    continued: bool = False

    def info(self, text: str) -> None:
        """Report at Info severity."""
        self.report(self.line_number, Severity.INFO, text)

    def warning(self, text: str) -> None:
        """Report at Warning severity."""
        self.report(self.line_number, Severity.WARNING, text)

    def error(self, text: str) -> None:
        """Report at Error severity."""
        self.report(self.line_number, Severity.ERROR, text)

    def quote(self, value: str) -> str:
        """Render a tag line for messages, e.g. ``'DA  - 2021'``."""
        return f"'{self.tag}  - {value}'"


Handler = Callable[[TagContext, str], None]


@dataclass(frozen=True)
class TagRule:
    """Dispatch entry for one tag."""

    handler: Handler
    description: str


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _abstract(ctx: TagContext, value: str) -> None:
    acc = ctx.accumulator
    if ctx.continued and acc.abstract:
        acc.abstract = f"{acc.abstract}\n{value}"
    else:
        acc.abstract = value


def _note(ctx: TagContext, value: str) -> None:
    if ctx.continued:
        ctx.accumulator.extend_last_note(value)
    else:
        ctx.accumulator.add_note(f"{ctx.tag}: {value}")


def _author(ctx: TagContext, value: str) -> None:
    ctx.accumulator.add_author(value.strip())


def _title(ctx: TagContext, value: str) -> None:
    acc = ctx.accumulator
    if ctx.continued:
        if acc.title is not None and acc.title_tag == ctx.tag:
            acc.title = f"{acc.title} {value.strip()}"
        else:
            ctx.info(f"Skipping continuation of '{ctx.tag}' as it did not supply the title")
        return

    if acc.title is None:
        acc.title, acc.title_tag = value, ctx.tag
    elif ctx.tag in PRIMARY_TITLE_TAGS:
        ctx.warning(f"Previously set title '{acc.title}', overwritten by {ctx.quote(value)}")
        acc.title, acc.title_tag = value, ctx.tag
    else:
        ctx.info(f"Title already set to '{acc.title}', skipping {ctx.quote(value)}")


def _doi(ctx: TagContext, value: str) -> None:
    ctx.accumulator.doi = normalize_doi(value)


def _date(ctx: TagContext, value: str) -> None:
    try:
        ctx.accumulator.date = parse_date(value.strip())
    except ValueError:
        ctx.error(f"Unable to parse {ctx.quote(value)} as a date")


def _accessed(ctx: TagContext, value: str) -> None:
    try:
        ctx.accumulator.accessed = parse_date(value.strip())
    except ValueError:
        ctx.error(f"Unable to parse {ctx.quote(value)} as a date")


def _year(ctx: TagContext, value: str) -> None:
    # PY/Y1 hold either a bare year or a full date
    value = value.strip()
    acc = ctx.accumulator
    if len(value) == 4:
        if value.isdigit():
            acc.year = int(value)
        else:
            ctx.error(f"Unable to parse {ctx.quote(value)} as a year")
        return
    try:
        acc.date = parse_date(value)
    except ValueError:
        ctx.error(f"Unable to parse {ctx.quote(value)} as a date")
    else:
        acc.year = acc.date.year


def _keyword(ctx: TagContext, value: str) -> None:
    ctx.accumulator.add_keyword(value.strip())


def _journal_title(ctx: TagContext, value: str) -> None:
    acc = ctx.accumulator
    acc.journal_title = value.strip()
    journal = ctx.lookup.find_journal_by_title(acc.journal_title)
    if journal is not None:
        acc.journal_by_title = journal
        ctx.info(f"Found existing Journal#{journal.id} with title '{acc.journal_title}'")
    else:
        ctx.info(f"Could not find journal with title '{acc.journal_title}'")


def _journal_abbreviation(ctx: TagContext, value: str) -> None:
    acc = ctx.accumulator
    abbreviation = ctx.abbreviator.normalize_abbreviation(value.strip())
    if acc.journal_abbreviation is None:
        acc.journal_abbreviation = abbreviation
    elif ctx.tag == PRIMARY_ABBREVIATION_TAG:
        ctx.info(
            f"Previous journal abbreviation '{acc.journal_abbreviation}', "
            f"overwritten by {ctx.quote(value)}"
        )
        acc.journal_abbreviation = abbreviation
    else:
        ctx.info(f"Ignoring {ctx.quote(value)}, as journal abbreviation has already been set")

    journal = ctx.lookup.find_journal_by_abbreviation(abbreviation)
    if journal is not None:
        acc.journal_by_abbreviation = journal
        ctx.info(f"Found existing Journal#{journal.id} with abbreviation '{abbreviation}'")
    else:
        ctx.info(f"Could not find journal with abbreviated title '{abbreviation}'")


def _url(ctx: TagContext, value: str) -> None:
    urls = split_urls(value)
    if not urls:
        ctx.info(f"Skipping empty '{ctx.tag}' tag")
        return
    if len(urls) > 1:
        ctx.info(f"Keeping the first of {len(urls)} URLs in {ctx.quote(value)}")
    if is_url(urls[0]):
        ctx.accumulator.url = urls[0]
    else:
        ctx.error(f"Could not parse {ctx.quote(value)} as a URL")


def _pmid(ctx: TagContext, value: str) -> None:
    value = value.strip()
    if not is_pmid(value):
        ctx.warning(f"{ctx.quote(value)} does not look like a PubMed ID")
    ctx.accumulator.pmid = value


def _pmcid(ctx: TagContext, value: str) -> None:
    value = value.strip()
    if not is_pmcid(value):
        ctx.warning(f"{ctx.quote(value)} does not look like a PubMed Central ID")
    ctx.accumulator.pmcid = value


def _serial_number(ctx: TagContext, value: str) -> None:
    """ISSN, ISBN, or report number, depending on the publication kind."""
    acc = ctx.accumulator
    value = value.strip()
    if acc.kind.is_book_like:
        acc.isbn = normalize_isbn(value)
        return
    if not acc.kind.is_periodical:
        ctx.info(f"Skipping {ctx.quote(value)} as record is neither a book nor a periodical")
        return

    tokens = split_issn_list(value)
    if len(tokens) > 1:
        # Several ISSNs (print, electronic) in one tag: keep the first, note the lot
        acc.add_note(f"SN: {value}.")
        value = tokens[0]

    if is_issn(value):
        acc.journal_issn = normalize_issn(value)
        journal = ctx.lookup.find_journal_by_issn(acc.journal_issn)
        if journal is not None:
            acc.journal_by_issn = journal
            ctx.info(f"Found existing Journal#{journal.id} with ISSN '{acc.journal_issn}'")
        else:
            ctx.info(f"Could not find journal with ISSN '{acc.journal_issn}'")
    elif len(value) >= MIN_ISBN_LENGTH:
        acc.isbn = normalize_isbn(value)
    else:
        ctx.info(f"Skipping {ctx.quote(value)} as it is neither an ISSN nor an ISBN")


def _publisher(ctx: TagContext, value: str) -> None:
    acc = ctx.accumulator
    acc.publisher_name = value.strip()
    publisher = ctx.lookup.find_publisher_by_name(acc.publisher_name)
    if publisher is not None:
        acc.publisher = publisher
        ctx.info(f"Found existing Publisher#{publisher.id} with name '{acc.publisher_name}'")
    else:
        ctx.info(f"Could not find publisher with name '{acc.publisher_name}'")


def _publisher_location(ctx: TagContext, value: str) -> None:
    ctx.accumulator.publisher_location = value.strip()


def _unsupported(ctx: TagContext, value: str) -> None:
    ctx.info(f"Skipping unsupported tag: {ctx.tag}")


# ---------------------------------------------------------------------------
# Table
# ---------------------------------------------------------------------------

_GROUPS: tuple[tuple[Handler, str, tuple[str, ...]], ...] = (
    (_abstract, "Abstract", ("AB", "N2")),
    (
        _note,
        "Notes",
        ("AV", "PA", "J1", "RN", "N1", "NO", *(f"U{i}" for i in range(1, 16))),
    ),
    (_author, "Author", ("A1", "A2", "A3", "A4", "A5", "AU", "ED", "TA")),
    (_title, "Title", ("BT", "CT", "T1", "T3", "ST", "TI", "TT")),
    (_doi, "DOI", ("DI", "DO", "DOI", "L3")),
    (_date, "Date", ("DA",)),
    (_accessed, "Access date", ("Y2", "RD")),
    (_year, "Publication year or date", ("PY", "YR", "Y1")),
    (_keyword, "Keyword", ("K1", "KW")),
    (_journal_title, "Journal title", ("JF", "T2")),
    (_journal_abbreviation, "Journal abbreviation", ("J2", "JA", "JO")),
    (_url, "URL", ("UR", "L1", "L2")),
    (_pmid, "PubMed ID", ("PMID",)),
    (_pmcid, "PubMed Central ID", ("PMCID",)),
    (_serial_number, "ISSN/ISBN", ("SN",)),
    (_publisher, "Publisher", ("PB",)),
    (_publisher_location, "Place of publication", ("PP", "CP", "CY")),
    (
        _unsupported,
        "Recognized but not imported",
        (
            "M1", "M2", "EP", "IS", "SE", "SP", "VL", "VO", "NV", "SV",
            "A6", "AD", "AN", "C1", "C2", "C3", "C4", "C5", "C6", "C7", "C8",
            "CA", "CL", "CN", "CR", "DB", "DP", "DS", "ET", "FD", "H1", "H2",
            "ID", "IP", "L4", "LA", "LB", "LK", "LL", "M3", "OL", "OP", "RI",
            "RP", "RT", "SF", "SL", "SR", "WP", "WT", "WV",
        ),
    ),
)

TAG_TABLE: dict[str, TagRule] = {
    tag: TagRule(handler, description) for handler, description, tags in _GROUPS for tag in tags
}


def get_rule(tag: str) -> TagRule | None:
    """Return the dispatch rule for a tag, or None if the tag is unknown."""
    return TAG_TABLE.get(tag)
