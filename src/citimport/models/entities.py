"""Evidence-store entities and the inputs used to create them.

Entities are what the store hands back; inputs are what the import
pipeline sends. The pipeline only ever holds identifiers of created
entities, never mutates them.
"""

import datetime
from dataclasses import asdict, dataclass
from enum import StrEnum
from typing import Any


class EntityKind(StrEnum):
    """Kinds of linkable and reference entities in the evidence store."""

    CLA = "CLA"
    COU = "COU"
    DEC = "DEC"
    JOU = "JOU"
    PER = "PER"
    PUB = "PUB"
    PBR = "PBR"
    QUO = "QUO"
    TOP = "TOP"
    USR = "USR"


class PublicationKind(StrEnum):
    """RIS reference types accepted in a ``TY`` tag.

    The member value is the RIS code; ``description`` gives the long name.
    """

    ABST = "ABST"
    ADVS = "ADVS"
    AGGR = "AGGR"
    ANCIENT = "ANCIENT"
    ART = "ART"
    BILL = "BILL"
    BLOG = "BLOG"
    BOOK = "BOOK"
    CASE = "CASE"
    CHAP = "CHAP"
    CHART = "CHART"
    CLSWK = "CLSWK"
    COMP = "COMP"
    CONF = "CONF"
    CPAPER = "CPAPER"
    CTLG = "CTLG"
    DATA = "DATA"
    DBASE = "DBASE"
    DICT = "DICT"
    EBOOK = "EBOOK"
    ECHAP = "ECHAP"
    EDBOOK = "EDBOOK"
    EJOUR = "EJOUR"
    ELEC = "ELEC"
    ENCYC = "ENCYC"
    EQUA = "EQUA"
    FIGURE = "FIGURE"
    GEN = "GEN"
    GOVDOC = "GOVDOC"
    GRANT = "GRANT"
    HEAR = "HEAR"
    ICOMM = "ICOMM"
    INPR = "INPR"
    JFULL = "JFULL"
    JOUR = "JOUR"
    LEGAL = "LEGAL"
    MANSCPT = "MANSCPT"
    MAP = "MAP"
    MGZN = "MGZN"
    MPCT = "MPCT"
    MULTI = "MULTI"
    MUSIC = "MUSIC"
    NEWS = "NEWS"
    PAMP = "PAMP"
    PAT = "PAT"
    PCOMM = "PCOMM"
    RPRT = "RPRT"
    SER = "SER"
    SLIDE = "SLIDE"
    SOUND = "SOUND"
    STAND = "STAND"
    STAT = "STAT"
    THES = "THES"
    UNBILL = "UNBILL"
    UNPB = "UNPB"
    VIDEO = "VIDEO"
    WEB = "WEB"

    @classmethod
    def parse(cls, value: str | None) -> "PublicationKind | None":
        """Return the member for a RIS code, or None if unrecognized."""
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def description(self) -> str:
        """Long human-readable name."""
        return _KIND_DESCRIPTIONS[self]

    @property
    def is_book_like(self) -> bool:
        """Whether an ``SN`` value is an ISBN for this kind."""
        return self in _BOOK_KINDS

    @property
    def is_periodical(self) -> bool:
        """Whether an ``SN`` value is an ISSN for this kind."""
        return self in _PERIODICAL_KINDS


_KIND_DESCRIPTIONS: dict[PublicationKind, str] = {
    PublicationKind.ABST: "Abstract",
    PublicationKind.ADVS: "Audiovisual material",
    PublicationKind.AGGR: "Aggregated database",
    PublicationKind.ANCIENT: "Ancient text",
    PublicationKind.ART: "Art work",
    PublicationKind.BILL: "Bill/resolution",
    PublicationKind.BLOG: "Blog",
    PublicationKind.BOOK: "Book, whole",
    PublicationKind.CASE: "Case",
    PublicationKind.CHAP: "Book section",
    PublicationKind.CHART: "Chart",
    PublicationKind.CLSWK: "Classical work",
    PublicationKind.COMP: "Computer program",
    PublicationKind.CONF: "Conference proceeding",
    PublicationKind.CPAPER: "Conference paper",
    PublicationKind.CTLG: "Catalogue",
    PublicationKind.DATA: "Dataset",
    PublicationKind.DBASE: "Online database",
    PublicationKind.DICT: "Dictionary",
    PublicationKind.EBOOK: "Electronic book",
    PublicationKind.ECHAP: "Electronic book section",
    PublicationKind.EDBOOK: "Edited book",
    PublicationKind.EJOUR: "Electronic article",
    PublicationKind.ELEC: "Electronic citation",
    PublicationKind.ENCYC: "Encyclopaedia article",
    PublicationKind.EQUA: "Equation",
    PublicationKind.FIGURE: "Figure",
    PublicationKind.GEN: "Generic",
    PublicationKind.GOVDOC: "Government document",
    PublicationKind.GRANT: "Grant",
    PublicationKind.HEAR: "Hearing",
    PublicationKind.ICOMM: "Internet communication",
    PublicationKind.INPR: "In Press",
    PublicationKind.JFULL: "Journal (full)",
    PublicationKind.JOUR: "Journal",
    PublicationKind.LEGAL: "Legal rule or regulation",
    PublicationKind.MANSCPT: "Manuscript",
    PublicationKind.MAP: "Map",
    PublicationKind.MGZN: "Magazine article",
    PublicationKind.MPCT: "Motion picture",
    PublicationKind.MULTI: "Online multimedia",
    PublicationKind.MUSIC: "Music score",
    PublicationKind.NEWS: "Newspaper",
    PublicationKind.PAMP: "Pamphlet",
    PublicationKind.PAT: "Patent",
    PublicationKind.PCOMM: "Personal communication",
    PublicationKind.RPRT: "Report",
    PublicationKind.SER: "Serial publication",
    PublicationKind.SLIDE: "Slide presentation",
    PublicationKind.SOUND: "Sound recording",
    PublicationKind.STAND: "Standard",
    PublicationKind.STAT: "Statute",
    PublicationKind.THES: "Thesis/dissertation",
    PublicationKind.UNBILL: "Unenacted bill/resolution",
    PublicationKind.UNPB: "Unpublished work",
    PublicationKind.VIDEO: "Video recording",
    PublicationKind.WEB: "Web page",
}

_BOOK_KINDS = frozenset(
    {
        PublicationKind.BOOK,
        PublicationKind.EBOOK,
        PublicationKind.EDBOOK,
        PublicationKind.CHAP,
        PublicationKind.ECHAP,
    }
)

_PERIODICAL_KINDS = frozenset(
    {
        PublicationKind.JFULL,
        PublicationKind.JOUR,
        PublicationKind.EJOUR,
        PublicationKind.MGZN,
        PublicationKind.NEWS,
        PublicationKind.SER,
    }
)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Publisher:
    """A publisher known to the store."""

    id: int
    name: str
    location: str | None = None


@dataclass(frozen=True)
class Journal:
    """A journal known to the store.

    Attributes
    ----------
    id : int
        Store identifier.
    title : str
        Full title.
    abbreviation : str | None
        ISO-4 abbreviated title.
    issn : str | None
        Hyphenated ISSN.
    publisher_id : int | None
        Owning publisher, if known.
    peer_reviewed : bool
        Inherited by publications imported into this journal.
    notes : str | None
        Free-text notes.
    """

    id: int
    title: str
    abbreviation: str | None = None
    issn: str | None = None
    publisher_id: int | None = None
    peer_reviewed: bool = False
    notes: str | None = None


@dataclass(frozen=True)
class Publication:
    """A publication known to the store."""

    id: int
    kind: PublicationKind
    title: str
    journal_id: int | None = None
    doi: str | None = None


@dataclass(frozen=True)
class EntityLink:
    """A directed link between two linkable entities."""

    id: int
    from_entity_id: int
    to_entity_id: int


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PublisherInput:
    """Fields for creating a publisher."""

    name: str
    location: str | None = None


@dataclass(frozen=True)
class JournalInput:
    """Fields for creating a journal."""

    title: str
    abbreviation: str | None = None
    issn: str | None = None
    publisher_id: int | None = None
    notes: str | None = None


@dataclass(frozen=True)
class PublicationInput:
    """Fields for creating a publication.

    Built once per record at its ``ER`` boundary from the accumulated
    fields plus the resolved journal.
    """

    kind: PublicationKind
    title: str
    author_names: str | None = None
    abstract: str | None = None
    notes: str | None = None
    keywords: str | None = None
    journal_id: int | None = None
    peer_reviewed: bool = False
    cached: bool = False
    date: datetime.date | None = None
    year: int | None = None
    accessed: datetime.date | None = None
    doi: str | None = None
    isbn: str | None = None
    url: str | None = None
    pmid: str | None = None
    pmcid: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-ready dictionary."""
        data = asdict(self)
        data["kind"] = str(self.kind)
        for key in ("date", "accessed"):
            if data[key] is not None:
                data[key] = data[key].isoformat()
        return data


@dataclass(frozen=True)
class EntityLinkInput:
    """Fields for creating a directed entity link."""

    from_entity_id: int
    to_entity_id: int
