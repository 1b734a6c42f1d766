"""ISO 4 journal title abbreviation.

Abbreviates serial titles using a List of Title Word Abbreviations (LTWA)
and canonicalizes abbreviations supplied by citation exports. LTWA words
ending in ``-`` are prefixes (``scienc-`` matches "Sciences"), words
starting with ``-`` are suffixes (``-shire`` matches "Dorsetshire").
Reference: https://www.issn.org/services/online-services/access-to-the-ltwa/
"""

import csv
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

__all__ = [
    "DEFAULT_LTWA",
    "DEFAULT_OMIT_WORDS",
    "Iso4Abbreviator",
    "LtwaEntry",
    "load_ltwa",
]

NOT_ABBREVIATED = "n.a."

# Articles, conjunctions and prepositions dropped from abbreviated titles
DEFAULT_OMIT_WORDS: frozenset[str] = frozenset(
    "a an and at by for from in of on or the to with & "
    "de des du et la le les y der die das und für".split()
)


@dataclass(frozen=True)
class LtwaEntry:
    """One LTWA row.

    Attributes
    ----------
    word : str
        Title word, lowercased, without hyphens.
    abbreviation : str | None
        Abbreviated form, or None when the word is not abbreviated.
    prefix : bool
        Entry matches any word starting with ``word``.
    suffix : bool
        Entry matches any word ending with ``word``.
    """

    word: str
    abbreviation: str | None
    prefix: bool = False
    suffix: bool = False

    @classmethod
    def parse(cls, word: str, abbreviation: str) -> "LtwaEntry":
        """Build an entry from raw LTWA columns, e.g. ``("scienc-", "sci.")``."""
        word = word.strip().lower()
        abbreviation = abbreviation.strip()
        return cls(
            word=word.strip("-"),
            abbreviation=None if abbreviation in ("", NOT_ABBREVIATED) else abbreviation,
            prefix=word.endswith("-"),
            suffix=word.startswith("-"),
        )

    def matches(self, word: str) -> bool:
        """Whether this entry applies to a lowercased title word."""
        if self.prefix and self.suffix:
            return self.word in word
        if self.prefix:
            return word.startswith(self.word)
        if self.suffix:
            return word.endswith(self.word)
        return word == self.word


DEFAULT_LTWA: tuple[LtwaEntry, ...] = tuple(
    LtwaEntry.parse(word, abbreviation)
    for word, abbreviation in (
        ("academ-", "acad."),
        ("america-", "am."),
        ("annal-", "ann."),
        ("applied", "appl."),
        ("archiv-", "arch."),
        ("atmospher-", "atmos."),
        ("biolog-", "biol."),
        ("bulletin", "bull."),
        ("chemi-", "chem."),
        ("climat-", "clim."),
        ("communication", "commun."),
        ("earth", NOT_ABBREVIATED),
        ("ecolog-", "ecol."),
        ("economic-", "econ."),
        ("environment-", "environ."),
        ("european", "eur."),
        ("geophysic-", "geophys."),
        ("-graphy", "-gr."),
        ("international", "int."),
        ("journal", "j."),
        ("letter-", "lett."),
        ("medic-", "med."),
        ("meteorolog-", "meteorol."),
        ("nation-", "natl."),
        ("nature", NOT_ABBREVIATED),
        ("physic-", "phys."),
        ("proceeding-", "proc."),
        ("quarterly", "q."),
        ("research", "res."),
        ("review", "rev."),
        ("royal", "r."),
        ("scien-", "sci."),
        ("-shire", "-sh."),
        ("societ-", "soc."),
        ("statist-", "stat."),
        ("technolog-", "technol."),
        ("transaction-", "trans."),
    )
)


def load_ltwa(path: Path) -> list[LtwaEntry]:
    """Load an LTWA extract.

    Accepts the tab-separated file published by the ISSN centre
    (``WORDS<TAB>ABBREVIATIONS<TAB>LANGUAGES``, with a header row) or a
    two-column CSV.

    Parameters
    ----------
    path : Path
        LTWA file.

    Returns
    -------
    list[LtwaEntry]
        Entries in file order.
    """
    with path.open(encoding="utf-8-sig", newline="") as f:
        sample = f.read(4096)
        f.seek(0)
        delimiter = "\t" if "\t" in sample else ","
        entries: list[LtwaEntry] = []
        for row in csv.reader(f, delimiter=delimiter):
            if len(row) < 2 or not row[0].strip():
                continue
            if row[0].strip().upper() == "WORDS":
                continue
            entries.append(LtwaEntry.parse(row[0], row[1]))
    return entries


_TRAILING_PUNCTUATION = ".,;:"


def _first_to_upper(text: str) -> str:
    return text[:1].upper() + text[1:]


class Iso4Abbreviator:
    """ISO 4 abbreviation and normalization against an LTWA table.

    Parameters
    ----------
    entries : Iterable[LtwaEntry], optional
        LTWA rows, by default the bundled ``DEFAULT_LTWA`` extract.
    omit_words : Iterable[str], optional
        Words dropped from abbreviations, by default ``DEFAULT_OMIT_WORDS``.
    """

    def __init__(
        self,
        entries: Iterable[LtwaEntry] | None = None,
        omit_words: Iterable[str] | None = None,
    ) -> None:
        self.entries = tuple(DEFAULT_LTWA if entries is None else entries)
        self.omit_words = frozenset(
            w.lower() for w in (DEFAULT_OMIT_WORDS if omit_words is None else omit_words)
        )
        self._abbreviations = frozenset(
            e.abbreviation.lower().strip("-") for e in self.entries if e.abbreviation
        )

    def abbreviate(self, title: str) -> str:
        """Abbreviate a full journal title.

        Examples
        --------
        >>> Iso4Abbreviator().abbreviate("Journal of Climate")
        'J. Clim.'
        """
        words = title.split()
        if len(words) == 1:
            # Single-word titles are never abbreviated
            return title.strip()
        parts = []
        for word in words:
            core = word.rstrip(_TRAILING_PUNCTUATION)
            if not core or core.lower() in self.omit_words:
                continue
            abbreviated = self._abbreviate_word(core)
            trailing = word[len(core) :]
            if abbreviated.endswith(".") and trailing.startswith("."):
                trailing = trailing[1:]
            parts.append(abbreviated + trailing)
        return " ".join(parts) or title.strip()

    def _abbreviate_word(self, word: str) -> str:
        entry = self._entry_for(word.lower())
        if entry is None or entry.abbreviation is None:
            return word

        abbrev = entry.abbreviation.lstrip("-")
        if entry.suffix and not entry.prefix:
            # e.g. "Dorsetshire" with {-shire, -sh.} -> "Dorsetsh."
            root = word[: word.lower().rfind(entry.word)]
            abbreviated = root + abbrev
        else:
            abbreviated = _first_to_upper(abbrev) if word[:1].isupper() else abbrev
        if not abbreviated.endswith("."):
            abbreviated += "."
        return abbreviated

    def _entry_for(self, word: str) -> LtwaEntry | None:
        """Longest matching entry, in priority exact, prefix+suffix, prefix, suffix."""
        best: dict[tuple[bool, bool], LtwaEntry] = {}
        for entry in self.entries:
            if not entry.matches(word):
                continue
            key = (entry.prefix, entry.suffix)
            current = best.get(key)
            if current is None or len(entry.word) > len(current.word):
                best[key] = entry
        for key in ((False, False), (True, True), (True, False), (False, True)):
            if key in best:
                return best[key]
        return None

    def normalize_abbreviation(self, value: str) -> str:
        """Canonicalize an abbreviated title.

        Known abbreviation words get an initial capital and a trailing
        period; other words are left untouched.

        Examples
        --------
        >>> Iso4Abbreviator().normalize_abbreviation("j clim")
        'J. Clim.'
        """
        words = value.split()
        out = []
        for word in words:
            if self._is_abbreviation(word):
                word = _first_to_upper(word)
                if not word.endswith("."):
                    word += "."
            out.append(word)
        return " ".join(out)

    def _is_abbreviation(self, word: str) -> bool:
        word = word.lower()
        if not word.endswith("."):
            word += "."
        return word in self._abbreviations
