"""Normalization of dates and bibliographic identifiers.

RIS exports are loose about dates (``2021///``, ``2021/03/04/``, or a
trailing time component) and about identifier formatting, so every value
goes through one of these functions before it reaches the store.
"""

from datetime import date
from urllib.parse import urlsplit

from ._helpers import (
    DOI_PREFIX_RE,
    ISO_DATE_RE,
    ISSN_LIST_SPLIT_RE,
    ISSN_RE,
    PMCID_RE,
    PMID_RE,
)


def normalize_date(value: str) -> str:
    """Rewrite a loose RIS date towards ``YYYY-MM-DD``.

    Truncates to 10 characters, rewrites the ``///`` placeholder as
    ``/01/01`` and turns slashes into hyphens.

    Parameters
    ----------
    value : str
        Raw date text.

    Returns
    -------
    str
        Rewritten text. Not guaranteed to be a valid date.

    Examples
    --------
    >>> normalize_date("2021///")
    '2021-01-01'
    >>> normalize_date("2021/03/04/10:00")
    '2021-03-04'
    """
    return value[:10].replace("///", "/01/01").replace("/", "-")


def parse_date(value: str) -> date:
    """Parse a loose RIS date.

    Parameters
    ----------
    value : str
        Raw date text.

    Returns
    -------
    date
        Parsed calendar date.

    Raises
    ------
    ValueError
        If the normalized text is not a valid ``YYYY-MM-DD`` date.
    """
    text = normalize_date(value)
    if not ISO_DATE_RE.match(text):
        raise ValueError(f"Not an ISO date: {text!r}")
    return date.fromisoformat(text)


def normalize_isbn(value: str) -> str:
    """Keep the first space-separated token of an ISBN field."""
    tokens = value.split()
    return tokens[0] if tokens else value


def is_issn(value: str) -> bool:
    """Whether value looks like an ISSN, hyphenated or not."""
    return bool(ISSN_RE.match(value))


def normalize_issn(value: str) -> str:
    """Hyphenate an 8-character ISSN. Idempotent.

    Examples
    --------
    >>> normalize_issn("12345678")
    '1234-5678'
    >>> normalize_issn("1234-5678")
    '1234-5678'
    """
    if len(value) == 8 and "-" not in value:
        return f"{value[:4]}-{value[4:]}"
    return value


def split_issn_list(value: str) -> list[str]:
    """Split an ``SN`` value that may hold several comma/space separated ISSNs."""
    return [token for token in ISSN_LIST_SPLIT_RE.split(value) if token]


def normalize_doi(value: str) -> str:
    """Strip ``doi:`` and resolver URL prefixes from a DOI."""
    return DOI_PREFIX_RE.sub("", value.strip())


def is_pmid(value: str) -> bool:
    """Whether value is a plausible PubMed identifier."""
    return bool(PMID_RE.match(value))


def is_pmcid(value: str) -> bool:
    """Whether value is a plausible PubMed Central identifier."""
    return bool(PMCID_RE.match(value))


def split_urls(value: str) -> list[str]:
    """Split a semicolon-separated URL list, dropping empty entries."""
    return [part.strip() for part in value.split(";") if part.strip()]


def is_url(value: str) -> bool:
    """Whether value is an absolute URL with scheme and host."""
    if any(c.isspace() for c in value):
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return bool(parts.scheme) and bool(parts.netloc)
