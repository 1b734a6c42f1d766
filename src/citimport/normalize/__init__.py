"""Pure field normalizers for RIS values.

Main entry points:
- Dates: normalize_date, parse_date
- Identifiers: normalize_isbn, normalize_issn, is_issn, split_issn_list,
  normalize_doi, is_pmid, is_pmcid, split_urls, is_url
- Text: is_blank, normalize_authors, normalize_keywords,
  normalize_exception_message
"""

from citimport.normalize.identifiers import (
    is_issn,
    is_pmcid,
    is_pmid,
    is_url,
    normalize_date,
    normalize_doi,
    normalize_isbn,
    normalize_issn,
    parse_date,
    split_issn_list,
    split_urls,
)
from citimport.normalize.text import (
    AUTHOR_LIMIT,
    KEYWORD_LIMIT,
    UNKNOWN_AUTHORS,
    is_blank,
    normalize_authors,
    normalize_exception_message,
    normalize_keywords,
    truncate,
)

__all__ = [
    "AUTHOR_LIMIT",
    "KEYWORD_LIMIT",
    "UNKNOWN_AUTHORS",
    "is_blank",
    "is_issn",
    "is_pmcid",
    "is_pmid",
    "is_url",
    "normalize_authors",
    "normalize_date",
    "normalize_doi",
    "normalize_exception_message",
    "normalize_isbn",
    "normalize_issn",
    "normalize_keywords",
    "parse_date",
    "split_issn_list",
    "split_urls",
    "truncate",
]
