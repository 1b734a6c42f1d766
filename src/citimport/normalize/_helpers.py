"""Compiled regex patterns shared by the field normalizers."""

import re

ISSN_RE = re.compile(r"^[0-9]{4}-?[0-9]{3}[0-9X]$")
ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
ISSN_LIST_SPLIT_RE = re.compile(r"[, ]+")
DOI_PREFIX_RE = re.compile(
    r"^(?:doi:\s*|https?://(?:dx\.)?doi\.org/)",
    re.IGNORECASE,
)
PMID_RE = re.compile(r"^\d{1,10}$")
PMCID_RE = re.compile(r"^PMC\d+$")

# SQL detail appended by database drivers to constraint messages
SQL_DETAIL_MARKERS = (" [insert into", "; SQL [")
