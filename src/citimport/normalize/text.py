"""Text field normalization: truncation, emptiness and message cleanup."""

from ._helpers import SQL_DETAIL_MARKERS

UNKNOWN_AUTHORS = "(unknown)"
AUTHOR_LIMIT = 2000
KEYWORD_LIMIT = 255


def is_blank(value: str | None) -> bool:
    """Treat None and whitespace-only strings alike as absent."""
    return value is None or not value.strip()


def truncate(value: str, limit: int) -> str:
    """Silently cut value to at most ``limit`` characters."""
    return value[:limit] if len(value) > limit else value


def normalize_authors(value: str | None, limit: int = AUTHOR_LIMIT) -> str:
    """Normalize newline-joined author names for storage.

    Parameters
    ----------
    value : str | None
        Newline-joined author names.
    limit : int, optional
        Storage limit, by default 2000.

    Returns
    -------
    str
        Truncated names, or ``"(unknown)"`` when absent.
    """
    if is_blank(value):
        return UNKNOWN_AUTHORS
    return truncate(value, limit)


def normalize_keywords(value: str, limit: int = KEYWORD_LIMIT) -> str:
    """Truncate a comma-joined keyword list to the storage limit."""
    return truncate(value, limit)


def normalize_exception_message(message: str | None) -> str:
    """Strip technical SQL detail from a persistence error message.

    Examples
    --------
    >>> normalize_exception_message(
    ...     "Duplicate entry 'x' for key 'title' [insert into journal ...]"
    ... )
    "Duplicate entry 'x' for key 'title'"
    """
    if not message:
        return "(no message)"
    cut = len(message)
    for marker in SQL_DETAIL_MARKERS:
        idx = message.find(marker)
        if idx != -1:
            cut = min(cut, idx)
    return message[:cut]
