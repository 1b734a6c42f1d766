"""Timestamp helpers shared by the audit log and import reports."""

from datetime import UTC, datetime
from pathlib import Path

__all__ = ["get_iso_timestamp", "get_file_mtime"]


def get_iso_timestamp() -> str:
    """Return the current UTC time as ISO8601 with microseconds and a ``Z`` suffix.

    Returns
    -------
    str
        Timestamp such as "2026-02-03T12:34:56.123456Z".
    """
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def get_file_mtime(file_path: Path) -> str:
    """Return the modification time of an input file, to the second.

    Parameters
    ----------
    file_path : Path
        File to stat.

    Returns
    -------
    str
        ISO8601 timestamp, or empty string when the file cannot be stat'ed.
    """
    try:
        mtime = datetime.fromtimestamp(file_path.stat().st_mtime, UTC)
    except (OSError, ValueError):
        return ""
    return mtime.replace(microsecond=0).isoformat().replace("+00:00", "Z")
