"""Helper utilities for audit logging."""

import secrets

from citimport.utils import get_iso_timestamp

__all__ = ["generate_run_id"]


def generate_run_id() -> str:
    """Identify one import run.

    Returns
    -------
    str
        Start time and a random suffix, e.g. "2026-02-03T12:34:56.123456Z__9f1c2b7a".
    """
    return f"{get_iso_timestamp()}__{secrets.token_hex(4)}"
