"""Shared utility functions for citimport."""

from citimport.utils.hashing import calculate_file_sha256
from citimport.utils.timestamps import get_file_mtime, get_iso_timestamp

__all__ = [
    "calculate_file_sha256",
    "get_file_mtime",
    "get_iso_timestamp",
]
