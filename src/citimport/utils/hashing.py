"""Content digests recorded in import reports."""

import hashlib
from pathlib import Path

__all__ = ["calculate_file_sha256"]

_CHUNK_SIZE = 8192


def calculate_file_sha256(path: Path) -> str:
    """Digest a RIS input file so a report can be tied to the exact bytes imported.

    Parameters
    ----------
    path : Path
        Input file.

    Returns
    -------
    str
        Digest in the form "sha256:<hex>".

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    """
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    digest = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return f"sha256:{digest.hexdigest()}"
