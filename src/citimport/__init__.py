"""Import RIS citation files into an evidence store.

This package provides:
- Data models (citimport.models): outcomes, diagnostics, entities
- Normalization (citimport.normalize): pure field normalizers
- Parsing (citimport.parse): RIS lexer, parser state, tag table
- Resolution (citimport.resolve): journal cross-check, entity creation
- Store (citimport.store): collaborator contracts and an in-memory store
- ISO 4 (citimport.iso4): journal title abbreviation
- Linking (citimport.linking): entity-kind link compatibility
- Engine (citimport.engine): import session and configuration
- Audit (citimport.audit): JSONL event logging
- Report (citimport.report): JSON import reports
- CLI (citimport.cli): command-line interface
- Public API (citimport.api): high-level entry points
"""

__version__ = "0.1.0"
__license__ = "MIT"

from citimport.api import (
    CitImportError,
    InvalidMasterError,
    StreamReadError,
    import_file,
    import_ris,
    run_import,
)
from citimport.engine import ImportConfig, ImportSession
from citimport.iso4 import Iso4Abbreviator
from citimport.models import Diagnostic, ImportOutcome, ImportResult, Severity
from citimport.store import InMemoryStore

__all__ = [
    "__version__",
    "__license__",
    "CitImportError",
    "Diagnostic",
    "ImportConfig",
    "ImportOutcome",
    "ImportResult",
    "ImportSession",
    "InMemoryStore",
    "InvalidMasterError",
    "Iso4Abbreviator",
    "Severity",
    "StreamReadError",
    "import_file",
    "import_ris",
    "run_import",
]
