"""Import orchestration engine.

Provides the session that drives the RIS parser state machine and the
configuration it runs with.
"""

from citimport.engine.config import ImportConfig
from citimport.engine.orchestrator import ImportSession

__all__ = [
    "ImportConfig",
    "ImportSession",
]
