"""Audit logging subsystem for citimport.

Main Components
---------------
- AuditLogger: JSONL event logger
- generate_run_id: unique run identifiers
"""

from citimport.audit.helpers import generate_run_id
from citimport.audit.logger import AuditLogger
from citimport.audit.models import LogEvent

__all__ = [
    "AuditLogger",
    "LogEvent",
    "generate_run_id",
]
