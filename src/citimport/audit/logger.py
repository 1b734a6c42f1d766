"""JSONL audit log of one or more imports.

Each line is a ``LogEvent``: the import run, the source being read, the
record index when the event concerns one record, and an event payload.
The file is opened once, appended to, and flushed after every event so a
crashed import still leaves a readable trail.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from citimport.audit.models import LogEvent
from citimport.models import Diagnostic, ImportOutcome
from citimport.utils import get_iso_timestamp

__all__ = ["AuditLogger"]


class AuditLogger:
    """Append import events to a JSONL file.

    Use as a context manager, or call ``close()`` when the import is done.

    Attributes
    ----------
    run_id : str
        Identifier shared by every event of the run.
    log_path : Path
        JSONL file, created with its parent directories if missing.
    current_source : str | None
        Input currently being imported, copied into each event.
    """

    def __init__(self, run_id: str, log_path: Path) -> None:
        """Initialize audit logger and open file handle.

        Parameters
        ----------
        run_id : str
            Unique run identifier.
        log_path : Path
            Path to JSONL log file.
        """
        self.run_id = run_id
        self.log_path = log_path
        self.current_source: str | None = None

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.log_path.open("a", encoding="utf-8")

    def __enter__(self) -> "AuditLogger":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager and close file."""
        self.close()

    def close(self) -> None:
        """Flush and close the log file handle."""
        if not self._file.closed:
            self._file.flush()
            self._file.close()

    def set_source(self, source: str | None) -> None:
        """Set the input currently being imported.

        Parameters
        ----------
        source : str | None
            File name or stream label, or None to clear.
        """
        self.current_source = source

    def event(
        self,
        event_type: str,
        data: dict[str, Any] | None = None,
        level: str = "INFO",
        record: int | None = None,
    ) -> None:
        """Write structured event to log.

        Parameters
        ----------
        event_type : str
            Event type identifier (e.g., "import_started").
        data : dict[str, Any] | None, optional
            Event-specific data payload.
        level : str, optional
            Log level ("DEBUG", "INFO", "WARN", "ERROR").
        record : int | None, optional
            Record index if event is record-specific.
        """
        log_event = LogEvent(
            ts=get_iso_timestamp(),
            run_id=self.run_id,
            level=level,
            event=event_type,
            data=data or {},
            source=self.current_source,
            record=record,
        )
        self._write_event(log_event)

    def _write_event(self, event: LogEvent) -> None:
        event_dict = asdict(event)
        json.dump(event_dict, self._file, ensure_ascii=False, separators=(",", ":"))
        self._file.write("\n")
        self._file.flush()

    def import_started(self, source: str, parameters: dict[str, Any]) -> None:
        """Log import_started event and set the source context.

        Parameters
        ----------
        source : str
            File name or stream label.
        parameters : dict[str, Any]
            Configuration and master context.
        """
        self.set_source(source)
        self.event("import_started", data={"parameters": parameters})

    def import_finished(
        self,
        status: str,
        duration_seconds: float,
        counters: dict[str, int] | None = None,
    ) -> None:
        """Log import_finished event.

        Parameters
        ----------
        status : str
            "success" or "failed".
        duration_seconds : float
            Total import time in seconds.
        counters : dict[str, int] | None, optional
            Outcome counters.
        """
        data: dict[str, Any] = {"status": status, "duration_seconds": duration_seconds}
        if counters:
            data["counters"] = counters
        self.event("import_finished", data=data, level="INFO" if status == "success" else "ERROR")

    def record_finished(self, record: int, outcome: ImportOutcome) -> None:
        """Log the final disposition of one record."""
        self.event(
            "record_finished",
            data={
                "result": str(outcome.result),
                "id": outcome.id,
                "label": outcome.label,
                "messages": len(outcome.messages),
            },
            level="INFO" if outcome.id is not None else "WARN",
            record=record,
        )

    def record_discarded(self, record: int, line_number: int, reason: str) -> None:
        """Log a record that never reached a matching ``ER``."""
        self.event(
            "record_discarded",
            data={"line_number": line_number, "reason": reason},
            level="WARN",
            record=record,
        )

    def entity_created(self, entity_kind: str, entity_id: int, label: str, record: int) -> None:
        """Log creation of a publisher, journal, publication or link."""
        self.event(
            "entity_created",
            data={"entity_kind": entity_kind, "entity_id": entity_id, "label": label},
            level="DEBUG",
            record=record,
        )

    def entity_failed(self, entity_kind: str, message: str, record: int) -> None:
        """Log a failed entity creation."""
        self.event(
            "entity_failed",
            data={"entity_kind": entity_kind, "message": message},
            level="ERROR",
            record=record,
        )

    def orphan_diagnostic(self, diagnostic: Diagnostic) -> None:
        """Log a diagnostic raised while no record outcome was live."""
        self.event(
            "orphan_diagnostic",
            data=diagnostic.to_dict(),
            level="WARN" if diagnostic.severity != "Info" else "INFO",
        )

    def error(self, exception_class: str, message: str) -> None:
        """Log a call-level error.

        Parameters
        ----------
        exception_class : str
            Exception class name.
        message : str
            Error message.
        """
        self.event(
            "error",
            data={"exception_class": exception_class, "message": message},
            level="ERROR",
        )
