"""Public API for importing RIS citation files.

This module provides the entry points of citimport:
- Importing a RIS stream or file into an evidence store
- Validating and orienting caller-supplied master entities
"""

import time
from pathlib import Path
from typing import IO

from citimport.audit import AuditLogger
from citimport.engine import ImportConfig, ImportSession
from citimport.errors import CitImportError, InvalidMasterError, StreamReadError
from citimport.iso4 import Iso4Abbreviator
from citimport.linking import MasterContext, resolve_master_link
from citimport.models import EntityKind, ImportOutcome
from citimport.report import summarize
from citimport.store.protocols import EntityDirectory, EvidenceStore

__all__ = [
    "import_ris",
    "import_file",
    "run_import",
    "resolve_master",
    "CitImportError",
    "InvalidMasterError",
    "StreamReadError",
]


def resolve_master(
    directory: EntityDirectory,
    *,
    master_topic_id: int | None = None,
    master_record_id: int | None = None,
    import_kind: EntityKind = EntityKind.PUB,
) -> MasterContext:
    """Validate master ids and decide the direction of the record link.

    Parameters
    ----------
    directory : EntityDirectory
        Kind lookup for entity ids.
    master_topic_id : int | None, optional
        Topic to link every imported record from.
    master_record_id : int | None, optional
        Record to link every imported record with.
    import_kind : EntityKind, optional
        Kind of the records being imported.

    Returns
    -------
    MasterContext
        Master entities with the record link direction resolved.

    Raises
    ------
    InvalidMasterError
        If an id is unknown, the topic id is not a topic, or the master
        record's kind cannot be linked to imported records either way.
    """
    if master_topic_id is not None:
        kind = directory.entity_kind(master_topic_id)
        if kind is None:
            raise InvalidMasterError(f"Unknown master topic id: {master_topic_id}")
        if kind is not EntityKind.TOP:
            raise InvalidMasterError(
                f"Master topic id {master_topic_id} refers to a {kind} entity, not a topic"
            )

    record = None
    if master_record_id is not None:
        kind = directory.entity_kind(master_record_id)
        if kind is None:
            raise InvalidMasterError(f"Unknown master record id: {master_record_id}")
        record = resolve_master_link(import_kind, kind, master_record_id)
        if record is None:
            raise InvalidMasterError(
                f"Cannot link {import_kind} records to master record#{master_record_id} ({kind})"
            )

    return MasterContext(topic_id=master_topic_id, record=record)


def run_import(
    stream: IO[str] | IO[bytes],
    store: EvidenceStore,
    *,
    master_topic_id: int | None = None,
    master_record_id: int | None = None,
    abbreviator: Iso4Abbreviator | None = None,
    config: ImportConfig | None = None,
    audit_logger: AuditLogger | None = None,
    source: str = "<stream>",
) -> ImportSession:
    """Import a RIS stream and return the finished session.

    Same as ``import_ris`` but gives access to ``discarded`` outcomes as
    well as completed ones.

    Returns
    -------
    ImportSession
        Session with ``outcomes`` and ``discarded`` populated.
    """
    config = config or ImportConfig()
    master = resolve_master(
        store,
        master_topic_id=master_topic_id,
        master_record_id=master_record_id,
        import_kind=config.import_kind,
    )
    session = ImportSession(
        store,
        store,
        abbreviator=abbreviator,
        master=master,
        config=config,
        audit_logger=audit_logger,
    )

    if audit_logger is not None:
        audit_logger.import_started(
            source,
            parameters={
                "config": config.to_dict(),
                "master_topic_id": master_topic_id,
                "master_record_id": master_record_id,
            },
        )
    start = time.perf_counter()
    try:
        session.run(stream)
    except StreamReadError as e:
        if audit_logger is not None:
            audit_logger.error(type(e).__name__, str(e))
            audit_logger.import_finished("failed", time.perf_counter() - start)
        raise

    if audit_logger is not None:
        summary = summarize(session.outcomes, session.discarded)
        audit_logger.import_finished(
            "success", time.perf_counter() - start, counters=summary.counters()
        )
    return session


def import_ris(
    stream: IO[str] | IO[bytes],
    store: EvidenceStore,
    *,
    master_topic_id: int | None = None,
    master_record_id: int | None = None,
    abbreviator: Iso4Abbreviator | None = None,
    config: ImportConfig | None = None,
    audit_logger: AuditLogger | None = None,
) -> list[ImportOutcome]:
    """Import every record in a RIS stream.

    Parameters
    ----------
    stream : IO[str] | IO[bytes]
        RIS content. Binary streams are decoded as UTF-8.
    store : EvidenceStore
        Lookup, creation and kind lookup collaborator.
    master_topic_id : int | None, optional
        Topic to link each imported publication from.
    master_record_id : int | None, optional
        Record to link each imported publication with; the direction
        follows entity-kind compatibility.
    abbreviator : Iso4Abbreviator | None, optional
        Journal abbreviation utility.
    config : ImportConfig | None, optional
        Import configuration.
    audit_logger : AuditLogger | None, optional
        Structured event log.

    Returns
    -------
    list[ImportOutcome]
        One outcome per completed record, in input order.

    Raises
    ------
    InvalidMasterError
        If a master id is unknown or not linkable. Raised before any input is read.
    StreamReadError
        If the stream cannot be read. The store may already hold entities
        created for earlier records.

    Examples
    --------
        >>> import io
        >>> from citimport import InMemoryStore, import_ris
        >>> store = InMemoryStore()
        >>> outcomes = import_ris(io.StringIO("TY  - JOUR\\nTI  - A Study\\nER  - \\n"), store)
        >>> outcomes[0].result
        <ImportResult.IMPORTED: 'Imported'>
    """
    session = run_import(
        stream,
        store,
        master_topic_id=master_topic_id,
        master_record_id=master_record_id,
        abbreviator=abbreviator,
        config=config,
        audit_logger=audit_logger,
    )
    return session.outcomes


def import_file(
    path: str | Path,
    store: EvidenceStore,
    **kwargs,
) -> list[ImportOutcome]:
    """Import a RIS file.

    Keyword arguments are passed to ``import_ris``.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with file_path.open("rb") as f:
        session = run_import(f, store, source=str(file_path), **kwargs)
    return session.outcomes
