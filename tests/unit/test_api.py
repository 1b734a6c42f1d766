"""Tests for the public import API."""

import gc
import io
import json
from pathlib import Path

import pytest

from citimport.api import import_file, import_ris, resolve_master, run_import
from citimport.audit import AuditLogger
from citimport.engine import ImportConfig
from citimport.errors import InvalidMasterError, StreamReadError
from citimport.linking import MasterLink
from citimport.models import EntityKind, ImportResult
from citimport.store import InMemoryStore

_FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"

_RIS = "TY  - JOUR\nTI  - A Study of Things\nER  - \n"


@pytest.mark.unit
def test_import_ris_text_and_binary() -> None:
    """Test text and UTF-8 binary streams import identically."""
    text_store = InMemoryStore()
    binary_store = InMemoryStore()

    from_text = import_ris(io.StringIO(_RIS), text_store)
    from_bytes = import_ris(io.BytesIO(("\ufeff" + _RIS).encode("utf-8")), binary_store)

    assert [o.to_dict() for o in from_text] == [o.to_dict() for o in from_bytes]
    assert from_text[0].result is ImportResult.IMPORTED


@pytest.mark.unit
def test_import_ris_leaves_caller_stream_open() -> None:
    """Test the caller's binary stream is still usable after an import."""
    buf = io.BytesIO(_RIS.encode("utf-8"))

    import_ris(buf, InMemoryStore())
    gc.collect()

    assert not buf.closed
    buf.seek(0)
    assert buf.read().startswith(b"TY  - JOUR")


@pytest.mark.unit
def test_resolve_master_orients_record_link() -> None:
    """Test the master record side follows kind compatibility."""
    store = InMemoryStore()
    topic = store.add_entity(EntityKind.TOP, "Topic")
    quote = store.add_entity(EntityKind.QUO, "Quote")

    master = resolve_master(store, master_topic_id=topic, master_record_id=quote)

    assert master.topic_id == topic
    assert master.record == MasterLink(to_entity_id=quote)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("kwargs", "match"),
    [
        ({"master_topic_id": 99}, "Unknown master topic id"),
        ({"master_record_id": 99}, "Unknown master record id"),
        ({"master_topic_id": "claim"}, "not a topic"),
        ({"master_record_id": "publisher"}, "Cannot link"),
    ],
)
def test_invalid_master_rejected_before_reading(kwargs: dict, match: str) -> None:
    """Test bad master ids raise before any record is created."""
    store = InMemoryStore()
    ids = {
        "claim": store.add_entity(EntityKind.CLA, "Claim"),
        "publisher": store.add_entity(EntityKind.PBR, "Publisher"),
    }
    kwargs = {key: ids.get(value, value) for key, value in kwargs.items()}

    with pytest.raises(InvalidMasterError, match=match):
        import_ris(io.StringIO(_RIS), store, **kwargs)

    assert store.publications == {}


@pytest.mark.unit
def test_config_import_kind_orients_master() -> None:
    """Test the configured import kind is used to orient the master link."""
    store = InMemoryStore()
    topic = store.add_entity(EntityKind.TOP, "Topic")

    with pytest.raises(InvalidMasterError):
        run_import(
            io.StringIO(_RIS),
            store,
            master_record_id=topic,
            config=ImportConfig(import_kind=EntityKind.USR),
        )


@pytest.mark.unit
def test_import_file(tmp_path: Path) -> None:
    """Test importing a file from disk."""
    store = InMemoryStore()

    outcomes = import_file(_FIXTURES_DIR / "sample.ris", store)

    assert [o.result for o in outcomes] == [
        ImportResult.IMPORTED,
        ImportResult.IMPORTED,
        ImportResult.ERROR,
    ]


@pytest.mark.unit
def test_import_file_missing(tmp_path: Path) -> None:
    """Test a missing file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError, match="File not found"):
        import_file(tmp_path / "absent.ris", InMemoryStore())


@pytest.mark.unit
def test_stream_read_error_propagates_and_is_audited(tmp_path: Path) -> None:
    """Test undecodable input aborts the call and is logged as a failed import."""
    log_path = tmp_path / "events.jsonl"
    stream = io.BytesIO(b"TY  - JOUR\nTI  - \xff\xfe broken\nER  - \n")

    with AuditLogger("test_run", log_path) as audit_logger:
        with pytest.raises(StreamReadError):
            import_ris(stream, InMemoryStore(), audit_logger=audit_logger)

    with log_path.open() as f:
        events = [json.loads(line) for line in f if line.strip()]
    assert [e["event"] for e in events] == ["import_started", "error", "import_finished"]
    assert events[1]["data"]["exception_class"] == "StreamReadError"
    assert events[2]["data"]["status"] == "failed"


@pytest.mark.unit
def test_run_import_audits_counters(tmp_path: Path) -> None:
    """Test a successful import logs its counters and source."""
    log_path = tmp_path / "events.jsonl"

    with AuditLogger("test_run", log_path) as audit_logger:
        session = run_import(
            io.StringIO(_RIS), InMemoryStore(), audit_logger=audit_logger, source="mem.ris"
        )

    with log_path.open() as f:
        events = [json.loads(line) for line in f if line.strip()]
    assert session.outcomes[0].result is ImportResult.IMPORTED
    assert events[0]["event"] == "import_started"
    assert events[0]["data"]["parameters"]["config"]["import_kind"] == "PUB"
    assert events[-1]["data"]["counters"]["imported"] == 1
    assert {e["source"] for e in events} == {"mem.ris"}
