"""Pytest configuration and fixtures for test suite."""

import io
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from citimport.engine import ImportSession  # noqa: E402
from citimport.models import EntityKind  # noqa: E402
from citimport.store import InMemoryStore  # noqa: E402


@pytest.fixture
def store() -> InMemoryStore:
    """Empty in-memory store."""
    return InMemoryStore()


@pytest.fixture
def topic_id(store: InMemoryStore) -> int:
    """Id of a seeded topic."""
    return store.add_entity(EntityKind.TOP, "Climate sensitivity")


@pytest.fixture
def run_session(store: InMemoryStore) -> Callable[..., ImportSession]:
    """Factory running RIS text through a fresh session on the shared store."""

    def _run(content: str, **kwargs) -> ImportSession:
        session = ImportSession(store, store, **kwargs)
        session.run(io.StringIO(content))
        return session

    return _run
