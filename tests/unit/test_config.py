"""Tests for import configuration."""

import pytest

from citimport.engine import ImportConfig
from citimport.models import EntityKind
from citimport.resolve import DEFAULT_JOURNAL_NOTES


@pytest.mark.unit
def test_defaults() -> None:
    """Test default limits, notes and kind."""
    config = ImportConfig()

    assert config.author_limit == 2000
    assert config.keyword_limit == 255
    assert config.journal_notes_template == DEFAULT_JOURNAL_NOTES
    assert config.import_kind is EntityKind.PUB


@pytest.mark.unit
@pytest.mark.parametrize("field", ["author_limit", "keyword_limit"])
@pytest.mark.parametrize("value", [0, -1])
def test_non_positive_limits_rejected(field: str, value: int) -> None:
    """Test limits must be positive."""
    with pytest.raises(ValueError, match=field):
        ImportConfig(**{field: value})


@pytest.mark.unit
@pytest.mark.parametrize("template", ["Imported {publication}", "Imported {0}", "Imported {"])
def test_bad_notes_template_rejected(template: str) -> None:
    """Test notes templates may only reference {title}."""
    with pytest.raises(ValueError, match="journal_notes_template"):
        ImportConfig(journal_notes_template=template)


@pytest.mark.unit
def test_import_kind_coerced_and_serialized() -> None:
    """Test a kind code string is accepted and serialized back as a string."""
    config = ImportConfig(import_kind="QUO", journal_notes_template="From {title}")

    assert config.import_kind is EntityKind.QUO
    assert config.to_dict() == {
        "author_limit": 2000,
        "keyword_limit": 255,
        "journal_notes_template": "From {title}",
        "import_kind": "QUO",
    }


@pytest.mark.unit
def test_unknown_import_kind_rejected() -> None:
    """Test an unknown kind code raises ValueError."""
    with pytest.raises(ValueError):
        ImportConfig(import_kind="XYZ")
