"""Tests for entity-kind link compatibility and master direction."""

import pytest

from citimport.linking import LINKABLE_KINDS, MasterLink, can_link, resolve_master_link
from citimport.models import EntityKind


@pytest.mark.unit
def test_topic_links_down_to_publications() -> None:
    """Test topics may link to publications but not the reverse."""
    assert can_link(EntityKind.TOP, EntityKind.PUB)
    assert not can_link(EntityKind.PUB, EntityKind.TOP)


@pytest.mark.unit
def test_non_linkable_kinds() -> None:
    """Test kinds absent from the table link to nothing."""
    assert not can_link(EntityKind.JOU, EntityKind.PUB)
    assert not can_link(EntityKind.USR, EntityKind.TOP)
    assert EntityKind.JOU not in LINKABLE_KINDS


@pytest.mark.unit
@pytest.mark.parametrize(
    ("master_kind", "expected"),
    [
        (EntityKind.QUO, MasterLink(to_entity_id=5)),
        (EntityKind.CLA, MasterLink(from_entity_id=5)),
        (EntityKind.PER, MasterLink(from_entity_id=5)),
        (EntityKind.TOP, MasterLink(from_entity_id=5)),
        (EntityKind.JOU, None),
        (EntityKind.PBR, None),
    ],
)
def test_resolve_master_link(master_kind: EntityKind, expected: MasterLink | None) -> None:
    """Test the master side follows the permitted direction."""
    assert resolve_master_link(EntityKind.PUB, master_kind, 5) == expected


@pytest.mark.unit
def test_master_link_requires_exactly_one_side() -> None:
    """Test a master link must name exactly one side."""
    with pytest.raises(ValueError):
        MasterLink()
    with pytest.raises(ValueError):
        MasterLink(from_entity_id=1, to_entity_id=2)

    assert MasterLink(to_entity_id=3).master_id == 3
