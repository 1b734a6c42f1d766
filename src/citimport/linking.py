"""Entity-kind link compatibility and master-record direction.

Links in the evidence store are directed. Only certain kinds may sit on
each side: topics link down to anything, claims to their supporting
evidence, and so on. An imported record linked to a caller-supplied
master record must therefore be placed on the side the table permits.
"""

from dataclasses import dataclass

from citimport.models import EntityKind

__all__ = ["LINKABLE_KINDS", "MasterContext", "MasterLink", "can_link", "resolve_master_link"]

# from-kind -> kinds it may link to
LINKABLE_KINDS: dict[EntityKind, frozenset[EntityKind]] = {
    EntityKind.TOP: frozenset(
        {
            EntityKind.TOP,
            EntityKind.CLA,
            EntityKind.DEC,
            EntityKind.PER,
            EntityKind.PUB,
            EntityKind.QUO,
        }
    ),
    EntityKind.CLA: frozenset({EntityKind.DEC, EntityKind.PER, EntityKind.PUB, EntityKind.QUO}),
    EntityKind.DEC: frozenset({EntityKind.PER, EntityKind.PUB, EntityKind.QUO}),
    EntityKind.PER: frozenset({EntityKind.PUB, EntityKind.QUO}),
    EntityKind.PUB: frozenset({EntityKind.QUO}),
    EntityKind.QUO: frozenset(),
}


@dataclass(frozen=True)
class MasterLink:
    """Which side of the link a master record occupies.

    Exactly one of ``from_entity_id`` and ``to_entity_id`` is set.
    """

    from_entity_id: int | None = None
    to_entity_id: int | None = None

    def __post_init__(self) -> None:
        """Validate that exactly one side is set."""
        if (self.from_entity_id is None) == (self.to_entity_id is None):
            raise ValueError("Exactly one of from_entity_id and to_entity_id must be set")

    @property
    def master_id(self) -> int:
        """The master record id, whichever side it is on."""
        return self.from_entity_id if self.from_entity_id is not None else self.to_entity_id


def can_link(from_kind: EntityKind, to_kind: EntityKind) -> bool:
    """Whether a directed link from ``from_kind`` to ``to_kind`` is permitted."""
    return to_kind in LINKABLE_KINDS.get(from_kind, frozenset())


def resolve_master_link(
    import_kind: EntityKind,
    master_kind: EntityKind,
    master_id: int,
) -> MasterLink | None:
    """Decide the direction of the link between imported records and a master record.

    Parameters
    ----------
    import_kind : EntityKind
        Kind of the records being imported (PUB for RIS).
    master_kind : EntityKind
        Kind of the caller-supplied master record.
    master_id : int
        Master record id.

    Returns
    -------
    MasterLink | None
        The master as the ``to`` side if imported records may link to it,
        else as the ``from`` side if it may link to them, else None.
    """
    if can_link(import_kind, master_kind):
        return MasterLink(to_entity_id=master_id)
    if can_link(master_kind, import_kind):
        return MasterLink(from_entity_id=master_id)
    return None


@dataclass(frozen=True)
class MasterContext:
    """Caller-supplied entities that every imported record is linked to.

    Attributes
    ----------
    topic_id : int | None
        Master topic; linked from the topic to each imported record.
    record : MasterLink | None
        Master record with its direction already resolved.
    """

    topic_id: int | None = None
    record: MasterLink | None = None
