"""Import configuration."""

from dataclasses import asdict, dataclass
from typing import Any

from citimport.models import EntityKind
from citimport.normalize import AUTHOR_LIMIT, KEYWORD_LIMIT
from citimport.resolve import DEFAULT_JOURNAL_NOTES


@dataclass
class ImportConfig:
    """Configuration for one import session.

    Attributes
    ----------
    author_limit : int
        Storage limit for newline-joined author names (default: 2000).
    keyword_limit : int
        Storage limit for comma-joined keywords (default: 255).
    journal_notes_template : str
        Notes attached to auto-created journals. ``{title}`` is replaced
        by the publication title.
    import_kind : EntityKind
        Entity kind of imported records, used to orient master record links.
    """

    author_limit: int = AUTHOR_LIMIT
    keyword_limit: int = KEYWORD_LIMIT
    journal_notes_template: str = DEFAULT_JOURNAL_NOTES
    import_kind: EntityKind = EntityKind.PUB

    def __post_init__(self) -> None:
        """Coerce and validate."""
        if self.author_limit <= 0:
            raise ValueError(f"author_limit must be positive, got {self.author_limit}")

        if self.keyword_limit <= 0:
            raise ValueError(f"keyword_limit must be positive, got {self.keyword_limit}")

        try:
            self.journal_notes_template.format(title="")
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(
                f"journal_notes_template may only use the {{title}} field: {e}"
            ) from e

        self.import_kind = EntityKind(self.import_kind)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data["import_kind"] = str(self.import_kind)
        return data
