"""Version entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from docvc.domain.value_objects import ChangeStats, EditScript, VersionKind


@dataclass(frozen=True)
class Version:
    """Immutable point in a document's history.

    Root versions have no parents, regular versions one, merge versions two
    (target head first). ``content`` is set on snapshots and on materialized
    copies; ``delta`` is the edit script from the first parent.
    ``chain_depth`` counts deltas back to the nearest snapshot (0 = snapshot).
    """

    id: UUID
    document_id: str
    number: int
    parent_ids: tuple[UUID, ...]
    branch: str
    kind: VersionKind
    author: str
    message: str
    content_hash: str
    size: int
    created_at: datetime
    changes: ChangeStats = field(default_factory=ChangeStats)
    author_id: str | None = None
    content: str | None = None
    delta: EditScript | None = None
    chain_depth: int = 0
    reverted_from: UUID | None = None
    merged_branch: str | None = None

    @property
    def is_root(self) -> bool:
        return not self.parent_ids

    @property
    def is_merge(self) -> bool:
        return len(self.parent_ids) > 1

    @property
    def is_snapshot(self) -> bool:
        return self.chain_depth == 0

    @property
    def base_parent_id(self) -> UUID | None:
        """Parent the delta is computed from."""
        return self.parent_ids[0] if self.parent_ids else None
