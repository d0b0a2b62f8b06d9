"""History, comparison and statistics DTOs."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, TypeVar
from uuid import UUID

from docvc.domain.value_objects import ChangeStats, EditScript, VersionKind

T = TypeVar("T")


@dataclass
class HistoryQuery:
    """Filters and pagination for version history."""

    branch: str | None = None
    author: str | None = None
    limit: int | None = None
    offset: int = 0
    include_content: bool = False
    include_diff: bool = False
    since: datetime | None = None
    until: datetime | None = None


@dataclass
class VersionSummary:
    """History entry. Content and parent diff only when requested."""

    id: UUID
    number: int
    parent_ids: tuple[UUID, ...]
    branch: str
    kind: VersionKind
    author: str
    author_id: str | None
    message: str
    changes: ChangeStats
    content_hash: str
    size: int
    created_at: datetime
    reverted_from: UUID | None = None
    merged_branch: str | None = None
    content: str | None = None
    diff: EditScript | None = None


@dataclass
class Page(Generic[T]):
    """Offset-paginated slice of a result set."""

    items: list[T]
    total: int
    offset: int
    limit: int

    @property
    def has_more(self) -> bool:
        return self.offset + len(self.items) < self.total


@dataclass
class DiffResult:
    """Edit script between two versions plus a comparison summary."""

    document_id: str
    from_version_id: UUID
    to_version_id: UUID
    from_number: int
    to_number: int
    script: EditScript
    stats: ChangeStats
    versions_apart: int
    timespan_seconds: float
    size_change: int
    unified: str = ""


@dataclass
class DocumentStats:
    """Aggregate statistics over a document's history."""

    document_id: str
    total_versions: int
    branch_count: int
    tag_count: int
    contributors: list[str]
    created_at: datetime
    last_modified_at: datetime
    first_version_number: int
    latest_version_number: int
    average_version_size: float
    total_changes: ChangeStats = field(default_factory=ChangeStats)
