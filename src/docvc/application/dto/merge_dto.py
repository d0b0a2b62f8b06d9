"""Merge DTOs."""

from dataclasses import dataclass, field
from enum import StrEnum
from uuid import UUID

from docvc.domain.entities import Version
from docvc.domain.exceptions import MergeConflict
from docvc.domain.value_objects import MergePolicy, MergeStrategy


@dataclass
class MergeMetadata:
    """Caller-supplied metadata for a merge."""

    author: str | None = None
    author_id: str | None = None
    message: str | None = None
    strategy: MergeStrategy = MergeStrategy.AUTO


@dataclass
class ConflictRegion:
    """Region of the merge base edited differently by both sides.

    ``start``/``end`` are unit offsets into the base content. ``resolution``
    names the side that won under the auto strategy, None when unresolved.
    """

    start: int
    end: int
    base: str
    source: str
    target: str
    resolution: MergePolicy | None = None


class MergeStatus(StrEnum):
    """Outcome of a merge attempt."""

    MERGED = "merged"
    CONFLICT = "conflict"


@dataclass
class MergeResult:
    """Result of merging a source branch into a target branch."""

    status: MergeStatus
    source_branch: str
    target_branch: str
    base_version_id: UUID
    source_head_id: UUID
    target_head_id: UUID
    merge_version: Version | None = None
    conflicts: list[ConflictRegion] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status == MergeStatus.MERGED

    def raise_for_conflict(self) -> None:
        """Raise MergeConflict when the merge left regions unresolved."""
        if self.status == MergeStatus.CONFLICT:
            raise MergeConflict(
                f"Merging {self.source_branch} into {self.target_branch} "
                f"has {len(self.conflicts)} conflicting region(s)",
                conflicts=self.conflicts,
            )
