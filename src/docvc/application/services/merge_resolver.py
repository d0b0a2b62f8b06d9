"""Merge resolver - three-way merge of two branch heads."""

import heapq
import logging
from dataclasses import dataclass, replace
from uuid import UUID

from docvc.application.dto.merge_dto import (
    ConflictRegion,
    MergeMetadata,
    MergeResult,
    MergeStatus,
)
from docvc.application.ports import DiffEngine
from docvc.application.services.version_store import DEFAULT_AUTHOR, VersionStore
from docvc.domain.entities import Version
from docvc.domain.exceptions import BranchNotFound, NothingToMerge, ValidationError
from docvc.domain.value_objects import (
    EditOpKind,
    EditScript,
    MergePolicy,
    MergeStrategy,
    VersionKind,
)

logger = logging.getLogger(__name__)

_SOURCE = 1
_TARGET = 2


@dataclass(frozen=True)
class Hunk:
    """Replacement of base units ``[start, end)`` by ``text``; start == end is an insertion."""

    start: int
    end: int
    text: str
    side: int

    @property
    def is_insertion(self) -> bool:
        return self.start == self.end


def hunks(script: EditScript, side: int) -> list[Hunk]:
    """Changed regions of an edit script, in base unit offsets."""
    result: list[Hunk] = []
    pos = 0
    start: int | None = None
    end = 0
    text: list[str] = []
    for op in script.ops:
        if op.kind == EditOpKind.RETAIN:
            if start is not None:
                result.append(Hunk(start, end, "".join(text), side))
                start, text = None, []
            pos += op.units
            continue
        if start is None:
            start = end = pos
        if op.kind == EditOpKind.DELETE:
            pos += op.units
            end = pos
        else:
            text.append(op.text)
    if start is not None:
        result.append(Hunk(start, end, "".join(text), side))
    return result


def overlaps(a: Hunk, b: Hunk) -> bool:
    """Whether two hunks touch the same part of the base.

    Insertions at the same point overlap. An insertion overlaps a
    replacement only strictly inside it.
    """
    if a.is_insertion and b.is_insertion:
        return a.start == b.start
    if a.is_insertion:
        return b.start < a.start < b.end
    if b.is_insertion:
        return a.start < b.start < a.end
    return a.start < b.end and b.start < a.end


def lowest_common_ancestor(versions: dict[UUID, Version], a: UUID, b: UUID) -> UUID | None:
    """Nearest common ancestor of two versions (either may be the ancestor).

    Walks down from both heads in descending version-number order; parents
    always have lower numbers than children, so a node's reachability is
    final when it is popped.
    """
    flags: dict[UUID, int] = {a: _SOURCE}
    flags[b] = flags.get(b, 0) | _TARGET
    heap = [(-versions[v].number, v) for v in flags]
    heapq.heapify(heap)
    done: set[UUID] = set()
    while heap:
        _, vid = heapq.heappop(heap)
        if vid in done:
            continue
        done.add(vid)
        mark = flags[vid]
        if mark == _SOURCE | _TARGET:
            return vid
        for parent_id in versions[vid].parent_ids:
            combined = flags.get(parent_id, 0) | mark
            if combined != flags.get(parent_id):
                flags[parent_id] = combined
                heapq.heappush(heap, (-versions[parent_id].number, parent_id))
    return None


class MergeResolver:
    """Merge a source branch head into a target branch.

    Regions changed by one side only are taken from that side. Regions both
    sides changed identically are taken once. Regions both sides changed
    differently conflict: under ``auto`` the configured policy picks the
    winning side, under ``manual`` nothing is written and the regions are
    reported.
    """

    def __init__(
        self,
        version_store: VersionStore,
        diff_engine: DiffEngine,
        policy: MergePolicy = MergePolicy.TARGET,
    ) -> None:
        self._store = version_store
        self._diff = diff_engine
        self._policy = MergePolicy(policy)
        self._uow_factory = version_store.unit_of_work_factory
        self._locks = version_store.locks

    def merge_branches(
        self,
        document_id: str,
        source_branch: str,
        target_branch: str,
        metadata: MergeMetadata | None = None,
    ) -> MergeResult:
        metadata = metadata or MergeMetadata()
        try:
            strategy = MergeStrategy(metadata.strategy)
        except ValueError:
            raise ValidationError(f"Unknown merge strategy: {metadata.strategy!r}") from None

        with self._locks.hold(document_id):
            with self._uow_factory() as uow:
                self._store.require_document(uow, document_id, for_update=True)
                source = uow.branches.get(document_id, source_branch)
                if not source:
                    raise BranchNotFound(source_branch)
                target = uow.branches.get(document_id, target_branch)
                if not target:
                    raise BranchNotFound(target_branch)
                if source.head_version_id == target.head_version_id:
                    raise NothingToMerge(
                        f"Branches '{source_branch}' and '{target_branch}' point at the same version"
                    )

                versions = {v.id: v for v in uow.versions.list_by_document(document_id)}
                base_id = lowest_common_ancestor(
                    versions, source.head_version_id, target.head_version_id
                )
                if base_id is None:
                    raise ValidationError(
                        f"Branches '{source_branch}' and '{target_branch}' share no history"
                    )
                if base_id == source.head_version_id:
                    raise NothingToMerge(
                        f"Branch '{target_branch}' already contains '{source_branch}'"
                    )

                source_head = versions[source.head_version_id]
                target_head = versions[target.head_version_id]
                base_content = self._store.content_of(uow, versions[base_id])
                source_content = self._store.content_of(uow, source_head)
                target_content = self._store.content_of(uow, target_head)
                merged, conflicts = self.three_way(
                    base_content, source_content, target_content, strategy
                )

                result = MergeResult(
                    status=MergeStatus.MERGED,
                    source_branch=source_branch,
                    target_branch=target_branch,
                    base_version_id=base_id,
                    source_head_id=source_head.id,
                    target_head_id=target_head.id,
                    conflicts=conflicts,
                )
                if conflicts and strategy == MergeStrategy.MANUAL:
                    result.status = MergeStatus.CONFLICT
                    logger.info(
                        "Merge needs manual resolution",
                        extra={
                            "documentId": document_id,
                            "source": source_branch,
                            "target": target_branch,
                            "conflicts": len(conflicts),
                        },
                    )
                    return result

                version = self._store.append(
                    uow,
                    document_id=document_id,
                    parents=[target_head, source_head],
                    content=merged,
                    branch=target_branch,
                    kind=VersionKind.MERGE,
                    author=metadata.author or DEFAULT_AUTHOR,
                    author_id=metadata.author_id,
                    message=metadata.message or f"Merge {source_branch} into {target_branch}",
                    merged_branch=source_branch,
                    base_content=target_content,
                )

        self._store.remember(version.id, merged)
        result.merge_version = replace(version, content=merged)
        logger.info(
            "Branches merged",
            extra={
                "documentId": document_id,
                "source": source_branch,
                "target": target_branch,
                "versionId": str(version.id),
                "number": version.number,
                "resolvedConflicts": len(conflicts),
            },
        )
        return result

    def three_way(
        self,
        base: str,
        source: str,
        target: str,
        strategy: MergeStrategy = MergeStrategy.AUTO,
    ) -> tuple[str, list[ConflictRegion]]:
        """Merge ``source`` and ``target`` edits of ``base``.

        Returns the merged text and the regions both sides changed
        differently. Under ``manual`` those regions keep the target text and
        carry no resolution.
        """
        tokens = self._diff.tokenize(base)
        changes = hunks(self._diff.diff(base, source), _SOURCE) + hunks(
            self._diff.diff(base, target), _TARGET
        )
        changes.sort(key=lambda h: (h.start, h.end, h.side))

        clusters: list[list[Hunk]] = []
        for hunk in changes:
            if clusters and any(overlaps(hunk, other) for other in clusters[-1]):
                clusters[-1].append(hunk)
            else:
                clusters.append([hunk])

        out: list[str] = []
        conflicts: list[ConflictRegion] = []
        pos = 0
        for cluster in clusters:
            start = min(h.start for h in cluster)
            end = max(h.end for h in cluster)
            out.append("".join(tokens[pos:start]))
            source_hunks = [h for h in cluster if h.side == _SOURCE]
            target_hunks = [h for h in cluster if h.side == _TARGET]
            source_text = _render(tokens, start, end, source_hunks)
            target_text = _render(tokens, start, end, target_hunks)
            if not target_hunks:
                out.append(source_text)
            elif not source_hunks or source_text == target_text:
                out.append(target_text)
            else:
                resolution = self._policy if strategy == MergeStrategy.AUTO else None
                conflicts.append(
                    ConflictRegion(
                        start=start,
                        end=end,
                        base="".join(tokens[start:end]),
                        source=source_text,
                        target=target_text,
                        resolution=resolution,
                    )
                )
                out.append(source_text if resolution == MergePolicy.SOURCE else target_text)
            pos = end
        out.append("".join(tokens[pos:]))
        return "".join(out), conflicts


def _render(tokens: list[str], start: int, end: int, side_hunks: list[Hunk]) -> str:
    """Base units ``[start, end)`` with one side's hunks applied."""
    out: list[str] = []
    pos = start
    for hunk in side_hunks:
        out.append("".join(tokens[pos:hunk.start]))
        out.append(hunk.text)
        pos = hunk.end
    out.append("".join(tokens[pos:end]))
    return "".join(out)
