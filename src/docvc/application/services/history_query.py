"""History queries - read-side views over versions, plus revert."""

import logging
from collections import deque
from dataclasses import replace
from uuid import UUID

from docvc.application.dto.history_dto import (
    DiffResult,
    HistoryQuery,
    Page,
    VersionSummary,
)
from docvc.application.dto.version_dto import VersionMetadata
from docvc.application.ports import DiffEngine, UnitOfWork
from docvc.application.services.version_store import VersionStore
from docvc.domain.entities import Version
from docvc.domain.exceptions import BranchNotFound, ValidationError
from docvc.domain.value_objects import VersionKind

logger = logging.getLogger(__name__)


def ancestry(versions: dict[UUID, Version], head_id: UUID) -> list[Version]:
    """Head and every version reachable through parent links, newest first."""
    seen = {head_id}
    queue = deque([head_id])
    while queue:
        for parent_id in versions[queue.popleft()].parent_ids:
            if parent_id not in seen:
                seen.add(parent_id)
                queue.append(parent_id)
    return sorted((versions[v] for v in seen), key=lambda v: v.number, reverse=True)


class HistoryQueryService:
    """Version history, version comparison and revert."""

    def __init__(
        self,
        version_store: VersionStore,
        diff_engine: DiffEngine,
        default_limit: int = 20,
        max_limit: int = 100,
    ) -> None:
        self._store = version_store
        self._diff = diff_engine
        self._uow_factory = version_store.unit_of_work_factory
        self._default_limit = default_limit
        self._max_limit = max_limit

    def get_version_history(
        self, document_id: str, query: HistoryQuery | None = None
    ) -> Page[VersionSummary]:
        """Versions of a branch's ancestry (or of the whole document), newest first."""
        query = query or HistoryQuery()
        limit = self._default_limit if query.limit is None else query.limit
        if not 1 <= limit <= self._max_limit:
            raise ValidationError(f"limit must be between 1 and {self._max_limit}")
        if query.offset < 0:
            raise ValidationError("offset must not be negative")

        with self._uow_factory(read_only=True) as uow:
            self._store.require_document(uow, document_id)
            versions = {v.id: v for v in uow.versions.list_by_document(document_id)}
            if query.branch:
                branch = uow.branches.get(document_id, query.branch)
                if not branch:
                    raise BranchNotFound(query.branch)
                candidates = ancestry(versions, branch.head_version_id)
            else:
                candidates = sorted(versions.values(), key=lambda v: v.number, reverse=True)

            selected = [v for v in candidates if self._matches(v, query)]
            window = selected[query.offset : query.offset + limit]
            items = [self._summarize(uow, versions, v, query) for v in window]

        return Page(items=items, total=len(selected), offset=query.offset, limit=limit)

    def compare_versions(
        self, document_id: str, from_version_id: UUID, to_version_id: UUID
    ) -> DiffResult:
        """Diff two versions' content regardless of ancestry."""
        with self._uow_factory(read_only=True) as uow:
            self._store.require_document(uow, document_id)
            old = self._store.require_version(uow, document_id, from_version_id)
            new = self._store.require_version(uow, document_id, to_version_id)
            old_content = self._store.content_of(uow, old)
            new_content = self._store.content_of(uow, new)

        script = self._diff.diff(old_content, new_content)
        return DiffResult(
            document_id=document_id,
            from_version_id=old.id,
            to_version_id=new.id,
            from_number=old.number,
            to_number=new.number,
            script=script,
            stats=script.stats,
            versions_apart=abs(new.number - old.number),
            timespan_seconds=(new.created_at - old.created_at).total_seconds(),
            size_change=new.size - old.size,
            unified=self._diff.unified(
                old_content,
                new_content,
                from_label=f"version {old.number}",
                to_label=f"version {new.number}",
            ),
        )

    def revert_to_version(
        self,
        document_id: str,
        target_version_id: UUID,
        metadata: VersionMetadata | None = None,
    ) -> Version:
        """Append a version on ``metadata.branch`` whose content equals the target's."""
        metadata = metadata or VersionMetadata()
        with self._store.locks.hold(document_id):
            with self._uow_factory(read_only=True) as uow:
                self._store.require_document(uow, document_id)
                target = self._store.require_version(uow, document_id, target_version_id)
                content = self._store.content_of(uow, target)

            version = self._store.create_version(
                document_id,
                content,
                metadata,
                kind=VersionKind.REVERT,
                reverted_from=target.id,
            )

        logger.info(
            "Document reverted",
            extra={
                "documentId": document_id,
                "targetVersionId": str(target.id),
                "versionId": str(version.id),
                "number": version.number,
                "branch": version.branch,
            },
        )
        return version

    @staticmethod
    def _matches(version: Version, query: HistoryQuery) -> bool:
        if query.author and query.author not in (version.author, version.author_id):
            return False
        if query.since and version.created_at < query.since:
            return False
        if query.until and version.created_at > query.until:
            return False
        return True

    def _summarize(
        self,
        uow: UnitOfWork,
        versions: dict[UUID, Version],
        version: Version,
        query: HistoryQuery,
    ) -> VersionSummary:
        summary = VersionSummary(
            id=version.id,
            number=version.number,
            parent_ids=version.parent_ids,
            branch=version.branch,
            kind=version.kind,
            author=version.author,
            author_id=version.author_id,
            message=version.message,
            changes=version.changes,
            content_hash=version.content_hash,
            size=version.size,
            created_at=version.created_at,
            reverted_from=version.reverted_from,
            merged_branch=version.merged_branch,
        )
        if not (query.include_content or query.include_diff):
            return summary

        content = self._store.content_of(uow, version)
        if query.include_content:
            summary = replace(summary, content=content)
        if query.include_diff:
            if version.delta is not None:
                script = version.delta
            elif version.base_parent_id is None:
                script = self._diff.diff("", content)
            else:
                parent = versions[version.base_parent_id]
                script = self._diff.diff(self._store.content_of(uow, parent), content)
            summary = replace(summary, diff=script)
        return summary
