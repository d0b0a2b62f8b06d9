"""Version store - append-only log of immutable versions per document."""

import hashlib
import logging
import threading
from collections import OrderedDict
from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

from docvc.application.dto.history_dto import DocumentStats
from docvc.application.dto.version_dto import VersionMetadata
from docvc.application.ports import DiffEngine, DocumentLockProvider, UnitOfWork
from docvc.domain.entities import MAIN_BRANCH, Branch, Document, Version
from docvc.domain.exceptions import (
    BranchNotFound,
    BranchProtected,
    DocumentAlreadyExists,
    DocumentNotFound,
    ValidationError,
    VersionNotFound,
)
from docvc.domain.value_objects import ChangeStats, VersionKind

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_AUTHOR = "system"
DEFAULT_AUTHOR = "unknown"


def content_hash(content: str) -> str:
    """SHA-256 hex digest of UTF-8 content."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


class ContentCache:
    """Bounded LRU of materialized content keyed by version id.

    Versions never change, so entries never go stale.
    """

    def __init__(self, capacity: int = 1024) -> None:
        self._capacity = capacity
        self._items: OrderedDict[UUID, str] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, version_id: UUID) -> str | None:
        with self._lock:
            content = self._items.get(version_id)
            if content is not None:
                self._items.move_to_end(version_id)
            return content

    def put(self, version_id: UUID, content: str) -> None:
        with self._lock:
            self._items[version_id] = content
            self._items.move_to_end(version_id)
            while len(self._items) > self._capacity:
                self._items.popitem(last=False)

    def __contains__(self, version_id: UUID) -> bool:
        with self._lock:
            return version_id in self._items


class VersionStore:
    """Creates and reads versions.

    Roots and every ``snapshot_interval``-th version along a first-parent
    chain keep full content; the rest keep the edit script from their first
    parent. Materializing a version replays at most ``snapshot_interval - 1``
    scripts. Branch-head content is cached.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        diff_engine: DiffEngine,
        locks: DocumentLockProvider,
        snapshot_interval: int = 10,
        protect_main_branch: bool = False,
        cache: ContentCache | None = None,
    ) -> None:
        if snapshot_interval < 1:
            raise ValueError("snapshot_interval must be at least 1")
        self._uow_factory = unit_of_work_factory
        self._diff = diff_engine
        self._locks = locks
        self._snapshot_interval = snapshot_interval
        self._protect_main = protect_main_branch
        self._cache = cache or ContentCache()

    @property
    def unit_of_work_factory(self) -> type:
        return self._uow_factory

    @property
    def locks(self) -> DocumentLockProvider:
        return self._locks

    def initialize_document(
        self,
        document_id: str,
        content: str = "",
        metadata: VersionMetadata | None = None,
    ) -> Version:
        """Create the document, its root version and the main branch."""
        metadata = metadata or VersionMetadata()
        if not document_id:
            raise ValidationError("Document id must not be empty")

        with self._locks.hold(document_id):
            with self._uow_factory() as uow:
                if uow.documents.get_for_update(document_id):
                    raise DocumentAlreadyExists(f"Document {document_id} is already initialized")

                now = datetime.now(UTC)
                created_by = metadata.author_id or metadata.author or DEFAULT_INITIAL_AUTHOR
                uow.documents.create(
                    Document(id=document_id, created_at=now, created_by=created_by)
                )
                version = Version(
                    id=uuid4(),
                    document_id=document_id,
                    number=1,
                    parent_ids=(),
                    branch=MAIN_BRANCH,
                    kind=VersionKind.INITIAL,
                    author=metadata.author or DEFAULT_INITIAL_AUTHOR,
                    author_id=metadata.author_id,
                    message=metadata.message or "Initial version",
                    content_hash=content_hash(content),
                    size=len(content.encode("utf-8")),
                    created_at=now,
                    changes=self._diff.diff("", content).stats,
                    content=content,
                )
                uow.versions.create(version)
                uow.branches.create(
                    Branch(
                        document_id=document_id,
                        name=MAIN_BRANCH,
                        head_version_id=version.id,
                        created_from_version_id=version.id,
                        created_at=now,
                        updated_at=now,
                        protected=self._protect_main,
                        created_by=created_by,
                    )
                )

        self._cache.put(version.id, content)
        logger.info(
            "Document version control initialized",
            extra={
                "documentId": document_id,
                "versionId": str(version.id),
                "author": version.author,
                "contentLength": len(content),
            },
        )
        return version

    def create_version(
        self,
        document_id: str,
        content: str,
        metadata: VersionMetadata | None = None,
        branch: str | None = None,
        kind: VersionKind = VersionKind.UPDATE,
        reverted_from: UUID | None = None,
    ) -> Version:
        """Append a version on a branch and advance the branch head.

        ``branch`` overrides ``metadata.branch``.
        """
        metadata = metadata or VersionMetadata()
        branch_name = branch or metadata.branch or MAIN_BRANCH

        with self._locks.hold(document_id):
            with self._uow_factory() as uow:
                self.require_document(uow, document_id, for_update=True)
                target = uow.branches.get(document_id, branch_name)
                if not target:
                    raise BranchNotFound(branch_name)
                if target.protected and not metadata.override_protection:
                    raise BranchProtected(
                        f"Branch '{branch_name}' is protected; pass override_protection to write"
                    )
                head = self.require_version(uow, document_id, target.head_version_id)
                default_message = f"Version {uow.versions.latest_number(document_id) + 1}"
                if kind == VersionKind.REVERT and reverted_from is not None:
                    reverted = self.require_version(uow, document_id, reverted_from)
                    default_message = f"Revert to version {reverted.number}"
                version = self.append(
                    uow,
                    document_id=document_id,
                    parents=[head],
                    content=content,
                    branch=branch_name,
                    kind=kind,
                    author=metadata.author or DEFAULT_AUTHOR,
                    author_id=metadata.author_id,
                    message=metadata.message or default_message,
                    reverted_from=reverted_from,
                )

        self._cache.put(version.id, content)
        logger.info(
            "New document version created",
            extra={
                "documentId": document_id,
                "versionId": str(version.id),
                "number": version.number,
                "branch": branch_name,
                "author": version.author,
                "changes": version.changes.to_dict(),
            },
        )
        return replace(version, content=content)

    def get_version(self, document_id: str, version_id: UUID) -> Version:
        """Get version with content materialized."""
        with self._uow_factory(read_only=True) as uow:
            self.require_document(uow, document_id)
            version = self.require_version(uow, document_id, version_id)
            return self.materialize(uow, version)

    def get_document_stats(self, document_id: str) -> DocumentStats:
        """Aggregate statistics over all versions, branches and tags."""
        with self._uow_factory(read_only=True) as uow:
            document = self.require_document(uow, document_id)
            versions = uow.versions.list_by_document(document_id)
            branch_count = len(uow.branches.list_by_document(document_id))
            tag_count = len(uow.tags.list_by_document(document_id))

        contributors: list[str] = []
        total = ChangeStats()
        for version in versions:
            if version.author not in contributors:
                contributors.append(version.author)
            total = total + ChangeStats(
                insertions=version.changes.insertions, deletions=version.changes.deletions
            )
        return DocumentStats(
            document_id=document_id,
            total_versions=len(versions),
            branch_count=branch_count,
            tag_count=tag_count,
            contributors=contributors,
            created_at=document.created_at,
            last_modified_at=max(v.created_at for v in versions),
            first_version_number=versions[0].number,
            latest_version_number=versions[-1].number,
            average_version_size=sum(v.size for v in versions) / len(versions),
            total_changes=total,
        )

    def require_document(
        self, uow: UnitOfWork, document_id: str, for_update: bool = False
    ) -> Document:
        """Get document or raise DocumentNotFound. ``for_update`` locks it for writing."""
        if for_update:
            document = uow.documents.get_for_update(document_id)
        else:
            document = uow.documents.get(document_id)
        if not document:
            raise DocumentNotFound(document_id)
        return document

    def require_version(self, uow: UnitOfWork, document_id: str, version_id: UUID) -> Version:
        version = uow.versions.get(document_id, version_id)
        if not version:
            raise VersionNotFound(version_id)
        return version

    def content_of(self, uow: UnitOfWork, version: Version) -> str:
        """Full content of a version, replaying scripts from the nearest snapshot."""
        chain: list[Version] = []
        current = version
        content: str | None = None
        while True:
            if current.content is not None:
                content = current.content
                break
            cached = self._cache.get(current.id)
            if cached is not None:
                content = cached
                break
            chain.append(current)
            if current.base_parent_id is None or current.delta is None:
                raise ValidationError(f"Version {current.id} has neither content nor delta")
            current = self.require_version(uow, version.document_id, current.base_parent_id)

        for step in reversed(chain):
            content = self._diff.patch(content, step.delta)
        return content

    def materialize(self, uow: UnitOfWork, version: Version) -> Version:
        """Copy of the version with ``content`` filled in."""
        if version.content is not None:
            return version
        return replace(version, content=self.content_of(uow, version))

    def append(
        self,
        uow: UnitOfWork,
        document_id: str,
        parents: list[Version],
        content: str,
        branch: str,
        kind: VersionKind,
        author: str,
        message: str,
        author_id: str | None = None,
        reverted_from: UUID | None = None,
        merged_branch: str | None = None,
        base_content: str | None = None,
    ) -> Version:
        """Stage a new version and move ``branch`` to it.

        The first parent is the delta base. Caller holds the document lock
        and the unit of work.
        """
        base = parents[0]
        if base_content is None:
            base_content = self.content_of(uow, base)
        delta = self._diff.diff(base_content, content)
        chain_depth = base.chain_depth + 1
        if chain_depth >= self._snapshot_interval:
            chain_depth = 0

        now = datetime.now(UTC)
        version = Version(
            id=uuid4(),
            document_id=document_id,
            number=uow.versions.latest_number(document_id) + 1,
            parent_ids=tuple(p.id for p in parents),
            branch=branch,
            kind=kind,
            author=author,
            author_id=author_id,
            message=message,
            content_hash=content_hash(content),
            size=len(content.encode("utf-8")),
            created_at=now,
            changes=delta.stats,
            content=content if chain_depth == 0 else None,
            delta=delta if chain_depth else None,
            chain_depth=chain_depth,
            reverted_from=reverted_from,
            merged_branch=merged_branch,
        )
        uow.versions.create(version)
        uow.branches.update_head(document_id, branch, version.id, now)
        return version

    def remember(self, version_id: UUID, content: str) -> None:
        """Cache content of a committed version."""
        self._cache.put(version_id, content)

