"""Version control engine - the operation contract offered to callers."""

from uuid import UUID

from docvc.application.dto.branch_dto import BranchMetadata
from docvc.application.dto.history_dto import (
    DiffResult,
    DocumentStats,
    HistoryQuery,
    Page,
    VersionSummary,
)
from docvc.application.dto.merge_dto import MergeMetadata, MergeResult
from docvc.application.dto.tag_dto import TagMetadata
from docvc.application.dto.version_dto import VersionMetadata
from docvc.application.ports import DiffEngine, DocumentLockProvider
from docvc.application.services.branch_manager import BranchManager
from docvc.application.services.history_query import HistoryQueryService
from docvc.application.services.merge_resolver import MergeResolver
from docvc.application.services.tag_registry import TagRegistry
from docvc.application.services.version_store import VersionStore
from docvc.domain.entities import Branch, Tag, Version
from docvc.domain.value_objects import MergePolicy


class VersionControlEngine:
    """Facade over the version store, branches, merges, tags and history.

    Mutations on one document are serialized; reads see a consistent
    snapshot and never wait for writers.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        diff_engine: DiffEngine,
        locks: DocumentLockProvider,
        snapshot_interval: int = 10,
        merge_policy: MergePolicy = MergePolicy.TARGET,
        protect_main_branch: bool = False,
        history_default_limit: int = 20,
        history_max_limit: int = 100,
    ) -> None:
        self.versions = VersionStore(
            unit_of_work_factory,
            diff_engine,
            locks,
            snapshot_interval=snapshot_interval,
            protect_main_branch=protect_main_branch,
        )
        self.branches = BranchManager(self.versions)
        self.merges = MergeResolver(self.versions, diff_engine, policy=merge_policy)
        self.tags = TagRegistry(self.versions)
        self.history = HistoryQueryService(
            self.versions,
            diff_engine,
            default_limit=history_default_limit,
            max_limit=history_max_limit,
        )

    def initialize_document(
        self, document_id: str, content: str = "", metadata: VersionMetadata | None = None
    ) -> Version:
        return self.versions.initialize_document(document_id, content, metadata)

    def create_version(
        self,
        document_id: str,
        content: str,
        metadata: VersionMetadata | None = None,
        branch: str | None = None,
    ) -> Version:
        return self.versions.create_version(document_id, content, metadata, branch=branch)

    def get_version(self, document_id: str, version_id: UUID) -> Version:
        return self.versions.get_version(document_id, version_id)

    def get_document_stats(self, document_id: str) -> DocumentStats:
        return self.versions.get_document_stats(document_id)

    def create_branch(
        self,
        document_id: str,
        name: str,
        from_version_id: UUID | None = None,
        metadata: BranchMetadata | None = None,
    ) -> Branch:
        return self.branches.create_branch(document_id, name, from_version_id, metadata)

    def get_branch(self, document_id: str, name: str) -> Branch:
        return self.branches.get_branch(document_id, name)

    def list_branches(self, document_id: str) -> list[Branch]:
        return self.branches.list_branches(document_id)

    def merge_branches(
        self,
        document_id: str,
        source_branch: str,
        target_branch: str,
        metadata: MergeMetadata | None = None,
    ) -> MergeResult:
        return self.merges.merge_branches(document_id, source_branch, target_branch, metadata)

    def create_tag(
        self,
        document_id: str,
        version_id: UUID,
        name: str,
        metadata: TagMetadata | None = None,
    ) -> Tag:
        return self.tags.create_tag(document_id, version_id, name, metadata)

    def get_tag(self, document_id: str, name: str) -> Tag:
        return self.tags.get_tag(document_id, name)

    def list_tags(self, document_id: str) -> list[Tag]:
        return self.tags.list_tags(document_id)

    def get_tagged_version(self, document_id: str, name: str) -> Version:
        return self.tags.resolve(document_id, name)

    def get_version_history(
        self, document_id: str, query: HistoryQuery | None = None
    ) -> Page[VersionSummary]:
        return self.history.get_version_history(document_id, query)

    def compare_versions(
        self, document_id: str, from_version_id: UUID, to_version_id: UUID
    ) -> DiffResult:
        return self.history.compare_versions(document_id, from_version_id, to_version_id)

    def revert_to_version(
        self,
        document_id: str,
        target_version_id: UUID,
        metadata: VersionMetadata | None = None,
    ) -> Version:
        return self.history.revert_to_version(document_id, target_version_id, metadata)
