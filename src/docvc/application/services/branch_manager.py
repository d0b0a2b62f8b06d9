"""Branch manager - named movable pointers into the version graph."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from docvc.application.dto.branch_dto import BranchMetadata
from docvc.application.services.version_store import VersionStore
from docvc.domain.entities import MAIN_BRANCH, Branch
from docvc.domain.exceptions import BranchAlreadyExists, BranchNotFound
from docvc.domain.value_objects import BranchName

logger = logging.getLogger(__name__)


class BranchManager:
    """Create and look up branches. Branches are never deleted or renamed."""

    def __init__(self, version_store: VersionStore) -> None:
        self._store = version_store
        self._uow_factory = version_store.unit_of_work_factory
        self._locks = version_store.locks

    def create_branch(
        self,
        document_id: str,
        name: str,
        from_version_id: UUID | None = None,
        metadata: BranchMetadata | None = None,
    ) -> Branch:
        """Fork a branch at a version without creating a new version.

        Without ``from_version_id`` the branch forks at the head of main.
        """
        metadata = metadata or BranchMetadata()
        branch_name = BranchName(name)

        with self._locks.hold(document_id):
            with self._uow_factory() as uow:
                self._store.require_document(uow, document_id, for_update=True)
                if uow.branches.get(document_id, branch_name.value):
                    raise BranchAlreadyExists(f"Branch '{branch_name}' already exists")
                if from_version_id is None:
                    main = uow.branches.get(document_id, MAIN_BRANCH)
                    if not main:
                        raise BranchNotFound(MAIN_BRANCH)
                    from_version_id = main.head_version_id
                self._store.require_version(uow, document_id, from_version_id)

                now = datetime.now(UTC)
                branch = Branch(
                    document_id=document_id,
                    name=branch_name.value,
                    head_version_id=from_version_id,
                    created_from_version_id=from_version_id,
                    created_at=now,
                    updated_at=now,
                    protected=metadata.protected,
                    description=metadata.description,
                    created_by=metadata.author_id,
                )
                uow.branches.create(branch)

        logger.info(
            "New branch created",
            extra={
                "documentId": document_id,
                "branch": branch.name,
                "fromVersionId": str(from_version_id),
                "createdBy": branch.created_by,
            },
        )
        return branch

    def get_branch(self, document_id: str, name: str) -> Branch:
        with self._uow_factory(read_only=True) as uow:
            self._store.require_document(uow, document_id)
            branch = uow.branches.get(document_id, name)
            if not branch:
                raise BranchNotFound(name)
            return branch

    def list_branches(self, document_id: str) -> list[Branch]:
        """List branches in creation order, main first."""
        with self._uow_factory(read_only=True) as uow:
            self._store.require_document(uow, document_id)
            return uow.branches.list_by_document(document_id)
