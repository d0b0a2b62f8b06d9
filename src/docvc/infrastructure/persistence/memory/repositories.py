"""In-memory repository implementations.

Reads see the state captured by the unit of work on first access to a
document. Writes are staged and become visible on commit.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from docvc.domain.entities import Branch, Document, Tag, Version

if TYPE_CHECKING:
    from docvc.infrastructure.persistence.memory.unit_of_work import InMemoryUnitOfWork


class InMemoryDocumentRepository:
    """Document repository implementation."""

    def __init__(self, uow: InMemoryUnitOfWork) -> None:
        self._uow = uow

    def get(self, document_id: str) -> Document | None:
        state = self._uow.state(document_id)
        return state.document if state else None

    def get_for_update(self, document_id: str) -> Document | None:
        # Writers are already serialized by the document lock.
        return self.get(document_id)

    def create(self, document: Document) -> Document:
        self._uow.pending(document.id).document = document
        return document


class InMemoryVersionRepository:
    """Version repository implementation."""

    def __init__(self, uow: InMemoryUnitOfWork) -> None:
        self._uow = uow

    def get(self, document_id: str, version_id: UUID) -> Version | None:
        state = self._uow.state(document_id)
        if not state:
            return None
        idx = state.version_index.get(version_id)
        return state.versions[idx] if idx is not None else None

    def list_by_document(self, document_id: str) -> list[Version]:
        state = self._uow.state(document_id)
        return list(state.versions) if state else []

    def latest_number(self, document_id: str) -> int:
        state = self._uow.state(document_id)
        if not state or not state.versions:
            return 0
        return state.versions[-1].number

    def create(self, version: Version) -> Version:
        self._uow.pending(version.document_id).versions.append(version)
        return version


class InMemoryBranchRepository:
    """Branch repository implementation."""

    def __init__(self, uow: InMemoryUnitOfWork) -> None:
        self._uow = uow

    def get(self, document_id: str, name: str) -> Branch | None:
        state = self._uow.state(document_id)
        return state.branches.get(name) if state else None

    def list_by_document(self, document_id: str) -> list[Branch]:
        state = self._uow.state(document_id)
        if not state:
            return []
        return sorted(state.branches.values(), key=lambda b: (b.created_at, b.name))

    def create(self, branch: Branch) -> Branch:
        self._uow.pending(branch.document_id).new_branches[branch.name] = branch
        return branch

    def update_head(
        self, document_id: str, name: str, head_version_id: UUID, updated_at: datetime
    ) -> None:
        self._uow.pending(document_id).head_updates[name] = (head_version_id, updated_at)


class InMemoryTagRepository:
    """Tag repository implementation."""

    def __init__(self, uow: InMemoryUnitOfWork) -> None:
        self._uow = uow

    def get(self, document_id: str, name: str) -> Tag | None:
        state = self._uow.state(document_id)
        return state.tags.get(name) if state else None

    def list_by_document(self, document_id: str) -> list[Tag]:
        state = self._uow.state(document_id)
        if not state:
            return []
        return sorted(state.tags.values(), key=lambda t: (t.created_at, t.name))

    def create(self, tag: Tag) -> Tag:
        self._uow.pending(tag.document_id).tags.append(tag)
        return tag
