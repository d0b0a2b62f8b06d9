"""Branch repository port."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from docvc.domain.entities import Branch


class BranchRepository(Protocol):
    """Port for branch persistence."""

    def get(self, document_id: str, name: str) -> Branch | None: ...

    def list_by_document(self, document_id: str) -> list[Branch]: ...

    def create(self, branch: Branch) -> Branch: ...

    def update_head(
        self, document_id: str, name: str, head_version_id: UUID, updated_at: datetime
    ) -> None: ...
