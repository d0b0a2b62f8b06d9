"""Version repository port. Append-only: no update or delete."""

from typing import Protocol
from uuid import UUID

from docvc.domain.entities import Version


class VersionRepository(Protocol):
    """Port for version persistence."""

    def get(self, document_id: str, version_id: UUID) -> Version | None: ...

    def list_by_document(self, document_id: str) -> list[Version]: ...

    def latest_number(self, document_id: str) -> int: ...

    def create(self, version: Version) -> Version: ...
