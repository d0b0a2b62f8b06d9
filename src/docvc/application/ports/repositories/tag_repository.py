"""Tag repository port. Tags are immutable: no update or delete."""

from typing import Protocol

from docvc.domain.entities import Tag


class TagRepository(Protocol):
    """Port for tag persistence."""

    def get(self, document_id: str, name: str) -> Tag | None: ...

    def list_by_document(self, document_id: str) -> list[Tag]: ...

    def create(self, tag: Tag) -> Tag: ...
