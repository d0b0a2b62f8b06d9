"""Document repository port."""

from typing import Protocol

from docvc.domain.entities import Document


class DocumentRepository(Protocol):
    """Port for document persistence."""

    def get(self, document_id: str) -> Document | None: ...

    def get_for_update(self, document_id: str) -> Document | None: ...

    def create(self, document: Document) -> Document: ...
