"""In-memory Unit of Work implementation."""

from collections.abc import Iterator
from contextlib import contextmanager

from docvc.infrastructure.persistence.memory.repositories import (
    InMemoryBranchRepository,
    InMemoryDocumentRepository,
    InMemoryTagRepository,
    InMemoryVersionRepository,
)
from docvc.infrastructure.persistence.memory.store import (
    DocumentState,
    InMemoryStore,
    PendingChanges,
)


class InMemoryUnitOfWork:
    """In-memory Unit of Work - staged writes, snapshot reads."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store
        self._views: dict[str, DocumentState | None] = {}
        self._pending: dict[str, PendingChanges] = {}
        self._documents = InMemoryDocumentRepository(self)
        self._versions = InMemoryVersionRepository(self)
        self._branches = InMemoryBranchRepository(self)
        self._tags = InMemoryTagRepository(self)

    def state(self, document_id: str) -> DocumentState | None:
        """State of a document as of this unit's first look at it."""
        if document_id not in self._views:
            self._views[document_id] = self._store.get(document_id)
        return self._views[document_id]

    def pending(self, document_id: str) -> PendingChanges:
        return self._pending.setdefault(document_id, PendingChanges())

    @property
    def documents(self) -> InMemoryDocumentRepository:
        return self._documents

    @property
    def versions(self) -> InMemoryVersionRepository:
        return self._versions

    @property
    def branches(self) -> InMemoryBranchRepository:
        return self._branches

    @property
    def tags(self) -> InMemoryTagRepository:
        return self._tags

    def commit(self) -> None:
        if self._pending:
            self._store.apply(self._pending)
        self._pending = {}
        self._views.clear()

    def rollback(self) -> None:
        self._pending = {}
        self._views.clear()


def create_uow_factory(store: InMemoryStore) -> object:
    """Create UnitOfWork factory (context manager) over a shared store."""

    @contextmanager
    def factory(read_only: bool = False) -> Iterator[InMemoryUnitOfWork]:
        uow = InMemoryUnitOfWork(store)
        try:
            yield uow
            if not read_only:
                uow.commit()
        except BaseException:
            uow.rollback()
            raise

    return factory
