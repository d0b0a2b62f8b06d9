"""Unit of Work port - transactional boundary."""

from contextlib import AbstractContextManager
from typing import Protocol

from docvc.application.ports.repositories import (
    BranchRepository,
    DocumentRepository,
    TagRepository,
    VersionRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def documents(self) -> DocumentRepository: ...

    @property
    def versions(self) -> VersionRepository: ...

    @property
    def branches(self) -> BranchRepository: ...

    @property
    def tags(self) -> TagRepository: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances.

    The returned context manager commits on clean exit and rolls back on
    error. ``read_only`` units see one consistent snapshot.
    """

    def __call__(self, read_only: bool = False) -> AbstractContextManager[UnitOfWork]: ...
