"""In-memory persistence backend."""

from docvc.infrastructure.persistence.memory.store import DocumentState, InMemoryStore
from docvc.infrastructure.persistence.memory.unit_of_work import (
    InMemoryUnitOfWork,
    create_uow_factory,
)

__all__ = [
    "DocumentState",
    "InMemoryStore",
    "InMemoryUnitOfWork",
    "create_uow_factory",
]
