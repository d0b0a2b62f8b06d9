"""Application ports - interfaces for external adapters."""

from docvc.application.ports.diff_engine import DiffEngine
from docvc.application.ports.document_lock import DocumentLockProvider
from docvc.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "DiffEngine",
    "DocumentLockProvider",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
