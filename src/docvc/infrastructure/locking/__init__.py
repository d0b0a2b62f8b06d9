"""Document lock implementations."""

from docvc.infrastructure.locking.document_locks import DocumentLocks

__all__ = ["DocumentLocks"]
