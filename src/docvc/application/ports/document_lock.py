"""Document lock port - serializes writers per document."""

from contextlib import AbstractContextManager
from typing import Protocol


class DocumentLockProvider(Protocol):
    """Port for per-document mutual exclusion of mutating operations."""

    def hold(self, document_id: str) -> AbstractContextManager[None]: ...
