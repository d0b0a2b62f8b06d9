"""In-process per-document locks."""

import logging
import threading
import weakref
from collections.abc import Iterator
from contextlib import contextmanager

from docvc.domain.exceptions import StorageUnavailable

logger = logging.getLogger(__name__)


class DocumentLocks:
    """One reentrant lock per document id; distinct documents never contend.

    Waiting is bounded by ``timeout_seconds``. A timeout surfaces as the
    retryable StorageUnavailable. A lock lives only while some caller holds
    or waits on it.
    """

    def __init__(self, timeout_seconds: float = 5.0) -> None:
        self._timeout = timeout_seconds
        self._locks: weakref.WeakValueDictionary[str, threading.RLock] = (
            weakref.WeakValueDictionary()
        )
        self._guard = threading.Lock()

    def _lock_for(self, document_id: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(document_id)
            if lock is None:
                lock = threading.RLock()
                self._locks[document_id] = lock
            return lock

    @contextmanager
    def hold(self, document_id: str) -> Iterator[None]:
        """Hold the document's writer lock for the duration of the block."""
        lock = self._lock_for(document_id)
        if not lock.acquire(timeout=self._timeout):
            logger.warning("Timed out waiting for document lock", extra={"documentId": document_id})
            raise StorageUnavailable(f"Document {document_id} is busy, retry later")
        try:
            yield
        finally:
            lock.release()
