"""PostgreSQL document repository implementation."""

from psycopg import Connection, errors

from docvc.domain.entities import Document
from docvc.domain.exceptions import DocumentAlreadyExists


class PostgresDocumentRepository:
    """Document repository implementation."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def get(self, document_id: str) -> Document | None:
        """Get document by id."""
        cur = self._conn.execute(
            "SELECT id, created_at, created_by FROM document WHERE id = %s",
            (document_id,),
        )
        r = cur.fetchone()
        if not r:
            return None
        return Document(id=r[0], created_at=r[1], created_by=r[2])

    def get_for_update(self, document_id: str) -> Document | None:
        """Get document and lock its row until the transaction ends."""
        cur = self._conn.execute(
            "SELECT id, created_at, created_by FROM document WHERE id = %s FOR UPDATE",
            (document_id,),
        )
        r = cur.fetchone()
        if not r:
            return None
        return Document(id=r[0], created_at=r[1], created_by=r[2])

    def create(self, document: Document) -> Document:
        """Create document."""
        try:
            self._conn.execute(
                "INSERT INTO document (id, created_at, created_by) VALUES (%s, %s, %s)",
                (document.id, document.created_at, document.created_by),
            )
        except errors.UniqueViolation as e:
            raise DocumentAlreadyExists(f"Document {document.id} is already initialized") from e
        return document
