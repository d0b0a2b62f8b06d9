"""PostgreSQL tag repository implementation."""

from psycopg import Connection, errors

from docvc.domain.entities import Tag
from docvc.domain.exceptions import TagAlreadyExists
from docvc.domain.value_objects import TagType

_COLUMNS = "document_id, name, version_id, version_number, type, message, created_by, created_at"


class PostgresTagRepository:
    """Tag repository implementation."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def get(self, document_id: str, name: str) -> Tag | None:
        """Get tag by name."""
        cur = self._conn.execute(
            f"SELECT {_COLUMNS} FROM document_tag WHERE document_id = %s AND name = %s",
            (document_id, name),
        )
        r = cur.fetchone()
        if not r:
            return None
        return Tag(
            document_id=r[0],
            name=r[1],
            version_id=r[2],
            version_number=r[3],
            type=TagType(r[4]),
            message=r[5],
            created_by=r[6],
            created_at=r[7],
        )

    def list_by_document(self, document_id: str) -> list[Tag]:
        """List tags in creation order."""
        cur = self._conn.execute(
            f"SELECT {_COLUMNS} FROM document_tag WHERE document_id = %s ORDER BY created_at, name",
            (document_id,),
        )
        return [
            Tag(
                document_id=r[0],
                name=r[1],
                version_id=r[2],
                version_number=r[3],
                type=TagType(r[4]),
                message=r[5],
                created_by=r[6],
                created_at=r[7],
            )
            for r in cur.fetchall()
        ]

    def create(self, tag: Tag) -> Tag:
        """Create tag."""
        try:
            self._conn.execute(
                f"INSERT INTO document_tag ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
                (
                    tag.document_id,
                    tag.name,
                    tag.version_id,
                    tag.version_number,
                    tag.type.value,
                    tag.message,
                    tag.created_by,
                    tag.created_at,
                ),
            )
        except errors.UniqueViolation as e:
            raise TagAlreadyExists(f"Tag '{tag.name}' already exists") from e
        return tag
