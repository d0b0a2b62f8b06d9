"""PostgreSQL version repository implementation."""

from collections.abc import Sequence
from uuid import UUID

from psycopg import Connection
from psycopg.types.json import Jsonb

from docvc.domain.entities import Version
from docvc.domain.value_objects import ChangeStats, EditScript, VersionKind

_COLUMNS = (
    "id, document_id, number, parent_ids, branch, kind, author, author_id, message, "
    "content_hash, size, insertions, deletions, unchanged, content, delta, chain_depth, "
    "reverted_from, merged_branch, created_at"
)


def _row_to_version(r: Sequence) -> Version:
    """Build Version from a row selected with _COLUMNS."""
    return Version(
        id=r[0],
        document_id=r[1],
        number=r[2],
        parent_ids=tuple(r[3] or ()),
        branch=r[4],
        kind=VersionKind(r[5]),
        author=r[6],
        author_id=r[7],
        message=r[8],
        content_hash=r[9],
        size=r[10],
        changes=ChangeStats(insertions=r[11], deletions=r[12], unchanged=r[13]),
        content=r[14],
        delta=EditScript.from_dict(r[15]) if r[15] is not None else None,
        chain_depth=r[16],
        reverted_from=r[17],
        merged_branch=r[18],
        created_at=r[19],
    )


class PostgresVersionRepository:
    """Version repository implementation."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def get(self, document_id: str, version_id: UUID) -> Version | None:
        """Get version by id within document."""
        cur = self._conn.execute(
            f"SELECT {_COLUMNS} FROM document_version WHERE document_id = %s AND id = %s",
            (document_id, version_id),
        )
        r = cur.fetchone()
        return _row_to_version(r) if r else None

    def list_by_document(self, document_id: str) -> list[Version]:
        """List all versions of a document by ascending number."""
        cur = self._conn.execute(
            f"SELECT {_COLUMNS} FROM document_version WHERE document_id = %s ORDER BY number",
            (document_id,),
        )
        return [_row_to_version(r) for r in cur.fetchall()]

    def latest_number(self, document_id: str) -> int:
        """Highest version number in the document, 0 when empty."""
        cur = self._conn.execute(
            "SELECT COALESCE(MAX(number), 0) FROM document_version WHERE document_id = %s",
            (document_id,),
        )
        r = cur.fetchone()
        return r[0] if r else 0

    def create(self, version: Version) -> Version:
        """Append version."""
        self._conn.execute(
            f"INSERT INTO document_version ({_COLUMNS}) VALUES "
            "(%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                version.id,
                version.document_id,
                version.number,
                list(version.parent_ids),
                version.branch,
                version.kind.value,
                version.author,
                version.author_id,
                version.message,
                version.content_hash,
                version.size,
                version.changes.insertions,
                version.changes.deletions,
                version.changes.unchanged,
                version.content if version.is_snapshot else None,
                Jsonb(version.delta.to_dict()) if version.delta is not None else None,
                version.chain_depth,
                version.reverted_from,
                version.merged_branch,
                version.created_at,
            ),
        )
        return version
