"""PostgreSQL branch repository implementation."""

from datetime import datetime
from uuid import UUID

from psycopg import Connection, errors

from docvc.domain.entities import Branch
from docvc.domain.exceptions import BranchAlreadyExists, BranchNotFound

_COLUMNS = (
    "document_id, name, head_version_id, created_from_version_id, protected, "
    "description, created_by, created_at, updated_at"
)


class PostgresBranchRepository:
    """Branch repository implementation."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def get(self, document_id: str, name: str) -> Branch | None:
        """Get branch by name."""
        cur = self._conn.execute(
            f"SELECT {_COLUMNS} FROM document_branch WHERE document_id = %s AND name = %s",
            (document_id, name),
        )
        r = cur.fetchone()
        if not r:
            return None
        return Branch(
            document_id=r[0],
            name=r[1],
            head_version_id=r[2],
            created_from_version_id=r[3],
            protected=r[4],
            description=r[5],
            created_by=r[6],
            created_at=r[7],
            updated_at=r[8],
        )

    def list_by_document(self, document_id: str) -> list[Branch]:
        """List branches in creation order."""
        cur = self._conn.execute(
            f"SELECT {_COLUMNS} FROM document_branch WHERE document_id = %s "
            "ORDER BY created_at, name",
            (document_id,),
        )
        return [
            Branch(
                document_id=r[0],
                name=r[1],
                head_version_id=r[2],
                created_from_version_id=r[3],
                protected=r[4],
                description=r[5],
                created_by=r[6],
                created_at=r[7],
                updated_at=r[8],
            )
            for r in cur.fetchall()
        ]

    def create(self, branch: Branch) -> Branch:
        """Create branch."""
        try:
            self._conn.execute(
                f"INSERT INTO document_branch ({_COLUMNS}) "
                "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)",
                (
                    branch.document_id,
                    branch.name,
                    branch.head_version_id,
                    branch.created_from_version_id,
                    branch.protected,
                    branch.description,
                    branch.created_by,
                    branch.created_at,
                    branch.updated_at,
                ),
            )
        except errors.UniqueViolation as e:
            raise BranchAlreadyExists(f"Branch '{branch.name}' already exists") from e
        return branch

    def update_head(
        self, document_id: str, name: str, head_version_id: UUID, updated_at: datetime
    ) -> None:
        """Move branch head."""
        cur = self._conn.execute(
            "UPDATE document_branch SET head_version_id = %s, updated_at = %s "
            "WHERE document_id = %s AND name = %s",
            (head_version_id, updated_at, document_id, name),
        )
        if cur.rowcount == 0:
            raise BranchNotFound(name)
