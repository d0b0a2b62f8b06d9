"""Branch entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

MAIN_BRANCH = "main"


@dataclass(frozen=True)
class Branch:
    """Named movable pointer into the version graph."""

    document_id: str
    name: str
    head_version_id: UUID
    created_from_version_id: UUID
    created_at: datetime
    updated_at: datetime
    protected: bool = False
    description: str = ""
    created_by: str | None = None

    @property
    def is_main(self) -> bool:
        return self.name == MAIN_BRANCH
