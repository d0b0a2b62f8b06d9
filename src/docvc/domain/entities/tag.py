"""Tag entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from docvc.domain.value_objects import TagType


@dataclass(frozen=True)
class Tag:
    """Permanent named pointer to one version."""

    document_id: str
    name: str
    version_id: UUID
    version_number: int
    type: TagType
    created_at: datetime
    message: str = ""
    created_by: str | None = None
