"""Document entity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Document:
    """Container of a version graph. Exists once initialized."""

    id: str
    created_at: datetime
    created_by: str | None = None
