"""Tag DTOs."""

from dataclasses import dataclass

from docvc.domain.value_objects import TagType


@dataclass
class TagMetadata:
    """Caller-supplied metadata for tag creation."""

    author_id: str | None = None
    message: str = ""
    type: TagType = TagType.MANUAL
