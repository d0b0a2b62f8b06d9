"""Tag categories."""

from enum import StrEnum


class TagType(StrEnum):
    """Supported tag types."""

    RELEASE = "release"
    MILESTONE = "milestone"
    BACKUP = "backup"
    MANUAL = "manual"
