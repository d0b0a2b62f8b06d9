"""How a version came to exist."""

from enum import StrEnum


class VersionKind(StrEnum):
    """Origin of a version."""

    INITIAL = "initial"
    UPDATE = "update"
    REVERT = "revert"
    MERGE = "merge"
