"""Version DTOs."""

from dataclasses import dataclass

from docvc.domain.entities import MAIN_BRANCH


@dataclass
class VersionMetadata:
    """Caller-supplied metadata for initialize, create and revert."""

    author: str | None = None
    author_id: str | None = None
    message: str | None = None
    branch: str = MAIN_BRANCH
    override_protection: bool = False
