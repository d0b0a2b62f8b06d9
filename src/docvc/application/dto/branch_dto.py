"""Branch DTOs."""

from dataclasses import dataclass


@dataclass
class BranchMetadata:
    """Caller-supplied metadata for branch creation."""

    author_id: str | None = None
    description: str = ""
    protected: bool = False
