"""Validated branch and tag names."""

import re
from dataclasses import dataclass

from docvc.domain.exceptions import InvalidBranchName, InvalidTagName

BRANCH_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")
TAG_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9._-]+$")


@dataclass(frozen=True)
class BranchName:
    """Branch name: letters, digits, underscore and hyphen."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not BRANCH_NAME_PATTERN.fullmatch(self.value):
            raise InvalidBranchName(f"Invalid branch name: {self.value!r}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TagName:
    """Tag name: letters, digits, dot, underscore and hyphen."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not TAG_NAME_PATTERN.fullmatch(self.value):
            raise InvalidTagName(f"Invalid tag name: {self.value!r}")

    def __str__(self) -> str:
        return self.value
