"""Merge strategy for combining branch heads."""

from enum import StrEnum


class MergeStrategy(StrEnum):
    """How overlapping edits are handled during a merge."""

    AUTO = "auto"
    MANUAL = "manual"


class MergePolicy(StrEnum):
    """Which side wins an overlapping region under the auto strategy."""

    TARGET = "target"
    SOURCE = "source"
