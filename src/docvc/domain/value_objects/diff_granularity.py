"""Unit of comparison for edit scripts."""

from enum import StrEnum


class DiffGranularity(StrEnum):
    """Supported diff granularities."""

    CHAR = "char"
    WORD = "word"
    LINE = "line"
