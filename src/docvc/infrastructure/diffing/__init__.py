"""Diff engine implementations."""

from docvc.infrastructure.diffing.sequence_diff_engine import SequenceDiffEngine

__all__ = ["SequenceDiffEngine"]
