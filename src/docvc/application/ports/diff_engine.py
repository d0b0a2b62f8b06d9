"""Diff engine port - edit scripts between texts."""

from typing import Protocol

from docvc.domain.value_objects import ChangeStats, DiffGranularity, EditScript


class DiffEngine(Protocol):
    """Port for computing and applying edit scripts."""

    @property
    def granularity(self) -> DiffGranularity: ...

    def tokenize(self, text: str) -> list[str]: ...

    def diff(self, old: str, new: str) -> EditScript: ...

    def patch(self, old: str, script: EditScript) -> str: ...

    def stats(self, script: EditScript) -> ChangeStats: ...

    def unified(self, old: str, new: str, from_label: str = "", to_label: str = "") -> str: ...
