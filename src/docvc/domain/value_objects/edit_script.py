"""Edit scripts: retain/insert/delete spans that turn one text into another."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from docvc.domain.value_objects.diff_granularity import DiffGranularity


class EditOpKind(StrEnum):
    """Edit operation kinds."""

    RETAIN = "retain"
    INSERT = "insert"
    DELETE = "delete"


_INVERSE = {
    EditOpKind.RETAIN: EditOpKind.RETAIN,
    EditOpKind.INSERT: EditOpKind.DELETE,
    EditOpKind.DELETE: EditOpKind.INSERT,
}


@dataclass(frozen=True)
class EditOp:
    """One span of an edit script.

    ``units`` counts tokens of the script's granularity, ``length`` counts
    characters. Retain spans carry no text.
    """

    kind: EditOpKind
    units: int
    length: int
    text: str = ""

    def inverted(self) -> "EditOp":
        return EditOp(kind=_INVERSE[self.kind], units=self.units, length=self.length, text=self.text)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        if self.kind == EditOpKind.RETAIN:
            return {"op": self.kind.value, "units": self.units, "length": self.length}
        return {"op": self.kind.value, "units": self.units, "text": self.text}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EditOp":
        """Create from dictionary."""
        kind = EditOpKind(data["op"])
        if kind == EditOpKind.RETAIN:
            return cls(kind=kind, units=int(data["units"]), length=int(data["length"]))
        text = data["text"]
        return cls(kind=kind, units=int(data["units"]), length=len(text), text=text)


@dataclass(frozen=True)
class ChangeStats:
    """Units inserted, deleted and kept by an edit script."""

    insertions: int = 0
    deletions: int = 0
    unchanged: int = 0

    def __add__(self, other: "ChangeStats") -> "ChangeStats":
        return ChangeStats(
            insertions=self.insertions + other.insertions,
            deletions=self.deletions + other.deletions,
            unchanged=self.unchanged + other.unchanged,
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "insertions": self.insertions,
            "deletions": self.deletions,
            "unchanged": self.unchanged,
        }


@dataclass(frozen=True)
class EditScript:
    """Ordered edit operations over a source text."""

    ops: tuple[EditOp, ...] = field(default_factory=tuple)
    granularity: DiffGranularity = DiffGranularity.WORD

    @property
    def is_identity(self) -> bool:
        return all(op.kind == EditOpKind.RETAIN for op in self.ops)

    @property
    def source_length(self) -> int:
        """Characters consumed from the source text."""
        return sum(op.length for op in self.ops if op.kind != EditOpKind.INSERT)

    @property
    def stats(self) -> ChangeStats:
        insertions = deletions = unchanged = 0
        for op in self.ops:
            if op.kind == EditOpKind.INSERT:
                insertions += op.units
            elif op.kind == EditOpKind.DELETE:
                deletions += op.units
            else:
                unchanged += op.units
        return ChangeStats(insertions=insertions, deletions=deletions, unchanged=unchanged)

    def inverted(self) -> "EditScript":
        """Script that turns the target text back into the source text."""
        return EditScript(ops=tuple(op.inverted() for op in self.ops), granularity=self.granularity)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "granularity": self.granularity.value,
            "ops": [op.to_dict() for op in self.ops],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EditScript":
        """Create from dictionary."""
        return cls(
            ops=tuple(EditOp.from_dict(op) for op in data.get("ops", [])),
            granularity=DiffGranularity(data.get("granularity", DiffGranularity.WORD)),
        )
