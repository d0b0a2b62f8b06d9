"""Diff engine built on difflib sequence matching over text tokens.

Texts are split into tokens of the configured granularity and matched with
``difflib.SequenceMatcher`` (junk heuristics disabled so results do not
depend on token frequency). The resulting opcodes become retain/insert/delete
spans. Scripts are always computed in one canonical direction and inverted
for the other, so ``diff(a, b)`` and ``diff(b, a)`` are exact inverses.
"""

from __future__ import annotations

import difflib
import re

from docvc.domain.exceptions import PatchMismatch
from docvc.domain.value_objects import (
    ChangeStats,
    DiffGranularity,
    EditOp,
    EditOpKind,
    EditScript,
)

# Maximal runs of word characters or whitespace, or single punctuation marks.
_WORD_TOKEN = re.compile(r"\w+|\s+|[^\w\s]")


class SequenceDiffEngine:
    """Token-level diff/patch with a fixed granularity."""

    def __init__(self, granularity: DiffGranularity = DiffGranularity.WORD) -> None:
        self._granularity = DiffGranularity(granularity)

    @property
    def granularity(self) -> DiffGranularity:
        return self._granularity

    def tokenize(self, text: str) -> list[str]:
        """Split text into tokens whose concatenation is the text."""
        if self._granularity == DiffGranularity.CHAR:
            return list(text)
        if self._granularity == DiffGranularity.LINE:
            return text.splitlines(keepends=True)
        return _WORD_TOKEN.findall(text)

    def diff(self, old: str, new: str) -> EditScript:
        """Edit script turning ``old`` into ``new``. Defined for any two strings."""
        if old <= new:
            return self._compute(old, new)
        return self._compute(new, old).inverted()

    def patch(self, old: str, script: EditScript) -> str:
        """Apply an edit script to ``old``.

        Raises:
            PatchMismatch: script was not computed against this text.
        """
        pos = 0
        out: list[str] = []
        for op in script.ops:
            if op.kind == EditOpKind.INSERT:
                out.append(op.text)
                continue
            end = pos + op.length
            if end > len(old):
                raise PatchMismatch("Edit script runs past the end of the source text")
            if op.kind == EditOpKind.RETAIN:
                out.append(old[pos:end])
            elif old[pos:end] != op.text:
                raise PatchMismatch(f"Deleted span does not match source text at offset {pos}")
            pos = end
        if pos != len(old):
            raise PatchMismatch("Edit script does not cover the whole source text")
        return "".join(out)

    def stats(self, script: EditScript) -> ChangeStats:
        return script.stats

    def unified(self, old: str, new: str, from_label: str = "", to_label: str = "") -> str:
        """Unified text diff similar to git diff."""
        return "".join(
            difflib.unified_diff(
                old.splitlines(keepends=True),
                new.splitlines(keepends=True),
                fromfile=from_label,
                tofile=to_label,
                n=3,
            )
        )

    def _compute(self, old: str, new: str) -> EditScript:
        a = self.tokenize(old)
        b = self.tokenize(new)
        matcher = difflib.SequenceMatcher(None, a, b, autojunk=False)
        ops: list[EditOp] = []
        for tag, i1, i2, j1, j2 in matcher.get_opcodes():
            if tag == "equal":
                ops.append(
                    EditOp(
                        kind=EditOpKind.RETAIN,
                        units=i2 - i1,
                        length=sum(len(t) for t in a[i1:i2]),
                    )
                )
                continue
            if i2 > i1:
                deleted = "".join(a[i1:i2])
                ops.append(EditOp(kind=EditOpKind.DELETE, units=i2 - i1, length=len(deleted), text=deleted))
            if j2 > j1:
                inserted = "".join(b[j1:j2])
                ops.append(EditOp(kind=EditOpKind.INSERT, units=j2 - j1, length=len(inserted), text=inserted))
        return EditScript(ops=tuple(ops), granularity=self._granularity)
