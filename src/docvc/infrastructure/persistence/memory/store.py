"""Copy-on-write in-memory store: one immutable state object per document."""

import threading
from dataclasses import dataclass, field, replace
from datetime import datetime
from types import MappingProxyType
from typing import Mapping
from uuid import UUID

from docvc.domain.entities import Branch, Document, Tag, Version
from docvc.domain.exceptions import (
    BranchAlreadyExists,
    BranchNotFound,
    DocumentAlreadyExists,
    DocumentNotFound,
    TagAlreadyExists,
    ValidationError,
)


@dataclass(frozen=True)
class DocumentState:
    """Everything stored for one document. Never mutated, only replaced."""

    document: Document
    versions: tuple[Version, ...] = ()
    version_index: Mapping[UUID, int] = field(default_factory=lambda: MappingProxyType({}))
    branches: Mapping[str, Branch] = field(default_factory=lambda: MappingProxyType({}))
    tags: Mapping[str, Tag] = field(default_factory=lambda: MappingProxyType({}))


@dataclass
class PendingChanges:
    """Writes staged by a unit of work for one document."""

    document: Document | None = None
    versions: list[Version] = field(default_factory=list)
    new_branches: dict[str, Branch] = field(default_factory=dict)
    head_updates: dict[str, tuple[UUID, datetime]] = field(default_factory=dict)
    tags: list[Tag] = field(default_factory=list)


class InMemoryStore:
    """Holds the current state of every document.

    ``apply`` validates all staged changes first and then swaps the new
    states in under one lock, so readers see either none or all of a commit.
    """

    def __init__(self) -> None:
        self._states: dict[str, DocumentState] = {}
        self._lock = threading.Lock()

    def get(self, document_id: str) -> DocumentState | None:
        with self._lock:
            return self._states.get(document_id)

    def apply(self, changes: Mapping[str, PendingChanges]) -> None:
        with self._lock:
            new_states = {
                document_id: self._merge(document_id, pending)
                for document_id, pending in changes.items()
            }
            self._states.update(new_states)

    def _merge(self, document_id: str, pending: PendingChanges) -> DocumentState:
        current = self._states.get(document_id)
        if pending.document is not None:
            if current is not None:
                raise DocumentAlreadyExists(f"Document {document_id} is already initialized")
            current = DocumentState(document=pending.document)
        elif current is None:
            raise DocumentNotFound(document_id)

        versions = list(current.versions)
        index = dict(current.version_index)
        last_number = versions[-1].number if versions else 0
        for version in pending.versions:
            if version.number != last_number + 1 or version.id in index:
                raise ValidationError(
                    f"Version {version.number} does not follow {last_number} in {document_id}"
                )
            index[version.id] = len(versions)
            versions.append(version)
            last_number = version.number

        branches = dict(current.branches)
        for name, branch in pending.new_branches.items():
            if name in branches:
                raise BranchAlreadyExists(f"Branch '{name}' already exists")
            branches[name] = branch
        for name, (head_version_id, updated_at) in pending.head_updates.items():
            branch = branches.get(name)
            if branch is None:
                raise BranchNotFound(name)
            if head_version_id not in index:
                raise ValidationError(f"Branch head {head_version_id} is not a stored version")
            branches[name] = replace(branch, head_version_id=head_version_id, updated_at=updated_at)

        tags = dict(current.tags)
        for tag in pending.tags:
            if tag.name in tags:
                raise TagAlreadyExists(f"Tag '{tag.name}' already exists")
            tags[tag.name] = tag

        return DocumentState(
            document=current.document,
            versions=tuple(versions),
            version_index=MappingProxyType(index),
            branches=MappingProxyType(branches),
            tags=MappingProxyType(tags),
        )
