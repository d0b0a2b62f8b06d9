"""Unit tests for the in-memory unit of work and store."""

from datetime import UTC, datetime
from uuid import uuid4

import pytest

from docvc.domain.entities import Branch, Document, Version
from docvc.domain.exceptions import BranchAlreadyExists, DocumentAlreadyExists, ValidationError
from docvc.domain.value_objects import VersionKind
from docvc.infrastructure.persistence.memory import InMemoryStore, create_uow_factory


def _version(document_id: str, number: int, parents=()) -> Version:
    return Version(
        id=uuid4(),
        document_id=document_id,
        number=number,
        parent_ids=tuple(parents),
        branch="main",
        kind=VersionKind.INITIAL if number == 1 else VersionKind.UPDATE,
        author="tester",
        message=f"Version {number}",
        content_hash="0" * 64,
        size=0,
        created_at=datetime.now(UTC),
        content="",
    )


def _seed(factory, document_id: str = "doc1") -> Version:
    now = datetime.now(UTC)
    root = _version(document_id, 1)
    with factory() as uow:
        uow.documents.create(Document(id=document_id, created_at=now))
        uow.versions.create(root)
        uow.branches.create(
            Branch(
                document_id=document_id,
                name="main",
                head_version_id=root.id,
                created_from_version_id=root.id,
                created_at=now,
                updated_at=now,
            )
        )
    return root


def test_commit_makes_writes_visible() -> None:
    factory = create_uow_factory(InMemoryStore())
    root = _seed(factory)
    with factory(read_only=True) as uow:
        assert uow.documents.get("doc1") is not None
        assert uow.versions.get("doc1", root.id) == root
        assert uow.versions.latest_number("doc1") == 1
        assert uow.branches.get("doc1", "main").head_version_id == root.id


def test_exception_rolls_back_everything() -> None:
    factory = create_uow_factory(InMemoryStore())
    root = _seed(factory)
    with pytest.raises(RuntimeError):
        with factory() as uow:
            v2 = _version("doc1", 2, [root.id])
            uow.versions.create(v2)
            uow.branches.update_head("doc1", "main", v2.id, datetime.now(UTC))
            raise RuntimeError("boom")
    with factory(read_only=True) as uow:
        assert uow.versions.latest_number("doc1") == 1
        assert uow.branches.get("doc1", "main").head_version_id == root.id


def test_reader_keeps_snapshot_while_writer_commits() -> None:
    factory = create_uow_factory(InMemoryStore())
    root = _seed(factory)
    with factory(read_only=True) as reader:
        assert reader.versions.latest_number("doc1") == 1
        with factory() as writer:
            v2 = _version("doc1", 2, [root.id])
            writer.versions.create(v2)
            writer.branches.update_head("doc1", "main", v2.id, datetime.now(UTC))
        assert reader.versions.latest_number("doc1") == 1
        assert reader.branches.get("doc1", "main").head_version_id == root.id
    with factory(read_only=True) as uow:
        assert uow.versions.latest_number("doc1") == 2


def test_read_only_unit_discards_writes() -> None:
    factory = create_uow_factory(InMemoryStore())
    _seed(factory)
    with factory(read_only=True) as uow:
        uow.versions.create(_version("doc1", 2))
    with factory(read_only=True) as uow:
        assert uow.versions.latest_number("doc1") == 1


def test_store_rejects_duplicate_document() -> None:
    factory = create_uow_factory(InMemoryStore())
    _seed(factory)
    with pytest.raises(DocumentAlreadyExists):
        _seed(factory)


def test_store_rejects_gap_in_version_numbers() -> None:
    factory = create_uow_factory(InMemoryStore())
    _seed(factory)
    with pytest.raises(ValidationError):
        with factory() as uow:
            uow.versions.create(_version("doc1", 3))


def test_store_rejects_duplicate_branch() -> None:
    factory = create_uow_factory(InMemoryStore())
    root = _seed(factory)
    now = datetime.now(UTC)
    with pytest.raises(BranchAlreadyExists):
        with factory() as uow:
            uow.branches.create(
                Branch(
                    document_id="doc1",
                    name="main",
                    head_version_id=root.id,
                    created_from_version_id=root.id,
                    created_at=now,
                    updated_at=now,
                )
            )
