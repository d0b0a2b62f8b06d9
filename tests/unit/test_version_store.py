"""Unit tests for VersionStore (through the engine)."""

import hashlib
from uuid import uuid4

import pytest

from docvc.application.dto.branch_dto import BranchMetadata
from docvc.application.dto.version_dto import VersionMetadata
from docvc.application.services.version_store import ContentCache
from docvc.domain.exceptions import (
    BranchNotFound,
    BranchProtected,
    DocumentAlreadyExists,
    DocumentNotFound,
    ValidationError,
    VersionNotFound,
)
from docvc.domain.value_objects import VersionKind


def test_initialize_creates_root_and_main(engine) -> None:
    v1 = engine.initialize_document("doc1", "Hello", VersionMetadata(author="alice"))
    assert v1.number == 1
    assert v1.parent_ids == ()
    assert v1.branch == "main"
    assert v1.kind == VersionKind.INITIAL
    assert v1.content == "Hello"
    assert v1.message == "Initial version"
    assert v1.author == "alice"
    assert v1.content_hash == hashlib.sha256(b"Hello").hexdigest()
    assert v1.size == 5

    main = engine.get_branch("doc1", "main")
    assert main.head_version_id == v1.id
    assert main.created_from_version_id == v1.id
    assert main.protected is False


def test_initialize_defaults_author_to_system(engine) -> None:
    assert engine.initialize_document("doc1").author == "system"


def test_initialize_twice_fails(engine) -> None:
    engine.initialize_document("doc1", "Hello")
    with pytest.raises(DocumentAlreadyExists):
        engine.initialize_document("doc1", "Other")


def test_initialize_requires_document_id(engine) -> None:
    with pytest.raises(ValidationError):
        engine.initialize_document("", "Hello")


def test_create_version_appends_and_advances_head(engine) -> None:
    v1 = engine.initialize_document("doc1", "Hello")
    v2 = engine.create_version("doc1", "Hello World", VersionMetadata(author="bob"))
    assert v2.number == 2
    assert v2.parent_ids == (v1.id,)
    assert v2.kind == VersionKind.UPDATE
    assert v2.message == "Version 2"
    assert v2.content == "Hello World"
    assert v2.changes.insertions == 2
    assert engine.get_branch("doc1", "main").head_version_id == v2.id


def test_create_version_defaults_author_to_unknown(engine) -> None:
    engine.initialize_document("doc1", "Hello")
    assert engine.create_version("doc1", "Hello again").author == "unknown"


def test_create_version_unknown_document(engine) -> None:
    with pytest.raises(DocumentNotFound):
        engine.create_version("missing", "text")


def test_create_version_unknown_branch(engine) -> None:
    engine.initialize_document("doc1", "Hello")
    with pytest.raises(BranchNotFound):
        engine.create_version("doc1", "text", branch="nope")


def test_create_version_on_protected_branch_needs_override(engine) -> None:
    v1 = engine.initialize_document("doc1", "Hello")
    engine.create_branch("doc1", "release", v1.id, BranchMetadata(protected=True))
    with pytest.raises(BranchProtected):
        engine.create_version("doc1", "Hotfix", branch="release")
    version = engine.create_version(
        "doc1", "Hotfix", VersionMetadata(branch="release", override_protection=True)
    )
    assert version.branch == "release"


def test_protected_main_branch_setting(make_engine) -> None:
    engine = make_engine(protect_main_branch=True)
    engine.initialize_document("doc1", "Hello")
    assert engine.get_branch("doc1", "main").protected is True
    with pytest.raises(BranchProtected):
        engine.create_version("doc1", "Hello World")
    version = engine.create_version(
        "doc1", "Hello World", VersionMetadata(override_protection=True)
    )
    assert version.number == 2
    assert engine.get_branch("doc1", "main").head_version_id == version.id


def test_revert_on_protected_branch_needs_override(make_engine) -> None:
    engine = make_engine(protect_main_branch=True)
    v1 = engine.initialize_document("doc1", "Hello")
    v2 = engine.create_version(
        "doc1", "Hello World", VersionMetadata(override_protection=True)
    )
    with pytest.raises(BranchProtected):
        engine.revert_to_version("doc1", v1.id)
    assert engine.get_branch("doc1", "main").head_version_id == v2.id
    assert engine.get_document_stats("doc1").total_versions == 2

    reverted = engine.revert_to_version(
        "doc1", v1.id, VersionMetadata(override_protection=True)
    )
    assert reverted.kind == VersionKind.REVERT
    assert reverted.content == "Hello"
    assert reverted.reverted_from == v1.id


def test_get_version_materializes_delta_chain(make_engine) -> None:
    engine = make_engine(snapshot_interval=3)
    contents = [f"line {i} of the document" for i in range(8)]
    ids = [engine.initialize_document("doc1", contents[0]).id]
    for text in contents[1:]:
        ids.append(engine.create_version("doc1", text).id)

    # Cold store and cache: every version is rebuilt from snapshots and deltas.
    cold = make_engine(snapshot_interval=3)
    for version_id, text in zip(ids, contents):
        assert cold.get_version("doc1", version_id).content == text


def test_snapshot_interval_bounds_delta_chains(make_engine, uow_factory) -> None:
    engine = make_engine(snapshot_interval=3)
    engine.initialize_document("doc1", "a")
    for i in range(6):
        engine.create_version("doc1", f"a {i}")
    with uow_factory(read_only=True) as uow:
        versions = uow.versions.list_by_document("doc1")
    assert [v.chain_depth for v in versions] == [0, 1, 2, 0, 1, 2, 0]
    assert all((v.content is None) == (v.chain_depth > 0) for v in versions)
    assert all((v.delta is None) == (v.chain_depth == 0) for v in versions)


def test_get_version_not_found(engine) -> None:
    engine.initialize_document("doc1", "Hello")
    with pytest.raises(VersionNotFound):
        engine.get_version("doc1", uuid4())


def test_versions_are_scoped_to_their_document(engine) -> None:
    v1 = engine.initialize_document("doc1", "Hello")
    engine.initialize_document("doc2", "Other")
    with pytest.raises(VersionNotFound):
        engine.get_version("doc2", v1.id)


def test_document_stats(engine) -> None:
    v1 = engine.initialize_document("doc1", "Hello", VersionMetadata(author="alice"))
    engine.create_version("doc1", "Hello World", VersionMetadata(author="bob"))
    engine.create_version("doc1", "Hello World!", VersionMetadata(author="alice"))
    engine.create_branch("doc1", "feature", v1.id)
    engine.create_tag("doc1", v1.id, "v0.1")

    stats = engine.get_document_stats("doc1")
    assert stats.total_versions == 3
    assert stats.branch_count == 2
    assert stats.tag_count == 1
    assert stats.contributors == ["alice", "bob"]
    assert stats.first_version_number == 1
    assert stats.latest_version_number == 3
    assert stats.average_version_size == pytest.approx((5 + 11 + 12) / 3)
    assert stats.last_modified_at >= stats.created_at


def test_document_stats_unknown_document(engine) -> None:
    with pytest.raises(DocumentNotFound):
        engine.get_document_stats("missing")


def test_content_cache_evicts_least_recently_used() -> None:
    cache = ContentCache(capacity=2)
    a, b, c = uuid4(), uuid4(), uuid4()
    cache.put(a, "a")
    cache.put(b, "b")
    assert cache.get(a) == "a"
    cache.put(c, "c")
    assert a in cache
    assert b not in cache
    assert cache.get(c) == "c"


def test_snapshot_interval_must_be_positive(make_engine) -> None:
    with pytest.raises(ValueError):
        make_engine(snapshot_interval=0)
