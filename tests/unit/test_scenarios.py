"""End-to-end scenarios and history-wide properties."""

import threading

import pytest

from docvc.application.dto.history_dto import HistoryQuery
from docvc.application.dto.merge_dto import MergeMetadata
from docvc.application.dto.tag_dto import TagMetadata
from docvc.application.dto.version_dto import VersionMetadata
from docvc.domain.exceptions import BranchAlreadyExists, TagAlreadyExists
from docvc.domain.value_objects import MergeStrategy, TagType


def test_document_lifecycle(make_engine) -> None:
    engine = make_engine(snapshot_interval=3)

    v1 = engine.initialize_document("doc1", "Hello")
    assert (v1.number, v1.content, v1.branch) == (1, "Hello", "main")

    v2 = engine.create_version("doc1", "Hello World")
    assert (v2.number, v2.branch) == (2, "main")
    assert [s.id for s in engine.get_version_history("doc1").items] == [v2.id, v1.id]

    feature = engine.create_branch("doc1", "feature", v2.id)
    assert feature.head_version_id == v2.id
    v3 = engine.create_version("doc1", "Hello World!!", branch="feature")
    assert v3.number == 3
    assert engine.get_branch("doc1", "main").head_version_id == v2.id

    merge = engine.merge_branches(
        "doc1", "feature", "main", MergeMetadata(strategy=MergeStrategy.AUTO)
    )
    v4 = merge.merge_version
    assert v4.number == 4
    assert v4.branch == "main"
    assert v4.parent_ids == (v2.id, v3.id)
    assert v4.content == "Hello World!!"

    tag = engine.create_tag("doc1", v4.id, "v1.0", TagMetadata(type=TagType.RELEASE))
    v5 = engine.revert_to_version("doc1", v1.id)
    assert (v5.number, v5.content) == (5, "Hello")
    for i in range(4):
        engine.create_version("doc1", f"Hello again {i}")
    assert engine.get_tag("doc1", "v1.0") == tag
    assert engine.get_tagged_version("doc1", "v1.0").content == "Hello World!!"
    assert make_engine(snapshot_interval=3).get_version("doc1", v4.id).content == "Hello World!!"


def test_numbers_are_gap_free_and_every_delta_round_trips(
    make_engine, uow_factory, diff_engine
) -> None:
    engine = make_engine(snapshot_interval=4)
    v1 = engine.initialize_document("doc1", "alpha")
    engine.create_branch("doc1", "b1", v1.id)
    for i in range(6):
        engine.create_version("doc1", f"alpha main {i}")
        engine.create_version("doc1", f"alpha side {i} beta", branch="b1")
    engine.merge_branches("doc1", "b1", "main")
    engine.revert_to_version("doc1", v1.id)

    with uow_factory(read_only=True) as uow:
        versions = uow.versions.list_by_document("doc1")
        contents = {v.id: engine.versions.content_of(uow, v) for v in versions}
    assert [v.number for v in versions] == list(range(1, len(versions) + 1))
    for version in versions:
        if version.is_root:
            continue
        parent = contents[version.base_parent_id]
        script = diff_engine.diff(parent, contents[version.id])
        assert diff_engine.patch(parent, script) == contents[version.id]
        if version.delta is not None:
            assert diff_engine.patch(parent, version.delta) == contents[version.id]


def test_duplicate_names_fail_deterministically(engine) -> None:
    v1 = engine.initialize_document("doc1", "Hello")
    engine.create_branch("doc1", "feature", v1.id)
    engine.create_tag("doc1", v1.id, "v1")
    for _ in range(3):
        with pytest.raises(BranchAlreadyExists):
            engine.create_branch("doc1", "feature", v1.id)
        with pytest.raises(TagAlreadyExists):
            engine.create_tag("doc1", v1.id, "v1")


def test_concurrent_writers_keep_numbers_gap_free(engine) -> None:
    engine.initialize_document("doc1", "start")
    engine.initialize_document("doc2", "start")
    errors: list[Exception] = []

    def writer(document_id: str, worker: int) -> None:
        try:
            for i in range(10):
                engine.create_version(
                    document_id, f"start {worker} {i}", VersionMetadata(author=f"w{worker}")
                )
        except Exception as e:
            errors.append(e)

    threads = [
        threading.Thread(target=writer, args=(doc, n))
        for doc in ("doc1", "doc2")
        for n in range(4)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    for document_id in ("doc1", "doc2"):
        page = engine.get_version_history(document_id, HistoryQuery(limit=100))
        assert sorted(item.number for item in page.items) == list(range(1, 42))
        main = engine.get_branch(document_id, "main")
        assert main.head_version_id == page.items[0].id
