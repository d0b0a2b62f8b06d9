"""Unit tests for history, comparison and revert."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from docvc.application.dto.history_dto import HistoryQuery
from docvc.application.dto.version_dto import VersionMetadata
from docvc.domain.exceptions import (
    BranchNotFound,
    DocumentNotFound,
    ValidationError,
    VersionNotFound,
)
from docvc.domain.value_objects import VersionKind


@pytest.fixture
def history_engine(engine):
    """doc1: v1..v3 on main, v4 on feature (forked at v2), v5 on main."""
    engine.initialize_document("doc1", "one", VersionMetadata(author="alice", author_id="u-alice"))
    v2 = engine.create_version("doc1", "one two", VersionMetadata(author="bob"))
    engine.create_version("doc1", "one two three", VersionMetadata(author="alice"))
    engine.create_branch("doc1", "feature", v2.id)
    engine.create_version("doc1", "one 2", VersionMetadata(author="carol", branch="feature"))
    engine.create_version("doc1", "one two three four", VersionMetadata(author="bob"))
    return engine


def _numbers(page) -> list[int]:
    return [item.number for item in page.items]


def test_history_of_whole_document_newest_first(history_engine) -> None:
    page = history_engine.get_version_history("doc1")
    assert _numbers(page) == [5, 4, 3, 2, 1]
    assert page.total == 5
    assert page.limit == 20
    assert not page.has_more


def test_history_of_branch_follows_ancestry(history_engine) -> None:
    assert _numbers(
        history_engine.get_version_history("doc1", HistoryQuery(branch="feature"))
    ) == [4, 2, 1]
    assert _numbers(
        history_engine.get_version_history("doc1", HistoryQuery(branch="main"))
    ) == [5, 3, 2, 1]


def test_history_of_merged_branch_includes_both_sides(history_engine) -> None:
    history_engine.merge_branches("doc1", "feature", "main")
    page = history_engine.get_version_history("doc1", HistoryQuery(branch="main"))
    assert _numbers(page) == [6, 5, 4, 3, 2, 1]


def test_author_filter_matches_name_or_id(history_engine) -> None:
    by_name = history_engine.get_version_history("doc1", HistoryQuery(author="bob"))
    assert _numbers(by_name) == [5, 2]
    by_id = history_engine.get_version_history("doc1", HistoryQuery(author="u-alice"))
    assert _numbers(by_id) == [1]


def test_date_filters(history_engine) -> None:
    now = datetime.now(UTC)
    assert history_engine.get_version_history(
        "doc1", HistoryQuery(since=now + timedelta(hours=1))
    ).total == 0
    assert history_engine.get_version_history(
        "doc1", HistoryQuery(until=now + timedelta(hours=1))
    ).total == 5


def test_pages_concatenate_to_full_history(history_engine) -> None:
    full = history_engine.get_version_history("doc1", HistoryQuery(limit=100))
    collected = []
    offset = 0
    while True:
        page = history_engine.get_version_history("doc1", HistoryQuery(limit=2, offset=offset))
        collected.extend(page.items)
        if not page.has_more:
            break
        offset += page.limit
    assert [s.id for s in collected] == [s.id for s in full.items]


def test_include_content_and_diff(history_engine) -> None:
    page = history_engine.get_version_history(
        "doc1", HistoryQuery(include_content=True, include_diff=True, limit=5)
    )
    by_number = {item.number: item for item in page.items}
    assert by_number[3].content == "one two three"
    assert by_number[1].diff.stats.insertions == 1
    assert by_number[3].diff.stats.insertions == 2
    plain = history_engine.get_version_history("doc1")
    assert plain.items[0].content is None
    assert plain.items[0].diff is None


@pytest.mark.parametrize(
    "query",
    [HistoryQuery(limit=0), HistoryQuery(limit=101), HistoryQuery(offset=-1)],
)
def test_invalid_pagination(history_engine, query) -> None:
    with pytest.raises(ValidationError):
        history_engine.get_version_history("doc1", query)


def test_history_unknown_branch_and_document(history_engine) -> None:
    with pytest.raises(BranchNotFound):
        history_engine.get_version_history("doc1", HistoryQuery(branch="nope"))
    with pytest.raises(DocumentNotFound):
        history_engine.get_version_history("missing")


def test_compare_versions(engine) -> None:
    v1 = engine.initialize_document("doc1", "Hello\n")
    engine.create_version("doc1", "Hello there\n")
    v3 = engine.create_version("doc1", "Hello World\n")
    result = engine.compare_versions("doc1", v1.id, v3.id)
    assert result.from_number == 1
    assert result.to_number == 3
    assert result.versions_apart == 2
    assert result.size_change == 6
    assert result.timespan_seconds >= 0
    assert result.stats.insertions == 2
    assert "+Hello World" in result.unified


def test_compare_versions_are_inverse(engine) -> None:
    v1 = engine.initialize_document("doc1", "alpha beta gamma")
    engine.create_branch("doc1", "feature", v1.id)
    a = engine.create_version("doc1", "alpha BETA gamma delta", branch="feature")
    b = engine.create_version("doc1", "alpha gamma")
    forward = engine.compare_versions("doc1", a.id, b.id)
    backward = engine.compare_versions("doc1", b.id, a.id)
    assert backward.script == forward.script.inverted()


def test_compare_unknown_version(engine) -> None:
    v1 = engine.initialize_document("doc1", "Hello")
    with pytest.raises(VersionNotFound):
        engine.compare_versions("doc1", v1.id, uuid4())


def test_revert_appends_version_with_old_content(engine) -> None:
    v1 = engine.initialize_document("doc1", "Hello")
    engine.create_version("doc1", "Hello World")
    engine.create_version("doc1", "Goodbye")
    reverted = engine.revert_to_version("doc1", v1.id, VersionMetadata(author="dave"))
    assert reverted.number == 4
    assert reverted.content == "Hello"
    assert reverted.kind == VersionKind.REVERT
    assert reverted.reverted_from == v1.id
    assert reverted.message == "Revert to version 1"
    assert reverted.author == "dave"
    assert engine.get_branch("doc1", "main").head_version_id == reverted.id


def test_revert_to_current_content_still_appends(engine) -> None:
    engine.initialize_document("doc1", "Hello")
    v2 = engine.create_version("doc1", "Hello World")
    reverted = engine.revert_to_version("doc1", v2.id)
    assert reverted.number == 3
    assert reverted.changes.insertions == 0
    assert reverted.changes.deletions == 0


def test_revert_on_other_branch(engine) -> None:
    v1 = engine.initialize_document("doc1", "Hello")
    engine.create_branch("doc1", "feature", v1.id)
    engine.create_version("doc1", "Hello feature", branch="feature")
    reverted = engine.revert_to_version("doc1", v1.id, VersionMetadata(branch="feature"))
    assert reverted.branch == "feature"
    assert engine.get_branch("doc1", "main").head_version_id == v1.id


def test_revert_unknown_version(engine) -> None:
    engine.initialize_document("doc1", "Hello")
    with pytest.raises(VersionNotFound):
        engine.revert_to_version("doc1", uuid4())
