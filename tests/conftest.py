"""Pytest fixtures for docvc tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from docvc.application.services import VersionControlEngine
from docvc.domain.value_objects import DiffGranularity, MergePolicy
from docvc.infrastructure.diffing import SequenceDiffEngine
from docvc.infrastructure.locking import DocumentLocks
from docvc.infrastructure.persistence.memory import InMemoryStore, create_uow_factory


@pytest.fixture
def store() -> InMemoryStore:
    """Empty in-memory store."""
    return InMemoryStore()


@pytest.fixture
def uow_factory(store: InMemoryStore):
    """In-memory UoW factory over the shared store."""
    return create_uow_factory(store)


@pytest.fixture
def diff_engine() -> SequenceDiffEngine:
    return SequenceDiffEngine(DiffGranularity.WORD)


@pytest.fixture
def make_engine(uow_factory, diff_engine) -> Callable[..., VersionControlEngine]:
    """Build an engine over the fixture store with overridable settings."""

    def _make(**kwargs) -> VersionControlEngine:
        kwargs.setdefault("snapshot_interval", 10)
        kwargs.setdefault("merge_policy", MergePolicy.TARGET)
        return VersionControlEngine(
            unit_of_work_factory=uow_factory,
            diff_engine=kwargs.pop("diff_engine", diff_engine),
            locks=DocumentLocks(timeout_seconds=1.0),
            **kwargs,
        )

    return _make


@pytest.fixture
def engine(make_engine) -> VersionControlEngine:
    """Engine with default settings over an empty in-memory store."""
    return make_engine()
