"""Unit tests for domain exceptions."""

import pytest

from docvc.domain.exceptions import (
    AlreadyExists,
    BranchAlreadyExists,
    BranchNotFound,
    DocumentNotFound,
    InvalidBranchName,
    InvalidTagName,
    MergeConflict,
    NotFound,
    PatchMismatch,
    StorageUnavailable,
    TagAlreadyExists,
    ValidationError,
    VersionControlError,
    VersionNotFound,
)


def test_not_found_kinds_inherit_not_found() -> None:
    """Every *NotFound is a NotFound and a VersionControlError."""
    for kind in (DocumentNotFound, VersionNotFound, BranchNotFound):
        assert issubclass(kind, NotFound)
        assert issubclass(kind, VersionControlError)


def test_already_exists_kinds() -> None:
    assert issubclass(BranchAlreadyExists, AlreadyExists)
    assert issubclass(TagAlreadyExists, AlreadyExists)


def test_validation_kinds() -> None:
    """Name and patch errors are validation errors."""
    for kind in (InvalidBranchName, InvalidTagName, PatchMismatch):
        assert issubclass(kind, ValidationError)


def test_not_found_message_names_resource() -> None:
    with pytest.raises(NotFound, match="Branch not found: feature"):
        raise BranchNotFound("feature")


def test_only_storage_unavailable_is_retryable() -> None:
    assert StorageUnavailable("timeout").retryable is True
    assert DocumentNotFound("doc").retryable is False
    assert MergeConflict("overlap").retryable is False


def test_merge_conflict_carries_regions() -> None:
    err = MergeConflict("overlap", conflicts=["region"])
    assert err.conflicts == ["region"]
    assert MergeConflict("overlap").conflicts == []
