"""Domain value objects."""

from docvc.domain.value_objects.diff_granularity import DiffGranularity
from docvc.domain.value_objects.edit_script import ChangeStats, EditOp, EditOpKind, EditScript
from docvc.domain.value_objects.merge_strategy import MergePolicy, MergeStrategy
from docvc.domain.value_objects.ref_name import BranchName, TagName
from docvc.domain.value_objects.tag_type import TagType
from docvc.domain.value_objects.version_kind import VersionKind

__all__ = [
    "BranchName",
    "ChangeStats",
    "DiffGranularity",
    "EditOp",
    "EditOpKind",
    "EditScript",
    "MergePolicy",
    "MergeStrategy",
    "TagName",
    "TagType",
    "VersionKind",
]
