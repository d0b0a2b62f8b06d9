"""Application services - the version control components."""

from docvc.application.services.branch_manager import BranchManager
from docvc.application.services.engine import VersionControlEngine
from docvc.application.services.history_query import HistoryQueryService
from docvc.application.services.merge_resolver import MergeResolver
from docvc.application.services.tag_registry import TagRegistry
from docvc.application.services.version_store import VersionStore

__all__ = [
    "BranchManager",
    "HistoryQueryService",
    "MergeResolver",
    "TagRegistry",
    "VersionControlEngine",
    "VersionStore",
]
