"""Repository ports."""

from docvc.application.ports.repositories.branch_repository import BranchRepository
from docvc.application.ports.repositories.document_repository import DocumentRepository
from docvc.application.ports.repositories.tag_repository import TagRepository
from docvc.application.ports.repositories.version_repository import VersionRepository

__all__ = [
    "BranchRepository",
    "DocumentRepository",
    "TagRepository",
    "VersionRepository",
]
