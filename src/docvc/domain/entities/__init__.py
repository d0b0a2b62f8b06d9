"""Domain entities."""

from docvc.domain.entities.branch import MAIN_BRANCH, Branch
from docvc.domain.entities.document import Document
from docvc.domain.entities.tag import Tag
from docvc.domain.entities.version import Version

__all__ = [
    "MAIN_BRANCH",
    "Branch",
    "Document",
    "Tag",
    "Version",
]
