"""JSON representations of engine results and request parsing helpers."""

from datetime import datetime
from typing import Any
from uuid import UUID

from docvc.application.dto.history_dto import (
    DiffResult,
    DocumentStats,
    Page,
    VersionSummary,
)
from docvc.application.dto.merge_dto import ConflictRegion, MergeResult
from docvc.domain.entities import Branch, Tag, Version
from docvc.domain.exceptions import ValidationError


def parse_uuid(value: str, name: str) -> UUID:
    try:
        return UUID(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid {name}: {value!r}") from e


def parse_datetime(value: str | None, name: str) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(f"Invalid {name}: {value!r}") from e


def version_to_dict(version: Version) -> dict[str, Any]:
    return {
        "id": str(version.id),
        "document_id": version.document_id,
        "version": version.number,
        "parent_ids": [str(p) for p in version.parent_ids],
        "branch": version.branch,
        "kind": version.kind.value,
        "author": version.author,
        "author_id": version.author_id,
        "message": version.message,
        "content_hash": version.content_hash,
        "size": version.size,
        "changes": version.changes.to_dict(),
        "content": version.content,
        "reverted_from": str(version.reverted_from) if version.reverted_from else None,
        "merged_branch": version.merged_branch,
        "created_at": version.created_at.isoformat(),
    }


def summary_to_dict(summary: VersionSummary) -> dict[str, Any]:
    data = {
        "id": str(summary.id),
        "version": summary.number,
        "parent_ids": [str(p) for p in summary.parent_ids],
        "branch": summary.branch,
        "kind": summary.kind.value,
        "author": summary.author,
        "author_id": summary.author_id,
        "message": summary.message,
        "changes": summary.changes.to_dict(),
        "content_hash": summary.content_hash,
        "size": summary.size,
        "reverted_from": str(summary.reverted_from) if summary.reverted_from else None,
        "merged_branch": summary.merged_branch,
        "created_at": summary.created_at.isoformat(),
    }
    if summary.content is not None:
        data["content"] = summary.content
    if summary.diff is not None:
        data["diff"] = summary.diff.to_dict()
    return data


def page_to_dict(page: Page[VersionSummary]) -> dict[str, Any]:
    return {
        "items": [summary_to_dict(s) for s in page.items],
        "total": page.total,
        "offset": page.offset,
        "limit": page.limit,
        "has_more": page.has_more,
    }


def branch_to_dict(branch: Branch) -> dict[str, Any]:
    return {
        "name": branch.name,
        "document_id": branch.document_id,
        "head_version_id": str(branch.head_version_id),
        "created_from_version_id": str(branch.created_from_version_id),
        "protected": branch.protected,
        "description": branch.description,
        "created_by": branch.created_by,
        "created_at": branch.created_at.isoformat(),
        "updated_at": branch.updated_at.isoformat(),
    }


def tag_to_dict(tag: Tag) -> dict[str, Any]:
    return {
        "name": tag.name,
        "document_id": tag.document_id,
        "version_id": str(tag.version_id),
        "version": tag.version_number,
        "type": tag.type.value,
        "message": tag.message,
        "created_by": tag.created_by,
        "created_at": tag.created_at.isoformat(),
    }


def conflict_to_dict(region: ConflictRegion) -> dict[str, Any]:
    return {
        "start": region.start,
        "end": region.end,
        "base": region.base,
        "source": region.source,
        "target": region.target,
        "resolution": region.resolution.value if region.resolution else None,
    }


def merge_to_dict(result: MergeResult) -> dict[str, Any]:
    return {
        "status": result.status.value,
        "source_branch": result.source_branch,
        "target_branch": result.target_branch,
        "base_version_id": str(result.base_version_id),
        "source_head_id": str(result.source_head_id),
        "target_head_id": str(result.target_head_id),
        "version": version_to_dict(result.merge_version) if result.merge_version else None,
        "conflicts": [conflict_to_dict(c) for c in result.conflicts],
    }


def diff_to_dict(result: DiffResult) -> dict[str, Any]:
    return {
        "document_id": result.document_id,
        "from_version_id": str(result.from_version_id),
        "to_version_id": str(result.to_version_id),
        "from_version": result.from_number,
        "to_version": result.to_number,
        "diff": result.script.to_dict(),
        "stats": result.stats.to_dict(),
        "summary": {
            "versions_apart": result.versions_apart,
            "timespan_seconds": result.timespan_seconds,
            "size_change": result.size_change,
        },
        "unified": result.unified,
    }


def stats_to_dict(stats: DocumentStats) -> dict[str, Any]:
    return {
        "document_id": stats.document_id,
        "total_versions": stats.total_versions,
        "branch_count": stats.branch_count,
        "tag_count": stats.tag_count,
        "contributors": stats.contributors,
        "created_at": stats.created_at.isoformat(),
        "last_modified_at": stats.last_modified_at.isoformat(),
        "first_version": stats.first_version_number,
        "latest_version": stats.latest_version_number,
        "average_version_size": stats.average_version_size,
        "total_changes": stats.total_changes.to_dict(),
    }
