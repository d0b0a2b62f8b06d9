"""Version API resources."""

import asyncio

import falcon.asgi

from docvc.application.dto.history_dto import HistoryQuery
from docvc.application.dto.version_dto import VersionMetadata
from docvc.application.services import VersionControlEngine
from docvc.domain.entities import MAIN_BRANCH
from docvc.domain.exceptions import ValidationError
from docvc.interfaces.api.serializers import (
    diff_to_dict,
    page_to_dict,
    parse_datetime,
    parse_uuid,
    version_to_dict,
)


def _metadata(body: dict) -> VersionMetadata:
    return VersionMetadata(
        author=body.get("author"),
        author_id=body.get("author_id"),
        message=body.get("message"),
        branch=body.get("branch") or MAIN_BRANCH,
        override_protection=bool(body.get("override_protection", False)),
    )


class VersionsResource:
    """GET/POST /v1/documents/{document_id}/versions - history and new versions."""

    def __init__(self, engine: VersionControlEngine) -> None:
        self._engine = engine

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        """Paginated history, newest first."""
        query = HistoryQuery(
            branch=req.get_param("branch"),
            author=req.get_param("author"),
            limit=req.get_param_as_int("limit"),
            offset=req.get_param_as_int("offset") or 0,
            include_content=req.get_param_as_bool("include_content") or False,
            include_diff=req.get_param_as_bool("include_diff") or False,
            since=parse_datetime(req.get_param("since"), "since"),
            until=parse_datetime(req.get_param("until"), "until"),
        )
        page = await asyncio.to_thread(self._engine.get_version_history, document_id, query)
        resp.media = page_to_dict(page)
        resp.status = falcon.HTTP_200

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        """Create version on a branch (main by default)."""
        body = await req.get_media(default_when_empty={})
        content = body.get("content")
        if not isinstance(content, str):
            raise ValidationError("content is required and must be a string")

        version = await asyncio.to_thread(
            self._engine.create_version, document_id, content, _metadata(body)
        )
        resp.media = version_to_dict(version)
        resp.status = falcon.HTTP_201


class VersionResource:
    """GET /v1/documents/{document_id}/versions/{version_id} - one version with content."""

    def __init__(self, engine: VersionControlEngine) -> None:
        self._engine = engine

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        document_id: str,
        version_id: str,
    ) -> None:
        vid = parse_uuid(version_id, "version id")
        version = await asyncio.to_thread(self._engine.get_version, document_id, vid)
        resp.media = version_to_dict(version)
        resp.status = falcon.HTTP_200


class RevertResource:
    """POST /v1/documents/{document_id}/versions/{version_id}/revert."""

    def __init__(self, engine: VersionControlEngine) -> None:
        self._engine = engine

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        document_id: str,
        version_id: str,
    ) -> None:
        """Append a version restoring the given version's content."""
        vid = parse_uuid(version_id, "version id")
        body = await req.get_media(default_when_empty={})
        version = await asyncio.to_thread(
            self._engine.revert_to_version, document_id, vid, _metadata(body)
        )
        resp.media = version_to_dict(version)
        resp.status = falcon.HTTP_201


class CompareResource:
    """GET /v1/documents/{document_id}/compare/{from_version_id}/{to_version_id}."""

    def __init__(self, engine: VersionControlEngine) -> None:
        self._engine = engine

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        document_id: str,
        from_version_id: str,
        to_version_id: str,
    ) -> None:
        from_id = parse_uuid(from_version_id, "from version id")
        to_id = parse_uuid(to_version_id, "to version id")
        result = await asyncio.to_thread(
            self._engine.compare_versions, document_id, from_id, to_id
        )
        resp.media = diff_to_dict(result)
        resp.status = falcon.HTTP_200
