"""Document API resources."""

import asyncio

import falcon.asgi

from docvc.application.dto.version_dto import VersionMetadata
from docvc.application.services import VersionControlEngine
from docvc.domain.exceptions import ValidationError
from docvc.interfaces.api.serializers import stats_to_dict, version_to_dict


class DocumentsResource:
    """POST /v1/documents - put a document under version control."""

    def __init__(self, engine: VersionControlEngine) -> None:
        self._engine = engine

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Initialize document with its first version."""
        body = await req.get_media(default_when_empty={})
        document_id = (body.get("document_id") or "").strip()
        content = body.get("content", "")
        if not document_id:
            raise ValidationError("document_id is required")
        if not isinstance(content, str):
            raise ValidationError("content must be a string")

        metadata = VersionMetadata(
            author=body.get("author"),
            author_id=body.get("author_id"),
            message=body.get("message"),
        )
        version = await asyncio.to_thread(
            self._engine.initialize_document, document_id, content, metadata
        )
        resp.media = version_to_dict(version)
        resp.status = falcon.HTTP_201


class DocumentStatsResource:
    """GET /v1/documents/{document_id}/stats - history statistics."""

    def __init__(self, engine: VersionControlEngine) -> None:
        self._engine = engine

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        stats = await asyncio.to_thread(self._engine.get_document_stats, document_id)
        resp.media = stats_to_dict(stats)
        resp.status = falcon.HTTP_200
