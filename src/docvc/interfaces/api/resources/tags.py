"""Tag API resources."""

import asyncio

import falcon.asgi

from docvc.application.dto.tag_dto import TagMetadata
from docvc.application.services import VersionControlEngine
from docvc.domain.exceptions import ValidationError
from docvc.domain.value_objects import TagType
from docvc.interfaces.api.serializers import parse_uuid, tag_to_dict, version_to_dict


class TagsResource:
    """GET/POST /v1/documents/{document_id}/tags."""

    def __init__(self, engine: VersionControlEngine) -> None:
        self._engine = engine

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        tags = await asyncio.to_thread(self._engine.list_tags, document_id)
        resp.media = {"items": [tag_to_dict(t) for t in tags]}
        resp.status = falcon.HTTP_200

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        body = await req.get_media(default_when_empty={})
        name = body.get("name")
        version_id = body.get("version_id")
        if not name or not version_id:
            raise ValidationError("name and version_id are required")
        try:
            tag_type = TagType(body.get("type") or TagType.MANUAL)
        except ValueError as e:
            raise ValidationError(f"Unknown tag type: {body.get('type')!r}") from e

        metadata = TagMetadata(
            author_id=body.get("author_id"),
            message=body.get("message") or "",
            type=tag_type,
        )
        tag = await asyncio.to_thread(
            self._engine.create_tag,
            document_id,
            parse_uuid(version_id, "version_id"),
            name,
            metadata,
        )
        resp.media = tag_to_dict(tag)
        resp.status = falcon.HTTP_201


class TagResource:
    """GET /v1/documents/{document_id}/tags/{name} - tag with its version's content."""

    def __init__(self, engine: VersionControlEngine) -> None:
        self._engine = engine

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        document_id: str,
        name: str,
    ) -> None:
        tag = await asyncio.to_thread(self._engine.get_tag, document_id, name)
        version = await asyncio.to_thread(self._engine.get_tagged_version, document_id, name)
        resp.media = {**tag_to_dict(tag), "content": version.content}
        resp.status = falcon.HTTP_200
