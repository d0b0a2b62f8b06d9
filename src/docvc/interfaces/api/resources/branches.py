"""Branch API resources."""

import asyncio

import falcon.asgi

from docvc.application.dto.branch_dto import BranchMetadata
from docvc.application.services import VersionControlEngine
from docvc.domain.exceptions import ValidationError
from docvc.interfaces.api.serializers import branch_to_dict, parse_uuid


class BranchesResource:
    """GET/POST /v1/documents/{document_id}/branches."""

    def __init__(self, engine: VersionControlEngine) -> None:
        self._engine = engine

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        branches = await asyncio.to_thread(self._engine.list_branches, document_id)
        resp.media = {"items": [branch_to_dict(b) for b in branches]}
        resp.status = falcon.HTTP_200

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        """Fork a branch at ``from_version_id`` (head of main when omitted)."""
        body = await req.get_media(default_when_empty={})
        name = body.get("name")
        if not name:
            raise ValidationError("name is required")
        from_version_id = body.get("from_version_id")
        from_id = parse_uuid(from_version_id, "from_version_id") if from_version_id else None
        metadata = BranchMetadata(
            author_id=body.get("author_id"),
            description=body.get("description") or "",
            protected=bool(body.get("protected", False)),
        )
        branch = await asyncio.to_thread(
            self._engine.create_branch, document_id, name, from_id, metadata
        )
        resp.media = branch_to_dict(branch)
        resp.status = falcon.HTTP_201


class BranchResource:
    """GET /v1/documents/{document_id}/branches/{name}."""

    def __init__(self, engine: VersionControlEngine) -> None:
        self._engine = engine

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        document_id: str,
        name: str,
    ) -> None:
        branch = await asyncio.to_thread(self._engine.get_branch, document_id, name)
        resp.media = branch_to_dict(branch)
        resp.status = falcon.HTTP_200
