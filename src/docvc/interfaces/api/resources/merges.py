"""Merge API resource."""

import asyncio

import falcon.asgi

from docvc.application.dto.merge_dto import MergeMetadata
from docvc.application.services import VersionControlEngine
from docvc.domain.exceptions import ValidationError
from docvc.domain.value_objects import MergeStrategy
from docvc.interfaces.api.serializers import merge_to_dict


class MergesResource:
    """POST /v1/documents/{document_id}/merges - merge source branch into target."""

    def __init__(self, engine: VersionControlEngine) -> None:
        self._engine = engine

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        """201 with the merge version, or 409 with the conflicting regions."""
        body = await req.get_media(default_when_empty={})
        source = body.get("source_branch")
        target = body.get("target_branch")
        if not source or not target:
            raise ValidationError("source_branch and target_branch are required")
        try:
            strategy = MergeStrategy(body.get("strategy") or MergeStrategy.AUTO)
        except ValueError as e:
            raise ValidationError(f"Unknown merge strategy: {body.get('strategy')!r}") from e

        metadata = MergeMetadata(
            author=body.get("author"),
            author_id=body.get("author_id"),
            message=body.get("message"),
            strategy=strategy,
        )
        result = await asyncio.to_thread(
            self._engine.merge_branches, document_id, source, target, metadata
        )
        resp.media = merge_to_dict(result)
        resp.status = falcon.HTTP_201 if result.success else falcon.HTTP_409
