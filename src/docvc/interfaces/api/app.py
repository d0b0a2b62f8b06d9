"""Falcon ASGI application."""

import falcon.asgi
from falcon.asgi import App

from docvc.application.services import VersionControlEngine
from docvc.domain.exceptions import VersionControlError
from docvc.interfaces.api.errors import handle_version_control_error
from docvc.interfaces.api.resources.branches import BranchesResource, BranchResource
from docvc.interfaces.api.resources.documents import DocumentsResource, DocumentStatsResource
from docvc.interfaces.api.resources.health import HealthResource
from docvc.interfaces.api.resources.merges import MergesResource
from docvc.interfaces.api.resources.tags import TagResource, TagsResource
from docvc.interfaces.api.resources.versions import (
    CompareResource,
    RevertResource,
    VersionResource,
    VersionsResource,
)


def create_app(
    engine: VersionControlEngine,
    middleware: list | None = None,
    storage_backend: str = "memory",
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(VersionControlError, handle_version_control_error)

    health = HealthResource(storage_backend)
    app.add_route("/v1/health", health)
    app.add_route("/v1/health/ready", health, suffix="ready")
    app.add_route("/v1/documents", DocumentsResource(engine))
    app.add_route("/v1/documents/{document_id}/stats", DocumentStatsResource(engine))
    app.add_route("/v1/documents/{document_id}/versions", VersionsResource(engine))
    app.add_route(
        "/v1/documents/{document_id}/versions/{version_id}", VersionResource(engine)
    )
    app.add_route(
        "/v1/documents/{document_id}/versions/{version_id}/revert", RevertResource(engine)
    )
    app.add_route(
        "/v1/documents/{document_id}/compare/{from_version_id}/{to_version_id}",
        CompareResource(engine),
    )
    app.add_route("/v1/documents/{document_id}/branches", BranchesResource(engine))
    app.add_route("/v1/documents/{document_id}/branches/{name}", BranchResource(engine))
    app.add_route("/v1/documents/{document_id}/merges", MergesResource(engine))
    app.add_route("/v1/documents/{document_id}/tags", TagsResource(engine))
    app.add_route("/v1/documents/{document_id}/tags/{name}", TagResource(engine))
    return app
