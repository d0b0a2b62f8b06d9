"""Health check endpoints."""

import falcon.asgi

FEATURES = [
    "versioning",
    "branching",
    "merging",
    "tagging",
    "history",
    "comparison",
    "revert",
]


class HealthResource:
    """Health and readiness endpoints."""

    def __init__(self, storage_backend: str = "memory") -> None:
        self._storage_backend = storage_backend

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok", "features": FEATURES}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - readiness."""
        resp.media = {"status": "ready", "storage": self._storage_backend}
        resp.status = falcon.HTTP_200
