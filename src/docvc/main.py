"""Application entry point and composition root."""

import logging
import sys

from docvc import __version__
from docvc.application.services import VersionControlEngine
from docvc.config import Settings, get_settings
from docvc.infrastructure.diffing import SequenceDiffEngine
from docvc.infrastructure.locking import DocumentLocks
from docvc.infrastructure.persistence import memory
from docvc.infrastructure.persistence.postgres import unit_of_work as postgres_uow
from docvc.infrastructure.persistence.postgres.connection import create_pool
from docvc.interfaces.api.app import create_app
from docvc.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Root logging at the configured level."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main() -> None:
    """CLI entry point."""
    print(f"docvc v{__version__}")


def create_engine(settings: Settings, uow_factory: object | None = None) -> VersionControlEngine:
    """Build the engine over the given (or an in-memory) unit of work factory."""
    if uow_factory is None:
        uow_factory = memory.create_uow_factory(memory.InMemoryStore())
    return VersionControlEngine(
        unit_of_work_factory=uow_factory,
        diff_engine=SequenceDiffEngine(settings.diff_granularity),
        locks=DocumentLocks(timeout_seconds=settings.storage_timeout_seconds),
        snapshot_interval=settings.snapshot_interval,
        merge_policy=settings.auto_merge_policy,
        protect_main_branch=settings.protect_main_branch,
        history_default_limit=settings.history_default_limit,
        history_max_limit=settings.history_max_limit,
    )


def create_docvc_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings)

    middleware = []
    uow_factory = None
    if settings.storage_backend == "postgres":
        pool = create_pool(
            settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            timeout_seconds=settings.storage_timeout_seconds,
        )
        uow_factory = postgres_uow.create_uow_factory(pool)
        middleware.append(PoolLifespanMiddleware(pool))

    engine = create_engine(settings, uow_factory)
    logger.info(
        "docvc ready",
        extra={"storage": settings.storage_backend, "environment": settings.environment},
    )
    return create_app(engine, middleware=middleware, storage_backend=settings.storage_backend)


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_docvc_app(), host=settings.host, port=settings.port)
