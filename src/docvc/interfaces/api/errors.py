"""Map engine errors to HTTP responses."""

import logging

import falcon
import falcon.asgi

from docvc.domain.exceptions import (
    AlreadyExists,
    BranchProtected,
    MergeConflict,
    NotFound,
    NothingToMerge,
    StorageUnavailable,
    ValidationError,
    VersionControlError,
)
from docvc.interfaces.api.serializers import conflict_to_dict

logger = logging.getLogger(__name__)

_STATUS = (
    (NotFound, falcon.HTTP_404),
    (AlreadyExists, falcon.HTTP_409),
    (NothingToMerge, falcon.HTTP_409),
    (MergeConflict, falcon.HTTP_409),
    (ValidationError, falcon.HTTP_400),
    (BranchProtected, falcon.HTTP_403),
    (StorageUnavailable, falcon.HTTP_503),
)

RETRY_AFTER_SECONDS = 1


def status_for(ex: VersionControlError) -> str:
    for kind, status in _STATUS:
        if isinstance(ex, kind):
            return status
    return falcon.HTTP_500


async def handle_version_control_error(
    req: falcon.asgi.Request,
    resp: falcon.asgi.Response,
    ex: VersionControlError,
    params: dict,
) -> None:
    """Render a VersionControlError as ``{"error", "kind", "retryable"}``."""
    resp.status = status_for(ex)
    resp.media = {
        "error": str(ex),
        "kind": type(ex).__name__,
        "retryable": ex.retryable,
    }
    if isinstance(ex, MergeConflict):
        resp.media["conflicts"] = [conflict_to_dict(c) for c in ex.conflicts]
    if ex.retryable:
        resp.set_header("Retry-After", str(RETRY_AFTER_SECONDS))
        logger.warning("Retryable storage failure", extra={"path": req.path, "error": str(ex)})
