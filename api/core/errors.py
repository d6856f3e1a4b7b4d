"""
Storage error kinds and how each one is shown to HTTP callers.

The set is closed: every storage failure the service raises is one of the four
subclasses of `StorageError` below. `error_outcome()` maps each kind through an
explicit table. Only pool failures put their message in the response body;
query and mapping failures are returned as a bare 500.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import Request, status
from fastapi.responses import PlainTextResponse, Response

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    kind = "storage"


class NotFoundError(StorageError):
    """
    The statement returned no row.

    An insert whose RETURNING set comes back empty is reported as absence
    (404) as well, not as an internal failure.
    """

    kind = "not_found"

    def __init__(self, message: str = "No row returned.") -> None:
        super().__init__(message)


class PoolError(StorageError):
    """Could not check out a connection (pool exhausted, timed out, or closed)."""

    kind = "pool"


class QueryError(StorageError):
    kind = "query"


class MappingError(StorageError):
    kind = "mapping"


@dataclass(frozen=True)
class ErrorOutcome:
    status_code: int
    body: str


# kind -> (status, expose message in body)
_OUTCOMES: dict[type[StorageError], tuple[int, bool]] = {
    NotFoundError: (status.HTTP_404_NOT_FOUND, False),
    PoolError: (status.HTTP_500_INTERNAL_SERVER_ERROR, True),
    QueryError: (status.HTTP_500_INTERNAL_SERVER_ERROR, False),
    MappingError: (status.HTTP_500_INTERNAL_SERVER_ERROR, False),
}


def error_outcome(err: StorageError) -> ErrorOutcome:
    try:
        status_code, verbose = _OUTCOMES[type(err)]
    except KeyError as exc:
        raise TypeError(f"Unclassified storage error: {type(err).__name__}") from exc
    return ErrorOutcome(status_code=status_code, body=str(err) if verbose else "")


async def storage_error_handler(request: Request, exc: StorageError) -> Response:
    """
    FastAPI exception handler for every `StorageError`.
    """
    outcome = error_outcome(exc)
    if isinstance(exc, PoolError):
        logger.warning("storage_error kind=%s path=%s detail=%s", exc.kind, request.url.path, exc)
    else:
        logger.error(
            "storage_error kind=%s path=%s status=%s",
            exc.kind,
            request.url.path,
            outcome.status_code,
            exc_info=exc,
        )
    return PlainTextResponse(outcome.body, status_code=outcome.status_code)
