# Envelope rendering and failure logging for FileStoreError.
# Created: 2026-10-18

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from filestore.errors import FileStoreError

logger = logging.getLogger(__name__)


def error_response(request: Request, exc: FileStoreError, **extra) -> JSONResponse:
    """Log *exc* and render it as ``{"status": 0, "message": ..., **extra}``."""
    cause = exc.__cause__
    where = f"{request.method} {request.url.path}"
    if exc.status_code >= 500:
        logger.error("%s: %s", where, exc.message, exc_info=cause or exc)
    elif cause is not None:
        logger.warning("%s: %s (%s)", where, exc.message, cause)
    else:
        logger.warning("%s: %s", where, exc.message)

    body = {"status": 0, "message": exc.message, **extra}
    return JSONResponse(status_code=exc.status_code, content=body)


async def filestore_error_handler(request: Request, exc: FileStoreError) -> JSONResponse:
    """Exception handler registered by ``create_app()``."""
    return error_response(request, exc)
