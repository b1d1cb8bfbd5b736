# Shared FastAPI dependencies for the file endpoints.
# Created: 2026-10-18

from __future__ import annotations

import hmac
import logging

from fastapi import Depends, Request
from pydantic import ValidationError

from filestore.api.routes.schemas.files import PathRequest
from filestore.config import Settings
from filestore.errors import BadRequestError, UnauthorizedError
from filestore.storage import FileStore

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    """Settings injected by ``create_app()``."""
    return request.app.state.settings


def get_store(request: Request) -> FileStore:
    return request.app.state.store


def _token_matches(submitted: str, expected: str) -> bool:
    return hmac.compare_digest(submitted.encode(), expected.encode())


async def require_token(request: Request, settings: Settings = Depends(get_settings)) -> None:
    """Reject the request unless ``Authorization`` equals the configured token.

    The header carries the bare token (no ``Bearer`` prefix). Runs before the
    endpoint body, so a rejected request never touches the filesystem.
    """
    submitted = request.headers.get("Authorization", "")
    if not _token_matches(submitted, settings.token):
        client = request.client.host if request.client else "unknown"
        logger.warning("Invalid token from %s on %s", client, request.url.path)
        raise UnauthorizedError("Invalid token")


async def require_download_token(
    request: Request, settings: Settings = Depends(get_settings)
) -> None:
    """Token check for /get/, enforced only when ``protect_downloads`` is set."""
    if settings.protect_downloads:
        await require_token(request, settings)


async def read_path_body(request: Request) -> PathRequest:
    """Parse the ``{"path": ...}`` JSON body of /list and /delete.

    Unparseable JSON, a non-object body or a non-string ``path`` is a
    client error.
    """
    try:
        body = await request.json()
        return PathRequest.model_validate(body)
    except (ValueError, ValidationError) as exc:
        raise BadRequestError("缺少必要参数") from exc
