# Listing router — immediate children of a directory under the storage root.
# Created: 2026-10-18

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from filestore.api.deps import get_store, read_path_body, require_token
from filestore.api.responses import error_response
from filestore.api.routes.schemas.files import ListEntry, ListResponse
from filestore.errors import FileStoreError
from filestore.storage import FileStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["List"], dependencies=[Depends(require_token)])


@router.post("/list", response_model=ListResponse)
async def list_directory(request: Request, store: FileStore = Depends(get_store)):
    """List a directory. An empty or absent ``path`` lists the storage root.

    A missing directory is not an error: the answer is 200 with ``status: 0``
    and an empty ``content``. Entries come back in filesystem order.
    """
    try:
        body = await read_path_body(request)
        entries = store.list_directory(body.path)
    except FileStoreError as exc:
        return error_response(request, exc, content=[])

    logger.info("%s %s -> %d entries", request.method, request.url.path, len(entries))
    return ListResponse(
        status=1,
        message="success",
        content=[ListEntry.model_validate(e) for e in entries],
    )
