# Delete router — recursive removal of a file or directory.
# Created: 2026-10-18

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from filestore.api.deps import get_store, read_path_body, require_token
from filestore.api.routes.schemas.common import Envelope
from filestore.storage import FileStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Delete"], dependencies=[Depends(require_token)])


@router.post("/delete", response_model=Envelope)
async def delete_path(request: Request, store: FileStore = Depends(get_store)):
    """Remove ``path`` and everything beneath it. No confirmation, no undo.

    Deleting something that is already absent answers 200 with ``status: 0``.
    """
    body = await read_path_body(request)
    store.delete(body.path)

    logger.info("%s %s -> removed %s", request.method, request.url.path, body.path)
    return Envelope(status=1, message="删除成功")
