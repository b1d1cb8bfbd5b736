# Upload router — multipart file upload to a path named by a header.
# Created: 2026-10-18

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool

from filestore.api.deps import get_store, require_token
from filestore.api.routes.schemas.files import UploadResponse
from filestore.errors import BadRequestError
from filestore.storage import FileStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Upload"], dependencies=[Depends(require_token)])

PATH_HEADER = "X-FormFile-Path"
FORM_FIELD = "file"


def _destination_header(request: Request) -> str:
    """Read ``X-FormFile-Path`` as UTF-8.

    Header values arrive decoded as latin-1; the raw bytes are re-decoded so
    non-ASCII paths keep their real names.
    """
    raw = request.headers.get(PATH_HEADER, "")
    try:
        return raw.encode("latin-1").decode("utf-8")
    except UnicodeDecodeError as exc:
        raise BadRequestError("非法路径") from exc


@router.post("/upload", response_model=UploadResponse)
async def upload_file(request: Request, store: FileStore = Depends(get_store)):
    """Store the multipart ``file`` field at the path in ``X-FormFile-Path``.

    Missing parent directories are created and an existing file is
    overwritten. ``filePath`` echoes the header value.
    """
    dest = _destination_header(request)
    if not dest:
        raise BadRequestError("缺少存储路径")
    # Confinement is checked before the body is spooled
    store.resolve(dest)

    try:
        form = await request.form()
    except Exception as exc:
        # Starlette raises its own parse errors for malformed multipart bodies
        raise BadRequestError("接收文件失败") from exc

    upload = form.get(FORM_FIELD)
    if upload is None or isinstance(upload, str):
        await form.close()
        raise BadRequestError("接收文件失败")

    try:
        await run_in_threadpool(store.save_upload, dest, upload.file)
    finally:
        await form.close()

    logger.info("%s %s -> %s", request.method, request.url.path, dest)
    return UploadResponse(status=1, message="文件上传成功", filePath=dest)
