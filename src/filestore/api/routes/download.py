# Download router — streams a stored file as an attachment.
# Created: 2026-10-18
#
# Byte ranges are served by FileResponse. Conditional requests on the ETag and
# the modification time are answered here before the file is streamed.

from __future__ import annotations

import logging
import os
from email.utils import formatdate, parsedate_to_datetime

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import FileResponse

from filestore.api.deps import get_store, require_download_token
from filestore.storage import FileStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Download"], dependencies=[Depends(require_download_token)])


def _header_time(request: Request, name: str) -> int | None:
    value = request.headers.get(name)
    if not value:
        return None
    try:
        return int(parsedate_to_datetime(value).timestamp())
    except (TypeError, ValueError):
        return None


def _etag_matches(header: str, etag: str | None) -> bool:
    """Weak comparison of an If-None-Match list against the response ETag."""
    if header.strip() == "*":
        return etag is not None
    if etag is None:
        return False
    tags = [t.strip().removeprefix("W/") for t in header.split(",")]
    return etag.removeprefix("W/") in tags


def _precondition(request: Request, st: os.stat_result, etag: str | None) -> int | None:
    """Return 304/412 if a conditional header short-circuits the request.

    If-None-Match takes precedence over If-Modified-Since. HTTP dates have
    one-second resolution, so the mtime is truncated before comparing.
    """
    mtime = int(st.st_mtime)

    since = _header_time(request, "If-Unmodified-Since")
    if since is not None and mtime > since:
        return 412

    if_none_match = request.headers.get("If-None-Match")
    if if_none_match is not None:
        return 304 if _etag_matches(if_none_match, etag) else None

    since = _header_time(request, "If-Modified-Since")
    if since is not None and mtime <= since:
        return 304
    return None


@router.api_route("/get/{file_path:path}", methods=["GET", "HEAD"])
async def download_file(file_path: str, request: Request, store: FileStore = Depends(get_store)):
    """Download ``file_path`` (relative to the storage root).

    Directories and missing files answer 404 with a JSON envelope.
    """
    path, st = store.open_download(file_path)
    response = FileResponse(
        path,
        media_type="application/octet-stream",
        filename=path.name,
        stat_result=st,
    )
    etag = response.headers.get("etag")

    status = _precondition(request, st, etag)
    if status is not None:
        headers = {"Last-Modified": formatdate(st.st_mtime, usegmt=True)}
        if etag:
            headers["ETag"] = etag
        return Response(status_code=status, headers=headers)

    logger.info("%s %s", request.method, request.url.path)
    return response
