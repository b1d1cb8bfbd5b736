# Request/response schemas for the file endpoints.
# Created: 2026-10-18

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from filestore.api.routes.schemas.common import Envelope


class PathRequest(BaseModel):
    """JSON body of /list and /delete."""

    model_config = ConfigDict(extra="ignore")

    path: str = ""


class ListEntry(BaseModel):
    """A single file or directory entry."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    is_dir: bool
    date: datetime


class ListResponse(Envelope):
    """Directory listing. ``content`` is always present, empty on failure."""

    content: list[ListEntry] = Field(default_factory=list)


class UploadResponse(Envelope):
    filePath: str
