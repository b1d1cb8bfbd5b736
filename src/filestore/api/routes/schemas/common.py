# Common response envelope.
# Created: 2026-10-18

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Envelope(BaseModel):
    """Uniform ``{status, message}`` response.

    ``status`` is 1 on success and 0 on any failure or benign absence.
    """

    model_config = ConfigDict(from_attributes=True)

    status: int
    message: str
