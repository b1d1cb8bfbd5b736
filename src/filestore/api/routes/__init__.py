# Router aggregation.
# Created: 2026-10-18
#
# mount_routers(app) registers the file endpoints at the application root.

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)

_ROUTERS: list[tuple[str, str, str]] = [
    # (module_path, attr_name, tag)
    ("filestore.api.routes.listing", "router", "List"),
    ("filestore.api.routes.upload", "router", "Upload"),
    ("filestore.api.routes.download", "router", "Download"),
    ("filestore.api.routes.delete", "router", "Delete"),
]


def mount_routers(app: FastAPI) -> None:
    """Mount all file routers on *app*. An import failure propagates."""
    from fastapi import APIRouter

    for module_path, attr_name, tag in _ROUTERS:
        mod = importlib.import_module(module_path)
        router: APIRouter = getattr(mod, attr_name)
        app.include_router(router)
        logger.debug("Mounted router: %s (%s)", module_path, tag)
