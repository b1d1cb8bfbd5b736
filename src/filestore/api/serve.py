"""Application factory and server runner for the file store.

``create_app(settings)`` builds a FastAPI app with the file routers mounted
and the loaded :class:`~filestore.config.Settings` injected into
``app.state``, so tests can build apps with alternate tokens and roots.
"""

from __future__ import annotations

import logging

from filestore.config import Settings

logger = logging.getLogger(__name__)


def create_app(settings: Settings):
    """Build the FastAPI application for *settings*.

    Creates the storage root if it is missing.
    """
    from fastapi import FastAPI

    from filestore.api.responses import filestore_error_handler
    from filestore.api.routes import mount_routers
    from filestore.errors import FileStoreError
    from filestore.storage import FileStore

    store = FileStore.from_settings(settings)
    store.ensure_root()

    app = FastAPI(
        title="filestore",
        description="Token-gated directory listing, upload, download and delete.",
        version=_package_version(),
    )
    app.state.settings = settings
    app.state.store = store

    app.add_exception_handler(FileStoreError, filestore_error_handler)
    mount_routers(app)

    if not settings.confine_paths:
        logger.warning("Path confinement is disabled: '..' may escape %s", store.root)
    if not settings.protect_downloads:
        logger.info("Downloads under /get/ do not require the token")

    return app


def _package_version() -> str:
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("filestore")
    except PackageNotFoundError:
        return "0.0.0"


def run_api_server(settings: Settings) -> None:
    """Serve *settings* on ``settings.host:settings.port`` until interrupted."""
    import uvicorn

    app = create_app(settings)

    print("\n" + "=" * 50)
    print("FILESTORE")
    print("=" * 50)
    print(f"\nStorage root: {app.state.store.root}")
    print(f"Listening on http://{settings.host}:{settings.port}\n")

    # log_config=None: uvicorn's loggers propagate to the Rich root handler
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
