# Error taxonomy shared by the storage layer and the HTTP routers.
# Created: 2026-10-18
#
# Every failure branch carries the HTTP status and the message that ends up in
# the {"status": 0, "message": ...} envelope.

from __future__ import annotations

__all__ = [
    "FileStoreError",
    "BadRequestError",
    "UnauthorizedError",
    "NotFoundError",
    "PathOutsideRootError",
    "AbsentError",
    "ConfigError",
]


class FileStoreError(Exception):
    """Base class for request-scoped failures.

    ``status_code`` is the HTTP status of the response; ``message`` is the
    human-readable text placed in the envelope.
    """

    status_code: int = 500

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(FileStoreError):
    """A required field is missing or malformed."""

    status_code = 400


class UnauthorizedError(FileStoreError):
    """The Authorization header does not match the configured token."""

    status_code = 401


class NotFoundError(FileStoreError):
    status_code = 404


class PathOutsideRootError(BadRequestError):
    """A client path resolved outside the storage root."""

    def __init__(self, message: str = "非法路径"):
        super().__init__(message)


class AbsentError(FileStoreError):
    """The target does not exist, and that is not an error for this operation.

    Listing a missing directory or deleting a missing path answers 200 with
    ``status: 0``.
    """

    status_code = 200


class ConfigError(Exception):
    """The configuration file is missing or invalid. Raised only at startup."""
