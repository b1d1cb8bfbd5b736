# Settings — loaded once from config.json at startup.
# Created: 2026-10-18
#
# The file must contain at least {"token": "<string>"}. Everything else has a
# default. Settings are frozen: changing the token requires a restart.

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from filestore.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.json")
DEFAULT_STORAGE_ROOT = Path("data")
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8082


class Settings(BaseModel):
    """Process-wide, immutable service configuration."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    token: str = Field(..., min_length=1, description="Shared secret for Authorization")
    storage_root: Path = DEFAULT_STORAGE_ROOT
    host: str = DEFAULT_HOST
    port: int = Field(DEFAULT_PORT, ge=1, le=65535)

    # Hardening switches
    confine_paths: bool = True  # reject paths that resolve outside storage_root
    protect_downloads: bool = False  # require the token on /get/
    atomic_uploads: bool = False  # write to a temp file, then rename

    @classmethod
    def load(cls, path: Path | str = DEFAULT_CONFIG_PATH) -> Settings:
        """Read and validate the JSON config file at *path*.

        Raises :class:`ConfigError` if the file is missing, unreadable, not a
        JSON object, or does not carry a non-empty string ``token``.
        """
        path = Path(path)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise ConfigError(f"config file not found: {path}") from exc
        except OSError as exc:
            raise ConfigError(f"cannot read config file {path}: {exc}") from exc

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"invalid JSON in {path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a JSON object")

        try:
            settings = cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"invalid config in {path}: {exc}") from exc

        logger.debug("Loaded settings from %s", path)
        return settings

    def with_overrides(self, **changes) -> Settings:
        """Return a copy with the non-None *changes* applied (used by the CLI)."""
        updates = {k: v for k, v in changes.items() if v is not None}
        if not updates:
            return self
        return self.model_copy(update=updates)
