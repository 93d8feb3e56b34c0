"""Application settings -- reads from environment and ``.env`` file.

A value in the ``.env`` file wins over the process environment, so a
deployment can pin its bot credentials without touching the host.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import dotenv_values

from ..util.singletons import register_singleton

SCRYFALL_API_URL = "https://api.scryfall.com"
GROUPME_API_URL = "https://api.groupme.com"
GROUPME_IMAGE_URL = "https://image.groupme.com"

SECRET_ENV_KEYS: frozenset[str] = frozenset({"ACCESS_TOKEN"})


class Settings:
    """Runtime configuration sourced from environment variables and ``.env``."""

    def __init__(self) -> None:
        self.dotenv_path = Path(os.getenv("DOTENV_PATH") or ".env")
        self.reload()

    def reload(self) -> None:
        """Re-read the ``.env`` file and environment variables."""
        self._file_values = self._load_file()
        e = self._read

        self.bot_id: str = e("BOT_ID")
        self.access_token: str = e("ACCESS_TOKEN")

        self.host: str = e("HOST") or "0.0.0.0"
        self.port: int = int(e("PORT") or "8080")
        self.webhook_path: str = e("WEBHOOK_PATH") or "/"
        self.log_level: str = (e("LOG_LEVEL") or "INFO").upper()

        self.scryfall_api_url: str = (e("SCRYFALL_API_URL") or SCRYFALL_API_URL).rstrip("/")
        self.groupme_api_url: str = (e("GROUPME_API_URL") or GROUPME_API_URL).rstrip("/")
        self.groupme_image_url: str = (e("GROUPME_IMAGE_URL") or GROUPME_IMAGE_URL).rstrip("/")

    @property
    def bot_configured(self) -> bool:
        return bool(self.bot_id and self.access_token)

    @property
    def log_level_value(self) -> int:
        level = logging.getLevelName(self.log_level)
        return level if isinstance(level, int) else logging.INFO

    # -- helpers -----------------------------------------------------------

    def _load_file(self) -> dict[str, str]:
        if not self.dotenv_path.is_file():
            return {}
        return {k: v for k, v in dotenv_values(self.dotenv_path).items() if v is not None}

    def _read(self, key: str) -> str:
        return (self._file_values.get(key) or os.getenv(key, "")).strip()

    def redacted(self) -> dict[str, str]:
        """Settings snapshot safe to log."""
        out = {
            "BOT_ID": self.bot_id,
            "ACCESS_TOKEN": self.access_token,
            "HOST": self.host,
            "PORT": str(self.port),
            "WEBHOOK_PATH": self.webhook_path,
            "LOG_LEVEL": self.log_level,
            "SCRYFALL_API_URL": self.scryfall_api_url,
            "GROUPME_API_URL": self.groupme_api_url,
            "GROUPME_IMAGE_URL": self.groupme_image_url,
        }
        for key in SECRET_ENV_KEYS:
            out[key] = "set" if out[key] else "MISSING"
        return out


# Module-level singleton
cfg = Settings()


def _reset_cfg() -> None:
    global cfg
    cfg = Settings()


register_singleton(_reset_cfg)
