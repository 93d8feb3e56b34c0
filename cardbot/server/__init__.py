"""Server module -- aiohttp application factory and webhook handler."""

from __future__ import annotations

from .app import create_app, main
from .webhook import WebhookEndpoint

__all__ = ["WebhookEndpoint", "create_app", "main"]
