"""GroupMe bot callback endpoint -- POST <webhook_path>."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from aiohttp import web

if TYPE_CHECKING:
    from ..config.settings import Settings
    from ..messaging.bot import CardBot

logger = logging.getLogger(__name__)


class WebhookEndpoint:
    """Receives GroupMe callbacks and hands the message text to the bot.

    The caller always gets an empty 200 once every reference has been
    handled; per-reference failures are reported in the chat instead.
    """

    def __init__(self, settings: Settings, bot: CardBot | None = None) -> None:
        self._settings = settings
        self.bot = bot

    def register(self, router: web.UrlDispatcher) -> None:
        path = self._settings.webhook_path
        router.add_post(path, self.handle)
        router.add_get(path, self._probe)

    async def _probe(self, _req: web.Request) -> web.Response:
        """GET -- simple health probe for the callback URL."""
        return web.json_response({
            "status": "ok",
            "endpoint": self._settings.webhook_path,
            "method": "POST required",
            "bot_configured": self._settings.bot_configured,
        })

    async def handle(self, req: web.Request) -> web.Response:
        logger.info(
            "[webhook] POST %s from %s | content-length=%s",
            req.path, req.remote, req.headers.get("Content-Length", "?"),
        )

        if not self._settings.bot_configured or self.bot is None:
            logger.warning(
                "[webhook] Ignored: bot not configured (bot_id=%s, access_token=%s)",
                bool(self._settings.bot_id), bool(self._settings.access_token),
            )
            return web.Response(status=200)

        raw_body = await req.read()
        try:
            body = json.loads(raw_body)
        except ValueError as exc:
            logger.error("[webhook] Failed to parse JSON body: %s | raw=%s", exc, raw_body[:500])
            return web.json_response(
                {"status": "error", "message": f"Invalid JSON: {exc}"},
                status=400,
            )

        text = body.get("text") if isinstance(body, dict) else None
        if not isinstance(text, str):
            logger.info("[webhook] No text in callback, ignoring")
            return web.Response(status=200)

        logger.debug(
            "[webhook] Message from %s (%s): %r",
            body.get("name", "?"), body.get("sender_type", "?"), text,
        )
        try:
            await self.bot.handle(text)
        except Exception:
            logger.exception("[webhook] Unhandled error while handling message: %r", text)
        return web.Response(status=200)
