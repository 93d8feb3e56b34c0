"""Webhook server -- app factory and entry point."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

import aiohttp
from aiohttp import web
from aiohttp.abc import AbstractAccessLogger

from .. import __version__
from ..config import settings as settings_module
from ..config.settings import Settings
from ..messaging.bot import CardBot
from ..services.groupme import GroupMeClient
from ..services.scryfall import ScryfallClient
from .webhook import WebhookEndpoint

logger = logging.getLogger(__name__)

_QUIET_PATHS = frozenset({"/health"})


class QuietAccessLogger(AbstractAccessLogger):
    """Demotes health-probe log entries to DEBUG."""

    def log(self, request: web.BaseRequest, response: web.StreamResponse, time: float) -> None:
        level = logging.DEBUG if request.path in _QUIET_PATHS else logging.INFO
        self.logger.log(
            level,
            "%s %s %s %s %.3fs",
            request.remote,
            request.method,
            request.path,
            response.status,
            time,
        )


def build_bot(session: aiohttp.ClientSession, settings: Settings) -> CardBot:
    scryfall = ScryfallClient(session, settings.scryfall_api_url)
    groupme = GroupMeClient(
        session,
        settings.bot_id,
        settings.access_token,
        api_url=settings.groupme_api_url,
        image_url=settings.groupme_image_url,
    )
    return CardBot(scryfall, groupme)


async def _health(_req: web.Request) -> web.Response:
    return web.json_response({"status": "ok", "version": __version__})


async def create_app(settings: Settings | None = None) -> web.Application:
    """Build the aiohttp application.

    One client session is shared by every request for the lifetime of the
    app; the bot is wired on startup once that session exists.
    """
    settings = settings or settings_module.cfg
    app = web.Application()
    endpoint = WebhookEndpoint(settings)

    async def client_session(_app: web.Application) -> AsyncIterator[None]:
        async with aiohttp.ClientSession() as session:
            endpoint.bot = build_bot(session, settings)
            logger.info("HTTP client session opened")
            yield
            endpoint.bot = None
        logger.info("HTTP client session closed")

    app.cleanup_ctx.append(client_session)
    app.router.add_get("/health", _health)
    endpoint.register(app.router)
    return app


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    cfg = settings_module.cfg
    logging.basicConfig(
        level=cfg.log_level_value,
        format="%(asctime)s  %(name)s  %(levelname)s  %(message)s",
    )
    logger.info("Starting cardbot %s on %s:%d ...", __version__, cfg.host, cfg.port)
    logger.info("Settings: %s", cfg.redacted())
    if not cfg.bot_configured:
        logger.warning("BOT_ID or ACCESS_TOKEN not set; callbacks will be ignored")

    web.run_app(
        create_app(cfg),
        host=cfg.host,
        port=cfg.port,
        access_log_class=QuietAccessLogger,
    )


if __name__ == "__main__":
    main()
