"""Shared pytest fixtures for cardbot tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from cardbot.services.groupme import GroupMeClient
from cardbot.services.scryfall import ScryfallClient

IMAGE_BYTES = b"\xff\xd8\xff\xe0fake-jpeg"


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    dotenv = tmp_path / ".env"
    monkeypatch.setenv("DOTENV_PATH", str(dotenv))
    for key in (
        "BOT_ID", "ACCESS_TOKEN", "HOST", "PORT", "WEBHOOK_PATH", "LOG_LEVEL",
        "SCRYFALL_API_URL", "GROUPME_API_URL", "GROUPME_IMAGE_URL",
    ):
        monkeypatch.delenv(key, raising=False)
    return dotenv


@pytest.fixture(autouse=True)
def _reset_singletons(_isolate_env: Path):
    from cardbot.util.singletons import reset_all_singletons

    reset_all_singletons()
    yield
    reset_all_singletons()


@pytest.fixture()
def dotenv_path(_isolate_env: Path) -> Path:
    return _isolate_env


@dataclass
class FakeServices:
    """In-process stand-in for Scryfall and GroupMe.

    ``cards`` maps a fuzzy name to a card payload; ``errors`` maps it to a
    ``(status, body)`` pair.  Unknown names get a 404.  ``upload_response``
    is returned from ``/pictures``: a dict is sent as JSON, a str as raw
    text.  ``post_reply`` is the raw body ``/v3/bots/post`` answers with.
    """

    base_url: str = ""
    cards: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, tuple[int, Any]] = field(default_factory=dict)
    upload_response: Any = None
    upload_status: int = 200
    post_reply: bytes | None = None
    lookups: list[str] = field(default_factory=list)
    uploads: list[dict[str, Any]] = field(default_factory=list)
    posts: list[dict[str, Any]] = field(default_factory=list)

    def image_url(self, name: str) -> str:
        return f"{self.base_url}/img/{name}.jpg"

    def image_uris(self, *tiers: str, name: str = "art") -> dict[str, str]:
        return {tier: self.image_url(f"{name}-{tier}") for tier in tiers}

    def add_card(self, name: str, **extra: Any) -> dict[str, Any]:
        slug = name.lower().replace(" ", "-")
        payload = {
            "object": "card",
            "name": name,
            "scryfall_uri": f"https://scryfall.com/card/tst/1/{slug}",
            **extra,
        }
        self.cards[name] = payload
        return payload

    @property
    def texts(self) -> list[str]:
        return [p["text"] for p in self.posts]

    # -- handlers ----------------------------------------------------------

    async def named(self, req: web.Request) -> web.Response:
        name = req.query.get("fuzzy", "")
        self.lookups.append(name)
        if name in self.errors:
            status, body = self.errors[name]
            if isinstance(body, str):
                return web.Response(status=status, text=body)
            return web.json_response(body, status=status)
        if name in self.cards:
            return web.json_response(self.cards[name])
        return web.json_response(
            {"object": "error", "code": "not_found", "status": 404, "details": "no card found"},
            status=404,
        )

    async def image(self, req: web.Request) -> web.Response:
        if req.match_info["name"].startswith("missing"):
            return web.Response(status=404)
        return web.Response(body=IMAGE_BYTES, content_type="image/jpeg")

    async def pictures(self, req: web.Request) -> web.Response:
        self.uploads.append({
            "headers": dict(req.headers),
            "body": await req.read(),
        })
        response = self.upload_response
        if response is None:
            response = {"payload": {
                "url": f"https://i.groupme.com/{len(self.uploads)}",
                "picture_url": f"https://i.groupme.com/{len(self.uploads)}.jpeg",
            }}
        if isinstance(response, str):
            return web.Response(status=self.upload_status, text=response)
        return web.json_response(response, status=self.upload_status)

    async def bot_post(self, req: web.Request) -> web.Response:
        self.posts.append(await req.json())
        if self.post_reply is not None:
            return web.Response(
                status=202, body=self.post_reply, content_type="text/plain", charset="utf-8"
            )
        return web.Response(status=202)

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/cards/named", self.named)
        app.router.add_get("/img/{name}", self.image)
        app.router.add_post("/pictures", self.pictures)
        app.router.add_post("/v3/bots/post", self.bot_post)
        return app


@pytest_asyncio.fixture()
async def fake_services() -> AsyncIterator[FakeServices]:
    services = FakeServices()
    server = TestServer(services.app())
    await server.start_server()
    services.base_url = f"http://{server.host}:{server.port}"
    try:
        yield services
    finally:
        await server.close()


@pytest_asyncio.fixture()
async def http_session() -> AsyncIterator[aiohttp.ClientSession]:
    async with aiohttp.ClientSession() as session:
        yield session


@pytest.fixture()
def scryfall(http_session: aiohttp.ClientSession, fake_services: FakeServices) -> ScryfallClient:
    return ScryfallClient(http_session, fake_services.base_url)


@pytest.fixture()
def groupme(http_session: aiohttp.ClientSession, fake_services: FakeServices) -> GroupMeClient:
    return GroupMeClient(
        http_session,
        "bot-123",
        "token-abc",
        api_url=fake_services.base_url,
        image_url=fake_services.base_url,
    )
