"""GroupMe image service and bot post clients."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from ..config.settings import GROUPME_API_URL, GROUPME_IMAGE_URL
from ..messaging.outbound import OutboundMessage

logger = logging.getLogger(__name__)

# GroupMe sniffs the real format; it only insists on a content type it knows.
UPLOAD_CONTENT_TYPE = "application/jpeg"


def _picture_url(body: Any) -> str | None:
    """Pull ``payload.picture_url`` out of an upload response.

    A response without a ``payload`` object is a failed upload and raises;
    a payload that lacks the URL yields ``None``.
    """
    payload = body.get("payload") if isinstance(body, dict) else None
    if not isinstance(payload, dict):
        raise ValueError(f"upload response has no payload: {body!r:.200}")
    url = payload.get("picture_url")
    return url if isinstance(url, str) and url else None


class GroupMeClient:
    def __init__(
        self,
        session: aiohttp.ClientSession,
        bot_id: str,
        access_token: str,
        *,
        api_url: str = GROUPME_API_URL,
        image_url: str = GROUPME_IMAGE_URL,
    ) -> None:
        self._session = session
        self._bot_id = bot_id
        self._access_token = access_token
        self._api_url = api_url.rstrip("/")
        self._image_url = image_url.rstrip("/")

    @property
    def pictures_url(self) -> str:
        return f"{self._image_url}/pictures"

    @property
    def post_url(self) -> str:
        return f"{self._api_url}/v3/bots/post"

    async def upload_image(self, image_uri: str) -> str | None:
        """Copy *image_uri* to the GroupMe image service.

        Returns the hosted ``picture_url``, or ``None`` when the payload
        came back without one.  Transport and decoding errors, and a
        response with no payload at all, propagate.
        """
        async with self._session.get(image_uri) as resp:
            resp.raise_for_status()
            image = await resp.read()
        logger.debug("[groupme] Downloaded %d bytes from %s", len(image), image_uri)

        headers = {
            "Content-Type": UPLOAD_CONTENT_TYPE,
            "X-Access-Token": self._access_token,
        }
        async with self._session.post(self.pictures_url, data=image, headers=headers) as resp:
            body = await resp.json(content_type=None)
            logger.debug("[groupme] Upload response status=%s", resp.status)
        return _picture_url(body)

    async def post_message(self, message: OutboundMessage) -> None:
        """Post *message* as the bot.  Failures are logged, never raised."""
        body = {"bot_id": self._bot_id, **message.to_dict()}
        try:
            async with self._session.post(self.post_url, json=body) as resp:
                reply = await resp.text(errors="replace")
                logger.info("[groupme] Message post status: %s %s", resp.status, reply)
        except (aiohttp.ClientError, asyncio.TimeoutError, LookupError, ValueError) as exc:
            logger.error("[groupme] Message post failed: %s | text=%r", exc, message.text)
