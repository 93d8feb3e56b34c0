"""Scryfall card lookup client."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import aiohttp
from yarl import URL

from ..cards.models import Card
from ..config.settings import SCRYFALL_API_URL
from ..util.result import Result

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves alone besides alphanumerics.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_name(name: str) -> str:
    return quote(name, safe=_URI_COMPONENT_SAFE)


def _error_details(body: Any) -> str:
    details = body.get("details") if isinstance(body, dict) else None
    return details if isinstance(details, str) and details else "unknown error"


class ScryfallClient:
    """Fuzzy-name lookups against ``/cards/named``.

    Every outcome comes back as a :class:`Result`.  A failed result's
    ``error`` is ready to post to the chat; nothing here raises for an
    HTTP or transport problem.
    """

    def __init__(self, session: aiohttp.ClientSession, base_url: str = SCRYFALL_API_URL) -> None:
        self._session = session
        self._base_url = base_url.rstrip("/")

    def named_url(self, name: str) -> URL:
        return URL(f"{self._base_url}/cards/named?fuzzy={encode_name(name)}", encoded=True)

    async def fetch_card(self, name: str) -> Result[Card]:
        logger.info("[scryfall] Getting: %s", name)
        try:
            async with self._session.get(self.named_url(name)) as resp:
                logger.debug("[scryfall] Got fetch response: status=%s", resp.status)
                body = await resp.json(content_type=None)
                status = resp.status
            if status >= 400:
                text = f"Scryfall request failed: {_error_details(body)}"
                logger.error("[scryfall] %s (status=%s name=%r)", text, status, name)
                return Result.fail(text)
            card = Card.from_dict(body)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
            logger.error("[scryfall] Lookup for %r failed: %s", name, exc, exc_info=True)
            return Result.fail(f"Errored trying to fetch {name} from Scryfall")

        logger.info("[scryfall] Successfully retrieved card: %s", card.name)
        return Result.ok(card)
