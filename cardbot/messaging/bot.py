"""Turns ``[[card name]]`` references into card image replies.

References are handled one after another so replies land in the chat in
the same order the user wrote them.  Every failure is reported once as a
chat message and only ends the pipeline for that one reference.
"""

from __future__ import annotations

import logging

from ..cards.artwork import select_artwork, select_image_uri
from ..cards.models import Card
from ..services.groupme import GroupMeClient
from ..services.scryfall import ScryfallClient
from ..util.result import Result
from .outbound import OutboundMessage
from .references import extract_references

logger = logging.getLogger(__name__)


class CardBot:
    def __init__(self, scryfall: ScryfallClient, groupme: GroupMeClient) -> None:
        self._scryfall = scryfall
        self._groupme = groupme

    async def handle(self, message: str) -> None:
        references = extract_references(message)
        if not references:
            return

        logger.info("[bot] Handling %d reference(s): %s", len(references), references)
        for name in references:
            lookup = await self._scryfall.fetch_card(name)
            if not lookup:
                await self._reply(lookup.error)
                continue
            await self._post_card_details(lookup.value, name)

        logger.info("[bot] Finished handling message")

    async def _post_card_details(self, card: Card, face_name: str) -> None:
        logger.info("[bot] Uploading art for %s", face_name)
        upload = await self._upload_card_art(card, face_name)
        if not upload:
            await self._reply(upload.error)
            return

        logger.info("[bot] Posting %s to chat", face_name)
        await self._groupme.post_message(
            OutboundMessage.with_image(card.scryfall_uri, upload.value)
        )
        logger.info("[bot] Done posting %s details", face_name)

    async def _upload_card_art(self, card: Card, face_name: str) -> Result[str]:
        artwork = select_artwork(card, face_name)
        image_uri = select_image_uri(artwork) if artwork else None
        if not image_uri:
            return Result.fail(f"Couldn't find an image for {face_name}")

        try:
            url = await self._groupme.upload_image(image_uri)
        except Exception:
            logger.exception("[bot] Upload of %s art from %s failed", face_name, image_uri)
            return Result.fail(f"Errored trying to upload {face_name} image to groupme")

        if not url:
            return Result.fail(f"Didn't get URL for uploaded image of {face_name}")
        return Result.ok(url)

    async def _reply(self, text: str) -> None:
        await self._groupme.post_message(OutboundMessage(text=text))
