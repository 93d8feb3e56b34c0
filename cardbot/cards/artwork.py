"""Pick which artwork to upload for a card."""

from __future__ import annotations

import logging

from .models import Card, ImageUris

logger = logging.getLogger(__name__)


def select_image_uri(uris: ImageUris) -> str | None:
    """Return the normal, large or small URI, whichever is present first."""
    return uris.normal or uris.large or uris.small


def select_artwork(card: Card, face_name: str) -> ImageUris | None:
    """Return the artwork set for the face the user asked for.

    *face_name* is the raw reference text.  A face matches when its name
    contains it, ignoring case.  When nothing matches, the front face is
    used so that a fuzzy lookup still shows something.
    """
    if not card.is_multiface and card.image_uris:
        logger.debug("[artwork] Using single face art for '%s'", card.name)
        return card.image_uris

    if not card.is_multiface:
        logger.error("[artwork] '%s' has neither faces nor artwork", card.name)
        return None

    needle = face_name.lower()
    face = next((f for f in card.card_faces if needle in f.name.lower()), None)
    if face is not None and face.image_uris:
        return face.image_uris

    front = card.card_faces[0]
    if front.image_uris:
        logger.warning(
            "[artwork] Couldn't find card face with name: '%s'. Showing front face",
            face_name,
        )
        return front.image_uris

    logger.error("[artwork] Face of '%s' doesn't have an image associated with it", card.name)
    return None
