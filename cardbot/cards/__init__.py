"""Scryfall card records and artwork selection."""

from .artwork import select_artwork, select_image_uri
from .models import Card, CardFace, CardParseError, ImageUris

__all__ = [
    "Card",
    "CardFace",
    "CardParseError",
    "ImageUris",
    "select_artwork",
    "select_image_uri",
]
