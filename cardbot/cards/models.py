"""Typed views over Scryfall card payloads.

Only the fields the bot reads are modelled.  ``from_dict`` validates the
required ones and ignores everything else Scryfall sends.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class CardParseError(ValueError):
    """Raised when a Scryfall payload does not look like a card."""


def _require_str(data: dict[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise CardParseError(f"{where}: missing or non-string '{key}'")
    return value


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    return value if isinstance(value, str) and value else None


@dataclass(frozen=True, slots=True)
class ImageUris:
    small: str | None = None
    normal: str | None = None
    large: str | None = None

    @classmethod
    def from_dict(cls, data: Any, where: str = "image_uris") -> ImageUris | None:
        if data is None:
            return None
        if not isinstance(data, dict):
            raise CardParseError(f"{where}: expected an object, got {type(data).__name__}")
        return cls(
            small=_optional_str(data, "small"),
            normal=_optional_str(data, "normal"),
            large=_optional_str(data, "large"),
        )


@dataclass(frozen=True, slots=True)
class CardFace:
    name: str
    image_uris: ImageUris | None = None

    @classmethod
    def from_dict(cls, data: Any, index: int = 0) -> CardFace:
        where = f"card_faces[{index}]"
        if not isinstance(data, dict):
            raise CardParseError(f"{where}: expected an object")
        return cls(
            name=_require_str(data, "name", where),
            image_uris=ImageUris.from_dict(data.get("image_uris"), f"{where}.image_uris"),
        )


@dataclass(frozen=True, slots=True)
class Card:
    """A card as returned by ``/cards/named``.

    Multi-faced cards (transform, modal DFC, split, flip) carry their faces
    in *card_faces*; some layouts put artwork on each face, others keep a
    single top-level *image_uris*.
    """

    name: str
    scryfall_uri: str
    image_uris: ImageUris | None = None
    card_faces: tuple[CardFace, ...] = ()

    @property
    def is_multiface(self) -> bool:
        return bool(self.card_faces)

    @classmethod
    def from_dict(cls, data: Any) -> Card:
        if not isinstance(data, dict):
            raise CardParseError(f"card: expected an object, got {type(data).__name__}")
        raw_faces = data.get("card_faces") or []
        if not isinstance(raw_faces, list):
            raise CardParseError("card: 'card_faces' is not a list")
        return cls(
            name=_require_str(data, "name", "card"),
            scryfall_uri=_require_str(data, "scryfall_uri", "card"),
            image_uris=ImageUris.from_dict(data.get("image_uris")),
            card_faces=tuple(CardFace.from_dict(f, i) for i, f in enumerate(raw_faces)),
        )
