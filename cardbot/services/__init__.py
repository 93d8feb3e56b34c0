"""HTTP clients for Scryfall and GroupMe."""

from .groupme import GroupMeClient
from .scryfall import ScryfallClient

__all__ = ["GroupMeClient", "ScryfallClient"]
