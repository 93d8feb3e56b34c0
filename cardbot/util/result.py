"""Outcome of one pipeline step for a single card reference."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """Either a *value* or a chat-ready *error* line, never both.

    A failed step is reported to the group with ``error`` verbatim, so the
    text is what users read::

        lookup = await scryfall.fetch_card("Zzyzx")
        if not lookup:
            await reply(lookup.error)   # "Scryfall request failed: ..."
    """

    value: T | None = None
    error: str = ""

    @classmethod
    def ok(cls, value: T) -> Result[T]:
        return cls(value=value)

    @classmethod
    def fail(cls, error: str) -> Result[T]:
        if not error:
            raise ValueError("a failed result needs a message for the chat")
        return cls(error=error)

    def __bool__(self) -> bool:
        return not self.error
