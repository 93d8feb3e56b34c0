"""Reply payloads sent back to the group."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Attachment:
    url: str
    type: str = "image"

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type, "url": self.url}


@dataclass(frozen=True, slots=True)
class OutboundMessage:
    text: str
    attachment: Attachment | None = None

    @classmethod
    def with_image(cls, text: str, url: str) -> OutboundMessage:
        return cls(text=text, attachment=Attachment(url=url))

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"text": self.text}
        if self.attachment is not None:
            body["attachments"] = [self.attachment.to_dict()]
        return body
