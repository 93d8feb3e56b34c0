"""Chat messaging pipeline -- reference parsing, replies, and the bot handler."""

__all__ = [
    "Attachment",
    "CardBot",
    "OutboundMessage",
    "extract_references",
]
