"""Find ``[[card name]]`` references in chat text."""

from __future__ import annotations

import re

_REFERENCE_RE = re.compile(r"\[\[([^\[\]]+)\]\]")


def extract_references(text: str) -> list[str]:
    """Return every bracketed reference in order of appearance.

    Duplicates are kept; each one produces its own reply.

    >>> extract_references("[[Lightning Bolt]] and [[Counterspell]]")
    ['Lightning Bolt', 'Counterspell']
    """
    if not text:
        return []
    return _REFERENCE_RE.findall(text)
