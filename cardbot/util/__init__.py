"""Shared utilities."""

from .result import Result
from .singletons import register_singleton, reset_all_singletons

__all__ = [
    "Result",
    "register_singleton",
    "reset_all_singletons",
]
