"""Registry of module-level singletons that tests need to rebuild."""

from __future__ import annotations

from collections.abc import Callable

_reset_fns: list[Callable[[], None]] = []


def register_singleton(reset_fn: Callable[[], None]) -> None:
    """Remember *reset_fn* so :func:`reset_all_singletons` can call it."""
    if reset_fn not in _reset_fns:
        _reset_fns.append(reset_fn)


def reset_all_singletons() -> None:
    """Rebuild every registered singleton, e.g. ``cfg`` after env changes."""
    for fn in list(_reset_fns):
        fn()
