"""Lightweight debug logging helpers for the Chipette emulator."""

from __future__ import annotations

import os
from typing import Iterable

_CATEGORIES: set[str] | None = None
_OVERRIDES: set[str] = set()


def _load_categories() -> set[str]:
    global _CATEGORIES
    if _CATEGORIES is not None:
        return _CATEGORIES
    value = os.environ.get("CHIPETTE_DEBUG", "")
    if not value:
        _CATEGORIES = set()
        return _CATEGORIES
    parts: Iterable[str] = (part.strip().lower() for part in value.split(","))
    _CATEGORIES = {part for part in parts if part}
    return _CATEGORIES


def reset_categories() -> None:
    """Forget cached categories and runtime overrides (re-reads the environment)."""

    global _CATEGORIES
    _CATEGORIES = None
    _OVERRIDES.clear()


def set_category(category: str, enabled: bool) -> None:
    """Force a category on or off at runtime, independent of ``CHIPETTE_DEBUG``."""

    if enabled:
        _OVERRIDES.add(category.lower())
    else:
        _OVERRIDES.discard(category.lower())


def debug_enabled(category: str | None = None) -> bool:
    categories = _load_categories() | _OVERRIDES
    if not categories:
        return False
    if "all" in categories:
        return True
    if category is None:
        return True
    return category.lower() in categories


def debug_log(category: str, message: str, *args) -> None:
    if not debug_enabled(category):
        return
    prefix = f"[CHIPETTE][{category}]"
    if args:
        try:
            message = message % args
        except (TypeError, ValueError):
            message = f"{message} {args!r}"
    print(f"{prefix} {message}")


def info_log(message: str, *args) -> None:
    """Print a status line that is shown regardless of debug categories."""

    if args:
        message = message % args
    print(message)
