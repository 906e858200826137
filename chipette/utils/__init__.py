"""Utility helpers for the Chipette emulator."""

from .debug import debug_enabled, debug_log, info_log, reset_categories, set_category
from .trace import TraceEntry, TraceRecorder

__all__ = [
    "debug_enabled",
    "debug_log",
    "info_log",
    "reset_categories",
    "set_category",
    "TraceEntry",
    "TraceRecorder",
]
