"""Chipette system assembly helpers."""

from __future__ import annotations

from .machine import DisplayMode, Machine, MachineConfig, RunState, create_machine
from .scheduler import (
    DEFAULT_EMULATION_RATE,
    FRAME_RATE,
    Command,
    FrameReport,
    FrameScheduler,
    tick_timers,
)

__all__ = [
    "MachineConfig",
    "Machine",
    "RunState",
    "DisplayMode",
    "create_machine",
    "Command",
    "FrameReport",
    "FrameScheduler",
    "tick_timers",
    "DEFAULT_EMULATION_RATE",
    "FRAME_RATE",
]
