"""Pygame front end for the Chipette emulator."""

from .app import AppConfig, Chip8App, window_caption

__all__ = [
    "AppConfig",
    "Chip8App",
    "window_caption",
]
