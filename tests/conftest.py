from __future__ import annotations

from typing import Callable

import pytest

from chipette.system import Machine, MachineConfig, create_machine
from chipette.utils import reset_categories


@pytest.fixture(autouse=True)
def _isolate_debug_categories(monkeypatch):
    monkeypatch.delenv("CHIPETTE_DEBUG", raising=False)
    reset_categories()
    yield
    reset_categories()


@pytest.fixture
def make_machine() -> Callable[..., Machine]:
    """Build machines from hand-assembled big-endian instruction words."""

    def build(*words: int, strict: bool = False, rng_seed: int | None = 1234) -> Machine:
        program = b"".join(word.to_bytes(2, "big") for word in words)
        return create_machine(
            MachineConfig(rom_image=program, rng_seed=rng_seed, strict_illegal=strict)
        )

    return build
