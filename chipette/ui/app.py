"""Pygame front end: window, key input, tone output and frame pacing."""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence

from chipette.audio import SquareWaveBeeper
from chipette.bus import MemoryError as BusMemoryError
from chipette.cpu import CPUError
from chipette.io import Keypad
from chipette.loader import RomTooLargeError, load_rom_from_path
from chipette.system import (
    DEFAULT_EMULATION_RATE,
    Command,
    FrameScheduler,
    Machine,
    MachineConfig,
    RunState,
    create_machine,
)
from chipette.utils import TraceRecorder, debug_enabled, debug_log
from chipette.video import DEFAULT_PALETTE, FrameBuffer, Renderer, RGBColor


@dataclass
class AppConfig:
    """Configuration for the emulator front end."""

    rom_path: Optional[Path] = None
    scale: int = 12
    emulation_rate: int = DEFAULT_EMULATION_RATE
    debug: bool = False
    palette: Sequence[RGBColor] = DEFAULT_PALETTE
    rng_seed: Optional[int] = None


class Chip8App:
    """Thin wrapper around the pygame event loop."""

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._keypad = Keypad()
        self._renderer = Renderer(config.palette)
        self._beeper: SquareWaveBeeper | None = None
        self._machine: Machine | None = None
        self._scheduler: FrameScheduler | None = None
        self._screen = None
        self._pygame = None
        self._caption = ""
        self._trace_recorder: TraceRecorder | None = None
        if debug_enabled("trace"):
            self._trace_recorder = TraceRecorder(512)

    def run(self) -> None:
        try:
            import pygame  # type: ignore
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        if not self._config.rom_path:
            raise RuntimeError("ROM image is required")
        machine = self._create_machine(self._config.rom_path)
        self._machine = machine

        pygame.mixer.pre_init(44_100, -16, 1, 512)
        pygame.init()
        self._pygame = pygame
        self._initialise_audio(pygame)

        width = machine.framebuffer.width * self._config.scale
        height = machine.framebuffer.height * self._config.scale
        self._screen = pygame.display.set_mode((width, height))
        self._update_caption(machine)

        scheduler = FrameScheduler(
            machine,
            render_sink=self._present,
            audio_sink=self._handle_tone,
            emulation_rate=self._config.emulation_rate,
            trace=self._trace_recorder,
        )
        self._scheduler = scheduler
        if self._config.debug:
            scheduler.handle_command(Command.TOGGLE_DEBUG)
        commands = _control_commands(pygame)

        try:
            while True:
                frame_start = time.perf_counter()
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        scheduler.handle_command(Command.QUIT)
                    elif event.type == pygame.KEYDOWN and event.key in commands:
                        scheduler.handle_command(commands[event.key])
                    elif event.type == pygame.KEYDOWN:
                        self._handle_key_event(pygame, event.key, pressed=True)
                    elif event.type == pygame.KEYUP:
                        self._handle_key_event(pygame, event.key, pressed=False)

                try:
                    alive = scheduler.run_frame(self._keypad.snapshot())
                except (CPUError, BusMemoryError) as exc:
                    self._report_fault(machine, exc)
                    raise RuntimeError(f"Machine fault: {exc}") from exc
                if not alive:
                    break

                self._update_caption(machine)
                elapsed_ms = (time.perf_counter() - frame_start) * 1000.0
                pygame.time.wait(int(scheduler.frame_delay_ms(elapsed_ms)))
        finally:
            if self._beeper is not None:
                self._beeper.shutdown()
            pygame.quit()

    # ------------------------------------------------------------------
    # Sinks

    def _present(self, framebuffer: FrameBuffer) -> None:
        if self._screen is None or self._pygame is None:
            return
        frame = self._renderer.render(framebuffer, scale=self._config.scale)
        self._screen.blit(frame.to_surface(), (0, 0))
        self._pygame.display.flip()

    def _handle_tone(self, enabled: bool) -> None:
        if self._beeper is not None:
            if debug_enabled("audio") and enabled != self._beeper.enabled:
                debug_log("audio", "tone enabled=%s", enabled)
            self._beeper.set_state(enabled)

    # ------------------------------------------------------------------
    # Setup helpers

    def _create_machine(self, rom_path: Path) -> Machine:
        try:
            rom_image = load_rom_from_path(rom_path)
        except FileNotFoundError as exc:
            raise RuntimeError(f"ROM file not found: {rom_path}") from exc
        except RomTooLargeError as exc:
            raise RuntimeError(str(exc)) from exc
        return create_machine(MachineConfig(rom_image=rom_image, rng_seed=self._config.rng_seed))

    def _initialise_audio(self, pygame) -> None:
        if pygame.mixer.get_init() is None:
            try:
                pygame.mixer.init(44_100, -16, 1)
            except pygame.error as exc:  # pragma: no cover - hardware dependent
                if debug_enabled("audio"):
                    debug_log("audio", "mixer_init_failed=%s", exc)

        mixer_state = pygame.mixer.get_init()
        if mixer_state is None:
            if debug_enabled("audio"):
                debug_log("audio", "mixer_unavailable")
            return
        try:
            self._beeper = SquareWaveBeeper(sample_rate=mixer_state[0])
        except RuntimeError as exc:
            self._beeper = None
            if debug_enabled("audio"):
                debug_log("audio", "beeper_init_failed=%s", exc)

    def _handle_key_event(self, pygame, key_code: int, *, pressed: bool) -> None:
        name = pygame.key.name(key_code)
        if debug_enabled("input"):
            debug_log("input", "event=%s pressed=%s", name, pressed)
        if pressed:
            self._keypad.press(name)
        else:
            self._keypad.release(name)

    def _update_caption(self, machine: Machine) -> None:
        caption = window_caption(machine)
        if caption != self._caption and self._pygame is not None:
            self._pygame.display.set_caption(caption)
            self._caption = caption

    def _report_fault(self, machine: Machine, exc: Exception) -> None:
        state = machine.cpu.state
        print(
            f"Machine fault: {exc} (PC={state.pc:04X} I={state.index:04X} SP={state.stack.pointer:02d})"
        )
        if self._trace_recorder is not None:
            self._trace_recorder.dump("trace", limit=32)


def window_caption(machine: Machine) -> str:
    caption = f"Chipette - {machine.display_mode.value}"
    if machine.run_state is RunState.PAUSED:
        caption += " [PAUSED]"
    if machine.debug_enabled:
        caption += " [DEBUG]"
    return caption


def _control_commands(pygame) -> Mapping[int, Command]:
    return {
        pygame.K_ESCAPE: Command.QUIT,
        pygame.K_p: Command.TOGGLE_PAUSE,
        pygame.K_t: Command.RESTART,
        pygame.K_b: Command.TOGGLE_DEBUG,
        pygame.K_TAB: Command.CYCLE_DISPLAY_MODE,
    }
