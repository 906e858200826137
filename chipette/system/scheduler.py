"""Frame pacing: instruction batches, timers and front-end control commands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional, Sequence

from chipette.cpu import CPUState
from chipette.utils import TraceRecorder, debug_enabled, debug_log, info_log, set_category
from chipette.video import FrameBuffer

from .machine import Machine, RunState

RenderSink = Callable[[FrameBuffer], None]
AudioSink = Callable[[bool], None]

DEFAULT_EMULATION_RATE = 600
DEBUG_EMULATION_RATE = 1
FRAME_RATE = 60
FRAME_TIME_MS = 1000.0 / FRAME_RATE
DEBUG_FRAME_DELAY_MS = 1000.0


class Command(Enum):
    """Discrete control events produced by the input source."""

    QUIT = auto()
    TOGGLE_PAUSE = auto()
    RESTART = auto()
    TOGGLE_DEBUG = auto()
    CYCLE_DISPLAY_MODE = auto()


@dataclass
class FrameReport:
    """Summary of the most recent :meth:`FrameScheduler.run_frame` call."""

    executed: int = 0
    stopped_on_display: bool = False
    rendered: bool = False
    tone: bool = False


def tick_timers(state: CPUState) -> bool:
    """Decrement the delay and sound timers once; return whether the tone is on.

    The tone follows the sound timer as it stood before this tick, so a timer
    set to N sounds for N frames.
    """

    tone = state.sound_timer > 0
    if state.delay_timer > 0:
        state.delay_timer -= 1
    if state.sound_timer > 0:
        state.sound_timer -= 1
    return tone


class FrameScheduler:
    """Drive the machine one frame at a time.

    A running frame loads the keypad sample, executes up to ``batch_size``
    instructions (stopping right after the first one that touches the
    display), hands a dirty framebuffer to the render sink, ticks the timers
    and reports the tone state to the audio sink. A paused frame only renders.
    """

    def __init__(
        self,
        machine: Machine,
        *,
        render_sink: Optional[RenderSink] = None,
        audio_sink: Optional[AudioSink] = None,
        emulation_rate: int = DEFAULT_EMULATION_RATE,
        trace: TraceRecorder | None = None,
    ) -> None:
        if emulation_rate <= 0:
            raise ValueError("emulation_rate must be positive")
        self.machine = machine
        self.emulation_rate = emulation_rate
        self._render_sink = render_sink
        self._audio_sink = audio_sink
        self._trace = trace
        self.frame_count = 0
        self.last_report = FrameReport()

    @property
    def batch_size(self) -> int:
        return DEBUG_EMULATION_RATE if self.machine.debug_enabled else self.emulation_rate

    def run_frame(self, keys: Sequence[bool] | None = None) -> bool:
        """Run a single frame; return False once the machine has halted."""

        machine = self.machine
        if keys is not None:
            machine.keypad.load(keys)

        if machine.halted:
            return False

        report = FrameReport()
        self.last_report = report
        if machine.run_state is RunState.PAUSED:
            self._render()
            report.rendered = True
            return True

        report.executed, report.stopped_on_display = self._run_batch()
        if machine.framebuffer.dirty:
            self._render()
            report.rendered = True
        machine.framebuffer.dirty = False

        report.tone = tick_timers(machine.cpu.state)
        if self._audio_sink is not None:
            self._audio_sink(report.tone)

        self.frame_count += 1
        if debug_enabled("frame"):
            debug_log(
                "frame",
                "frame=%d executed=%d total=%d display_stop=%s DT=%d ST=%d",
                self.frame_count,
                report.executed,
                machine.cpu.instruction_count,
                report.stopped_on_display,
                machine.cpu.state.delay_timer,
                machine.cpu.state.sound_timer,
            )
        return True

    def frame_delay_ms(self, elapsed_ms: float = 0.0) -> float:
        """Pause to apply after a frame that took ``elapsed_ms`` to run."""

        if self.machine.debug_enabled and self.machine.run_state is RunState.RUNNING:
            return DEBUG_FRAME_DELAY_MS
        return max(0.0, FRAME_TIME_MS - elapsed_ms)

    def handle_command(self, command: Command) -> None:
        machine = self.machine
        if command is Command.QUIT:
            machine.run_state = RunState.HALTED
            self._silence()
        elif command is Command.TOGGLE_PAUSE:
            if machine.run_state is RunState.RUNNING:
                machine.run_state = RunState.PAUSED
                self._silence()
                info_log("PAUSED")
            elif machine.run_state is RunState.PAUSED:
                machine.run_state = RunState.RUNNING
                info_log("UNPAUSED")
        elif command is Command.RESTART:
            machine.restart()
            self._silence()
            info_log("RESTARTED")
        elif command is Command.TOGGLE_DEBUG:
            machine.debug_enabled = not machine.debug_enabled
            set_category("cpu", machine.debug_enabled)
            info_log("DEBUG MODE %s", "ACTIVATED" if machine.debug_enabled else "DEACTIVATED")
        elif command is Command.CYCLE_DISPLAY_MODE:
            machine.display_mode = machine.display_mode.next()
            info_log("CHIP MODE: %s", machine.display_mode.value)

    # ------------------------------------------------------------------
    # Internals

    def _run_batch(self) -> tuple[int, bool]:
        cpu = self.machine.cpu
        trace = self._trace
        executed = 0
        for _ in range(self.batch_size):
            state_before = cpu.state.clone() if trace is not None else None
            instruction = cpu.step()
            executed += 1
            if trace is not None and state_before is not None:
                trace.record_step(
                    state_before,
                    instruction.opcode,
                    mnemonic=instruction.mnemonic,
                )
            if instruction.affects_display:
                return executed, True
        return executed, False

    def _render(self) -> None:
        if self._render_sink is not None:
            self._render_sink(self.machine.framebuffer)

    def _silence(self) -> None:
        if self._audio_sink is not None:
            self._audio_sink(False)
