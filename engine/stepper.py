"""
stepper.py — Step-by-Step Playback Engine
==========================================
The Stepper walks an index over a finished trace, from -1 (nothing shown
yet) to len-1 (last step).  It never runs an operation itself: traces are
recorded in full before they reach it, so rewinding is just moving the
index and asking replay for the overlay.

State machine:
    IDLE    →  load(steps)  →  PAUSED
    PAUSED  →  play()       →  PLAYING
    PLAYING →  pause()      →  PAUSED
    PLAYING →  (last step reached) → FINISHED
    PAUSED  →  (stepped or jumped onto the last step) → FINISHED
    FINISHED → (stepped back)  →  PAUSED
    any     →  reset()      →  IDLE

Timing is a logical timer.  play() schedules ONE pending advance at
``now + speed``; tick(now) performs at most one advance when that deadline
has passed and schedules the next.  pause(), stepping, jumping and load()
drop the pending advance, so no tick fires after any of them until play()
is called again.  The clock is injectable for tests.

Thread safety:
  This class is NOT thread-safe.  Drive it from a single thread.
"""

import time
from enum import Enum
from typing import Callable, Optional, Sequence, Tuple

from engine.replay import Overlay, reconstruct
from steps import Step


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (seconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1.0,
    "medium": 0.5,
    "fast":   0.2,
}

MIN_SPEED = 0.02


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state       : Current StepperState.
        steps       : The loaded trace.
        current_idx : Index into `steps` that is currently displayed (-1 = before the first).
        speed       : Seconds between auto-advance ticks.
        on_step     : Optional callback(Step) fired every time a step becomes current.
                      Narration hooks in here.
    """

    def __init__(
        self,
        on_step: Optional[Callable[[Step], None]] = None,
        speed: float = SPEED_PRESETS["medium"],
        clock: Callable[[], float] = time.monotonic,
    ):
        self.steps:       Tuple[Step, ...] = ()
        self.current_idx: int              = -1
        self.state:       StepperState     = StepperState.IDLE
        self.speed:       float            = speed
        self.on_step:     Optional[Callable[[Step], None]] = on_step

        self._clock:    Callable[[], float] = clock
        self._deadline: Optional[float]     = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, steps: Sequence[Step]) -> None:
        """Attach a recorded trace and park before its first step."""
        self.steps       = tuple(steps)
        self.current_idx = -1
        self.state       = StepperState.PAUSED if self.steps else StepperState.IDLE
        self._deadline   = None

    def reset(self) -> None:
        """Back to IDLE with no trace."""
        self.load(())

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Advance one step forward.  Returns False if already at the end."""
        self._stop()
        if self.is_at_end:
            return False
        self._goto(self.current_idx + 1)
        return True

    def prev_step(self) -> bool:
        """Step back one.  Returns False if already before the first step."""
        self._stop()
        if self.current_idx < 0:
            return False
        self._goto(self.current_idx - 1)
        return True

    def goto_step(self, idx: int) -> None:
        """Jump to `idx` in -1 … len-1.  Raises IndexError outside that range."""
        if not -1 <= idx < len(self.steps):
            raise IndexError(f"step index {idx} out of range for a trace of {len(self.steps)} steps")
        self._stop()
        self._goto(idx)

    def rewind(self) -> None:
        self._stop()
        self._goto(-1)

    def jump_to_end(self) -> None:
        self._stop()
        if self.steps:
            self._goto(len(self.steps) - 1)

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self, now: Optional[float] = None) -> bool:
        """Start auto-advancing.  Returns False when there is nothing left to play."""
        if not self.steps or self.is_at_end:
            return False
        self.state     = StepperState.PLAYING
        self._deadline = self._now(now) + self.speed
        return True

    def pause(self) -> None:
        if self.state == StepperState.PLAYING:
            self.state = StepperState.PAUSED
        self._deadline = None

    def toggle_play(self, now: Optional[float] = None) -> None:
        if self.state == StepperState.PLAYING:
            self.pause()
        else:
            self.play(now)

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> bool:
        """
        Call periodically.  If playing and the pending deadline has passed,
        advances exactly one step and schedules the next.  Returns True if
        a step was taken.
        """
        if self.state != StepperState.PLAYING or self._deadline is None:
            return False
        now = self._now(now)
        if now < self._deadline:
            return False

        self._goto(self.current_idx + 1)
        if not self.is_at_end:
            self._deadline = now + self.speed
        return True

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        if preset not in SPEED_PRESETS:
            raise ValueError(f"Unknown speed preset {preset!r}; expected one of {sorted(SPEED_PRESETS)}")
        self.speed = SPEED_PRESETS[preset]

    def set_speed_value(self, seconds: float) -> None:
        self.speed = max(MIN_SPEED, seconds)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_step(self) -> Optional[Step]:
        if 0 <= self.current_idx < len(self.steps):
            return self.steps[self.current_idx]
        return None

    @property
    def overlay(self) -> Overlay:
        return reconstruct(self.steps, self.current_idx)

    @property
    def has_pending_advance(self) -> bool:
        return self._deadline is not None

    @property
    def is_at_end(self) -> bool:
        return self.current_idx >= len(self.steps) - 1

    @property
    def is_finished(self) -> bool:
        return self.state == StepperState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state == StepperState.PLAYING

    def to_dict(self) -> dict:
        return {
            "state":       self.state.value,
            "index":       self.current_idx,
            "total_steps": len(self.steps),
            "speed":       self.speed,
            "overlay":     self.overlay.to_dict(),
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _now(self, now: Optional[float]) -> float:
        return self._clock() if now is None else now

    def _stop(self) -> None:
        """Cancel auto-play; a manual move leaves the stepper paused (finished on the last step)."""
        self._deadline = None
        if self.steps:
            self.state = StepperState.FINISHED if self.is_at_end else StepperState.PAUSED

    def _goto(self, idx: int) -> None:
        self.current_idx = idx
        if self.steps and self.is_at_end:
            self.state     = StepperState.FINISHED
            self._deadline = None
        elif self.state == StepperState.FINISHED:
            self.state = StepperState.PAUSED
        self._notify(self.current_step)

    def _notify(self, step: Optional[Step]) -> None:
        if self.on_step and step is not None:
            self.on_step(step)
