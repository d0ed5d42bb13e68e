"""
stepper.py — Step-by-Step Playback
==================================
The Stepper is the cursor a viewer moves through a finished Trace.
It never touches the Steps themselves; it only tracks which one is
on screen and clamps at both ends, like Previous / Next buttons that
grey out at the first and last step.

State machine:
    IDLE      →  load()     →  READY
    READY     →  (cursor reaches last step)  →  FINISHED
    FINISHED  →  prev_step() / goto_step() / rewind()  →  READY
    any       →  reset()    →  IDLE

Thread safety:
  This class is NOT thread-safe.  The HTTP layer builds a fresh Stepper
  per request, so it never shares one.
"""

from enum import Enum
from typing import Callable, Optional

from algorithms import Step, Trace


class StepperState(Enum):
    IDLE     = "idle"
    READY    = "ready"
    FINISHED = "finished"


class Stepper:
    """
    Attributes:
        state       : Current StepperState.
        trace       : The Trace being played back (None while IDLE).
        current_idx : Index into `trace` that is currently displayed.
        on_step     : Optional callback(Step) fired every time the current
                      step changes.  A viewer hooks its re-render here.
    """

    def __init__(
        self,
        trace: Optional[Trace] = None,
        on_step: Optional[Callable[[Step], None]] = None,
    ):
        self.trace:       Optional[Trace] = None
        self.current_idx: int            = -1
        self.state:       StepperState   = StepperState.IDLE
        self.on_step:     Optional[Callable[[Step], None]] = on_step
        if trace is not None:
            self.load(trace)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, trace: Trace, index: int = 0) -> None:
        """Attach a trace and show step `index` (clamped into range)."""
        self.trace = trace
        self._goto(max(0, min(index, len(trace) - 1)))

    def reset(self) -> None:
        """Back to IDLE — caller must call load() again."""
        self.trace       = None
        self.current_idx = -1
        self.state       = StepperState.IDLE

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Advance one step.  Returns False if already at the end."""
        if self.trace is None or self.at_end:
            return False
        self._goto(self.current_idx + 1)
        return True

    def prev_step(self) -> bool:
        """Rewind one step.  Returns False if already at the start."""
        if self.trace is None or self.at_start:
            return False
        self._goto(self.current_idx - 1)
        return True

    def goto_step(self, idx: int) -> bool:
        """Jump to an arbitrary step.  Out-of-range indexes are refused."""
        if self.trace is None or not (0 <= idx < len(self.trace)):
            return False
        self._goto(idx)
        return True

    def rewind(self) -> None:
        if self.trace is not None:
            self._goto(0)

    def jump_to_end(self) -> None:
        if self.trace is not None:
            self._goto(len(self.trace) - 1)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_step(self) -> Optional[Step]:
        if self.trace is not None and 0 <= self.current_idx < len(self.trace):
            return self.trace[self.current_idx]
        return None

    @property
    def total_steps(self) -> int:
        return len(self.trace) if self.trace is not None else 0

    @property
    def at_start(self) -> bool:
        return self.current_idx <= 0

    @property
    def at_end(self) -> bool:
        return self.current_idx >= self.total_steps - 1

    @property
    def is_finished(self) -> bool:
        return self.state == StepperState.FINISHED

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _goto(self, idx: int) -> None:
        self.current_idx = idx
        self.state = StepperState.FINISHED if self.at_end else StepperState.READY
        step = self.current_step
        if self.on_step and step is not None:
            self.on_step(step)
