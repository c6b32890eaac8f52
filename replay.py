"""
Replay controller for a precomputed simulation trace.

The controller owns the cursor and playback state for one loaded trace.
The trace itself is never modified; stepping forward or backward only
moves the cursor, so scrubbing needs no recomputation.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from engine import StepRecord, describe_step, get_stats
from utils import SPEED_DEFAULT, SPEED_MAX, SPEED_MIN


class ReplayController:
    """
    Cursor over an immutable trace.

    Attributes:
        trace (Tuple[StepRecord, ...]): The loaded trace
        policy (Optional[str]): Policy that produced the trace
        current_step (int): Index of the displayed step, -1 before the first
        playing (bool): True while auto-advancing
        speed_ms (int): Delay between auto-advanced steps in milliseconds
        status (str): Status line for the UI
    """

    def __init__(self):
        self.trace: Tuple[StepRecord, ...] = ()
        self.policy: Optional[str] = None
        self.current_step = -1
        self.playing = False
        self.speed_ms = self._delay_for(SPEED_DEFAULT)
        self.status = "CONFIGURE PARAMETERS // EXECUTE TO START"

    # =========================================================================
    # LOADING
    # =========================================================================

    def load(self, trace: Sequence[StepRecord], policy: str):
        """Replace the current trace and rewind to before the first step."""
        self.trace = tuple(trace)
        self.policy = policy
        self.current_step = -1
        self.playing = False
        self.status = f"SIMULATION_READY // {policy} // AWAITING COMMAND"

    @property
    def loaded(self) -> bool:
        return len(self.trace) > 0

    # =========================================================================
    # NAVIGATION
    # =========================================================================

    def step(self, direction: int):
        """
        Move the cursor by `direction` (+1 forward, -1 backward).

        Stepping past the last record clamps to it and stops playback;
        stepping back before the start clamps to -1.
        """
        if not self.loaded:
            return

        new_step = self.current_step + direction
        if new_step >= len(self.trace):
            self.current_step = len(self.trace) - 1
            self.pause()
            self.status = "SIMULATION_COMPLETE // LOGS_FINALIZED"
            return
        if new_step < -1:
            new_step = -1

        self.current_step = new_step
        record = self.current_record
        if record is not None:
            self.status = describe_step(record)

    def play(self):
        if not self.loaded:
            return
        if self.at_end:
            self.current_step = -1
        self.playing = True

    def pause(self):
        self.playing = False

    def toggle(self):
        if self.playing:
            self.pause()
        else:
            self.play()

    def advance(self):
        """One auto-play tick: step forward, stop once the end is reached."""
        self.step(1)
        if self.at_end:
            self.pause()

    @staticmethod
    def _delay_for(value: int) -> int:
        value = max(SPEED_MIN, min(SPEED_MAX, int(value)))
        return SPEED_MAX - value + SPEED_MIN

    def set_speed(self, value: int):
        """Map the speed slider value to a step delay (higher is faster)."""
        self.speed_ms = self._delay_for(value)

    # =========================================================================
    # STATE QUERIES
    # =========================================================================

    @property
    def at_start(self) -> bool:
        return self.current_step <= -1

    @property
    def at_end(self) -> bool:
        return self.current_step >= len(self.trace) - 1

    @property
    def can_step_back(self) -> bool:
        return self.loaded and not self.at_start

    @property
    def can_step_forward(self) -> bool:
        return self.loaded and not self.at_end

    @property
    def can_play(self) -> bool:
        return self.loaded and not self.at_end

    @property
    def current_record(self) -> Optional[StepRecord]:
        if self.current_step < 0 or not self.loaded:
            return None
        return self.trace[self.current_step]

    def stats(self) -> Dict[str, float]:
        return get_stats(self.trace, self.current_step)

    def event_log(self) -> List[str]:
        """Event lines for every replayed step, oldest first."""
        return [describe_step(r) for r in self.trace[:self.current_step + 1]]

    def export_name(self) -> str:
        return f"OS_SIMULATION_{self.policy}_STEP{self.current_step + 1}"
