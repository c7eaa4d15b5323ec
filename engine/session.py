"""
session.py — Run Session & Suspension Primitive
================================================
A RunSession is the shared flag set between a page's control surface
(HTTP thread) and the worker thread that drives a runner.

    session.sleep(ms)   ← called by the driver after every published Step

sleep() semantics:
  • paused     → block until resume() or cancel(); each wait is bounded by
                 POLL_INTERVAL so a missed notify costs at most 50 ms
  • unpaused   → wait the full duration, returning early on cancel()
  • cancelled  → return immediately
  It never raises, and nothing it allocates outlives the call.

State machine:
    IDLE → RUNNING → {COMPLETED | CANCELLED | FAILED}
`paused` is an internal flag: while paused the state stays RUNNING.
"""

import threading
import time
from enum import Enum

POLL_INTERVAL = 0.05   # seconds


class RunState(Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED    = "failed"      # the runner raised; logged by the driver


class RunSession:
    """
    Attributes:
        speed_ms : Base delay per step in milliseconds.  Read at each
                   sleep() call, so set_speed() only affects later steps.
        state    : Current RunState.
    """

    def __init__(self, speed_ms: float = 100.0):
        self._cond      = threading.Condition()
        self._paused    = False
        self._cancelled = False
        self.speed_ms   = float(speed_ms)
        self.state      = RunState.IDLE

    # ------------------------------------------------------------------
    # Flags
    # ------------------------------------------------------------------
    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    @property
    def is_running(self) -> bool:
        return self.state is RunState.RUNNING

    # ------------------------------------------------------------------
    # Control (called from the control surface)
    # ------------------------------------------------------------------
    def pause(self) -> None:
        with self._cond:
            self._paused = True

    def resume(self) -> None:
        with self._cond:
            self._paused = False
            self._cond.notify_all()

    def toggle_pause(self) -> bool:
        """Flip the pause flag; returns the new value."""
        with self._cond:
            self._paused = not self._paused
            self._cond.notify_all()
            return self._paused

    def cancel(self) -> None:
        with self._cond:
            self._cancelled = True
            self._cond.notify_all()

    def set_speed(self, speed_ms: float) -> None:
        self.speed_ms = max(0.0, float(speed_ms))

    # ------------------------------------------------------------------
    # Suspension primitive (called from the worker thread)
    # ------------------------------------------------------------------
    def sleep(self, duration_ms: float) -> None:
        with self._cond:
            while self._paused and not self._cancelled:
                self._cond.wait(POLL_INTERVAL)
            if self._cancelled or duration_ms <= 0:
                return
            deadline = time.monotonic() + duration_ms / 1000.0
            while not self._cancelled:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return
                self._cond.wait(remaining)
