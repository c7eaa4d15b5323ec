"""
runner.py — Step Driver
=======================
The Runner owns one runner generator and pulls Steps out of it, sleeping
on the RunSession between them.  It is the only code that advances a
run; the page reads `latest` / `history` from other threads.

    gen = info.fn(tracer, dataset, **params)
    outcome = Runner(gen, session, tracer).drive()

Loop, per step:
    cancelled?  →  close the generator, stop
    next(gen)   →  publish the Step (latest + history + on_step)
    session.sleep(speed_ms × step.delay)

Publishing happens under a lock, so a reader never sees a Step that was
already superseded nor two Steps out of order.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generator, List, Optional

from algorithms.step import Step, Tracer
from engine.session import RunSession, RunState

log = logging.getLogger(__name__)


@dataclass
class RunOutcome:
    status:   RunState       = RunState.IDLE
    result:   Any            = None
    counters: Dict[str, int] = field(default_factory=dict)
    steps:    int            = 0
    error:    Optional[str]  = None


class Runner:
    """
    Attributes:
        history     : Every Step published so far (kept only if keep_history).
        latest      : Most recently published Step, or None before the first.
        on_step     : Optional callback(Step) fired after each publish.
    """

    def __init__(
        self,
        generator: Generator[Step, None, Any],
        session: RunSession,
        tracer: Tracer,
        on_step: Optional[Callable[[Step], None]] = None,
        keep_history: bool = False,
        label: str = "",
    ):
        self._gen        = generator
        self.session     = session
        self.tracer      = tracer
        self.on_step     = on_step
        self.label       = label
        self.history:    List[Step]     = []
        self.latest:     Optional[Step] = None
        self._keep       = keep_history
        self._lock       = threading.Lock()

    # ------------------------------------------------------------------
    # Drive
    # ------------------------------------------------------------------
    def drive(self) -> RunOutcome:
        session = self.session
        session.state = RunState.RUNNING
        log.info("run started: %s", self.label or "runner")
        result = None
        try:
            while True:
                if session.is_cancelled:
                    self._gen.close()
                    break
                try:
                    step = next(self._gen)
                except StopIteration as stop:
                    result = stop.value
                    break
                self._publish(step)
                session.sleep(session.speed_ms * step.delay)
        except Exception as exc:
            session.state = RunState.FAILED
            log.exception("run failed: %s", self.label or "runner")
            return self._outcome(RunState.FAILED, None, error=str(exc))

        status = RunState.CANCELLED if session.is_cancelled else RunState.COMPLETED
        session.state = status
        log.info(
            "run %s: %s after %d steps %s",
            status.value, self.label or "runner", self.tracer.step_no, self.tracer.counters,
        )
        return self._outcome(status, result)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    def current_step(self) -> Optional[Step]:
        with self._lock:
            return self.latest

    @property
    def total_steps(self) -> int:
        return self.tracer.step_no

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _publish(self, step: Step) -> None:
        with self._lock:
            self.latest = step
            if self._keep:
                self.history.append(step)
        if self.on_step is not None:
            self.on_step(step)

    def _outcome(self, status: RunState, result: Any, error: Optional[str] = None) -> RunOutcome:
        return RunOutcome(
            status=status,
            result=result,
            counters=dict(self.tracer.counters),
            steps=self.tracer.step_no,
            error=error,
        )
