"""
step.py — Algorithm Step Snapshot
==================================
Every runner is a generator that yields Step objects.
A Step is a frozen-in-time picture of everything a page needs to render
one frame:

    • The dataset snapshot (elements / graph / list / buckets with states)
    • The running counters (comparisons, swaps, visits, …)
    • Which line of pseudocode is executing right now
    • A plain-English explanation of what just happened
    • The delay factor the driver applies before resuming the runner

Design decisions:
  - Step is a plain dataclass (no methods that mutate the dataset).
    It is a SNAPSHOT.  The runner is the only writer; the driver and
    the renderer are pure readers.
  - `overlay` is a free-form dict so different runners can push
    whatever extra info they want (queue contents, pointers, hash trace, …).
  - `delay` is a multiplier of the page speed, not milliseconds, so the
    same run renders identically at any speed.
"""

from dataclasses import dataclass, field
from typing import Dict, Any


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number     : 0-based index of this step in the run.
        data            : Dataset snapshot with per-item states.
        counters        : Running tally at the time of the step.
        pseudocode_line : 0-based index of the pseudocode line executing now.
        explanation     : Human-readable text for the message bar.
        overlay         : Free-form dict for runner-specific overlay data:
                            • "queue" / "stack" – frontier contents (graph)
                            • "distances"       – Dijkstra distance table
                            • "slow" / "fast"   – Floyd pointers
                            • "hash_trace"      – per-character hash values
                            • "range"           – (low, high) search window
        delay           : Multiplier of the page speed for the pause after this step.
        is_final        : True on the very last step of a completed run.
    """

    step_number:      int                          = 0
    data:             Dict[str, Any]               = field(default_factory=dict)
    counters:         Dict[str, int]               = field(default_factory=dict)
    pseudocode_line:  int                          = -1
    explanation:      str                          = ""
    overlay:          Dict[str, Any]               = field(default_factory=dict)
    delay:            float                        = 1.0
    is_final:         bool                         = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step_number":     self.step_number,
            "data":            self.data,
            "counters":        self.counters,
            "pseudocode_line": self.pseudocode_line,
            "explanation":     self.explanation,
            "overlay":         self.overlay,
            "is_final":        self.is_final,
        }


# ---------------------------------------------------------------------------
# Tracer — the handle a runner holds on its own run
# ---------------------------------------------------------------------------
class Tracer:
    """
    Mutable scratch-pad that runners use to count events and build Steps.

    Usage inside a runner generator:
        def my_sort(tr, arr):
            tr.count("comparisons")
            arr.mark(ElementState.COMPARING, j, j + 1)
            yield tr.emit(2, f"Compare {a} and {b}")
            if tr.cancelled:
                return

    The Tracer does not sleep: the driver that pulls Steps out of the
    generator does, between `next()` calls.
    """

    def __init__(self, dataset: Any, session: Any = None, counters=()):
        # session: engine.session.RunSession, or None for a bare generator walk
        self.dataset = dataset
        self.session = session
        self.counters: Dict[str, int] = {name: 0 for name in counters}
        self.step_no: int = 0

    @property
    def cancelled(self) -> bool:
        return self.session is not None and self.session.is_cancelled

    def count(self, name: str, n: int = 1) -> int:
        self.counters[name] = self.counters.get(name, 0) + n
        return self.counters[name]

    def emit(
        self,
        line: int,
        explanation: str = "",
        delay: float = 1.0,
        is_final: bool = False,
        **overlay: Any,
    ) -> Step:
        step = Step(
            step_number=self.step_no,
            data=self.dataset.snapshot(),
            counters=dict(self.counters),
            pseudocode_line=line,
            explanation=explanation,
            overlay=overlay,
            delay=delay,
            is_final=is_final,
        )
        self.step_no += 1
        return step
