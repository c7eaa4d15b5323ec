"""
recorder.py — Full-Speed Runs & Comparison
==========================================
Runs an algorithm to completion without any delay (speed 0), keeps
every Step, then computes the metrics the stats panel and the sorting
comparison need.

Usage:
    rec = Recorder()
    rec.start("quick", make_array(25))
    metrics = rec.run_to_completion()
    rec.export()                     # serialisable snapshot for replay

Comparison Mode:
    The sorting page holds two Recorders (one per algorithm), runs both
    on copies of the SAME array, then calls compare(rec1, rec2).
"""

import time
from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Any

from algorithms import get_algorithm, AlgoInfo
from algorithms.step import Step, Tracer
from engine.errors import InvalidParameterError
from engine.runner import Runner, RunOutcome
from engine.session import RunSession


# ---------------------------------------------------------------------------
# Metrics dataclass — what the stats panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:      str            = ""
    algo_label:    str            = ""
    counters:      Dict[str, int] = field(default_factory=dict)
    total_steps:   int            = 0          # number of Steps yielded
    wall_time_ms:  float          = 0.0        # wall-clock time to run to completion
    status:        str            = ""
    result:        Dict[str, Any] = field(default_factory=dict)

    def get(self, counter: str) -> int:
        return self.counters.get(counter, 0)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_comparisons: str = ""   # which algo compared less
    winner_swaps:       str = ""
    winner_steps:       str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps   : Full list of Steps from the run.
        metrics : Computed RunMetrics (available after run_to_completion).
        outcome : RunOutcome from the driver.
    """

    def __init__(self):
        self.steps:    List[Step]           = []
        self.metrics:  Optional[RunMetrics] = None
        self.outcome:  Optional[RunOutcome] = None
        self.runner:   Optional[Runner]     = None

        self._algo_info: Optional[AlgoInfo] = None
        self._dataset:   Any                = None
        self._params:    Dict[str, Any]     = {}

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algo_key: str, dataset: Any, **params: Any) -> None:
        """Build the generator and driver for this run."""
        info = get_algorithm(algo_key)
        if info is None:
            raise InvalidParameterError(f"Unknown algorithm: {algo_key}")

        self._algo_info = info
        self._dataset   = dataset
        self._params    = params
        self.steps      = []
        self.metrics    = None
        self.outcome    = None

        tracer = Tracer(dataset, RunSession(speed_ms=0), info.counters)
        gen = info.fn(tracer, dataset, **params)
        self.runner = Runner(gen, tracer.session, tracer, keep_history=True, label=info.key)

    def run_to_completion(self) -> RunMetrics:
        """Exhaust the generator, record every step, compute metrics."""
        if self.runner is None:
            raise RuntimeError("Call start() first.")

        t0 = time.monotonic()
        self.outcome = self.runner.drive()
        wall_ms = (time.monotonic() - t0) * 1000

        self.steps = list(self.runner.history)
        self.metrics = self._compute_metrics(wall_ms)
        return self.metrics

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self._algo_info.key if self._algo_info else "",
            "params":   dict(self._params),
            "metrics":  self.metrics.to_dict() if self.metrics else {},
            "steps":    [s.to_dict() for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        outcome = self.outcome
        result = outcome.result if outcome else None
        return RunMetrics(
            algo_key=info.key if info else "",
            algo_label=info.label if info else "",
            counters=dict(outcome.counters) if outcome else {},
            total_steps=len(self.steps),
            wall_time_ms=round(wall_ms, 2),
            status=outcome.status.value if outcome else "",
            result=result.to_dict() if result is not None else {},
        )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val, l_key, r_key, lower_is_better=True):
        if l_val == r_val:
            return "tie"
        if lower_is_better:
            return l_key if l_val < r_val else r_key
        return l_key if l_val > r_val else r_key

    return ComparisonResult(
        left=l,
        right=r,
        winner_comparisons=winner(l.get("comparisons"), r.get("comparisons"), l.algo_label, r.algo_label),
        winner_swaps=winner(l.get("swaps"), r.get("swaps"), l.algo_label, r.algo_label),
        winner_steps=winner(l.total_steps, r.total_steps, l.algo_label, r.algo_label),
    )
