"""
engine/
-------
Run-control layer: suspension, driving, pages and full-speed recording.

    from engine import VisualizerPage, Recorder, compare
"""

from engine.errors   import VisualizerError, InvalidParameterError, RunInProgressError
from engine.session  import RunSession, RunState, POLL_INTERVAL
from engine.runner   import Runner, RunOutcome
from engine.page     import VisualizerPage, PAGES, SPEED_PRESETS, make_pages
from engine.recorder import Recorder, RunMetrics, ComparisonResult, compare

__all__ = [
    "VisualizerError",
    "InvalidParameterError",
    "RunInProgressError",
    "RunSession",
    "RunState",
    "POLL_INTERVAL",
    "Runner",
    "RunOutcome",
    "VisualizerPage",
    "PAGES",
    "SPEED_PRESETS",
    "make_pages",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
]
