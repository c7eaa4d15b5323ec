"""
ui/
---
Presentation layer.

    from ui import render_canvas
    from ui import playback_controls, algorithm_selector, …
"""

from ui.canvas import render_canvas, CanvasConfig

from ui.controls import (
    playback_controls,
    algorithm_selector,
    stats_panel,
    comparison_panel,
    complexity_panel,
    pseudocode_viewer,
    explanation_panel,
)

__all__ = [
    "render_canvas",
    "CanvasConfig",
    "playback_controls",
    "algorithm_selector",
    "stats_panel",
    "comparison_panel",
    "complexity_panel",
    "pseudocode_viewer",
    "explanation_panel",
]
