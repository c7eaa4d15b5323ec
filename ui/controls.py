"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • playback_controls  – start/pause/stop + speed presets of the page
  • algorithm_selector – dropdown of the page's algorithms
  • stats_panel        – live counters + result of the last run
  • comparison_panel   – side-by-side metrics of two sorting runs
  • complexity_panel   – Big-O table of the analysis page
  • pseudocode_viewer  – with live line highlighting
  • explanation_panel  – the current step's narration

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

from html import escape
from typing import Any, Dict, List, Optional

from algorithms import AlgoInfo
from engine import ComparisonResult


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(
    status: str = "idle",
    paused: bool = False,
    speed: str = "medium",
    speeds: Optional[Dict[str, int]] = None,
) -> str:
    running = status == "running"
    pause_label = "Resume" if paused else "Pause"

    options = []
    for level, ms in (speeds or {}).items():
        sel = "selected" if level == speed else ""
        options.append(f'<option value="{level}" {sel}>{level.capitalize()} ({ms} ms)</option>')
    speed_block = ""
    if len(options) > 1:
        speed_block = f"""
      <div class="speed-control">
        <label>Speed:</label>
        <select id="speed-selector">{''.join(options)}</select>
      </div>"""

    return f"""
    <div class="panel playback-controls">
      <h3>⏯ Playback</h3>
      <div class="button-row">
        <button id="btn-start" {'disabled' if running else ''}>▶ Start</button>
        <button id="btn-pause" {'' if running else 'disabled'}>{pause_label}</button>
        <button id="btn-stop" {'' if running else 'disabled'}>■ Stop</button>
        <button id="btn-regenerate" {'disabled' if running else ''}>↻ New Data</button>
      </div>
      <div class="step-info">Status: <span id="run-status">{status}</span></div>
      {speed_block}
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(algorithms: List[AlgoInfo], selected_key: Optional[str] = None) -> str:
    options = []
    for algo in algorithms:
        sel = "selected" if algo.key == selected_key else ""
        options.append(
            f'<option value="{algo.key}" {sel}>{algo.label} — {algo.complexity_avg}</option>'
        )
    return f"""
    <div class="panel algorithm-selector">
      <h3>🧠 Algorithm</h3>
      <select id="algo-selector">
        {''.join(options)}
      </select>
    </div>
    """


# ---------------------------------------------------------------------------
# Stats Panel
# ---------------------------------------------------------------------------
def stats_panel(counters: Dict[str, int], result: Optional[Dict[str, Any]] = None) -> str:
    rows = [
        f"<tr><td>{name.capitalize()}:</td><td><strong>{value}</strong></td></tr>"
        for name, value in counters.items()
    ]
    for name, value in (result or {}).items():
        if isinstance(value, list):
            value = " → ".join(map(str, value)) if value else "—"
        rows.append(f"<tr><td>{escape(name.replace('_', ' ').capitalize())}:</td><td>{escape(str(value))}</td></tr>")
    return f"""
    <div class="panel stats-panel">
      <h3>📊 Stats</h3>
      <table>{''.join(rows)}</table>
    </div>
    """


# ---------------------------------------------------------------------------
# Comparison Panel (side-by-side)
# ---------------------------------------------------------------------------
def comparison_panel(comp: Optional[ComparisonResult] = None) -> str:
    if not comp:
        return """
        <div class="panel comparison-panel">
          <h3>⚖️ Comparison Mode</h3>
          <p class="placeholder">Pick two sorting algorithms to race them on the same array.</p>
        </div>
        """

    left, right = comp.left, comp.right

    def winner_badge(winner_label):
        if winner_label == "tie":
            return "🟰 Tie"
        return f"👑 {winner_label}"

    return f"""
    <div class="panel comparison-panel">
      <h3>⚖️ Comparison: {left.algo_label} vs {right.algo_label}</h3>
      <table class="comparison-table">
        <thead>
          <tr><th>Metric</th><th>{left.algo_label}</th><th>{right.algo_label}</th><th>Winner</th></tr>
        </thead>
        <tbody>
          <tr>
            <td>Comparisons</td><td>{left.get('comparisons')}</td><td>{right.get('comparisons')}</td>
            <td>{winner_badge(comp.winner_comparisons)}</td>
          </tr>
          <tr>
            <td>Swaps</td><td>{left.get('swaps')}</td><td>{right.get('swaps')}</td>
            <td>{winner_badge(comp.winner_swaps)}</td>
          </tr>
          <tr>
            <td>Steps</td><td>{left.total_steps}</td><td>{right.total_steps}</td>
            <td>{winner_badge(comp.winner_steps)}</td>
          </tr>
          <tr>
            <td>Wall Time</td><td>{left.wall_time_ms:.2f} ms</td><td>{right.wall_time_ms:.2f} ms</td><td>—</td>
          </tr>
        </tbody>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Complexity Table (analysis page)
# ---------------------------------------------------------------------------
def complexity_panel(rows: List[Dict[str, str]]) -> str:
    body = []
    for row in rows:
        body.append(
            "<tr>" + "".join(
                f"<td>{escape(str(row.get(col, '')))}</td>"
                for col in ("name", "category", "best", "avg", "worst", "space")
            ) + "</tr>"
        )
    return f"""
    <div class="panel complexity-panel">
      <h3>📈 Complexity</h3>
      <table class="complexity-table">
        <thead><tr><th>Algorithm</th><th>Category</th><th>Best</th><th>Average</th><th>Worst</th><th>Space</th></tr></thead>
        <tbody>{''.join(body)}</tbody>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(pseudocode_lines: List[str], current_line: int = -1) -> str:
    if not pseudocode_lines:
        return """
        <div class="code-block">
          <div class="placeholder">Select an algorithm to view pseudocode</div>
        </div>
        """

    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        highlight = "highlight" if i == current_line else ""
        lines_html.append(f'<div class="code-line {highlight}" data-line="{i}">{escape(line)}</div>')

    return f"""
    <div class="code-block">
      {''.join(lines_html)}
    </div>
    """


# ---------------------------------------------------------------------------
# Explanation Panel
# ---------------------------------------------------------------------------
def explanation_panel(explanation: str = "") -> str:
    if not explanation:
        return '<div class="explanation-text">▶ Press <strong>Start</strong> to watch the algorithm step by step.</div>'
    return f'<div class="explanation-text">{escape(explanation)}</div>'
