"""
main.py — AlgoVision Flask App
===============================
The web server that powers the visualizer.

Routes:
  GET  /                          – home: links to every page
  GET  /<page>                    – one visualizer page (sorting, graph, stack, …)
  GET  /analysis                  – complexity table
  GET  /api/<page>/state          – latest step + status + counters (polled)
  POST /api/<page>/start          – start a run   {"algorithm": …, params}
  POST /api/<page>/pause|resume|toggle|stop
  POST /api/<page>/regenerate     – new dataset   {"size", "preset", "values", "cycle_target"}
  POST /api/<page>/speed          – speed preset  {"level": "fast"}
  POST /api/<page>/op             – editing op    {"op": "push", "value": 4}, {"op": "connect", "source": 0, "target": 2}
  GET  /api/algorithms            – registry      (?family=sorting)
  GET  /api/analysis              – complexity rows (?category=graph)
  POST /api/sorting/compare       – two sorts on the same array at full speed
  POST /api/feedback              – feedback form
  GET  /api/health

State management:
  One VisualizerPage per page lives on the app (`app.extensions`), shared
  by every request.  Runs execute on the page's worker thread; requests
  only flip flags and read snapshots.
"""

import logging
import random
from typing import Any, Dict, Optional

from flask import Flask, abort, current_app, jsonify, render_template_string, request

from algorithms import complexity_table, get_algorithm, list_algorithms
from config import Config
from engine import (
    SPEED_PRESETS, InvalidParameterError, Recorder, RunInProgressError,
    VisualizerError, VisualizerPage, compare, make_pages,
)
from feedback import Feedback, FeedbackError, Sender, log_sender
from structures import ElementArray, StructureError, check_values, make_array, parse_values
from ui import (
    algorithm_selector,
    comparison_panel,
    complexity_panel,
    explanation_panel,
    playback_controls,
    pseudocode_viewer,
    render_canvas,
    stats_panel,
)

log = logging.getLogger(__name__)

PAGE_TITLES = {
    "sorting":     "Sorting Algorithms",
    "searching":   "Searching Algorithms",
    "graph":       "Graph Traversal & Shortest Paths",
    "linked-list": "Linked List",
    "hash-table":  "Hash Table",
    "stack":       "Stack",
    "queue":       "Queue",
}


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(overrides: Optional[Dict[str, Any]] = None, sender: Optional[Sender] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app.extensions["algovision.pages"] = make_pages(size=app.config["DEFAULT_ARRAY_SIZE"])
    app.extensions["algovision.sender"] = sender or log_sender

    _register_errors(app)
    _register_views(app)
    _register_api(app)
    return app


def _pages() -> Dict[str, VisualizerPage]:
    return current_app.extensions["algovision.pages"]


def _page(name: str) -> VisualizerPage:
    page = _pages().get(name)
    if page is None:
        abort(404, description=f"Unknown page: {name}")
    return page


def _body() -> Dict[str, Any]:
    return dict(request.get_json(silent=True) or {})


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------
def _register_errors(app: Flask) -> None:
    @app.errorhandler(RunInProgressError)
    def _busy(exc):
        return jsonify({"error": str(exc)}), 409

    @app.errorhandler(VisualizerError)
    def _bad_param(exc):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(StructureError)
    def _bad_op(exc):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(FeedbackError)
    def _bad_feedback(exc):
        return jsonify({"success": False, "error": str(exc)}), 400

    @app.errorhandler(404)
    def _not_found(exc):
        return jsonify({"error": exc.description}), 404


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------
def render_state(page: VisualizerPage) -> Dict[str, Any]:
    """page.snapshot() plus the HTML fragments the browser swaps in."""
    snap = page.snapshot()
    info = get_algorithm(page.algorithm) if page.algorithm else None
    snap["html"] = {
        "svg":         render_canvas(page.family, snap["data"], snap["overlay"]),
        "pseudocode":  pseudocode_viewer(info.pseudocode if info else [], snap["pseudocode_line"]),
        "explanation": explanation_panel(snap["explanation"]),
        "stats":       stats_panel(snap["counters"], snap["result"]),
        "playback":    playback_controls(
            snap["status"], snap["paused"], page.speed_level, SPEED_PRESETS.get(page.family),
        ),
    }
    return snap


# ---------------------------------------------------------------------------
# HTML views
# ---------------------------------------------------------------------------
def _register_views(app: Flask) -> None:
    @app.route("/")
    def index():
        return render_template_string(HOME_TEMPLATE, pages=PAGE_TITLES)

    @app.route("/analysis")
    def analysis():
        return render_template_string(
            PAGE_TEMPLATE,
            page="analysis",
            title="Complexity Analysis",
            pages=PAGE_TITLES,
            sidebar="",
            main=complexity_panel(complexity_table()),
            state={"html": {}},
        )

    @app.route("/<page_name>")
    def page_view(page_name: str):
        page = _page(page_name)
        state = render_state(page)
        sidebar = [state["html"]["playback"]]
        if page.family not in ("stack", "queue"):
            sidebar.insert(0, algorithm_selector(page.algorithms(), page.algorithm))
        if page.family == "sorting":
            sidebar.append(comparison_panel())
        return render_template_string(
            PAGE_TEMPLATE,
            page=page_name,
            title=PAGE_TITLES[page_name],
            pages=PAGE_TITLES,
            sidebar="".join(sidebar),
            main="",
            state=state,
        )


# ---------------------------------------------------------------------------
# JSON API
# ---------------------------------------------------------------------------
def _register_api(app: Flask) -> None:
    @app.route("/api/health")
    def api_health():
        return jsonify({"status": "ok"})

    @app.route("/api/algorithms")
    def api_algorithms():
        family = request.args.get("family")
        return jsonify([a.to_dict() for a in list_algorithms(family)])

    @app.route("/api/analysis")
    def api_analysis():
        return jsonify(complexity_table(request.args.get("category")))

    @app.route("/api/<page_name>/state")
    def api_state(page_name: str):
        return jsonify(render_state(_page(page_name)))

    @app.route("/api/<page_name>/start", methods=["POST"])
    def api_start(page_name: str):
        page = _page(page_name)
        body = _body()
        page.start(body.pop("algorithm", None), **body)
        log.info("%s: started %s", page_name, page.algorithm)
        return jsonify(render_state(page))

    @app.route("/api/<page_name>/pause", methods=["POST"])
    def api_pause(page_name: str):
        return jsonify({"paused": _page(page_name).pause()})

    @app.route("/api/<page_name>/resume", methods=["POST"])
    def api_resume(page_name: str):
        return jsonify({"paused": _page(page_name).resume()})

    @app.route("/api/<page_name>/toggle", methods=["POST"])
    def api_toggle(page_name: str):
        return jsonify({"paused": _page(page_name).toggle_pause()})

    @app.route("/api/<page_name>/stop", methods=["POST"])
    def api_stop(page_name: str):
        page = _page(page_name)
        page.stop()
        return jsonify(render_state(page))

    @app.route("/api/<page_name>/regenerate", methods=["POST"])
    def api_regenerate(page_name: str):
        page = _page(page_name)
        body = _body()
        page.regenerate(
            size=body.get("size"),
            preset=body.get("preset"),
            values=body.get("values"),
            cycle_target=body.get("cycle_target"),
        )
        return jsonify(render_state(page))

    @app.route("/api/<page_name>/select", methods=["POST"])
    def api_select(page_name: str):
        page = _page(page_name)
        page.select(str(_body().get("algorithm", "")))
        return jsonify(render_state(page))

    @app.route("/api/<page_name>/speed", methods=["POST"])
    def api_speed(page_name: str):
        page = _page(page_name)
        ms = page.set_speed(str(_body().get("level", "")))
        return jsonify({"level": page.speed_level, "ms": ms})

    @app.route("/api/<page_name>/op", methods=["POST"])
    def api_op(page_name: str):
        page = _page(page_name)
        body = _body()
        op = str(body.pop("op", ""))
        out = page.apply(op, **body)
        state = render_state(page)
        return jsonify({"message": out["message"], **state})

    @app.route("/api/sorting/compare", methods=["POST"])
    def api_compare():
        body = _body()
        left_key, right_key = body.get("left"), body.get("right")
        for key in (left_key, right_key):
            info = get_algorithm(key) if key else None
            if info is None or info.family != "sorting":
                raise InvalidParameterError(f"Pick two sorting algorithms (got {key!r})")

        raw = body.get("values")
        try:
            if isinstance(raw, str) and raw.strip():
                values = parse_values(raw)
            elif raw:
                values = check_values([int(v) for v in raw])
            else:
                size = int(body.get("size") or current_app.config["DEFAULT_ARRAY_SIZE"])
                values = make_array(size, body.get("preset") or "random", rng=random.Random()).values()
        except (TypeError, ValueError) as exc:
            raise InvalidParameterError(str(exc)) from exc

        left, right = Recorder(), Recorder()
        left.start(left_key, ElementArray(values))
        right.start(right_key, ElementArray(values))
        left.run_to_completion()
        right.run_to_completion()
        comp = compare(left, right)
        return jsonify({**comp.to_dict(), "values": values, "html": comparison_panel(comp)})

    @app.route("/api/feedback", methods=["POST"])
    def api_feedback():
        fb = Feedback.from_payload(request.get_json(silent=True))
        message = fb.to_message(current_app.config["FEEDBACK_RECIPIENT"])
        try:
            current_app.extensions["algovision.sender"](message)
        except Exception:
            log.exception("sending feedback failed")
            return jsonify({"success": False, "message": "Failed to send feedback"}), 500
        log.info("feedback received from %s (%d/5)", fb.name, fb.experience)
        return jsonify({"success": True, "message": "Feedback sent successfully!"})


# ---------------------------------------------------------------------------
# HTML Templates
# ---------------------------------------------------------------------------
STYLE = """
  <link href="https://fonts.googleapis.com/css2?family=JetBrains+Mono:wght@400;500;700&family=DM+Sans:wght@400;500;700&display=swap" rel="stylesheet">
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    :root {
      --bg-dark: #0d1117; --bg-darker: #010409; --bg-panel: #161b22;
      --border: #30363d; --text-primary: #e6edf3; --text-secondary: #7d8590;
      --accent-cyan: #0ea5e9; --accent-teal: #06b6d4; --accent-emerald: #10b981;
      --glow-cyan: rgba(14, 165, 233, 0.4);
    }
    body {
      font-family: 'DM Sans', -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker); color: var(--text-primary);
      display: flex; height: 100vh; overflow: hidden;
    }
    a { color: var(--accent-cyan); text-decoration: none; }
    nav { display: flex; flex-wrap: wrap; gap: 8px; margin-bottom: 16px; font-size: 12px; }
    #sidebar {
      width: 340px; overflow-y: auto; padding: 24px 16px;
      background: linear-gradient(180deg, var(--bg-dark) 0%, var(--bg-darker) 100%);
      border-right: 1px solid var(--border);
    }
    #main { flex: 1; display: flex; flex-direction: column; }
    #canvas-container {
      flex: 1; display: flex; align-items: center; justify-content: center;
      border-bottom: 1px solid var(--border);
    }
    #canvas-svg svg { max-width: 100%; max-height: 100%; }
    #bottom-panel {
      display: grid; grid-template-columns: 1fr 1fr; gap: 20px; padding: 20px;
      background: var(--bg-dark); min-height: 260px; max-height: 340px; overflow: hidden;
    }
    .panel, #pseudocode-container, #explanation-container {
      background: var(--bg-panel); border: 1px solid var(--border);
      border-radius: 12px; padding: 18px; margin-bottom: 16px; overflow: auto;
    }
    .panel h3, #bottom-panel h3 {
      font-size: 13px; font-weight: 700; margin-bottom: 14px;
      text-transform: uppercase; letter-spacing: 0.5px; color: var(--accent-cyan);
    }
    .code-block { font-family: 'JetBrains Mono', monospace; font-size: 13px; line-height: 1.6; }
    .code-line { padding: 4px 10px; border-radius: 6px; }
    .code-line.highlight {
      background: linear-gradient(90deg, rgba(6, 182, 212, 0.15) 0%, transparent 100%);
      border-left: 3px solid var(--accent-cyan); box-shadow: 0 0 20px var(--glow-cyan);
    }
    .explanation-text { color: var(--text-secondary); line-height: 1.8; font-size: 14px; }
    .button-row { display: flex; flex-wrap: wrap; gap: 8px; margin-bottom: 12px; }
    button {
      background: linear-gradient(135deg, var(--accent-cyan), var(--accent-teal));
      color: #fff; border: none; padding: 8px 14px; border-radius: 8px;
      cursor: pointer; font-size: 13px; font-weight: 600;
    }
    button:disabled { opacity: 0.4; cursor: default; }
    select, input, textarea {
      width: 100%; padding: 8px 10px; margin: 6px 0; background: var(--bg-darker);
      border: 1px solid var(--border); border-radius: 8px; color: var(--text-primary);
    }
    label { display: block; margin: 8px 0 2px; font-size: 12px; color: var(--text-secondary); }
    .step-info {
      font-size: 13px; margin: 10px 0; padding: 8px 12px; border-radius: 6px;
      font-family: 'JetBrains Mono', monospace; background: var(--bg-darker);
      border-left: 3px solid var(--accent-cyan); color: var(--text-secondary);
    }
    table { width: 100%; font-size: 13px; border-spacing: 0 4px; }
    table td { padding: 6px 4px; }
    #message { min-height: 20px; font-size: 13px; color: var(--accent-emerald); }
    #message.error { color: #f43f5e; }
  </style>
"""

HOME_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>AlgoVision</title>
""" + STYLE + """
</head>
<body>
  <div id="sidebar">
    <div class="panel">
      <h3>AlgoVision</h3>
      <p class="explanation-text">Watch classic algorithms and data structures work step by step.</p>
    </div>
    <div class="panel">
      <h3>Feedback</h3>
      <form id="feedback-form">
        <label>Name</label><input name="name" required>
        <label>Email</label><input name="email" type="email" required>
        <label>Experience (1-5)</label><input name="experience" type="number" min="1" max="5" value="5">
        <label>Suggestions</label><textarea name="improvements"></textarea>
        <label>Issues</label><textarea name="issues"></textarea>
        <button type="submit">Send</button>
      </form>
      <div id="message"></div>
    </div>
  </div>
  <div id="main" style="padding: 24px; overflow-y: auto;">
    {% for key, title in pages.items() %}
      <div class="panel"><h3><a href="/{{ key }}">{{ title }}</a></h3></div>
    {% endfor %}
    <div class="panel"><h3><a href="/analysis">Complexity Analysis</a></h3></div>
  </div>
  <script>
    document.getElementById('feedback-form').addEventListener('submit', async (e) => {
      e.preventDefault();
      const payload = Object.fromEntries(new FormData(e.target).entries());
      const res = await fetch('/api/feedback', {
        method: 'POST', headers: {'Content-Type': 'application/json'}, body: JSON.stringify(payload),
      });
      const data = await res.json();
      const msg = document.getElementById('message');
      msg.className = res.ok ? '' : 'error';
      msg.textContent = data.message || data.error;
    });
  </script>
</body>
</html>
"""

PAGE_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>{{ title }} · AlgoVision</title>
""" + STYLE + """
</head>
<body data-page="{{ page }}">
  <div id="sidebar">
    <nav>
      <a href="/">Home</a>
      {% for key, t in pages.items() %}<a href="/{{ key }}">{{ key }}</a>{% endfor %}
      <a href="/analysis">analysis</a>
    </nav>
    <div id="controls">{{ sidebar|safe }}</div>
    <div class="panel" id="inputs">
      <h3>Input</h3>
      <input id="arg-1" placeholder="target / key / value">
      <input id="arg-2" placeholder="value / position / end node">
      <select id="op-selector"></select>
      <button id="btn-op">Apply</button>
      <div id="message"></div>
    </div>
    <div id="stats">{{ state.html.stats|safe }}</div>
  </div>

  <div id="main">
    {% if main %}
      <div style="padding: 24px; overflow-y: auto;">{{ main|safe }}</div>
    {% else %}
      <div id="canvas-container"><div id="canvas-svg">{{ state.html.svg|safe }}</div></div>
      <div id="bottom-panel">
        <div id="pseudocode-container"><h3>Pseudocode</h3><div id="pseudocode">{{ state.html.pseudocode|safe }}</div></div>
        <div id="explanation-container"><h3>Step Explanation</h3><div id="explanation">{{ state.html.explanation|safe }}</div></div>
      </div>
    {% endif %}
  </div>

  <script>
    const PAGE = document.body.dataset.page;
    const OPS = {
      'linked-list': ['insert_head', 'insert_tail', 'insert_at', 'delete_value', 'delete_at', 'set_cycle', 'clear_cycle', 'clear'],
      'stack': ['push', 'pop', 'peek', 'clear'],
      'queue': ['enqueue', 'enqueue_front', 'dequeue', 'dequeue_rear', 'peek_front', 'peek_rear', 'clear', 'load_example'],
      'graph': ['add_node', 'connect', 'set_start', 'set_end', 'reset', 'clear'],
    };
    let timer = null;

    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST', headers: {'Content-Type': 'application/json'}, body: JSON.stringify(data || {}),
      });
      const body = await res.json();
      const msg = document.getElementById('message');
      if (msg) {
        msg.className = res.ok ? '' : 'error';
        msg.textContent = body.error || body.message || '';
      }
      return body;
    }

    function paint(state) {
      if (!state || !state.html) return;
      const set = (id, html) => { const el = document.getElementById(id); if (el && html !== undefined) el.innerHTML = html; };
      set('canvas-svg', state.html.svg);
      set('pseudocode', state.html.pseudocode);
      set('explanation', state.html.explanation);
      set('stats', state.html.stats);
      const playback = document.querySelector('.playback-controls');
      if (playback) { playback.outerHTML = state.html.playback; bind(); }
      if (state.status === 'running' && !timer) timer = setInterval(poll, 100);
      if (state.status !== 'running' && timer) { clearInterval(timer); timer = null; }
    }

    async function poll() {
      const res = await fetch('/api/' + PAGE + '/state');
      paint(await res.json());
    }

    function params() {
      const a = document.getElementById('arg-1').value, b = document.getElementById('arg-2').value;
      const algo = document.getElementById('algo-selector');
      const out = {algorithm: algo ? algo.value : undefined};
      if (PAGE === 'searching' || PAGE === 'linked-list') out.target = a;
      if (PAGE === 'hash-table') { out.key = a; out.value = b; }
      if (PAGE === 'graph') { if (a) out.start = a; if (b) out.end = b; }
      return out;
    }

    function bind() {
      const on = (id, fn) => { const el = document.getElementById(id); if (el) el.onclick = fn; };
      on('btn-start', async () => paint(await post('/api/' + PAGE + '/start', params())));
      on('btn-pause', async () => { await post('/api/' + PAGE + '/toggle'); poll(); });
      on('btn-stop', async () => paint(await post('/api/' + PAGE + '/stop')));
      on('btn-regenerate', async () => paint(await post('/api/' + PAGE + '/regenerate')));
      const speed = document.getElementById('speed-selector');
      if (speed) speed.onchange = (e) => post('/api/' + PAGE + '/speed', {level: e.target.value});
    }

    const algo = document.getElementById('algo-selector');
    if (algo) algo.onchange = async (e) => paint(await post('/api/' + PAGE + '/select', {algorithm: e.target.value}));

    const ops = document.getElementById('op-selector');
    (OPS[PAGE] || []).forEach((op) => { const o = document.createElement('option'); o.value = op; o.textContent = op; ops.appendChild(o); });
    if (!OPS[PAGE]) { ops.style.display = 'none'; document.getElementById('btn-op').style.display = 'none'; }
    document.getElementById('btn-op').onclick = async () => {
      const a = document.getElementById('arg-1').value, b = document.getElementById('arg-2').value;
      const body = PAGE === 'graph'
        ? {op: ops.value, node: a, source: a, target: b}
        : {op: ops.value, value: a, position: b, target: a, priority: b};
      paint(await post('/api/' + PAGE + '/op', body));
    };

    bind();
    if (PAGE !== 'analysis') poll();
  </script>
</body>
</html>
"""


app = create_app()


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    host, port = app.config["HOST"], app.config["PORT"]
    print("=" * 60)
    print("  AlgoVision")
    print("  Starting Flask server...")
    print(f"  Open http://{host}:{port}")
    print("=" * 60)
    app.run(debug=False, host=host, port=port, threaded=True)
