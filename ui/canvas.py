"""
canvas.py — SVG Renderer
========================
Pure rendering function: page family + snapshot dict → SVG string.

The renderer consumes:
  • family   – which page the snapshot belongs to ("sorting", "graph", …)
  • data     – a snapshot dict (Step.data, or dataset.snapshot() when idle)
  • overlay  – the Step's overlay dict (search window, queue, distances, …)
  • config   – visual config (canvas size, colors, fonts, …)

Design decisions:
  - NO mutation.  The caller passes in plain dicts and gets back a string,
    so the same function renders a live run and a recorded replay.
  - State-based coloring is a simple dict lookup: state value → hex color.
  - Overlay panels are rendered as separate SVG <g> groups in fixed spots.
"""

import math
from html import escape
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Visual Config — color palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 900
    height: int = 600
    bg:     str = "#0d1117"

    # array bars (ElementState → fill)
    bar_colors: Dict[str, str] = {
        "default":   "#0ea5e9",
        "comparing": "#facc15",   # yellow
        "swapping":  "#f43f5e",   # red
        "sorted":    "#10b981",   # green
        "pivot":     "#a855f7",   # purple
        "searching": "#facc15",
        "found":     "#10b981",
        "checked":   "#30363d",   # faded grey
        "range":     "#3b82f6",   # blue
    }
    bar_gap:            int = 2
    bar_label_min:      int = 18   # show value labels only on bars at least this wide

    # graph nodes (NodeState → fill)
    node_colors: Dict[str, str] = {
        "default":  "#1c2128",
        "visiting": "#f59e0b",    # amber
        "visited":  "#10b981",    # emerald
        "path":     "#eab308",    # gold
        "start":    "#06b6d4",    # teal
        "end":      "#ec4899",    # magenta
    }

    # graph edges (EdgeState → stroke)
    edge_colors: Dict[str, str] = {
        "default":   "#30363d",
        "exploring": "#f59e0b",
        "path":      "#eab308",
    }

    # linked list nodes (ListNodeState → fill)
    list_colors: Dict[str, str] = {
        "default":     "#1c2128",
        "searching":   "#facc15",
        "found":       "#10b981",
        "slow":        "#3b82f6",
        "fast":        "#f43f5e",
        "meeting":     "#a855f7",
        "cycle_start": "#f97316",
        "checked":     "#21262d",
    }

    # hash entries (EntryState → fill)
    entry_colors: Dict[str, str] = {
        "default": "#1c2128",
        "probing": "#facc15",
        "found":   "#10b981",
        "new":     "#0ea5e9",
        "deleted": "#f43f5e",
    }

    # node
    node_radius:        int = 20
    node_stroke:        str = "#30363d"
    node_stroke_width:  int = 2
    node_label_color:   str = "#e6edf3"
    node_label_size:    int = 13
    node_label_weight:  str = "600"

    # edge
    edge_width:         int = 2
    edge_width_path:    int = 4
    edge_arrow_size:    int = 10
    edge_weight_color:  str = "#7d8590"
    edge_weight_size:   int = 12
    edge_weight_bg:     str = "#161b22"

    # overlay panels
    overlay_bg:         str = "#161b22"
    overlay_border:     str = "#30363d"
    overlay_text:       str = "#7d8590"
    overlay_header:     str = "#e6edf3"
    overlay_accent:     str = "#0ea5e9"
    overlay_font_size:  int = 13


CONFIG = CanvasConfig()

FONT = "font-family=\"'DM Sans', sans-serif\""
MONO = "font-family=\"'JetBrains Mono', monospace\""


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_canvas(
    family: str,
    data: Dict[str, Any],
    overlay: Optional[Dict[str, Any]] = None,
    config: CanvasConfig = CONFIG,
    show_overlays: bool = True,
) -> str:
    """
    Returns an SVG string.

    Args:
        family        : Page name the snapshot belongs to.
        data          : Snapshot dict of the page's dataset.
        overlay       : Step overlay, or None for a static dataset.
        config        : Visual config.
        show_overlays : If True, render queue / distances / window panels.
    """
    overlay = overlay or {}
    body = _RENDERERS.get(family, _render_empty)(data, overlay, config)

    svg_parts = [
        f'<svg width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">',
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>',
        body,
    ]
    if show_overlays and overlay:
        svg_parts.append(_render_overlays(overlay, config))
    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


def _render_empty(data, overlay, config) -> str:
    return ""


def _text(x, y, txt, size=13, fill="#e6edf3", anchor="middle", weight="600", mono=False) -> str:
    return (
        f'<text x="{x}" y="{y}" text-anchor="{anchor}" font-size="{size}" '
        f'{MONO if mono else FONT} fill="{fill}" font-weight="{weight}">{escape(str(txt))}</text>'
    )


# ---------------------------------------------------------------------------
# Array Rendering (sorting / searching)
# ---------------------------------------------------------------------------
def _render_array(data: Dict[str, Any], overlay: Dict[str, Any], config: CanvasConfig) -> str:
    elements = data.get("elements", [])
    if not elements:
        return ""
    width = config.width - 40
    floor = config.height - 40
    bar_w = width / len(elements)
    top = max(e["value"] for e in elements) or 1

    parts = ['<g class="array">']
    for i, el in enumerate(elements):
        h = el["value"] / top * (floor - 60)
        x = 20 + i * bar_w
        fill = config.bar_colors.get(el["state"], config.bar_colors["default"])
        parts.append(
            f'  <rect class="bar" data-id="{el["id"]}" x="{x:.1f}" y="{floor - h:.1f}" '
            f'width="{max(bar_w - config.bar_gap, 1):.1f}" height="{h:.1f}" fill="{fill}" rx="2"/>'
        )
        if bar_w >= config.bar_label_min:
            parts.append("  " + _text(f"{x + bar_w / 2:.1f}", floor + 16, el["value"], size=11))
    parts.append("</g>")
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Graph Rendering
# ---------------------------------------------------------------------------
def _render_graph(data: Dict[str, Any], overlay: Dict[str, Any], config: CanvasConfig) -> str:
    nodes = {n["id"]: n for n in data.get("nodes", [])}
    parts = ['<g class="graph">']
    # edges first so nodes sit on top
    for edge in data.get("edges", []):
        parts.append(_render_edge(nodes, edge, config))
    for node in nodes.values():
        parts.append(_render_node(node, config))
    parts.append("</g>")
    return "\n".join(parts)


def _render_node(node: Dict[str, Any], config: CanvasConfig) -> str:
    fill = config.node_colors.get(node["state"], config.node_colors["default"])
    cx, cy, r = node["x"], node["y"], config.node_radius
    glow = ""
    if node["state"] == "visiting":
        glow = (
            f'<circle cx="{cx}" cy="{cy}" r="{r + 8}" fill="none" '
            f'stroke="{fill}" stroke-width="2" opacity="0.3"/>'
        )
    parts = [
        f'<g class="node" data-id="{node["id"]}">',
        glow,
        f'  <circle cx="{cx}" cy="{cy}" r="{r}" fill="{fill}" '
        f'stroke="{config.node_stroke}" stroke-width="{config.node_stroke_width}"/>',
        "  " + _text(cx, cy + 5, node["id"], size=config.node_label_size, fill=config.node_label_color),
    ]
    if node.get("distance") is not None:
        parts.append("  " + _text(cx, cy - r - 6, node["distance"], size=11, fill=config.edge_weight_color))
    parts.append("</g>")
    return "\n".join(parts)


def _render_edge(nodes: Dict[int, Dict[str, Any]], edge: Dict[str, Any], config: CanvasConfig) -> str:
    src, tgt = nodes.get(edge["source"]), nodes.get(edge["target"])
    if not src or not tgt:
        return ""

    stroke = config.edge_colors.get(edge["state"], config.edge_colors["default"])
    stroke_width = config.edge_width_path if edge["state"] == "path" else config.edge_width

    # shorten the line by node_radius on both ends
    x1, y1, x2, y2 = src["x"], src["y"], tgt["x"], tgt["y"]
    dx, dy = x2 - x1, y2 - y1
    dist = math.sqrt(dx * dx + dy * dy)
    if dist < 0.001:
        return ""
    ux, uy = dx / dist, dy / dist
    r = config.node_radius

    mx, my = (x1 + x2) / 2 - uy * 12, (y1 + y2) / 2 + ux * 12
    return "\n".join([
        f'<g class="edge" data-id="{edge["source"]}-{edge["target"]}">',
        f'  <line x1="{x1 + ux * r:.1f}" y1="{y1 + uy * r:.1f}" x2="{x2 - ux * r:.1f}" y2="{y2 - uy * r:.1f}" '
        f'stroke="{stroke}" stroke-width="{stroke_width}"/>',
        f'  <circle cx="{mx:.1f}" cy="{my:.1f}" r="12" fill="{config.edge_weight_bg}" opacity="0.9"/>',
        "  " + _text(f"{mx:.1f}", f"{my + 4:.1f}", _fmt(edge["weight"]),
                     size=config.edge_weight_size, fill=config.edge_weight_color),
        "</g>",
    ])


def _fmt(weight) -> str:
    return str(int(weight)) if float(weight).is_integer() else f"{weight:.1f}"


# ---------------------------------------------------------------------------
# Linked List Rendering
# ---------------------------------------------------------------------------
def _render_list(data: Dict[str, Any], overlay: Dict[str, Any], config: CanvasConfig) -> str:
    nodes = data.get("list", [])
    if not nodes:
        return _text(config.width / 2, config.height / 2, "List is empty", fill=config.overlay_text)
    per_row = 6
    gap = (config.width - 80) / per_row
    r = config.node_radius + 6

    def pos(i):
        row, col = divmod(i, per_row)
        return 60 + col * gap, 140 + row * 140

    parts = ['<g class="linked-list">']
    for i, node in enumerate(nodes):
        x, y = pos(i)
        if i + 1 < len(nodes):
            nx, ny = pos(i + 1)
            parts.append(
                f'  <line x1="{x + r:.1f}" y1="{y}" x2="{nx - r:.1f}" y2="{ny}" '
                f'stroke="{config.node_stroke}" stroke-width="2"/>'
            )
        fill = config.list_colors.get(node["state"], config.list_colors["default"])
        parts.append(
            f'  <circle cx="{x:.1f}" cy="{y}" r="{r}" fill="{fill}" '
            f'stroke="{config.node_stroke}" stroke-width="{config.node_stroke_width}"/>'
        )
        parts.append("  " + _text(f"{x:.1f}", y + 5, node["value"]))
        parts.append("  " + _text(f"{x:.1f}", y + r + 16, i, size=10, fill=config.overlay_text))

    target = data.get("cycle_target")
    if target is not None:
        (tx, ty), (ex, ey) = pos(target), pos(len(nodes) - 1)
        parts.append(
            f'  <path d="M {ex:.1f} {ey + r} C {ex:.1f} {ey + 90}, {tx:.1f} {ty + 90}, {tx:.1f} {ty + r}" '
            f'fill="none" stroke="{config.list_colors["cycle_start"]}" stroke-width="2" stroke-dasharray="6 4"/>'
        )
    parts.append("</g>")
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Hash Table Rendering
# ---------------------------------------------------------------------------
def _render_buckets(data: Dict[str, Any], overlay: Dict[str, Any], config: CanvasConfig) -> str:
    buckets = data.get("buckets", [])
    row_h = min(70, (config.height - 40) / max(len(buckets), 1))
    parts = ['<g class="hash-table">']
    for b in buckets:
        y = 20 + b["index"] * row_h
        stroke = config.overlay_accent if b["highlighted"] else config.overlay_border
        parts.append(
            f'  <rect x="20" y="{y:.1f}" width="60" height="{row_h - 10:.1f}" rx="6" '
            f'fill="{config.overlay_bg}" stroke="{stroke}" stroke-width="2"/>'
        )
        parts.append("  " + _text(50, f"{y + row_h / 2:.1f}", b["index"]))
        for j, entry in enumerate(b["entries"]):
            x = 100 + j * 150
            fill = config.entry_colors.get(entry["state"], config.entry_colors["default"])
            parts.append(
                f'  <rect x="{x}" y="{y:.1f}" width="130" height="{row_h - 10:.1f}" rx="6" '
                f'fill="{fill}" stroke="{config.node_stroke}"/>'
            )
            parts.append("  " + _text(x + 65, f"{y + row_h / 2:.1f}", f'{entry["key"]}: {entry["value"]}', size=12))
    parts.append("</g>")
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Stack / Queue Rendering
# ---------------------------------------------------------------------------
def _render_stack(data: Dict[str, Any], overlay: Dict[str, Any], config: CanvasConfig) -> str:
    items = data.get("items", [])
    cap = data.get("capacity", 10)
    cell = (config.height - 80) / cap
    x = config.width / 2 - 80
    parts = ['<g class="stack">']
    for i, item in enumerate(items):
        y = config.height - 40 - (i + 1) * cell
        fill = config.overlay_accent if i == len(items) - 1 else config.node_colors["default"]
        parts.append(
            f'  <rect x="{x:.1f}" y="{y:.1f}" width="160" height="{cell - 4:.1f}" rx="4" '
            f'fill="{fill}" stroke="{config.node_stroke}"/>'
        )
        parts.append("  " + _text(f"{x + 80:.1f}", f"{y + cell / 2 + 2:.1f}", item["value"]))
    if items:
        top_y = config.height - 40 - len(items) * cell + cell / 2
        parts.append("  " + _text(f"{x + 190:.1f}", f"{top_y:.1f}", "← TOP", fill=config.overlay_accent, anchor="start"))
    parts.append("</g>")
    return "\n".join(parts)


def _render_queue(data: Dict[str, Any], overlay: Dict[str, Any], config: CanvasConfig) -> str:
    items = data.get("items", [])
    cap = data.get("capacity", 8)
    cell = (config.width - 80) / cap
    y = config.height / 2 - 30
    parts = ['<g class="queue">']
    for i, item in enumerate(items):
        x = 40 + i * cell
        parts.append(
            f'  <rect x="{x:.1f}" y="{y:.1f}" width="{cell - 6:.1f}" height="60" rx="6" '
            f'fill="{config.node_colors["default"]}" stroke="{config.node_stroke}"/>'
        )
        parts.append("  " + _text(f"{x + cell / 2 - 3:.1f}", f"{y + 30:.1f}", item["value"]))
        caption = item.get("label") or ""
        if item.get("priority") is not None:
            caption = f'{caption} p={item["priority"]}'.strip()
        if caption:
            parts.append("  " + _text(f"{x + cell / 2 - 3:.1f}", f"{y + 50:.1f}", caption, size=10, fill=config.overlay_text))
    if items:
        parts.append("  " + _text(40 + cell / 2, f"{y - 12:.1f}", "FRONT", size=11, fill=config.overlay_accent))
        parts.append("  " + _text(f"{40 + (len(items) - 0.5) * cell:.1f}", f"{y + 84:.1f}", "REAR", size=11, fill=config.overlay_accent))
    parts.append("  " + _text(config.width / 2, 40, f'{data.get("kind", "linear").capitalize()} Queue', fill=config.overlay_header))
    parts.append("</g>")
    return "\n".join(parts)


_RENDERERS = {
    "sorting":     _render_array,
    "searching":   _render_array,
    "graph":       _render_graph,
    "linked-list": _render_list,
    "hash-table":  _render_buckets,
    "stack":       _render_stack,
    "queue":       _render_queue,
}


# ---------------------------------------------------------------------------
# Overlay Panels
# ---------------------------------------------------------------------------
def _render_overlays(overlay: Dict[str, Any], config: CanvasConfig) -> str:
    """Render queue / stack / distances / hash trace in fixed positions on the canvas."""
    parts = ['<g class="overlays">']

    if "queue" in overlay:
        parts.append(_render_list_panel("Queue", overlay["queue"], config, x=620, y=20))
    elif "stack" in overlay:
        parts.append(_render_list_panel("Stack", overlay["stack"], config, x=620, y=20))

    if isinstance(overlay.get("distances"), dict):
        parts.append(_render_distances_panel(overlay["distances"], config, x=620, y=220))

    if "hash_trace" in overlay:
        parts.append(_render_hash_trace(overlay.get("key", ""), overlay["hash_trace"], config, x=620, y=20))

    if "range" in overlay:
        lo, hi = overlay["range"]
        parts.append(_text(config.width - 20, 24, f"window [{lo}, {hi}]", anchor="end",
                           fill=config.overlay_accent, mono=True))

    parts.append("</g>")
    return "\n".join(parts)


def _panel(title: str, config: CanvasConfig, x: int, y: int, height: int = 180) -> List[str]:
    return [
        f'<g class="panel" transform="translate({x},{y})">',
        f'  <rect width="260" height="{height}" fill="{config.overlay_bg}" stroke="{config.overlay_border}" '
        f'stroke-width="1" rx="8" opacity="0.95"/>',
        "  " + _text(12, 22, title.upper(), fill=config.overlay_accent, anchor="start", weight="700"),
    ]


def _render_list_panel(title: str, items: List, config: CanvasConfig, x: int, y: int) -> str:
    parts = _panel(title, config, x, y)
    # show top 8 entries
    for i, item in enumerate(items[:8]):
        parts.append("  " + _text(16, 48 + i * 16, item, size=config.overlay_font_size,
                                  fill=config.overlay_text, anchor="start", weight="400", mono=True))
    if len(items) > 8:
        parts.append("  " + _text(16, 48 + 8 * 16, f"… +{len(items) - 8} more", size=11, fill="#484f58", anchor="start"))
    parts.append("</g>")
    return "\n".join(parts)


def _render_distances_panel(distances: Dict[Any, Any], config: CanvasConfig, x: int, y: int) -> str:
    parts = _panel("Distances", config, x, y, height=340)
    for i, (nid, d) in enumerate(list(distances.items())[:18]):
        d_str = "∞" if d is None else _fmt(d)
        parts.append("  " + _text(16, 48 + i * 16, f"{nid}: {d_str}", size=config.overlay_font_size,
                                  fill=config.overlay_text, anchor="start", weight="400", mono=True))
    parts.append("</g>")
    return "\n".join(parts)


def _render_hash_trace(key: str, trace: List, config: CanvasConfig, x: int, y: int) -> str:
    parts = _panel(f"hash({key})", config, x, y, height=60 + 16 * min(len(trace), 12))
    for i, (ch, h) in enumerate(trace[:12]):
        parts.append("  " + _text(16, 48 + i * 16, f"'{ch}' → h = {h}", size=config.overlay_font_size,
                                  fill=config.overlay_text, anchor="start", weight="400", mono=True))
    parts.append("</g>")
    return "\n".join(parts)
