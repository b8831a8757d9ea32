"""
canvas.py — SVG Graph Renderer
================================
Pure rendering function: Graph + TraversalSnapshot → SVG string.

The renderer consumes:
  • graph      – node positions, adjacency and display states
  • snapshot   – queue / visit order / current node / run state
  • config     – visual config (canvas size, colors, fonts, …)

And produces an SVG string ready to inject into the DOM.

Design decisions:
  - NO mutation.  Reading `node.state` is the only coupling to the
    traversal; the controller has already derived it.
  - State-based coloring is a simple dict lookup: NodeState → hex color.
  - The queue strip and info panel sit in the left-hand strip of the
    canvas, which the layout region never uses.
"""

from typing import Dict, List, Optional
import math

from graph import Graph, Node, NodeState
from engine import TraversalSnapshot


CONTROLS_LEGEND: List[str] = [
    "Controls:",
    "Space: Step / Resume",
    "R: Reset",
    "A: Auto-step toggle",
    "P: Pause / Resume",
    "G: Generate new graph",
    "Click node to start BFS",
]


# ---------------------------------------------------------------------------
# Visual Config — color palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 1600
    height: int = 900
    bg:     str = "#ffffff"

    # node colors (state → fill)
    node_colors: Dict[str, str] = {
        NodeState.UNVISITED.value: "#ffffff",   # white
        NodeState.IN_QUEUE.value:  "#facc15",   # yellow
        NodeState.CURRENT.value:   "#ef4444",   # red
        NodeState.VISITED.value:   "#22c55e",   # green
    }

    # node
    node_radius:        float = 40.0
    node_stroke:        str   = "#000000"
    node_stroke_width:  int   = 3
    node_label_color:   str   = "#000000"
    node_label_size:    int   = 24

    # edge
    edge_color:         str = "#000000"
    edge_width:         int = 2

    # queue strip
    queue_title:        str = "QUEUE:"
    queue_box_width:    int = 50
    queue_box_height:   int = 40
    queue_box_fill:     str = "#facc15"
    queue_font_size:    int = 24

    # info panel
    ui_margin:          int = 20
    info_start_y:       int = 110
    info_font_size:     int = 18
    info_line_height:   int = 26
    text_color:         str = "#000000"


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_canvas(
    graph: Graph,
    snapshot: Optional[TraversalSnapshot] = None,
    config: CanvasConfig = CONFIG,
    show_overlays: bool = True,
) -> str:
    """
    Returns an SVG string.

    Args:
        graph         : The graph to render.
        snapshot      : Current traversal snapshot (or None for a static graph).
        config        : Visual config.
        show_overlays : If True, render the queue strip and info panel.
    """

    svg_parts = [
        f'<svg width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">',
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>',
    ]

    # -- edges (draw first so nodes sit on top) --
    for a, b in graph.edges():
        svg_parts.append(_render_edge(graph.nodes[a], graph.nodes[b], config))

    # -- nodes --
    for node in graph:
        svg_parts.append(_render_node(node, config))

    # -- overlays --
    if show_overlays:
        snapshot = snapshot or TraversalSnapshot()
        svg_parts.append(_render_queue_strip(snapshot, config))
        svg_parts.append(_render_info_panel(snapshot, config))

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


# ---------------------------------------------------------------------------
# Node Rendering
# ---------------------------------------------------------------------------
def _render_node(node: Node, config: CanvasConfig) -> str:
    fill = config.node_colors.get(node.state.value, config.node_colors[NodeState.UNVISITED.value])
    cx, cy = node.x, node.y
    r = config.node_radius

    parts = [
        f'<g class="node node-{node.state.value}" data-id="{node.id}">',
        f'  <circle cx="{cx}" cy="{cy}" r="{r}" '
        f'fill="{fill}" stroke="{config.node_stroke}" stroke-width="{config.node_stroke_width}"/>',
        f'  <text x="{cx}" y="{cy + config.node_label_size / 3}" text-anchor="middle" '
        f'font-size="{config.node_label_size}" font-family="\'Share Tech\', monospace" '
        f'fill="{config.node_label_color}">{node.id}</text>',
        '</g>',
    ]
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Edge Rendering
# ---------------------------------------------------------------------------
def _render_edge(src: Node, tgt: Node, config: CanvasConfig) -> str:
    dx, dy = tgt.x - src.x, tgt.y - src.y
    dist = math.sqrt(dx * dx + dy * dy)
    if dist < 0.001:
        return ""  # degenerate edge

    # start / end on the circle outlines
    ux, uy = dx / dist, dy / dist
    r = config.node_radius
    x1, y1 = src.x + ux * r, src.y + uy * r
    x2, y2 = tgt.x - ux * r, tgt.y - uy * r

    return (
        f'<line class="edge" data-from="{src.id}" data-to="{tgt.id}" '
        f'x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}" '
        f'stroke="{config.edge_color}" stroke-width="{config.edge_width}"/>'
    )


# ---------------------------------------------------------------------------
# Overlay Panels
# ---------------------------------------------------------------------------
def _render_queue_strip(snapshot: TraversalSnapshot, config: CanvasConfig) -> str:
    """Queue contents left → right, front first."""
    x0 = y0 = config.ui_margin
    w, h = config.queue_box_width, config.queue_box_height
    parts = [
        '<g class="queue-strip">',
        f'  <text x="{x0}" y="{y0 + config.queue_font_size}" font-size="{config.queue_font_size}" '
        f'font-family="\'Share Tech\', monospace" fill="{config.text_color}">{config.queue_title}</text>',
    ]
    y = y0 + config.queue_font_size + 10
    for i, node_id in enumerate(snapshot.queue):
        x = x0 + i * (w + 5)
        parts.append(
            f'  <rect x="{x}" y="{y}" width="{w}" height="{h}" fill="{config.queue_box_fill}" '
            f'stroke="{config.node_stroke}" stroke-width="2"/>'
        )
        parts.append(
            f'  <text x="{x + w / 2}" y="{y + h / 2 + config.queue_font_size / 3}" text-anchor="middle" '
            f'font-size="{config.queue_font_size}" font-family="\'Share Tech\', monospace" '
            f'fill="{config.text_color}">{node_id}</text>'
        )
    parts.append('</g>')
    return "\n".join(parts)


def info_lines(snapshot: TraversalSnapshot) -> List[str]:
    lines = [f"State: {snapshot.state.capitalize()}"]
    if snapshot.current_node is not None:
        lines.append(f"Current Node: {snapshot.current_node}")
    if snapshot.visit_order:
        lines.append("Visit Order: " + " -> ".join(str(n) for n in snapshot.visit_order))
    lines.append(f"Auto-step: {'on' if snapshot.auto_step else 'off'} ({snapshot.step_delay:.2f}s)")
    lines.append("")
    lines.extend(CONTROLS_LEGEND)
    return lines


def _render_info_panel(snapshot: TraversalSnapshot, config: CanvasConfig) -> str:
    parts = ['<g class="info-panel">']
    for i, line in enumerate(info_lines(snapshot)):
        if not line:
            continue
        y = config.info_start_y + i * config.info_line_height
        parts.append(
            f'  <text x="{config.ui_margin}" y="{y}" font-size="{config.info_font_size}" '
            f'font-family="\'Share Tech\', monospace" fill="{config.text_color}">{line}</text>'
        )
    parts.append('</g>')
    return "\n".join(parts)
