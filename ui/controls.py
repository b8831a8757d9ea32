"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • playback_controls   – start hint / step / pause / resume / reset / auto-step / speed
  • graph_generator     – regenerate with optional node range + seed
  • traversal_panel     – run state, current node, visit order, queue
  • start_node_picker   – dropdown alternative to clicking a node

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

from typing import List, Optional

from config import LayoutConfig
from engine import TraversalSnapshot, SPEED_PRESETS


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(snapshot: Optional[TraversalSnapshot] = None, speed: str = "slow") -> str:
    snapshot = snapshot or TraversalSnapshot()
    running = snapshot.state == "running"
    pause_icon = "⏸" if running else "▶"
    pause_label = "Pause" if running else "Resume"

    speed_options = []
    for key, seconds in SPEED_PRESETS.items():
        sel = 'selected' if key == speed else ''
        speed_options.append(f'<option value="{key}" {sel}>{key.capitalize()} ({seconds}s)</option>')

    return f"""
    <div class="panel playback-controls">
      <h3>⏯ Playback</h3>
      <div class="button-row">
        <button id="btn-step" title="Step (Space)">⏭ Step</button>
        <button id="btn-pause" title="{pause_label} (P)">{pause_icon}</button>
        <button id="btn-reset" title="Reset (R)">⟲ Reset</button>
      </div>
      <label>
        <input type="checkbox" id="auto-step-toggle" {'checked' if snapshot.auto_step else ''}>
        Auto-step (A)
      </label>
      <div class="speed-control">
        <label>Speed:</label>
        <select id="speed-selector">
          {''.join(speed_options)}
        </select>
      </div>
      <div class="step-info">
        Steps: <span id="steps-taken">{snapshot.steps_taken}</span>
        {' <span class="finished-badge">FINISHED</span>' if snapshot.is_finished else ''}
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Graph Generator
# ---------------------------------------------------------------------------
def graph_generator(layout: LayoutConfig) -> str:
    return f"""
    <div class="panel graph-generator">
      <h3>🌐 Graph Generator</h3>
      <label>Min nodes: <input type="number" id="gen-min" value="{layout.min_nodes}" min="1" max="40"></label>
      <label>Max nodes: <input type="number" id="gen-max" value="{layout.max_nodes}" min="1" max="40"></label>
      <label>Seed: <input type="number" id="gen-seed" placeholder="random"></label>
      <button id="btn-generate" class="btn-secondary">Generate (G)</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Traversal Panel
# ---------------------------------------------------------------------------
def traversal_panel(snapshot: Optional[TraversalSnapshot] = None) -> str:
    snapshot = snapshot or TraversalSnapshot()
    if snapshot.state == "ready":
        return """
        <div class="panel traversal-panel">
          <h3>🔎 Breadth-First Search</h3>
          <p class="placeholder">Click a node on the canvas to start BFS.</p>
        </div>
        """

    current = snapshot.current_node if snapshot.current_node is not None else "—"
    order = " → ".join(str(n) for n in snapshot.visit_order) or "—"
    queue = ", ".join(str(n) for n in snapshot.queue) or "empty"

    return f"""
    <div class="panel traversal-panel">
      <h3>🔎 Breadth-First Search</h3>
      <table>
        <tr><td>State:</td><td><strong>{snapshot.state.capitalize()}</strong></td></tr>
        <tr><td>Start:</td><td><strong>{snapshot.start_node}</strong></td></tr>
        <tr><td>Current:</td><td><strong>{current}</strong></td></tr>
        <tr><td>Queue:</td><td><strong>{queue}</strong></td></tr>
        <tr><td>Visit Order:</td><td><strong>{order}</strong></td></tr>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Start Node Picker
# ---------------------------------------------------------------------------
def start_node_picker(node_ids: List[int], start: Optional[int] = None) -> str:
    options = ['<option value="">-- Click on canvas --</option>']
    for nid in node_ids:
        sel = 'selected' if nid == start else ''
        options.append(f'<option value="{nid}" {sel}>{nid}</option>')

    return f"""
    <div class="panel start-node-picker">
      <h3>🎯 Start Node</h3>
      <select id="start-selector">
        {''.join(options)}
      </select>
      <p class="hint">Or click a node on the canvas.</p>
    </div>
    """
