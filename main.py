"""
main.py — BFS Visualizer Flask App
===================================
The web server that powers the visualizer.

Routes:
  GET  /                        – main UI
  GET  /api/state               – snapshot + graph as JSON
  POST /api/graph/generate      – reset and lay out a new graph
  POST /api/bfs/start           – start BFS from {"node_id"}
  POST /api/bfs/click           – hit-test {"x", "y"}; start BFS if ready
  POST /api/bfs/step            – advance one dequeue
  POST /api/bfs/advance         – Space key: step / resume / hint
  POST /api/bfs/pause           – pause
  POST /api/bfs/resume          – resume
  POST /api/bfs/toggle_pause    – P key
  POST /api/bfs/reset           – back to ready
  POST /api/bfs/auto            – set or toggle auto-step
  POST /api/bfs/delay           – step delay in seconds or a speed preset
  POST /api/tick                – elapsed seconds since the last frame

State management:
  One in-process Workspace (graph + layout generator + controller) lives
  in `app.extensions`.  Every route takes the workspace lock, so the core
  only ever sees one caller at a time.  Every mutating route answers with
  the new snapshot and a freshly rendered SVG.
"""

from flask import Flask, render_template_string, request, jsonify
import logging
import math
import random
import threading
import sys
import os
from typing import Optional

# add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import AppConfig, LayoutConfig
from graph import Graph, LayoutGenerator
from engine import TraversalController, TraversalState, SPEED_PRESETS
from logging_config import setup_logging
from ui import (
    render_canvas,
    CanvasConfig,
    playback_controls,
    graph_generator,
    traversal_panel,
    start_node_picker,
)

logger = logging.getLogger(__name__)

app = Flask(__name__)

GENERATE_OPTIONS = ("min_nodes", "max_nodes")


# ---------------------------------------------------------------------------
# Workspace — the single graph / controller pair the UI drives
# ---------------------------------------------------------------------------
class Workspace:
    def __init__(self, config: AppConfig):
        self.config:     AppConfig           = config
        self.layout:     LayoutConfig        = config.layout
        self.graph:      Graph               = Graph(node_radius=config.layout.node_radius)
        self.generator:  LayoutGenerator     = LayoutGenerator(rng=random.Random(config.seed))
        self.controller: TraversalController = TraversalController(self.graph, config.traversal)
        self.speed:      str                 = "slow"
        self.lock:       threading.Lock      = threading.Lock()

        self.canvas = CanvasConfig()
        self.canvas.width       = config.width
        self.canvas.height      = config.height
        self.canvas.node_radius = config.layout.node_radius

        self.regenerate()

    def regenerate(self, layout: Optional[LayoutConfig] = None, seed: Optional[int] = None) -> int:
        self.controller.reset()
        if seed is not None:
            self.generator = LayoutGenerator(rng=random.Random(seed))
        self.layout = layout or self.config.layout
        self.canvas.node_radius = self.layout.node_radius
        return self.generator.generate(self.graph, self.layout)


def init_workspace(config: Optional[AppConfig] = None) -> Workspace:
    ws = Workspace(config or AppConfig())
    app.extensions["bfs_workspace"] = ws
    return ws


def get_workspace() -> Workspace:
    ws = app.extensions.get("bfs_workspace")
    if ws is None:
        ws = init_workspace()
    return ws


def payload(ws: Workspace, **extra) -> dict:
    """Snapshot + rendered fragments the page swaps in after every command."""
    snap = ws.controller.snapshot()
    data = {
        "snapshot":  snap.to_dict(),
        "svg":       render_canvas(ws.graph, snap, ws.canvas),
        "traversal": traversal_panel(snap),
        "playback":  playback_controls(snap, speed=ws.speed),
    }
    data.update(extra)
    return data


# ---------------------------------------------------------------------------
# Request parsing — malformed input answers 400, like every other route
# ---------------------------------------------------------------------------
class InvalidRequest(ValueError):
    pass


def request_data() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidRequest("Request body must be a JSON object")
    return data


def int_field(data: dict, key: str) -> int:
    value = data.get(key)
    if isinstance(value, bool):
        raise InvalidRequest(f"'{key}' must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidRequest(f"'{key}' must be an integer") from None


def float_field(data: dict, key: str) -> float:
    value = data.get(key)
    if isinstance(value, bool):
        raise InvalidRequest(f"'{key}' must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidRequest(f"'{key}' must be a number") from None
    if not math.isfinite(number):
        raise InvalidRequest(f"'{key}' must be a finite number")
    return number


@app.errorhandler(InvalidRequest)
def handle_bad_request(err):
    return jsonify({"error": str(err)}), 400


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    ws = get_workspace()
    with ws.lock:
        snap = ws.controller.snapshot()
        html = render_template_string(INDEX_TEMPLATE,
            svg=render_canvas(ws.graph, snap, ws.canvas),
            playback=playback_controls(snap, speed=ws.speed),
            graph_gen=graph_generator(ws.layout),
            traversal=traversal_panel(snap),
            picker=start_node_picker(ws.graph.node_ids(), snap.start_node),
        )
    return html


@app.route("/api/state")
def api_state():
    ws = get_workspace()
    with ws.lock:
        snap = ws.controller.snapshot()
        return jsonify({"snapshot": snap.to_dict(), "graph": ws.graph.to_dict()})


# ---------------------------------------------------------------------------
# API: Graph Generation
# ---------------------------------------------------------------------------
@app.route("/api/graph/generate", methods=["POST"])
def api_graph_generate():
    data = request_data()
    ws = get_workspace()

    overrides = {}
    for key in GENERATE_OPTIONS:
        if data.get(key) is not None:
            overrides[key] = int_field(data, key)
    seed = int_field(data, "seed") if data.get("seed") is not None else None

    try:
        layout = ws.config.layout.with_overrides(**overrides)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    with ws.lock:
        count = ws.regenerate(layout, seed=seed)
        logger.info("Regenerated graph with %d nodes (seed=%s)", count, seed)
        ids = ws.graph.node_ids()
        return jsonify(payload(ws, node_ids=ids, node_count=count,
                               picker=start_node_picker(ids)))


# ---------------------------------------------------------------------------
# API: Traversal Commands
# ---------------------------------------------------------------------------
@app.route("/api/bfs/start", methods=["POST"])
def api_bfs_start():
    node_id = int_field(request_data(), "node_id")
    ws = get_workspace()
    with ws.lock:
        ws.controller.start_bfs(node_id)
        return jsonify(payload(ws))


@app.route("/api/bfs/click", methods=["POST"])
def api_bfs_click():
    data = request_data()
    x, y = float_field(data, "x"), float_field(data, "y")
    ws = get_workspace()
    with ws.lock:
        node_id = ws.graph.node_at(x, y)
        if node_id is not None and ws.controller.state == TraversalState.READY:
            ws.controller.start_bfs(node_id)
        return jsonify(payload(ws, node_id=node_id))


@app.route("/api/bfs/step", methods=["POST"])
def api_bfs_step():
    ws = get_workspace()
    with ws.lock:
        ws.controller.step()
        return jsonify(payload(ws))


@app.route("/api/bfs/advance", methods=["POST"])
def api_bfs_advance():
    ws = get_workspace()
    message = ""
    with ws.lock:
        state = ws.controller.state
        if state == TraversalState.READY:
            message = "Click on a node to start BFS"
        elif state == TraversalState.RUNNING:
            ws.controller.step()
        elif state == TraversalState.PAUSED:
            ws.controller.resume()
        return jsonify(payload(ws, message=message))


@app.route("/api/bfs/pause", methods=["POST"])
def api_bfs_pause():
    ws = get_workspace()
    with ws.lock:
        ws.controller.pause()
        return jsonify(payload(ws))


@app.route("/api/bfs/resume", methods=["POST"])
def api_bfs_resume():
    ws = get_workspace()
    with ws.lock:
        ws.controller.resume()
        return jsonify(payload(ws))


@app.route("/api/bfs/toggle_pause", methods=["POST"])
def api_bfs_toggle_pause():
    ws = get_workspace()
    with ws.lock:
        if ws.controller.state == TraversalState.RUNNING:
            ws.controller.pause()
        elif ws.controller.state == TraversalState.PAUSED:
            ws.controller.resume()
        return jsonify(payload(ws))


@app.route("/api/bfs/reset", methods=["POST"])
def api_bfs_reset():
    ws = get_workspace()
    with ws.lock:
        ws.controller.reset()
        return jsonify(payload(ws))


# ---------------------------------------------------------------------------
# API: Auto-step
# ---------------------------------------------------------------------------
@app.route("/api/bfs/auto", methods=["POST"])
def api_bfs_auto():
    data = request_data()
    enabled = data.get("enabled")
    if enabled is not None and not isinstance(enabled, bool):
        raise InvalidRequest("'enabled' must be a boolean")
    ws = get_workspace()
    with ws.lock:
        if enabled is None:
            ws.controller.toggle_auto_step()
        else:
            ws.controller.set_auto_step(enabled)
        return jsonify(payload(ws))


@app.route("/api/bfs/delay", methods=["POST"])
def api_bfs_delay():
    data = request_data()
    ws = get_workspace()
    preset = data.get("preset")
    if preset is not None:
        if not isinstance(preset, str) or preset not in SPEED_PRESETS:
            return jsonify({"error": f"Unknown speed preset: {preset}"}), 400
        with ws.lock:
            ws.speed = preset
            ws.controller.set_speed(preset)
            return jsonify(payload(ws))

    seconds = float_field(data, "seconds")
    if seconds < 0:
        return jsonify({"error": "'seconds' must not be negative"}), 400
    with ws.lock:
        ws.controller.set_step_delay(seconds)
        return jsonify(payload(ws))


@app.route("/api/tick", methods=["POST"])
def api_tick():
    dt = float_field(request_data(), "dt")
    if dt < 0:
        return jsonify({"error": "'dt' must not be negative"}), 400
    ws = get_workspace()
    with ws.lock:
        stepped = ws.controller.tick(dt)
        return jsonify(payload(ws, stepped=stepped))


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>BFS Visualizer</title>
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link href="https://fonts.googleapis.com/css2?family=Share+Tech&family=DM+Sans:wght@400;500;700&display=swap" rel="stylesheet">
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --text-muted: #484f58;
      --accent-cyan: #0ea5e9;
    }

    body {
      font-family: 'DM Sans', -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }

    /* Sidebar */
    #sidebar {
      width: 320px;
      background: var(--bg-dark);
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 24px 16px;
    }

    /* Canvas */
    #main {
      flex: 1;
      display: flex;
      align-items: center;
      justify-content: center;
      padding: 16px;
    }

    #canvas-svg svg {
      max-width: 100%;
      max-height: calc(100vh - 32px);
      cursor: pointer;
      border-radius: 8px;
    }

    /* Panels */
    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 16px;
      margin-bottom: 16px;
    }

    .panel h3 {
      font-size: 14px;
      font-weight: 700;
      text-transform: uppercase;
      letter-spacing: 0.5px;
      margin-bottom: 12px;
      color: var(--accent-cyan);
    }

    .panel label { display: block; margin: 6px 0; color: var(--text-secondary); font-size: 13px; }
    .panel input, .panel select {
      background: var(--bg-darker);
      color: var(--text-primary);
      border: 1px solid var(--border);
      border-radius: 6px;
      padding: 4px 8px;
    }

    .panel table { width: 100%; font-size: 13px; color: var(--text-secondary); }
    .panel td strong { color: var(--text-primary); }

    .button-row { display: flex; gap: 8px; margin-bottom: 8px; }

    button {
      background: var(--bg-darker);
      color: var(--text-primary);
      border: 1px solid var(--border);
      border-radius: 8px;
      padding: 6px 12px;
      cursor: pointer;
    }
    button:hover { border-color: var(--accent-cyan); }

    .finished-badge { color: #10b981; font-weight: 700; }
    .placeholder, .hint { font-size: 12px; color: var(--text-muted); font-style: italic; }
    #message { min-height: 18px; font-size: 13px; color: #f59e0b; margin-bottom: 12px; }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="message"></div>
    <div id="traversal">{{ traversal|safe }}</div>
    <div id="playback">{{ playback|safe }}</div>
    <div id="picker">{{ picker|safe }}</div>
    <div id="graph-gen">{{ graph_gen|safe }}</div>
  </div>

  <div id="main">
    <div id="canvas-svg">{{ svg|safe }}</div>
  </div>

  <script>
    let snapshot = null;

    // API helpers
    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data || {}),
      });
      const json = await res.json();
      if (json.error) {
        document.getElementById('message').textContent = json.error;
        return json;
      }
      apply(json);
      return json;
    }

    function apply(data) {
      if (data.svg) document.getElementById('canvas-svg').innerHTML = data.svg;
      if (data.traversal) document.getElementById('traversal').innerHTML = data.traversal;
      if (data.playback) {
        document.getElementById('playback').innerHTML = data.playback;
        bindPlayback();
      }
      if (data.picker) {
        document.getElementById('picker').innerHTML = data.picker;
        bindPicker();
      }
      if (data.snapshot) snapshot = data.snapshot;
      document.getElementById('message').textContent = data.message || '';
    }

    // Commands
    const generate = () => {
      const body = {};
      const min = document.getElementById('gen-min')?.value;
      const max = document.getElementById('gen-max')?.value;
      const seed = document.getElementById('gen-seed')?.value;
      if (min) body.min_nodes = parseInt(min, 10);
      if (max) body.max_nodes = parseInt(max, 10);
      if (seed) body.seed = parseInt(seed, 10);
      return post('/api/graph/generate', body);
    };

    function bindPlayback() {
      document.getElementById('btn-step')?.addEventListener('click', () => post('/api/bfs/step'));
      document.getElementById('btn-pause')?.addEventListener('click', () => post('/api/bfs/toggle_pause'));
      document.getElementById('btn-reset')?.addEventListener('click', () => post('/api/bfs/reset'));
      document.getElementById('auto-step-toggle')?.addEventListener('change', (e) =>
        post('/api/bfs/auto', {enabled: e.target.checked}));
      document.getElementById('speed-selector')?.addEventListener('change', (e) =>
        post('/api/bfs/delay', {preset: e.target.value}));
    }

    function bindPicker() {
      document.getElementById('start-selector')?.addEventListener('change', (e) => {
        if (e.target.value !== '') post('/api/bfs/start', {node_id: parseInt(e.target.value, 10)});
      });
    }

    document.getElementById('btn-generate')?.addEventListener('click', generate);
    bindPlayback();
    bindPicker();

    // Click on canvas → hit-test in SVG coordinates
    document.getElementById('canvas-svg').addEventListener('click', (e) => {
      const svg = document.querySelector('#canvas-svg svg');
      if (!svg) return;
      const pt = svg.createSVGPoint();
      pt.x = e.clientX;
      pt.y = e.clientY;
      const p = pt.matrixTransform(svg.getScreenCTM().inverse());
      post('/api/bfs/click', {x: p.x, y: p.y});
    });

    // Keyboard: Space step/resume, R reset, A auto-step, G regenerate, P pause
    document.addEventListener('keydown', (e) => {
      if (e.target.tagName === 'INPUT' || e.target.tagName === 'SELECT') return;
      switch (e.key.toLowerCase()) {
        case ' ': e.preventDefault(); post('/api/bfs/advance'); break;
        case 'r': post('/api/bfs/reset'); break;
        case 'a': post('/api/bfs/auto'); break;
        case 'g': generate(); break;
        case 'p': post('/api/bfs/toggle_pause'); break;
      }
    });

    // Frame loop: forward elapsed time while auto-stepping
    let last = performance.now();
    let inFlight = false;
    setInterval(async () => {
      if (inFlight) return;
      const now = performance.now();
      const dt = (now - last) / 1000;
      last = now;
      if (!snapshot || !snapshot.auto_step || snapshot.state !== 'running') return;
      inFlight = true;
      try {
        await post('/api/tick', {dt: dt});
      } finally {
        inFlight = false;
      }
    }, 50);

    fetch('/api/state').then(r => r.json()).then(d => { snapshot = d.snapshot; });
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    config = AppConfig.from_env()
    setup_logging(config.log_level)
    init_workspace(config)
    logger.info("BFS Visualizer listening on http://%s:%d", config.host, config.port)
    app.run(debug=True, host=config.host, port=config.port)
