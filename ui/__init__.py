"""
ui/
---
Presentation layer.

    from ui import render_canvas
    from ui import playback_controls, graph_generator, …
"""

from ui.canvas import render_canvas, CanvasConfig, info_lines

from ui.controls import (
    playback_controls,
    graph_generator,
    traversal_panel,
    start_node_picker,
)

__all__ = [
    "render_canvas",
    "CanvasConfig",
    "info_lines",
    "playback_controls",
    "graph_generator",
    "traversal_panel",
    "start_node_picker",
]
