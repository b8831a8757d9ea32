"""
engine/
-------
Traversal layer.

    from engine import TraversalController, TraversalState, TraversalSnapshot
"""

from engine.snapshot  import TraversalSnapshot
from engine.traversal import TraversalController, TraversalState, Command, SPEED_PRESETS

__all__ = [
    "TraversalController",
    "TraversalState",
    "TraversalSnapshot",
    "Command",
    "SPEED_PRESETS",
]
