"""
snapshot.py — Traversal Snapshot
=================================
A frozen-in-time picture of the traversal controller, everything the
renderer and the JSON API need for one frame:

    • run state (ready / running / paused / finished)
    • queue contents in FIFO order (for the queue strip)
    • visit order so far
    • current and start node
    • auto-step flag and delay

Design decisions:
  - Plain frozen dataclass.  The controller is the only writer; the
    renderer and the web layer are pure readers.
  - Sequences are tuples so a snapshot can never alias controller state.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class TraversalSnapshot:
    """
    Attributes:
        state        : TraversalState value string ("ready", "running", …).
        queue        : Pending node ids, front first.
        visit_order  : Node ids in discovery order, start node first.
        current_node : Node dequeued on the latest step, or None.
        start_node   : Node the run started from, or None.
        auto_step    : Whether tick() may fire steps.
        step_delay   : Seconds between auto-steps.
        steps_taken  : Number of step() calls that advanced this run.
    """

    state:        str                 = "ready"
    queue:        Tuple[int, ...]     = ()
    visit_order:  Tuple[int, ...]     = ()
    current_node: Optional[int]       = None
    start_node:   Optional[int]       = None
    auto_step:    bool                = False
    step_delay:   float               = 1.0
    steps_taken:  int                 = 0

    @property
    def is_finished(self) -> bool:
        return self.state == "finished"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state":        self.state,
            "queue":        list(self.queue),
            "visit_order":  list(self.visit_order),
            "current_node": self.current_node,
            "start_node":   self.start_node,
            "auto_step":    self.auto_step,
            "step_delay":   self.step_delay,
            "steps_taken":  self.steps_taken,
        }
