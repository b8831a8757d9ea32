"""
traversal.py — Step-by-Step BFS Controller
===========================================
The TraversalController is the ONLY object the UI drives during a run.
It owns the BFS data structures and exposes a start/step/pause/resume/
reset/tick API that advances exactly one dequeue per step.

State machine (see _TRANSITIONS):
    any      →  start_bfs() →  RUNNING
    RUNNING  →  step()      →  RUNNING | FINISHED (queue drained)
    RUNNING  →  pause()     →  PAUSED
    PAUSED   →  resume()    →  RUNNING
    any      →  reset()     →  READY

Commands issued in a state the table does not list are ignored.  There
is no error channel: callers read `state` before issuing transitions
they care about.

Thread safety:
  This class is NOT thread-safe.  The web layer serialises calls behind
  a single lock.
"""

import logging
import math
from collections import deque
from enum import Enum
from typing import Deque, Dict, FrozenSet, List, Optional, Set, Tuple

from config import TraversalConfig
from engine.snapshot import TraversalSnapshot
from graph import Graph

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States & commands
# ---------------------------------------------------------------------------
class TraversalState(Enum):
    READY    = "ready"
    RUNNING  = "running"
    PAUSED   = "paused"
    FINISHED = "finished"


class Command(Enum):
    START  = "start"
    STEP   = "step"
    DRAIN  = "drain"     # queue ran empty during a step
    PAUSE  = "pause"
    RESUME = "resume"
    RESET  = "reset"


_ALL_STATES = tuple(TraversalState)

_TRANSITIONS: Dict[Tuple[TraversalState, Command], TraversalState] = {
    **{(s, Command.START): TraversalState.RUNNING for s in _ALL_STATES},
    **{(s, Command.RESET): TraversalState.READY for s in _ALL_STATES},
    (TraversalState.RUNNING, Command.STEP):   TraversalState.RUNNING,
    (TraversalState.RUNNING, Command.DRAIN):  TraversalState.FINISHED,
    (TraversalState.RUNNING, Command.PAUSE):  TraversalState.PAUSED,
    (TraversalState.PAUSED,  Command.RESUME): TraversalState.RUNNING,
}


# ---------------------------------------------------------------------------
# Speed presets (seconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1.0,    # teaching mode
    "medium": 0.4,
    "fast":   0.15,   # demo mode
    "turbo":  0.05,
}

MIN_STEP_DELAY = 0.02


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------
class TraversalController:
    """
    Attributes:
        graph       : The Graph being traversed (display states are written here).
        state       : Current TraversalState.
        auto_step   : Whether tick() may fire steps.
        step_delay  : Seconds between auto-steps.
    """

    def __init__(self, graph: Graph, config: Optional[TraversalConfig] = None):
        config = config or TraversalConfig()
        self.graph:       Graph          = graph
        self.state:       TraversalState = TraversalState.READY
        self.auto_step:   bool           = config.auto_step
        self.step_delay:  float          = max(MIN_STEP_DELAY, config.step_delay)
        self._default_delay: float       = self.step_delay

        self._queue:        Deque[int]    = deque()
        self._visited:      Set[int]      = set()
        self._visit_order:  List[int]     = []
        self._current:      Optional[int] = None
        self._start:        Optional[int] = None
        self._steps_taken:  int           = 0
        self._time_since_last_step: float = 0.0

    # ------------------------------------------------------------------
    # Transition table
    # ------------------------------------------------------------------
    def _transition(self, command: Command) -> bool:
        nxt = _TRANSITIONS.get((self.state, command))
        if nxt is None:
            logger.debug("Ignoring %s while %s", command.value, self.state.value)
            return False
        self.state = nxt
        return True

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def start_bfs(self, start_id: int) -> None:
        if start_id not in self.graph:
            logger.debug("Ignoring start on unknown node %r", start_id)
            return

        self.reset()
        self._transition(Command.START)
        self._start = start_id
        self._queue.append(start_id)
        self._visited.add(start_id)
        self._visit_order.append(start_id)

        self._update_node_states()
        logger.info("Started BFS from node %d", start_id)

    def step(self) -> None:
        if self.state != TraversalState.RUNNING:
            logger.debug("Ignoring step while %s", self.state.value)
            return

        if not self._queue:
            self._finish()
            return

        self._transition(Command.STEP)
        self._current = self._queue.popleft()
        self._steps_taken += 1

        node = self.graph.get_node(self._current)
        if node is not None:
            for nbr in node.neighbors:
                if nbr not in self._visited:
                    self._visited.add(nbr)
                    self._queue.append(nbr)
                    self._visit_order.append(nbr)

        if self._queue:
            self._update_node_states()
        else:
            self._finish()

    def pause(self) -> None:
        self._transition(Command.PAUSE)

    def resume(self) -> None:
        self._transition(Command.RESUME)

    def reset(self) -> None:
        self._transition(Command.RESET)
        self._queue.clear()
        self._visited.clear()
        self._visit_order.clear()
        self._current = None
        self._start = None
        self._steps_taken = 0
        self._time_since_last_step = 0.0
        self.graph.reset_states()

    # ------------------------------------------------------------------
    # Auto-step  (call once per frame with the elapsed seconds)
    # ------------------------------------------------------------------
    def tick(self, delta_time: float) -> bool:
        """
        Accumulate `delta_time`; once the step delay is reached fire one
        step and zero the accumulator.  At most one step per call, even
        if several delays have elapsed.  Returns True if a step fired.
        """
        if not self.auto_step or self.state != TraversalState.RUNNING:
            return False
        if not math.isfinite(delta_time) or delta_time < 0:
            logger.debug("Ignoring tick of %r seconds", delta_time)
            return False
        self._time_since_last_step += delta_time
        if self._time_since_last_step >= self.step_delay:
            self.step()
            self._time_since_last_step = 0.0
            return True
        return False

    def set_auto_step(self, enabled: bool) -> None:
        self.auto_step = bool(enabled)

    def toggle_auto_step(self) -> bool:
        self.auto_step = not self.auto_step
        return self.auto_step

    def set_step_delay(self, seconds: float) -> None:
        self.step_delay = max(MIN_STEP_DELAY, seconds)

    def set_speed(self, preset: str) -> None:
        self.step_delay = SPEED_PRESETS.get(preset, self._default_delay)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def queue(self) -> Tuple[int, ...]:
        return tuple(self._queue)

    @property
    def visited(self) -> FrozenSet[int]:
        return frozenset(self._visited)

    @property
    def visit_order(self) -> Tuple[int, ...]:
        return tuple(self._visit_order)

    @property
    def current_node(self) -> Optional[int]:
        return self._current

    @property
    def start_node(self) -> Optional[int]:
        return self._start

    @property
    def steps_taken(self) -> int:
        return self._steps_taken

    @property
    def is_running(self) -> bool:
        return self.state == TraversalState.RUNNING

    @property
    def is_finished(self) -> bool:
        return self.state == TraversalState.FINISHED

    def snapshot(self) -> TraversalSnapshot:
        return TraversalSnapshot(
            state=self.state.value,
            queue=self.queue,
            visit_order=self.visit_order,
            current_node=self._current,
            start_node=self._start,
            auto_step=self.auto_step,
            step_delay=self.step_delay,
            steps_taken=self._steps_taken,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _finish(self) -> None:
        self._transition(Command.DRAIN)
        self._current = None
        self._update_node_states()
        logger.info("BFS finished: visit order %s", self._visit_order)

    def _update_node_states(self) -> None:
        # overwrite order matters: a queued node is also in visited
        self.graph.reset_states()
        for node_id in self._visit_order:
            node = self.graph.get_node(node_id)
            if node:
                node.mark_visited()
        for node_id in self._queue:
            node = self.graph.get_node(node_id)
            if node:
                node.mark_in_queue()
        if self._current is not None:
            node = self.graph.get_node(self._current)
            if node:
                node.mark_current()
