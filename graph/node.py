from enum import Enum
from typing import List, Tuple


# ---------------------------------------------------------------------------
# Node State Enum — maps 1-to-1 with the visual encoding palette
# ---------------------------------------------------------------------------
class NodeState(Enum):
    UNVISITED = "unvisited"   # default — not yet discovered
    IN_QUEUE  = "in_queue"    # discovered, waiting in the BFS queue
    CURRENT   = "current"     # the node dequeued on the latest step
    VISITED   = "visited"     # discovered and already dequeued


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
class Node:
    """
    Immutable identity, mutable position / display state / adjacency.

    Attributes:
        id        : Non-negative integer, unique within its Graph.
        x, y      : Canvas coordinates (pixels).
        state     : Current NodeState — render-only, never read by BFS itself.
        neighbors : Ordered neighbour ids.  The Graph keeps this symmetric;
                    BFS expands neighbours in exactly this order.
    """

    __slots__ = ("id", "x", "y", "state", "neighbors")

    def __init__(self, node_id: int, x: float = 0.0, y: float = 0.0):
        self.id: int               = node_id
        self.x: float              = x
        self.y: float              = y
        self.state: NodeState      = NodeState.UNVISITED
        self.neighbors: List[int]  = []

    # ------------------------------------------------------------------
    # Adjacency
    # ------------------------------------------------------------------
    def add_neighbor(self, neighbor_id: int) -> bool:
        """Append unless it is ourselves or already present.  Returns True if added."""
        if neighbor_id == self.id or neighbor_id in self.neighbors:
            return False
        self.neighbors.append(neighbor_id)
        return True

    def is_adjacent(self, neighbor_id: int) -> bool:
        return neighbor_id in self.neighbors

    def degree(self) -> int:
        return len(self.neighbors)

    # ------------------------------------------------------------------
    # State helpers (used by the traversal controller)
    # ------------------------------------------------------------------
    def reset_state(self) -> None:
        self.state = NodeState.UNVISITED

    def mark_visited(self) -> None:
        self.state = NodeState.VISITED

    def mark_in_queue(self) -> None:
        self.state = NodeState.IN_QUEUE

    def mark_current(self) -> None:
        self.state = NodeState.CURRENT

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def contains(self, px: float, py: float, radius: float) -> bool:
        """Point-in-circle test, boundary inclusive."""
        dx = px - self.x
        dy = py - self.y
        return dx * dx + dy * dy <= radius * radius

    # ------------------------------------------------------------------
    # Serialisation  (JSON API)
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":        self.id,
            "x":         self.x,
            "y":         self.y,
            "state":     self.state.value,
            "neighbors": list(self.neighbors),
        }

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id}, state={self.state.value}, pos=({self.x:.2f},{self.y:.2f}), degree={self.degree()})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
