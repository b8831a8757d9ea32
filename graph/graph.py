"""
graph.py — Graph Container
===========================
Single source of truth for the graph.  The layout generator writes it,
the traversal controller updates display states on it, the renderer
reads it.

Responsibilities:
  1. Node / edge construction              (add_node / add_edge / clear)
  2. Lookup                                (get_node, node_at hit-test)
  3. Iteration for rendering               (nodes, edges — each edge once)
  4. Reset + serialisation helpers

Design decisions:
  - Nodes are stored in a plain dict keyed by integer id and owned
    exclusively by the Graph.  Everything else refers to nodes by id.
  - Adjacency lives on the nodes as ordered id lists; `add_edge` writes
    both ends so the graph is always undirected and symmetric.
  - Dict insertion order is the iteration order, which keeps edge
    dedup (a < b) and hit-testing deterministic.
"""

from typing import Dict, Iterator, List, Optional, Tuple

from graph.node import Node


class Graph:
    """
    Attributes:
        nodes       : {node_id: Node}
        node_radius : circle radius used by node_at() hit-testing
    """

    def __init__(self, node_radius: float = 40.0):
        self.nodes: Dict[int, Node] = {}
        self.node_radius: float     = node_radius

    # ==================================================================
    # CONSTRUCTION
    # ==================================================================
    def add_node(self, node_id: int, x: float, y: float) -> Node:
        """Create a node, or move an existing one (its adjacency is kept)."""
        node = self.nodes.get(node_id)
        if node is None:
            node = Node(node_id, x, y)
            self.nodes[node_id] = node
        else:
            node.x, node.y = x, y
        return node

    def add_edge(self, a: int, b: int) -> bool:
        """
        Undirected edge a–b.  Ignored (returns False) when either end is
        missing, when a == b, or when the two are already adjacent.
        """
        node_a = self.nodes.get(a)
        node_b = self.nodes.get(b)
        if node_a is None or node_b is None or a == b:
            return False
        if node_a.is_adjacent(b):
            return False
        node_a.add_neighbor(b)
        node_b.add_neighbor(a)
        return True

    def has_edge(self, a: int, b: int) -> bool:
        node = self.nodes.get(a)
        return node is not None and node.is_adjacent(b)

    def clear(self) -> None:
        self.nodes.clear()

    # ==================================================================
    # LOOKUP
    # ==================================================================
    def get_node(self, node_id: int) -> Optional[Node]:
        return self.nodes.get(node_id)

    def node_at(self, x: float, y: float) -> Optional[int]:
        """Id of the first node whose circle contains (x, y), or None."""
        for node_id, node in self.nodes.items():
            if node.contains(x, y, self.node_radius):
                return node_id
        return None

    def neighbours(self, node_id: int) -> List[int]:
        node = self.nodes.get(node_id)
        return list(node.neighbors) if node else []

    # ==================================================================
    # ITERATION (renderer)
    # ==================================================================
    def node_ids(self) -> List[int]:
        return list(self.nodes.keys())

    def edges(self) -> List[Tuple[int, int]]:
        """Every undirected edge exactly once, as (low_id, high_id)."""
        result = []
        for node_id, node in self.nodes.items():
            for nbr in node.neighbors:
                if node_id < nbr and nbr in self.nodes:
                    result.append((node_id, nbr))
        return result

    def edge_count(self) -> int:
        return len(self.edges())

    # ==================================================================
    # RESET / SERIALISATION
    # ==================================================================
    def reset_states(self) -> None:
        for node in self.nodes.values():
            node.reset_state()

    def to_dict(self) -> dict:
        return {
            "node_radius": self.node_radius,
            "nodes":       [n.to_dict() for n in self.nodes.values()],
            "edges":       [list(e) for e in self.edges()],
        }

    # ==================================================================
    # Dunder
    # ==================================================================
    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes.values())

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id) -> bool:
        return node_id in self.nodes

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self.nodes)}, edges={self.edge_count()})"
