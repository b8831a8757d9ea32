"""
layout.py — Procedural Layout Generator
========================================
Fills a Graph with a random, collision-free, connected layout.

Placement (node 0 always sits on the configured centre), then for every
further node three strategies in strict priority order, each with its
own retry budget:

    1. Ring    – random angle / radius in the placement band + jitter
    2. Grid    – fixed cell derived from the node index + small jitter
    3. Random  – uniform anywhere in the region

A candidate is accepted only if it keeps `safe_min_distance` from every
node already placed.  If all three budgets run dry the layout simply
stops at the nodes placed so far.

Connectivity:
    Phase 1 – spanning tree: each node links to its nearest already
              connected predecessor  →  exactly n-1 edges, always connected.
    Phase 2 – extra edges: a few distance-weighted random links per node
              so the traversal has something interesting to do.
"""

import logging
import math
import random
from typing import List, Optional, Tuple

from config import LayoutConfig
from graph.graph import Graph

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

EXTRA_CONNECTIONS = (1, 3)   # inclusive range of extra-edge attempts per node
BASE_EDGE_PROB    = 0.6
MIN_EDGE_PROB     = 0.05
GRID_JITTER       = 0.2      # fraction of grid spacing


def _distance(a: Point, b: Point) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


class LayoutGenerator:
    """
    Stateless between calls apart from the random source.

    Usage:
        gen = LayoutGenerator(rng=random.Random(7))
        count = gen.generate(graph, LayoutConfig())
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    # ==================================================================
    # Public
    # ==================================================================
    def generate(self, graph: Graph, config: LayoutConfig) -> int:
        """Replace the graph's contents with a fresh layout.  Returns the realized node count."""
        graph.clear()
        graph.node_radius = config.node_radius

        target = self.rng.randint(config.min_nodes, config.max_nodes)
        positions = self.generate_positions(target, config)
        for node_id, (x, y) in enumerate(positions):
            graph.add_node(node_id, x, y)

        self.connect(graph, positions, config)

        logger.info(
            "Generated layout: %d/%d nodes, %d edges",
            len(positions), target, graph.edge_count(),
        )
        return len(positions)

    def generate_positions(self, target: int, config: LayoutConfig) -> List[Point]:
        positions: List[Point] = []
        for i in range(target):
            if i == 0:
                positions.append((config.center_x, config.center_y))
                continue

            pos = self._place(i, target, positions, config)
            if pos is None:
                logger.debug("Failed to place node %d; reducing graph to %d nodes", i, i)
                break
            positions.append(pos)
        return positions

    def connect(self, graph: Graph, positions: List[Point], config: LayoutConfig) -> None:
        self._spanning_tree(graph, positions)
        self._extra_edges(graph, positions, config)

    def _spanning_tree(self, graph: Graph, positions: List[Point]) -> None:
        """Each node links to its nearest already-connected predecessor: n-1 edges."""
        count = len(positions)
        connected = [False] * count
        if count:
            connected[0] = True
        for i in range(1, count):
            best, best_dist = None, math.inf
            for j in range(i):
                if not connected[j]:
                    continue
                d = _distance(positions[i], positions[j])
                if d < best_dist:
                    best, best_dist = j, d
            if best is not None:
                graph.add_edge(i, best)
                connected[i] = True

    def _extra_edges(self, graph: Graph, positions: List[Point], config: LayoutConfig) -> None:
        count = len(positions)
        max_connect = config.max_connect_distance
        for i in range(count):
            for _ in range(self.rng.randint(*EXTRA_CONNECTIONS)):
                for j in range(i + 1, count):
                    if graph.has_edge(i, j):
                        continue
                    d = _distance(positions[i], positions[j])
                    probability = max(MIN_EDGE_PROB, BASE_EDGE_PROB - d / max_connect)
                    if self.rng.random() < probability:
                        graph.add_edge(i, j)
                        break

    # ==================================================================
    # Placement strategies
    # ==================================================================
    def _place(self, index: int, target: int, placed: List[Point], config: LayoutConfig) -> Optional[Point]:
        strategies = (
            ("ring",   config.ring_attempts,   lambda: self.ring_position(config)),
            ("grid",   config.grid_attempts,   lambda: self.grid_position(index, target, config)),
            ("random", config.random_attempts, lambda: self.random_position(config)),
        )
        for name, attempts, candidate in strategies:
            for attempt in range(attempts):
                pos = candidate()
                if is_valid_position(pos, placed, config.safe_min_distance):
                    logger.debug("Node %d: %s placement (attempt %d)", index, name, attempt + 1)
                    return pos
        return None

    def ring_position(self, config: LayoutConfig) -> Point:
        angle  = self.rng.uniform(0.0, 2.0 * math.pi)
        radius = self.rng.uniform(config.min_radius, config.max_radius)
        x = config.center_x + radius * math.cos(angle)
        y = config.center_y + radius * math.sin(angle)

        offset = config.random_offset_range
        x += (self.rng.random() - 0.5) * offset
        y += (self.rng.random() - 0.5) * offset
        return clamp_to_bounds((x, y), config)

    def grid_position(self, index: int, target: int, config: LayoutConfig) -> Point:
        side = math.ceil(math.sqrt(target)) + 1
        gx = (index - 1) % side          # node 0 owns the centre, not a cell
        gy = (index - 1) // side

        spacing = config.grid_spacing
        x = config.left + (gx + 1) * spacing
        y = config.top + (gy + 1) * spacing

        jitter = spacing * GRID_JITTER
        x += (self.rng.random() - 0.5) * jitter
        y += (self.rng.random() - 0.5) * jitter
        return clamp_to_bounds((x, y), config)

    def random_position(self, config: LayoutConfig) -> Point:
        return (
            self.rng.uniform(config.left, config.right),
            self.rng.uniform(config.top, config.bottom),
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def is_valid_position(pos: Point, placed: List[Point], min_distance: float) -> bool:
    return all(_distance(pos, other) >= min_distance for other in placed)


def clamp_to_bounds(pos: Point, config: LayoutConfig) -> Point:
    x = max(config.left, min(config.right, pos[0]))
    y = max(config.top, min(config.bottom, pos[1]))
    return (x, y)
