"""
Shared fixtures for the visualizer test-suite.
"""

import random
from collections import deque

import pytest

from config import AppConfig, LayoutConfig
from engine import TraversalController
from graph import Graph, LayoutGenerator


def build_graph(positions, edges, node_radius=40.0):
    """Graph from {id: (x, y)} and [(a, b), ...]."""
    g = Graph(node_radius=node_radius)
    for node_id, (x, y) in positions.items():
        g.add_node(node_id, x, y)
    for a, b in edges:
        g.add_edge(a, b)
    return g


def reachable(graph, start):
    """Plain BFS reachability, independent of the controller."""
    seen = {start}
    queue = deque([start])
    while queue:
        for nbr in graph.get_node(queue.popleft()).neighbors:
            if nbr not in seen:
                seen.add(nbr)
                queue.append(nbr)
    return seen


def generated_graph(seed, config=None):
    g = Graph()
    LayoutGenerator(rng=random.Random(seed)).generate(g, config or LayoutConfig())
    return g


@pytest.fixture
def four_node_graph():
    """0-1, 0-2, 1-3 laid out on a diamond."""
    return build_graph(
        {0: (500, 100), 1: (400, 250), 2: (600, 250), 3: (400, 400)},
        [(0, 1), (0, 2), (1, 3)],
    )


@pytest.fixture
def controller(four_node_graph):
    return TraversalController(four_node_graph)


@pytest.fixture
def app_client():
    import main

    main.init_workspace(AppConfig(seed=7))
    main.app.config["TESTING"] = True
    with main.app.test_client() as client:
        yield client
    main.app.extensions.pop("bfs_workspace", None)
