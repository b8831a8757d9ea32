"""
Layout generator: placement guarantees, connectivity, degradation.
"""

import math
import random

import pytest
from hypothesis import given, settings, strategies as st

from config import LayoutConfig
from graph import Graph, LayoutGenerator
from graph.layout import clamp_to_bounds, is_valid_position
from tests.conftest import generated_graph, reachable


seeds = st.integers(min_value=0, max_value=2**32 - 1)


# =============================================================================
# PROPERTIES OVER RANDOM SEEDS
# =============================================================================

@settings(max_examples=60, deadline=None)
@given(seed=seeds)
def test_generated_graph_is_connected(seed):
    g = generated_graph(seed)
    assert 1 <= len(g) <= 12
    assert reachable(g, 0) == set(g.node_ids())


@settings(max_examples=60, deadline=None)
@given(seed=seeds)
def test_ids_are_dense_and_adjacency_symmetric(seed):
    g = generated_graph(seed)
    assert g.node_ids() == list(range(len(g)))
    for node in g:
        assert node.id not in node.neighbors
        assert len(set(node.neighbors)) == len(node.neighbors)
        for nbr in node.neighbors:
            assert node.id in g.get_node(nbr).neighbors


@settings(max_examples=60, deadline=None)
@given(seed=seeds)
def test_nodes_keep_minimum_separation(seed):
    config = LayoutConfig()
    g = generated_graph(seed, config)
    nodes = list(g)
    for i, a in enumerate(nodes):
        for b in nodes[i + 1:]:
            assert math.hypot(a.x - b.x, a.y - b.y) >= config.safe_min_distance


@settings(max_examples=60, deadline=None)
@given(seed=seeds)
def test_nodes_stay_inside_region(seed):
    config = LayoutConfig()
    g = generated_graph(seed, config)
    for node in g:
        assert config.left <= node.x <= config.right
        assert config.top <= node.y <= config.bottom


@settings(max_examples=40, deadline=None)
@given(seed=seeds)
def test_spanning_tree_gives_at_least_n_minus_one_edges(seed):
    g = generated_graph(seed)
    assert g.edge_count() >= len(g) - 1


# =============================================================================
# FIXED SCENARIOS
# =============================================================================

def test_first_node_sits_on_centre():
    config = LayoutConfig()
    g = generated_graph(3, config)
    assert g.get_node(0).position == (config.center_x, config.center_y)


def test_single_node_target():
    config = LayoutConfig(min_nodes=1, max_nodes=1)
    g = generated_graph(0, config)
    assert len(g) == 1
    assert g.edge_count() == 0
    assert g.get_node(0).position == (config.center_x, config.center_y)


def test_crowded_region_degrades_to_what_fits():
    # every point of the 100x100 square is closer than 88 to its centre
    config = LayoutConfig(
        min_nodes=5, max_nodes=5,
        center_x=50, center_y=50,
        min_radius=10, max_radius=40,
        left=0, right=100, top=0, bottom=100,
        min_node_distance=80,
    )
    g = Graph()
    count = LayoutGenerator(rng=random.Random(1)).generate(g, config)
    assert count == 1
    assert len(g) == 1
    assert g.edge_count() == 0


def test_zero_attempt_budgets_stop_after_first_node():
    config = LayoutConfig(ring_attempts=0, grid_attempts=0, random_attempts=0)
    g = generated_graph(5, config)
    assert len(g) == 1


def test_same_seed_same_layout():
    a, b = generated_graph(1234), generated_graph(1234)
    assert a.to_dict() == b.to_dict()


def test_generate_replaces_previous_contents():
    g = Graph()
    gen = LayoutGenerator(rng=random.Random(9))
    gen.generate(g, LayoutConfig(min_nodes=12, max_nodes=12))
    count = gen.generate(g, LayoutConfig(min_nodes=1, max_nodes=1))
    assert count == 1
    assert g.node_ids() == [0]
    assert g.edges() == []


def test_generate_applies_node_radius():
    g = generated_graph(2, LayoutConfig(node_radius=25.0))
    assert g.node_radius == 25.0


# =============================================================================
# CONNECT / STRATEGIES / HELPERS
# =============================================================================

def test_connect_links_each_node_to_nearest_connected_predecessor():
    positions = [(0.0, 0.0), (10.0, 0.0), (20.0, 0.0), (5.0, 100.0)]
    g = Graph()
    for i, (x, y) in enumerate(positions):
        g.add_node(i, x, y)
    LayoutGenerator(rng=random.Random(0)).connect(g, positions, LayoutConfig())
    assert g.has_edge(1, 0)
    assert g.has_edge(2, 1)
    assert g.has_edge(3, 0)      # tie with node 1; lower index wins
    assert reachable(g, 0) == {0, 1, 2, 3}


def test_grid_position_first_cell():
    config = LayoutConfig()
    spacing = config.grid_spacing
    x, y = LayoutGenerator(rng=random.Random(0)).grid_position(1, 8, config)
    slack = spacing * 0.1 + 1e-9
    assert abs(x - (config.left + spacing)) <= slack
    assert abs(y - (config.top + spacing)) <= slack


def test_grid_position_wraps_rows():
    config = LayoutConfig()
    spacing = config.grid_spacing
    # 8 nodes -> ceil(sqrt(8)) + 1 = 4 cells per row, so index 5 opens row two
    x, y = LayoutGenerator(rng=random.Random(0)).grid_position(5, 8, config)
    slack = spacing * 0.1 + 1e-9
    assert abs(x - (config.left + spacing)) <= slack
    assert abs(y - (config.top + 2 * spacing)) <= slack


@pytest.mark.parametrize("strategy", ["ring_position", "random_position"])
def test_candidates_are_inside_bounds(strategy):
    config = LayoutConfig()
    gen = LayoutGenerator(rng=random.Random(4))
    for _ in range(200):
        x, y = getattr(gen, strategy)(config)
        assert config.left <= x <= config.right
        assert config.top <= y <= config.bottom


def test_is_valid_position():
    placed = [(0.0, 0.0), (100.0, 0.0)]
    assert is_valid_position((50.0, 50.0), placed, 50.0)
    assert not is_valid_position((50.0, 10.0), placed, 60.0)
    assert is_valid_position((3.0, 4.0), [], 1000.0)
    assert is_valid_position((3.0, 4.0), [(0.0, 0.0)], 5.0)   # boundary is valid


def test_clamp_to_bounds():
    config = LayoutConfig(left=0, right=100, top=10, bottom=50,
                          center_x=50, center_y=30, min_radius=5, max_radius=10)
    assert clamp_to_bounds((-5, 80), config) == (0, 50)
    assert clamp_to_bounds((150, 0), config) == (100, 10)
    assert clamp_to_bounds((20, 20), config) == (20, 20)


@settings(max_examples=60, deadline=None)
@given(seed=seeds)
def test_spanning_tree_alone_has_exactly_n_minus_one_edges(seed):
    config = LayoutConfig()
    gen = LayoutGenerator(rng=random.Random(seed))
    positions = gen.generate_positions(gen.rng.randint(config.min_nodes, config.max_nodes), config)
    g = Graph()
    for i, (x, y) in enumerate(positions):
        g.add_node(i, x, y)

    gen._spanning_tree(g, positions)
    assert g.edge_count() == len(positions) - 1
    assert reachable(g, 0) == set(range(len(positions)))
