"""
Graph model: adjacency invariants, hit-testing, iteration.
"""

from graph import Graph, Node, NodeState
from tests.conftest import build_graph


# =============================================================================
# ADJACENCY
# =============================================================================

def test_add_edge_is_symmetric():
    g = build_graph({0: (0, 0), 1: (100, 0)}, [])
    assert g.add_edge(0, 1) is True
    assert g.get_node(0).neighbors == [1]
    assert g.get_node(1).neighbors == [0]


def test_self_loops_duplicates_and_missing_ends_are_ignored():
    g = build_graph({0: (0, 0), 1: (100, 0)}, [(0, 1)])
    assert g.add_edge(0, 0) is False
    assert g.add_edge(0, 1) is False
    assert g.add_edge(1, 0) is False
    assert g.add_edge(0, 99) is False
    assert g.get_node(0).neighbors == [1]
    assert g.get_node(1).neighbors == [0]


def test_neighbour_order_is_insertion_order():
    g = build_graph({0: (0, 0), 1: (1, 0), 2: (2, 0), 3: (3, 0)}, [(0, 3), (0, 1), (0, 2)])
    assert g.neighbours(0) == [3, 1, 2]
    assert g.neighbours(42) == []


def test_node_add_neighbor_rejects_self():
    n = Node(5)
    assert n.add_neighbor(5) is False
    assert n.add_neighbor(6) is True
    assert n.add_neighbor(6) is False
    assert n.degree() == 1


def test_readding_a_node_moves_it_and_keeps_adjacency():
    g = build_graph({0: (0, 0), 1: (100, 0)}, [(0, 1)])
    node = g.add_node(0, 50, 60)
    assert node.position == (50, 60)
    assert g.has_edge(0, 1) and g.has_edge(1, 0)
    assert len(g) == 2


# =============================================================================
# HIT-TESTING
# =============================================================================

def test_node_at_point_in_circle():
    g = build_graph({0: (100, 100)}, [], node_radius=40)
    assert g.node_at(100, 100) == 0
    assert g.node_at(130, 100) == 0
    assert g.node_at(140, 100) == 0          # boundary counts
    assert g.node_at(141, 100) is None
    assert g.node_at(129, 129) is None       # outside the circle, inside the square


def test_node_at_returns_first_match_in_insertion_order():
    g = build_graph({3: (100, 100), 1: (110, 100)}, [], node_radius=40)
    assert g.node_at(105, 100) == 3


def test_node_at_on_empty_graph():
    assert Graph().node_at(0, 0) is None


# =============================================================================
# ITERATION / RESET
# =============================================================================

def test_edges_reported_once_low_to_high(four_node_graph):
    assert sorted(four_node_graph.edges()) == [(0, 1), (0, 2), (1, 3)]
    assert four_node_graph.edge_count() == 3


def test_iteration_and_membership(four_node_graph):
    assert [n.id for n in four_node_graph] == [0, 1, 2, 3]
    assert 2 in four_node_graph
    assert 9 not in four_node_graph
    assert four_node_graph.node_ids() == [0, 1, 2, 3]


def test_reset_states_and_clear(four_node_graph):
    four_node_graph.get_node(1).mark_current()
    four_node_graph.get_node(2).mark_in_queue()
    four_node_graph.reset_states()
    assert all(n.state is NodeState.UNVISITED for n in four_node_graph)

    four_node_graph.clear()
    assert len(four_node_graph) == 0
    assert four_node_graph.edges() == []


def test_to_dict(four_node_graph):
    data = four_node_graph.to_dict()
    assert data["node_radius"] == 40.0
    assert [n["id"] for n in data["nodes"]] == [0, 1, 2, 3]
    assert data["nodes"][0] == {"id": 0, "x": 500, "y": 100, "state": "unvisited", "neighbors": [1, 2]}
    assert sorted(data["edges"]) == [[0, 1], [0, 2], [1, 3]]
