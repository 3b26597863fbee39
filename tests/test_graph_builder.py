import numpy as np
import pytest

from cogniflow.core.math3d import distance
from cogniflow.graph.builder import build_graph, graph_from_positions
from cogniflow.graph.model import Edge


def test_two_nodes_within_threshold():
    graph = graph_from_positions([(0, 0, 0), (1, 0, 0)], edge_threshold=5.0)

    assert graph.node_count == 2
    assert graph.edge_count == 1
    edge = graph.edges[0]
    assert edge.id == "0-1"
    assert edge.start == (0.0, 0.0, 0.0)
    assert edge.end == (1.0, 0.0, 0.0)


def test_threshold_is_strict():
    graph = graph_from_positions([(0, 0, 0), (5, 0, 0)], edge_threshold=5.0)
    assert graph.edge_count == 0


@pytest.mark.parametrize("seed", [0, 1, 7, 42])
@pytest.mark.parametrize("threshold", [0.5, 2.0, 5.0, 20.0])
def test_edge_invariants(seed, threshold):
    n = 30
    graph = build_graph(node_count=n, bounds=10.0, edge_threshold=threshold,
                        rng=np.random.default_rng(seed))

    assert graph.edge_count <= n * (n - 1) // 2

    pairs = set()
    for edge in graph.edges:
        assert edge.start_id != edge.end_id
        pair = frozenset((edge.start_id, edge.end_id))
        assert pair not in pairs
        pairs.add(pair)
        assert distance(edge.start, edge.end) < threshold


@pytest.mark.parametrize("seed", range(20))
def test_threshold_equal_to_edge_length_drops_the_edge(seed):
    rng = np.random.default_rng(seed)
    p0, p1 = (rng.random((2, 3)) - 0.5) * 10.0
    exact = distance(tuple(p0), tuple(p1))

    graph = graph_from_positions([p0, p1], edge_threshold=exact)
    assert graph.edge_count == 0

    graph = graph_from_positions([p0, p1], edge_threshold=float(np.nextafter(exact, np.inf)))
    assert graph.edge_count == 1
    assert graph.edges[0].length < np.nextafter(exact, np.inf)


def test_edges_agree_with_distance_for_every_pair():
    rng = np.random.default_rng(2024)
    for _ in range(50):
        graph = build_graph(node_count=30, bounds=10.0, edge_threshold=5.0, rng=rng)
        edge_ids = {e.id for e in graph.edges}
        for a in graph.nodes:
            for b in graph.nodes:
                if a.id >= b.id:
                    continue
                linked = Edge.make_id(a.id, b.id) in edge_ids
                assert linked == (distance(a.position, b.position) < 5.0)

        if graph.edges:
            edge = graph.edges[0]
            rebuilt = graph_from_positions(
                [n.position for n in graph.nodes], edge_threshold=edge.length,
            )
            assert rebuilt.edge(edge.id) is None


def test_large_threshold_connects_every_pair():
    n = 12
    graph = build_graph(node_count=n, bounds=10.0, edge_threshold=100.0,
                        rng=np.random.default_rng(3))
    assert graph.edge_count == n * (n - 1) // 2


def test_nodes_inside_bounds_with_sizes_in_range():
    graph = build_graph(node_count=200, bounds=10.0, rng=np.random.default_rng(11))

    positions = graph.positions_array()
    assert positions.shape == (200, 3)
    assert np.all(np.abs(positions) <= 5.0)

    sizes = graph.sizes_array()
    assert np.all(sizes >= 0.2)
    assert np.all(sizes <= 0.5)

    assert [n.id for n in graph.nodes] == list(range(200))


def test_edge_endpoints_copy_node_positions():
    graph = build_graph(node_count=30, rng=np.random.default_rng(5))
    for edge in graph.edges:
        assert graph.node(edge.start_id).position == edge.start
        assert graph.node(edge.end_id).position == edge.end


def test_fresh_instances_without_seed():
    a = build_graph(node_count=10)
    b = build_graph(node_count=10)
    assert a.positions_array().tolist() != b.positions_array().tolist()


def test_empty_and_single_node_graphs():
    assert build_graph(node_count=0).edge_count == 0
    single = build_graph(node_count=1)
    assert single.node_count == 1
    assert single.edge_count == 0


def test_coincident_nodes_share_position_lookup():
    graph = graph_from_positions([(1, 1, 1), (1, 1, 1), (9, 9, 9)], edge_threshold=5.0)

    assert [n.id for n in graph.nodes_at((1, 1, 1))] == [0, 1]
    assert graph.edge_count == 1
    assert graph.edges[0].length == 0.0
    assert [e.id for e in graph.edges_touching((1, 1, 1))] == ["0-1"]


def test_lookup_helpers():
    graph = graph_from_positions([(0, 0, 0), (1, 0, 0), (2, 0, 0)], edge_threshold=1.5)

    assert [e.id for e in graph.edges] == ["0-1", "1-2"]
    assert graph.edge("1-2").end == (2.0, 0.0, 0.0)
    assert graph.edge("0-2") is None
    assert graph.nodes_at([2.0, 0.0, 0.0])[0].id == 2
    assert graph.nodes_at((3, 0, 0)) == []
    assert Edge.make_id(7, 3) == "3-7"


if __name__ == "__main__":
    test_two_nodes_within_threshold()
    test_threshold_is_strict()
    test_empty_and_single_node_graphs()
    test_coincident_nodes_share_position_lookup()
