from __future__ import annotations

import logging

import pytest

from src.domain.algorithms.geo_utils import node_key
from src.domain.algorithms.graph_builder import build_graph
from src.domain.models import GeoPoint, Path


def _path(path_id: str, *coords: tuple[float, float]) -> Path:
    return Path(id=path_id, nodes=tuple(GeoPoint(lat=a, lng=b) for a, b in coords))


@pytest.mark.unit
def test_empty_path_list_yields_empty_graph() -> None:
    g = build_graph([])
    assert g.graph.number_of_nodes() == 0
    assert g.edges() == []


@pytest.mark.unit
def test_single_node_path_contributes_no_edges() -> None:
    g = build_graph([_path("p1", (0.0, 0.0))])
    assert g.graph.number_of_nodes() == 1
    assert g.edges() == []


@pytest.mark.unit
def test_edges_are_emitted_as_symmetric_pairs() -> None:
    g = build_graph([_path("p1", (0.0, 0.0), (0.0, 0.001), (0.0, 0.002))])

    edges = g.edges()
    assert len(edges) == 4
    pairs = {(e.source, e.target) for e in edges}
    for e in edges:
        assert (e.target, e.source) in pairs
        assert e.distance_m == pytest.approx(111.19, rel=1e-3)


@pytest.mark.unit
def test_paths_sharing_endpoint_within_threshold_merge_into_one_junction() -> None:
    # ~5.6m apart, owned by different paths.
    g = build_graph(
        [
            _path("p1", (0.0, 0.0), (0.0, 0.001)),
            _path("p2", (0.00005, 0.001), (0.001, 0.001)),
        ]
    )

    assert g.graph.number_of_nodes() == 3
    junction = g.resolve(node_key(0.0, 0.001))
    assert junction == g.resolve(node_key(0.00005, 0.001))
    assert g.graph.degree(junction) == 2

    node = g.node(junction)
    assert node.lat == pytest.approx(0.000025)
    assert node.lng == pytest.approx(0.001)
    assert node.path_id is None
    assert sorted(n.path_id or "" for n in g.nodes()) == ["", "p1", "p2"]


@pytest.mark.unit
def test_same_path_doubling_back_is_not_merged() -> None:
    g = build_graph(
        [_path("p1", (0.0, 0.0), (0.0, 0.001), (0.001, 0.001), (0.00005, 0.001))]
    )

    assert g.graph.number_of_nodes() == 4
    assert g.resolve(node_key(0.0, 0.001)) != g.resolve(node_key(0.00005, 0.001))


@pytest.mark.unit
def test_records_sharing_a_path_id_are_not_merged() -> None:
    g = build_graph(
        [
            _path("p1", (0.0, 0.0), (0.0, 0.001)),
            _path("p1", (0.00005, 0.001), (0.001, 0.001)),
        ]
    )

    assert g.graph.number_of_nodes() == 4
    assert g.graph.number_of_edges() == 2


@pytest.mark.unit
def test_missing_path_id_skips_merge_with_warning(
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.WARNING):
        g = build_graph(
            [
                _path("", (0.0, 0.0), (0.0, 0.001)),
                _path("p2", (0.00005, 0.001), (0.001, 0.001)),
            ]
        )

    assert g.graph.number_of_nodes() == 4
    assert "missing path id" in caplog.text


@pytest.mark.unit
def test_exactly_shared_coordinate_keeps_first_owner() -> None:
    g = build_graph(
        [
            _path("p1", (0.0, 0.0), (0.0, 0.001)),
            _path("p2", (0.0, 0.001), (0.001, 0.001)),
        ]
    )

    shared = node_key(0.0, 0.001)
    assert g.graph.number_of_nodes() == 3
    assert g.node(shared).path_id == "p1"
    assert g.graph.degree(shared) == 2


@pytest.mark.unit
def test_parallel_edges_collapse_after_merge() -> None:
    # Two parallel paths ~3.3m apart fuse pairwise.
    g = build_graph(
        [
            _path("p1", (0.0, 0.0), (0.0, 0.001)),
            _path("p2", (0.00003, 0.0), (0.00003, 0.001)),
        ]
    )

    assert g.graph.number_of_nodes() == 2
    assert g.graph.number_of_edges() == 1
    assert len(g.edges()) == 2

    a = g.node(g.resolve(node_key(0.0, 0.0)))
    assert a.lat == pytest.approx(0.000015)


@pytest.mark.unit
def test_self_loops_from_merging_are_dropped() -> None:
    # p2's first node sits within 10m of both ends of p1's short segment.
    g = build_graph(
        [
            _path("p1", (0.0, 0.0), (0.0, 0.00006)),
            _path("p2", (0.00003, 0.00003), (0.001, 0.00003)),
        ]
    )

    assert g.graph.number_of_nodes() == 2
    assert g.graph.number_of_edges() == 1
    for u, v in g.graph.edges():
        assert u != v


@pytest.mark.unit
def test_merged_edge_weights_use_merged_coordinates() -> None:
    g = build_graph(
        [
            _path("p1", (0.0, 0.0), (0.0, 0.001)),
            _path("p2", (0.00005, 0.001), (0.001, 0.001)),
        ]
    )

    junction = g.resolve(node_key(0.0, 0.001))
    origin = node_key(0.0, 0.0)
    length = g.graph.edges[origin, junction]["length"]
    # Slightly longer than the raw 111.19m because the junction moved north.
    assert length > 111.19
