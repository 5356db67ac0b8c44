from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

import networkx as nx

from src.domain.algorithms.geo_utils import distance, haversine_distance_m, node_key
from src.domain.algorithms.graph_builder import SNAP_THRESHOLD_M, PathGraph
from src.domain.models import GeoPoint, Path, Projection

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AugmentedGraph:
    """Per-request copy of the base graph with both endpoints spliced in."""

    graph: nx.Graph
    start_key: str
    end_key: str


def snap_to_existing_node(
    base: PathGraph, point: GeoPoint, *, snap_threshold_m: float = SNAP_THRESHOLD_M
) -> str | None:
    """Key of the nearest base node within the snap threshold, if any."""

    best_key: str | None = None
    best_d = math.inf
    for key, data in base.graph.nodes(data=True):
        d = distance(point.lat, point.lng, data["lat"], data["lng"])
        if d <= snap_threshold_m and d < best_d:
            best_d = d
            best_key = key
    return best_key


def _connect(graph: nx.Graph, a: str, b: str, length: float) -> None:
    if a == b:
        return
    existing = graph.get_edge_data(a, b)
    if existing is not None and existing.get("length", math.inf) <= length:
        return
    graph.add_edge(a, b, length=length)


def _node_point(graph: nx.Graph, key: str) -> GeoPoint:
    data = graph.nodes[key]
    return GeoPoint(lat=data["lat"], lng=data["lng"])


def augment_graph(
    base: PathGraph,
    paths: Sequence[Path],
    *,
    start: GeoPoint,
    end: GeoPoint,
    start_projection: Projection,
    end_projection: Projection,
    snap_threshold_m: float = SNAP_THRESHOLD_M,
) -> AugmentedGraph:
    """Splice the start/end buildings into a copy of ``base``.

    Each projection splits the segment it lands on; when both land on the
    same segment they are inserted into one chain ordered by ``t``. The
    base graph is left untouched.
    """

    graph = base.graph.copy()

    start_key = node_key(start.lat, start.lng)
    end_key = node_key(end.lat, end.lng)
    # Building nodes always carry the exact requested coordinates.
    graph.add_node(start_key, lat=start.lat, lng=start.lng)
    graph.add_node(end_key, lat=end.lat, lng=end.lng)

    projection_keys: list[str] = []
    by_segment: dict[tuple[int, int], list[tuple[float, str]]] = {}
    for label, projection in (("start", start_projection), ("end", end_projection)):
        key = node_key(projection.point.lat, projection.point.lng)
        snapped = snap_to_existing_node(
            base, projection.point, snap_threshold_m=snap_threshold_m
        )
        if snapped is not None and snapped != key:
            logger.debug("Snapping %s projection %s to node %s", label, key, snapped)
            key = snapped
        if key not in graph:
            graph.add_node(
                key, lat=projection.point.lat, lng=projection.point.lng, path_id=None
            )

        projection_keys.append(key)
        by_segment.setdefault(
            (projection.path_index, projection.segment_index), []
        ).append((projection.t, key))

    for (path_index, segment_index), entries in by_segment.items():
        nodes = paths[path_index].nodes
        seg_start = nodes[segment_index]
        seg_end = nodes[segment_index + 1]
        u = base.resolve(node_key(seg_start.lat, seg_start.lng))
        v = base.resolve(node_key(seg_end.lat, seg_end.lng))

        if graph.has_edge(u, v):
            graph.remove_edge(u, v)

        # Stable sort keeps start before end when both share the same t.
        entries.sort(key=lambda entry: entry[0])
        chain = [u, *(key for _, key in entries), v]
        for a, b in zip(chain, chain[1:]):
            if a == b:
                continue
            _connect(
                graph,
                a,
                b,
                haversine_distance_m(_node_point(graph, a), _node_point(graph, b)),
            )

    start_proj_key, end_proj_key = projection_keys
    _connect(
        graph,
        start_key,
        start_proj_key,
        haversine_distance_m(start, start_projection.point),
    )
    _connect(
        graph, end_key, end_proj_key, haversine_distance_m(end, end_projection.point)
    )

    return AugmentedGraph(graph=graph, start_key=start_key, end_key=end_key)
