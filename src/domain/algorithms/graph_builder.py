from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

import networkx as nx
from networkx.utils import UnionFind

from src.domain.algorithms.geo_utils import distance, haversine_distance_m, node_key
from src.domain.models import Edge, GraphNode, Path

logger = logging.getLogger(__name__)

# Nodes closer than this are treated as the same physical location.
SNAP_THRESHOLD_M = 10.0


@dataclass(slots=True)
class PathGraph:
    """Routable graph built from a set of paths.

    Nodes carry ``lat``, ``lng`` and ``path_id`` attributes, edges carry
    ``length`` in meters. ``node_mapping`` maps every raw coordinate key to
    the key of the (possibly merged) node that replaced it.
    """

    graph: nx.Graph = field(default_factory=nx.Graph)
    node_mapping: dict[str, str] = field(default_factory=dict)

    def resolve(self, key: str) -> str:
        return self.node_mapping.get(key, key)

    def node(self, key: str) -> GraphNode:
        data = self.graph.nodes[key]
        return GraphNode(
            id=key, lat=data["lat"], lng=data["lng"], path_id=data.get("path_id")
        )

    def nodes(self) -> list[GraphNode]:
        return [self.node(key) for key in self.graph.nodes]

    def edges(self) -> list[Edge]:
        """Edge list as symmetric pairs (A->B followed by B->A)."""

        out: list[Edge] = []
        for u, v, length in self.graph.edges(data="length"):
            out.append(Edge(source=u, target=v, distance_m=float(length)))
            out.append(Edge(source=v, target=u, distance_m=float(length)))
        return out


def _node_distance_m(graph: nx.Graph, a: str, b: str) -> float:
    da = graph.nodes[a]
    db = graph.nodes[b]
    return distance(da["lat"], da["lng"], db["lat"], db["lng"])


def merge_nearby_nodes(
    raw: nx.Graph, *, snap_threshold_m: float = SNAP_THRESHOLD_M
) -> PathGraph:
    """Fuse nodes of different paths lying within the snap threshold.

    Pairs are compared in node insertion order (path index, then node
    index), so the outcome is deterministic for a given path list. Pairs
    with a missing path id, or with the same path id, are never merged.
    """

    keys = list(raw.nodes)
    uf = UnionFind(keys)

    merged_count = 0
    skipped_same_path = 0
    missing_path_id = 0
    for i, key_a in enumerate(keys):
        node_a = raw.nodes[key_a]
        for key_b in keys[i + 1 :]:
            node_b = raw.nodes[key_b]
            d = distance(node_a["lat"], node_a["lng"], node_b["lat"], node_b["lng"])
            if d > snap_threshold_m:
                continue

            path_a = node_a.get("path_id")
            path_b = node_b.get("path_id")
            if not path_a or not path_b:
                missing_path_id += 1
                logger.warning(
                    "Skipping merge due to missing path id: %s (%s) <-> %s (%s)",
                    key_a,
                    path_a or "MISSING",
                    key_b,
                    path_b or "MISSING",
                )
                continue
            if path_a == path_b:
                skipped_same_path += 1
                continue

            logger.debug(
                "Merging nodes %.1fm apart: %s <-> %s (paths %s <-> %s)",
                d,
                key_a,
                key_b,
                path_a,
                path_b,
            )
            uf.union(key_a, key_b)
            merged_count += 1

    logger.debug(
        "Nodes merged: %d, skipped same-path: %d, missing path id: %d",
        merged_count,
        skipped_same_path,
        missing_path_id,
    )

    clusters: dict[str, list[str]] = {}
    for key in keys:
        clusters.setdefault(uf[key], []).append(key)

    merged = nx.Graph()
    mapping: dict[str, str] = {}
    for members in clusters.values():
        # The first member in insertion order names the cluster.
        representative = members[0]
        lat = sum(raw.nodes[k]["lat"] for k in members) / len(members)
        lng = sum(raw.nodes[k]["lng"] for k in members) / len(members)
        path_ids = {
            raw.nodes[k]["path_id"] for k in members if raw.nodes[k].get("path_id")
        }
        merged.add_node(
            representative,
            lat=lat,
            lng=lng,
            path_id=next(iter(path_ids)) if len(path_ids) == 1 else None,
        )
        for k in members:
            mapping[k] = representative

    for u, v in raw.edges():
        mu = mapping[u]
        mv = mapping[v]
        if mu == mv or merged.has_edge(mu, mv):
            continue
        merged.add_edge(mu, mv, length=_node_distance_m(merged, mu, mv))

    return PathGraph(graph=merged, node_mapping=mapping)


def build_graph(
    paths: Sequence[Path], *, snap_threshold_m: float = SNAP_THRESHOLD_M
) -> PathGraph:
    """Convert path polylines into a routable graph with junctions merged."""

    raw = nx.Graph()
    logger.debug("Building graph from %d paths", len(paths))

    for path in paths:
        for point in path.nodes:
            key = node_key(point.lat, point.lng)
            # First path to register a coordinate owns it.
            if key not in raw:
                raw.add_node(key, lat=point.lat, lng=point.lng, path_id=path.id)

        for a, b in path.segments:
            u = node_key(a.lat, a.lng)
            v = node_key(b.lat, b.lng)
            if u == v:
                continue
            raw.add_edge(u, v, length=haversine_distance_m(a, b))

    logger.debug(
        "Before merge: %d nodes, %d edges",
        raw.number_of_nodes(),
        raw.number_of_edges(),
    )
    result = merge_nearby_nodes(raw, snap_threshold_m=snap_threshold_m)
    logger.debug(
        "After merge: %d nodes, %d edges",
        result.graph.number_of_nodes(),
        result.graph.number_of_edges(),
    )
    return result
