from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable

import networkx as nx


@dataclass(frozen=True, slots=True)
class ShortestPath:
    nodes: tuple[Hashable, ...]
    distance_m: float


def shortest_path(
    graph: nx.Graph, source: Hashable, target: Hashable, *, weight: str = "length"
) -> ShortestPath | None:
    """Weighted shortest path from ``source`` to ``target``.

    Returns None when either node is missing or the target is unreachable.
    networkx keeps the first path found on equal distances, and neighbors are
    visited in adjacency insertion order, so a fixed input always yields the
    same path.
    """

    try:
        distance_m, path_nodes = nx.single_source_dijkstra(
            graph, source, target, weight=weight
        )
    except (nx.NetworkXNoPath, nx.NodeNotFound):
        return None
    return ShortestPath(nodes=tuple(path_nodes), distance_m=float(distance_m))
