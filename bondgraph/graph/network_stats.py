"""Network statistics over explicit bonds.

Backs the stats screen: head counts, who is most connected, how bonds break
down by type, plus graph-level metrics computed with NetworkX.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import networkx as nx

from .implicit_links import record_field, vertex_key

logger = logging.getLogger(__name__)


@dataclass
class NetworkStats:
    """Summary statistics for a set of people and their bonds."""

    total_people: int
    total_bonds: int
    connection_counts: dict[str, int] = field(default_factory=dict)
    most_connected: Any | None = None
    max_connections: int = 0
    type_breakdown: dict[str, int] = field(default_factory=dict)
    avg_connections: float = 0.0

    @property
    def type_percentages(self) -> list[tuple[str, float]]:
        """Share of each bond type in percent, largest first."""
        if not self.total_bonds:
            return []
        ordered = sorted(self.type_breakdown.items(), key=lambda item: item[1], reverse=True)
        return [(bond_type, round(count / self.total_bonds * 100, 1)) for bond_type, count in ordered]


def compute_network_stats(people: Iterable[Any], relationships: Iterable[Any]) -> NetworkStats:
    """Compute connection counts and type breakdown.

    Every bond counts once for each endpoint, including endpoints that are not
    in ``people``. The most connected person is the first one (in input
    order) with the highest non-zero count.
    """
    people = list(people)
    relationships = list(relationships)

    connection_counts: dict[str, int] = {vertex_key(person): 0 for person in people}
    type_breakdown: Counter[str] = Counter()

    for link in relationships:
        for endpoint in (record_field(link, "source"), record_field(link, "target")):
            key = vertex_key(endpoint)
            connection_counts[key] = connection_counts.get(key, 0) + 1
        type_breakdown[record_field(link, "type")] += 1

    most_connected = None
    max_connections = 0
    for person in people:
        count = connection_counts[vertex_key(person)]
        if count > max_connections:
            max_connections = count
            most_connected = person

    avg_connections = round(len(relationships) * 2 / len(people), 1) if people else 0.0

    return NetworkStats(
        total_people=len(people),
        total_bonds=len(relationships),
        connection_counts=connection_counts,
        most_connected=most_connected,
        max_connections=max_connections,
        type_breakdown=dict(type_breakdown),
        avg_connections=avg_connections,
    )


def build_bond_graph(people: Iterable[Any], relationships: Iterable[Any]) -> nx.Graph:
    """Simple undirected NetworkX graph of known people and their bonds.

    Parallel bonds collapse into one edge; self bonds and bonds to unknown
    people are dropped.
    """
    graph = nx.Graph()
    graph.add_nodes_from(vertex_key(person) for person in people)

    for link in relationships:
        source = vertex_key(record_field(link, "source"))
        target = vertex_key(record_field(link, "target"))
        if source == target or source not in graph or target not in graph:
            continue
        graph.add_edge(source, target, type=record_field(link, "type"))

    return graph


def graph_metrics(people: Iterable[Any], relationships: Iterable[Any]) -> dict[str, float]:
    """Density, component count, average degree and clustering of the bond graph."""
    graph = build_bond_graph(people, relationships)
    node_count = graph.number_of_nodes()

    if node_count == 0:
        return {
            "density": 0.0,
            "number_of_components": 0,
            "average_degree": 0.0,
            "average_clustering": 0.0,
        }

    metrics = {
        "density": nx.density(graph),
        "number_of_components": nx.number_connected_components(graph),
        "average_degree": 2 * graph.number_of_edges() / node_count,
        "average_clustering": nx.average_clustering(graph),
    }
    logger.debug(f"Bond graph: {node_count} nodes, {graph.number_of_edges()} edges, density={metrics['density']:.3f}")
    return metrics
