"""
Graph analysis for the bond graph: implicit link derivation, statistics,
bond hygiene and caching of derived results.
"""

from .bond_hygiene import connections_for, find_duplicate_bonds, validate_new_bond
from .graph_cache_manager import GraphCacheManager
from .implicit_links import (
    DERIVED_LINK_TYPES,
    EXPLICIT_CATEGORY,
    TraversalStep,
    canonical_pair_key,
    derive_links,
    endpoint_id,
)
from .network_stats import NetworkStats, compute_network_stats, graph_metrics

__all__ = [
    "DERIVED_LINK_TYPES",
    "EXPLICIT_CATEGORY",
    "GraphCacheManager",
    "NetworkStats",
    "TraversalStep",
    "canonical_pair_key",
    "compute_network_stats",
    "connections_for",
    "derive_links",
    "endpoint_id",
    "find_duplicate_bonds",
    "graph_metrics",
    "validate_new_bond",
]
