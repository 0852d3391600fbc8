"""
Bondgraph - people, the bonds between them, and the connections those bonds imply.

This package contains:
- graph: Implicit link derivation, network statistics, bond hygiene, caching
- data: PocketBase repositories for profiles and relationships
- logging_config: Unified log format shared with the API
"""

from bondgraph.errors import (
    BondgraphError,
    BondValidationError,
    MalformedEndpointError,
    RecordStoreError,
)
from bondgraph.graph.implicit_links import derive_links

__all__ = [
    "BondValidationError",
    "BondgraphError",
    "MalformedEndpointError",
    "RecordStoreError",
    "derive_links",
]
