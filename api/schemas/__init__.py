"""
Pydantic schemas for the Bondgraph API.

Re-exports all schemas for convenient importing.
"""

from __future__ import annotations

from .bonds import (
    BondCreate,
    BondResponse,
    DeduplicateResponse,
    MigrateTypeRequest,
    MigrateTypeResponse,
)
from .people import PersonCreate, PersonResponse, PersonUpdate
from .social_graph import (
    ConnectionsResponse,
    GraphLink,
    GraphNode,
    GraphResponse,
    NetworkStatsResponse,
    TypeShare,
)

__all__ = [
    "BondCreate",
    "BondResponse",
    "ConnectionsResponse",
    "DeduplicateResponse",
    "GraphLink",
    "GraphNode",
    "GraphResponse",
    "MigrateTypeRequest",
    "MigrateTypeResponse",
    "NetworkStatsResponse",
    "PersonCreate",
    "PersonResponse",
    "PersonUpdate",
    "TypeShare",
]
