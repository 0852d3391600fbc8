"""
Pydantic schemas for graph and statistics endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class GraphNode(BaseModel):
    """Person drawn as a node"""

    id: str
    name: str
    vibe: str | None = None
    img: str | None = None
    emoji: str | None = None
    connection_count: int = 0


class GraphLink(BaseModel):
    """Explicit bond or derived link"""

    id: str | None = None  # record id, explicit bonds only
    source: str
    target: str
    type: str  # bond type, or 'second_degree' / 'third_degree'
    category: int  # 1 explicit, 2 second degree, 3 third degree
    lore: str | None = None


class GraphResponse(BaseModel):
    """Complete graph data for the network screen"""

    nodes: list[GraphNode]
    links: list[GraphLink]
    metrics: dict[str, float]
    link_category_counts: dict[str, int] = {}  # 'explicit' / 'second_degree' / 'third_degree' -> count


class ConnectionsResponse(BaseModel):
    """Links touching one person"""

    person_id: str
    links: list[GraphLink]
    total: int


class TypeShare(BaseModel):
    """Share of one bond type"""

    type: str | None  # None for bonds stored without a type
    count: int
    percentage: float


class NetworkStatsResponse(BaseModel):
    """Statistics screen data"""

    total_people: int
    total_bonds: int
    avg_connections: float
    most_connected: dict[str, Any] | None = None
    max_connections: int = 0
    connection_counts: dict[str, int] = {}
    type_breakdown: list[TypeShare] = []
    metrics: dict[str, float] = {}
