"""
Social Graph Router - Endpoints for the network and statistics screens.

This router handles:
- The full graph with explicit bonds and derived 2nd/3rd degree links
- Network statistics and NetworkX graph metrics
- The connections of a single person
"""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from bondgraph.data import BondRepository, PersonRepository
from bondgraph.graph import compute_network_stats, connections_for, graph_metrics

from ..dependencies import get_bond_repository, get_person_repository, graph_cache
from ..schemas import (
    ConnectionsResponse,
    GraphLink,
    GraphNode,
    GraphResponse,
    NetworkStatsResponse,
    TypeShare,
)
from ..services.graph_service import count_link_categories, graph_links, load_graph_data
from ..settings import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["social-graph"])


def _to_graph_link(link: dict[str, Any]) -> GraphLink:
    return GraphLink(
        id=link.get("id"),
        source=str(link["source"]),
        target=str(link["target"]),
        type=link.get("type") or "",
        category=link["category"],
        lore=link.get("lore"),
    )


@router.get("/graph")
async def get_graph(
    person_repo: Annotated[PersonRepository, Depends(get_person_repository)],
    bond_repo: Annotated[BondRepository, Depends(get_bond_repository)],
    include_implicit: Annotated[
        bool | None, Query(description="Include 2nd and 3rd degree links (defaults to INCLUDE_IMPLICIT_LINKS)")
    ] = None,
) -> GraphResponse:
    """Get every person and link for the network screen.

    Args:
        include_implicit: Include derived links; falls back to the configured default

    Returns:
        Nodes, links (explicit first, then derived), graph metrics and link counts
    """
    if include_implicit is None:
        include_implicit = get_settings().include_implicit_links

    people, relationships = await load_graph_data(person_repo, bond_repo)
    links = await asyncio.to_thread(graph_links, people, relationships, graph_cache, include_implicit)
    stats = compute_network_stats(people, relationships)

    nodes = [
        GraphNode(
            id=person["id"],
            name=person.get("name") or "",
            vibe=person.get("vibe"),
            img=person.get("img"),
            emoji=person.get("emoji"),
            connection_count=stats.connection_counts.get(str(person["id"]), 0),
        )
        for person in people
    ]

    logger.info(f"Serving graph with {len(nodes)} nodes and {len(links)} links (implicit={include_implicit})")
    return GraphResponse(
        nodes=nodes,
        links=[_to_graph_link(link) for link in links],
        metrics=graph_metrics(people, relationships),
        link_category_counts=count_link_categories(links),
    )


@router.get("/stats")
async def get_network_stats(
    person_repo: Annotated[PersonRepository, Depends(get_person_repository)],
    bond_repo: Annotated[BondRepository, Depends(get_bond_repository)],
) -> NetworkStatsResponse:
    """Get head counts, the most connected person and the bond type breakdown."""
    people, relationships = await load_graph_data(person_repo, bond_repo)
    stats = compute_network_stats(people, relationships)

    return NetworkStatsResponse(
        total_people=stats.total_people,
        total_bonds=stats.total_bonds,
        avg_connections=stats.avg_connections,
        most_connected=stats.most_connected,
        max_connections=stats.max_connections,
        connection_counts=stats.connection_counts,
        type_breakdown=[
            TypeShare(type=bond_type, count=stats.type_breakdown[bond_type], percentage=percentage)
            for bond_type, percentage in stats.type_percentages
        ],
        metrics=graph_metrics(people, relationships),
    )


@router.get("/people/{person_id}/connections")
async def get_person_connections(
    person_id: Annotated[str, Path(description="Profile record ID")],
    person_repo: Annotated[PersonRepository, Depends(get_person_repository)],
    bond_repo: Annotated[BondRepository, Depends(get_bond_repository)],
    include_implicit: Annotated[bool, Query(description="Include 2nd and 3rd degree links")] = False,
) -> ConnectionsResponse:
    """Get the links that touch one person."""
    person = await asyncio.to_thread(person_repo.find_by_id, person_id)
    if person is None:
        raise HTTPException(status_code=404, detail=f"Person '{person_id}' not found")

    people, relationships = await load_graph_data(person_repo, bond_repo)
    links = await asyncio.to_thread(graph_links, people, relationships, graph_cache, include_implicit)
    links = connections_for(person_id, links)

    return ConnectionsResponse(
        person_id=person_id,
        links=[_to_graph_link(link) for link in links],
        total=len(links),
    )
