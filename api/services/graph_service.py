"""
Graph Service - Loading graph data and deriving links through the cache.

This service handles:
- Fetching profiles and bonds from PocketBase off the event loop
- Deriving 2nd and 3rd degree links, reusing cached results
"""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from collections.abc import Iterable
from typing import Any

from bondgraph.data import BondRepository, PersonRepository
from bondgraph.graph import EXPLICIT_CATEGORY, GraphCacheManager, derive_links
from bondgraph.graph.implicit_links import as_link_dict
from bondgraph.utils.content_hash import graph_fingerprint

logger = logging.getLogger(__name__)


async def load_graph_data(
    person_repo: PersonRepository,
    bond_repo: BondRepository,
) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """Fetch all profiles and bonds.

    Returns:
        Tuple of (people, relationships)
    """
    people, relationships = await asyncio.gather(
        asyncio.to_thread(person_repo.list_all),
        asyncio.to_thread(bond_repo.list_all),
    )
    logger.debug(f"Loaded {len(people)} profiles and {len(relationships)} bonds")
    return people, relationships


def graph_links(
    people: list[Any],
    relationships: list[Any],
    cache: GraphCacheManager,
    include_implicit: bool = True,
) -> list[dict[str, Any]]:
    """Links to draw for the given data.

    With ``include_implicit`` the full derived list is returned, cached by
    content fingerprint; otherwise only the explicit bonds with category 1.
    """
    if not include_implicit:
        return [{**as_link_dict(link), "category": EXPLICIT_CATEGORY} for link in relationships]

    fingerprint = graph_fingerprint(people, relationships)
    links = cache.get_links(fingerprint)
    if links is None:
        links = derive_links(people, relationships)
        cache.cache_links(fingerprint, links)
    return links


def count_link_categories(links: Iterable[dict[str, Any]]) -> dict[str, int]:
    """Count links per category: explicit, second_degree, third_degree."""
    names = {1: "explicit", 2: "second_degree", 3: "third_degree"}
    counts: Counter[str] = Counter(names[link["category"]] for link in links)
    return {name: counts.get(name, 0) for name in names.values()}
