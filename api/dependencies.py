"""
Shared dependencies for the Bondgraph API.

This module provides:
- PocketBase client management (global instance authenticated on startup)
- Repository factories used by the routers
- The derived-link cache
"""

from __future__ import annotations

import asyncio
import logging

from pocketbase import PocketBase

from bondgraph.data import BondRepository, PersonRepository
from bondgraph.graph import GraphCacheManager

from .settings import get_settings

logger = logging.getLogger(__name__)

# ========================================
# PocketBase Client
# ========================================

_settings = get_settings()
pb_url = _settings.pocketbase_url
pb = PocketBase(pb_url)


async def authenticate_pb() -> None:
    """Authenticate with PocketBase as admin."""
    settings = get_settings()
    try:
        await asyncio.to_thread(
            pb.collection("_superusers").auth_with_password,
            settings.pocketbase_admin_email,
            settings.pocketbase_admin_password,
        )
        logger.info("Successfully authenticated with PocketBase")
    except Exception as e:
        logger.error(f"Failed to authenticate with PocketBase: {e}")
        raise


# ========================================
# Repositories
# ========================================


# Dependency functions for repository injection (mockable in tests)
def get_bond_repository() -> BondRepository:
    """Get a BondRepository instance."""
    return BondRepository(pb)


def get_person_repository() -> PersonRepository:
    """Get a PersonRepository instance."""
    return PersonRepository(pb, bonds=BondRepository(pb))


# ========================================
# Graph Cache
# ========================================

graph_cache = GraphCacheManager(
    ttl_seconds=_settings.graph_cache_ttl_seconds,
    max_cache_size=_settings.graph_cache_max_size,
)


__all__ = [
    "pb",
    "pb_url",
    "authenticate_pb",
    "get_bond_repository",
    "get_person_repository",
    "graph_cache",
]
