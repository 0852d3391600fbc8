"""Data access for profiles and relationships stored in PocketBase."""

from __future__ import annotations

from .bond_repository import BondRepository
from .person_repository import PersonRepository

__all__ = ["BondRepository", "PersonRepository"]
