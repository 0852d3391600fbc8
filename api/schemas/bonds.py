"""
Pydantic schemas for bond endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel


class BondCreate(BaseModel):
    """Request body for creating a bond"""

    source: str
    target: str
    type: str = "friend"
    lore: str | None = None


class BondResponse(BaseModel):
    """Stored bond"""

    id: str
    source: str
    target: str
    type: str | None = None
    lore: str | None = None


class DeduplicateResponse(BaseModel):
    """Result of removing duplicate bonds"""

    deleted_ids: list[str]
    deleted_count: int


class MigrateTypeRequest(BaseModel):
    """Rename a bond type across all bonds"""

    old_type: str = "best_friend"
    new_type: str = "friend"


class MigrateTypeResponse(BaseModel):
    old_type: str
    new_type: str
    updated_count: int
