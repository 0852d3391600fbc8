"""
Bonds Router - Endpoints for explicit bonds and bond clean-up.

This router handles:
- Listing, creating and deleting bonds
- Removing duplicate bonds between the same pair
- Renaming legacy bond types
"""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path

from bondgraph.data import BondRepository, PersonRepository
from bondgraph.graph import find_duplicate_bonds, validate_new_bond

from ..dependencies import get_bond_repository, get_person_repository
from ..schemas import (
    BondCreate,
    BondResponse,
    DeduplicateResponse,
    MigrateTypeRequest,
    MigrateTypeResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/bonds", tags=["bonds"])


@router.get("")
async def list_bonds(
    bond_repo: Annotated[BondRepository, Depends(get_bond_repository)],
) -> list[BondResponse]:
    """List all bonds, oldest first."""
    bonds = await asyncio.to_thread(bond_repo.list_all)
    return [BondResponse(**bond) for bond in bonds]


@router.post("", status_code=201)
async def create_bond(
    body: BondCreate,
    person_repo: Annotated[PersonRepository, Depends(get_person_repository)],
    bond_repo: Annotated[BondRepository, Depends(get_bond_repository)],
) -> BondResponse:
    """Create a bond between two different people who are not yet bonded.

    Raises:
        BondValidationError: Same person on both sides or the pair is already bonded (400)
        HTTPException: Either person does not exist (404)
    """
    existing = await asyncio.to_thread(bond_repo.list_all)
    validate_new_bond(body.source, body.target, existing)

    for person_id in (body.source, body.target):
        if await asyncio.to_thread(person_repo.find_by_id, person_id) is None:
            raise HTTPException(status_code=404, detail=f"Person '{person_id}' not found")

    bond = await asyncio.to_thread(bond_repo.create, body.source, body.target, body.type, body.lore)
    return BondResponse(**bond)


@router.delete("/{bond_id}", status_code=204)
async def delete_bond(
    bond_id: Annotated[str, Path(description="Bond record ID")],
    bond_repo: Annotated[BondRepository, Depends(get_bond_repository)],
) -> None:
    """Delete one bond."""
    deleted = await asyncio.to_thread(bond_repo.delete, bond_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Bond '{bond_id}' not found")


@router.post("/deduplicate")
async def deduplicate_bonds(
    bond_repo: Annotated[BondRepository, Depends(get_bond_repository)],
) -> DeduplicateResponse:
    """Delete every bond whose pair already has an earlier bond, in either direction."""
    bonds = await asyncio.to_thread(bond_repo.list_all)
    duplicate_ids = find_duplicate_bonds(bonds)

    removed = 0
    if duplicate_ids:
        removed = await asyncio.to_thread(bond_repo.delete_many, duplicate_ids)
        logger.info(f"Removed {removed} of {len(duplicate_ids)} duplicate bonds")

    return DeduplicateResponse(deleted_ids=duplicate_ids, deleted_count=removed)


@router.post("/migrate-type")
async def migrate_bond_type(
    bond_repo: Annotated[BondRepository, Depends(get_bond_repository)],
    body: MigrateTypeRequest | None = None,
) -> MigrateTypeResponse:
    """Rename a bond type on all bonds (defaults to best_friend -> friend)."""
    body = body or MigrateTypeRequest()
    if body.old_type == body.new_type:
        raise HTTPException(status_code=400, detail="old_type and new_type must differ")

    updated = await asyncio.to_thread(bond_repo.migrate_type, body.old_type, body.new_type)
    return MigrateTypeResponse(old_type=body.old_type, new_type=body.new_type, updated_count=updated)
