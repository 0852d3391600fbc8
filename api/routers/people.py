"""
People Router - CRUD endpoints for profiles.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path

from bondgraph.data import PersonRepository

from ..dependencies import get_person_repository
from ..schemas import PersonCreate, PersonResponse, PersonUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/people", tags=["people"])


@router.get("")
async def list_people(
    person_repo: Annotated[PersonRepository, Depends(get_person_repository)],
) -> list[PersonResponse]:
    """List all profiles, oldest first."""
    people = await asyncio.to_thread(person_repo.list_all)
    return [PersonResponse(**person) for person in people]


@router.post("", status_code=201)
async def create_person(
    body: PersonCreate,
    person_repo: Annotated[PersonRepository, Depends(get_person_repository)],
) -> PersonResponse:
    """Create a profile. A generated avatar is used when no image is given."""
    person = await asyncio.to_thread(person_repo.create, body.model_dump(mode="json", exclude_none=True))
    return PersonResponse(**person)


@router.put("/{person_id}")
async def update_person(
    person_id: Annotated[str, Path(description="Profile record ID")],
    body: PersonUpdate,
    person_repo: Annotated[PersonRepository, Depends(get_person_repository)],
) -> PersonResponse:
    """Update the provided profile fields."""
    fields = body.model_dump(mode="json", exclude_unset=True)
    if not fields:
        raise HTTPException(status_code=400, detail="No fields to update")

    person = await asyncio.to_thread(person_repo.update, person_id, fields)
    if person is None:
        raise HTTPException(status_code=404, detail=f"Person '{person_id}' not found")
    return PersonResponse(**person)


@router.delete("/{person_id}", status_code=204)
async def delete_person(
    person_id: Annotated[str, Path(description="Profile record ID")],
    person_repo: Annotated[PersonRepository, Depends(get_person_repository)],
) -> None:
    """Delete a profile together with all of its bonds."""
    deleted = await asyncio.to_thread(person_repo.delete, person_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Person '{person_id}' not found")
    logger.info(f"Person {person_id} deleted via API")
