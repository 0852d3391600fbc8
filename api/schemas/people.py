"""
Pydantic schemas for profile endpoints.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class PersonBase(BaseModel):
    """Optional profile fields shared by create and response models"""

    vibe: str | None = None
    img: str | None = None
    bio: str | None = None
    birthday: str | datetime | None = None
    location: str | None = None
    emoji: str | None = None
    instagram: str | None = None
    twitter: str | None = None


class PersonCreate(PersonBase):
    """Request body for creating a profile"""

    name: str = Field(min_length=1)


class PersonUpdate(PersonBase):
    """Request body for updating a profile; only provided fields change"""

    name: str | None = Field(default=None, min_length=1)


class PersonResponse(PersonBase):
    """Stored profile"""

    id: str
    name: str
