"""Person repository for the ``profiles`` collection.

Handles all record store operations for people shown as graph nodes.
Deleting a person removes their bonds first so the graph never holds
bonds to a profile that no longer exists."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from pocketbase.client import ClientResponseError  # type: ignore[attr-defined]

from .bond_repository import BondRepository
from .records import is_not_found, record_to_dict, store_error

if TYPE_CHECKING:
    from pocketbase import PocketBase

logger = logging.getLogger(__name__)

COLLECTION_NAME = "profiles"
PROFILE_FIELDS = ("name", "vibe", "img", "bio", "birthday", "location", "emoji", "instagram", "twitter")
DEFAULT_AVATAR_URL = "https://api.dicebear.com/7.x/initials/svg?seed={name}"


def default_avatar(name: str) -> str:
    """Generated initials avatar used when a profile has no image."""
    return DEFAULT_AVATAR_URL.format(name=quote(name))


class PersonRepository:
    """Repository for profile records."""

    def __init__(self, pb_client: PocketBase, bonds: BondRepository | None = None) -> None:
        """Initialize repository with PocketBase client.

        Args:
            pb_client: PocketBase client instance
            bonds: Bond repository used for cascading deletes
        """
        self.pb = pb_client
        self.bonds = bonds or BondRepository(pb_client)

    def list_all(self) -> list[dict[str, Any]]:
        """Fetch every profile, oldest first."""
        try:
            records = self.pb.collection(COLLECTION_NAME).get_full_list(query_params={"sort": "created"})
        except ClientResponseError as e:
            raise store_error("list profiles", e) from e
        return [record_to_dict(record, PROFILE_FIELDS) for record in records]

    def find_by_id(self, person_id: str) -> dict[str, Any] | None:
        """Find a profile by record id, None if it does not exist."""
        try:
            record = self.pb.collection(COLLECTION_NAME).get_one(person_id)
        except ClientResponseError as e:
            if is_not_found(e):
                return None
            raise store_error(f"load profile {person_id}", e) from e
        return record_to_dict(record, PROFILE_FIELDS)

    def create(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Store a new profile. ``name`` is required; unknown keys are ignored."""
        data = {name: fields.get(name) for name in PROFILE_FIELDS if fields.get(name) not in (None, "")}
        if not data.get("img"):
            data["img"] = default_avatar(data["name"])

        try:
            record = self.pb.collection(COLLECTION_NAME).create(data)
        except ClientResponseError as e:
            raise store_error("create profile", e) from e

        logger.info(f"Created profile {record.id} ({data['name']})")
        return record_to_dict(record, PROFILE_FIELDS)

    def update(self, person_id: str, fields: Mapping[str, Any]) -> dict[str, Any] | None:
        """Update profile fields. Returns None if the profile does not exist."""
        data = {name: fields[name] for name in PROFILE_FIELDS if name in fields}

        try:
            record = self.pb.collection(COLLECTION_NAME).update(person_id, data)
        except ClientResponseError as e:
            if is_not_found(e):
                return None
            raise store_error(f"update profile {person_id}", e) from e

        return record_to_dict(record, PROFILE_FIELDS)

    def delete(self, person_id: str) -> bool:
        """Delete a profile and all of its bonds.

        Returns:
            False if the profile did not exist
        """
        self.bonds.delete_for_person(person_id)

        try:
            self.pb.collection(COLLECTION_NAME).delete(person_id)
        except ClientResponseError as e:
            if is_not_found(e):
                return False
            raise store_error(f"delete profile {person_id}", e) from e

        logger.info(f"Deleted profile {person_id}")
        return True
