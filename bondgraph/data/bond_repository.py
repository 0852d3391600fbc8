"""Bond repository for the ``relationships`` collection.

A bond record has ``source`` and ``target`` (profile ids), a free-form
``type`` and optional ``lore`` text."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from pocketbase.client import ClientResponseError  # type: ignore[attr-defined]

from ..logging_config import TRACE
from .records import escape_filter_value, is_not_found, record_to_dict, store_error

if TYPE_CHECKING:
    from pocketbase import PocketBase

logger = logging.getLogger(__name__)

COLLECTION_NAME = "relationships"
BOND_FIELDS = ("source", "target", "type", "lore")
DEFAULT_LORE = "No lore yet."


class BondRepository:
    """Repository for bond records."""

    def __init__(self, pb_client: PocketBase) -> None:
        """Initialize repository with PocketBase client.

        Args:
            pb_client: PocketBase client instance
        """
        self.pb = pb_client

    def list_all(self) -> list[dict[str, Any]]:
        """Fetch every bond, oldest first."""
        try:
            records = self.pb.collection(COLLECTION_NAME).get_full_list(query_params={"sort": "created"})
        except ClientResponseError as e:
            raise store_error("list bonds", e) from e
        return [record_to_dict(record, BOND_FIELDS) for record in records]

    def find_by_id(self, bond_id: str) -> dict[str, Any] | None:
        """Find a bond by record id, None if it does not exist."""
        try:
            record = self.pb.collection(COLLECTION_NAME).get_one(bond_id)
        except ClientResponseError as e:
            if is_not_found(e):
                return None
            raise store_error(f"load bond {bond_id}", e) from e
        return record_to_dict(record, BOND_FIELDS)

    def create(self, source: str, target: str, bond_type: str, lore: str | None = None) -> dict[str, Any]:
        """Store a new bond.

        Validation (self bonds, existing pairs) is the caller's job; see
        bondgraph.graph.bond_hygiene.validate_new_bond.
        """
        data = {
            "source": source,
            "target": target,
            "type": bond_type,
            "lore": lore or DEFAULT_LORE,
        }
        try:
            record = self.pb.collection(COLLECTION_NAME).create(data)
        except ClientResponseError as e:
            raise store_error("create bond", e) from e

        logger.info(f"Created {bond_type} bond {source} -> {target}")
        return record_to_dict(record, BOND_FIELDS)

    def delete(self, bond_id: str) -> bool:
        """Delete a bond. Returns False if it did not exist."""
        try:
            self.pb.collection(COLLECTION_NAME).delete(bond_id)
        except ClientResponseError as e:
            if is_not_found(e):
                return False
            raise store_error(f"delete bond {bond_id}", e) from e
        return True

    def delete_many(self, bond_ids: Iterable[str]) -> int:
        """Delete several bonds, returning how many were removed."""
        return sum(1 for bond_id in bond_ids if self.delete(bond_id))

    def delete_for_person(self, person_id: str) -> int:
        """Delete every bond where the person is source or target."""
        escaped = escape_filter_value(person_id)
        filter_str = f"source = '{escaped}' || target = '{escaped}'"
        logger.log(TRACE, f"Listing bonds with filter: {filter_str}")

        try:
            records = self.pb.collection(COLLECTION_NAME).get_full_list(query_params={"filter": filter_str})
        except ClientResponseError as e:
            raise store_error(f"list bonds for person {person_id}", e) from e

        removed = self.delete_many(record.id for record in records)
        if removed:
            logger.info(f"Deleted {removed} bonds for person {person_id}")
        return removed

    def migrate_type(self, old_type: str, new_type: str) -> int:
        """Rename a bond type on every matching record (legacy data clean-up).

        Returns:
            Number of records updated
        """
        filter_str = f"type = '{escape_filter_value(old_type)}'"
        try:
            records = self.pb.collection(COLLECTION_NAME).get_full_list(query_params={"filter": filter_str})
            for record in records:
                self.pb.collection(COLLECTION_NAME).update(record.id, {"type": new_type})
        except ClientResponseError as e:
            raise store_error(f"migrate bond type {old_type!r}", e) from e

        logger.info(f"Migrated {len(records)} bonds from {old_type!r} to {new_type!r}")
        return len(records)
