"""Bond bookkeeping helpers used by the admin endpoints.

- Duplicate detection for the "clean duplicates" action
- Validation before a new bond is stored
- Filtering the bonds that touch a selected person
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..errors import BondValidationError
from .implicit_links import canonical_pair_key, record_field, vertex_key


def find_duplicate_bonds(relationships: Iterable[Any]) -> list[Any]:
    """Return the record ids of bonds whose pair already appeared earlier.

    The first bond of each unordered pair is kept; direction is ignored.
    """
    seen_pairs: set[str] = set()
    duplicates = []

    for link in relationships:
        pair_key = canonical_pair_key(
            vertex_key(record_field(link, "source")),
            vertex_key(record_field(link, "target")),
        )
        if pair_key in seen_pairs:
            duplicates.append(record_field(link, "id"))
        else:
            seen_pairs.add(pair_key)

    return duplicates


def validate_new_bond(source_id: Any, target_id: Any, relationships: Iterable[Any]) -> None:
    """Check that a bond between two people may be created.

    Raises:
        BondValidationError: If a side is missing, both sides are the same
            person, or the pair is already bonded in either direction
    """
    if source_id in (None, "") or target_id in (None, ""):
        raise BondValidationError("Please select two different people")

    source, target = str(source_id), str(target_id)
    if source == target:
        raise BondValidationError("Please select two different people")

    pair_key = canonical_pair_key(source, target)
    for link in relationships:
        existing = canonical_pair_key(
            vertex_key(record_field(link, "source")),
            vertex_key(record_field(link, "target")),
        )
        if existing == pair_key:
            raise BondValidationError("Bond already exists")


def connections_for(person_id: Any, links: Iterable[Any]) -> list[Any]:
    """Links (explicit or derived) with the person on either side."""
    key = str(person_id)
    return [
        link
        for link in links
        if vertex_key(record_field(link, "source")) == key or vertex_key(record_field(link, "target")) == key
    ]
