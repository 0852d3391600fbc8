"""Implicit link derivation for the bond graph.

Explicit bonds are the relationships people entered by hand. From them we
derive the 2nd and 3rd degree connections shown as dashed links in the graph:

1. Explicit bond (1st degree) -> category 1, original type preserved
2. Friend of a friend (2nd degree) -> category 2, type "second_degree"
3. Three hops away (3rd degree) -> category 3, type "third_degree"

An explicit bond always wins: a pair that is directly bonded never gets a
derived link, and each unordered pair gets at most one derived link.

Identifiers are compared by their string form, so ``1`` on a person and
``"1"`` on a bond refer to the same vertex.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields, is_dataclass
from typing import Any
from uuid import UUID

from ..errors import MalformedEndpointError

logger = logging.getLogger(__name__)

EXPLICIT_CATEGORY = 1
SECOND_DEGREE_CATEGORY = 2
THIRD_DEGREE_CATEGORY = 3

# Only these distances produce derived links
DERIVED_LINK_TYPES = {
    SECOND_DEGREE_CATEGORY: "second_degree",
    THIRD_DEGREE_CATEGORY: "third_degree",
}

# Vertices at this distance are discovered but never expanded
MAX_DEGREE = THIRD_DEGREE_CATEGORY

_ID_TYPES = (str, int, UUID)


@dataclass(frozen=True)
class TraversalStep:
    """A vertex on the BFS frontier and its hop distance from the origin."""

    vertex: str
    distance: int


def endpoint_id(endpoint: Any) -> Any:
    """Normalize a relationship endpoint (or a person) to a bare identifier.

    Accepts a bare id, a mapping with an ``"id"`` key, or any object with an
    ``id`` attribute (e.g. a record returned by the record store).

    Raises:
        MalformedEndpointError: If no usable identifier can be extracted
    """
    if isinstance(endpoint, Mapping):
        value = endpoint.get("id")
    elif isinstance(endpoint, _ID_TYPES):
        value = endpoint
    else:
        value = getattr(endpoint, "id", None)

    if value is None or isinstance(value, bool) or not isinstance(value, _ID_TYPES):
        raise MalformedEndpointError(f"Cannot resolve an id from endpoint {endpoint!r}")
    return value


def vertex_key(endpoint: Any) -> str:
    """String vertex key for an endpoint, used for adjacency and pair keys."""
    return str(endpoint_id(endpoint))


def canonical_pair_key(a: Any, b: Any) -> str:
    """Direction-independent key for an unordered pair of vertices."""
    first, second = str(a), str(b)
    if second < first:
        first, second = second, first
    return f"{first}-{second}"


def record_field(record: Any, name: str, default: Any = None) -> Any:
    """Read a field from a mapping or an attribute-style record."""
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def as_link_dict(record: Any) -> dict[str, Any]:
    """Shallow copy of a relationship record as a plain dict.

    Handles mappings, pydantic models, named tuples, dataclasses (slotted or
    not), plain objects and objects that only define ``__slots__``.
    """
    if isinstance(record, Mapping):
        return dict(record)
    if hasattr(record, "model_dump"):
        return record.model_dump()
    if hasattr(record, "_asdict"):
        return dict(record._asdict())
    if is_dataclass(record) and not isinstance(record, type):
        return {field.name: getattr(record, field.name) for field in fields(record)}
    if hasattr(record, "__dict__"):
        return dict(vars(record))

    data = {}
    for cls in type(record).__mro__:
        slots = getattr(cls, "__slots__", ())
        for name in (slots,) if isinstance(slots, str) else slots:
            if not name.startswith("__") and hasattr(record, name):
                data[name] = getattr(record, name)
    return data


def _build_adjacency(people_keys: list[str], relationships: list[Any]) -> dict[str, list[str]]:
    adjacency: dict[str, list[str]] = {key: [] for key in people_keys}
    for link in relationships:
        source = vertex_key(record_field(link, "source"))
        target = vertex_key(record_field(link, "target"))
        # Bonds to unknown people are passed through but never traversed
        if source in adjacency and target in adjacency:
            adjacency[source].append(target)
            adjacency[target].append(source)
    return adjacency


def _existing_pairs(relationships: list[Any]) -> set[str]:
    pairs: set[str] = set()
    for link in relationships:
        source = vertex_key(record_field(link, "source"))
        target = vertex_key(record_field(link, "target"))
        pairs.add(f"{source}-{target}")
        pairs.add(f"{target}-{source}")
    return pairs


def derive_links(people: Iterable[Any], explicit_relationships: Iterable[Any]) -> list[dict[str, Any]]:
    """Combine explicit bonds with derived 2nd and 3rd degree links.

    Args:
        people: Person records (or bare ids); only their ``id`` is used
        explicit_relationships: Bond records with ``source``, ``target``, ``type``
            and any other fields, which are passed through untouched

    Returns:
        Every explicit bond (copied, with ``category=1``) in input order,
        followed by the derived links in BFS discovery order

    Raises:
        MalformedEndpointError: If a person or bond endpoint has no usable id
    """
    people = list(people)
    relationships = list(explicit_relationships)

    ids_by_key = {vertex_key(person): endpoint_id(person) for person in people}
    origins = [vertex_key(person) for person in people]

    adjacency = _build_adjacency(origins, relationships)
    existing_pairs = _existing_pairs(relationships)

    links = [{**as_link_dict(link), "category": EXPLICIT_CATEGORY} for link in relationships]

    # Shared across origins so B->A is skipped once A->B was derived
    generated_pairs: set[str] = set()

    for origin in origins:
        distances = {origin: 0}
        queue = deque([TraversalStep(origin, 0)])

        while queue:
            step = queue.popleft()
            if step.distance >= MAX_DEGREE:
                continue

            for neighbor in adjacency[step.vertex]:
                if neighbor in distances:
                    continue

                distance = step.distance + 1
                distances[neighbor] = distance
                queue.append(TraversalStep(neighbor, distance))

                link_type = DERIVED_LINK_TYPES.get(distance)
                if link_type is None:
                    continue

                pair_key = canonical_pair_key(origin, neighbor)
                # existing_pairs never matches here: an explicit bond means distance 1
                if pair_key in generated_pairs or pair_key in existing_pairs:
                    continue

                generated_pairs.add(pair_key)
                links.append(
                    {
                        "source": ids_by_key[origin],
                        "target": ids_by_key[neighbor],
                        "type": link_type,
                        "category": distance,
                    }
                )

    logger.debug(
        f"Derived {len(links) - len(relationships)} implicit links from "
        f"{len(people)} people and {len(relationships)} explicit bonds"
    )
    return links
