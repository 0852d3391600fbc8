"""Content fingerprints for detecting changes to the explicit graph.

The derived link list is a pure function of the people and bonds, so a hash
of that input is enough to tell whether a cached result is still valid."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Iterable, Mapping
from typing import Any

from ..graph.implicit_links import as_link_dict, endpoint_id


def calculate_content_hash(content: str | None) -> str:
    """Calculate MD5 hash of content for change detection.

    Args:
        content: The content to hash. None is treated as empty string.

    Returns:
        32-character hexadecimal MD5 hash string.
    """
    if content is None:
        content = ""

    return hashlib.md5(content.encode("utf-8")).hexdigest()


def _tagged(value: Any) -> dict[str, Any]:
    """JSON stand-in for a value json cannot encode, tagged with its type name."""
    if isinstance(value, Mapping):
        return {"__type__": type(value).__name__, "fields": dict(value)}
    if isinstance(value, (set, frozenset)):
        return {"__type__": type(value).__name__, "items": sorted(map(repr, value))}
    if hasattr(value, "__dict__") or hasattr(value, "__slots__") or hasattr(value, "_asdict"):
        fields = as_link_dict(value)
        if fields:
            return {"__type__": type(value).__name__, "fields": fields}
    return {"__type__": type(value).__name__, "value": str(value)}


def graph_fingerprint(people: Iterable[Any], relationships: Iterable[Any]) -> str:
    """Fingerprint of the person ids and bond records, order-sensitive.

    Records are hashed as given: two inputs get the same fingerprint only when
    derive_links would return equal output for them. ``1`` and ``"1"`` differ,
    as do a bare id endpoint and a record endpoint with that id.
    """
    payload = {
        "people": [endpoint_id(person) for person in people],
        "bonds": [as_link_dict(link) for link in relationships],
    }
    return calculate_content_hash(json.dumps(payload, sort_keys=True, default=_tagged))
