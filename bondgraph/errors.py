"""Error classes for bondgraph.

Graph helpers fail fast on malformed input; data access wraps record
store failures so callers only need to know about this hierarchy.
"""

from __future__ import annotations


class BondgraphError(Exception):
    """Base exception for bondgraph errors."""

    pass


class MalformedEndpointError(BondgraphError, ValueError):
    """Raised when a relationship endpoint is neither an id nor a record with an id."""

    pass


class BondValidationError(BondgraphError):
    """Raised when a new bond is rejected (self bond, existing pair, missing side)."""

    pass


class RecordStoreError(BondgraphError):
    """Raised when the hosted record store rejects or fails a request."""

    pass
