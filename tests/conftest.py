"""
Root test configuration and fixtures for the bondgraph project.

This conftest.py provides common fixtures for all test categories:
- unit/bondgraph/: Pure graph logic and repositories
- unit/api/: FastAPI routers via TestClient

Note: sys.path manipulation is handled here to ensure imports work correctly.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import Mock, patch

import pytest

# Add project root to path to allow imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# The API module authenticates on startup unless told otherwise
os.environ.setdefault("SKIP_PB_AUTH", "true")


def make_record(record_id: str, **fields: object) -> SimpleNamespace:
    """Attribute-style record like the ones the PocketBase SDK returns."""
    return SimpleNamespace(id=record_id, **fields)


def create_mock_pocketbase():
    """Create a comprehensive mock PocketBase instance."""
    mock_pb = Mock()

    # Collection mock with chaining support
    mock_collection = Mock()

    # Collection auth (for _superusers collection)
    mock_collection.auth_with_password = Mock(return_value=True)

    # Collection methods
    mock_collection.get_full_list = Mock(return_value=[])
    mock_collection.get_one = Mock()
    mock_collection.create = Mock(return_value=make_record("mock-id"))
    mock_collection.update = Mock()
    mock_collection.delete = Mock(return_value=True)

    # Make collection callable to return itself for chaining
    mock_pb.collection = Mock(return_value=mock_collection)

    # Auth store
    mock_pb.auth_store = Mock()
    mock_pb.auth_store.base_token = "mock-token"
    mock_pb.auth_store.base_model = Mock()

    return mock_pb


@pytest.fixture
def mock_pocketbase():
    """Create a mock PocketBase instance for tests that need it."""
    return create_mock_pocketbase()


@pytest.fixture(autouse=True)
def mock_all_external_services():
    """Automatically mock all external services to prevent real connections.

    This fixture is applied to all tests to ensure isolation from external
    services like PocketBase, unless explicitly disabled.
    """
    # Skip mocking for integration tests that explicitly need real connections
    if os.environ.get("SKIP_MOCKING") == "true":
        yield {}
        return

    mock_pb = create_mock_pocketbase()

    with patch("pocketbase.PocketBase") as mock_pb_class:
        mock_pb_class.return_value = mock_pb
        yield {"pocketbase": mock_pb}


# =============================================================================
# Sample graph data
# =============================================================================


@pytest.fixture
def chain_people():
    """Five people A..E."""
    return [{"id": person_id, "name": f"Person {person_id}"} for person_id in "ABCDE"]


@pytest.fixture
def chain_bonds():
    """Chain A-B-C-D-E of explicit friend bonds."""
    return [
        {"id": "r1", "source": "A", "target": "B", "type": "friend"},
        {"id": "r2", "source": "B", "target": "C", "type": "friend"},
        {"id": "r3", "source": "C", "target": "D", "type": "friend"},
        {"id": "r4", "source": "D", "target": "E", "type": "friend"},
    ]


@pytest.fixture
def sample_person_data():
    """Sample profile record fields."""
    return {
        "id": "p-alice",
        "name": "Alice",
        "vibe": "chaotic good",
        "img": "https://example.com/alice.png",
        "bio": "Plays bass.",
        "birthday": "1995-04-12",
        "location": "Portland",
        "emoji": "🎸",
        "instagram": "alice",
        "twitter": "",
    }


@pytest.fixture
def record():
    """Factory for attribute-style PocketBase records."""
    return make_record
