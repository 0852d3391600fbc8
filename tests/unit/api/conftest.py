"""Fixtures for API router tests: mocked repositories behind a TestClient."""

from __future__ import annotations

from collections.abc import Generator
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def person_repo(chain_people) -> Mock:
    repo = Mock()
    repo.list_all.return_value = chain_people
    repo.find_by_id.side_effect = lambda person_id: next((p for p in chain_people if p["id"] == person_id), None)
    return repo


@pytest.fixture
def bond_repo(chain_bonds) -> Mock:
    repo = Mock()
    repo.list_all.return_value = chain_bonds
    return repo


@pytest.fixture
def client(person_repo: Mock, bond_repo: Mock) -> Generator[TestClient, None, None]:
    """Create test client with repositories overridden by mocks."""
    from api.dependencies import get_bond_repository, get_person_repository, graph_cache
    from api.main import create_app

    graph_cache.clear()
    app = create_app()
    app.dependency_overrides[get_person_repository] = lambda: person_repo
    app.dependency_overrides[get_bond_repository] = lambda: bond_repo

    yield TestClient(app)

    graph_cache.clear()
