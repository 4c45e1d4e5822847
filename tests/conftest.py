"""Shared fixtures: a fresh seeded repository per test and an API client bound to it."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from backend.main import app
from database import InstitutionRepository, get_db
from seed import load_seed


@pytest.fixture
def seed_records() -> list:
    return load_seed()


@pytest.fixture
def repo(seed_records) -> InstitutionRepository:
    return InstitutionRepository(seed_records)


@pytest.fixture
def client(repo):
    app.dependency_overrides[get_db] = lambda: repo
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
