from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from backend.analytics.store import clear_events
from backend.app import app
from backend.geodata.client import get_geodata_client
from backend.recommendations.session import SessionStore, get_session_store
from backend.tests.factories import FakeGeodata


@pytest.fixture
def session_store() -> SessionStore:
    return SessionStore()


@pytest.fixture
def fake_geodata() -> FakeGeodata:
    return FakeGeodata()


@pytest.fixture
def client(session_store, fake_geodata):
    clear_events()
    app.dependency_overrides[get_session_store] = lambda: session_store
    app.dependency_overrides[get_geodata_client] = lambda: fake_geodata
    yield TestClient(app)
    app.dependency_overrides.clear()
