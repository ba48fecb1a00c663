"""Shared fixtures: a fresh in-memory store per test and an API client wired to it."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import random
import pytest
from fastapi.testclient import TestClient
from crowdwatch.config import settings
from crowdwatch.database import make_engine
from crowdwatch.dependencies import get_analyzer, get_responder, get_rng, get_simulator, get_store
from crowdwatch.services.crowd_simulator import CrowdSimulator
from crowdwatch.services.media_analyzer import MediaAnalyzer
from crowdwatch.services.query_responder import QueryResponder
from crowdwatch.services.store import StadiumStore


@pytest.fixture
def empty_store():
    store = StadiumStore(make_engine("sqlite://"))
    store.init()
    yield store
    store.teardown()


@pytest.fixture
def store(empty_store):
    """Store seeded with the six default gates (A-F)."""
    for gate in settings.DEFAULT_GATES:
        empty_store.create_gate(**gate)
    return empty_store


@pytest.fixture
def client(store, tmp_path, monkeypatch):
    from crowdwatch.main import app

    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_simulator] = lambda: CrowdSimulator(store, rng=random.Random(3))
    app.dependency_overrides[get_responder] = lambda: QueryResponder(rng=random.Random(3))
    app.dependency_overrides[get_analyzer] = lambda: MediaAnalyzer(store, rng=random.Random(3), delay_seconds=0)
    app.dependency_overrides[get_rng] = lambda: random.Random(3)
    yield TestClient(app)
    app.dependency_overrides.clear()
