"""
Shared pytest configuration and fixtures for the election backend.
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Project root holds the top-level modules (main, models, core, ...)
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.election_process import ElectionProcess  # noqa: E402
from core.registry import ElectionRegistry  # noqa: E402


@pytest.fixture
def registry():
    """Provide a fresh, empty registry."""
    return ElectionRegistry(id_length=16, max_elections=100, channel_capacity=8)


@pytest.fixture
def process():
    """Election with nominees {0: "A", 1: "B"} in FirstVote."""
    return ElectionProcess.create("test-election", "Facilitator", ["B", "A", "A"])


@pytest.fixture
def election_id(registry):
    """Election registered in the ``registry`` fixture."""
    return registry.create_election("Facilitator", ["B", "A", "A"])


@pytest.fixture
def client():
    """TestClient running the app lifespan (fresh registry per test)."""
    from main import app

    with TestClient(app) as test_client:
        yield test_client


def _drain(subscription):
    events = []
    event = subscription.get_nowait()
    while event is not None:
        events.append(event)
        event = subscription.get_nowait()
    return events


@pytest.fixture
def drain():
    """Collect every event currently buffered in a subscription (no waiting)."""
    return _drain
