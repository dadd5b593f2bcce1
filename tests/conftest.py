"""Shared fixtures for the post manager tests."""

import sys
from pathlib import Path

import httpx
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from post_manager.api import InMemoryPostsBackend, ResourceClient
from post_manager.store import ResourceStore


BASE_URL = "http://posts.test"


@pytest.fixture
def backend():
    """An empty in-memory posts backend."""
    return InMemoryPostsBackend()


@pytest.fixture
def client(backend):
    """A ResourceClient routed to the in-memory backend."""
    http_client = httpx.AsyncClient(transport=backend.transport())
    return ResourceClient(BASE_URL, http_client=http_client)


@pytest.fixture
def store(client):
    """A ResourceStore on top of the in-memory backend."""
    return ResourceStore(client)


def make_client(handler) -> ResourceClient:
    """A ResourceClient whose requests are answered by `handler`."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ResourceClient(BASE_URL, http_client=http_client)
