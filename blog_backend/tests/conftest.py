"""Pytest config to ensure project root is on sys.path during test collection.

Some environments run pytest with a different working directory which can
lead to "No module named 'blog_backend'" import errors. This file ensures the
repository root is available to the test process, and provides a client
wired to a fresh in-memory store for each test.
"""
import os
import sys

import pytest

_HERE = os.path.dirname(__file__)
_ROOT = os.path.abspath(os.path.join(_HERE, ".."))  # blog_backend/
PROJECT_ROOT = os.path.abspath(os.path.join(_ROOT, ".."))  # repo root

# Insert project root at front of sys.path if not already present
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


@pytest.fixture
def memory_store():
    from blog_backend.stores import InMemoryStore

    return InMemoryStore()


@pytest.fixture
def client(memory_store):
    from fastapi.testclient import TestClient

    from blog_backend import metrics
    from blog_backend.api.main import app

    metrics.reset_all()
    app.state.store = memory_store
    with TestClient(app) as c:
        yield c
    app.state.store = None
