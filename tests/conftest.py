"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from claim_service import create_app
from claim_session import FlowController


@pytest.fixture(autouse=True)
def open_api(monkeypatch):
    """Run without an API key unless a test sets one."""
    monkeypatch.delenv("CLAIM_API_KEY", raising=False)


@pytest.fixture
def controller():
    return FlowController()


@pytest.fixture
def client():
    """Fresh app, so every test gets its own questionnaire session."""
    return TestClient(create_app())
