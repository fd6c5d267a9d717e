# tests/test_rate_limit.py
import uuid

import pytest
from fastapi.testclient import TestClient

from servicedesk.core.rate_limit import TOO_MANY_REQUESTS, limiter
from servicedesk.main import app

client = TestClient(app)

TICKET = {
    "title": "Rate limited",
    "description": "Creating tickets until the limiter says no.",
    "priority": "LOW",
    "category": "Other",
}


@pytest.fixture
def enabled_limiter():
    limiter.reset()
    limiter.enabled = True
    yield limiter
    limiter.enabled = False
    limiter.reset()


def test_ticket_creation_is_limited_per_user(enabled_limiter, user_headers, admin_headers):
    for _ in range(5):
        assert client.post("/tickets/", json=TICKET, headers=user_headers).status_code == 201

    r = client.post("/tickets/", json=TICKET, headers=user_headers)
    assert r.status_code == 429
    assert r.json()["detail"] == TOO_MANY_REQUESTS
    assert r.json()["code"] == "RATE_LIMITED"
    assert r.headers["Retry-After"] == "60"

    # counted per user
    assert client.post("/tickets/", json=TICKET, headers=admin_headers).status_code == 201


def test_asset_creation_is_limited_globally(enabled_limiter, admin_headers):
    for i in range(10):
        r = client.post("/assets/", json={"name": f"Limited {i}", "type": "Other"}, headers=admin_headers)
        assert r.status_code == 201

    r = client.post("/assets/", json={"name": "One too many", "type": "Other"}, headers=admin_headers)
    assert r.status_code == 429


def test_user_creation_is_limited(enabled_limiter, admin_headers):
    def create():
        email = f"limit-{uuid.uuid4().hex[:8]}@company.com"
        body = {"name": "Limit Test", "email": email, "role": "END_USER", "password": "Secret123"}
        return client.post("/users/", json=body, headers=admin_headers)

    for _ in range(5):
        assert create().status_code == 201
    assert create().status_code == 429


def test_disabled_limiter_lets_everything_through(user_headers):
    assert not limiter.enabled
    for _ in range(7):
        assert client.post("/tickets/", json=TICKET, headers=user_headers).status_code == 201
