# tests/test_users.py
import uuid

from fastapi.testclient import TestClient

from servicedesk.main import app

client = TestClient(app)


def unique_email(prefix="staff"):
    return f"{prefix}-{uuid.uuid4().hex[:8]}@company.com"


def new_user(headers, **overrides):
    body = {"name": "Jane Doe", "email": unique_email(), "role": "END_USER", "password": "Secret123"}
    body.update(overrides)
    r = client.post("/users/", json=body, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


def test_create_user(admin_headers):
    email = unique_email()
    data = new_user(admin_headers, email=email.upper(), name="  Jane   ")
    assert data["email"] == email
    assert data["name"] == "Jane"
    assert data["role"] == "END_USER"
    assert "password" not in data
    assert "password_hash" not in data


def test_create_user_requires_admin(user_headers):
    r = client.post(
        "/users/",
        json={"name": "Jane Doe", "email": unique_email(), "role": "END_USER", "password": "Secret123"},
        headers=user_headers,
    )
    assert r.status_code == 403


def test_duplicate_email_conflicts(admin_headers):
    email = unique_email()
    new_user(admin_headers, email=email)

    r = client.post(
        "/users/",
        json={"name": "Someone Else", "email": email, "role": "ADMIN", "password": "Secret123"},
        headers=admin_headers,
    )
    assert r.status_code == 409
    assert r.json()["detail"] == "A user with this email already exists"
    assert r.json()["code"] == "CONFLICT"


def test_create_user_validation(admin_headers):
    base = {"name": "Jane Doe", "email": unique_email(), "role": "END_USER", "password": "Secret123"}

    # weak password
    r = client.post("/users/", json={**base, "password": "secret123"}, headers=admin_headers)
    assert r.status_code == 422
    assert "one uppercase letter" in r.text

    # too short
    r = client.post("/users/", json={**base, "password": "Ab1"}, headers=admin_headers)
    assert r.status_code == 422

    r = client.post("/users/", json={**base, "email": "not-an-email"}, headers=admin_headers)
    assert r.status_code == 422

    r = client.post("/users/", json={**base, "name": "J"}, headers=admin_headers)
    assert r.status_code == 422

    r = client.post("/users/", json={**base, "role": "SUPERUSER"}, headers=admin_headers)
    assert r.status_code == 422


def test_list_users_with_counts(admin_headers, user_headers, user_id):
    client.post(
        "/tickets/",
        json={"title": "Count me", "description": "A ticket for the counters.", "priority": "LOW", "category": "x"},
        headers=user_headers,
    )

    r = client.get("/users/", headers=admin_headers)
    assert r.status_code == 200
    by_id = {u["id"]: u for u in r.json()}
    assert by_id[user_id]["ticket_count"] >= 1
    assert "asset_count" in by_id[user_id]


def test_list_users_requires_admin(user_headers):
    r = client.get("/users/", headers=user_headers)
    assert r.status_code == 403


def test_profile_visibility(admin_headers, user_headers, user_id, admin_id):
    r = client.get(f"/users/{user_id}", headers=user_headers)
    assert r.status_code == 200
    assert r.json()["email"] == "user@company.com"
    assert isinstance(r.json()["tickets"], list)
    assert isinstance(r.json()["assets"], list)

    # end users cannot look at other profiles
    r = client.get(f"/users/{admin_id}", headers=user_headers)
    assert r.status_code == 404

    r = client.get(f"/users/{user_id}", headers=admin_headers)
    assert r.status_code == 200


def test_profile_missing(admin_headers):
    r = client.get("/users/9999999", headers=admin_headers)
    assert r.status_code == 404
    assert r.json()["detail"] == "User not found"


def test_update_role(admin_headers):
    created = new_user(admin_headers)

    r = client.put(f"/users/{created['id']}/role", json={"role": "ADMIN"}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["role"] == "ADMIN"

    r = client.put("/users/9999999/role", json={"role": "ADMIN"}, headers=admin_headers)
    assert r.status_code == 404
