# tests/test_licenses.py
from datetime import date, timedelta

from fastapi.testclient import TestClient

from servicedesk.main import app

client = TestClient(app)


def new_license(headers, **overrides):
    body = {"name": "JetBrains All Products", "vendor": "JetBrains", "license_key": "JB-XXXX-XXXX"}
    body.update(overrides)
    r = client.post("/licenses/", json=body, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


def test_create_and_get_license(admin_headers):
    data = new_license(admin_headers, expiry_date="2030-01-31")
    assert data["vendor"] == "JetBrains"
    assert data["expiry_date"] == "2030-01-31"

    r = client.get(f"/licenses/{data['id']}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["name"] == "JetBrains All Products"


def test_licenses_are_admin_only(user_headers):
    assert client.get("/licenses/", headers=user_headers).status_code == 403
    r = client.post("/licenses/", json={"name": "x", "vendor": "y", "license_key": "z"}, headers=user_headers)
    assert r.status_code == 403


def test_expiring_filter(admin_headers):
    soon = new_license(admin_headers, expiry_date=(date.today() + timedelta(days=5)).isoformat())
    later = new_license(admin_headers, expiry_date=(date.today() + timedelta(days=400)).isoformat())
    undated = new_license(admin_headers)

    r = client.get("/licenses/", params={"expiring_within_days": 30}, headers=admin_headers)
    assert r.status_code == 200
    ids = {item["id"] for item in r.json()}
    assert soon["id"] in ids
    assert later["id"] not in ids
    assert undated["id"] not in ids

    r = client.get("/licenses/", params={"expiring_within_days": -1}, headers=admin_headers)
    assert r.status_code == 422


def test_assign_license(admin_headers, user_id):
    data = new_license(admin_headers)

    r = client.put(f"/licenses/{data['id']}/assign", json={"assigned_user_id": user_id}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["assigned_user"]["id"] == user_id

    r = client.put(f"/licenses/{data['id']}/assign", json={"assigned_user_id": 9999999}, headers=admin_headers)
    assert r.status_code == 404


def test_missing_license(admin_headers):
    r = client.get("/licenses/9999999", headers=admin_headers)
    assert r.status_code == 404
    assert r.json()["detail"] == "License not found"
