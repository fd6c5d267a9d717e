# tests/test_assets.py
import uuid

from fastapi.testclient import TestClient

from servicedesk.main import app

client = TestClient(app)


def serial():
    return f"SN-{uuid.uuid4().hex[:10].upper()}"


def new_asset(headers, **overrides):
    body = {"name": "Dell Latitude 7440", "type": "Computer", "serial_number": serial(), "purchase_date": "2024-02-01"}
    body.update(overrides)
    r = client.post("/assets/", json=body, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


def test_create_asset(admin_headers):
    data = new_asset(admin_headers, name="ThinkPad T14")
    assert data["status"] == "AVAILABLE"
    assert data["assigned_user_id"] is None
    assert data["purchase_date"] == "2024-02-01"


def test_create_asset_requires_admin(user_headers):
    r = client.post("/assets/", json={"name": "Mouse", "type": "Mouse"}, headers=user_headers)
    assert r.status_code == 403


def test_blank_serial_is_stored_as_null(admin_headers):
    a = new_asset(admin_headers, serial_number="   ")
    b = new_asset(admin_headers, serial_number="")
    assert a["serial_number"] is None
    assert b["serial_number"] is None


def test_duplicate_serial_conflicts(admin_headers):
    sn = serial()
    new_asset(admin_headers, serial_number=sn)

    r = client.post("/assets/", json={"name": "Other", "type": "Monitor", "serial_number": sn}, headers=admin_headers)
    assert r.status_code == 409
    assert r.json()["detail"] == "An asset with this serial number already exists"


def test_list_and_filter(admin_headers, user_headers):
    asset_type = f"Type-{uuid.uuid4().hex[:6]}"
    first = new_asset(admin_headers, type=asset_type)
    second = new_asset(admin_headers, type=asset_type, status="RETIRED")

    # any signed-in user may browse the inventory
    r = client.get("/assets/", params={"type": asset_type}, headers=user_headers)
    assert r.status_code == 200
    assert [a["id"] for a in r.json()] == [second["id"], first["id"]]

    r = client.get("/assets/", params={"type": asset_type, "status": "RETIRED"}, headers=user_headers)
    assert [a["id"] for a in r.json()] == [second["id"]]


def test_get_missing_asset(user_headers):
    r = client.get("/assets/9999999", headers=user_headers)
    assert r.status_code == 404
    assert r.json()["detail"] == "Asset not found"


def test_assign_and_unassign(admin_headers, user_id):
    asset = new_asset(admin_headers)

    r = client.put(f"/assets/{asset['id']}/assign", json={"assigned_user_id": user_id}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["status"] == "ASSIGNED"
    assert r.json()["assigned_user"]["id"] == user_id

    r = client.get("/assets/", params={"assigned_user_id": user_id}, headers=admin_headers)
    assert asset["id"] in {a["id"] for a in r.json()}

    r = client.put(f"/assets/{asset['id']}/assign", json={"assigned_user_id": None}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["status"] == "AVAILABLE"
    assert r.json()["assigned_user_id"] is None


def test_assign_unknown_user(admin_headers):
    asset = new_asset(admin_headers)
    r = client.put(f"/assets/{asset['id']}/assign", json={"assigned_user_id": 9999999}, headers=admin_headers)
    assert r.status_code == 404
    assert r.json()["detail"] == "User not found"


def test_update_status(admin_headers, user_headers):
    asset = new_asset(admin_headers)

    r = client.put(f"/assets/{asset['id']}/status", json={"status": "UNDER_MAINTENANCE"}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["status"] == "UNDER_MAINTENANCE"

    r = client.put(f"/assets/{asset['id']}/status", json={"status": "RETIRED"}, headers=user_headers)
    assert r.status_code == 403

    r = client.put(f"/assets/{asset['id']}/status", json={"status": "BROKEN"}, headers=admin_headers)
    assert r.status_code == 422
