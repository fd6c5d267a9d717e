# tests/test_search.py
import uuid

from fastapi.testclient import TestClient

from servicedesk.main import app
from servicedesk.search.services import matches_term, unified_search
from servicedesk.user.models import User, UserRole

client = TestClient(app)


def token():
    return uuid.uuid4().hex[:10]


def test_blank_query_returns_nothing(user_headers):
    r = client.get("/search/", params={"q": "   "}, headers=user_headers)
    assert r.status_code == 200
    data = r.json()
    assert data["total"] == 0
    assert data["tickets"] == [] and data["assets"] == [] and data["users"] == []


def test_search_requires_login():
    assert client.get("/search/", params={"q": "printer"}).status_code == 401


def test_finds_tickets_case_insensitively(user_headers):
    word = token()
    created = client.post(
        "/tickets/",
        json={
            "title": f"Projector {word} flickers",
            "description": "The meeting room projector keeps flickering.",
            "priority": "MEDIUM",
            "category": "Hardware",
        },
        headers=user_headers,
    ).json()

    r = client.get("/search/", params={"q": word.upper()}, headers=user_headers)
    assert r.status_code == 200
    data = r.json()
    assert [t["id"] for t in data["tickets"]] == [created["id"]]

    result = data["results"][0]
    assert result["type"] == "ticket"
    assert result["url"] == f"/tickets/{created['id']}"
    assert result["subtitle"] == "End User · Hardware"
    assert result["metadata"] == {"status": "OPEN", "priority": "MEDIUM"}


def test_end_users_only_find_their_own_tickets(admin_headers, user_headers):
    word = token()
    client.post(
        "/tickets/",
        json={"title": f"Server {word}", "description": "Rack fan is very loud today.", "priority": "LOW", "category": "x"},
        headers=admin_headers,
    )

    assert client.get("/search/", params={"q": word}, headers=user_headers).json()["tickets"] == []
    assert len(client.get("/search/", params={"q": word}, headers=admin_headers).json()["tickets"]) == 1


def test_finds_assets_by_serial_and_users_by_name(admin_headers, user_headers):
    word = token()
    asset = client.post(
        "/assets/",
        json={"name": "Docking station", "type": "Other", "serial_number": f"DOCK-{word}"},
        headers=admin_headers,
    ).json()
    person = client.post(
        "/users/",
        json={"name": f"Pat {word}", "email": f"pat-{word}@company.com", "role": "END_USER", "password": "Secret123"},
        headers=admin_headers,
    ).json()

    data = client.get("/search/", params={"q": word}, headers=user_headers).json()
    assert [a["id"] for a in data["assets"]] == [asset["id"]]
    assert [u["id"] for u in data["users"]] == [person["id"]]
    assert data["total"] == 2

    by_type = {item["type"]: item for item in data["results"]}
    assert by_type["asset"]["subtitle"] == f"Other · DOCK-{word}"
    assert by_type["asset"]["metadata"] == {"status": "AVAILABLE"}
    assert by_type["user"]["subtitle"] == f"pat-{word}@company.com"
    assert by_type["user"]["metadata"] == {"role": "END_USER"}


def test_wildcards_are_literal(admin_headers):
    word = token()
    client.post("/assets/", json={"name": f"Cable {word}", "type": "Other"}, headers=admin_headers)

    data = client.get("/search/", params={"q": f"{word[:4]}%{word[-2:]}"}, headers=admin_headers).json()
    assert data["assets"] == []
    assert data["total"] == 0


def test_results_are_capped(admin_headers):
    word = token()
    for i in range(12):
        client.post("/assets/", json={"name": f"Headset {word} {i}", "type": "Other"}, headers=admin_headers)

    data = client.get("/search/", params={"q": word}, headers=admin_headers).json()
    assert len(data["assets"]) == 10
    assert len(data["results"]) == 10


def test_ticket_results_are_capped(admin_headers):
    word = token()
    for i in range(12):
        client.post(
            "/tickets/",
            json={"title": f"Printer {word} {i}", "description": "Paper jam on floor two.", "priority": "LOW", "category": "x"},
            headers=admin_headers,
        )

    data = client.get("/search/", params={"q": word}, headers=admin_headers).json()
    assert len(data["tickets"]) == 10
    # newest first
    assert data["tickets"][0]["title"] == f"Printer {word} 11"


def test_user_results_are_capped(admin_headers):
    word = token()
    for i in range(12):
        body = {"name": f"Sam {word}", "email": f"sam{i}-{word}@company.com", "role": "END_USER", "password": "Secret123"}
        assert client.post("/users/", json=body, headers=admin_headers).status_code == 201

    data = client.get("/search/", params={"q": word}, headers=admin_headers).json()
    assert len(data["users"]) == 10
    assert data["total"] == 10


def test_matches_term():
    assert matches_term("dock", None, "USB-C Docking Station")
    assert not matches_term("dock", None, "Monitor", "")
    assert not matches_term("dock")


def test_blank_query_skips_the_database():
    admin = User(id=1, name="Admin", email="admin@company.com", role=UserRole.ADMIN)
    results = unified_search(None, "  ", admin)
    assert results.total == 0
    assert results.results == []


def test_assigned_asset_metadata_is_status_only(admin_headers, user_id):
    word = token()
    asset = client.post("/assets/", json={"name": f"Laptop {word}", "type": "Laptop"}, headers=admin_headers).json()
    client.put(f"/assets/{asset['id']}/assign", json={"assigned_user_id": user_id}, headers=admin_headers)

    data = client.get("/search/", params={"q": word}, headers=admin_headers).json()
    assert data["results"][0]["metadata"] == {"status": "ASSIGNED"}
