# tests/conftest.py
import os
import tempfile

# must happen before anything imports servicedesk.core.config
_tmp_dir = tempfile.mkdtemp(prefix="servicedesk-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_tmp_dir, 'test.db')}"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CORS_ORIGINS"] = "http://localhost:3000"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from servicedesk.main import app  # noqa: E402

ADMIN_EMAIL = "admin@company.com"
ADMIN_PASSWORD = "admin123"
USER_EMAIL = "user@company.com"
USER_PASSWORD = "password123"


def login(client: TestClient, email: str, password: str) -> dict:
    r = client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="session")
def api() -> TestClient:
    return TestClient(app)


@pytest.fixture(scope="session")
def admin_login(api) -> dict:
    return login(api, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture(scope="session")
def user_login(api) -> dict:
    return login(api, USER_EMAIL, USER_PASSWORD)


@pytest.fixture(scope="session")
def admin_headers(admin_login) -> dict[str, str]:
    return bearer(admin_login["access_token"])


@pytest.fixture(scope="session")
def user_headers(user_login) -> dict[str, str]:
    return bearer(user_login["access_token"])


@pytest.fixture(scope="session")
def admin_id(admin_login) -> int:
    return admin_login["user"]["id"]


@pytest.fixture(scope="session")
def user_id(user_login) -> int:
    return user_login["user"]["id"]
