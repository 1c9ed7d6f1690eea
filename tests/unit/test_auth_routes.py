from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from recruitportal.api import main as api_main
from recruitportal.api.routes import auth as auth_route
from recruitportal.application.services.auth_service import AuthService
from recruitportal.infrastructure.security import decode_access_token, hash_password
from recruitportal.infrastructure.stores.applicant_store import ApplicantStore


@pytest.fixture()
def applicants(tmp_path: Path, monkeypatch) -> ApplicantStore:
    store = ApplicantStore(db_url=f"sqlite:///{tmp_path / 'auth-routes.db'}")
    store.upsert_admin(
        email="admin@mfc.com",
        username="MFC Admin",
        password_hash=hash_password("correct-horse"),
        regno="ADMIN001",
    )
    monkeypatch.setattr(auth_route, "_auth_service", AuthService(store))
    return store


def test_login_returns_admin_token(applicants):
    with TestClient(api_main.app) as client:
        resp = client.post("/api/auth/login", json={"email": "Admin@MFC.com", "password": "correct-horse"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["email"] == "admin@mfc.com"
    assert "password_hash" not in body["user"]
    assert decode_access_token(body["access_token"])["admin"] is True


def test_login_token_opens_admin_routes(applicants):
    with TestClient(api_main.app) as client:
        token = client.post(
            "/api/auth/login", json={"email": "admin@mfc.com", "password": "correct-horse"}
        ).json()["access_token"]
        resp = client.get("/api/admin/users", params={"limit": 1}, headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200


def test_login_failures(applicants):
    with TestClient(api_main.app) as client:
        wrong = client.post("/api/auth/login", json={"email": "admin@mfc.com", "password": "nope"})
        unknown = client.post("/api/auth/login", json={"email": "ghost@mfc.com", "password": "x"})
    assert wrong.status_code == 401
    assert wrong.json()["detail"] == "Invalid password"
    assert unknown.status_code == 404


def test_non_admin_login_cannot_use_admin_routes(applicants):
    applicants.create_user(
        username="asha", email="asha@mfc.com", regno="R1", password_hash=hash_password("pw")
    )
    with TestClient(api_main.app) as client:
        token = client.post("/api/auth/login", json={"email": "asha@mfc.com", "password": "pw"}).json()[
            "access_token"
        ]
        resp = client.get("/api/admin/users", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 403


def test_logout_and_health():
    with TestClient(api_main.app) as client:
        logout = client.post("/api/auth/logout")
        health = client.get("/health", headers={"X-Request-ID": "trace-abc"})
    assert logout.json() == {"message": "Logged out successfully"}
    assert health.json()["status"] == "ok"
    assert health.headers["X-Request-ID"] == "trace-abc"
