from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from vekstloop.core.config import get_config
from vekstloop.core.dependencies import get_db_session
from vekstloop.main import create_app


@pytest.fixture
def client(db_session, scope_mode):
    app = create_app()

    def _session():
        yield db_session

    app.dependency_overrides[get_db_session] = _session
    with TestClient(app) as test_client:
        yield test_client


def _auth(creds) -> dict:
    return dict(creds.headers)


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_unauthenticated_request_gets_error_envelope(client):
    response = client.get("/api/v1/leads")

    assert response.status_code == 401
    assert response.json() == {
        "status": "error",
        "error_code": "unauthenticated",
        "detail": "Failed to fetch leads",
    }


def test_lead_lifecycle(client, creds_a):
    created = client.post(
        "/api/v1/leads",
        json={"name": "Nordlys AS", "email": "post@nordlys.no", "phone": "+4712345678", "tags": ["vip"]},
        headers=_auth(creds_a),
    )
    assert created.status_code == 201
    lead = created.json()
    assert lead["stage"] == "lead"
    assert lead["tags"] == ["vip"]

    converted = client.post(f"/api/v1/leads/{lead['id']}/convert", headers=_auth(creds_a))
    assert converted.status_code == 200
    assert converted.json()["stage"] == "customer"
    assert converted.json()["status"] == "active"

    customers = client.get("/api/v1/customers", headers=_auth(creds_a)).json()
    assert [c["id"] for c in customers] == [lead["id"]]


def test_other_workspace_gets_404(client, creds_a, creds_b):
    lead = client.post(
        "/api/v1/leads",
        json={"name": "Nordlys AS", "email": "post@nordlys.no", "phone": "+4712345678"},
        headers=_auth(creds_a),
    ).json()

    response = client.get(f"/api/v1/leads/{lead['id']}", headers=_auth(creds_b))
    assert response.status_code == 404
    assert response.json()["error_code"] == "not_found"

    response = client.patch(f"/api/v1/customers/{lead['id']}", json={"name": "X"}, headers=_auth(creds_b))
    assert response.status_code == 404


def test_invalid_stage_is_422(client, creds_a):
    lead = client.post(
        "/api/v1/leads",
        json={"name": "Nordlys AS", "email": "post@nordlys.no", "phone": "+4712345678"},
        headers=_auth(creds_a),
    ).json()

    response = client.put(f"/api/v1/leads/{lead['id']}/stage", json={"stage": "bogus"}, headers=_auth(creds_a))

    assert response.status_code == 422


def test_session_cookie_is_accepted(client, creds_a):
    token = creds_a.headers["authorization"].split(" ", 1)[1]
    client.cookies.set(get_config().SESSION_COOKIE_NAME, token)

    response = client.get("/api/v1/leads")

    assert response.status_code == 200
    assert response.json() == []


def test_email_provider_status_without_session(client):
    response = client.get("/api/v1/email-provider")

    assert response.status_code == 200
    assert response.json()["connected"] is False


def test_business_update_and_delete(client, creds_a, creds_b):
    lead = client.post(
        "/api/v1/leads",
        json={"name": "Nordlys AS", "email": "post@nordlys.no", "phone": "+4712345678"},
        headers=_auth(creds_a),
    ).json()
    path = f"/api/v1/businesses/{lead['id']}"

    updated = client.patch(path, json={"city": "Tromsø"}, headers=_auth(creds_a))
    assert updated.status_code == 200
    assert updated.json()["city"] == "Tromsø"

    assert client.delete(path, headers=_auth(creds_b)).status_code == 404

    deleted = client.delete(path, headers=_auth(creds_a))
    assert deleted.status_code == 200
    assert deleted.json()["message"] == "Business deleted"
    assert client.get(path, headers=_auth(creds_a)).status_code == 404
