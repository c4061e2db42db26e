"""
HTTP tests for the villa routes.

Uses FastAPI's TestClient for fast, no-network testing.
"""

import pytest
from fastapi.testclient import TestClient

from villa_api.app.core.config import Settings
from villa_api.app.main import create_app


BASE = "/api/v1/villas"


def create(client, payload):
    resp = client.post(f"{BASE}/", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


# --- GET /villas ---

def test_list_empty(client):
    resp = client.get(f"{BASE}/")
    assert resp.status_code == 200
    assert resp.json() == []


def test_list_after_create(client, pool_view):
    create(client, pool_view)
    resp = client.get(f"{BASE}/")
    assert resp.json() == [{"id": 1, "name": "Pool View", "sqft": 100, "occupancy": 4}]


# --- GET /villas/{id} ---

def test_get(client, pool_view):
    create(client, pool_view)
    resp = client.get(f"{BASE}/1")
    assert resp.status_code == 200
    assert resp.json()["name"] == "Pool View"


def test_get_zero_is_bad_request(client):
    resp = client.get(f"{BASE}/0")
    assert resp.status_code == 400
    assert "detail" in resp.json()


def test_get_missing(client):
    resp = client.get(f"{BASE}/999")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Villa 999 not found"


def test_get_non_integer_id(client):
    resp = client.get(f"{BASE}/abc")
    assert resp.status_code == 400


# --- POST /villas ---

def test_create_sets_location(client, pool_view):
    resp = client.post(f"{BASE}/", json=pool_view)
    assert resp.status_code == 201
    assert resp.json() == {"id": 1, "name": "Pool View", "sqft": 100, "occupancy": 4}
    assert resp.headers["location"].endswith(f"{BASE}/1")
    assert client.get(resp.headers["location"]).status_code == 200


def test_create_null_payload(client):
    resp = client.post(f"{BASE}/", content="null", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400


def test_create_missing_body(client):
    resp = client.post(f"{BASE}/")
    assert resp.status_code == 400


def test_create_preset_id(client):
    resp = client.post(f"{BASE}/", json={"id": 5, "name": "X", "sqft": 10, "occupancy": 1})
    assert resp.status_code == 500
    assert client.get(f"{BASE}/").json() == []


def test_create_duplicate_name(client):
    create(client, {"name": "A", "sqft": 100, "occupancy": 2})
    resp = client.post(f"{BASE}/", json={"name": "a", "sqft": 50, "occupancy": 1})
    assert resp.status_code == 400
    assert resp.json() == {"detail": "Villa already exists!", "errors": {"name": ["Villa already exists!"]}}


@pytest.mark.parametrize(
    "payload, field",
    [
        ({"sqft": 100, "occupancy": 2}, "name"),
        ({"name": "", "sqft": 100, "occupancy": 2}, "name"),
        ({"name": "   ", "sqft": 100, "occupancy": 2}, "name"),
        ({"name": "x" * 31, "sqft": 100, "occupancy": 2}, "name"),
        ({"name": "A", "sqft": -1, "occupancy": 2}, "sqft"),
        ({"name": "A", "sqft": 100, "occupancy": 0}, "occupancy"),
    ],
)
def test_create_malformed_payload(client, payload, field):
    resp = client.post(f"{BASE}/", json=payload)
    assert resp.status_code == 400
    assert field in resp.json()["errors"]


# --- PUT /villas/{id} ---

def test_replace(client, pool_view):
    create(client, pool_view)
    resp = client.put(f"{BASE}/1", json={"id": 1, "name": "Sea View", "sqft": 150, "occupancy": 6})
    assert resp.status_code == 204
    assert resp.content == b""
    assert client.get(f"{BASE}/1").json() == {"id": 1, "name": "Sea View", "sqft": 150, "occupancy": 6}


def test_replace_id_mismatch(client, pool_view):
    create(client, pool_view)
    resp = client.put(f"{BASE}/1", json={"id": 2, "name": "Sea View", "sqft": 150, "occupancy": 6})
    assert resp.status_code == 400


def test_replace_unknown_id(client, pool_view):
    create(client, pool_view)
    resp = client.put(f"{BASE}/5", json={"id": 5, "name": "Sea View", "sqft": 150, "occupancy": 6})
    assert resp.status_code == 404
    assert len(client.get(f"{BASE}/").json()) == 1


# --- PATCH /villas/{id} ---

def test_patch_fields(client, pool_view):
    create(client, pool_view)
    resp = client.patch(f"{BASE}/1", json={"occupancy": 6})
    assert resp.status_code == 204
    assert client.get(f"{BASE}/1").json() == {"id": 1, "name": "Pool View", "sqft": 100, "occupancy": 6}


def test_patch_empty_object_is_noop(client, pool_view):
    before = create(client, pool_view)
    resp = client.patch(f"{BASE}/1", json={})
    assert resp.status_code == 204
    assert client.get(f"{BASE}/1").json() == before


def test_patch_json_patch_document(client, pool_view):
    create(client, pool_view)
    resp = client.patch(
        f"{BASE}/1",
        content='[{"op": "replace", "path": "/name", "value": "Sea View"}]',
        headers={"Content-Type": "application/json-patch+json"},
    )
    assert resp.status_code == 204
    assert client.get(f"{BASE}/1").json()["name"] == "Sea View"


def test_patch_zero_id(client):
    resp = client.patch(f"{BASE}/0", json={"occupancy": 6})
    assert resp.status_code == 400


def test_patch_unknown_id_is_bad_request(client):
    resp = client.patch(f"{BASE}/3", json={"occupancy": 6})
    assert resp.status_code == 400
    assert client.get(f"{BASE}/").json() == []


def test_patch_unknown_field(client, pool_view):
    create(client, pool_view)
    resp = client.patch(f"{BASE}/1", json={"pool": True})
    assert resp.status_code == 400


def test_patch_invalid_value(client, pool_view):
    create(client, pool_view)
    resp = client.patch(f"{BASE}/1", json=[{"op": "replace", "path": "/occupancy", "value": -2}])
    assert resp.status_code == 400
    assert "occupancy" in resp.json()["errors"]
    assert client.get(f"{BASE}/1").json()["occupancy"] == 4


# --- DELETE /villas/{id} ---

def test_delete(client, pool_view):
    create(client, pool_view)
    resp = client.delete(f"{BASE}/1")
    assert resp.status_code == 204
    assert client.get(f"{BASE}/1").status_code == 404


def test_delete_zero(client):
    assert client.delete(f"{BASE}/0").status_code == 400


def test_delete_missing(client):
    assert client.delete(f"{BASE}/1").status_code == 404


# --- Scenarios ---

def test_create_delete_scenario(client):
    a = create(client, {"name": "A", "sqft": 100, "occupancy": 2})
    b = create(client, {"name": "B", "sqft": 200, "occupancy": 4})
    assert (a["id"], b["id"]) == (1, 2)
    assert client.delete(f"{BASE}/1").status_code == 204
    assert client.get(f"{BASE}/1").status_code == 404
    assert client.get(f"{BASE}/").json() == [{"id": 2, "name": "B", "sqft": 200, "occupancy": 4}]


def test_legacy_prefix_shares_the_collection(client, pool_view):
    resp = client.post("/api/VillaAPI/", json=pool_view)
    assert resp.status_code == 201
    assert client.get(f"{BASE}/1").json()["name"] == "Pool View"
    assert client.get("/api/VillaAPI/1").status_code == 200


def test_seeded_app_serves_demo_villas():
    with TestClient(create_app(Settings(seed_villas=True))) as c:
        names = [v["name"] for v in c.get(f"{BASE}/").json()]
        assert names == ["Pool View", "Beach View"]
        assert c.post(f"{BASE}/", json={"name": "Lake View", "sqft": 80, "occupancy": 2}).json()["id"] == 3
