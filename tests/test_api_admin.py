"""
Endpoint tests for the protected admin routes.

Tests cover:
- Bearer token gate (401 when missing, 403 when invalid)
- District scoping of listing and adding
- Update/delete by identifier, including the 404 paths
"""

import sqlite3

import pytest

from vegetable_market_api.app.core.security import create_access_token
from vegetable_market_api.app.services.vegetable_service import VegetableService

TOMATO = {"name": "Tomato", "market": "MarketA", "highPrice": 40, "lowPrice": 25, "date": "2024-06-01"}


# =============================================================================
# Auth gate
# =============================================================================


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/api/admin/items"),
        ("post", "/api/admin/add"),
        ("put", "/api/admin/update/1"),
        ("delete", "/api/admin/delete/1"),
    ],
)
def test_missing_token_is_unauthorized(client, method, path):
    kwargs = {"json": TOMATO} if method in ("post", "put") else {}
    response = getattr(client, method)(path, **kwargs)
    assert response.status_code == 401
    assert response.json() == {"message": "Unauthorized"}


def test_non_bearer_scheme_is_unauthorized(client):
    response = client.get("/api/admin/items", headers={"Authorization": "Basic YWxpY2U6cHcx"})
    assert response.status_code == 401


def test_invalid_token_is_forbidden(client):
    response = client.get("/api/admin/items", headers={"Authorization": "Bearer not.a.token"})
    assert response.status_code == 403
    assert response.json() == {"message": "Forbidden"}


def test_token_signed_with_other_secret_is_forbidden(client):
    claims = {"id": 1, "username": "alice", "district": "Pune", "market": "MarketA"}
    token = create_access_token(claims, "some-other-secret", expires_minutes=60)
    response = client.get("/api/admin/items", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403


def test_expired_token_is_forbidden(client, settings):
    claims = {"id": 1, "username": "alice", "district": "Pune", "market": "MarketA"}
    token = create_access_token(claims, settings.secret_key, expires_minutes=-5)
    response = client.get("/api/admin/items", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403


def test_token_without_district_is_forbidden(client, settings):
    token = create_access_token({"id": 1, "username": "alice"}, settings.secret_key, expires_minutes=60)
    response = client.get("/api/admin/items", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403


# =============================================================================
# Scoping and CRUD
# =============================================================================


def test_worked_example(client, insert_record, login):
    token = login(username="alice", password="pw1", district="Pune", market="MarketA")
    item_id = insert_record(name="Tomato", district="Pune", market="MarketA", high_price=40, low_price=25, date="2024-06-01")
    headers = {"Authorization": f"Bearer {token}"}

    response = client.get("/api/admin/items", headers=headers)
    assert response.status_code == 200
    assert [item["_id"] for item in response.json()] == [item_id]

    response = client.get("/api/admin/items", params={"market": "MarketB"}, headers=headers)
    assert response.status_code == 200
    assert response.json() == []


def test_listing_is_scoped_to_token_district(client, insert_record, auth_headers):
    insert_record(name="Tomato", district="Pune", market="MarketA", date="2024-06-01")
    insert_record(name="Onion", district="Pune", market="MarketB", date="2024-06-03")
    insert_record(name="Tomato", district="Nashik", market="Lasalgaon", date="2024-06-02")
    headers = auth_headers(username="alice", district="Pune")

    items = client.get("/api/admin/items", headers=headers).json()
    assert [(i["district"], i["date"]) for i in items] == [("Pune", "2024-06-03"), ("Pune", "2024-06-01")]

    all_markets = client.get("/api/admin/items", params={"market": "All"}, headers=headers).json()
    assert len(all_markets) == 2

    market_b = client.get("/api/admin/items", params={"market": "MarketB"}, headers=headers).json()
    assert [i["name"] for i in market_b] == ["Onion"]


def test_add_ignores_submitted_district(client, auth_headers):
    headers = auth_headers(username="alice", district="Pune")
    response = client.post("/api/admin/add", json={**TOMATO, "district": "Nashik"}, headers=headers)
    assert response.status_code == 201
    created = response.json()
    assert created["district"] == "Pune"
    assert created["name"] == "Tomato"
    assert created["highPrice"] == 40
    assert isinstance(created["_id"], int)


def test_add_then_list_then_delete(client, auth_headers):
    headers = auth_headers()
    created = client.post("/api/admin/add", json=TOMATO, headers=headers).json()

    listed = client.get("/api/admin/items", headers=headers).json()
    assert created["_id"] in [i["_id"] for i in listed]

    response = client.delete(f"/api/admin/delete/{created['_id']}", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Item deleted successfully"}

    listed = client.get("/api/admin/items", headers=headers).json()
    assert created["_id"] not in [i["_id"] for i in listed]


def test_accounts_in_other_districts_do_not_see_each_others_items(client, auth_headers):
    pune = auth_headers(username="alice", district="Pune")
    nashik = auth_headers(username="bob", district="Nashik", market="Lasalgaon")

    client.post("/api/admin/add", json=TOMATO, headers=pune)
    assert client.get("/api/admin/items", headers=nashik).json() == []


def test_update_overwrites_submitted_fields(client, auth_headers):
    headers = auth_headers()
    created = client.post("/api/admin/add", json=TOMATO, headers=headers).json()

    response = client.put(f"/api/admin/update/{created['_id']}", json={"highPrice": 55}, headers=headers)
    assert response.status_code == 200
    updated = response.json()
    assert updated["highPrice"] == 55
    assert updated["lowPrice"] == 25
    assert updated["name"] == "Tomato"


def test_update_by_identifier_is_not_district_scoped(client, insert_record, auth_headers):
    item_id = insert_record(name="Tomato", district="Nashik", market="Lasalgaon")
    headers = auth_headers(username="alice", district="Pune")

    response = client.put(f"/api/admin/update/{item_id}", json={"lowPrice": 12}, headers=headers)
    assert response.status_code == 200
    assert response.json()["district"] == "Nashik"


@pytest.mark.parametrize("item_id", ["9999", "not-an-id"])
def test_update_and_delete_missing_item(client, auth_headers, item_id):
    headers = auth_headers()
    response = client.put(f"/api/admin/update/{item_id}", json={"name": "x"}, headers=headers)
    assert response.status_code == 404
    assert response.json() == {"message": "Item not found."}

    response = client.delete(f"/api/admin/delete/{item_id}", headers=headers)
    assert response.status_code == 404
    assert response.json() == {"message": "Item not found."}


def test_listing_store_failure_returns_fixed_message(client, auth_headers, monkeypatch):
    headers = auth_headers()

    def broken(cls, conn, district, market=None):
        raise sqlite3.OperationalError("database is locked")

    monkeypatch.setattr(VegetableService, "list_items", classmethod(broken))
    response = client.get("/api/admin/items", headers=headers)
    assert response.status_code == 500
    assert response.json() == {"message": "Failed to fetch items."}
