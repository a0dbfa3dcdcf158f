"""
Shared pytest fixtures for the Vegetable Market Prices API tests.

This module provides:
- Settings pointing at a temporary SQLite file with a cheap hash cost
- A FastAPI TestClient over a freshly built application
- A raw store connection for seeding records and for service tests
- Helpers to register an account and obtain its bearer token
"""

import os
import sqlite3
import sys
import tempfile
from typing import Callable, Dict, Iterator

import pytest
from fastapi.testclient import TestClient

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# ``main`` builds a module level app from the environment on import.
os.environ.setdefault("DATABASE_URL", os.path.join(tempfile.mkdtemp(), "import.db"))
os.environ.setdefault("JWT_SECRET", "import-secret")

from vegetable_market_api.app.core.config import Settings
from vegetable_market_api.app.core.db import get_connection, init_db
from vegetable_market_api.app.main import create_app

TEST_SECRET = "test-secret"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=str(tmp_path / "test.db"),
        secret_key=TEST_SECRET,
        environment="test",
        password_hash_iterations=1_000,
    )


@pytest.fixture
def client(settings) -> Iterator[TestClient]:
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def conn(settings) -> Iterator[sqlite3.Connection]:
    """Connection to the migrated test database."""
    init_db(settings.database_url)
    connection = get_connection(settings.database_url)
    try:
        yield connection
    finally:
        connection.close()


@pytest.fixture
def insert_record(conn) -> Callable[..., int]:
    """Insert a price record directly into the store and return its id."""

    def _insert(name=None, district=None, market=None, high_price=None, low_price=None, date=None) -> int:
        cursor = conn.execute(
            "INSERT INTO vegetables (name, district, market, high_price, low_price, date) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            (name, district, market, high_price, low_price, date),
        )
        conn.commit()
        return cursor.lastrowid

    return _insert


@pytest.fixture
def login(client) -> Callable[..., str]:
    """Register an account (if needed) and return a bearer token for it."""

    def _login(username="alice", password="pw1", district="Pune", market="MarketA") -> str:
        client.post(
            "/api/auth/register",
            json={"username": username, "password": password, "district": district, "market": market},
        )
        response = client.post("/api/auth/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return response.json()["token"]

    return _login


@pytest.fixture
def auth_headers(login) -> Callable[..., Dict[str, str]]:
    """Authorization headers for a (registered) account."""

    def _headers(**account) -> Dict[str, str]:
        return {"Authorization": f"Bearer {login(**account)}"}

    return _headers
