"""Test fixtures for the SpendWise API."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

# Point the module-level app at a throwaway directory BEFORE importing it.
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="spendwise_test_"))
os.environ.setdefault("LOG_REQUESTS", "false")

import pytest
from fastapi.testclient import TestClient

from spendwise.core.config import Settings
from spendwise.db.dal import Database
from spendwise.main import create_app


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Return settings bound to a fresh sqlite file."""

    settings = Settings(data_dir=tmp_path, db_filename="test.sqlite3")
    settings.init_post_load()
    return settings


@pytest.fixture()
def app(settings: Settings):
    return create_app(settings_override=settings)


@pytest.fixture()
def client(app):
    """Return a FastAPI test client."""

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def db(app) -> Database:
    return app.state.db


@pytest.fixture()
def add_expense(client):
    """POST an expense and return the stored record."""

    def _add(item_name: str, amount, category=None) -> dict:
        body = {"itemName": item_name, "amount": amount}
        if category is not None:
            body["category"] = category
        resp = client.post("/api/expenses", json=body)
        assert resp.status_code == 201, resp.text
        return resp.json()["expense"]

    return _add
