"""Shared fixtures for the inventory API tests."""

import pytest
from fastapi.testclient import TestClient

from src.api import create_app
from src.config import ApiConfig, AppConfig, LoggingConfig, MongoDBConfig, ReportingConfig
from tests.fakes import FakeStore


@pytest.fixture
def store():
    """Empty in-memory store."""
    return FakeStore()


@pytest.fixture
def acme(store):
    """A manufacturer with a contact, returned as (manufacturer_id, contact_id)."""
    contact_id = store.add(
        "contacts", {"name": "Ada Lovelace", "email": "ada@acme.test", "phone": "+46 70 123 45 67"}
    )
    manufacturer_id = store.add(
        "manufacturers",
        {
            "name": "Acme",
            "country": "Sweden",
            "website": "https://acme.test",
            "description": "Makes everything",
            "address": "Storgatan 1",
            "contact": contact_id,
        },
    )
    return manufacturer_id, contact_id


@pytest.fixture
def globex(store):
    """A manufacturer without a contact."""
    return store.add(
        "manufacturers",
        {"name": "Globex", "country": "Norway", "website": "https://globex.test"},
    )


@pytest.fixture
def app_config():
    return AppConfig(
        mongodb=MongoDBConfig(
            uri="mongodb://localhost:27017/?replicaSet=rs0",
            database_name="ims_test",
            server_selection_timeout_ms=2000,
        ),
        api=ApiConfig(default_limit=1000),
        reporting=ReportingConfig(low_stock_threshold=10, critical_stock_threshold=5),
        logging=LoggingConfig(level="WARNING"),
    )


@pytest.fixture
def client(app_config, store):
    """TestClient over an app wired to the in-memory store."""
    app = create_app(config=app_config, store=store)
    with TestClient(app) as test_client:
        yield test_client
