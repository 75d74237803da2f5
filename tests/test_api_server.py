"""
Tests for the FastAPI server. The explorer client dependency is overridden
with a fake source so no HTTP leaves the process.
"""

from __future__ import annotations

import time

import pytest
from fastapi.testclient import TestClient

from backend_wrapped.api_server.server import app, get_app_settings, get_explorer_client
from backend_wrapped.config.settings import Settings
from backend_wrapped.core.exceptions import MSG_EMPTY_WINDOW, MSG_ENTER_ADDRESS, MSG_FETCH_FAILED, FetchError
from conftest import FakeSource, ONE_ETH, WALLET


@pytest.fixture
def api_client():
    """TestClient whose explorer dependency returns whatever source the test installs."""
    holder: dict = {"source": FakeSource()}
    app.dependency_overrides[get_app_settings] = lambda: Settings()
    app.dependency_overrides[get_explorer_client] = lambda: holder["source"]
    with TestClient(app) as client:
        yield client, holder
    app.dependency_overrides.clear()


def test_health(api_client):
    client, _ = api_client
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_wrapped_returns_ten_slides(api_client, make_tx):
    """Recent activity -> 200 with slides in reveal order."""
    client, holder = api_client
    yesterday = int(time.time()) - 86400
    holder["source"] = FakeSource([make_tx(timestamp=yesterday, value=ONE_ETH, to_address="0xaaa")])

    r = client.get(f"/wrapped/{WALLET}")
    assert r.status_code == 200
    data = r.json()
    assert data["address"] == WALLET
    assert data["title"] == f"Crypto Wrapped {data['reference_year']}"
    assert len(data["slides"]) == 10
    assert data["slides"][0] == {
        "index": 0,
        "key": "transaction_count",
        "text": "You made a total of 1 transactions in the past year. What a journey!",
        "image": "slides/journey.gif",
    }
    assert data["slides"][-1]["key"] == "summary"
    assert holder["source"].calls == [WALLET]


def test_wrapped_fetch_failure_is_502(api_client):
    client, holder = api_client
    holder["source"] = FakeSource(error=FetchError("NOTOK"))
    r = client.get(f"/wrapped/{WALLET}")
    assert r.status_code == 502
    assert r.json() == {"detail": MSG_FETCH_FAILED}


def test_wrapped_empty_window_is_404(api_client, make_tx):
    client, holder = api_client
    holder["source"] = FakeSource([make_tx(timestamp=1_000_000_000)])
    r = client.get(f"/wrapped/{WALLET}")
    assert r.status_code == 404
    assert r.json() == {"detail": MSG_EMPTY_WINDOW}


def test_wrapped_blank_address_is_400(api_client):
    client, holder = api_client
    r = client.get("/wrapped/%20%20")
    assert r.status_code == 400
    assert r.json() == {"detail": MSG_ENTER_ADDRESS}
    assert holder["source"].calls == []
