"""Tests for the HTTP API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from box_packer.api import app, get_settings

client = TestClient(app)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("BOX_PACKER_CAPACITY", "BOX_PACKER_STRATEGY", "BOX_PACKER_OVERSIZE_POLICY"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_pack_returns_plan() -> None:
    response = client.post("/pack", json={"capacity": 10, "strategy": "best_fit", "weights": [6, 5, 4]})

    assert response.status_code == 200
    data = response.json()

    assert data["strategy"] == "best_fit"
    assert data["box_count"] == 2
    assert [b["items"] for b in data["boxes"]] == [[6.0, 4.0], [5.0]]
    assert [b["load"] for b in data["boxes"]] == [10.0, 5.0]
    assert data["total_weight"] == 15.0
    assert data["average_fill_ratio"] == 0.75
    assert data["unpacked"] == []
    assert isinstance(data["summary"], str)
    assert "Total Boxes Used: 2" in data["summary"]


def test_pack_accepts_string_weights() -> None:
    response = client.post("/pack", json={"capacity": "1", "strategy": "first_fit", "weights": ["0.1"] * 10})

    assert response.status_code == 200
    assert response.json()["box_count"] == 1


def test_pack_uses_environment_defaults(monkeypatch) -> None:
    monkeypatch.setenv("BOX_PACKER_CAPACITY", "10")
    monkeypatch.setenv("BOX_PACKER_STRATEGY", "first_fit")

    response = client.post("/pack", json={"weights": [5, 7, 3]})

    assert response.status_code == 200
    data = response.json()
    assert data["strategy"] == "first_fit"
    assert [b["items"] for b in data["boxes"]] == [[5.0, 3.0], [7.0]]


@pytest.mark.parametrize(
    "body, code",
    [
        ({"capacity": 10, "weights": [5, 0]}, "INVALID_ARGUMENT"),
        ({"capacity": 10, "weights": [-3]}, "INVALID_ARGUMENT"),
        ({"capacity": 10, "weights": ["heavy"]}, "INVALID_ARGUMENT"),
        ({"capacity": 0, "weights": [1]}, "INVALID_ARGUMENT"),
        ({"weights": [1]}, "INVALID_ARGUMENT"),
        ({"capacity": 10, "strategy": "worst_fit", "weights": [1]}, "UNKNOWN_STRATEGY"),
        ({"capacity": 10, "weights": [12], "oversize_policy": "reject"}, "OVERSIZED_ITEM"),
    ],
)
def test_pack_input_errors_return_422(body, code) -> None:
    response = client.post("/pack", json=body)

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["error"] == code
    assert isinstance(detail["details"], str) and detail["details"]


def test_pack_reports_skipped_oversized_items() -> None:
    response = client.post("/pack", json={"capacity": 10, "weights": [12, 3]})

    assert response.status_code == 200
    data = response.json()
    assert data["unpacked"] == [12.0]
    assert data["box_count"] == 1


def test_health() -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_settings_are_loaded_once(monkeypatch) -> None:
    monkeypatch.setenv("BOX_PACKER_CAPACITY", "10")
    assert client.post("/pack", json={"weights": [5, 5]}).status_code == 200

    monkeypatch.setenv("BOX_PACKER_CAPACITY", "20")
    response = client.post("/pack", json={"weights": [5, 5]})

    assert response.json()["box_capacity"] == 10.0


def test_bad_configuration_returns_500_with_error_payload(monkeypatch) -> None:
    monkeypatch.setenv("BOX_PACKER_STRATEGY", "worst_fit")

    response = client.post("/pack", json={"capacity": 10, "weights": [1]})

    assert response.status_code == 500
    detail = response.json()["detail"]
    assert detail["error"] == "CONFIGURATION_ERROR"
    assert "worst_fit" in detail["details"]
