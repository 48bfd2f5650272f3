"""JSON API 테스트 (FastAPI TestClient)."""

import pytest
from fastapi.testclient import TestClient

from api.app import create_app


@pytest.fixture
def client():
    return TestClient(create_app())


class TestStatusEndpoint:
    def test_waiting_at_start(self, client):
        resp = client.get(
            "/api/status",
            params={"start": "09:00", "show": "1", "at": "2026-10-18T09:00:00"},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["state"] == "waiting"
        assert body["minutes_remaining"] == 30
        assert body["message"] == "Volgende afgeefmoment over 30 minuten"
        assert body["show"] is True
        assert body["params"] == {"start": "09:00", "interval": "10", "duration": "1", "show": "1"}

    def test_can_submit(self, client):
        body = client.get(
            "/api/status", params={"start": "09:00", "at": "2026-10-18T09:40:00"}
        ).json()
        assert body["state"] == "can-submit"
        assert body["minutes_remaining"] is None

    def test_not_started(self, client):
        body = client.get(
            "/api/status", params={"start": "09:00", "at": "2026-10-18T08:59:00"}
        ).json()
        assert body["state"] == "not-started"
        assert body["message"] == "Examen nog niet gestart"

    def test_custom_interval_and_duration(self, client):
        body = client.get(
            "/api/status",
            params={"start": "09:00", "interval": "5", "duration": "2", "at": "2026-10-18T09:37:00"},
        ).json()
        assert body["state"] == "waiting"
        assert body["minutes_remaining"] == 3

    def test_malformed_params_fall_back(self, client):
        body = client.get(
            "/api/status",
            params={"start": "9h", "interval": "-2", "duration": "zero", "at": "2026-10-18T09:00:00"},
        ).json()
        # start가 무시되어 현재 시각이 시작 시각 → 초기 대기 시작
        assert body["state"] == "waiting"
        assert body["params"]["interval"] == "10"
        assert body["params"]["duration"] == "1"
        assert body["params"]["show"] == "0"

    def test_invalid_at_rejected(self, client):
        resp = client.get("/api/status", params={"at": "yesterday"})
        assert resp.status_code == 422

    def test_without_at_uses_server_clock(self, client):
        resp = client.get("/api/status")
        assert resp.status_code == 200
        assert resp.json()["state"] == "waiting"


class TestCanonicalEndpoint:
    def test_normalizes_link(self, client):
        body = client.get(
            "/api/canonical",
            params={"start": "9:05", "interval": "15min", "duration": "2", "show": "true"},
        ).json()
        assert body["params"] == {"start": "09:05", "interval": "15", "duration": "2", "show": "1"}
        assert body["query"] == "start=09%3A05&interval=15&duration=2&show=1"


class TestIndex:
    def test_lists_endpoints(self, client):
        body = client.get("/").json()
        assert "/api/status" in body["endpoints"]
