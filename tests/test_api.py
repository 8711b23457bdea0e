"""HTTP tests for the routes backing the selection form."""

import asyncio
import json

from fastapi.testclient import TestClient

from app.api.deps import get_form_session
from app.main import app
from app.services.dataset import StaticDatasetProvider
from app.services.form import FormSession

VEHICLES = [
    {"make": "Honda", "model": "Civic", "year": 2020, "trim": "EX", "wheelSize": 17,
     "tireSize": "215/55R17", "boltPattern": "5x114.3", "offset": 45},
    {"make": "Honda", "model": "Civic", "year": 2022, "trim": "Sport", "wheelSize": 18,
     "tireSize": "235/40R18", "boltPattern": "5x114.3", "offset": 45},
    {"make": "Honda", "model": "Accord", "year": 2021, "trim": "LX", "wheelSize": 17,
     "tireSize": "225/50R17", "boltPattern": "5x114.3", "offset": 50},
    {"make": "Ford", "model": "Mustang", "year": 2020, "trim": "GT", "wheelSize": 18,
     "tireSize": "235/50R18", "boltPattern": "5x114.3", "offset": 45},
]


def _client(tmp_path, vehicles=VEHICLES, load=True):
    path = tmp_path / "vehicles.json"
    if vehicles is not None:
        path.write_text(json.dumps(vehicles), encoding="utf-8")
    session = FormSession(StaticDatasetProvider(path), submit_delay_ms=0)
    if load:
        asyncio.run(session.load())
    app.dependency_overrides[get_form_session] = lambda: session
    return TestClient(app), session


def teardown_function():
    app.dependency_overrides.clear()


class TestHealthAndDataset:
    def test_health_reports_dataset_status(self, tmp_path):
        client, _ = _client(tmp_path)
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["dataset"] == "ready"

    def test_dataset_status(self, tmp_path):
        client, _ = _client(tmp_path)
        body = client.get("/api/dataset").json()
        assert body["status"] == "ready"
        assert body["record_count"] == 4

    def test_unavailable_then_reload(self, tmp_path):
        client, session = _client(tmp_path, vehicles=None)
        assert session.load_outcome.status.value == "unavailable"

        resp = client.get("/api/makes")
        assert resp.status_code == 503
        assert resp.json()["detail"]["status"] == "unavailable"

        (tmp_path / "vehicles.json").write_text(json.dumps(VEHICLES), encoding="utf-8")
        resp = client.post("/api/dataset/reload")
        assert resp.json()["status"] == "ready"
        assert client.get("/api/makes").json() == {"makes": ["Ford", "Honda"]}

    def test_not_ready_before_load(self, tmp_path):
        client, _ = _client(tmp_path, load=False)
        resp = client.get("/api/makes")
        assert resp.status_code == 503
        assert resp.json()["detail"]["status"] == "loading"


class TestOptionLists:
    def test_cascade(self, tmp_path):
        client, _ = _client(tmp_path)
        assert client.get("/api/makes").json() == {"makes": ["Ford", "Honda"]}
        assert client.get("/api/models", params={"make": "Honda"}).json() == {
            "models": ["Accord", "Civic"]
        }
        assert client.get(
            "/api/years", params={"make": "Honda", "model": "Civic"}
        ).json() == {"years": [2022, 2020]}
        assert client.get(
            "/api/trims", params={"make": "Honda", "model": "Civic", "year": "2020"}
        ).json() == {"trims": ["EX"]}

    def test_missing_parent_gives_empty_list(self, tmp_path):
        client, _ = _client(tmp_path)
        assert client.get("/api/models").json() == {"models": []}


class TestSelection:
    def test_choose_make_then_model(self, tmp_path):
        client, _ = _client(tmp_path)
        state = client.post("/api/selection", json={"field": "make", "value": "Honda"}).json()
        assert state["available_models"] == ["Accord", "Civic"]

        state = client.post(
            "/api/selection", json={"state": state, "field": "model", "value": "Civic"}
        ).json()
        assert state["available_years"] == [2022, 2020]

    def test_changing_make_clears_deeper_fields(self, tmp_path):
        client, _ = _client(tmp_path)
        full = {"make": "Honda", "model": "Civic", "year": 2020, "trim": "EX"}
        state = client.post(
            "/api/selection", json={"state": full, "field": "make", "value": "Ford"}
        ).json()
        assert state["make"] == "Ford"
        assert state["model"] is None
        assert state["year"] is None
        assert state["trim"] is None
        assert state["available_years"] == []
        assert state["available_trims"] == []

    def test_invalid_choice(self, tmp_path):
        client, _ = _client(tmp_path)
        resp = client.post("/api/selection", json={"field": "model", "value": "Civic"})
        assert resp.status_code == 422
        assert "make must be chosen first" in resp.json()["detail"]


class TestCalculate:
    def test_success(self, tmp_path):
        client, _ = _client(tmp_path)
        resp = client.post(
            "/api/calculate",
            json={"make": "Honda", "model": "Civic", "year": 2020, "trim": "EX"},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "success"
        assert body["result"]["max_wheel_size"] == 19
        assert body["result"]["vehicle"]["tireSize"] == "215/55R17"
        assert body["result"]["vehicle"]["boltPattern"] == "5x114.3"

    def test_not_found(self, tmp_path):
        client, _ = _client(tmp_path)
        resp = client.post(
            "/api/calculate",
            json={"make": "Honda", "model": "Civic", "year": 2021, "trim": "EX"},
        )
        assert resp.status_code == 200
        assert resp.json()["status"] == "not_found"
        assert resp.json()["result"] is None

    def test_blank_trim_is_incomplete(self, tmp_path):
        client, _ = _client(tmp_path)
        resp = client.post(
            "/api/calculate",
            json={"make": "Honda", "model": "Civic", "year": 2020, "trim": ""},
        )
        assert resp.status_code == 200
        assert resp.json()["status"] == "incomplete"

    def test_blank_make_is_incomplete(self, tmp_path):
        client, _ = _client(tmp_path)
        resp = client.post(
            "/api/calculate",
            json={"make": "", "model": "Civic", "year": 2020, "trim": "EX"},
        )
        assert resp.json()["status"] == "incomplete"

    def test_incomplete(self, tmp_path):
        client, _ = _client(tmp_path)
        resp = client.post("/api/calculate", json={"make": "Honda"})
        assert resp.json()["status"] == "incomplete"
