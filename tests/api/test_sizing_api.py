# tests/api/test_sizing_api.py
import json

import pytest
from fastapi.testclient import TestClient

from api.main import app
from api.models.sizing_models import SegmentInput
from api.utils.config import Config

# Create test client
client = TestClient(app)


def test_root():
    """Status endpoints do not require authentication."""
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "online"


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_missing_api_key(stack_and_drain_payload):
    """Header is required."""
    response = client.post("/sizing/size", json=stack_and_drain_payload)
    assert response.status_code == 422


def test_invalid_api_key(stack_and_drain_payload):
    response = client.post(
        "/sizing/size",
        json=stack_and_drain_payload,
        headers={"X-API-Key": "wrong"}
    )
    assert response.status_code == 401


def test_size_segments(api_headers, stack_and_drain_payload):
    """Stack 4" -> 6" with the drain raised to 6"."""
    response = client.post("/sizing/size", json=stack_and_drain_payload, headers=api_headers)
    assert response.status_code == 200

    data = response.json()
    assert data["count_sized"] == 3
    assert data["committed"] is True
    assert data["length_units"] == "feet"
    assert data["summary"] == "Finished sizing 3 sanitary pipe(s)."

    diameters = {s["id"]: s["diameter"] for s in data["segments"]}
    assert diameters["s1"] == pytest.approx(4 / 12)
    assert diameters["s2"] == pytest.approx(0.5)
    assert diameters["s3"] == pytest.approx(0.5)

    records = {r["segment_id"]: r for r in data["records"]}
    assert records["s3"]["orientation"] == "horizontal"
    assert records["s3"]["table_diameter_in"] == 2.0
    assert records["s3"]["raised_by_upstream"] is True


def test_config_overrides(api_headers, stack_and_drain_payload):
    stack_and_drain_payload["config"] = {"length_units": "inches"}
    response = client.post("/sizing/size", json=stack_and_drain_payload, headers=api_headers)
    assert response.status_code == 200
    diameters = {s["id"]: s["diameter"] for s in response.json()["segments"]}
    assert diameters == {"s1": 4.0, "s2": 6.0, "s3": 6.0}


def test_read_only_segments(api_headers, stack_and_drain_payload):
    stack_and_drain_payload["segments"][1]["read_only"] = True
    response = client.post("/sizing/size", json=stack_and_drain_payload, headers=api_headers)
    data = response.json()
    assert data["count_sized"] == 2
    assert data["not_written"] == ["s2"]


def test_skipped_segments(api_headers):
    payload = {"segments": [
        {"id": 1, "endpoint_a": [0, 0, 0], "endpoint_b": [5, 0, 0], "load_units": 0},
    ]}
    response = client.post("/sizing/size", json=payload, headers=api_headers)
    data = response.json()
    assert data["count_sized"] == 0
    assert data["skipped"] == [1]
    assert data["segments"][0]["diameter"] is None


def test_duplicate_ids(api_headers, stack_and_drain_payload):
    stack_and_drain_payload["segments"][1]["id"] = "s1"
    response = client.post("/sizing/size", json=stack_and_drain_payload, headers=api_headers)
    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "validation_error"


def test_invalid_config(api_headers, stack_and_drain_payload):
    stack_and_drain_payload["config"] = {"length_units": "cubits"}
    response = client.post("/sizing/size", json=stack_and_drain_payload, headers=api_headers)
    assert response.status_code == 400
    assert "config" in response.json()["detail"]["detail"]


def test_validation_errors(api_headers):
    """Malformed segments are rejected by the request model."""
    bad_endpoint = {"segments": [
        {"id": "s1", "endpoint_a": [0, 0], "endpoint_b": [0, 0, 1], "load_units": 1},
    ]}
    response = client.post("/sizing/size", json=bad_endpoint, headers=api_headers)
    assert response.status_code == 422

    negative_load = {"segments": [
        {"id": "s1", "endpoint_a": [0, 0, 0], "endpoint_b": [0, 0, 1], "load_units": -1},
    ]}
    response = client.post("/sizing/size", json=negative_load, headers=api_headers)
    assert response.status_code == 422

    percent_slope = {"segments": [
        {"id": "s1", "endpoint_a": [0, 0, 0], "endpoint_b": [1, 0, 0], "load_units": 1, "slope": 2},
    ]}
    response = client.post("/sizing/size", json=percent_slope, headers=api_headers)
    assert response.status_code == 422


@pytest.mark.parametrize("neighbor_endpoints", [
    [[[0, 0, 0]]],
    [[[0, 0, 0], [1, 0, 0], [2, 0, 0]]],
    [[[0, 0], [1, 0, 0]]],
])
def test_malformed_neighbor_endpoints(api_headers, stack_and_drain_payload, neighbor_endpoints):
    """Neighbor endpoint pairs must hold two 3D points."""
    stack_and_drain_payload["segments"][2]["neighbor_endpoints"] = neighbor_endpoints
    response = client.post("/sizing/size", json=stack_and_drain_payload, headers=api_headers)
    assert response.status_code == 422


def test_get_tables(api_headers):
    response = client.get("/sizing/tables", headers=api_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["tables"]["min_slope"] == 0.0104
    assert data["tables"]["vertical"]["overflow_diameter"] == 15.0
    assert data["length_units"] == "feet"


def test_server_sizing_config(api_headers, tmp_path, monkeypatch):
    """SIZING_CONFIG_PATH supplies the server-wide defaults."""
    path = tmp_path / "sizing.json"
    path.write_text(json.dumps({"length_units": "millimeters"}))
    monkeypatch.setattr(Config, "SIZING_CONFIG_PATH", str(path))

    response = client.get("/sizing/tables", headers=api_headers)
    assert response.json()["length_units"] == "millimeters"


def test_table_override_keeps_server_tables(
    api_headers, stack_and_drain_payload, tmp_path, monkeypatch
):
    """Overriding one table setting leaves the other server table settings in place."""
    path = tmp_path / "sizing.json"
    path.write_text(json.dumps({"tables": {"min_slope": 0.05}}))
    monkeypatch.setattr(Config, "SIZING_CONFIG_PATH", str(path))
    stack_and_drain_payload["config"] = {"tables": {"low_slope_diameter": 3.0}}

    response = client.post("/sizing/size", json=stack_and_drain_payload, headers=api_headers)
    assert response.status_code == 200
    records = {r["segment_id"]: r for r in response.json()["records"]}
    # s3 slopes 0.02, under the server minimum of 0.05
    assert records["s3"]["table_diameter_in"] == 3.0


def test_segment_input_to_segment():
    segment = SegmentInput(
        id=7,
        endpoint_a=[0, 0, 1],
        endpoint_b=[0, 0, 0],
        load_units=3,
        neighbor_endpoints=[[[0, 0, 0], [4, 0, 0]]],
    ).to_segment()
    assert segment.id == 7
    assert segment.endpoint_a == (0.0, 0.0, 1.0)
    assert segment.neighbor_endpoints == [((0.0, 0.0, 0.0), (4.0, 0.0, 0.0))]
