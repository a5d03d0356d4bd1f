"""Mini README: Tests for the FastAPI planning service.

Uses the FastAPI test client with form-encoded requests, mirroring how the
ground station submits planning jobs, and checks the status code mapping of
every search outcome.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from skyavoid.collision import ObstacleMap
from skyavoid.configuration import SkyAvoidSettings
from skyavoid.interface import create_application
from skyavoid.interface.web_app import load_default_oracle

REQUEST = {
    "start_lat": "0.0",
    "start_lon": "0.0",
    "heading": "90",
    "altitude": "100",
    "target_lat": "0.0",
    "target_lon": "0.01",
}


@pytest.fixture
def settings() -> SkyAvoidSettings:
    return SkyAvoidSettings(_env_file=None, random_seed=21, environment="test")


@pytest.fixture
def client(settings) -> TestClient:
    return TestClient(create_application(ObstacleMap(), settings=settings))


def test_health_reports_configuration(client):
    response = client.get("/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["environment"] == "test"
    assert payload["goal_bias"] == 0.3


def test_clear_route_returns_no_commands(client):
    response = client.post("/plan-path", data=REQUEST)
    assert response.status_code == 200
    payload = response.json()
    assert payload["state"] == "succeeded"
    assert payload["commands"] == []
    assert payload["iterations"] == 1


def test_obstacles_in_request_produce_avoidance_commands(client, straddling_geojson):
    response = client.post(
        "/plan-path",
        data={**REQUEST, "obstacles_geojson": straddling_geojson, "cruise_speed": "4.0"},
    )
    assert response.status_code == 200
    commands = response.json()["commands"]
    assert commands
    assert all(command["altitude"] == 100.0 for command in commands)
    assert all(command["cruise_speed"] == 4.0 for command in commands)


def test_blocked_target_maps_to_conflict(client, straddling_geojson):
    response = client.post(
        "/plan-path",
        data={**REQUEST, "target_lon": "0.005", "obstacles_geojson": straddling_geojson},
    )
    assert response.status_code == 409
    assert response.json()["detail"]["state"] == "blocked"
    assert response.json()["detail"]["retryable"] is False


def test_exhausted_budget_is_retryable(client, straddling_geojson):
    response = client.post(
        "/plan-path",
        data={**REQUEST, "iterations": "0", "obstacles_geojson": straddling_geojson},
    )
    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["state"] == "exhausted"
    assert detail["retryable"] is True


def test_space_outside_coverage_is_unprocessable(settings):
    covered = ObstacleMap(coverage=(-0.001, -0.001, 0.001, 0.001))
    client = TestClient(create_application(covered, settings=settings))
    response = client.post("/plan-path", data=REQUEST)
    assert response.status_code == 422
    assert response.json()["detail"]["state"] == "space_unavailable"


def test_bad_requests_are_rejected(client):
    assert client.post("/plan-path", data={**REQUEST, "iterations": "-5"}).status_code == 400
    response = client.post("/plan-path", data={**REQUEST, "obstacles_geojson": "{not json"})
    assert response.status_code == 400


@pytest.mark.parametrize(
    "obstacles_geojson",
    [
        '{"type": "FeatureCollection", "features": ["x"]}',
        '{"type": "Feature", "properties": {"elevation": 10},'
        ' "geometry": {"type": "Polygon", "coordinates": [[[1]]]}}',
    ],
)
def test_structurally_malformed_obstacles_are_bad_requests(client, obstacles_geojson):
    response = client.post("/plan-path", data={**REQUEST, "obstacles_geojson": obstacles_geojson})
    assert response.status_code == 400
    assert "detail" in response.json()


def test_coverage_in_request_limits_search_space(client, coverage_geojson):
    tight = coverage_geojson(-0.001, -0.001, 0.001, 0.001)
    response = client.post("/plan-path", data={**REQUEST, "coverage_geojson": tight})
    assert response.status_code == 422
    assert response.json()["detail"]["state"] == "space_unavailable"
    assert response.json()["detail"]["retryable"] is False

    wide = coverage_geojson(-1.0, -1.0, 1.0, 1.0)
    response = client.post("/plan-path", data={**REQUEST, "coverage_geojson": wide})
    assert response.status_code == 200
    assert response.json()["state"] == "succeeded"


def test_request_coverage_keeps_configured_obstacles(settings, obstacle_map, coverage_geojson):
    client = TestClient(create_application(obstacle_map, settings=settings))
    response = client.post(
        "/plan-path",
        data={
            **REQUEST,
            "target_lon": "0.005",
            "coverage_geojson": coverage_geojson(-1.0, -1.0, 1.0, 1.0),
        },
    )
    assert response.status_code == 409


def test_malformed_coverage_is_bad_request(client):
    response = client.post(
        "/plan-path",
        data={**REQUEST, "coverage_geojson": '{"type": "Polygon", "coordinates": [[[1]]]}'},
    )
    assert response.status_code == 400


def test_configured_files_feed_default_oracle(tmp_path, straddling_geojson, coverage_geojson):
    obstacle_file = tmp_path / "obstacles.geojson"
    obstacle_file.write_text(straddling_geojson, encoding="utf-8")
    coverage_file = tmp_path / "coverage.geojson"
    coverage_file.write_text(coverage_geojson(-0.001, -0.001, 0.001, 0.001), encoding="utf-8")
    settings = SkyAvoidSettings(
        _env_file=None,
        random_seed=21,
        obstacle_file=obstacle_file,
        coverage_file=coverage_file,
    )

    oracle = load_default_oracle(settings)
    assert oracle.coverage == pytest.approx((-0.001, -0.001, 0.001, 0.001))
    assert [obstacle.name for obstacle in oracle.obstacles] == ["tower"]

    client = TestClient(create_application(settings=settings))
    response = client.post("/plan-path", data=REQUEST)
    assert response.status_code == 422
    assert response.json()["detail"]["state"] == "space_unavailable"
