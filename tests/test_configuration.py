"""Mini README: Tests for environment driven settings."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from skyavoid.configuration import SkyAvoidSettings, get_settings


def test_defaults_match_tuned_planner_constants(monkeypatch):
    monkeypatch.delenv("SKYAVOID_GOAL_BIAS", raising=False)
    settings = SkyAvoidSettings(_env_file=None)
    assert settings.goal_bias == 0.3
    assert settings.front_scale == 3.0
    assert settings.front_angle_deg == 45.0
    assert settings.rear_angle_divisor == 2.0
    assert settings.branch_length_m is None
    assert settings.obstacle_file is None
    assert settings.coverage_file is None


def test_environment_overrides(monkeypatch, tmp_path):
    """Prefixed variables should override defaults and be normalised."""

    monkeypatch.setenv("SKYAVOID_GOAL_BIAS", "0.2")
    monkeypatch.setenv("SKYAVOID_LOG_LEVEL", " debug ")
    monkeypatch.setenv("SKYAVOID_DEFAULT_ITERATIONS", "250")
    monkeypatch.setenv("SKYAVOID_OBSTACLE_FILE", str(tmp_path / "obstacles.geojson"))
    monkeypatch.setenv("SKYAVOID_COVERAGE_FILE", str(tmp_path / "coverage.geojson"))

    settings = SkyAvoidSettings(_env_file=None)
    assert settings.goal_bias == pytest.approx(0.2)
    assert settings.log_level == "DEBUG"
    assert settings.default_iterations == 250
    assert settings.obstacle_file == (tmp_path / "obstacles.geojson").resolve()
    assert isinstance(settings.obstacle_file, Path)
    assert settings.coverage_file == (tmp_path / "coverage.geojson").resolve()


def test_empty_obstacle_file_means_none(monkeypatch):
    monkeypatch.setenv("SKYAVOID_OBSTACLE_FILE", "")
    assert SkyAvoidSettings(_env_file=None).obstacle_file is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"goal_bias": 1.5},
        {"front_angle_deg": 90.0},
        {"rear_angle_divisor": 0.5},
        {"default_iterations": -1},
        {"branch_length_m": 0.0},
    ],
)
def test_out_of_range_values_are_rejected(overrides):
    with pytest.raises(ValidationError):
        SkyAvoidSettings(_env_file=None, **overrides)


def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
