"""Mini README: Tests for the high-level avoidance planner.

Validates command export, leg connection around an obstacle and the error
types surfaced for blocked targets and exhausted budgets.
"""

from __future__ import annotations

import random

import pytest

from skyavoid.configuration import SkyAvoidSettings
from skyavoid.geo import GeoPoint, distance_m
from skyavoid.route_planning import (
    AvoidancePlanner,
    FlightPath,
    FlightWaypoint,
    SearchExhaustedError,
    TargetBlockedError,
)

START = GeoPoint(0.0, 0.0)
TARGET = GeoPoint(0.0, 0.01)
ALTITUDE = 100.0


@pytest.fixture
def settings() -> SkyAvoidSettings:
    return SkyAvoidSettings(goal_bias=0.3, default_iterations=1000, random_seed=17)


def test_flight_path_exports_commands():
    path = FlightPath(
        waypoints=[FlightWaypoint(0.0, 0.0, 50.0), FlightWaypoint(0.0, 0.001, 55.0)],
        description="demo",
    )
    commands = path.as_commands(cruise_speed=5.0)
    assert [command["action"] for command in commands] == ["navigate_to", "navigate_to"]
    assert commands[1]["altitude"] == 55.0
    assert commands[0]["cruise_speed"] == 5.0
    assert path.total_distance_m() == pytest.approx(distance_m(GeoPoint(0.0, 0.0), GeoPoint(0.0, 0.001)))


def test_planner_reads_settings(open_sky):
    settings = SkyAvoidSettings(goal_bias=0.5, default_iterations=10, front_scale=4.0, branch_length_m=50.0)
    planner = AvoidancePlanner(open_sky, settings=settings)
    assert planner.goal_bias == 0.5
    assert planner.default_iterations == 10
    assert planner.geometry.front_scale == 4.0
    assert planner.branch_length_m == 50.0


def test_plan_in_open_sky_returns_empty_path(open_sky, settings):
    flight_path = AvoidancePlanner(open_sky, settings=settings).plan(START, 90.0, ALTITUDE, TARGET)
    assert flight_path.waypoints == []


def test_plan_around_obstacle_keeps_altitude(obstacle_map, settings):
    flight_path = AvoidancePlanner(obstacle_map, settings=settings).plan(START, 90.0, ALTITUDE, TARGET)
    assert flight_path.waypoints
    assert all(waypoint.altitude == ALTITUDE for waypoint in flight_path.waypoints)


def test_connect_returns_direct_leg_when_clear(open_sky, settings):
    flight_path = AvoidancePlanner(open_sky, settings=settings).connect(START, TARGET, ALTITUDE)
    assert [waypoint.position for waypoint in flight_path.waypoints] == [START, TARGET]
    assert flight_path.description == "Direct leg"


def test_connect_splices_avoidance_waypoints(obstacle_map, settings):
    """A blocked leg gains waypoints but keeps both of its ends."""

    flight_path = AvoidancePlanner(obstacle_map, settings=settings).connect(START, TARGET, ALTITUDE)
    positions = [waypoint.position for waypoint in flight_path.waypoints]

    assert positions[0] == START
    assert positions[-1] == TARGET
    assert len(positions) >= 3
    for first, second in zip(positions, positions[1:]):
        assert not obstacle_map.segment_blocked(first, second, ALTITUDE)


def test_plan_raises_for_blocked_target(obstacle_map, settings):
    planner = AvoidancePlanner(obstacle_map, settings=settings)
    with pytest.raises(TargetBlockedError) as excinfo:
        planner.plan(START, 90.0, ALTITUDE, GeoPoint(0.0, 0.005))
    assert excinfo.value.altitude == ALTITUDE
    assert not excinfo.value.retryable


def test_plan_raises_retryable_error_when_budget_runs_out(obstacle_map, settings):
    planner = AvoidancePlanner(obstacle_map, settings=settings)
    with pytest.raises(SearchExhaustedError) as excinfo:
        planner.plan(START, 90.0, ALTITUDE, TARGET, iterations=0)
    assert excinfo.value.retryable


def test_injected_generator_makes_planning_reproducible(obstacle_map, settings):
    first = AvoidancePlanner(obstacle_map, settings=settings, rng=random.Random(3))
    second = AvoidancePlanner(obstacle_map, settings=settings, rng=random.Random(3))
    assert first.plan(START, 90.0, ALTITUDE, TARGET) == second.plan(START, 90.0, ALTITUDE, TARGET)
