from datetime import timedelta

import pytest

from pettrail.services.geo import haversine_m
from pettrail.services.ingestion import GpsSample
from pettrail.services.metrics import average_speed_kmh, compute_walk_metrics, round_half_up

from conftest import T0


def test_round_half_up_two_decimals():
    assert round_half_up(5.655) == 5.66
    assert round_half_up(5.654) == 5.65
    assert round_half_up(0.125) == 0.13
    assert round_half_up(2.0) == 2.0


def test_average_speed_zero_duration():
    assert average_speed_kmh(1234.5, 0) == 0.0


def test_average_speed_kmh():
    # 1 km in 10 min
    assert average_speed_kmh(1000.0, 600) == 6.0


def test_no_points_gives_zero_distance_and_speed():
    m = compute_walk_metrics([], T0, T0 + timedelta(seconds=125, milliseconds=700))
    assert m.distance_m == 0
    assert m.avg_speed_kmh == 0.0
    assert m.duration_s == 125


def test_single_point_gives_zero_distance():
    m = compute_walk_metrics([GpsSample(-23.55, -46.63, T0)], T0, T0 + timedelta(minutes=5))
    assert m.distance_m == 0
    assert m.duration_s == 300
    assert m.avg_speed_kmh == 0.0


def test_duration_uses_server_times_not_point_times():
    points = [
        GpsSample(-23.5505, -46.6333, T0 + timedelta(seconds=30)),
        GpsSample(-23.5510, -46.6339, T0 + timedelta(seconds=40)),
    ]
    m = compute_walk_metrics(points, T0, T0 + timedelta(minutes=10))
    expected_d = haversine_m(-23.5505, -46.6333, -23.5510, -46.6339)
    assert m.duration_s == 600
    assert m.distance_m == pytest.approx(expected_d)
    assert m.avg_speed_kmh == round_half_up((expected_d / 1000) / (600 / 3600))


def test_points_are_not_refiltered():
    # A jump that ingestion would never accept still counts if it was stored
    points = [
        GpsSample(0.0, 0.0, T0),
        GpsSample(0.0, 1.0, T0),
    ]
    m = compute_walk_metrics(points, T0, T0 + timedelta(hours=1))
    assert m.distance_m == pytest.approx(111194.93, abs=0.01)
    assert m.avg_speed_kmh == 111.19


def test_naive_start_is_treated_as_utc():
    started = T0.replace(tzinfo=None)
    m = compute_walk_metrics([], started, T0 + timedelta(seconds=59))
    assert m.duration_s == 59
