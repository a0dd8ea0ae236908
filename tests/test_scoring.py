import pytest

from app.domain.common.scoring import average_position, clamp_dial, points_for_distance


@pytest.mark.parametrize(
    "distance,points",
    [
        (0, 4),
        (4, 4),
        (4.0001, 3),
        (10, 3),
        (10.5, 2),
        (18, 2),
        (18.01, 0),
        (80, 0),
    ],
)
def test_points_for_distance_buckets(distance, points):
    assert points_for_distance(distance) == points


def test_average_position_mean():
    assert average_position([70, 50]) == 60
    assert average_position([10.0, 20.0, 60.0]) == 30


def test_average_position_empty_is_center():
    assert average_position([]) == 50


def test_clamp_dial():
    assert clamp_dial(-5) == 0
    assert clamp_dial(105) == 100
    assert clamp_dial(33.3) == 33.3
