import pytest

from condenserlab.utils import format_stopwatch, needle_angle


@pytest.mark.parametrize("seconds, expected", [
    (0.0, "00:00.0"),
    (5.0, "00:05.0"),
    (65.25, "01:05.2"),
    (4.35, "00:04.3"),
    (600.9, "10:00.9"),
    (-1.0, "00:00.0"),
])
def test_format_stopwatch(seconds, expected):
    assert format_stopwatch(seconds) == expected


@pytest.mark.parametrize("value, expected", [
    (0.0, -60.0),
    (50.0, 0.0),
    (100.0, 60.0),
    (150.0, 60.0),
    (-5.0, -60.0),
])
def test_needle_angle(value, expected):
    assert needle_angle(value, 100.0) == pytest.approx(expected)
