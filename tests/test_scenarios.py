import pytest

from cpa.models import Settings
from sim.scenarios import (
    ANGLE_PRESETS,
    SPEED_DIFF_PRESETS,
    TIME_TO_CROSSING_PRESETS,
    parse_range,
    settings_from_presets,
)


def test_default_settings_are_the_random_presets():
    assert settings_from_presets() == Settings()


def test_named_presets():
    s = settings_from_presets("high", "sharp", "<5")
    assert (s.speed_diff_min, s.speed_diff_max) == (60, 150)
    assert (s.angle_min, s.angle_max) == (20, 55)
    assert (s.time_to_crossing_min, s.time_to_crossing_max) == (3, 5)


def test_unknown_preset_falls_back_to_random():
    s = settings_from_presets("ludicrous", "crossing", "5-8")
    assert (s.speed_diff_min, s.speed_diff_max) == SPEED_DIFF_PRESETS["random"]
    assert (s.angle_min, s.angle_max) == ANGLE_PRESETS["crossing"]
    assert (s.time_to_crossing_min, s.time_to_crossing_max) == TIME_TO_CROSSING_PRESETS["5-8"]


def test_presets_stay_inside_bounds():
    for table in (SPEED_DIFF_PRESETS, ANGLE_PRESETS, TIME_TO_CROSSING_PRESETS):
        for lo, hi in table.values():
            assert lo <= hi


def test_normalized_swaps_and_clamps():
    s = Settings(speed_diff_min=200, speed_diff_max=-5,
                 angle_min=170, angle_max=10,
                 time_to_crossing_min=12, time_to_crossing_max=4).normalized()
    assert (s.speed_diff_min, s.speed_diff_max) == (0, 150)
    assert (s.angle_min, s.angle_max) == (20, 170)
    assert (s.time_to_crossing_min, s.time_to_crossing_max) == (4, 10)


@pytest.mark.parametrize("text, expected", [
    ("20-70", (20.0, 70.0)),
    ("55,140", (55.0, 140.0)),
    ("5:8", (5.0, 8.0)),
    ("90", (90.0, 90.0)),
])
def test_parse_range(text, expected):
    assert parse_range(text) == expected


@pytest.mark.parametrize("text, expected", [
    ("-10-20", (-10.0, 20.0)),
    ("20--10", (20.0, -10.0)),
    (" 2.5 - 7.5 ", (2.5, 7.5)),
])
def test_parse_range_with_signs_and_spaces(text, expected):
    assert parse_range(text) == expected


@pytest.mark.parametrize("text", ["", "fast", "10-", "1-2-3"])
def test_parse_range_rejects_garbage(text):
    with pytest.raises(ValueError, match="not a range"):
        parse_range(text)
