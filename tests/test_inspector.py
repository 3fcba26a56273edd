import pytest

from deskmates.environment import Area, DArea, DVec
from deskmates.inspector import (
    NOT_VISIBLE,
    active_ie_to_string,
    area_to_string,
    darea_to_string,
    double_to_string,
    dvec_to_string,
    vec_to_string,
)


def parse_fields(text):
    result = {}
    for part in text.split(", "):
        key, value = part.split(": ")
        result[key] = float(value)
    return result


def test_double_to_string_pinned():
    assert double_to_string(1.5) == "1.50"


def test_double_to_string_truncates():
    assert double_to_string(0.999) == "0.99"


@pytest.mark.parametrize("value", [0.0, 0.25, 1.5, -3.75, 1024.0])
def test_double_to_string_round_trip(value):
    text = double_to_string(value)
    assert float(text) == value
    assert len(text.split(".")[1]) == 2


def test_double_to_string_infinite_has_no_dot():
    assert double_to_string(float("inf")) == "inf"


def test_vec_to_string_round_trip():
    assert parse_fields(vec_to_string(3, -4.5)) == {"x": 3.0, "y": -4.5}


def test_dvec_to_string_round_trip():
    fields = parse_fields(dvec_to_string(DVec(1.0, 2.0, 0.5, -0.25)))
    assert fields == {"x": 1.0, "y": 2.0, "dx": 0.5, "dy": -0.25}


def test_area_to_string_round_trip():
    fields = parse_fields(area_to_string(Area(top=10, right=110, bottom=60, left=20)))
    assert fields == {"x": 20.0, "y": 10.0, "width": 90.0, "height": 50.0}


def test_darea_to_string_round_trip():
    area = DArea(top=0, right=40, bottom=30, left=10, dx=2, dy=-1)
    fields = parse_fields(darea_to_string(area))
    assert fields == {
        "x": 10.0,
        "y": 0.0,
        "width": 30.0,
        "height": 30.0,
        "dx": 2.0,
        "dy": -1.0,
    }
    assert list(fields) == ["x", "y", "width", "height", "dx", "dy"]


def test_active_ie_visible():
    area = DArea(top=5, right=50, bottom=25, left=15)
    assert active_ie_to_string(area) == darea_to_string(area)


def test_active_ie_hidden():
    assert active_ie_to_string(DArea(-50, -50, -50, -50)) == NOT_VISIBLE
    assert active_ie_to_string(DArea(top=0, right=10, bottom=0, left=0)) == "not visible"