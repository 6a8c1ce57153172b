from datetime import date
from types import SimpleNamespace

import pytest

from groundbook.core.exceptions import ValidationError
from groundbook.services.availability import compute_availability, parse_hour

DAY = date(2030, 1, 15)


def make_ground(open_time="06:00", close_time="10:00", price=500.0):
    return SimpleNamespace(open_time=open_time, close_time=close_time, price_per_hour=price)


def booked(start_time):
    return SimpleNamespace(start_time=start_time)


def test_one_slot_per_hour_in_ascending_order():
    slots = compute_availability(make_ground(), DAY, [])

    assert [(s.start_time, s.end_time) for s in slots] == [
        ("06:00", "07:00"),
        ("07:00", "08:00"),
        ("08:00", "09:00"),
        ("09:00", "10:00"),
    ]
    assert all(s.available for s in slots)
    assert all(s.price == 500.0 for s in slots)


@pytest.mark.parametrize("open_time,close_time,expected", [
    ("00:00", "23:00", 23),
    ("09:30", "12:45", 3),
    ("17:00", "18:00", 1),
])
def test_slot_count_is_close_minus_open(open_time, close_time, expected):
    assert len(compute_availability(make_ground(open_time, close_time), DAY, [])) == expected


@pytest.mark.parametrize("open_time,close_time", [("10:00", "10:00"), ("22:00", "06:00")])
def test_empty_grid_when_open_not_before_close(open_time, close_time):
    assert compute_availability(make_ground(open_time, close_time), DAY, []) == []


def test_booked_slots_are_unavailable():
    slots = compute_availability(make_ground(), DAY, [booked("07:00"), booked("09:00")])

    availability = {s.start_time: s.available for s in slots}
    assert availability == {"06:00": True, "07:00": False, "08:00": True, "09:00": False}


def test_bookings_outside_the_grid_are_ignored():
    slots = compute_availability(make_ground(), DAY, [booked("15:00")])
    assert all(s.available for s in slots)


def test_single_digit_hours_are_padded():
    slots = compute_availability(make_ground("8:00", "10:00"), DAY, [])
    assert slots[0].start_time == "08:00"


@pytest.mark.parametrize("value", ["", "6", "25:00", "06:75", "six:00", None])
def test_parse_hour_rejects_malformed_times(value):
    with pytest.raises(ValidationError):
        parse_hour(value)


def test_parse_hour():
    assert parse_hour("06:00") == 6
    assert parse_hour("23:59") == 23
