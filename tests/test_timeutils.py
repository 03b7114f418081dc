from datetime import date

import pytest

from appointments.timeutils import (
    add_minutes,
    intervals_overlap,
    is_time_in_range,
    is_valid_time,
    js_weekday,
    minutes_to_time,
    time_to_minutes,
)


def test_time_conversions():
    assert time_to_minutes('00:00') == 0
    assert time_to_minutes('08:30') == 510
    assert minutes_to_time(510) == '08:30'
    assert minutes_to_time(1439) == '23:59'
    assert add_minutes('11:45', 30) == '12:15'


@pytest.mark.parametrize('value', ['8:00', '24:00', '12:60', '', None, '12-00'])
def test_invalid_times(value):
    assert not is_valid_time(value)


def test_time_to_minutes_rejects_garbage():
    with pytest.raises(ValueError):
        time_to_minutes('25:00')
    with pytest.raises(ValueError):
        minutes_to_time(24 * 60)


def test_is_time_in_range_is_half_open():
    assert is_time_in_range('08:00', '08:00', '12:00')
    assert is_time_in_range('11:59', '08:00', '12:00')
    assert not is_time_in_range('12:00', '08:00', '12:00')


@pytest.mark.parametrize('new, existing, expected', [
    (('10:00', '10:30'), ('10:30', '11:00'), False),  # touching edges
    (('10:30', '11:00'), ('10:00', '10:30'), False),
    (('10:15', '10:45'), ('10:00', '10:30'), True),   # start inside
    (('09:45', '10:15'), ('10:00', '10:30'), True),   # end inside
    (('09:00', '11:00'), ('10:00', '10:30'), True),   # swallows
    (('10:00', '10:30'), ('10:00', '10:30'), True),   # identical
    (('10:05', '10:10'), ('10:00', '10:30'), True),   # inside
])
def test_intervals_overlap(new, existing, expected):
    assert intervals_overlap(*new, *existing) is expected


def test_js_weekday_starts_on_sunday():
    assert js_weekday(date(2026, 10, 18)) == 0  # Sunday
    assert js_weekday(date(2026, 10, 19)) == 1
    assert js_weekday(date(2026, 10, 24)) == 6
