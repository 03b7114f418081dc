"""
"HH:MM" time arithmetic used by the scheduling engine.

Times travel through the system as zero-padded 24h strings; every comparison
is done on minutes since midnight.
"""
import re

TIME_RE = re.compile(r'^([01]\d|2[0-3]):([0-5]\d)$')


def is_valid_time(value):
    return isinstance(value, str) and bool(TIME_RE.match(value))


def time_to_minutes(value):
    """'08:30' -> 510"""
    match = TIME_RE.match(value or '')
    if not match:
        raise ValueError(f'Invalid time {value!r}, expected HH:MM')
    return int(match.group(1)) * 60 + int(match.group(2))


def minutes_to_time(minutes):
    """510 -> '08:30'"""
    if minutes < 0 or minutes >= 24 * 60:
        raise ValueError(f'{minutes} minutes is outside a single day')
    return f'{minutes // 60:02d}:{minutes % 60:02d}'


def add_minutes(value, minutes):
    return minutes_to_time(time_to_minutes(value) + minutes)


def is_time_in_range(value, start, end):
    """start <= value < end"""
    t = time_to_minutes(value)
    return time_to_minutes(start) <= t < time_to_minutes(end)


def intervals_overlap(start, end, other_start, other_end):
    """
    Half-open [start, end) against [other_start, other_end).

    Covers the three cases: the new start falls inside the other interval,
    the new end falls inside it, or the new interval swallows it whole.
    Touching edges (10:00-10:30 then 10:30-11:00) do not overlap.
    """
    s, e = time_to_minutes(start), time_to_minutes(end)
    os_, oe = time_to_minutes(other_start), time_to_minutes(other_end)
    if os_ <= s < oe:
        return True
    if os_ < e <= oe:
        return True
    return s <= os_ and oe <= e


def js_weekday(day):
    """Day of week with 0=Sunday .. 6=Saturday"""
    return (day.weekday() + 1) % 7
