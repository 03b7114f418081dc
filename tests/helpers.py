from datetime import timedelta

from django.utils import timezone

PASSWORD = 'S3cure-Pass!2026'


def future_weekday(js_dow, weeks_ahead=1):
    """First date at least `weeks_ahead` weeks out falling on js_dow (0=Sunday)"""
    day = timezone.localdate() + timedelta(days=7 * weeks_ahead)
    while (day.weekday() + 1) % 7 != js_dow:
        day += timedelta(days=1)
    return day


def data_of(response):
    return response.json()['data']
