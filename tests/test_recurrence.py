from datetime import date, timedelta

import pytest

from appointments.models import Appointment, RecurringAppointment
from appointments.services import generate_recurring_dates
from utils.exceptions import BadRequest
from .helpers import future_weekday

MONDAY = date(2027, 1, 4)


def test_weekly_on_monday_and_wednesday():
    dates = generate_recurring_dates('weekly', MONDAY, occurrences=4, days_of_week=[1, 3])
    assert dates == [date(2027, 1, 4), date(2027, 1, 6), date(2027, 1, 11), date(2027, 1, 13)]


def test_weekly_with_interval_skips_weeks():
    dates = generate_recurring_dates('weekly', MONDAY, occurrences=3, days_of_week=[1], interval=2)
    assert dates == [date(2027, 1, 4), date(2027, 1, 18), date(2027, 2, 1)]


def test_biweekly_uses_even_weeks_from_start():
    dates = generate_recurring_dates('biweekly', MONDAY, occurrences=3, days_of_week=[1])
    assert dates == [MONDAY, MONDAY + timedelta(days=14), MONDAY + timedelta(days=28)]


def test_daily_with_interval():
    dates = generate_recurring_dates('daily', MONDAY, occurrences=3, interval=2)
    assert dates == [MONDAY, MONDAY + timedelta(days=2), MONDAY + timedelta(days=4)]


def test_end_date_is_inclusive():
    dates = generate_recurring_dates('daily', MONDAY, end_date=MONDAY + timedelta(days=3))
    assert len(dates) == 4
    assert dates[-1] == MONDAY + timedelta(days=3)


def test_monthly_keeps_day_of_month():
    dates = generate_recurring_dates('monthly', date(2027, 1, 15), occurrences=3)
    assert dates == [date(2027, 1, 15), date(2027, 2, 15), date(2027, 3, 15)]


def test_unbounded_pattern_is_capped_at_52():
    dates = generate_recurring_dates('daily', MONDAY, end_date=MONDAY + timedelta(days=300))
    assert len(dates) == 52


def test_one_year_horizon():
    dates = generate_recurring_dates('monthly', date(2027, 1, 15), end_date=date(2030, 1, 1))
    assert dates[-1] == date(2028, 1, 15)
    assert len(dates) == 13


def test_unknown_frequency():
    with pytest.raises(BadRequest):
        generate_recurring_dates('yearly', MONDAY, occurrences=2)


@pytest.mark.django_db
class TestRecurringBooking:
    url = '/api/v1/appointments/recurring/'

    def _payload(self, patient, doctor, start, **extra):
        payload = {
            'patient_id': patient.pk,
            'doctor_id': doctor.pk,
            'start_time': '09:00',
            'duration': 30,
            'reason': 'Orthodontic adjustment',
            'type': 'orthodontics',
            'frequency': 'weekly',
            'days_of_week': [1],
            'start_date': start.isoformat(),
            'occurrences': 3,
        }
        payload.update(extra)
        return payload

    def test_books_every_date(self, reception_api, patient, doctor, schedule):
        start = future_weekday(1)
        response = reception_api.post(self.url, self._payload(patient, doctor, start), format='json')
        assert response.status_code == 201
        body = response.json()['data']
        assert body['appointment_count'] == 3
        assert [a['date'] for a in body['appointments']] == [
            (start + timedelta(days=7 * i)).isoformat() for i in range(3)
        ]

    def test_all_or_nothing(self, reception_api, patient, doctor, schedule):
        start = future_weekday(1)
        blocked_day = start + timedelta(days=7)
        Appointment.objects.create(patient=patient, doctor=doctor, date=blocked_day, start_time='09:00',
                                   end_time='09:30', duration=30, reason='Existing visit')

        response = reception_api.post(self.url, self._payload(patient, doctor, start), format='json')

        assert response.status_code == 409
        body = response.json()
        assert body['success'] is False
        failing = body['errors']['unavailable_dates']
        assert [f['date'] for f in failing] == [blocked_day.isoformat()]
        assert RecurringAppointment.objects.count() == 0
        assert Appointment.objects.count() == 1

    def test_weekly_requires_days(self, reception_api, patient, doctor, schedule):
        payload = self._payload(patient, doctor, future_weekday(1), days_of_week=[])
        response = reception_api.post(self.url, payload, format='json')
        assert response.status_code == 422
        assert 'days_of_week' in response.json()['errors']

    def test_end_date_or_occurrences_required(self, reception_api, patient, doctor, schedule):
        payload = self._payload(patient, doctor, future_weekday(1))
        del payload['occurrences']
        response = reception_api.post(self.url, payload, format='json')
        assert response.status_code == 422

    def test_occurrences_capped_at_52(self, reception_api, patient, doctor, schedule):
        payload = self._payload(patient, doctor, future_weekday(1), occurrences=53)
        assert reception_api.post(self.url, payload, format='json').status_code == 422

    def test_slot_past_midnight_is_unavailable(self, reception_api, patient, doctor, schedule):
        payload = self._payload(patient, doctor, future_weekday(1), start_time='23:45', duration=30)
        response = reception_api.post(self.url, payload, format='json')

        assert response.status_code == 409
        failing = response.json()['errors']['unavailable_dates']
        assert len(failing) == 3
        assert {f['reason'] for f in failing} == {'Doctor works from 08:00 to 18:00'}
        assert RecurringAppointment.objects.count() == 0
