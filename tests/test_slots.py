import pytest

from appointments import services
from appointments.models import Appointment
from doctors.models import BlockedTime, WorkSchedule
from .helpers import future_weekday

pytestmark = pytest.mark.django_db


def test_thirty_minute_slots_cover_the_day(doctor, schedule):
    slots = services.get_available_slots(doctor.pk, future_weekday(1), 30)
    assert len(slots) == 20
    assert slots[0]['start_time'] == '08:00'
    assert slots[-1]['end_time'] == '18:00'
    by_start = {s['start_time']: s for s in slots}
    assert by_start['12:00']['status'] == 'break'
    assert by_start['12:30']['status'] == 'break'
    assert by_start['11:30']['status'] == 'available'
    assert by_start['13:00']['available'] is True


def test_slots_never_run_past_closing(doctor, schedule):
    slots = services.get_available_slots(doctor.pk, future_weekday(1), 45)
    # 600 working minutes / 45 = 13 full slots
    assert len(slots) == 13
    assert slots[-1]['end_time'] == '17:45'


def test_booked_and_blocked_slots(doctor, patient, schedule):
    monday = future_weekday(1)
    booked = Appointment.objects.create(patient=patient, doctor=doctor, date=monday, start_time='09:00',
                                        end_time='09:30', duration=30, reason='Cleaning')
    BlockedTime.objects.create(doctor=doctor, date=monday, start_time='16:00', end_time='17:00', reason='Meeting')
    by_start = {s['start_time']: s for s in services.get_available_slots(doctor.pk, monday, 30)}
    assert by_start['09:00']['status'] == 'booked'
    assert by_start['09:00']['appointment_id'] == booked.pk
    assert by_start['09:00']['available'] is False
    assert by_start['16:00']['status'] == 'blocked'
    assert by_start['16:30']['status'] == 'blocked'
    assert by_start['17:00']['status'] == 'available'


def test_day_off_returns_no_slots(doctor, schedule):
    assert services.get_available_slots(doctor.pk, future_weekday(6), 30) == []


def test_schedule_without_break(doctor):
    WorkSchedule.objects.create(doctor=doctor, day_of_week=6, start_time='08:00', end_time='10:00')
    slots = services.get_available_slots(doctor.pk, future_weekday(6), 30)
    assert [s['status'] for s in slots] == ['available'] * 4


def test_available_slots_endpoint(reception_api, doctor, schedule):
    monday = future_weekday(1)
    response = reception_api.get('/api/v1/appointments/available-slots/',
                                 {'doctor_id': doctor.pk, 'date': monday.isoformat()})
    assert response.status_code == 200
    body = response.json()['data']
    assert body['slot_duration'] == 30
    assert len(body['slots']) == 20
