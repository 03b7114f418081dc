import pytest

from appointments import services
from appointments.models import Appointment
from doctors.models import BlockedTime
from .helpers import future_weekday

pytestmark = pytest.mark.django_db


@pytest.fixture
def monday(schedule):
    return future_weekday(1)


def _book(patient, doctor, day, start, end, status=Appointment.STATUS_SCHEDULED):
    return Appointment.objects.create(patient=patient, doctor=doctor, date=day, start_time=start, end_time=end,
                                      duration=30, reason='Control visit', status=status)


def test_free_slot_is_available(doctor, monday):
    result = services.validate_availability(doctor.pk, monday, '09:00', 30)
    assert result.available
    assert result.to_dict() == {'available': True}


def test_day_off(doctor, schedule):
    sunday = future_weekday(0)
    result = services.validate_availability(doctor.pk, sunday, '09:00', 30)
    assert not result.available
    assert result.reason == 'Doctor does not work on this day'


@pytest.mark.parametrize('start, duration', [('07:30', 30), ('17:45', 30), ('07:59', 10)])
def test_outside_working_hours(doctor, monday, start, duration):
    result = services.validate_availability(doctor.pk, monday, start, duration)
    assert not result.available
    assert result.reason == 'Doctor works from 08:00 to 18:00'


def test_ending_exactly_at_close_is_fine(doctor, monday):
    assert services.validate_availability(doctor.pk, monday, '17:30', 30).available


def test_break_overlap(doctor, monday):
    result = services.validate_availability(doctor.pk, monday, '12:15', 30)
    assert not result.available
    assert result.reason == 'Break time from 12:00 to 13:00'


def test_slot_touching_break_is_fine(doctor, monday):
    assert services.validate_availability(doctor.pk, monday, '11:30', 30).available
    assert services.validate_availability(doctor.pk, monday, '13:00', 30).available


def test_blocked_time(doctor, monday):
    BlockedTime.objects.create(doctor=doctor, date=monday, start_time='15:00', end_time='16:00',
                               reason='Dental congress')
    result = services.validate_availability(doctor.pk, monday, '15:30', 30)
    assert not result.available
    assert result.reason == 'Time blocked: Dental congress'


def test_conflicting_appointment_is_reported(doctor, patient, monday):
    existing = _book(patient, doctor, monday, '10:00', '10:30')
    result = services.validate_availability(doctor.pk, monday, '10:15', 30)
    assert not result.available
    assert result.reason == 'Time slot conflicts with existing appointments'
    assert result.conflicts == [{'id': existing.pk, 'start_time': '10:00', 'end_time': '10:30',
                                 'patient': 'Juan Perez'}]


def test_new_booking_swallowing_existing_is_a_conflict(doctor, patient, monday):
    _book(patient, doctor, monday, '10:10', '10:20')
    assert not services.validate_availability(doctor.pk, monday, '10:00', 30).available


def test_back_to_back_is_fine(doctor, patient, monday):
    _book(patient, doctor, monday, '10:00', '10:30')
    assert services.validate_availability(doctor.pk, monday, '10:30', 30).available
    assert services.validate_availability(doctor.pk, monday, '09:30', 30).available


@pytest.mark.parametrize('status', [Appointment.STATUS_CANCELLED, Appointment.STATUS_NO_SHOW])
def test_cancelled_and_no_show_release_the_slot(doctor, patient, monday, status):
    _book(patient, doctor, monday, '10:00', '10:30', status=status)
    assert services.validate_availability(doctor.pk, monday, '10:00', 30).available


def test_excluding_self_when_rescheduling(doctor, patient, monday):
    existing = _book(patient, doctor, monday, '10:00', '10:30')
    result = services.validate_availability(doctor.pk, monday, '10:15', 30, exclude_appointment_id=existing.pk)
    assert result.available


def test_inactive_schedule_counts_as_day_off(doctor, schedule):
    schedule[0].is_active = False
    schedule[0].save()
    result = services.validate_availability(doctor.pk, future_weekday(1), '09:00', 30)
    assert result.reason == 'Doctor does not work on this day'
