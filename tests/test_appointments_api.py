from datetime import timedelta

import pytest
from django.utils import timezone

from appointments.models import Appointment
from .helpers import data_of, future_weekday

pytestmark = pytest.mark.django_db

URL = '/api/v1/appointments/'


def _payload(patient, doctor, day, start='09:00', duration=30):
    return {
        'patient_id': patient.pk,
        'doctor_id': doctor.pk,
        'date': day.isoformat(),
        'start_time': start,
        'duration': duration,
        'type': 'consultation',
        'reason': 'Tooth pain',
    }


@pytest.fixture
def monday(schedule):
    return future_weekday(1)


@pytest.fixture
def booked(reception_api, patient, doctor, monday):
    response = reception_api.post(URL, _payload(patient, doctor, monday), format='json')
    assert response.status_code == 201
    return data_of(response)


def test_create_appointment(booked, receptionist):
    assert booked['start_time'] == '09:00'
    assert booked['end_time'] == '09:30'
    assert booked['status'] == 'scheduled'
    assert Appointment.objects.get(pk=booked['id']).created_by == receptionist


def test_double_booking_is_rejected(reception_api, booked, patient, doctor, monday):
    response = reception_api.post(URL, _payload(patient, doctor, monday, start='09:15'), format='json')
    assert response.status_code == 409
    body = response.json()
    assert body['message'] == 'Time slot conflicts with existing appointments'
    assert body['errors']['conflicts'][0]['id'] == booked['id']


def test_break_is_rejected(reception_api, patient, doctor, monday):
    response = reception_api.post(URL, _payload(patient, doctor, monday, start='12:15'), format='json')
    assert response.status_code == 409
    assert response.json()['message'] == 'Break time from 12:00 to 13:00'


def test_past_date_is_rejected(reception_api, patient, doctor, schedule):
    yesterday = timezone.localdate() - timedelta(days=1)
    response = reception_api.post(URL, _payload(patient, doctor, yesterday), format='json')
    assert response.status_code == 422


def test_slot_past_midnight_is_outside_working_hours(reception_api, patient, doctor, monday):
    response = reception_api.post(URL, _payload(patient, doctor, monday, start='23:45', duration=30),
                                  format='json')
    assert response.status_code == 409
    assert response.json()['message'] == 'Doctor works from 08:00 to 18:00'


def test_inactive_patient(reception_api, patient, doctor, monday):
    patient.is_active = False
    patient.save()
    response = reception_api.post(URL, _payload(patient, doctor, monday), format='json')
    assert response.status_code == 400


def test_unknown_doctor(reception_api, patient, receptionist, monday):
    payload = _payload(patient, receptionist, monday)
    response = reception_api.post(URL, payload, format='json')
    assert response.status_code == 404
    assert response.json()['message'] == 'Doctor not found'


def test_bad_time_format(reception_api, patient, doctor, monday):
    response = reception_api.post(URL, _payload(patient, doctor, monday, start='9:00'), format='json')
    assert response.status_code == 422
    assert 'start_time' in response.json()['errors']


def test_status_workflow(reception_api, booked):
    url = f"{URL}{booked['id']}/status/"
    for status in ('confirmed', 'in_progress', 'completed'):
        response = reception_api.patch(url, {'status': status}, format='json')
        assert response.status_code == 200
        assert data_of(response)['status'] == status


def test_illegal_transition(reception_api, booked):
    response = reception_api.patch(f"{URL}{booked['id']}/status/", {'status': 'completed'}, format='json')
    assert response.status_code == 400
    assert response.json()['message'] == 'Cannot change status from scheduled to completed'


def test_no_show_from_confirmed(reception_api, booked):
    url = f"{URL}{booked['id']}/status/"
    reception_api.patch(url, {'status': 'confirmed'}, format='json')
    response = reception_api.patch(url, {'status': 'no_show'}, format='json')
    assert data_of(response)['status'] == 'no_show'
    assert reception_api.patch(url, {'status': 'confirmed'}, format='json').status_code == 400


def test_cancel_appends_reason(reception_api, booked):
    response = reception_api.post(f"{URL}{booked['id']}/cancel/", {'reason': 'Patient travelling'}, format='json')
    assert response.status_code == 200
    body = data_of(response)
    assert body['status'] == 'cancelled'
    assert 'Cancellation reason: Patient travelling' in body['notes']

    again = reception_api.post(f"{URL}{booked['id']}/cancel/", {'reason': 'Twice'}, format='json')
    assert again.status_code == 400


def test_cancel_frees_the_slot(reception_api, booked, patient, doctor, monday):
    reception_api.post(f"{URL}{booked['id']}/cancel/", {'reason': 'Rescheduled by phone'}, format='json')
    response = reception_api.post(URL, _payload(patient, doctor, monday), format='json')
    assert response.status_code == 201


def test_delete_cancels_instead_of_removing(reception_api, booked):
    response = reception_api.delete(f"{URL}{booked['id']}/")
    assert response.status_code == 200
    assert Appointment.objects.get(pk=booked['id']).status == Appointment.STATUS_CANCELLED


def test_reschedule_checks_availability(reception_api, booked, patient, doctor, monday):
    other = reception_api.post(URL, _payload(patient, doctor, monday, start='10:00'), format='json')
    response = reception_api.patch(f"{URL}{data_of(other)['id']}/", {'start_time': '09:00'}, format='json')
    assert response.status_code == 409

    moved = reception_api.patch(f"{URL}{booked['id']}/", {'start_time': '09:15'}, format='json')
    assert moved.status_code == 200
    assert data_of(moved)['end_time'] == '09:45'


def test_terminal_appointment_cannot_be_edited(reception_api, booked):
    reception_api.post(f"{URL}{booked['id']}/cancel/", {'reason': 'No longer needed'}, format='json')
    response = reception_api.patch(f"{URL}{booked['id']}/", {'reason': 'Changed my mind'}, format='json')
    assert response.status_code == 400


def test_check_availability_endpoint(reception_api, booked, doctor, monday):
    response = reception_api.post(f'{URL}check-availability/', {
        'doctor_id': doctor.pk, 'date': monday.isoformat(), 'start_time': '09:00', 'duration': 30,
    }, format='json')
    assert response.status_code == 200
    body = data_of(response)
    assert body['available'] is False
    assert len(body['conflicts']) == 1


def test_list_and_calendar(reception_api, booked, doctor, monday):
    listing = data_of(reception_api.get(URL, {'doctor_id': doctor.pk}))
    assert listing['count'] == 1
    assert listing['results'][0]['id'] == booked['id']

    calendar = data_of(reception_api.get(f'{URL}calendar/', {
        'start_date': monday.isoformat(), 'end_date': (monday + timedelta(days=6)).isoformat(),
    }))
    assert list(calendar) == [monday.isoformat()]


def test_calendar_requires_range(reception_api):
    assert reception_api.get(f'{URL}calendar/').status_code == 400


def test_upcoming_bounds(reception_api, booked):
    assert reception_api.get(f'{URL}upcoming/', {'days': 0}).status_code == 400
    response = reception_api.get(f'{URL}upcoming/', {'days': 30})
    assert [a['id'] for a in data_of(response)] == [booked['id']]


def test_stats(reception_api, booked, monday):
    response = reception_api.get(f'{URL}stats/', {
        'start_date': monday.isoformat(), 'end_date': monday.isoformat(),
    })
    body = data_of(response)
    assert body['total'] == 1
    assert body['by_status']['scheduled'] == 1
    assert body['by_type'] == {'consultation': 1}


def test_requires_authentication(anon_api):
    assert anon_api.get(URL).status_code == 401
