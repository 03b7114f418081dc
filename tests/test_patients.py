from datetime import timedelta

import pytest
from django.utils import timezone

from appointments.models import Appointment
from patients.models import Patient
from patients.validators import cedula_check_digit, is_valid_cedula, is_valid_phone
from .helpers import data_of

pytestmark = pytest.mark.django_db

URL = '/api/v1/patients/'


def _payload(**overrides):
    payload = {
        'first_name': 'María José',
        'last_name': 'Andrade',
        'date_of_birth': '1985-02-11',
        'gender': 'female',
        'identification': '0102030400',
        'identification_type': 'cedula',
        'phone': '+593987654321',
        'email': 'Maria.Andrade@Example.com',
        'emergency_contact': {'name': 'Luis Andrade', 'relationship': 'Brother', 'phone': '0987654321'},
    }
    payload.update(overrides)
    return payload


@pytest.mark.parametrize('value, expected', [
    ('1710034065', True),
    ('0102030400', True),
    ('1712345675', True),
    ('1710034066', False),
    ('2510034065', False),
    ('1760034065', False),
    ('171003406', False),
    ('17100340A5', False),
])
def test_cedula_validation(value, expected):
    assert is_valid_cedula(value) is expected


def test_check_digit():
    assert cedula_check_digit('171003406') == 5
    assert cedula_check_digit('010203040') == 0


def test_phone_validation():
    assert is_valid_phone('0991234567')
    assert is_valid_phone('+593991234567')
    assert not is_valid_phone('991234567')
    assert not is_valid_phone('+1 555 0100')


def test_create_patient(reception_api):
    response = reception_api.post(URL, _payload(), format='json')
    assert response.status_code == 201
    body = data_of(response)
    assert body['full_name'] == 'María José Andrade'
    assert body['email'] == 'maria.andrade@example.com'
    assert body['emergency_contact']['relationship'] == 'Brother'
    assert body['is_active'] is True


def test_invalid_cedula(reception_api):
    response = reception_api.post(URL, _payload(identification='0102030401'), format='json')
    assert response.status_code == 422
    assert response.json()['errors']['identification'] == ['Invalid Ecuadorian ID number']


def test_passport_skips_cedula_check(reception_api):
    response = reception_api.post(URL, _payload(identification='AB123456', identification_type='passport'),
                                  format='json')
    assert response.status_code == 201


def test_duplicate_identification(reception_api, patient):
    response = reception_api.post(URL, _payload(identification=patient.identification), format='json')
    assert response.status_code == 409


def test_duplicate_email(reception_api, patient):
    response = reception_api.post(URL, _payload(email='JUAN.PEREZ@example.com'), format='json')
    assert response.status_code == 409
    assert response.json()['message'] == 'A patient with this email already exists'


def test_insurance_needs_provider(reception_api):
    response = reception_api.post(URL, _payload(has_insurance=True), format='json')
    assert response.status_code == 400


def test_name_must_be_letters(reception_api):
    response = reception_api.post(URL, _payload(first_name='R2D2'), format='json')
    assert response.status_code == 422


def test_identification_is_immutable(reception_api, patient):
    response = reception_api.patch(f'{URL}{patient.pk}/', {'identification': '0102030400'}, format='json')
    assert response.status_code == 422


def test_list_filters(reception_api, patient):
    Patient.objects.create(first_name='Ana', last_name='Lopez', date_of_birth='2000-01-01', gender='female',
                           identification='1712345675', phone='0998887777', is_active=False)
    body = data_of(reception_api.get(URL, {'is_active': 'true'}))
    assert body['count'] == 1
    assert body['results'][0]['id'] == patient.pk

    body = data_of(reception_api.get(URL, {'search': 'lope'}))
    assert [p['last_name'] for p in body['results']] == ['Lopez']


def test_search_requires_two_characters(reception_api, patient):
    assert reception_api.get(f'{URL}search/', {'q': 'J'}).status_code == 400
    results = data_of(reception_api.get(f'{URL}search/', {'q': 'per'}))
    assert [p['id'] for p in results] == [patient.pk]


def test_lookup_by_identification(reception_api, patient):
    body = data_of(reception_api.get(f'{URL}identification/{patient.identification}/'))
    assert body['id'] == patient.pk
    assert reception_api.get(f'{URL}identification/0102030400/').status_code == 404


def test_soft_delete_and_restore(reception_api, patient):
    assert reception_api.delete(f'{URL}{patient.pk}/').status_code == 200
    assert reception_api.get(f'{URL}{patient.pk}/').status_code == 404
    assert Patient.objects.filter(pk=patient.pk).exists()

    response = reception_api.post(f'{URL}{patient.pk}/restore/')
    assert response.status_code == 200
    assert reception_api.post(f'{URL}{patient.pk}/restore/').status_code == 400


def test_delete_blocked_by_upcoming_appointment(reception_api, patient, doctor):
    Appointment.objects.create(patient=patient, doctor=doctor, date=timezone.localdate() + timedelta(days=3),
                               start_time='10:00', end_time='10:30', duration=30, reason='Check-up')
    response = reception_api.delete(f'{URL}{patient.pk}/')
    assert response.status_code == 400
    assert response.json()['message'] == 'Cannot delete a patient with scheduled or confirmed appointments'


def test_activate_deactivate(reception_api, patient):
    response = reception_api.post(f'{URL}{patient.pk}/deactivate/')
    assert data_of(response)['is_active'] is False
    assert reception_api.post(f'{URL}{patient.pk}/deactivate/').status_code == 400
    assert data_of(reception_api.post(f'{URL}{patient.pk}/activate/'))['is_active'] is True


def test_statistics(reception_api, patient, treatment):
    body = data_of(reception_api.get(f'{URL}{patient.pk}/statistics/'))
    assert body['treatments']['count'] == 1
    assert body['appointments']['total'] == 0
    assert body['last_visit'] is None
