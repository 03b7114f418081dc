import pytest

from doctors.models import BlockedTime, WorkSchedule
from .helpers import data_of, future_weekday

pytestmark = pytest.mark.django_db

URL = '/api/v1/doctors/'

WEEK = [
    {'day_of_week': 1, 'start_time': '09:00', 'end_time': '17:00', 'break_start': '13:00', 'break_end': '14:00'},
    {'day_of_week': 3, 'start_time': '09:00', 'end_time': '13:00'},
]


def test_doctor_list_only_has_doctors(reception_api, doctor, receptionist):
    doctors = data_of(reception_api.get(URL))
    assert [d['id'] for d in doctors] == [doctor.pk]


def test_doctor_detail(reception_api, doctor, schedule):
    body = data_of(reception_api.get(f'{URL}{doctor.pk}/'))
    assert len(body['schedule']) == 5
    assert body['schedule'][0]['day_name'] == 'Monday'


def test_replace_schedule(doctor_api, doctor, schedule):
    response = doctor_api.put(f'{URL}{doctor.pk}/schedule/', {'schedules': WEEK}, format='json')
    assert response.status_code == 200
    assert sorted(WorkSchedule.objects.filter(doctor=doctor).values_list('day_of_week', flat=True)) == [1, 3]


def test_schedule_only_by_owner_or_admin(reception_api, admin_api, doctor):
    assert reception_api.put(f'{URL}{doctor.pk}/schedule/', {'schedules': WEEK}, format='json').status_code == 403
    assert admin_api.put(f'{URL}{doctor.pk}/schedule/', {'schedules': WEEK}, format='json').status_code == 200


def _error_fields(errors):
    """Field names in the nested errors for a list of schedules"""
    if isinstance(errors, dict):
        if not all(str(key).isdigit() for key in errors):
            return set(errors)
        errors = list(errors.values())
    fields = set()
    for item in errors:
        if isinstance(item, dict):
            fields.update(item)
    return fields


@pytest.mark.parametrize('day, field', [
    ({'day_of_week': 1, 'start_time': '17:00', 'end_time': '09:00'}, 'end_time'),
    ({'day_of_week': 1, 'start_time': '09:00', 'end_time': '17:00', 'break_start': '12:00'}, 'break_start'),
    ({'day_of_week': 1, 'start_time': '09:00', 'end_time': '17:00',
      'break_start': '08:00', 'break_end': '10:00'}, 'break_start'),
    ({'day_of_week': 1, 'start_time': '9am', 'end_time': '17:00'}, 'start_time'),
])
def test_schedule_validation(admin_api, doctor, day, field):
    response = admin_api.put(f'{URL}{doctor.pk}/schedule/', {'schedules': [day]}, format='json')
    assert response.status_code == 422
    assert field in _error_fields(response.json()['errors']['schedules'])


def test_duplicate_days_rejected(admin_api, doctor):
    response = admin_api.put(f'{URL}{doctor.pk}/schedule/', {'schedules': [WEEK[0], WEEK[0]]}, format='json')
    assert response.status_code == 422


def test_block_time(doctor_api, doctor, schedule):
    day = future_weekday(2)
    response = doctor_api.post(f'{URL}blocked-times/', {
        'doctor': doctor.pk, 'date': day.isoformat(), 'start_time': '15:00', 'end_time': '16:00',
        'reason': 'Dental congress',
    }, format='json')
    assert response.status_code == 201
    block = BlockedTime.objects.get()
    assert block.created_by == doctor

    listed = data_of(doctor_api.get(f'{URL}blocked-times/', {'doctor_id': doctor.pk}))
    assert [b['id'] for b in listed] == [block.pk]

    assert doctor_api.delete(f'{URL}blocked-times/{block.pk}/').status_code == 200
    assert not BlockedTime.objects.exists()


def test_doctor_cannot_block_a_colleague(doctor_api, doctor):
    from user.models import User

    colleague = User.objects.create_user(email='colleague@clinic.test', password='x' * 12, first_name='Clara',
                                         last_name='Colega', role=User.ROLE_DOCTOR)
    response = doctor_api.post(f'{URL}blocked-times/', {
        'doctor': colleague.pk, 'date': future_weekday(2).isoformat(), 'start_time': '15:00',
        'end_time': '16:00', 'reason': 'Holiday',
    }, format='json')
    assert response.status_code == 403


def test_get_doctor_requires_the_doctor_role(doctor, receptionist):
    from doctors import services
    from utils.exceptions import NotFound

    doctor.is_active = False
    doctor.save()
    assert services.get_doctor(doctor.pk) == doctor
    with pytest.raises(NotFound):
        services.get_doctor(receptionist.pk)
