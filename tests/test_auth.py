import pytest

from user.models import User
from .helpers import PASSWORD, data_of

pytestmark = pytest.mark.django_db

AUTH = '/api/v1/auth/'


def _login(client, email, password=PASSWORD):
    return client.post(f'{AUTH}login/', {'email': email, 'password': password}, format='json')


def test_login_returns_token_pair(anon_api, doctor):
    response = _login(anon_api, 'Doctor@Clinic.test')
    assert response.status_code == 200
    body = data_of(response)
    assert body['token'] and body['refresh_token']
    assert body['user']['role'] == 'doctor'

    anon_api.credentials(HTTP_AUTHORIZATION=f"Bearer {body['token']}")
    me = anon_api.get(f'{AUTH}me/')
    assert data_of(me)['email'] == 'doctor@clinic.test'


def test_wrong_password(anon_api, doctor):
    response = _login(anon_api, doctor.email, 'not-the-password')
    assert response.status_code == 401
    assert response.json()['message'] == 'Invalid email or password'


def test_inactive_account(anon_api, doctor):
    doctor.is_active = False
    doctor.save()
    assert _login(anon_api, doctor.email).status_code == 403


def test_refresh_rotates_tokens(anon_api, doctor):
    refresh = data_of(_login(anon_api, doctor.email))['refresh_token']
    response = anon_api.post(f'{AUTH}refresh/', {'refresh': refresh}, format='json')
    assert response.status_code == 200
    assert data_of(response)['token']


def test_unauthenticated_request(anon_api):
    response = anon_api.get(f'{AUTH}me/')
    assert response.status_code == 401
    assert response.json()['success'] is False


def test_update_profile(doctor_api):
    response = doctor_api.patch(f'{AUTH}me/', {'phone': '0991112222'}, format='json')
    assert data_of(response)['phone'] == '0991112222'


def test_change_password(doctor_api, doctor):
    response = doctor_api.post(f'{AUTH}change-password/', {
        'current_password': PASSWORD, 'new_password': 'Brand-New-Pass!77',
    }, format='json')
    assert response.status_code == 200
    doctor.refresh_from_db()
    assert doctor.check_password('Brand-New-Pass!77')


def test_change_password_needs_current(doctor_api):
    response = doctor_api.post(f'{AUTH}change-password/', {
        'current_password': 'guess', 'new_password': 'Brand-New-Pass!77',
    }, format='json')
    assert response.status_code == 401


def test_register_is_admin_only(admin_api, reception_api):
    payload = {'email': 'new.doctor@clinic.test', 'password': PASSWORD, 'first_name': 'Nora',
               'last_name': 'Nuevo', 'role': 'doctor', 'specialty': 'Orthodontics'}
    assert reception_api.post(f'{AUTH}register/', payload, format='json').status_code == 403

    response = admin_api.post(f'{AUTH}register/', payload, format='json')
    assert response.status_code == 201
    assert 'password' not in data_of(response)
    assert User.objects.get(email='new.doctor@clinic.test').check_password(PASSWORD)

    again = admin_api.post(f'{AUTH}register/', dict(payload, email='NEW.doctor@clinic.test'), format='json')
    assert again.status_code == 409


def test_user_activation(admin_api, clinic_admin, receptionist):
    url = f'{AUTH}users/{receptionist.pk}/'
    assert data_of(admin_api.post(f'{url}deactivate/'))['is_active'] is False
    assert admin_api.post(f'{url}deactivate/').status_code == 400
    assert data_of(admin_api.post(f'{url}activate/'))['is_active'] is True
    assert admin_api.post(f'{AUTH}users/{clinic_admin.pk}/deactivate/').status_code == 400


def test_user_list_filters(admin_api, doctor, receptionist):
    body = data_of(admin_api.get(f'{AUTH}users/', {'role': 'doctor'}))
    assert [u['id'] for u in body['results']] == [doctor.pk]


def test_health_is_public(anon_api):
    response = anon_api.get('/api/v1/health')
    assert response.status_code == 200
    assert response.json()['status'] == 'ok'
