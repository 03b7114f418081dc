import pytest

from odontograms.models import Odontogram
from .helpers import data_of

pytestmark = pytest.mark.django_db

URL = '/api/v1/odontograms/'


@pytest.fixture
def chart(doctor_api, patient):
    response = doctor_api.post(URL, {
        'patient_id': patient.pk,
        'teeth': [{'tooth_number': 16, 'status': 'caries', 'surfaces': {'O': {'status': 'caries'}}}],
    }, format='json')
    assert response.status_code == 201
    return data_of(response)


def _tooth(chart, number):
    return next(t for t in chart['teeth'] if t['tooth_number'] == number)


def test_new_chart_has_every_permanent_tooth(chart, doctor):
    assert chart['version'] == 1
    assert chart['is_current'] is True
    assert chart['doctor_id'] == doctor.pk
    assert len(chart['teeth']) == 32
    assert _tooth(chart, 16)['status'] == 'caries'
    assert _tooth(chart, 11)['status'] == 'healthy'


def test_temporary_dentition(doctor_api, patient):
    response = doctor_api.post(URL, {'patient_id': patient.pk, 'type': 'temporary'}, format='json')
    teeth = data_of(response)['teeth']
    assert len(teeth) == 20
    assert teeth[0]['tooth_number'] == 51


def test_invalid_tooth_number(doctor_api, patient):
    response = doctor_api.post(URL, {
        'patient_id': patient.pk,
        'teeth': [{'tooth_number': 19, 'status': 'caries'}],
    }, format='json')
    assert response.status_code == 400
    assert response.json()['message'] == 'Tooth 19 is not a valid FDI number for permanent dentition'


def test_invalid_surface(doctor_api, patient):
    response = doctor_api.post(URL, {
        'patient_id': patient.pk,
        'teeth': [{'tooth_number': 16, 'surfaces': {'X': {'status': 'caries'}}}],
    }, format='json')
    assert response.status_code == 422


def test_update_writes_next_version(doctor_api, chart):
    response = doctor_api.put(f"{URL}{chart['id']}/", {'general_notes': 'Annual review'}, format='json')
    assert response.status_code == 200
    second = data_of(response)
    assert second['version'] == 2
    assert second['id'] != chart['id']
    assert _tooth(second, 16)['surfaces'] == {'O': {'status': 'caries'}}
    assert Odontogram.objects.get(pk=chart['id']).is_current is False


def test_new_version_and_history(doctor_api, patient, chart):
    response = doctor_api.post(f'{URL}patient/{patient.pk}/new-version/', {
        'previous_odontogram_id': chart['id'],
        'teeth': [{'tooth_number': 16, 'status': 'filled', 'surfaces': {'O': {'status': 'filled'}}}],
    }, format='json')
    assert response.status_code == 201
    second = data_of(response)
    assert _tooth(second, 16)['status'] == 'filled'

    current = data_of(doctor_api.get(f'{URL}patient/{patient.pk}/current/'))
    assert current['id'] == second['id']
    history = data_of(doctor_api.get(f'{URL}patient/{patient.pk}/history/'))
    assert [h['version'] for h in history] == [2, 1]


def test_repeated_tooth_is_rejected(doctor_api, patient):
    response = doctor_api.post(URL, {
        'patient_id': patient.pk,
        'teeth': [{'tooth_number': 11, 'status': 'caries'}, {'tooth_number': 11, 'status': 'filled'}],
    }, format='json')
    assert response.status_code == 400
    assert response.json()['message'] == 'Tooth 11 appears more than once'
    assert not Odontogram.objects.exists()


def test_new_version_with_repeated_tooth_is_rejected(doctor_api, patient, chart):
    response = doctor_api.post(f'{URL}patient/{patient.pk}/new-version/', {
        'previous_odontogram_id': chart['id'],
        'teeth': [{'tooth_number': 16, 'status': 'filled'}, {'tooth_number': 16, 'status': 'crown'}],
    }, format='json')
    assert response.status_code == 400
    assert response.json()['message'] == 'Tooth 16 appears more than once'
    assert Odontogram.objects.filter(patient=patient).count() == 1


def test_compare_versions(doctor_api, patient, chart):
    second = data_of(doctor_api.post(f'{URL}patient/{patient.pk}/new-version/', {
        'previous_odontogram_id': chart['id'],
        'teeth': [{'tooth_number': 16, 'status': 'filled', 'surfaces': {'O': {'status': 'filled'}}}],
    }, format='json'))

    response = doctor_api.get(f'{URL}compare/', {'version1': chart['id'], 'version2': second['id']})
    diff = data_of(response)
    assert diff['summary'] == {
        'total_changes': 2,
        'teeth_modified': 1,
        'status_changes': 1,
        'surface_changes': 1,
    }
    assert {'tooth_number': 16, 'field': 'status', 'old_value': 'caries', 'new_value': 'filled'} in diff['changes']
    assert diff['version1']['version'] == 1


def test_compare_requires_both_ids(doctor_api):
    assert doctor_api.get(f'{URL}compare/', {'version1': 1}).status_code == 400


def test_single_tooth_update(doctor_api, chart):
    response = doctor_api.patch(f"{URL}{chart['id']}/teeth/16/", {'surfaces': {'M': {'status': 'caries'}}},
                                format='json')
    tooth = data_of(response)
    assert tooth['surfaces'] == {'O': {'status': 'caries'}, 'M': {'status': 'caries'}}


def test_statistics(doctor_api, chart):
    stats = data_of(doctor_api.get(f"{URL}{chart['id']}/statistics/"))
    assert stats == {'total': 32, 'healthy': 31, 'caries': 1, 'filled': 0, 'missing': 0, 'other': 0}


def test_reception_reads_but_cannot_write(reception_api, patient, chart):
    assert reception_api.get(f"{URL}{chart['id']}/").status_code == 200
    response = reception_api.post(URL, {'patient_id': patient.pk}, format='json')
    assert response.status_code == 403
