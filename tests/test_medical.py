from decimal import Decimal

import pytest

from medical.models import Cie10Code, Treatment
from .helpers import data_of

pytestmark = pytest.mark.django_db

BASE = '/api/v1/medical/'


@pytest.fixture
def caries_code(db):
    return Cie10Code.objects.create(code='K02.1', description='Caries of dentine', category='Dental caries')


def test_medical_history_is_unique(doctor_api, patient):
    url = f'{BASE}patients/{patient.pk}/history/'
    assert doctor_api.get(url).status_code == 404

    response = doctor_api.post(url, {'allergies': ['Penicillin'], 'bruxism': True}, format='json')
    assert response.status_code == 201
    assert data_of(response)['allergies'] == ['Penicillin']

    again = doctor_api.post(url, {'allergies': []}, format='json')
    assert again.status_code == 409

    patched = doctor_api.patch(url, {'uses_floss': True}, format='json')
    assert data_of(patched)['uses_floss'] is True
    assert data_of(patched)['allergies'] == ['Penicillin']


def test_gestation_weeks_need_pregnancy(doctor_api, patient):
    response = doctor_api.post(f'{BASE}patients/{patient.pk}/history/', {'gestation_weeks': 12}, format='json')
    assert response.status_code == 422


def test_diagnosis_with_catalog_code(doctor_api, patient, doctor, caries_code):
    response = doctor_api.post(f'{BASE}patients/{patient.pk}/diagnoses/', {
        'cie10_code': 'k02.1', 'tooth_number': '36', 'severity': 'moderate',
    }, format='json')
    assert response.status_code == 201
    body = data_of(response)
    assert body['cie10_code'] == 'K02.1'
    assert body['cie10_description'] == 'Caries of dentine'
    assert body['doctor_id'] == doctor.pk

    by_code = data_of(doctor_api.get(f'{BASE}diagnoses/cie10/K02.1/'))
    assert [d['id'] for d in by_code] == [body['id']]


def test_diagnosis_code_outside_dental_chapter(doctor_api, patient):
    response = doctor_api.post(f'{BASE}patients/{patient.pk}/diagnoses/', {'cie10_code': 'J45'}, format='json')
    assert response.status_code == 422


def test_diagnosis_code_must_be_in_catalog(doctor_api, patient):
    response = doctor_api.post(f'{BASE}patients/{patient.pk}/diagnoses/', {'cie10_code': 'K05.0'}, format='json')
    assert response.status_code == 400
    assert response.json()['message'] == 'CIE-10 code K05.0 not found in catalog'


def test_treatment_balance(doctor_api, patient, catalog_item):
    response = doctor_api.post(f'{BASE}patients/{patient.pk}/treatments/', {
        'catalog_id': catalog_item.pk, 'cost': '120.00', 'paid': '20.00', 'tooth_number': '21',
    }, format='json')
    assert response.status_code == 201
    body = data_of(response)
    assert body['balance'] == '100.00'
    assert body['status'] == 'planned'

    patched = doctor_api.patch(f"{BASE}treatments/{body['id']}/", {'status': 'completed'}, format='json')
    assert data_of(patched)['completed_date'] is not None


def test_paid_cannot_exceed_cost(doctor_api, patient, catalog_item):
    response = doctor_api.post(f'{BASE}patients/{patient.pk}/treatments/', {
        'catalog_id': catalog_item.pk, 'cost': '50.00', 'paid': '80.00',
    }, format='json')
    assert response.status_code == 422


def test_treatment_linked_to_other_patients_diagnosis(doctor_api, patient, doctor, caries_code, catalog_item):
    from patients.models import Patient
    from medical.models import Diagnosis

    other = Patient.objects.create(first_name='Ana', last_name='Lopez', date_of_birth='2000-01-01',
                                   gender='female', identification='1712345675', phone='0998887777')
    diagnosis = Diagnosis.objects.create(patient=other, doctor=doctor, cie10=caries_code, date='2026-01-10')
    response = doctor_api.post(f'{BASE}patients/{patient.pk}/treatments/', {
        'catalog_id': catalog_item.pk, 'cost': '50.00', 'diagnosis_id': diagnosis.pk,
    }, format='json')
    assert response.status_code == 400
    assert response.json()['message'] == 'Diagnosis does not belong to this patient'


def test_model_keeps_balance_in_sync(treatment):
    treatment.paid = Decimal('125.00')
    treatment.save(update_fields=['paid'])
    treatment.refresh_from_db()
    assert treatment.balance == Decimal('375.00')
    assert Treatment.objects.filter(balance=Decimal('375.00')).count() == 1


def test_treatment_plan_approval(doctor_api, patient):
    response = doctor_api.post(f'{BASE}patients/{patient.pk}/treatment-plans/', {
        'title': 'Full restoration', 'total_cost': '900.00',
    }, format='json')
    plan = data_of(response)
    assert plan['approved_at'] is None

    approved = doctor_api.patch(f"{BASE}treatment-plans/{plan['id']}/", {'status': 'approved'}, format='json')
    assert data_of(approved)['approved_at'] is not None


def test_complete_history(reception_api, patient, treatment):
    body = data_of(reception_api.get(f'{BASE}patients/{patient.pk}/complete/'))
    assert body['medical_history'] is None
    assert len(body['treatments']) == 1


def test_reception_cannot_write_clinical_data(reception_api, patient):
    response = reception_api.post(f'{BASE}patients/{patient.pk}/history/', {}, format='json')
    assert response.status_code == 403
