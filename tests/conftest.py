from datetime import date
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from doctors.models import WorkSchedule
from patients.models import Patient
from user.models import User
from .helpers import PASSWORD


@pytest.fixture
def clinic_admin(db):
    return User.objects.create_superuser(email='admin@clinic.test', password=PASSWORD,
                                         first_name='Ana', last_name='Admin')


@pytest.fixture
def doctor(db):
    return User.objects.create_user(email='doctor@clinic.test', password=PASSWORD, first_name='Diego',
                                    last_name='Dentista', role=User.ROLE_DOCTOR, specialty='General')


@pytest.fixture
def receptionist(db):
    return User.objects.create_user(email='front@clinic.test', password=PASSWORD, first_name='Rita',
                                    last_name='Recepcion', role=User.ROLE_RECEPTIONIST)


@pytest.fixture
def patient(db):
    return Patient.objects.create(
        first_name='Juan',
        last_name='Perez',
        date_of_birth=date(1990, 5, 17),
        gender='male',
        identification='1710034065',
        identification_type='cedula',
        phone='0991234567',
        email='juan.perez@example.com',
    )


@pytest.fixture
def schedule(doctor):
    """Monday to Friday 08:00-18:00 with a 12:00-13:00 break"""
    return [
        WorkSchedule.objects.create(doctor=doctor, day_of_week=day, start_time='08:00', end_time='18:00',
                                    break_start='12:00', break_end='13:00')
        for day in range(1, 6)
    ]


def _client_for(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def admin_api(clinic_admin):
    return _client_for(clinic_admin)


@pytest.fixture
def doctor_api(doctor):
    return _client_for(doctor)


@pytest.fixture
def reception_api(receptionist):
    return _client_for(receptionist)


@pytest.fixture
def anon_api():
    return APIClient()


@pytest.fixture
def catalog_item(db):
    from medical.models import TreatmentCatalog
    return TreatmentCatalog.objects.create(code='REST-01', name='Resin restoration', category='Restorative',
                                           default_price=Decimal('500.00'), duration_minutes=45)


@pytest.fixture
def treatment(patient, doctor, catalog_item):
    from medical.models import Treatment
    return Treatment.objects.create(patient=patient, doctor=doctor, catalog=catalog_item, tooth_number='16',
                                    cost=Decimal('500.00'))
