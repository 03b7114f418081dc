"""
Seed demo data for a fresh clinic.
Usage: python manage.py seed_clinic
       python manage.py seed_clinic --clear  # wipe demo data first
"""
import random
from datetime import date, timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from doctors.models import WorkSchedule
from medical.models import Cie10Code, TreatmentCatalog
from patients.models import Patient
from patients.validators import cedula_check_digit
from user.models import User

DEMO_PASSWORD = 'Demo-Doctor!2024'

DOCTORS = [
    ('maria.vega@clinic.local', 'María', 'Vega', 'General dentistry'),
    ('andres.paredes@clinic.local', 'Andrés', 'Paredes', 'Orthodontics'),
    ('lucia.mora@clinic.local', 'Lucía', 'Mora', 'Endodontics'),
]

CIE10_CODES = [
    ('K00.0', 'Anodontia', 'Disorders of tooth development'),
    ('K01.1', 'Impacted teeth', 'Embedded and impacted teeth'),
    ('K02.1', 'Caries of dentine', 'Dental caries'),
    ('K02.2', 'Caries of cementum', 'Dental caries'),
    ('K03.0', 'Excessive attrition of teeth', 'Other diseases of hard tissues of teeth'),
    ('K04.0', 'Pulpitis', 'Diseases of pulp and periapical tissues'),
    ('K04.7', 'Periapical abscess without sinus', 'Diseases of pulp and periapical tissues'),
    ('K05.1', 'Chronic gingivitis', 'Gingivitis and periodontal diseases'),
    ('K05.3', 'Chronic periodontitis', 'Gingivitis and periodontal diseases'),
    ('K07.3', 'Anomalies of tooth position', 'Dentofacial anomalies'),
    ('K08.1', 'Loss of teeth due to accident, extraction or local periodontal disease', 'Other disorders of teeth'),
    ('K12.0', 'Recurrent oral aphthae', 'Stomatitis and related lesions'),
]

TREATMENTS = [
    ('CONS-01', 'Dental consultation', 'Diagnosis', '25.00', 30),
    ('PROF-01', 'Dental cleaning', 'Prevention', '40.00', 45),
    ('REST-01', 'Composite filling', 'Restoration', '55.00', 45),
    ('ENDO-01', 'Root canal (single root)', 'Endodontics', '180.00', 90),
    ('CIRU-01', 'Simple extraction', 'Surgery', '60.00', 30),
    ('ORTO-01', 'Orthodontic adjustment', 'Orthodontics', '45.00', 30),
    ('PROT-01', 'Porcelain crown', 'Prosthodontics', '350.00', 60),
]

FIRST_NAMES = ['Carlos', 'Ana', 'José', 'Gabriela', 'Luis', 'Daniela', 'Miguel', 'Valeria', 'Jorge', 'Paola']
LAST_NAMES = ['Andrade', 'Castillo', 'Guerrero', 'Jaramillo', 'Morales', 'Ortiz', 'Salazar', 'Zambrano']


def make_cedula(province, serial):
    first_nine = f'{province:02d}{serial % 6}{serial:06d}'[:9]
    return first_nine + str(cedula_check_digit(first_nine))


class Command(BaseCommand):
    help = 'Seed demo doctors, schedules, patients and clinical catalogs'

    def add_arguments(self, parser):
        parser.add_argument('--clear', action='store_true', help='Delete demo data before seeding')
        parser.add_argument('--patients', type=int, default=20, help='Number of demo patients')

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write(self.style.WARNING('Clearing demo data...'))
            Patient.objects.filter(email__endswith='@example.com').delete()
            WorkSchedule.objects.filter(doctor__email__in=[d[0] for d in DOCTORS]).delete()
            User.objects.filter(email__in=[d[0] for d in DOCTORS]).delete()

        doctors = self.create_doctors()
        self.stdout.write(self.style.SUCCESS(f'Doctors ready: {len(doctors)}'))

        schedules = self.create_schedules(doctors)
        self.stdout.write(self.style.SUCCESS(f'Work schedules created: {schedules}'))

        codes = self.create_cie10()
        self.stdout.write(self.style.SUCCESS(f'CIE-10 codes created: {codes}'))

        treatments = self.create_treatment_catalog()
        self.stdout.write(self.style.SUCCESS(f'Catalog treatments created: {treatments}'))

        patients = self.create_patients(options['patients'])
        self.stdout.write(self.style.SUCCESS(f'Patients created: {patients}'))

    def create_doctors(self):
        doctors = []
        for email, first_name, last_name, specialty in DOCTORS:
            doctor = User.objects.filter(email=email).first()
            if doctor is None:
                doctor = User.objects.create_user(
                    email=email,
                    password=DEMO_PASSWORD,
                    first_name=first_name,
                    last_name=last_name,
                    role=User.ROLE_DOCTOR,
                    specialty=specialty,
                )
            doctors.append(doctor)
        return doctors

    def create_schedules(self, doctors):
        """Monday to Friday 08:00-18:00 with lunch, Saturday mornings"""
        created = 0
        for doctor in doctors:
            for day in range(1, 7):
                saturday = day == 6
                _, was_created = WorkSchedule.objects.get_or_create(
                    doctor=doctor,
                    day_of_week=day,
                    defaults={
                        'start_time': '08:00',
                        'end_time': '12:00' if saturday else '18:00',
                        'break_start': None if saturday else '12:00',
                        'break_end': None if saturday else '13:00',
                    },
                )
                created += was_created
        return created

    def create_cie10(self):
        created = 0
        for code, description, category in CIE10_CODES:
            _, was_created = Cie10Code.objects.get_or_create(
                code=code, defaults={'description': description, 'category': category}
            )
            created += was_created
        return created

    def create_treatment_catalog(self):
        created = 0
        for code, name, category, price, minutes in TREATMENTS:
            _, was_created = TreatmentCatalog.objects.get_or_create(
                code=code,
                defaults={'name': name, 'category': category, 'default_price': Decimal(price),
                          'duration_minutes': minutes},
            )
            created += was_created
        return created

    def create_patients(self, count):
        created = 0
        today = date.today()
        for index in range(count):
            identification = make_cedula(random.randint(1, 24), 100000 + index)
            if Patient.objects.filter(identification=identification).exists():
                continue
            first_name = random.choice(FIRST_NAMES)
            last_name = random.choice(LAST_NAMES)
            insured = random.random() < 0.3
            Patient.objects.create(
                first_name=first_name,
                last_name=last_name,
                date_of_birth=today - timedelta(days=random.randint(6, 80) * 365),
                gender=random.choice(['male', 'female']),
                identification=identification,
                identification_type='cedula',
                phone=f'09{random.randint(10000000, 99999999)}',
                email=f'{first_name.lower()}.{index}@example.com'.encode('ascii', 'ignore').decode(),
                city='Quito',
                province='Pichincha',
                has_insurance=insured,
                insurance_provider='Seguros Equinoccial' if insured else None,
            )
            created += 1
        return created
