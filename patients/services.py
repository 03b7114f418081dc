"""
Patient business rules
"""
import logging
from decimal import Decimal

from django.db.models import Count, Q, Sum
from django.utils import timezone

from utils.exceptions import BadRequest, Conflict, NotFound
from .models import Patient

logger = logging.getLogger(__name__)
business_logger = logging.getLogger('business')

BLOCKING_APPOINTMENT_STATUSES = ('scheduled', 'confirmed')


def get_patient(patient_id, include_deleted=False):
    """Fetch a patient or raise 404 (soft-deleted rows count as missing)"""
    qs = Patient.objects.all() if include_deleted else Patient.objects.alive()
    patient = qs.filter(pk=patient_id).first()
    if patient is None:
        raise NotFound('Patient not found')
    return patient


def get_by_identification(identification):
    patient = Patient.objects.alive().filter(identification=identification).first()
    if patient is None:
        raise NotFound('Patient not found')
    return patient


def _check_unique(data, exclude_id=None):
    others = Patient.objects.all()
    if exclude_id is not None:
        others = others.exclude(pk=exclude_id)
    identification = data.get('identification')
    if identification and others.filter(identification=identification).exists():
        raise Conflict('A patient with this identification already exists')
    email = data.get('email')
    if email and others.filter(email__iexact=email).exists():
        raise Conflict('A patient with this email already exists')


def _check_insurance(has_insurance, provider):
    if has_insurance and not provider:
        raise BadRequest('Insurance provider is required when the patient has insurance')


def create_patient(data):
    _check_unique(data)
    _check_insurance(data.get('has_insurance', False), data.get('insurance_provider'))
    patient = Patient.objects.create(**data)
    business_logger.info('patient_created', extra={'patient_id': patient.pk})
    return patient


def update_patient(patient_id, data):
    patient = get_patient(patient_id)
    _check_unique(data, exclude_id=patient.pk)
    has_insurance = data.get('has_insurance', patient.has_insurance)
    provider = data.get('insurance_provider', patient.insurance_provider)
    _check_insurance(has_insurance, provider)
    for field, value in data.items():
        setattr(patient, field, value)
    patient.save()
    return patient


def has_pending_appointments(patient):
    return patient.appointments.filter(
        status__in=BLOCKING_APPOINTMENT_STATUSES,
        date__gte=timezone.localdate(),
    ).exists()


def delete_patient(patient_id):
    """Soft delete; refused while upcoming appointments are still open"""
    patient = get_patient(patient_id)
    if has_pending_appointments(patient):
        raise BadRequest('Cannot delete a patient with scheduled or confirmed appointments')
    patient.soft_delete()
    business_logger.info('patient_deleted', extra={'patient_id': patient.pk})
    return patient


def restore_patient(patient_id):
    patient = get_patient(patient_id, include_deleted=True)
    if not patient.is_deleted:
        raise BadRequest('Patient is not deleted')
    patient.restore()
    return patient


def set_active(patient_id, active):
    patient = get_patient(patient_id)
    if patient.is_active == active:
        raise BadRequest(f"Patient is already {'active' if active else 'inactive'}")
    patient.is_active = active
    patient.save(update_fields=['is_active', 'updated_at'])
    return patient


def filter_patients(params):
    """List filters: search, gender, has_insurance, is_active, ordering"""
    qs = Patient.objects.alive()
    search = params.get('search')
    if search:
        qs = qs.filter(
            Q(first_name__icontains=search) | Q(last_name__icontains=search)
            | Q(identification__icontains=search) | Q(email__icontains=search)
        )
    gender = params.get('gender')
    if gender:
        qs = qs.filter(gender=gender)
    for flag in ('has_insurance', 'is_active'):
        value = params.get(flag)
        if value in ('true', 'false'):
            qs = qs.filter(**{flag: value == 'true'})
    ordering = params.get('ordering')
    allowed = {'first_name', 'last_name', 'created_at', 'date_of_birth'}
    if ordering and ordering.lstrip('-') in allowed:
        qs = qs.order_by(ordering)
    return qs


def search_patients(term, limit=20):
    term = (term or '').strip()
    if len(term) < 2:
        raise BadRequest('Search term must be at least 2 characters')
    return Patient.objects.alive().filter(
        Q(first_name__icontains=term) | Q(last_name__icontains=term)
        | Q(identification__icontains=term) | Q(email__icontains=term) | Q(phone__icontains=term)
    )[:limit]


def validate_for_appointment(patient_id):
    """Patient must exist and be active before anything can be booked"""
    patient = get_patient(patient_id)
    if not patient.is_active:
        raise BadRequest('Patient is inactive')
    return patient


def patient_statistics(patient_id):
    patient = get_patient(patient_id)
    by_status = {}
    for row in patient.appointments.values('status').annotate(total=Count('id')).order_by():
        by_status[row['status']] = row['total']
    totals = patient.treatments.aggregate(cost=Sum('cost'), paid=Sum('paid'), balance=Sum('balance'))
    last_visit = patient.appointments.filter(status='completed').order_by('-date').values_list('date', flat=True).first()
    return {
        'patient_id': patient.pk,
        'appointments': {
            'total': sum(by_status.values()),
            'by_status': by_status,
        },
        'treatments': {
            'count': patient.treatments.count(),
            'total_cost': totals['cost'] or Decimal('0.00'),
            'total_paid': totals['paid'] or Decimal('0.00'),
            'balance': totals['balance'] or Decimal('0.00'),
        },
        'last_visit': last_visit,
    }
