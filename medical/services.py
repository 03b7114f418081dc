"""
Clinical record business rules
"""
import logging

from django.utils import timezone

from patients import services as patient_services
from utils.exceptions import BadRequest, Conflict, NotFound
from .models import MedicalHistory, Cie10Code, Diagnosis, TreatmentCatalog, Treatment, TreatmentPlan
from .serializers import (
    DiagnosisSerializer,
    MedicalHistorySerializer,
    TreatmentPlanSerializer,
    TreatmentSerializer,
)

logger = logging.getLogger(__name__)
business_logger = logging.getLogger('business')


# medical history

def get_medical_history(patient_id):
    patient_services.get_patient(patient_id)
    history = MedicalHistory.objects.filter(patient_id=patient_id).first()
    if history is None:
        raise NotFound('Medical history not found for this patient')
    return history


def create_medical_history(patient_id, data):
    patient = patient_services.get_patient(patient_id)
    if MedicalHistory.objects.filter(patient=patient).exists():
        raise Conflict('Medical history already exists for this patient. Use update instead.')
    history = MedicalHistory.objects.create(patient=patient, **data)
    logger.info('Medical history created for patient %s', patient.pk)
    return history


def update_medical_history(patient_id, data):
    history = get_medical_history(patient_id)
    for name, value in data.items():
        setattr(history, name, value)
    history.save()
    return history


# diagnoses

def _check_cie10(code):
    if not Cie10Code.objects.filter(code=code).exists():
        raise BadRequest(f'CIE-10 code {code} not found in catalog')


def get_diagnosis(diagnosis_id):
    diagnosis = Diagnosis.objects.select_related('cie10', 'doctor').filter(pk=diagnosis_id).first()
    if diagnosis is None:
        raise NotFound('Diagnosis not found')
    return diagnosis


def list_diagnoses(patient_id):
    patient_services.get_patient(patient_id)
    return Diagnosis.objects.select_related('cie10', 'doctor').filter(patient_id=patient_id)


def create_diagnosis(patient_id, data, doctor):
    patient = patient_services.get_patient(patient_id)
    _check_cie10(data['cie10_id'])
    data.setdefault('date', timezone.localdate())
    diagnosis = Diagnosis.objects.create(patient=patient, doctor=doctor, **data)
    business_logger.info('diagnosis_created', extra={
        'diagnosis_id': diagnosis.pk,
        'patient_id': patient.pk,
        'cie10_code': diagnosis.cie10_id,
    })
    return diagnosis


def diagnoses_by_cie10(code):
    return Diagnosis.objects.select_related('cie10', 'doctor', 'patient').filter(cie10_id=code.upper())


# treatments

def get_treatment(treatment_id):
    treatment = Treatment.objects.select_related('catalog', 'doctor').filter(pk=treatment_id).first()
    if treatment is None:
        raise NotFound('Treatment not found')
    return treatment


def list_treatments(patient_id):
    patient_services.get_patient(patient_id)
    return Treatment.objects.select_related('catalog', 'doctor').filter(patient_id=patient_id)


def _check_treatment_refs(patient_id, data):
    diagnosis_id = data.get('diagnosis_id')
    if diagnosis_id is not None:
        diagnosis = Diagnosis.objects.filter(pk=diagnosis_id).first()
        if diagnosis is None:
            raise NotFound('Diagnosis not found')
        if diagnosis.patient_id != int(patient_id):
            raise BadRequest('Diagnosis does not belong to this patient')
    catalog_id = data.get('catalog_id')
    if catalog_id is not None and not TreatmentCatalog.objects.filter(pk=catalog_id, is_active=True).exists():
        raise NotFound('Treatment catalog item not found')


def create_treatment(patient_id, data, doctor):
    patient = patient_services.get_patient(patient_id)
    _check_treatment_refs(patient.pk, data)
    if data.get('paid', 0) > data['cost']:
        raise BadRequest('Paid amount cannot exceed total cost')
    if data.get('status') == Treatment.STATUS_COMPLETED and not data.get('completed_date'):
        data['completed_date'] = timezone.localdate()
    treatment = Treatment.objects.create(patient=patient, doctor=doctor, **data)
    business_logger.info('treatment_created', extra={
        'treatment_id': treatment.pk,
        'patient_id': patient.pk,
        'cost': str(treatment.cost),
    })
    return treatment


def update_treatment(treatment_id, data):
    treatment = get_treatment(treatment_id)
    _check_treatment_refs(treatment.patient_id, data)
    cost = data.get('cost', treatment.cost)
    paid = data.get('paid', treatment.paid)
    if paid > cost:
        raise BadRequest('Paid amount cannot exceed total cost')
    if (data.get('status') == Treatment.STATUS_COMPLETED
            and not data.get('completed_date') and not treatment.completed_date):
        data['completed_date'] = timezone.localdate()
    for name, value in data.items():
        setattr(treatment, name, value)
    treatment.save()
    return treatment


def treatments_by_diagnosis(diagnosis_id):
    diagnosis = get_diagnosis(diagnosis_id)
    return diagnosis.treatments.select_related('catalog', 'doctor')


# treatment plans

def get_treatment_plan(plan_id):
    plan = TreatmentPlan.objects.filter(pk=plan_id).first()
    if plan is None:
        raise NotFound('Treatment plan not found')
    return plan


def list_treatment_plans(patient_id):
    patient_services.get_patient(patient_id)
    return TreatmentPlan.objects.filter(patient_id=patient_id)


def create_treatment_plan(patient_id, data, doctor):
    patient = patient_services.get_patient(patient_id)
    if data.get('status') == 'approved':
        data['approved_at'] = timezone.now()
    return TreatmentPlan.objects.create(patient=patient, doctor=doctor, **data)


def update_treatment_plan(plan_id, data):
    plan = get_treatment_plan(plan_id)
    if data.get('status') == 'approved' and plan.status != 'approved':
        plan.approved_at = timezone.now()
    for name, value in data.items():
        setattr(plan, name, value)
    plan.save()
    return plan


def complete_history(patient_id):
    """Everything clinical about one patient in a single payload"""
    patient = patient_services.get_patient(patient_id)
    history = MedicalHistory.objects.filter(patient=patient).first()
    return {
        'patient_id': patient.pk,
        'medical_history': MedicalHistorySerializer(history).data if history else None,
        'diagnoses': DiagnosisSerializer(list_diagnoses(patient.pk), many=True).data,
        'treatments': TreatmentSerializer(list_treatments(patient.pk), many=True).data,
        'treatment_plans': TreatmentPlanSerializer(list_treatment_plans(patient.pk), many=True).data,
    }
