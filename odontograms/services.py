"""
Odontogram versioning.

Every change produces a new version with a full copy of the teeth; earlier
versions are never edited and only lose their is_current flag.
"""
import logging

from django.db import transaction
from django.db.models import Max
from django.utils import timezone

from patients import services as patient_services
from utils.exceptions import BadRequest, NotFound
from .fdi import SURFACES, is_valid_tooth, teeth_for
from .models import Odontogram, Tooth

logger = logging.getLogger(__name__)
business_logger = logging.getLogger('business')

COUNTED_STATUSES = ('healthy', 'caries', 'filled', 'missing')


def get_odontogram(odontogram_id):
    odontogram = Odontogram.objects.prefetch_related('teeth').filter(pk=odontogram_id).first()
    if odontogram is None:
        raise NotFound('Odontogram not found')
    return odontogram


def get_current(patient_id):
    patient_services.get_patient(patient_id)
    odontogram = (Odontogram.objects.prefetch_related('teeth')
                  .filter(patient_id=patient_id, is_current=True).first())
    if odontogram is None:
        raise NotFound('Patient has no odontogram yet')
    return odontogram


def get_history(patient_id):
    patient_services.get_patient(patient_id)
    return Odontogram.objects.filter(patient_id=patient_id).order_by('-version')


def _validate_teeth(teeth, dentition):
    seen = set()
    for tooth in teeth:
        number = tooth['tooth_number']
        if not is_valid_tooth(number, dentition):
            raise BadRequest(f'Tooth {number} is not a valid FDI number for {dentition} dentition')
        if number in seen:
            raise BadRequest(f'Tooth {number} appears more than once')
        seen.add(number)
        for surface in tooth.get('surfaces') or {}:
            if surface not in SURFACES:
                raise BadRequest(f'Invalid surface {surface} on tooth {number}')


def _next_version(patient_id):
    latest = Odontogram.objects.filter(patient_id=patient_id).aggregate(v=Max('version'))['v']
    return (latest or 0) + 1


def _write_version(patient, doctor, dentition, teeth, general_notes=None, day=None):
    """Insert version N+1, demote the previous ones, store the teeth"""
    Odontogram.objects.filter(patient=patient, is_current=True).update(is_current=False)
    odontogram = Odontogram.objects.create(
        patient=patient,
        doctor=doctor,
        version=_next_version(patient.pk),
        type=dentition,
        date=day or timezone.localdate(),
        general_notes=general_notes,
        is_current=True,
    )
    Tooth.objects.bulk_create([
        Tooth(
            odontogram=odontogram,
            tooth_number=t['tooth_number'],
            status=t.get('status') or 'healthy',
            surfaces=t.get('surfaces') or {},
            notes=t.get('notes'),
        )
        for t in teeth
    ])
    business_logger.info('odontogram_version_created', extra={
        'odontogram_id': odontogram.pk,
        'patient_id': patient.pk,
        'version': odontogram.version,
    })
    return odontogram


def _merge_teeth(base_teeth, changes):
    """Overlay the given teeth onto a copy of base_teeth (keyed by number)"""
    merged = {t['tooth_number']: dict(t) for t in base_teeth}
    for change in changes or []:
        merged.setdefault(change['tooth_number'], {'tooth_number': change['tooth_number']}).update(change)
    return [merged[n] for n in sorted(merged)]


def _copy_teeth(odontogram):
    return [
        {'tooth_number': t.tooth_number, 'status': t.status, 'surfaces': dict(t.surfaces or {}), 'notes': t.notes}
        for t in odontogram.teeth.all()
    ]


def create_odontogram(data, doctor=None):
    patient = patient_services.get_patient(data['patient_id'])
    dentition = data.get('type', Odontogram.TYPE_PERMANENT)
    _validate_teeth(data.get('teeth') or [], dentition)
    defaults = [{'tooth_number': n, 'status': 'healthy'} for n in teeth_for(dentition)]
    teeth = _merge_teeth(defaults, data.get('teeth'))

    with transaction.atomic():
        return _write_version(patient, doctor, dentition, teeth,
                              general_notes=data.get('general_notes'), day=data.get('date'))


def update_odontogram(odontogram_id, data, doctor=None):
    """An update never edits in place: it writes the next version"""
    previous = get_odontogram(odontogram_id)
    with transaction.atomic():
        return _write_version(
            previous.patient, doctor or previous.doctor, previous.type, _copy_teeth(previous),
            general_notes=data.get('general_notes', previous.general_notes),
            day=data.get('date'),
        )


def create_new_version(patient_id, data, doctor=None):
    patient = patient_services.get_patient(patient_id)
    previous = get_odontogram(data['previous_odontogram_id'])
    if previous.patient_id != patient.pk:
        raise BadRequest('Previous odontogram does not belong to this patient')

    _validate_teeth(data.get('teeth') or [], previous.type)
    teeth = _merge_teeth(_copy_teeth(previous), data.get('teeth'))
    with transaction.atomic():
        return _write_version(patient, doctor or previous.doctor, previous.type, teeth,
                              general_notes=data.get('general_notes', previous.general_notes))


def update_tooth(odontogram_id, tooth_number, data):
    """Correct a single tooth of a version in place"""
    odontogram = get_odontogram(odontogram_id)
    tooth = odontogram.teeth.filter(tooth_number=tooth_number).first()
    if tooth is None:
        raise NotFound(f'Tooth {tooth_number} not found in this odontogram')

    if 'status' in data:
        tooth.status = data['status']
    if 'surfaces' in data:
        surfaces = dict(tooth.surfaces or {})
        surfaces.update(data['surfaces'])
        tooth.surfaces = surfaces
    if 'notes' in data:
        tooth.notes = data['notes']
    tooth.save()
    return tooth


def _surface_status(surfaces, key):
    value = (surfaces or {}).get(key)
    return value.get('status') if isinstance(value, dict) else value


def compare_versions(first_id, second_id):
    v1 = get_odontogram(first_id)
    v2 = get_odontogram(second_id)
    if v1.patient_id != v2.patient_id:
        raise BadRequest('Odontograms must belong to the same patient')

    teeth2 = {t.tooth_number: t for t in v2.teeth.all()}
    changes = []
    modified = set()
    status_changes = surface_changes = 0

    for tooth1 in v1.teeth.all():
        tooth2 = teeth2.get(tooth1.tooth_number)
        if tooth2 is None:
            continue
        number = tooth1.tooth_number

        if tooth1.status != tooth2.status:
            changes.append({'tooth_number': number, 'field': 'status',
                            'old_value': tooth1.status, 'new_value': tooth2.status})
            modified.add(number)
            status_changes += 1

        for key in SURFACES:
            old = _surface_status(tooth1.surfaces, key)
            new = _surface_status(tooth2.surfaces, key)
            if old != new:
                changes.append({'tooth_number': number, 'field': f'surface.{key}',
                                'old_value': old, 'new_value': new})
                modified.add(number)
                surface_changes += 1

        if (tooth1.notes or None) != (tooth2.notes or None):
            changes.append({'tooth_number': number, 'field': 'notes',
                            'old_value': tooth1.notes, 'new_value': tooth2.notes})
            modified.add(number)

    return v1, v2, {
        'changes': changes,
        'summary': {
            'total_changes': len(changes),
            'teeth_modified': len(modified),
            'status_changes': status_changes,
            'surface_changes': surface_changes,
        },
    }


def statistics(odontogram_id):
    odontogram = get_odontogram(odontogram_id)
    stats = {'total': 0, 'healthy': 0, 'caries': 0, 'filled': 0, 'missing': 0, 'other': 0}
    for tooth in odontogram.teeth.all():
        stats['total'] += 1
        stats[tooth.status if tooth.status in COUNTED_STATUSES else 'other'] += 1
    return stats
