"""
Follow-up and note business rules
"""
import logging
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.db.models import Count, Q
from django.utils import timezone

from patients import services as patient_services
from utils.exceptions import BadRequest, NotFound
from .models import FollowUp, Note

logger = logging.getLogger(__name__)
business_logger = logging.getLogger('business')

ORDERING_FIELDS = {'due_date', 'created_at', 'priority', 'status'}


def get_follow_up(follow_up_id):
    follow_up = FollowUp.objects.select_related('patient', 'assigned_to').filter(pk=follow_up_id).first()
    if follow_up is None:
        raise NotFound('Follow-up not found')
    return follow_up


def _check_not_past(day):
    if day < timezone.localdate():
        raise BadRequest('Due date cannot be in the past')


def _resolve_assignee(user_id):
    if user_id is None:
        return None
    user = get_user_model().objects.filter(pk=user_id, is_active=True).first()
    if user is None:
        raise NotFound('Assigned user not found')
    return user


def filter_follow_ups(params):
    """List filters: patient_id, status, priority, search, due_date_from, due_date_to, ordering"""
    qs = FollowUp.objects.select_related('patient', 'assigned_to')
    if params.get('patient_id'):
        qs = qs.filter(patient_id=params['patient_id'])
    if params.get('status'):
        qs = qs.filter(status=params['status'])
    if params.get('priority'):
        qs = qs.filter(priority=params['priority'])
    search = params.get('search')
    if search:
        qs = qs.filter(Q(title__icontains=search) | Q(description__icontains=search))
    if params.get('due_date_from'):
        qs = qs.filter(due_date__gte=params['due_date_from'])
    if params.get('due_date_to'):
        qs = qs.filter(due_date__lte=params['due_date_to'])
    ordering = params.get('ordering')
    if ordering and ordering.lstrip('-') in ORDERING_FIELDS:
        qs = qs.order_by(ordering)
    return qs


def create_follow_up(data, created_by=None):
    patient = patient_services.get_patient(data['patient_id'])
    if not patient.is_active:
        raise BadRequest('Cannot create follow-up for inactive patient')
    _check_not_past(data['due_date'])

    follow_up = FollowUp.objects.create(
        patient=patient,
        assigned_to=_resolve_assignee(data.get('assigned_to_id')),
        created_by=created_by,
        title=data['title'],
        description=data.get('description'),
        due_date=data['due_date'],
        priority=data.get('priority', 'medium'),
    )
    business_logger.info('follow_up_created', extra={
        'follow_up_id': follow_up.pk,
        'patient_id': patient.pk,
        'due_date': follow_up.due_date.isoformat(),
    })
    return follow_up


def update_follow_up(follow_up_id, data):
    """Closed follow-ups are frozen; closing goes through the mark operations"""
    follow_up = get_follow_up(follow_up_id)
    status = data.pop('status', None)
    if follow_up.is_closed:
        raise BadRequest(f'Cannot update a {follow_up.status} follow-up. Create a new one instead.')
    if status == FollowUp.STATUS_COMPLETED:
        return mark_completed(follow_up_id)
    if status == FollowUp.STATUS_CANCELLED:
        return mark_cancelled(follow_up_id)

    if 'due_date' in data:
        _check_not_past(data['due_date'])
    if 'assigned_to_id' in data:
        follow_up.assigned_to = _resolve_assignee(data.pop('assigned_to_id'))
    if status:
        follow_up.status = status
    for name, value in data.items():
        setattr(follow_up, name, value)
    follow_up.save()
    logger.info('Follow-up %s updated', follow_up.pk)
    return follow_up


def delete_follow_up(follow_up_id):
    follow_up = get_follow_up(follow_up_id)
    follow_up.delete()
    logger.info('Follow-up %s deleted', follow_up_id)


def mark_completed(follow_up_id):
    follow_up = get_follow_up(follow_up_id)
    if follow_up.status == FollowUp.STATUS_COMPLETED:
        raise BadRequest('Follow-up is already completed')
    if follow_up.status == FollowUp.STATUS_CANCELLED:
        raise BadRequest('Cannot complete a cancelled follow-up')
    follow_up.status = FollowUp.STATUS_COMPLETED
    follow_up.completed_at = timezone.now()
    follow_up.save(update_fields=['status', 'completed_at', 'updated_at'])
    business_logger.info('follow_up_completed', extra={'follow_up_id': follow_up.pk})
    return follow_up


def mark_cancelled(follow_up_id):
    follow_up = get_follow_up(follow_up_id)
    if follow_up.status == FollowUp.STATUS_CANCELLED:
        raise BadRequest('Follow-up is already cancelled')
    if follow_up.status == FollowUp.STATUS_COMPLETED:
        raise BadRequest('Cannot cancel a completed follow-up')
    follow_up.status = FollowUp.STATUS_CANCELLED
    follow_up.save(update_fields=['status', 'updated_at'])
    business_logger.info('follow_up_cancelled', extra={'follow_up_id': follow_up.pk})
    return follow_up


def _open():
    return FollowUp.objects.select_related('patient', 'assigned_to').filter(status__in=FollowUp.OPEN_STATUSES)


def overdue_follow_ups():
    return _open().filter(due_date__lt=timezone.localdate()).order_by('due_date')


def upcoming_follow_ups(days=7):
    if days < 1 or days > 365:
        raise BadRequest('days must be between 1 and 365')
    today = timezone.localdate()
    return _open().filter(due_date__gte=today, due_date__lte=today + timedelta(days=days)).order_by('due_date')


def follow_ups_by_priority(priority):
    if priority not in dict(FollowUp.PRIORITY_CHOICES):
        raise BadRequest('Invalid priority value')
    return _open().filter(priority=priority).order_by('due_date')


def dashboard_stats():
    by_status = dict(FollowUp.objects.values_list('status').annotate(total=Count('id')).order_by())
    by_priority = dict(FollowUp.objects.values_list('priority').annotate(total=Count('id')).order_by())
    today = timezone.localdate()
    return {
        'total': sum(by_status.values()),
        'pending': by_status.get(FollowUp.STATUS_PENDING, 0),
        'in_progress': by_status.get(FollowUp.STATUS_IN_PROGRESS, 0),
        'completed': by_status.get(FollowUp.STATUS_COMPLETED, 0),
        'cancelled': by_status.get(FollowUp.STATUS_CANCELLED, 0),
        'overdue': overdue_follow_ups().count(),
        'by_priority': {key: by_priority.get(key, 0) for key, _ in FollowUp.PRIORITY_CHOICES},
        'upcoming_this_week': _open().filter(due_date__gte=today, due_date__lte=today + timedelta(days=7)).count(),
    }


# notes

def get_note(note_id):
    note = Note.objects.select_related('author').filter(pk=note_id).first()
    if note is None:
        raise NotFound('Note not found')
    return note


def list_notes(patient_id):
    """Pinned notes first, newest first within each group"""
    patient_services.get_patient(patient_id)
    return Note.objects.select_related('author').filter(patient_id=patient_id).order_by('-is_pinned', '-created_at')


def create_note(patient_id, data, author):
    patient = patient_services.get_patient(patient_id)
    note = Note.objects.create(patient=patient, author=author, **data)
    logger.info('Note %s created for patient %s', note.pk, patient.pk)
    return note


def update_note(note_id, data):
    note = get_note(note_id)
    for name, value in data.items():
        setattr(note, name, value)
    note.save()
    return note


def delete_note(note_id):
    note = get_note(note_id)
    note.delete()
    logger.info('Note %s deleted', note_id)


def toggle_pin(note_id):
    note = get_note(note_id)
    note.is_pinned = not note.is_pinned
    note.save(update_fields=['is_pinned', 'updated_at'])
    return note
