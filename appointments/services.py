"""
Appointment scheduling: availability checks, slot generation, recurrence
expansion and the booking / status workflow.
"""
import calendar
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import Count
from django.utils import timezone

from doctors import services as doctor_services
from patients import services as patient_services
from utils.exceptions import BadRequest, Conflict, NotFound, UnprocessableEntity
from .models import Appointment, RecurringAppointment
from .timeutils import add_minutes, intervals_overlap, js_weekday, minutes_to_time, time_to_minutes

logger = logging.getLogger(__name__)
business_logger = logging.getLogger('business')

ALLOWED_TRANSITIONS = {
    Appointment.STATUS_SCHEDULED: {Appointment.STATUS_CONFIRMED, Appointment.STATUS_CANCELLED,
                                   Appointment.STATUS_NO_SHOW},
    Appointment.STATUS_CONFIRMED: {Appointment.STATUS_IN_PROGRESS, Appointment.STATUS_CANCELLED,
                                   Appointment.STATUS_NO_SHOW},
    Appointment.STATUS_IN_PROGRESS: {Appointment.STATUS_COMPLETED, Appointment.STATUS_CANCELLED,
                                     Appointment.STATUS_NO_SHOW},
}


@dataclass
class AvailabilityResult:
    available: bool
    reason: str = None
    conflicts: list = field(default_factory=list)

    def to_dict(self):
        data = {'available': self.available}
        if self.reason:
            data['reason'] = self.reason
        if self.conflicts:
            data['conflicts'] = self.conflicts
        return data


def live_appointments(doctor_id, day):
    """Appointments that still hold their slot"""
    return (Appointment.objects
            .filter(doctor_id=doctor_id, date=day)
            .exclude(status__in=Appointment.INACTIVE_STATUSES)
            .select_related('patient')
            .order_by('start_time'))


def find_conflicts(doctor_id, day, start_time, end_time, exclude_appointment_id=None):
    qs = live_appointments(doctor_id, day)
    if exclude_appointment_id is not None:
        qs = qs.exclude(pk=exclude_appointment_id)
    return [a for a in qs if intervals_overlap(start_time, end_time, a.start_time, a.end_time)]


def validate_availability(doctor_id, day, start_time, duration, exclude_appointment_id=None):
    """
    Decide whether the doctor can take [start_time, start_time + duration) on day.

    Checks run in order and stop at the first failure: working day, working
    hours, break window, blocked times, then existing live appointments.
    """
    schedule = doctor_services.get_schedule_for_day(doctor_id, js_weekday(day))
    if schedule is None:
        return AvailabilityResult(False, 'Doctor does not work on this day')

    start = time_to_minutes(start_time)
    end = start + duration
    if start < time_to_minutes(schedule.start_time) or end > time_to_minutes(schedule.end_time):
        return AvailabilityResult(False, f'Doctor works from {schedule.start_time} to {schedule.end_time}')

    end_time = minutes_to_time(end)

    if schedule.has_break and intervals_overlap(start_time, end_time, schedule.break_start, schedule.break_end):
        return AvailabilityResult(False, f'Break time from {schedule.break_start} to {schedule.break_end}')

    for blocked in doctor_services.get_blocked_times(doctor_id, day):
        if intervals_overlap(start_time, end_time, blocked.start_time, blocked.end_time):
            return AvailabilityResult(False, f'Time blocked: {blocked.reason}')

    conflicts = find_conflicts(doctor_id, day, start_time, end_time, exclude_appointment_id)
    if conflicts:
        return AvailabilityResult(
            False,
            'Time slot conflicts with existing appointments',
            [{
                'id': a.pk,
                'start_time': a.start_time,
                'end_time': a.end_time,
                'patient': a.patient.full_name,
            } for a in conflicts],
        )
    return AvailabilityResult(True)


def get_available_slots(doctor_id, day, slot_duration=None):
    """
    Walk the working day in slot_duration steps and classify every slot.

    Slots never run past the end of the working day, so a day yields
    floor((end - start) / slot_duration) entries. Returns [] on days off.
    """
    slot_duration = slot_duration or settings.CLINIC['DEFAULT_SLOT_MINUTES']
    schedule = doctor_services.get_schedule_for_day(doctor_id, js_weekday(day))
    if schedule is None:
        return []

    blocked_times = list(doctor_services.get_blocked_times(doctor_id, day))
    appointments = list(live_appointments(doctor_id, day))

    slots = []
    minutes = time_to_minutes(schedule.start_time)
    day_end = time_to_minutes(schedule.end_time)
    while minutes + slot_duration <= day_end:
        start_time = minutes_to_time(minutes)
        end_time = minutes_to_time(minutes + slot_duration)
        slot = {'start_time': start_time, 'end_time': end_time, 'available': False}

        if schedule.has_break and intervals_overlap(start_time, end_time, schedule.break_start, schedule.break_end):
            slot['status'] = 'break'
        elif any(intervals_overlap(start_time, end_time, b.start_time, b.end_time) for b in blocked_times):
            slot['status'] = 'blocked'
        else:
            booked = next((a for a in appointments
                           if intervals_overlap(start_time, end_time, a.start_time, a.end_time)), None)
            if booked is not None:
                slot['status'] = 'booked'
                slot['appointment_id'] = booked.pk
            else:
                slot['status'] = 'available'
                slot['available'] = True

        slots.append(slot)
        minutes += slot_duration
    return slots


def _months_between(start, current):
    return (current.year - start.year) * 12 + current.month - start.month


def generate_recurring_dates(frequency, start_date, end_date=None, occurrences=None,
                             days_of_week=None, interval=1):
    """
    Expand a recurrence rule into concrete dates, walking day by day.

    Stops at the occurrence cap (52 by default), the inclusive end date or
    the one-year horizon, whichever comes first.
    """
    max_occurrences = occurrences or settings.CLINIC['MAX_RECURRING_OCCURRENCES']
    horizon = start_date + timedelta(days=settings.CLINIC['RECURRENCE_HORIZON_DAYS'])
    interval = interval or 1
    days_of_week = set(days_of_week or [])

    dates = []
    current = start_date
    while len(dates) < max_occurrences and current <= horizon:
        if end_date and current > end_date:
            break

        offset = (current - start_date).days
        week = offset // 7
        if frequency == RecurringAppointment.FREQUENCY_DAILY:
            include = offset % interval == 0
        elif frequency == RecurringAppointment.FREQUENCY_WEEKLY:
            include = js_weekday(current) in days_of_week and week % interval == 0
        elif frequency == RecurringAppointment.FREQUENCY_BIWEEKLY:
            include = js_weekday(current) in days_of_week and week % 2 == 0
        elif frequency == RecurringAppointment.FREQUENCY_MONTHLY:
            include = current.day == start_date.day and _months_between(start_date, current) % interval == 0
        else:
            raise BadRequest(f'Unknown recurrence frequency: {frequency}')

        if include:
            dates.append(current)
        current += timedelta(days=1)
    return dates


def get_appointment(appointment_id):
    appointment = (Appointment.objects
                   .select_related('patient', 'doctor')
                   .filter(pk=appointment_id)
                   .first())
    if appointment is None:
        raise NotFound('Appointment not found')
    return appointment


def _lock_doctor(doctor_id):
    """Serialise bookings for one doctor by locking their user row"""
    return get_user_model().objects.select_for_update().get(pk=doctor_id)


def _check_not_past(day, start_time):
    today = timezone.localdate()
    if day < today:
        raise UnprocessableEntity('Appointment date cannot be in the past')
    if day == today and time_to_minutes(start_time) < _now_minutes():
        raise UnprocessableEntity('Appointment time has already passed')


def _now_minutes():
    now = timezone.localtime()
    return now.hour * 60 + now.minute


def _ensure_available(doctor_id, day, start_time, duration, exclude_appointment_id=None):
    result = validate_availability(doctor_id, day, start_time, duration, exclude_appointment_id)
    if not result.available:
        raise Conflict(result.reason or 'The selected time slot is not available', errors=result.to_dict())


def create_appointment(data, created_by=None):
    """Book a single appointment after the availability check passes"""
    patient = patient_services.validate_for_appointment(data['patient_id'])
    doctor = doctor_services.get_doctor(data['doctor_id'])
    _check_not_past(data['date'], data['start_time'])

    duration = data['duration']
    try:
        with transaction.atomic():
            _lock_doctor(doctor.pk)
            _ensure_available(doctor.pk, data['date'], data['start_time'], duration)
            appointment = Appointment.objects.create(
                patient=patient,
                doctor=doctor,
                date=data['date'],
                start_time=data['start_time'],
                end_time=add_minutes(data['start_time'], duration),
                duration=duration,
                type=data.get('type', 'consultation'),
                reason=data['reason'],
                notes=data.get('notes'),
                color=data.get('color'),
                created_by=created_by,
            )
    except IntegrityError:
        raise Conflict('Time slot conflicts with existing appointments')

    business_logger.info('appointment_created', extra={
        'appointment_id': appointment.pk,
        'patient_id': patient.pk,
        'doctor_id': doctor.pk,
        'date': str(appointment.date),
        'start_time': appointment.start_time,
    })
    return appointment


def update_appointment(appointment_id, data):
    """Edit or reschedule; the slot is re-checked whenever it moves"""
    appointment = get_appointment(appointment_id)
    if appointment.is_terminal:
        raise BadRequest(f'Cannot modify a {appointment.status} appointment')

    doctor_id = data.get('doctor_id', appointment.doctor_id)
    day = data.get('date', appointment.date)
    start_time = data.get('start_time', appointment.start_time)
    duration = data.get('duration', appointment.duration)
    moved = (doctor_id != appointment.doctor_id or day != appointment.date
             or start_time != appointment.start_time or duration != appointment.duration)

    if 'doctor_id' in data:
        appointment.doctor = doctor_services.get_doctor(doctor_id)

    try:
        with transaction.atomic():
            if moved:
                _check_not_past(day, start_time)
                _lock_doctor(doctor_id)
                _ensure_available(doctor_id, day, start_time, duration, exclude_appointment_id=appointment.pk)
                appointment.date = day
                appointment.start_time = start_time
                appointment.duration = duration
                appointment.end_time = add_minutes(start_time, duration)
            for name in ('type', 'reason', 'notes', 'color'):
                if name in data:
                    setattr(appointment, name, data[name])
            appointment.save()
    except IntegrityError:
        raise Conflict('Time slot conflicts with existing appointments')

    business_logger.info('appointment_updated', extra={
        'appointment_id': appointment.pk,
        'rescheduled': moved,
    })
    return appointment


def update_status(appointment_id, new_status, notes=None):
    appointment = get_appointment(appointment_id)
    old_status = appointment.status
    if new_status not in ALLOWED_TRANSITIONS.get(old_status, set()):
        raise BadRequest(f'Cannot change status from {old_status} to {new_status}')

    appointment.status = new_status
    if notes:
        appointment.notes = f'{appointment.notes}\n{notes}' if appointment.notes else notes
    appointment.save(update_fields=['status', 'notes', 'updated_at'])

    business_logger.info('appointment_status_updated', extra={
        'appointment_id': appointment.pk,
        'old_status': old_status,
        'new_status': new_status,
    })
    return appointment


def cancel_appointment(appointment_id, reason):
    appointment = get_appointment(appointment_id)
    if appointment.status == Appointment.STATUS_CANCELLED:
        raise BadRequest('Appointment is already cancelled')
    if appointment.status == Appointment.STATUS_COMPLETED:
        raise BadRequest('Cannot cancel a completed appointment')
    if appointment.status == Appointment.STATUS_NO_SHOW:
        raise BadRequest('Cannot cancel an appointment marked as no-show')

    note = f'Cancellation reason: {reason}'
    appointment.status = Appointment.STATUS_CANCELLED
    appointment.notes = f'{appointment.notes}\n{note}' if appointment.notes else note
    appointment.save(update_fields=['status', 'notes', 'updated_at'])

    business_logger.info('appointment_cancelled', extra={
        'appointment_id': appointment.pk,
        'reason': reason,
    })
    return appointment


def create_recurring_appointment(data, created_by=None):
    """
    Expand the pattern and book every date, or nothing at all.

    Any unavailable date rejects the whole batch with the list of failing
    dates; the pattern row is only written once every date has passed.
    """
    patient = patient_services.validate_for_appointment(data['patient_id'])
    doctor = doctor_services.get_doctor(data['doctor_id'])
    if data['start_date'] < timezone.localdate():
        raise UnprocessableEntity('Start date cannot be in the past')

    dates = generate_recurring_dates(
        frequency=data['frequency'],
        start_date=data['start_date'],
        end_date=data.get('end_date'),
        occurrences=data.get('occurrences'),
        days_of_week=data.get('days_of_week'),
        interval=data.get('interval', 1),
    )
    if not dates:
        raise BadRequest('No valid dates generated for the recurring pattern')

    start_time = data['start_time']
    duration = data['duration']

    try:
        with transaction.atomic():
            _lock_doctor(doctor.pk)
            failures = []
            for day in dates:
                result = validate_availability(doctor.pk, day, start_time, duration)
                if not result.available:
                    failures.append({'date': day.isoformat(), 'reason': result.reason})
            if failures:
                raise Conflict(
                    'Some dates are not available: {}. Please adjust the pattern or exclude these dates.'.format(
                        ', '.join(f['date'] for f in failures)),
                    errors={'unavailable_dates': failures},
                )
            end_time = add_minutes(start_time, duration)

            pattern = RecurringAppointment.objects.create(
                patient=patient,
                doctor=doctor,
                start_time=start_time,
                duration=duration,
                type=data.get('type', 'consultation'),
                reason=data['reason'],
                frequency=data['frequency'],
                interval=data.get('interval', 1),
                days_of_week=sorted(data.get('days_of_week') or []),
                start_date=data['start_date'],
                end_date=data.get('end_date'),
                occurrences=data.get('occurrences'),
            )
            Appointment.objects.bulk_create([
                Appointment(
                    patient=patient,
                    doctor=doctor,
                    date=day,
                    start_time=start_time,
                    end_time=end_time,
                    duration=duration,
                    type=pattern.type,
                    reason=pattern.reason,
                    notes=data.get('notes'),
                    recurring_appointment=pattern,
                    created_by=created_by,
                )
                for day in dates
            ])
    except IntegrityError:
        raise Conflict('Time slot conflicts with existing appointments')

    business_logger.info('recurring_appointments_created', extra={
        'recurring_appointment_id': pattern.pk,
        'appointments_created': len(dates),
        'patient_id': patient.pk,
        'doctor_id': doctor.pk,
    })
    return pattern


def filter_appointments(params):
    qs = Appointment.objects.select_related('patient', 'doctor')
    for param, lookup in (('doctor_id', 'doctor_id'), ('patient_id', 'patient_id'),
                          ('status', 'status'), ('type', 'type'), ('date', 'date')):
        value = params.get(param)
        if value:
            qs = qs.filter(**{lookup: value})
    start = params.get('start_date')
    end = params.get('end_date')
    if start:
        qs = qs.filter(date__gte=start)
    if end:
        qs = qs.filter(date__lte=end)
    ordering = params.get('ordering')
    if ordering and ordering.lstrip('-') in ('date', 'start_time', 'created_at', 'status'):
        qs = qs.order_by(ordering, 'start_time')
    return qs


def calendar_view(start, end, doctor_id=None):
    """Appointments in [start, end] grouped by ISO date"""
    if start > end:
        raise BadRequest('start_date must be on or before end_date')
    qs = Appointment.objects.select_related('patient', 'doctor').filter(date__range=(start, end))
    if doctor_id:
        qs = qs.filter(doctor_id=doctor_id)
    return qs.order_by('date', 'start_time')


def todays_appointments(doctor_id=None):
    qs = Appointment.objects.select_related('patient', 'doctor').filter(date=timezone.localdate())
    if doctor_id:
        qs = qs.filter(doctor_id=doctor_id)
    return qs.order_by('start_time')


def upcoming_appointments(days=7, doctor_id=None):
    today = timezone.localdate()
    qs = (Appointment.objects.select_related('patient', 'doctor')
          .filter(date__range=(today, today + timedelta(days=days)),
                  status__in=[Appointment.STATUS_SCHEDULED, Appointment.STATUS_CONFIRMED]))
    if doctor_id:
        qs = qs.filter(doctor_id=doctor_id)
    return qs.order_by('date', 'start_time')


def appointment_stats(start=None, end=None, doctor_id=None):
    today = timezone.localdate()
    start = start or today.replace(day=1)
    end = end or today.replace(day=calendar.monthrange(today.year, today.month)[1])
    if start > end:
        raise BadRequest('start_date must be on or before end_date')
    qs = Appointment.objects.filter(date__range=(start, end))
    if doctor_id:
        qs = qs.filter(doctor_id=doctor_id)

    by_status = {key: 0 for key, _ in Appointment.STATUS_CHOICES}
    for row in qs.values('status').annotate(total=Count('id')).order_by():
        by_status[row['status']] = row['total']
    by_type = {row['type']: row['total'] for row in qs.values('type').annotate(total=Count('id')).order_by()}
    total = sum(by_status.values())
    closed = by_status[Appointment.STATUS_COMPLETED] + by_status[Appointment.STATUS_NO_SHOW]
    return {
        'start_date': start,
        'end_date': end,
        'total': total,
        'by_status': by_status,
        'by_type': by_type,
        'completion_rate': round(by_status[Appointment.STATUS_COMPLETED] * 100 / total, 2) if total else 0,
        'no_show_rate': round(by_status[Appointment.STATUS_NO_SHOW] * 100 / closed, 2) if closed else 0,
    }


def coerce_date(value, name='date'):
    """Parse a YYYY-MM-DD query value"""
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise BadRequest(f'{name} must be a date in YYYY-MM-DD format')
