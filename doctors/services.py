"""
Doctor schedule management
"""
import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Q

from utils.exceptions import Forbidden, NotFound
from .models import WorkSchedule, BlockedTime

logger = logging.getLogger(__name__)


def get_doctor(doctor_id):
    """Staff user with the doctor role, else 404"""
    doctor = get_user_model().objects.filter(pk=doctor_id, role='doctor').first()
    if doctor is None:
        raise NotFound('Doctor not found')
    return doctor


def list_doctors(search=None):
    qs = get_user_model().objects.doctors()
    if search:
        qs = qs.filter(Q(first_name__icontains=search) | Q(last_name__icontains=search)
                       | Q(specialty__icontains=search))
    return qs


def get_schedule_for_day(doctor_id, day_of_week):
    return WorkSchedule.objects.filter(doctor_id=doctor_id, day_of_week=day_of_week, is_active=True).first()


def get_blocked_times(doctor_id, day):
    return BlockedTime.objects.filter(doctor_id=doctor_id, date=day).order_by('start_time')


def replace_weekly_schedule(doctor_id, schedules, acting_user):
    """Replace mode: days missing from the payload stop being working days"""
    doctor = get_doctor(doctor_id)
    if acting_user.role != 'admin' and acting_user.pk != doctor.pk:
        raise Forbidden('Only an administrator or the doctor can change this schedule')

    with transaction.atomic():
        WorkSchedule.objects.filter(doctor=doctor).delete()
        rows = [WorkSchedule(doctor=doctor, **item) for item in schedules]
        WorkSchedule.objects.bulk_create(rows)

    logger.info('Doctor %s weekly schedule replaced (%d days) by %s', doctor.pk, len(rows), acting_user.pk)
    return WorkSchedule.objects.filter(doctor=doctor)


def filter_blocked_times(params):
    qs = BlockedTime.objects.select_related('doctor')
    doctor_id = params.get('doctor_id')
    start = params.get('start_date')
    end = params.get('end_date')
    if doctor_id:
        qs = qs.filter(doctor_id=doctor_id)
    if start:
        qs = qs.filter(date__gte=start)
    if end:
        qs = qs.filter(date__lte=end)
    return qs


def create_blocked_time(data, acting_user):
    doctor = data['doctor']
    if acting_user.role == 'doctor' and acting_user.pk != doctor.pk:
        raise Forbidden('Doctors can only block their own time')
    block = BlockedTime.objects.create(created_by=acting_user, **data)
    logger.info('Blocked time %s created for doctor %s on %s', block.pk, doctor.pk, block.date)
    return block


def delete_blocked_time(block_id, acting_user):
    block = BlockedTime.objects.filter(pk=block_id).first()
    if block is None:
        raise NotFound('Blocked time not found')
    if acting_user.role == 'doctor' and acting_user.pk != block.doctor_id:
        raise Forbidden('Doctors can only remove their own blocked time')
    block.delete()
