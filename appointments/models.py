from django.conf import settings
from django.db import models
from django.db.models import Q

from patients.models import Patient


class RecurringAppointment(models.Model):
    """Recurrence rule kept for reference once expanded into appointments"""
    FREQUENCY_DAILY = 'daily'
    FREQUENCY_WEEKLY = 'weekly'
    FREQUENCY_BIWEEKLY = 'biweekly'
    FREQUENCY_MONTHLY = 'monthly'
    FREQUENCY_CHOICES = [
        (FREQUENCY_DAILY, 'Daily'),
        (FREQUENCY_WEEKLY, 'Weekly'),
        (FREQUENCY_BIWEEKLY, 'Biweekly'),
        (FREQUENCY_MONTHLY, 'Monthly'),
    ]

    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='recurring_appointments')
    doctor = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE,
                               related_name='recurring_appointments')
    start_time = models.CharField('start time', max_length=5)
    duration = models.PositiveIntegerField('duration (minutes)')
    type = models.CharField('type', max_length=20)
    reason = models.CharField('reason', max_length=500)
    frequency = models.CharField('frequency', max_length=10, choices=FREQUENCY_CHOICES)
    interval = models.PositiveSmallIntegerField('interval', default=1)
    # 0=Sunday .. 6=Saturday
    days_of_week = models.JSONField('days of week', default=list, blank=True)
    start_date = models.DateField('start date')
    end_date = models.DateField('end date', blank=True, null=True)
    occurrences = models.PositiveSmallIntegerField('occurrences', blank=True, null=True)
    active = models.BooleanField('active', default=True)
    created_at = models.DateTimeField('created at', auto_now_add=True)
    updated_at = models.DateTimeField('updated at', auto_now=True)

    class Meta:
        db_table = 'recurring_appointment'
        verbose_name = 'recurring appointment'
        verbose_name_plural = 'recurring appointments'
        ordering = ['-created_at']

    def __str__(self):
        return f'{self.frequency} x{self.interval} from {self.start_date} ({self.patient_id})'


class Appointment(models.Model):
    """Booked appointment"""
    STATUS_SCHEDULED = 'scheduled'
    STATUS_CONFIRMED = 'confirmed'
    STATUS_IN_PROGRESS = 'in_progress'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_NO_SHOW = 'no_show'
    STATUS_CHOICES = [
        (STATUS_SCHEDULED, 'Scheduled'),
        (STATUS_CONFIRMED, 'Confirmed'),
        (STATUS_IN_PROGRESS, 'In progress'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_CANCELLED, 'Cancelled'),
        (STATUS_NO_SHOW, 'No show'),
    ]
    # statuses that free the slot again
    INACTIVE_STATUSES = (STATUS_CANCELLED, STATUS_NO_SHOW)
    TERMINAL_STATUSES = (STATUS_COMPLETED, STATUS_CANCELLED, STATUS_NO_SHOW)

    TYPE_CHOICES = [
        ('consultation', 'Consultation'),
        ('cleaning', 'Cleaning'),
        ('filling', 'Filling'),
        ('extraction', 'Extraction'),
        ('root_canal', 'Root canal'),
        ('orthodontics', 'Orthodontics'),
        ('emergency', 'Emergency'),
        ('follow_up', 'Follow-up'),
        ('other', 'Other'),
    ]

    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='appointments')
    doctor = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='appointments')
    date = models.DateField('date')
    start_time = models.CharField('start time', max_length=5, help_text='HH:MM')
    end_time = models.CharField('end time', max_length=5, help_text='HH:MM')
    duration = models.PositiveIntegerField('duration (minutes)')
    type = models.CharField('type', max_length=20, choices=TYPE_CHOICES, default='consultation')
    status = models.CharField('status', max_length=20, choices=STATUS_CHOICES, default=STATUS_SCHEDULED)
    reason = models.CharField('reason', max_length=500)
    notes = models.TextField('notes', blank=True, null=True)
    color = models.CharField('color', max_length=7, blank=True, null=True)
    reminder_sent = models.BooleanField('reminder sent', default=False)
    reminder_sent_at = models.DateTimeField('reminder sent at', blank=True, null=True)
    recurring_appointment = models.ForeignKey(RecurringAppointment, on_delete=models.SET_NULL, null=True,
                                              blank=True, related_name='appointments')
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                   related_name='created_appointments')
    created_at = models.DateTimeField('created at', auto_now_add=True)
    updated_at = models.DateTimeField('updated at', auto_now=True)

    class Meta:
        db_table = 'appointment'
        verbose_name = 'appointment'
        verbose_name_plural = 'appointments'
        ordering = ['date', 'start_time']
        indexes = [
            models.Index(fields=['doctor', 'date'], name='appointment_doctor_date_idx'),
            models.Index(fields=['patient', 'date'], name='appointment_patient_date_idx'),
        ]
        constraints = [
            # database-level guard against two live bookings starting together
            models.UniqueConstraint(
                fields=['doctor', 'date', 'start_time'],
                condition=~Q(status__in=['cancelled', 'no_show']),
                name='unique_live_doctor_slot',
            ),
        ]

    def __str__(self):
        return f'{self.date} {self.start_time}-{self.end_time} {self.patient_id} ({self.status})'

    @property
    def is_terminal(self):
        return self.status in self.TERMINAL_STATUSES
