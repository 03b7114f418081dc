from django.conf import settings
from django.db import models


class WorkSchedule(models.Model):
    """Weekly working hours of a doctor, one row per weekday"""
    DAY_CHOICES = [
        (0, 'Sunday'),
        (1, 'Monday'),
        (2, 'Tuesday'),
        (3, 'Wednesday'),
        (4, 'Thursday'),
        (5, 'Friday'),
        (6, 'Saturday'),
    ]

    doctor = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='work_schedules')
    day_of_week = models.PositiveSmallIntegerField('day of week', choices=DAY_CHOICES)
    start_time = models.CharField('start time', max_length=5, help_text='HH:MM, e.g. 08:00')
    end_time = models.CharField('end time', max_length=5, help_text='HH:MM, e.g. 18:00')
    break_start = models.CharField('break start', max_length=5, blank=True, null=True)
    break_end = models.CharField('break end', max_length=5, blank=True, null=True)
    is_active = models.BooleanField('active', default=True)
    created_at = models.DateTimeField('created at', auto_now_add=True)
    updated_at = models.DateTimeField('updated at', auto_now=True)

    class Meta:
        db_table = 'work_schedule'
        verbose_name = 'work schedule'
        verbose_name_plural = 'work schedules'
        constraints = [
            models.UniqueConstraint(fields=['doctor', 'day_of_week'], name='unique_doctor_weekday_schedule'),
        ]
        ordering = ['doctor_id', 'day_of_week']

    def __str__(self):
        return f'{self.doctor_id} {self.get_day_of_week_display()} {self.start_time}-{self.end_time}'

    @property
    def has_break(self):
        return bool(self.break_start and self.break_end)


class BlockedTime(models.Model):
    """One-off unavailable interval (vacation, course, personal errand)"""
    doctor = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='blocked_times')
    date = models.DateField('date')
    start_time = models.CharField('start time', max_length=5)
    end_time = models.CharField('end time', max_length=5)
    reason = models.CharField('reason', max_length=200)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                   related_name='created_blocked_times')
    created_at = models.DateTimeField('created at', auto_now_add=True)

    class Meta:
        db_table = 'blocked_time'
        verbose_name = 'blocked time'
        verbose_name_plural = 'blocked times'
        ordering = ['date', 'start_time']
        indexes = [
            models.Index(fields=['doctor', 'date'], name='blocked_doctor_date_idx'),
        ]

    def __str__(self):
        return f'{self.doctor_id} {self.date} {self.start_time}-{self.end_time} ({self.reason})'
