"""
Follow-up reminders and free-text patient notes
"""
from django.conf import settings
from django.db import models

from patients.models import Patient


class FollowUp(models.Model):
    PRIORITY_CHOICES = [
        ('low', 'Low'),
        ('medium', 'Medium'),
        ('high', 'High'),
        ('urgent', 'Urgent'),
    ]

    STATUS_PENDING = 'pending'
    STATUS_IN_PROGRESS = 'in_progress'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_IN_PROGRESS, 'In progress'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]
    OPEN_STATUSES = (STATUS_PENDING, STATUS_IN_PROGRESS)
    CLOSED_STATUSES = (STATUS_COMPLETED, STATUS_CANCELLED)

    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='follow_ups')
    assigned_to = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                    related_name='assigned_follow_ups')
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                   related_name='created_follow_ups')
    title = models.CharField('title', max_length=200)
    description = models.TextField('description', blank=True, null=True)
    due_date = models.DateField('due date')
    priority = models.CharField('priority', max_length=10, choices=PRIORITY_CHOICES, default='medium')
    status = models.CharField('status', max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    completed_at = models.DateTimeField('completed at', blank=True, null=True)
    created_at = models.DateTimeField('created at', auto_now_add=True)
    updated_at = models.DateTimeField('updated at', auto_now=True)

    class Meta:
        db_table = 'follow_up'
        verbose_name = 'follow-up'
        verbose_name_plural = 'follow-ups'
        ordering = ['due_date', '-created_at']
        indexes = [
            models.Index(fields=['status', 'due_date'], name='followup_status_due_idx'),
        ]

    def __str__(self):
        return f'{self.title} ({self.due_date})'

    @property
    def is_closed(self):
        return self.status in self.CLOSED_STATUSES


class Note(models.Model):
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='notes')
    author = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='patient_notes')
    title = models.CharField('title', max_length=200, blank=True, null=True)
    content = models.TextField('content')
    is_pinned = models.BooleanField('pinned', default=False)
    created_at = models.DateTimeField('created at', auto_now_add=True)
    updated_at = models.DateTimeField('updated at', auto_now=True)

    class Meta:
        db_table = 'patient_note'
        verbose_name = 'note'
        verbose_name_plural = 'notes'
        ordering = ['-is_pinned', '-created_at']

    def __str__(self):
        return self.title or f'Note {self.pk}'
