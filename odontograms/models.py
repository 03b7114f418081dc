from django.conf import settings
from django.db import models

from patients.models import Patient


class Odontogram(models.Model):
    """One immutable version of a patient's dental chart"""
    TYPE_PERMANENT = 'permanent'
    TYPE_TEMPORARY = 'temporary'
    TYPE_MIXED = 'mixed'
    TYPE_CHOICES = [
        (TYPE_PERMANENT, 'Permanent'),
        (TYPE_TEMPORARY, 'Temporary'),
        (TYPE_MIXED, 'Mixed'),
    ]

    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='odontograms')
    doctor = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                               related_name='odontograms')
    version = models.PositiveIntegerField('version')
    type = models.CharField('dentition', max_length=10, choices=TYPE_CHOICES, default=TYPE_PERMANENT)
    date = models.DateField('date')
    general_notes = models.TextField('general notes', blank=True, null=True)
    is_current = models.BooleanField('current version', default=True)
    created_at = models.DateTimeField('created at', auto_now_add=True)
    updated_at = models.DateTimeField('updated at', auto_now=True)

    class Meta:
        db_table = 'odontogram'
        verbose_name = 'odontogram'
        verbose_name_plural = 'odontograms'
        ordering = ['patient_id', '-version']
        constraints = [
            models.UniqueConstraint(fields=['patient', 'version'], name='unique_patient_odontogram_version'),
        ]

    def __str__(self):
        return f'Odontogram v{self.version} ({self.patient_id})'


class Tooth(models.Model):
    """State of one tooth (FDI number) inside an odontogram version"""
    STATUS_CHOICES = [
        ('healthy', 'Healthy'),
        ('caries', 'Caries'),
        ('filled', 'Filled'),
        ('missing', 'Missing'),
        ('crown', 'Crown'),
        ('bridge', 'Bridge'),
        ('implant', 'Implant'),
        ('root_canal', 'Root canal'),
        ('extraction_needed', 'Extraction needed'),
        ('fractured', 'Fractured'),
        ('sealant', 'Sealant'),
        ('other', 'Other'),
    ]

    odontogram = models.ForeignKey(Odontogram, on_delete=models.CASCADE, related_name='teeth')
    tooth_number = models.PositiveSmallIntegerField('tooth number (FDI)')
    status = models.CharField('status', max_length=20, choices=STATUS_CHOICES, default='healthy')
    # {"O": {"status": "caries", "notes": "...", "date": "2024-01-01"}, ...}
    surfaces = models.JSONField('surfaces', default=dict, blank=True)
    notes = models.TextField('notes', blank=True, null=True)

    class Meta:
        db_table = 'tooth'
        verbose_name = 'tooth'
        verbose_name_plural = 'teeth'
        ordering = ['tooth_number']
        constraints = [
            models.UniqueConstraint(fields=['odontogram', 'tooth_number'], name='unique_tooth_per_odontogram'),
        ]

    def __str__(self):
        return f'{self.tooth_number} {self.status}'
