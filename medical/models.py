"""
Clinical record models: history, CIE-10 diagnoses, treatments and plans
"""
from decimal import Decimal

from django.conf import settings
from django.db import models

from patients.models import Patient


class MedicalHistory(models.Model):
    """Anamnesis, one per patient"""
    SMOKING_CHOICES = [
        ('never', 'Never'),
        ('former', 'Former smoker'),
        ('occasional', 'Occasional'),
        ('daily', 'Daily'),
    ]
    ALCOHOL_CHOICES = [
        ('never', 'Never'),
        ('occasional', 'Occasional'),
        ('frequent', 'Frequent'),
    ]

    patient = models.OneToOneField(Patient, on_delete=models.CASCADE, related_name='medical_history')
    allergies = models.JSONField('allergies', default=list, blank=True)
    chronic_diseases = models.JSONField('chronic diseases', default=list, blank=True)
    current_medications = models.JSONField('current medications', default=list, blank=True)
    previous_surgeries = models.JSONField('previous surgeries', default=list, blank=True)
    family_history = models.JSONField('family history', default=list, blank=True)
    last_dental_visit = models.DateField('last dental visit', blank=True, null=True)
    brushing_frequency = models.PositiveSmallIntegerField('brushes per day', blank=True, null=True)
    uses_floss = models.BooleanField('uses floss', default=False)
    uses_mouthwash = models.BooleanField('uses mouthwash', default=False)
    smoking_habit = models.CharField('smoking', max_length=20, choices=SMOKING_CHOICES, blank=True, null=True)
    alcohol_consumption = models.CharField('alcohol', max_length=20, choices=ALCOHOL_CHOICES, blank=True, null=True)
    bruxism = models.BooleanField('bruxism', default=False)
    nail_biting = models.BooleanField('nail biting', default=False)
    is_pregnant = models.BooleanField('pregnant', default=False)
    gestation_weeks = models.PositiveSmallIntegerField('gestation weeks', blank=True, null=True)
    notes = models.TextField('notes', blank=True, null=True)
    created_at = models.DateTimeField('created at', auto_now_add=True)
    updated_at = models.DateTimeField('updated at', auto_now=True)

    class Meta:
        db_table = 'medical_history'
        verbose_name = 'medical history'
        verbose_name_plural = 'medical histories'

    def __str__(self):
        return f'Medical history of {self.patient_id}'


class Cie10Code(models.Model):
    """CIE-10 (ICD-10) catalog entry, dental chapter K00-K14"""
    code = models.CharField('code', max_length=10, unique=True)
    description = models.CharField('description', max_length=255)
    category = models.CharField('category', max_length=100)

    class Meta:
        db_table = 'cie10_code'
        verbose_name = 'CIE-10 code'
        verbose_name_plural = 'CIE-10 codes'
        ordering = ['code']

    def __str__(self):
        return f'{self.code} {self.description}'


class Diagnosis(models.Model):
    SEVERITY_CHOICES = [
        ('mild', 'Mild'),
        ('moderate', 'Moderate'),
        ('severe', 'Severe'),
    ]

    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='diagnoses')
    doctor = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='diagnoses')
    cie10 = models.ForeignKey(Cie10Code, on_delete=models.PROTECT, related_name='diagnoses',
                              to_field='code', db_column='cie10_code')
    tooth_number = models.CharField('tooth number', max_length=10, blank=True, null=True)
    description = models.TextField('description', blank=True, null=True)
    severity = models.CharField('severity', max_length=10, choices=SEVERITY_CHOICES, blank=True, null=True)
    date = models.DateField('date')
    created_at = models.DateTimeField('created at', auto_now_add=True)
    updated_at = models.DateTimeField('updated at', auto_now=True)

    class Meta:
        db_table = 'diagnosis'
        verbose_name = 'diagnosis'
        verbose_name_plural = 'diagnoses'
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f'{self.cie10_id} ({self.patient_id})'


class TreatmentCatalog(models.Model):
    """Price list of procedures offered by the clinic"""
    code = models.CharField('code', max_length=20, unique=True)
    name = models.CharField('name', max_length=150)
    category = models.CharField('category', max_length=100)
    default_price = models.DecimalField('default price', max_digits=12, decimal_places=2)
    duration_minutes = models.PositiveIntegerField('duration (minutes)', default=30)
    is_active = models.BooleanField('active', default=True)

    class Meta:
        db_table = 'treatment_catalog'
        verbose_name = 'catalog treatment'
        verbose_name_plural = 'treatment catalog'
        ordering = ['category', 'name']

    def __str__(self):
        return f'{self.code} {self.name}'


class Treatment(models.Model):
    STATUS_PLANNED = 'planned'
    STATUS_IN_PROGRESS = 'in_progress'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_CHOICES = [
        (STATUS_PLANNED, 'Planned'),
        (STATUS_IN_PROGRESS, 'In progress'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]

    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='treatments')
    doctor = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='treatments')
    diagnosis = models.ForeignKey(Diagnosis, on_delete=models.SET_NULL, null=True, blank=True,
                                  related_name='treatments')
    catalog = models.ForeignKey(TreatmentCatalog, on_delete=models.PROTECT, related_name='treatments')
    tooth_number = models.CharField('tooth number', max_length=10, blank=True, null=True)
    description = models.TextField('description', blank=True, null=True)
    status = models.CharField('status', max_length=20, choices=STATUS_CHOICES, default=STATUS_PLANNED)
    cost = models.DecimalField('cost', max_digits=12, decimal_places=2)
    paid = models.DecimalField('paid', max_digits=12, decimal_places=2, default=Decimal('0.00'))
    balance = models.DecimalField('balance', max_digits=12, decimal_places=2, default=Decimal('0.00'))
    planned_date = models.DateField('planned date', blank=True, null=True)
    completed_date = models.DateField('completed date', blank=True, null=True)
    notes = models.TextField('notes', blank=True, null=True)
    created_at = models.DateTimeField('created at', auto_now_add=True)
    updated_at = models.DateTimeField('updated at', auto_now=True)

    class Meta:
        db_table = 'treatment'
        verbose_name = 'treatment'
        verbose_name_plural = 'treatments'
        ordering = ['-created_at']

    def __str__(self):
        return f'{self.catalog_id} {self.status} ({self.patient_id})'

    def save(self, *args, **kwargs):
        self.balance = self.cost - self.paid
        update_fields = kwargs.get('update_fields')
        if update_fields is not None and 'balance' not in update_fields:
            kwargs['update_fields'] = list(update_fields) + ['balance']
        super().save(*args, **kwargs)


class TreatmentPlan(models.Model):
    STATUS_CHOICES = [
        ('draft', 'Draft'),
        ('presented', 'Presented'),
        ('approved', 'Approved'),
        ('rejected', 'Rejected'),
        ('in_progress', 'In progress'),
        ('completed', 'Completed'),
    ]

    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='treatment_plans')
    doctor = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='treatment_plans')
    title = models.CharField('title', max_length=255)
    description = models.TextField('description', blank=True, null=True)
    total_cost = models.DecimalField('total cost', max_digits=12, decimal_places=2)
    status = models.CharField('status', max_length=20, choices=STATUS_CHOICES, default='draft')
    pdf_url = models.URLField('PDF', blank=True, null=True)
    approved_at = models.DateTimeField('approved at', blank=True, null=True)
    created_at = models.DateTimeField('created at', auto_now_add=True)
    updated_at = models.DateTimeField('updated at', auto_now=True)

    class Meta:
        db_table = 'treatment_plan'
        verbose_name = 'treatment plan'
        verbose_name_plural = 'treatment plans'
        ordering = ['-created_at']

    def __str__(self):
        return self.title
