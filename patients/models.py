from datetime import date

from django.db import models

from utils.models import SoftDeleteModel


class Patient(SoftDeleteModel):
    """Clinic patient"""
    GENDER_CHOICES = [
        ('male', 'Male'),
        ('female', 'Female'),
        ('other', 'Other'),
    ]
    IDENTIFICATION_TYPE_CHOICES = [
        ('cedula', 'Cédula'),
        ('passport', 'Passport'),
        ('ruc', 'RUC'),
    ]
    MARITAL_STATUS_CHOICES = [
        ('single', 'Single'),
        ('married', 'Married'),
        ('divorced', 'Divorced'),
        ('widowed', 'Widowed'),
        ('common_law', 'Common law'),
    ]
    BLOOD_TYPE_CHOICES = [
        ('A+', 'A+'), ('A-', 'A-'),
        ('B+', 'B+'), ('B-', 'B-'),
        ('AB+', 'AB+'), ('AB-', 'AB-'),
        ('O+', 'O+'), ('O-', 'O-'),
    ]

    first_name = models.CharField('first name', max_length=50)
    last_name = models.CharField('last name', max_length=50)
    date_of_birth = models.DateField('date of birth')
    gender = models.CharField('gender', max_length=10, choices=GENDER_CHOICES)
    identification = models.CharField('identification', max_length=20, unique=True)
    identification_type = models.CharField('identification type', max_length=10,
                                           choices=IDENTIFICATION_TYPE_CHOICES, default='cedula')
    phone = models.CharField('phone', max_length=20)
    email = models.EmailField('email', blank=True, null=True)
    address = models.CharField('address', max_length=200, blank=True, null=True)
    city = models.CharField('city', max_length=100, blank=True, null=True)
    province = models.CharField('province', max_length=100, blank=True, null=True)
    has_insurance = models.BooleanField('has insurance', default=False)
    insurance_provider = models.CharField('insurance provider', max_length=100, blank=True, null=True)
    insurance_number = models.CharField('insurance number', max_length=50, blank=True, null=True)
    occupation = models.CharField('occupation', max_length=100, blank=True, null=True)
    marital_status = models.CharField('marital status', max_length=20, choices=MARITAL_STATUS_CHOICES,
                                      blank=True, null=True)
    blood_type = models.CharField('blood type', max_length=3, choices=BLOOD_TYPE_CHOICES, blank=True, null=True)
    # {"name": ..., "relationship": ..., "phone": ...}
    emergency_contact = models.JSONField('emergency contact', blank=True, null=True)
    is_active = models.BooleanField('active', default=True)
    created_at = models.DateTimeField('created at', auto_now_add=True)
    updated_at = models.DateTimeField('updated at', auto_now=True)

    class Meta:
        db_table = 'patient'
        verbose_name = 'patient'
        verbose_name_plural = 'patients'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['last_name', 'first_name'], name='patient_name_idx'),
        ]

    def __str__(self):
        return f'{self.full_name} ({self.identification})'

    @property
    def full_name(self):
        return f'{self.first_name} {self.last_name}'

    @property
    def age(self):
        today = date.today()
        born = self.date_of_birth
        return today.year - born.year - ((today.month, today.day) < (born.month, born.day))
