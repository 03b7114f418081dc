"""
Ledger, patient payments, payment plans and clinic expenses
"""
from decimal import Decimal

from django.conf import settings
from django.db import models

from appointments.models import Appointment
from medical.models import Treatment
from patients.models import Patient
from utils.models import SoftDeleteModel

PAYMENT_METHOD_CHOICES = [
    ('cash', 'Cash'),
    ('card', 'Card'),
    ('transfer', 'Bank transfer'),
    ('check', 'Check'),
    ('other', 'Other'),
]


class Transaction(SoftDeleteModel):
    """One ledger line; every payment and expense writes one"""
    TYPE_INCOME = 'income'
    TYPE_EXPENSE = 'expense'
    TYPE_CHOICES = [
        (TYPE_INCOME, 'Income'),
        (TYPE_EXPENSE, 'Expense'),
    ]

    date = models.DateField('date')
    type = models.CharField('type', max_length=10, choices=TYPE_CHOICES)
    amount = models.DecimalField('amount', max_digits=12, decimal_places=2)
    description = models.CharField('description', max_length=500)
    category = models.CharField('category', max_length=100)
    payment_method = models.CharField('payment method', max_length=20, choices=PAYMENT_METHOD_CHOICES,
                                      blank=True, null=True)
    patient = models.ForeignKey(Patient, on_delete=models.SET_NULL, null=True, blank=True,
                                related_name='transactions')
    appointment = models.ForeignKey(Appointment, on_delete=models.SET_NULL, null=True, blank=True,
                                    related_name='transactions')
    invoice_number = models.CharField('invoice number', max_length=50, blank=True, null=True)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                   related_name='transactions')
    created_at = models.DateTimeField('created at', auto_now_add=True)
    updated_at = models.DateTimeField('updated at', auto_now=True)

    class Meta:
        db_table = 'transaction'
        verbose_name = 'transaction'
        verbose_name_plural = 'transactions'
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['type', 'date'], name='transaction_type_date_idx'),
        ]

    def __str__(self):
        return f'{self.type} {self.amount} ({self.date})'


class PaymentPlan(models.Model):
    FREQUENCY_WEEKLY = 'weekly'
    FREQUENCY_BIWEEKLY = 'biweekly'
    FREQUENCY_MONTHLY = 'monthly'
    FREQUENCY_CHOICES = [
        (FREQUENCY_WEEKLY, 'Weekly'),
        (FREQUENCY_BIWEEKLY, 'Biweekly'),
        (FREQUENCY_MONTHLY, 'Monthly'),
    ]
    INTERVAL_DAYS = {
        FREQUENCY_WEEKLY: 7,
        FREQUENCY_BIWEEKLY: 14,
        FREQUENCY_MONTHLY: 30,
    }

    STATUS_ACTIVE = 'active'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_DEFAULTED = 'defaulted'
    STATUS_CHOICES = [
        (STATUS_ACTIVE, 'Active'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_CANCELLED, 'Cancelled'),
        (STATUS_DEFAULTED, 'Defaulted'),
    ]

    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='payment_plans')
    treatment = models.ForeignKey(Treatment, on_delete=models.PROTECT, related_name='payment_plans')
    total_amount = models.DecimalField('total amount', max_digits=12, decimal_places=2)
    total_installments = models.PositiveSmallIntegerField('installments')
    installment_amount = models.DecimalField('installment amount', max_digits=12, decimal_places=2)
    paid_amount = models.DecimalField('paid', max_digits=12, decimal_places=2, default=Decimal('0.00'))
    balance = models.DecimalField('balance', max_digits=12, decimal_places=2)
    frequency = models.CharField('frequency', max_length=10, choices=FREQUENCY_CHOICES)
    start_date = models.DateField('first due date')
    status = models.CharField('status', max_length=20, choices=STATUS_CHOICES, default=STATUS_ACTIVE)
    notes = models.TextField('notes', blank=True, null=True)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                   related_name='payment_plans')
    created_at = models.DateTimeField('created at', auto_now_add=True)
    updated_at = models.DateTimeField('updated at', auto_now=True)

    class Meta:
        db_table = 'payment_plan'
        verbose_name = 'payment plan'
        verbose_name_plural = 'payment plans'
        ordering = ['-created_at']

    def __str__(self):
        return f'Plan {self.pk}: {self.total_amount} in {self.total_installments}'


class Installment(models.Model):
    STATUS_PENDING = 'pending'
    STATUS_PAID = 'paid'
    STATUS_OVERDUE = 'overdue'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_PAID, 'Paid'),
        (STATUS_OVERDUE, 'Overdue'),
        ('cancelled', 'Cancelled'),
    ]
    UNPAID_STATUSES = (STATUS_PENDING, STATUS_OVERDUE)

    payment_plan = models.ForeignKey(PaymentPlan, on_delete=models.CASCADE, related_name='installments')
    number = models.PositiveSmallIntegerField('number')
    amount = models.DecimalField('amount', max_digits=12, decimal_places=2)
    due_date = models.DateField('due date')
    paid_date = models.DateField('paid date', blank=True, null=True)
    status = models.CharField('status', max_length=10, choices=STATUS_CHOICES, default=STATUS_PENDING)

    class Meta:
        db_table = 'installment'
        verbose_name = 'installment'
        verbose_name_plural = 'installments'
        ordering = ['payment_plan', 'number']
        constraints = [
            models.UniqueConstraint(fields=['payment_plan', 'number'], name='unique_plan_installment_number'),
        ]

    def __str__(self):
        return f'#{self.number} {self.amount} due {self.due_date}'


class PatientPayment(models.Model):
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='payments')
    treatment = models.ForeignKey(Treatment, on_delete=models.SET_NULL, null=True, blank=True,
                                  related_name='payments')
    appointment = models.ForeignKey(Appointment, on_delete=models.SET_NULL, null=True, blank=True,
                                    related_name='payments')
    installment = models.ForeignKey(Installment, on_delete=models.SET_NULL, null=True, blank=True,
                                    related_name='payments')
    amount = models.DecimalField('amount', max_digits=12, decimal_places=2)
    payment_method = models.CharField('payment method', max_length=20, choices=PAYMENT_METHOD_CHOICES)
    date = models.DateField('date')
    concept = models.CharField('concept', max_length=255)
    notes = models.TextField('notes', blank=True, null=True)
    receipt_number = models.CharField('receipt number', max_length=50, blank=True, null=True)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                   related_name='patient_payments')
    created_at = models.DateTimeField('created at', auto_now_add=True)

    class Meta:
        db_table = 'patient_payment'
        verbose_name = 'patient payment'
        verbose_name_plural = 'patient payments'
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f'{self.amount} from {self.patient_id} ({self.date})'


class Expense(SoftDeleteModel):
    CATEGORY_CHOICES = [
        ('rent', 'Rent'),
        ('salaries', 'Salaries'),
        ('supplies', 'Supplies'),
        ('equipment', 'Equipment'),
        ('utilities', 'Utilities'),
        ('maintenance', 'Maintenance'),
        ('marketing', 'Marketing'),
        ('insurance', 'Insurance'),
        ('taxes', 'Taxes'),
        ('other', 'Other'),
    ]

    date = models.DateField('date')
    category = models.CharField('category', max_length=20, choices=CATEGORY_CHOICES)
    description = models.CharField('description', max_length=500)
    amount = models.DecimalField('amount', max_digits=12, decimal_places=2)
    supplier = models.CharField('supplier', max_length=200, blank=True, null=True)
    invoice_number = models.CharField('invoice number', max_length=50, blank=True, null=True)
    payment_method = models.CharField('payment method', max_length=20, choices=PAYMENT_METHOD_CHOICES)
    recurring = models.BooleanField('recurring', default=False)
    transaction = models.OneToOneField(Transaction, on_delete=models.SET_NULL, null=True, blank=True,
                                       related_name='expense')
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                   related_name='expenses')
    created_at = models.DateTimeField('created at', auto_now_add=True)
    updated_at = models.DateTimeField('updated at', auto_now=True)

    class Meta:
        db_table = 'expense'
        verbose_name = 'expense'
        verbose_name_plural = 'expenses'
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f'{self.category} {self.amount} ({self.date})'
