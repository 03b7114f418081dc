"""
Accounting serializers
"""
from decimal import Decimal

from rest_framework import serializers

from .models import PAYMENT_METHOD_CHOICES, Expense, Installment, PatientPayment, PaymentPlan, Transaction

MIN_AMOUNT = Decimal('0.01')


class TransactionSerializer(serializers.ModelSerializer):
    patient_id = serializers.IntegerField(required=False, allow_null=True)
    appointment_id = serializers.IntegerField(read_only=True)
    patient_name = serializers.CharField(source='patient.full_name', read_only=True, default=None)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=MIN_AMOUNT)
    date = serializers.DateField(required=False)

    class Meta:
        model = Transaction
        fields = ['id', 'date', 'type', 'amount', 'description', 'category', 'payment_method', 'patient_id',
                  'patient_name', 'appointment_id', 'invoice_number', 'created_at']
        read_only_fields = ['id', 'created_at']


class PatientPaymentSerializer(serializers.ModelSerializer):
    patient_id = serializers.IntegerField()
    treatment_id = serializers.IntegerField(required=False, allow_null=True)
    appointment_id = serializers.IntegerField(required=False, allow_null=True)
    installment_id = serializers.IntegerField(read_only=True)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=MIN_AMOUNT)
    date = serializers.DateField(required=False)
    concept = serializers.CharField(min_length=3, max_length=255)

    class Meta:
        model = PatientPayment
        fields = ['id', 'patient_id', 'treatment_id', 'appointment_id', 'installment_id', 'amount',
                  'payment_method', 'date', 'concept', 'notes', 'receipt_number', 'created_at']
        read_only_fields = ['id', 'created_at']


class InstallmentSerializer(serializers.ModelSerializer):
    payment_plan_id = serializers.IntegerField(read_only=True)
    patient_id = serializers.IntegerField(source='payment_plan.patient_id', read_only=True)

    class Meta:
        model = Installment
        fields = ['id', 'payment_plan_id', 'patient_id', 'number', 'amount', 'due_date', 'paid_date', 'status']
        read_only_fields = fields


class PaymentPlanSerializer(serializers.ModelSerializer):
    patient_id = serializers.IntegerField(read_only=True)
    treatment_id = serializers.IntegerField(read_only=True)
    installments = InstallmentSerializer(many=True, read_only=True)

    class Meta:
        model = PaymentPlan
        fields = ['id', 'patient_id', 'treatment_id', 'total_amount', 'total_installments', 'installment_amount',
                  'paid_amount', 'balance', 'frequency', 'start_date', 'status', 'notes', 'installments',
                  'created_at', 'updated_at']
        read_only_fields = fields


class PaymentPlanCreateSerializer(serializers.Serializer):
    patient_id = serializers.IntegerField()
    treatment_id = serializers.IntegerField()
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_installments = serializers.IntegerField()
    frequency = serializers.ChoiceField(choices=PaymentPlan.FREQUENCY_CHOICES)
    start_date = serializers.DateField()
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True, allow_null=True)


class PaymentPlanUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=PaymentPlan.STATUS_CHOICES, required=False)
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True, allow_null=True)


class RecordPaymentSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    payment_method = serializers.ChoiceField(choices=PAYMENT_METHOD_CHOICES)
    date = serializers.DateField(required=False)
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True, allow_null=True)
    receipt_number = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)


class ExpenseSerializer(serializers.ModelSerializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=MIN_AMOUNT)
    description = serializers.CharField(min_length=3, max_length=500)
    date = serializers.DateField(required=False)

    class Meta:
        model = Expense
        fields = ['id', 'date', 'category', 'description', 'amount', 'supplier', 'invoice_number',
                  'payment_method', 'recurring', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']


class MonthQuerySerializer(serializers.Serializer):
    month = serializers.IntegerField()
    year = serializers.IntegerField()


class DateRangeQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()
