"""
Clinical record serializers
"""
import re
from decimal import Decimal

from rest_framework import serializers

from .models import MedicalHistory, Cie10Code, Diagnosis, TreatmentCatalog, Treatment, TreatmentPlan

CIE10_RE = re.compile(r'^K[0-1][0-9](\.[0-9])?$')


def validate_cie10_format(value):
    """Dental chapter only: K00 to K14, optional one-digit subcategory"""
    value = value.upper()
    if not CIE10_RE.match(value) or int(value[1:3]) > 14:
        raise serializers.ValidationError('Invalid CIE-10 code. Dental codes range from K00 to K14 (e.g. K02.1)')
    return value


class MedicalHistorySerializer(serializers.ModelSerializer):
    patient_id = serializers.IntegerField(read_only=True)
    allergies = serializers.ListField(child=serializers.CharField(max_length=200), required=False)
    chronic_diseases = serializers.ListField(child=serializers.CharField(max_length=200), required=False)
    current_medications = serializers.ListField(child=serializers.CharField(max_length=200), required=False)
    previous_surgeries = serializers.ListField(child=serializers.CharField(max_length=200), required=False)
    family_history = serializers.ListField(child=serializers.CharField(max_length=200), required=False)
    brushing_frequency = serializers.IntegerField(min_value=0, max_value=10, required=False, allow_null=True)
    gestation_weeks = serializers.IntegerField(min_value=1, max_value=42, required=False, allow_null=True)

    class Meta:
        model = MedicalHistory
        exclude = ['patient']
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate(self, attrs):
        pregnant = attrs.get('is_pregnant', getattr(self.instance, 'is_pregnant', False))
        if attrs.get('gestation_weeks') and not pregnant:
            raise serializers.ValidationError({'gestation_weeks': 'Gestation weeks only apply to pregnant patients'})
        return attrs


class Cie10CodeSerializer(serializers.ModelSerializer):
    class Meta:
        model = Cie10Code
        fields = ['code', 'description', 'category']


class DiagnosisSerializer(serializers.ModelSerializer):
    patient_id = serializers.IntegerField(read_only=True)
    doctor_id = serializers.IntegerField(read_only=True)
    doctor_name = serializers.CharField(source='doctor.full_name', read_only=True)
    cie10_code = serializers.CharField(source='cie10_id')
    cie10_description = serializers.CharField(source='cie10.description', read_only=True)
    date = serializers.DateField(required=False)

    class Meta:
        model = Diagnosis
        fields = ['id', 'patient_id', 'doctor_id', 'doctor_name', 'cie10_code', 'cie10_description', 'tooth_number',
                  'description', 'severity', 'date', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_cie10_code(self, value):
        return validate_cie10_format(value)


class TreatmentCatalogSerializer(serializers.ModelSerializer):
    class Meta:
        model = TreatmentCatalog
        fields = '__all__'


class TreatmentSerializer(serializers.ModelSerializer):
    patient_id = serializers.IntegerField(read_only=True)
    doctor_id = serializers.IntegerField(read_only=True)
    doctor_name = serializers.CharField(source='doctor.full_name', read_only=True)
    diagnosis_id = serializers.IntegerField(required=False, allow_null=True)
    catalog_id = serializers.IntegerField()
    catalog_name = serializers.CharField(source='catalog.name', read_only=True)
    cost = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.01'))
    paid = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0'), required=False)

    class Meta:
        model = Treatment
        fields = ['id', 'patient_id', 'doctor_id', 'doctor_name', 'diagnosis_id', 'catalog_id', 'catalog_name',
                  'tooth_number', 'description', 'status', 'cost', 'paid', 'balance', 'planned_date',
                  'completed_date', 'notes', 'created_at', 'updated_at']
        read_only_fields = ['id', 'balance', 'created_at', 'updated_at']

    def validate(self, attrs):
        cost = attrs.get('cost', getattr(self.instance, 'cost', None))
        paid = attrs.get('paid', getattr(self.instance, 'paid', 0))
        if cost is not None and paid is not None and paid > cost:
            raise serializers.ValidationError({'paid': 'Paid amount cannot exceed total cost'})
        status = attrs.get('status', getattr(self.instance, 'status', None))
        if attrs.get('completed_date') and status != Treatment.STATUS_COMPLETED:
            raise serializers.ValidationError(
                {'completed_date': 'Completed date can only be set when status is completed'}
            )
        return attrs


class TreatmentPlanSerializer(serializers.ModelSerializer):
    patient_id = serializers.IntegerField(read_only=True)
    doctor_id = serializers.IntegerField(read_only=True)
    title = serializers.CharField(min_length=1, max_length=255)
    total_cost = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.01'))

    class Meta:
        model = TreatmentPlan
        fields = ['id', 'patient_id', 'doctor_id', 'title', 'description', 'total_cost', 'status', 'pdf_url',
                  'approved_at', 'created_at', 'updated_at']
        read_only_fields = ['id', 'approved_at', 'created_at', 'updated_at']
