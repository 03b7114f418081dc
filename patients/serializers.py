"""
Patient serializers
"""
from datetime import date

from rest_framework import serializers

from .models import Patient
from .validators import NAME_RE, is_valid_cedula, is_valid_phone


class EmergencyContactSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=2, max_length=100)
    relationship = serializers.CharField(min_length=2, max_length=50)
    phone = serializers.CharField(max_length=20)

    def validate_phone(self, value):
        if not is_valid_phone(value):
            raise serializers.ValidationError('Invalid phone number. Format: 0987654321 or +593987654321')
        return value


class PatientSerializer(serializers.ModelSerializer):
    """Patient serializer"""
    full_name = serializers.CharField(read_only=True)
    age = serializers.IntegerField(read_only=True)
    emergency_contact = EmergencyContactSerializer(required=False, allow_null=True)

    class Meta:
        model = Patient
        exclude = ['deleted_at']
        read_only_fields = ['id', 'is_active', 'created_at', 'updated_at']
        # uniqueness is checked by the service layer so it can answer 409
        extra_kwargs = {'identification': {'validators': []}}

    def _validate_name(self, value, label):
        value = value.strip()
        if len(value) < 2 or len(value) > 50:
            raise serializers.ValidationError(f'{label} must be between 2 and 50 characters')
        if not NAME_RE.match(value):
            raise serializers.ValidationError(f'{label} must contain only letters')
        return value

    def validate_first_name(self, value):
        return self._validate_name(value, 'First name')

    def validate_last_name(self, value):
        return self._validate_name(value, 'Last name')

    def validate_phone(self, value):
        if not is_valid_phone(value):
            raise serializers.ValidationError('Invalid phone number. Format: 0987654321 or +593987654321')
        return value

    def validate_date_of_birth(self, value):
        today = date.today()
        age = today.year - value.year - ((today.month, today.day) < (value.month, value.day))
        if value > today or age < 1 or age > 150:
            raise serializers.ValidationError('Patient must be between 1 and 150 years old')
        return value

    def validate_email(self, value):
        return value.lower() if value else value

    def validate(self, attrs):
        identification = attrs.get('identification')
        id_type = attrs.get('identification_type') or getattr(self.instance, 'identification_type', 'cedula')
        if identification is not None and id_type == 'cedula' and not is_valid_cedula(identification):
            raise serializers.ValidationError({'identification': 'Invalid Ecuadorian ID number'})
        if self.instance is not None and 'identification' in attrs \
                and attrs['identification'] != self.instance.identification:
            raise serializers.ValidationError({'identification': 'Identification cannot be changed'})
        return attrs


class PatientListSerializer(serializers.ModelSerializer):
    """Compact patient row for list endpoints"""
    full_name = serializers.CharField(read_only=True)
    age = serializers.IntegerField(read_only=True)

    class Meta:
        model = Patient
        fields = ['id', 'first_name', 'last_name', 'full_name', 'identification', 'phone', 'email',
                  'gender', 'age', 'has_insurance', 'is_active', 'created_at']
