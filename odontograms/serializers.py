from rest_framework import serializers

from .fdi import SURFACES
from .models import Odontogram, Tooth


class SurfaceSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Tooth.STATUS_CHOICES)
    notes = serializers.CharField(max_length=500, required=False, allow_blank=True)
    date = serializers.DateField(required=False)


class ToothInputSerializer(serializers.Serializer):
    tooth_number = serializers.IntegerField()
    status = serializers.ChoiceField(choices=Tooth.STATUS_CHOICES, default='healthy')
    surfaces = serializers.DictField(child=SurfaceSerializer(), required=False)
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True, allow_null=True)

    def validate_surfaces(self, value):
        invalid = [key for key in value if key not in SURFACES]
        if invalid:
            raise serializers.ValidationError(
                f"Invalid surface(s): {', '.join(invalid)}. Allowed: {', '.join(SURFACES)}"
            )
        # dates travel as ISO strings inside the JSON column
        return {key: {k: (v.isoformat() if k == 'date' else v) for k, v in surface.items()}
                for key, surface in value.items()}


class ToothUpdateSerializer(ToothInputSerializer):
    tooth_number = None
    status = serializers.ChoiceField(choices=Tooth.STATUS_CHOICES, required=False)


class OdontogramCreateSerializer(serializers.Serializer):
    patient_id = serializers.IntegerField()
    type = serializers.ChoiceField(choices=Odontogram.TYPE_CHOICES, default=Odontogram.TYPE_PERMANENT)
    date = serializers.DateField(required=False)
    general_notes = serializers.CharField(max_length=2000, required=False, allow_blank=True, allow_null=True)
    teeth = ToothInputSerializer(many=True, required=False)


class OdontogramUpdateSerializer(serializers.Serializer):
    general_notes = serializers.CharField(max_length=2000, required=False, allow_blank=True, allow_null=True)
    date = serializers.DateField(required=False)


class NewVersionSerializer(serializers.Serializer):
    previous_odontogram_id = serializers.IntegerField()
    general_notes = serializers.CharField(max_length=2000, required=False, allow_blank=True, allow_null=True)
    teeth = ToothInputSerializer(many=True, required=False)


class ToothSerializer(serializers.ModelSerializer):
    class Meta:
        model = Tooth
        fields = ['id', 'tooth_number', 'status', 'surfaces', 'notes']


class OdontogramSerializer(serializers.ModelSerializer):
    patient_id = serializers.IntegerField(read_only=True)
    doctor_id = serializers.IntegerField(read_only=True)
    teeth = ToothSerializer(many=True, read_only=True)

    class Meta:
        model = Odontogram
        fields = ['id', 'patient_id', 'doctor_id', 'version', 'type', 'date', 'general_notes', 'is_current',
                  'teeth', 'created_at', 'updated_at']


class OdontogramSummarySerializer(serializers.ModelSerializer):
    """History rows without the teeth"""
    patient_id = serializers.IntegerField(read_only=True)
    doctor_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Odontogram
        fields = ['id', 'patient_id', 'doctor_id', 'version', 'type', 'date', 'general_notes', 'is_current',
                  'created_at']
