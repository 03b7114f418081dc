"""
Appointment serializers
"""
import re

from rest_framework import serializers

from .models import Appointment, RecurringAppointment
from .timeutils import is_valid_time

COLOR_RE = re.compile(r'^#[0-9A-Fa-f]{6}$')


def validate_hhmm(value):
    if not is_valid_time(value):
        raise serializers.ValidationError('Time must be in HH:MM format')
    return value


def validate_color(value):
    if value and not COLOR_RE.match(value):
        raise serializers.ValidationError('Color must be a hex value such as #1E88E5')
    return value


class AppointmentSerializer(serializers.ModelSerializer):
    """Read representation"""
    patient_id = serializers.IntegerField(source='patient.id', read_only=True)
    patient_name = serializers.CharField(source='patient.full_name', read_only=True)
    doctor_id = serializers.IntegerField(source='doctor.id', read_only=True)
    doctor_name = serializers.CharField(source='doctor.full_name', read_only=True)
    recurring_appointment_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Appointment
        fields = ['id', 'patient_id', 'patient_name', 'doctor_id', 'doctor_name', 'date', 'start_time',
                  'end_time', 'duration', 'type', 'status', 'reason', 'notes', 'color', 'reminder_sent',
                  'reminder_sent_at', 'recurring_appointment_id', 'created_at', 'updated_at']
        read_only_fields = fields


class AppointmentCreateSerializer(serializers.Serializer):
    patient_id = serializers.IntegerField()
    doctor_id = serializers.IntegerField()
    date = serializers.DateField()
    start_time = serializers.CharField(validators=[validate_hhmm])
    duration = serializers.IntegerField(min_value=5, max_value=480)
    type = serializers.ChoiceField(choices=Appointment.TYPE_CHOICES, default='consultation')
    reason = serializers.CharField(min_length=3, max_length=500)
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True, allow_null=True)
    color = serializers.CharField(required=False, allow_blank=True, allow_null=True, validators=[validate_color])


class AppointmentUpdateSerializer(serializers.Serializer):
    """Every field optional; moving the slot triggers a new availability check"""
    doctor_id = serializers.IntegerField(required=False)
    date = serializers.DateField(required=False)
    start_time = serializers.CharField(required=False, validators=[validate_hhmm])
    duration = serializers.IntegerField(required=False, min_value=5, max_value=480)
    type = serializers.ChoiceField(choices=Appointment.TYPE_CHOICES, required=False)
    reason = serializers.CharField(required=False, min_length=3, max_length=500)
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True, allow_null=True)
    color = serializers.CharField(required=False, allow_blank=True, allow_null=True, validators=[validate_color])


class AppointmentStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Appointment.STATUS_CHOICES)
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True)


class CancelAppointmentSerializer(serializers.Serializer):
    reason = serializers.CharField(min_length=3, max_length=500)


class CheckAvailabilitySerializer(serializers.Serializer):
    doctor_id = serializers.IntegerField()
    date = serializers.DateField()
    start_time = serializers.CharField(validators=[validate_hhmm])
    duration = serializers.IntegerField(min_value=5, max_value=480)
    exclude_appointment_id = serializers.IntegerField(required=False, allow_null=True)


class AvailableSlotsSerializer(serializers.Serializer):
    """Query string of GET /appointments/available-slots/"""
    doctor_id = serializers.IntegerField()
    date = serializers.DateField()
    duration = serializers.IntegerField(min_value=5, max_value=480, default=30)


class RecurringAppointmentCreateSerializer(serializers.Serializer):
    patient_id = serializers.IntegerField()
    doctor_id = serializers.IntegerField()
    start_time = serializers.CharField(validators=[validate_hhmm])
    duration = serializers.IntegerField(min_value=5, max_value=480)
    type = serializers.ChoiceField(choices=Appointment.TYPE_CHOICES, default='consultation')
    reason = serializers.CharField(min_length=3, max_length=500)
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True, allow_null=True)
    frequency = serializers.ChoiceField(choices=RecurringAppointment.FREQUENCY_CHOICES)
    interval = serializers.IntegerField(min_value=1, max_value=30, default=1)
    days_of_week = serializers.ListField(
        child=serializers.IntegerField(min_value=0, max_value=6), required=False, allow_empty=True
    )
    start_date = serializers.DateField()
    end_date = serializers.DateField(required=False, allow_null=True)
    occurrences = serializers.IntegerField(min_value=1, max_value=52, required=False, allow_null=True)

    def validate(self, attrs):
        if not attrs.get('end_date') and not attrs.get('occurrences'):
            raise serializers.ValidationError({'end_date': 'Either end_date or occurrences is required'})
        if attrs.get('end_date') and attrs['end_date'] <= attrs['start_date']:
            raise serializers.ValidationError({'end_date': 'End date must be after start date'})
        weekly = (RecurringAppointment.FREQUENCY_WEEKLY, RecurringAppointment.FREQUENCY_BIWEEKLY)
        if attrs['frequency'] in weekly and not attrs.get('days_of_week'):
            raise serializers.ValidationError(
                {'days_of_week': 'Days of week are required for weekly and biweekly patterns'}
            )
        return attrs


class RecurringAppointmentSerializer(serializers.ModelSerializer):
    patient_id = serializers.IntegerField(read_only=True)
    doctor_id = serializers.IntegerField(read_only=True)
    appointment_count = serializers.SerializerMethodField()
    appointments = serializers.SerializerMethodField()

    class Meta:
        model = RecurringAppointment
        fields = ['id', 'patient_id', 'doctor_id', 'start_time', 'duration', 'type', 'reason', 'frequency',
                  'interval', 'days_of_week', 'start_date', 'end_date', 'occurrences', 'active',
                  'appointment_count', 'appointments', 'created_at', 'updated_at']

    def get_appointment_count(self, obj):
        return obj.appointments.count()

    def get_appointments(self, obj):
        return AppointmentSerializer(obj.appointments.select_related('patient', 'doctor').order_by('date'),
                                     many=True).data
