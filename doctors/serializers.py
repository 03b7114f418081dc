"""
Doctor, work schedule and blocked time serializers
"""
from django.contrib.auth import get_user_model
from rest_framework import serializers

from appointments.timeutils import is_valid_time, time_to_minutes
from .models import WorkSchedule, BlockedTime

TIME_ERROR = 'Time must be in HH:MM format'


def validate_hhmm(value):
    if not is_valid_time(value):
        raise serializers.ValidationError(TIME_ERROR)
    return value


class WorkScheduleSerializer(serializers.ModelSerializer):
    day_name = serializers.CharField(source='get_day_of_week_display', read_only=True)
    start_time = serializers.CharField(validators=[validate_hhmm])
    end_time = serializers.CharField(validators=[validate_hhmm])
    break_start = serializers.CharField(validators=[validate_hhmm], required=False, allow_null=True)
    break_end = serializers.CharField(validators=[validate_hhmm], required=False, allow_null=True)

    class Meta:
        model = WorkSchedule
        fields = ['id', 'day_of_week', 'day_name', 'start_time', 'end_time', 'break_start', 'break_end', 'is_active']
        read_only_fields = ['id']

    def validate(self, attrs):
        start = time_to_minutes(attrs['start_time'])
        end = time_to_minutes(attrs['end_time'])
        if start >= end:
            raise serializers.ValidationError({'end_time': 'End time must be after start time'})

        break_start = attrs.get('break_start')
        break_end = attrs.get('break_end')
        if bool(break_start) != bool(break_end):
            raise serializers.ValidationError({'break_start': 'Break start and break end must be given together'})
        if break_start:
            bs, be = time_to_minutes(break_start), time_to_minutes(break_end)
            if bs >= be:
                raise serializers.ValidationError({'break_end': 'Break end must be after break start'})
            if bs < start or be > end:
                raise serializers.ValidationError({'break_start': 'Break must fall inside working hours'})
        return attrs


class WeeklyScheduleSerializer(serializers.Serializer):
    """PUT /doctors/{id}/schedule/ payload: the whole week at once"""
    schedules = WorkScheduleSerializer(many=True)

    def validate_schedules(self, value):
        days = [item['day_of_week'] for item in value]
        if len(days) != len(set(days)):
            raise serializers.ValidationError('Each day of week may appear only once')
        return value


class BlockedTimeSerializer(serializers.ModelSerializer):
    start_time = serializers.CharField(validators=[validate_hhmm])
    end_time = serializers.CharField(validators=[validate_hhmm])
    doctor = serializers.PrimaryKeyRelatedField(queryset=get_user_model().objects.filter(role='doctor'))
    reason = serializers.CharField(min_length=3, max_length=200)

    class Meta:
        model = BlockedTime
        fields = ['id', 'doctor', 'date', 'start_time', 'end_time', 'reason', 'created_by', 'created_at']
        read_only_fields = ['id', 'created_by', 'created_at']

    def validate(self, attrs):
        if time_to_minutes(attrs['start_time']) >= time_to_minutes(attrs['end_time']):
            raise serializers.ValidationError({'end_time': 'End time must be after start time'})
        return attrs


class DoctorSerializer(serializers.ModelSerializer):
    """Doctor summary (doctors are staff users with role=doctor)"""
    full_name = serializers.CharField(read_only=True)

    class Meta:
        model = get_user_model()
        fields = ['id', 'email', 'first_name', 'last_name', 'full_name', 'phone', 'specialty', 'is_active']


class DoctorDetailSerializer(DoctorSerializer):
    schedule = serializers.SerializerMethodField()
    upcoming_blocked_times = serializers.SerializerMethodField()

    class Meta(DoctorSerializer.Meta):
        fields = DoctorSerializer.Meta.fields + ['schedule', 'upcoming_blocked_times']

    def get_schedule(self, obj):
        return WorkScheduleSerializer(obj.work_schedules.filter(is_active=True), many=True).data

    def get_upcoming_blocked_times(self, obj):
        from django.utils import timezone

        blocks = obj.blocked_times.filter(date__gte=timezone.localdate())[:20]
        return BlockedTimeSerializer(blocks, many=True).data
