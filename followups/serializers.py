"""
Follow-up and note serializers
"""
from django.utils import timezone
from rest_framework import serializers

from .models import FollowUp, Note


def validate_not_past(value):
    if value < timezone.localdate():
        raise serializers.ValidationError('Due date cannot be in the past')
    return value


class FollowUpSerializer(serializers.ModelSerializer):
    patient_id = serializers.IntegerField(source='patient.id', read_only=True)
    patient_name = serializers.CharField(source='patient.full_name', read_only=True)
    assigned_to_id = serializers.IntegerField(read_only=True)
    assigned_to_name = serializers.CharField(source='assigned_to.full_name', read_only=True, default=None)
    created_by_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = FollowUp
        fields = ['id', 'patient_id', 'patient_name', 'assigned_to_id', 'assigned_to_name', 'created_by_id',
                  'title', 'description', 'due_date', 'priority', 'status', 'completed_at',
                  'created_at', 'updated_at']
        read_only_fields = fields


class FollowUpCreateSerializer(serializers.Serializer):
    patient_id = serializers.IntegerField()
    assigned_to_id = serializers.IntegerField(required=False, allow_null=True)
    title = serializers.CharField(min_length=3, max_length=200)
    description = serializers.CharField(min_length=10, max_length=1000, required=False, allow_null=True)
    due_date = serializers.DateField(validators=[validate_not_past])
    priority = serializers.ChoiceField(choices=FollowUp.PRIORITY_CHOICES, default='medium')


class FollowUpUpdateSerializer(serializers.Serializer):
    assigned_to_id = serializers.IntegerField(required=False, allow_null=True)
    title = serializers.CharField(min_length=3, max_length=200, required=False)
    description = serializers.CharField(min_length=10, max_length=1000, required=False, allow_null=True)
    due_date = serializers.DateField(required=False, validators=[validate_not_past])
    priority = serializers.ChoiceField(choices=FollowUp.PRIORITY_CHOICES, required=False)
    status = serializers.ChoiceField(choices=FollowUp.STATUS_CHOICES, required=False)


class NoteSerializer(serializers.ModelSerializer):
    patient_id = serializers.IntegerField(read_only=True)
    author_id = serializers.IntegerField(read_only=True)
    author_name = serializers.CharField(source='author.full_name', read_only=True)
    title = serializers.CharField(min_length=3, max_length=200, required=False, allow_null=True)
    content = serializers.CharField(min_length=1, max_length=5000)

    class Meta:
        model = Note
        fields = ['id', 'patient_id', 'author_id', 'author_name', 'title', 'content', 'is_pinned',
                  'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']
