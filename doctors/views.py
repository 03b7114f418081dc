"""
Doctor directory, weekly schedule and blocked time views
"""
from django.contrib.auth import get_user_model
from rest_framework import mixins, viewsets
from rest_framework.decorators import action

from utils.response import success_response
from . import services
from .serializers import (
    BlockedTimeSerializer,
    DoctorDetailSerializer,
    DoctorSerializer,
    WeeklyScheduleSerializer,
    WorkScheduleSerializer,
)


class DoctorViewSet(viewsets.ReadOnlyModelViewSet):
    """Doctors are listed from staff accounts with the doctor role"""
    queryset = get_user_model().objects.filter(role='doctor')
    serializer_class = DoctorSerializer

    def list(self, request, *args, **kwargs):
        doctors = services.list_doctors(request.query_params.get('search'))
        return success_response(DoctorSerializer(doctors, many=True).data)

    def retrieve(self, request, *args, **kwargs):
        doctor = services.get_doctor(kwargs['pk'])
        return success_response(DoctorDetailSerializer(doctor).data)

    @action(detail=True, methods=['get', 'put'])
    def schedule(self, request, pk=None):
        """GET the weekly schedule, PUT replaces it"""
        if request.method == 'GET':
            doctor = services.get_doctor(pk)
            return success_response(WorkScheduleSerializer(doctor.work_schedules.all(), many=True).data)

        serializer = WeeklyScheduleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        schedules = services.replace_weekly_schedule(pk, serializer.validated_data['schedules'], request.user)
        return success_response(WorkScheduleSerializer(schedules, many=True).data, 'Schedule updated')


class BlockedTimeViewSet(mixins.ListModelMixin,
                         mixins.CreateModelMixin,
                         mixins.DestroyModelMixin,
                         viewsets.GenericViewSet):
    """Blocked time management"""
    serializer_class = BlockedTimeSerializer

    def get_queryset(self):
        return services.filter_blocked_times(self.request.query_params)

    def list(self, request, *args, **kwargs):
        return success_response(BlockedTimeSerializer(self.get_queryset(), many=True).data)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        block = services.create_blocked_time(serializer.validated_data, request.user)
        return success_response(BlockedTimeSerializer(block).data, 'Time blocked', 201)

    def destroy(self, request, *args, **kwargs):
        services.delete_blocked_time(kwargs['pk'], request.user)
        return success_response(message='Blocked time removed')
