"""
Appointment views
"""
from collections import OrderedDict

from rest_framework import viewsets
from rest_framework.decorators import action

from utils.exceptions import BadRequest
from utils.response import success_response, paginated_response
from . import services
from .models import Appointment
from .serializers import (
    AppointmentCreateSerializer,
    AppointmentSerializer,
    AppointmentStatusSerializer,
    AppointmentUpdateSerializer,
    AvailableSlotsSerializer,
    CancelAppointmentSerializer,
    CheckAvailabilitySerializer,
    RecurringAppointmentCreateSerializer,
    RecurringAppointmentSerializer,
)


class AppointmentViewSet(viewsets.ModelViewSet):
    """Appointment booking and lifecycle (all staff roles)"""
    queryset = Appointment.objects.select_related('patient', 'doctor')
    serializer_class = AppointmentSerializer

    def get_object(self):
        return services.get_appointment(self.kwargs['pk'])

    def list(self, request, *args, **kwargs):
        queryset = services.filter_appointments(request.query_params)
        return paginated_response(queryset, AppointmentSerializer, request)

    def retrieve(self, request, *args, **kwargs):
        return success_response(AppointmentSerializer(self.get_object()).data)

    def create(self, request, *args, **kwargs):
        serializer = AppointmentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        appointment = services.create_appointment(serializer.validated_data, created_by=request.user)
        return success_response(AppointmentSerializer(appointment).data, 'Appointment created', 201)

    def update(self, request, *args, **kwargs):
        serializer = AppointmentUpdateSerializer(data=request.data, partial=kwargs.pop('partial', False))
        serializer.is_valid(raise_exception=True)
        appointment = services.update_appointment(kwargs['pk'], serializer.validated_data)
        return success_response(AppointmentSerializer(appointment).data, 'Appointment updated')

    def destroy(self, request, *args, **kwargs):
        """Appointments are never removed, DELETE cancels"""
        reason = request.data.get('reason') if hasattr(request.data, 'get') else None
        appointment = services.cancel_appointment(kwargs['pk'], reason or 'Cancelled by staff')
        return success_response(AppointmentSerializer(appointment).data, 'Appointment cancelled')

    @action(detail=True, methods=['patch'], url_path='status')
    def change_status(self, request, pk=None):
        serializer = AppointmentStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        appointment = services.update_status(pk, serializer.validated_data['status'],
                                             serializer.validated_data.get('notes'))
        return success_response(AppointmentSerializer(appointment).data, 'Status updated')

    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        serializer = CancelAppointmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        appointment = services.cancel_appointment(pk, serializer.validated_data['reason'])
        return success_response(AppointmentSerializer(appointment).data, 'Appointment cancelled')

    @action(detail=False, methods=['post'], url_path='check-availability')
    def check_availability(self, request):
        serializer = CheckAvailabilitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        result = services.validate_availability(
            data['doctor_id'], data['date'], data['start_time'], data['duration'],
            exclude_appointment_id=data.get('exclude_appointment_id'),
        )
        return success_response(result.to_dict())

    @action(detail=False, methods=['get'], url_path='available-slots')
    def available_slots(self, request):
        serializer = AvailableSlotsSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        slots = services.get_available_slots(data['doctor_id'], data['date'], data['duration'])
        return success_response({
            'date': data['date'],
            'doctor_id': data['doctor_id'],
            'slot_duration': data['duration'],
            'slots': slots,
        })

    @action(detail=False, methods=['post'])
    def recurring(self, request):
        """All-or-nothing booking of a recurring pattern"""
        serializer = RecurringAppointmentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        pattern = services.create_recurring_appointment(serializer.validated_data, created_by=request.user)
        return success_response(RecurringAppointmentSerializer(pattern).data, 'Recurring appointments created', 201)

    @action(detail=False, methods=['get'])
    def calendar(self, request):
        params = request.query_params
        if not params.get('start_date') or not params.get('end_date'):
            raise BadRequest('start_date and end_date are required')
        start = services.coerce_date(params['start_date'], 'start_date')
        end = services.coerce_date(params['end_date'], 'end_date')
        grouped = OrderedDict()
        for appointment in services.calendar_view(start, end, params.get('doctor_id')):
            grouped.setdefault(appointment.date.isoformat(), []).append(AppointmentSerializer(appointment).data)
        return success_response(grouped)

    @action(detail=False, methods=['get'])
    def today(self, request):
        appointments = services.todays_appointments(request.query_params.get('doctor_id'))
        return success_response(AppointmentSerializer(appointments, many=True).data)

    @action(detail=False, methods=['get'])
    def upcoming(self, request):
        try:
            days = int(request.query_params.get('days', 7))
        except (TypeError, ValueError):
            raise BadRequest('days must be an integer')
        if days < 1 or days > 90:
            raise BadRequest('days must be between 1 and 90')
        appointments = services.upcoming_appointments(days, request.query_params.get('doctor_id'))
        return success_response(AppointmentSerializer(appointments, many=True).data)

    @action(detail=False, methods=['get'])
    def stats(self, request):
        params = request.query_params
        start = services.coerce_date(params['start_date'], 'start_date') if params.get('start_date') else None
        end = services.coerce_date(params['end_date'], 'end_date') if params.get('end_date') else None
        return success_response(services.appointment_stats(start, end, params.get('doctor_id')))
