"""
Patient views
"""
from rest_framework import viewsets
from rest_framework.decorators import action

from utils.response import success_response, paginated_response
from . import services
from .models import Patient
from .serializers import PatientSerializer, PatientListSerializer


class PatientViewSet(viewsets.ModelViewSet):
    """Patient records (all staff roles)"""
    queryset = Patient.objects.alive()
    serializer_class = PatientSerializer

    def get_object(self):
        return services.get_patient(self.kwargs['pk'])

    def list(self, request, *args, **kwargs):
        queryset = services.filter_patients(request.query_params)
        return paginated_response(queryset, PatientListSerializer, request)

    def retrieve(self, request, *args, **kwargs):
        return success_response(self.get_serializer(self.get_object()).data)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        patient = services.create_patient(serializer.validated_data)
        return success_response(PatientSerializer(patient).data, 'Patient created', 201)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = self.get_serializer(self.get_object(), data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        patient = services.update_patient(self.kwargs['pk'], serializer.validated_data)
        return success_response(PatientSerializer(patient).data, 'Patient updated')

    def destroy(self, request, *args, **kwargs):
        services.delete_patient(self.kwargs['pk'])
        return success_response(message='Patient deleted')

    @action(detail=True, methods=['post'])
    def restore(self, request, pk=None):
        patient = services.restore_patient(pk)
        return success_response(PatientSerializer(patient).data, 'Patient restored')

    @action(detail=True, methods=['post'])
    def activate(self, request, pk=None):
        patient = services.set_active(pk, True)
        return success_response(PatientSerializer(patient).data, 'Patient activated')

    @action(detail=True, methods=['post'])
    def deactivate(self, request, pk=None):
        patient = services.set_active(pk, False)
        return success_response(PatientSerializer(patient).data, 'Patient deactivated')

    @action(detail=False, methods=['get'])
    def search(self, request):
        """GET /patients/search/?q= (at least 2 characters)"""
        patients = services.search_patients(request.query_params.get('q'))
        return success_response(PatientListSerializer(patients, many=True).data)

    @action(detail=False, methods=['get'], url_path=r'identification/(?P<identification>[^/.]+)')
    def by_identification(self, request, identification=None):
        patient = services.get_by_identification(identification)
        return success_response(PatientSerializer(patient).data)

    @action(detail=True, methods=['get'])
    def appointments(self, request, pk=None):
        from appointments.serializers import AppointmentSerializer

        patient = self.get_object()
        queryset = patient.appointments.select_related('doctor').order_by('-date', '-start_time')
        return paginated_response(queryset, AppointmentSerializer, request)

    @action(detail=True, methods=['get'])
    def treatments(self, request, pk=None):
        from medical.serializers import TreatmentSerializer

        patient = self.get_object()
        queryset = patient.treatments.select_related('catalog', 'doctor').order_by('-created_at')
        return paginated_response(queryset, TreatmentSerializer, request)

    @action(detail=True, methods=['get'], url_path='medical-history')
    def medical_history(self, request, pk=None):
        from medical import services as medical_services

        return success_response(medical_services.complete_history(pk))

    @action(detail=True, methods=['get'])
    def statistics(self, request, pk=None):
        return success_response(services.patient_statistics(pk))
