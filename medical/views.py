"""
Clinical record views: admins and doctors write, all staff read
"""
from django.db.models import Q
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from utils.permissions import IsClinicalStaffOrReadOnly
from utils.response import success_response
from . import services
from .models import Cie10Code, TreatmentCatalog
from .serializers import (
    Cie10CodeSerializer,
    DiagnosisSerializer,
    MedicalHistorySerializer,
    TreatmentCatalogSerializer,
    TreatmentPlanSerializer,
    TreatmentSerializer,
)


class ClinicalAPIView(APIView):
    permission_classes = [IsAuthenticated, IsClinicalStaffOrReadOnly]


class MedicalHistoryView(ClinicalAPIView):
    """GET / POST / PUT / PATCH /medical/patients/{patient_id}/history/"""

    def get(self, request, patient_id):
        return success_response(MedicalHistorySerializer(services.get_medical_history(patient_id)).data)

    def post(self, request, patient_id):
        serializer = MedicalHistorySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        history = services.create_medical_history(patient_id, serializer.validated_data)
        return success_response(MedicalHistorySerializer(history).data, 'Medical history created', 201)

    def put(self, request, patient_id, partial=False):
        history = services.get_medical_history(patient_id)
        serializer = MedicalHistorySerializer(history, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        history = services.update_medical_history(patient_id, serializer.validated_data)
        return success_response(MedicalHistorySerializer(history).data, 'Medical history updated')

    def patch(self, request, patient_id):
        return self.put(request, patient_id, partial=True)


class PatientDiagnosisView(ClinicalAPIView):
    """Diagnoses of one patient"""

    def get(self, request, patient_id):
        return success_response(DiagnosisSerializer(services.list_diagnoses(patient_id), many=True).data)

    def post(self, request, patient_id):
        serializer = DiagnosisSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        diagnosis = services.create_diagnosis(patient_id, serializer.validated_data, request.user)
        return success_response(DiagnosisSerializer(diagnosis).data, 'Diagnosis created', 201)


class DiagnosisDetailView(ClinicalAPIView):
    def get(self, request, pk):
        return success_response(DiagnosisSerializer(services.get_diagnosis(pk)).data)


class DiagnosisTreatmentsView(ClinicalAPIView):
    def get(self, request, pk):
        return success_response(TreatmentSerializer(services.treatments_by_diagnosis(pk), many=True).data)


class DiagnosisByCie10View(ClinicalAPIView):
    def get(self, request, code):
        return success_response(DiagnosisSerializer(services.diagnoses_by_cie10(code), many=True).data)


class PatientTreatmentView(ClinicalAPIView):
    """Treatments of one patient"""

    def get(self, request, patient_id):
        return success_response(TreatmentSerializer(services.list_treatments(patient_id), many=True).data)

    def post(self, request, patient_id):
        serializer = TreatmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        treatment = services.create_treatment(patient_id, serializer.validated_data, request.user)
        return success_response(TreatmentSerializer(treatment).data, 'Treatment created', 201)


class TreatmentDetailView(ClinicalAPIView):
    def get(self, request, pk):
        return success_response(TreatmentSerializer(services.get_treatment(pk)).data)

    def put(self, request, pk, partial=False):
        treatment = services.get_treatment(pk)
        serializer = TreatmentSerializer(treatment, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        treatment = services.update_treatment(pk, serializer.validated_data)
        return success_response(TreatmentSerializer(treatment).data, 'Treatment updated')

    def patch(self, request, pk):
        return self.put(request, pk, partial=True)


class PatientTreatmentPlanView(ClinicalAPIView):
    def get(self, request, patient_id):
        plans = services.list_treatment_plans(patient_id)
        return success_response(TreatmentPlanSerializer(plans, many=True).data)

    def post(self, request, patient_id):
        serializer = TreatmentPlanSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        plan = services.create_treatment_plan(patient_id, serializer.validated_data, request.user)
        return success_response(TreatmentPlanSerializer(plan).data, 'Treatment plan created', 201)


class TreatmentPlanDetailView(ClinicalAPIView):
    def get(self, request, pk):
        return success_response(TreatmentPlanSerializer(services.get_treatment_plan(pk)).data)

    def put(self, request, pk, partial=False):
        plan = services.get_treatment_plan(pk)
        serializer = TreatmentPlanSerializer(plan, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        plan = services.update_treatment_plan(pk, serializer.validated_data)
        return success_response(TreatmentPlanSerializer(plan).data, 'Treatment plan updated')

    def patch(self, request, pk):
        return self.put(request, pk, partial=True)


class CompleteHistoryView(ClinicalAPIView):
    def get(self, request, patient_id):
        return success_response(services.complete_history(patient_id))


class Cie10CatalogView(ClinicalAPIView):
    """CIE-10 lookup (?search=)"""

    def get(self, request):
        codes = Cie10Code.objects.all()
        search = request.query_params.get('search')
        if search:
            codes = codes.filter(Q(code__icontains=search) | Q(description__icontains=search))
        return success_response(Cie10CodeSerializer(codes, many=True).data)


class TreatmentCatalogView(ClinicalAPIView):
    def get(self, request):
        items = TreatmentCatalog.objects.filter(is_active=True)
        category = request.query_params.get('category')
        if category:
            items = items.filter(category=category)
        return success_response(TreatmentCatalogSerializer(items, many=True).data)
