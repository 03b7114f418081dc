from django.urls import path
from .views import (
    Cie10CatalogView,
    CompleteHistoryView,
    DiagnosisByCie10View,
    DiagnosisDetailView,
    DiagnosisTreatmentsView,
    MedicalHistoryView,
    PatientDiagnosisView,
    PatientTreatmentPlanView,
    PatientTreatmentView,
    TreatmentCatalogView,
    TreatmentDetailView,
    TreatmentPlanDetailView,
)

urlpatterns = [
    path('patients/<int:patient_id>/history/', MedicalHistoryView.as_view(), name='medical_history'),
    path('patients/<int:patient_id>/diagnoses/', PatientDiagnosisView.as_view(), name='patient_diagnoses'),
    path('patients/<int:patient_id>/treatments/', PatientTreatmentView.as_view(), name='patient_treatments'),
    path('patients/<int:patient_id>/treatment-plans/', PatientTreatmentPlanView.as_view(),
         name='patient_treatment_plans'),
    path('patients/<int:patient_id>/complete/', CompleteHistoryView.as_view(), name='complete_history'),
    path('diagnoses/cie10/<str:code>/', DiagnosisByCie10View.as_view(), name='diagnoses_by_cie10'),
    path('diagnoses/<int:pk>/', DiagnosisDetailView.as_view(), name='diagnosis_detail'),
    path('diagnoses/<int:pk>/treatments/', DiagnosisTreatmentsView.as_view(), name='diagnosis_treatments'),
    path('treatments/<int:pk>/', TreatmentDetailView.as_view(), name='treatment_detail'),
    path('treatment-plans/<int:pk>/', TreatmentPlanDetailView.as_view(), name='treatment_plan_detail'),
    path('cie10/', Cie10CatalogView.as_view(), name='cie10_catalog'),
    path('treatment-catalog/', TreatmentCatalogView.as_view(), name='treatment_catalog'),
]
