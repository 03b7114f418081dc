from django.contrib import admin
from .models import MedicalHistory, Cie10Code, Diagnosis, TreatmentCatalog, Treatment, TreatmentPlan


@admin.register(MedicalHistory)
class MedicalHistoryAdmin(admin.ModelAdmin):
    list_display = ['id', 'patient', 'smoking_habit', 'is_pregnant', 'updated_at']
    search_fields = ['patient__first_name', 'patient__last_name', 'patient__identification']


@admin.register(Cie10Code)
class Cie10CodeAdmin(admin.ModelAdmin):
    list_display = ['code', 'description', 'category']
    search_fields = ['code', 'description']


@admin.register(Diagnosis)
class DiagnosisAdmin(admin.ModelAdmin):
    list_display = ['id', 'patient', 'doctor', 'cie10', 'tooth_number', 'severity', 'date']
    list_filter = ['severity', 'date']


@admin.register(TreatmentCatalog)
class TreatmentCatalogAdmin(admin.ModelAdmin):
    list_display = ['code', 'name', 'category', 'default_price', 'duration_minutes', 'is_active']
    list_filter = ['category', 'is_active']
    search_fields = ['code', 'name']


@admin.register(Treatment)
class TreatmentAdmin(admin.ModelAdmin):
    list_display = ['id', 'patient', 'catalog', 'status', 'cost', 'paid', 'balance']
    list_filter = ['status']
    readonly_fields = ['balance', 'created_at', 'updated_at']


@admin.register(TreatmentPlan)
class TreatmentPlanAdmin(admin.ModelAdmin):
    list_display = ['id', 'patient', 'title', 'total_cost', 'status', 'approved_at']
    list_filter = ['status']
