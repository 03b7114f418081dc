from django.contrib import admin
from .models import Patient


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ['id', 'first_name', 'last_name', 'identification', 'phone', 'is_active', 'deleted_at']
    list_filter = ['gender', 'has_insurance', 'is_active']
    search_fields = ['first_name', 'last_name', 'identification', 'email']
    readonly_fields = ['created_at', 'updated_at']
