from django.contrib import admin
from .models import Appointment, RecurringAppointment


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ['id', 'date', 'start_time', 'end_time', 'patient', 'doctor', 'type', 'status']
    list_filter = ['status', 'type', 'date']
    search_fields = ['patient__first_name', 'patient__last_name', 'patient__identification', 'reason']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(RecurringAppointment)
class RecurringAppointmentAdmin(admin.ModelAdmin):
    list_display = ['id', 'patient', 'doctor', 'frequency', 'interval', 'start_date', 'end_date', 'active']
    list_filter = ['frequency', 'active']
