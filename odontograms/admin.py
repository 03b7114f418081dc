from django.contrib import admin
from .models import Odontogram, Tooth


class ToothInline(admin.TabularInline):
    model = Tooth
    extra = 0


@admin.register(Odontogram)
class OdontogramAdmin(admin.ModelAdmin):
    list_display = ['id', 'patient', 'version', 'type', 'date', 'is_current']
    list_filter = ['type', 'is_current']
    search_fields = ['patient__first_name', 'patient__last_name', 'patient__identification']
    inlines = [ToothInline]
