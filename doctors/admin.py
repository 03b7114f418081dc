from django.contrib import admin
from .models import WorkSchedule, BlockedTime


@admin.register(WorkSchedule)
class WorkScheduleAdmin(admin.ModelAdmin):
    list_display = ['id', 'doctor', 'day_of_week', 'start_time', 'end_time', 'break_start', 'break_end', 'is_active']
    list_filter = ['day_of_week', 'is_active']
    search_fields = ['doctor__first_name', 'doctor__last_name', 'doctor__email']


@admin.register(BlockedTime)
class BlockedTimeAdmin(admin.ModelAdmin):
    list_display = ['id', 'doctor', 'date', 'start_time', 'end_time', 'reason']
    list_filter = ['date']
    search_fields = ['doctor__first_name', 'doctor__last_name', 'reason']
