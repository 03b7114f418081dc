from django.contrib import admin
from .models import FollowUp, Note


@admin.register(FollowUp)
class FollowUpAdmin(admin.ModelAdmin):
    list_display = ['id', 'patient', 'title', 'due_date', 'priority', 'status', 'assigned_to']
    list_filter = ['status', 'priority']
    search_fields = ['title', 'description', 'patient__first_name', 'patient__last_name']
    date_hierarchy = 'due_date'


@admin.register(Note)
class NoteAdmin(admin.ModelAdmin):
    list_display = ['id', 'patient', 'title', 'author', 'is_pinned', 'created_at']
    list_filter = ['is_pinned']
    search_fields = ['title', 'content']
