"""
Appointment URLs
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import AppointmentViewSet

router = DefaultRouter()
router.register(r'', AppointmentViewSet, basename='appointment')

urlpatterns = [
    path('', include(router.urls)),
    # GET /appointments/ - list (doctor_id, patient_id, status, type, date, start_date, end_date, ordering)
    # POST /appointments/ - book
    # GET|PUT|PATCH /appointments/{id}/ - detail / edit or reschedule
    # DELETE /appointments/{id}/ - cancel
    # PATCH /appointments/{id}/status/ - status transition
    # POST /appointments/{id}/cancel/ - cancel with reason
    # POST /appointments/check-availability/
    # GET /appointments/available-slots/?doctor_id=&date=&duration=
    # POST /appointments/recurring/
    # GET /appointments/calendar|today|upcoming|stats/
]
