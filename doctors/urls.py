"""
Doctor URLs
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import DoctorViewSet, BlockedTimeViewSet

router = DefaultRouter()
router.register(r'blocked-times', BlockedTimeViewSet, basename='blocked-time')
router.register(r'', DoctorViewSet, basename='doctor')

urlpatterns = [
    path('', include(router.urls)),
    # GET /doctors/ - doctor list
    # GET /doctors/{id}/ - detail with schedule and upcoming blocked times
    # GET|PUT /doctors/{id}/schedule/ - weekly schedule (PUT replaces)
    # GET|POST /doctors/blocked-times/ - blocked time list / create
    # DELETE /doctors/blocked-times/{id}/
]
