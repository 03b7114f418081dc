from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import PatientViewSet

router = DefaultRouter()
router.register(r'', PatientViewSet, basename='patient')

urlpatterns = [
    path('', include(router.urls)),
    # GET /patients/ - list (search, gender, has_insurance, is_active, ordering)
    # POST /patients/ - create
    # GET|PUT|PATCH|DELETE /patients/{id}/
    # POST /patients/{id}/restore|activate|deactivate/
    # GET /patients/search/?q=
    # GET /patients/identification/{identification}/
    # GET /patients/{id}/appointments|treatments|medical-history|statistics/
]
