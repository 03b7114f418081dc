from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import OdontogramViewSet

router = DefaultRouter()
router.register(r'', OdontogramViewSet, basename='odontogram')

urlpatterns = [
    path('', include(router.urls)),
    # POST /odontograms/ - first version for a patient
    # GET /odontograms/{id}/ - version with teeth
    # PUT|PATCH /odontograms/{id}/ - new version copying every tooth
    # PATCH /odontograms/{id}/teeth/{tooth_number}/ - single tooth
    # GET /odontograms/{id}/statistics/
    # GET /odontograms/patient/{patient_id}/current|history/
    # POST /odontograms/patient/{patient_id}/new-version/
    # GET /odontograms/compare/?version1=&version2=
]
